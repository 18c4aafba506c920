'''
Infix to postfix (RPN) conversion, by shunting-yard.
'''

from .tokens import End, LeftParen, Number, Operator, RightParen
from .util import ExpressionSyntaxError


def _no_opening(token):
    return ExpressionSyntaxError(
        'Mismatched parentheses: no opening parenthesis for closing '
        'parenthesis at position {}'.format(token.position),
        token.position)


def _unclosed(token):
    return ExpressionSyntaxError(
        'Mismatched parentheses: unclosed opening parenthesis at '
        'position {}'.format(token.position),
        token.position)


def check_parentheses(tokens):
    '''
    Raise unless parentheses in tokens balance.

    Reports the first closing parenthesis without an opening one, or else the
    first opening parenthesis never closed.
    '''
    opened = []
    for token in tokens:
        if isinstance(token, LeftParen):
            opened.append(token)
        elif isinstance(token, RightParen):
            if not opened:
                raise _no_opening(token)
            opened.pop()
    if opened:
        raise _unclosed(opened[0])


class Converter:
    '''
    Reorder infix tokens into postfix order.

    Parentheses are dropped from the output, and so is End.
    '''

    PRECEDENCE = {
        '+': 1,
        '-': 1,
        '*': 2,
        '/': 2,
        '^': 3,
    }
    RIGHT_ASSOCIATIVE = {'^'}

    def should_pop(self, op, top):
        '''
        Return True if operator top, on the stack, goes out before op.
        '''
        precedence = type(self).PRECEDENCE
        if op.symbol in type(self).RIGHT_ASSOCIATIVE:
            return precedence[top.symbol] > precedence[op.symbol]
        return precedence[top.symbol] >= precedence[op.symbol]

    def convert(self, tokens):
        '''
        Return a new list of tokens, in postfix order.
        '''
        output = []
        stack = []
        for token in tokens:
            if isinstance(token, Number):
                output.append(token)
            elif isinstance(token, Operator):
                while (stack and isinstance(stack[-1], Operator) and
                       self.should_pop(token, stack[-1])):
                    output.append(stack.pop())
                stack.append(token)
            elif isinstance(token, LeftParen):
                stack.append(token)
            elif isinstance(token, RightParen):
                while stack and not isinstance(stack[-1], LeftParen):
                    output.append(stack.pop())
                if not stack:
                    raise _no_opening(token)
                stack.pop()
            elif isinstance(token, End):
                # Bottom of the stack is leftmost; report that one.
                for entry in stack:
                    if isinstance(entry, LeftParen):
                        raise _unclosed(entry)
                output.extend(reversed(stack))
                stack.clear()
        return output


def convert(tokens):
    return Converter().convert(tokens)
