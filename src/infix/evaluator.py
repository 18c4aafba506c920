from .numeric import get_backend
from .tokens import Number, Operator
from .util import ExpressionSyntaxError


class Evaluator:
    '''
    Postfix (RPN) evaluator: a value stack and the backend's arithmetic.
    '''

    # Operator symbol to backend method.
    OPERATIONS = {
        '+': 'add',
        '-': 'subtract',
        '*': 'multiply',
        '/': 'divide',
        '^': 'power',
    }

    def __init__(self, backend=None):
        self.backend = get_backend(backend)

    def evaluate(self, postfix):
        '''
        Evaluate tokens in postfix order and return the single result.
        '''
        stack = []
        for token in postfix:
            if isinstance(token, Number):
                stack.append(token.value)
            elif isinstance(token, Operator):
                if len(stack) < 2:
                    raise ExpressionSyntaxError(
                        'Invalid expression: not enough operands for '
                        'operator {} at position {}'.format(repr(token.symbol),
                                                            token.position),
                        token.position)
                # If you don't pop right first, 9 2 - is 2 - 9.
                right = stack.pop()
                left = stack.pop()
                stack.append(self.apply(token.symbol, left, right))
            else:
                raise ExpressionSyntaxError(
                    'Invalid expression: unexpected {} token at '
                    'position {}'.format(token.kind, token.position),
                    token.position)
        if not stack:
            raise ExpressionSyntaxError('Invalid expression: no operands')
        if len(stack) > 1:
            raise ExpressionSyntaxError(
                'Invalid expression: too many operands')
        return stack.pop()

    def apply(self, symbol, left, right):
        '''
        Apply binary operator symbol to left and right.
        '''
        try:
            operation = type(self).OPERATIONS[symbol]
        except KeyError:
            raise ExpressionSyntaxError(
                'Unknown operator: {}'.format(symbol)) from None
        return getattr(self.backend, operation)(left, right)
