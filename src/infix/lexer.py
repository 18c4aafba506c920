from functools import reduce
import operator

import regex

from .numeric import get_backend
from .tokens import End, LeftParen, Number, Operator, RightParen
from .util import ExpressionSyntaxError


class Lexer:
    '''
    Lexer for the infix arithmetic grammar.

    What a number looks like is up to the numeric backend, so a lexer is
    bound to one. Other than the compiled grammar, it holds no state: every
    step takes the position to read from and returns the position after
    what it read.
    '''
    SPACE = r'\s+'
    OPERATOR = r'[\-+*/\^]'
    # An operator with one of these as the first token, or after another
    # operator or an opening parenthesis, is the sign of the number after it.
    SIGNS = '+-'
    # All possible lexemes, but for space, which is skipped. {NUMBER} is the
    # backend's. Careful with the braces if you edit this.
    LEXEME = r'''
              (?<number>
                  {NUMBER}
              )|(?<left>
                  \(
              )|(?<right>
                  \)
              )|(?<operator>
                  {OPERATOR}
              )
              '''
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self, backend=None):
        self.backend = get_backend(backend)
        self.grammar = type(self).LEXEME.format(NUMBER=self.backend.NUMBER,
                                                OPERATOR=type(self).OPERATOR)
        self._lexeme = regex.compile(self.grammar, flags=type(self).FLAGS)
        self._number = regex.compile(self.backend.NUMBER,
                                     flags=type(self).FLAGS)
        self._space = regex.compile(type(self).SPACE, flags=type(self).FLAGS)

    def tokenize(self, text):
        '''
        Return the list of tokens of text, always terminated by End.
        '''
        return list(self.lex(text))

    def lex(self, text):
        '''
        Take an expression and yield all of its tokens, then End.

        Raises on the first bad lexeme, having yielded the ones before it.
        '''
        position = self._skip(text, 0)
        previous = None
        while position < len(text):
            token, position = self._read(text, position, previous)
            yield token
            previous = token
            position = self._skip(text, position)
        yield End(position)

    def _skip(self, text, position):
        '''
        Return the position after any whitespace at position.
        '''
        match = self._space.match(text, position)
        return position if match is None else match.end()

    def _read(self, text, position, previous):
        match = self._lexeme.match(text, position)
        if match is None:
            self._reject(text, position)
        group = self.matchedgroup(match)
        if group == 'number':
            return self._read_number(text, match, position)
        elif group == 'left':
            return LeftParen(position), match.end()
        elif group == 'right':
            return RightParen(position), match.end()
        symbol = match.group(0)
        if symbol in type(self).SIGNS and self.expects_operand(previous):
            return self._read_signed(text, position, symbol)
        return Operator(symbol, position), match.end()

    def _read_signed(self, text, position, sign):
        '''
        Read the number after a unary sign at position.

        The resulting token starts at the sign.
        '''
        start = self._skip(text, position + 1)
        match = self._number.match(text, start)
        if match is None:
            if self._is_fraction(text, start):
                self._reject(text, start)
            raise ExpressionSyntaxError(
                'Expected digit at position {}'.format(start), start)
        token, end = self._read_number(text, match, position)
        if sign == '-':
            token = Number(self.backend.negate(token.value), position)
        return token, end

    def _read_number(self, text, match, position):
        literal = match.group(0)
        if not any(c.isdigit() for c in literal):
            raise ExpressionSyntaxError(
                'Invalid number format at position {}: '
                'no digits found'.format(match.start()), match.start())
        if self._is_fraction(text, match.end()):
            self._reject(text, match.end())
        return Number(self.backend.parse(literal), position), match.end()

    def _is_fraction(self, text, position):
        '''
        Return True if a fraction starts at position and the backend has none.
        '''
        return (not self.backend.ALLOWS_FRACTIONS and
                text.startswith('.', position))

    def _reject(self, text, position):
        '''
        Raise for the character at position, which starts no lexeme.
        '''
        if self._is_fraction(text, position):
            raise ExpressionSyntaxError(
                'Invalid character at position {}: \'.\'. '
                'Decimal numbers are not supported'.format(position),
                position)
        raise ExpressionSyntaxError(
            'Invalid character {} at position {}'.format(repr(text[position]),
                                                         position),
            position)

    def expects_operand(self, previous):
        '''
        Return True if, after previous, a + or - is a sign, not an operator.
        '''
        return previous is None or isinstance(previous, (Operator, LeftParen))

    def matchedgroup(self, match):
        '''
        Return the name of the lexeme group that matched.
        '''
        return next(key
                    for key, value
                    in match.groupdict().items()
                    if value is not None)


def tokenize(text, backend=None):
    '''
    Tokenize text with a throwaway lexer, integer backend by default.
    '''
    return Lexer(backend).tokenize(text)
