'''
Numeric backends.

A backend is everything the pipeline needs to know about numbers: what a
literal looks like, how to turn one into a value, the five arithmetic
operations, and how to print a result. The lexer and evaluator are built
around one backend instance.
'''

from decimal import Decimal
import decimal
import math
import operator

from .util import (DivisionByZero, ExpressionArithmeticError,
                   ExpressionSyntaxError, wrap_user_errors)


class IntegerBackend:
    '''
    Arbitrary precision integers. Exact, except that division truncates
    toward zero.
    '''

    NAME = 'integer'
    # Digits only. A '.' is reported separately; see Lexer.
    NUMBER = r'[0-9]+'
    ALLOWS_FRACTIONS = False
    # Largest exponent accepted by power(), as a 32-bit signed int.
    MAX_EXPONENT = 2 ** 31 - 1

    @wrap_user_errors('Invalid number format: {1!r}')
    def parse(self, literal):
        '''
        Convert a literal matched by NUMBER to a value.
        '''
        # int(str) refuses more digits than sys.get_int_max_str_digits().
        return int(Decimal(literal))

    add = staticmethod(operator.__add__)
    subtract = staticmethod(operator.__sub__)
    multiply = staticmethod(operator.__mul__)

    def negate(self, value):
        return -value

    def divide(self, left, right):
        if right == 0:
            raise DivisionByZero('Division by zero')
        quotient = abs(left) // abs(right)
        return quotient if (left < 0) == (right < 0) else -quotient

    def power(self, base, exponent):
        if exponent < 0:
            raise ExpressionArithmeticError(
                'Negative exponents are not supported')
        if exponent > type(self).MAX_EXPONENT:
            raise ExpressionArithmeticError('Exponent is too large')
        return base ** exponent

    def format(self, value):
        '''
        Canonical base 10 rendering: no leading zeros, minus sign if needed.
        '''
        # Same digit limit as parse(); Decimal converts without it.
        return str(Decimal(value))


class DecimalBackend:
    '''
    Decimal numbers, up to a fixed number of significant digits.

    Literals, add, subtract and multiply are exact, and fail past that many
    digits. Divide rounds to it. Power goes through a float and is lossy.
    '''

    NAME = 'decimal'
    # 1, 1.5, 1. and .5; a lone '.' is matched here and rejected by the lexer.
    NUMBER = r'(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]*)'
    ALLOWS_FRACTIONS = True
    DEFAULT_PRECISION = 28
    TRAPS = [decimal.InvalidOperation,
             decimal.DivisionByZero,
             decimal.Overflow]

    def __init__(self, precision=None):
        if precision is None:
            precision = type(self).DEFAULT_PRECISION
        self.precision = precision
        # For divide and power.
        self.context = decimal.Context(prec=precision,
                                       traps=type(self).TRAPS)
        # For everything else.
        self.exact = decimal.Context(
            prec=precision, traps=type(self).TRAPS + [decimal.Inexact])

    @wrap_user_errors('Invalid number format: {1!r}')
    def parse(self, literal):
        try:
            return self.exact.create_decimal(literal)
        except decimal.Inexact:
            raise ExpressionSyntaxError(
                'Invalid number format: {} has more than {} significant '
                'digits'.format(repr(literal), self.precision)) from None

    def _apply(self, name, left, right, context=None):
        try:
            return getattr(context or self.exact, name)(left, right)
        # Overflow is also Inexact.
        except decimal.Overflow:
            raise ExpressionArithmeticError(
                'Arithmetic operation resulted in overflow') from None
        except decimal.Inexact:
            raise ExpressionArithmeticError(
                'Result has more than {} significant digits'.format(
                    self.precision)) from None

    def add(self, left, right):
        return self._apply('add', left, right)

    def subtract(self, left, right):
        return self._apply('subtract', left, right)

    def multiply(self, left, right):
        return self._apply('multiply', left, right)

    def negate(self, value):
        return self.exact.minus(value)

    def divide(self, left, right):
        if right == 0:
            raise DivisionByZero('Division by zero')
        return self._apply('divide', left, right, self.context)

    def power(self, base, exponent):
        if base == 0 and exponent < 0:
            raise ExpressionArithmeticError(
                'Cannot raise zero to a negative power')
        try:
            result = math.pow(float(base), float(exponent))
        except (OverflowError, ValueError):
            result = math.nan
        if math.isinf(result) or math.isnan(result):
            raise ExpressionArithmeticError(
                'Power operation resulted in overflow or invalid result')
        # repr() is the shortest string that round-trips the float.
        return self.context.create_decimal(repr(result))

    def format(self, value):
        '''
        Plain notation, without trailing fractional zeros or negative zero.
        '''
        if value == 0:
            return '0'
        return '{:f}'.format(value.normalize(self.context))


BACKENDS = {
    'i': IntegerBackend,
    'D': DecimalBackend,
}
DEFAULT_BACKEND = 'i'


@wrap_user_errors('No such backend {0!r}')
def get_backend(backend=None):
    '''
    Return a backend instance, given a BACKENDS key or an instance.

    None is the DEFAULT_BACKEND.
    '''
    if backend is None:
        backend = DEFAULT_BACKEND
    if isinstance(backend, str):
        return BACKENDS[backend]()
    return backend
