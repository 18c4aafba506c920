import logging

from .converter import Converter, check_parentheses
from .evaluator import Evaluator
from .lexer import Lexer
from .numeric import get_backend
from .util import CalcError, EmptyExpressionError, wrap_user_errors


logger = logging.getLogger(__name__)


class Calculator:
    '''
    Expression engine: lexer, converter and evaluator over one backend.

    Holds no per-expression state, so one calculator may be shared between
    threads.
    '''

    EMPTY = 'Expression cannot be empty'
    DIVISION_BY_ZERO = 'Division by zero'
    ERROR = 'Error - {}'

    def __init__(self, backend=None):
        '''
        Create calculator.

        :param backend: BACKENDS key or backend instance, None for the
                        default.
        '''
        self.backend = get_backend(backend)
        self.lexer = Lexer(self.backend)
        self.converter = Converter()
        self.evaluator = Evaluator(self.backend)

    def postfix(self, expression):
        '''
        Return the tokens of expression, in postfix order.
        '''
        if not expression or expression.isspace():
            raise EmptyExpressionError(type(self).EMPTY)
        tokens = self.lexer.tokenize(expression)
        check_parentheses(tokens)
        return self.converter.convert(tokens)

    @wrap_user_errors('Cannot evaluate {1!r}')
    def evaluate(self, expression):
        '''
        Return the value of expression. Raises CalcError.
        '''
        return self.evaluator.evaluate(self.postfix(expression))

    def format(self, value):
        return self.backend.format(value)

    def calculate(self, expression):
        '''
        Return the value of expression as a string, or an error message.

        Never raises on user input.
        '''
        try:
            return self.format(self.evaluate(expression))
        except CalcError as e:
            logger.debug('Cannot calculate %r', expression, exc_info=True)
            return type(self).ERROR.format(self.describe(e))

    def is_valid(self, expression):
        '''
        Return (True, '') if expression evaluates, else (False, reason).
        '''
        try:
            self.evaluate(expression)
        except CalcError as e:
            return False, self.describe(e)
        return True, ''

    def describe(self, error):
        '''
        Message for error, the same for every kind of division by zero.
        '''
        if isinstance(error, ZeroDivisionError) or \
           isinstance(error.cause, ZeroDivisionError):
            return type(self).DIVISION_BY_ZERO
        return error.message


_calculator = Calculator()


def calculate(expression):
    '''
    Calculate with the shared integer calculator.
    '''
    return _calculator.calculate(expression)


def is_valid(expression):
    return _calculator.is_valid(expression)
