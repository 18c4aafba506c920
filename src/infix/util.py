from functools import wraps


class CalcError(Exception):
    '''
    Base of every error the calculator reports to its user.

    args[0] is the user facing message, args[1] (if any) the exception that
    was wrapped into this one.
    '''

    @property
    def message(self):
        return self.args[0] if self.args else ''

    @property
    def cause(self):
        return self.args[1] if len(self.args) > 1 else None

    def __str__(self):
        return str(self.message)


class ExpressionSyntaxError(CalcError):
    '''
    Malformed expression: bad character, bad number, unbalanced parentheses,
    wrong operand count.
    '''

    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


class EmptyExpressionError(ExpressionSyntaxError):
    pass


class ExpressionArithmeticError(CalcError, ArithmeticError):
    pass


class DivisionByZero(ExpressionArithmeticError, ZeroDivisionError):
    pass


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts unexpected exceptions to CalcErrors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except Exception as e:
                raise CalcError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
