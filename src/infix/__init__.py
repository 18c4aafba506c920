'''
Infix arithmetic calculator.

Evaluates expressions like 2 + 3 * (4 - 1) ^ 2 by converting them to RPN
(shunting-yard) and running that on a stack, over arbitrary precision
integers, or optionally decimals.

The pipeline, leaf to root:

- numeric: backends, i.e. what a number is and how to do arithmetic on it.
- lexer: text to tokens, unary signs folded into numbers.
- converter: tokens to postfix order, checking parentheses.
- evaluator: postfix tokens to a value.
- engine: all of the above, errors rendered as messages.

batch and cli are the shells around it.
'''

from .batch import BatchProcessor, ProcessingResult
from .cli import CLI
from .converter import Converter, check_parentheses, convert
from .engine import Calculator, calculate, is_valid
from .evaluator import Evaluator
from .lexer import Lexer, tokenize
from .numeric import BACKENDS, DecimalBackend, IntegerBackend
from .util import (CalcError, DivisionByZero, EmptyExpressionError,
                   ExpressionArithmeticError, ExpressionSyntaxError)


__all__ = ('Calculator', 'calculate', 'is_valid',
           'Lexer', 'tokenize', 'Converter', 'convert', 'check_parentheses',
           'Evaluator', 'BACKENDS', 'IntegerBackend', 'DecimalBackend',
           'BatchProcessor', 'ProcessingResult', 'CLI',
           'CalcError', 'ExpressionSyntaxError', 'EmptyExpressionError',
           'ExpressionArithmeticError', 'DivisionByZero')
