'''
Expression engine tests
'''

from infix import engine
from infix.engine import Calculator
from infix.lexer import tokenize
from infix.numeric import DecimalBackend, IntegerBackend
from infix.tokens import End, Number

from pytest import mark


EMPTY = 'Error - Expression cannot be empty'


@mark.parametrize('expression, expected', [
    ('2 + 3 * 2', '8'),
    ('(2+3)*2', '10'),
    ('2^3^2', '512'),
    ('(2^3)^2', '64'),
    ('-5+3', '-2'),
    ('5 + 3', '8'),
    ('10 - 4', '6'),
    ('6 * 7', '42'),
    ('20 / 4', '5'),
    ('10 + 2 * 6', '22'),
    ('100 * 2 + 12 / 3', '204'),
    ('10 - 2 * 3', '4'),
    ('2 + -3 * 2', '-4'),
    ('-10 - -5', '-5'),
    ('-2 * -3', '6'),
    ('-20 / 4', '-5'),
    ('10 + -5', '5'),
    ('(1 - -1) * 5', '10'),
    ('1 - -1 - -1', '3'),
    ('2 ^ (2 - 1)', '2'),
    ('(((0)))', '0'),
    ('1000 - -999', '1999'),
    ('-1 ^ 2', '1'),
])
def test_both_backends(calculator, expression, expected):
    assert calculator.calculate(expression) == expected


@mark.parametrize('expression, expected', [
    ('999999999999999999999 + 1', '1000000000000000000000'),
    ('2 ^ 100', '1267650600228229401496703205376'),
    ('10 ^ 30 + 1', '1' + '0' * 29 + '1'),
    ('-3 ^ 3', '-27'),
    ('7 / 2', '3'),
    ('-7 / 2', '-3'),
    ('0 / -1', '0'),
    ('-0', '0'),
    ('-2^2', '4'),
    ('1 ^ 0', '1'),
    ('0 ^ 0', '1'),
])
def test_integer(integer, expression, expected):
    assert integer.calculate(expression) == expected


@mark.parametrize('expression, expected', [
    ('15 / 4', '3.75'),
    ('2.1 * 2', '4.2'),
    ('5.5 + 3', '8.5'),
    ('10 / 2.5', '4'),
    ('0.1 + 0.2', '0.3'),
    ('1 / 3', '0.' + '3' * 28),
    ('2 ^ 0.5', '1.4142135623730951'),
    ('2 ^ 10', '1024'),
    ('2 ^ -1', '0.5'),
    ('0 * -1', '0'),
    ('1.50 + 1.50', '3'),
    ('.5 * 4', '2'),
])
def test_decimal(decimal, expression, expected):
    assert decimal.calculate(expression) == expected


@mark.parametrize('expression', ['', '   ', '\t', None])
def test_empty(calculator, expression):
    assert calculator.calculate(expression) == EMPTY


@mark.parametrize('expression', [
    '5/0',
    '5 / 0',
    '10 + 5 / 0',
    '1 / (3 - 3)',
    '(5 / 0) * 0',
    '2 ^ 2 / (1 - 1) + 4',
])
def test_division_by_zero(calculator, expression):
    assert calculator.calculate(expression) == 'Error - Division by zero'


def test_division_by_zero_decimal(decimal):
    assert decimal.calculate('5 / 0.0') == 'Error - Division by zero'


@mark.parametrize('expression', ['a + 1', '5 + b', 'abc', '2 = 2'])
def test_invalid_character(calculator, expression):
    assert calculator.calculate(expression).startswith(
        'Error - Invalid character')


def test_mismatched_parentheses(calculator):
    assert 'no opening parenthesis' in calculator.calculate('2+3)')
    assert 'unclosed opening parenthesis' in calculator.calculate('(2+3')
    assert calculator.calculate('(2+3') == (
        'Error - Mismatched parentheses: unclosed opening parenthesis at '
        'position 0')


@mark.parametrize('expression, expected', [
    # Binary operator, then a signed number.
    ('10--5', '15'),
    ('10++5', '15'),
    ('10-+5', '5'),
    ('10+-5', '5'),
    ('10 - - 5', '15'),
    # A sign is not an operator: it needs a number right after it.
    ('--5', 'Error - Expected digit at position 1'),
    ('+-5', 'Error - Expected digit at position 1'),
    ('-(5)', 'Error - Expected digit at position 1'),
    ('+', 'Error - Expected digit at position 1'),
    ('+5', '5'),
    ('+ 5', '5'),
])
def test_double_signs(calculator, expression, expected):
    assert calculator.calculate(expression) == expected


@mark.parametrize('expression, expected', [
    ('1 + 2 3', 'Error - Invalid expression: too many operands'),
    ('(5)(3)', 'Error - Invalid expression: too many operands'),
    ('1 +', "Error - Invalid expression: not enough operands for operator "
            "'+' at position 2"),
    ('* 2', "Error - Invalid expression: not enough operands for operator "
            "'*' at position 0"),
    ('()', 'Error - Invalid expression: no operands'),
])
def test_operand_count(calculator, expression, expected):
    assert calculator.calculate(expression) == expected


@mark.parametrize('expression, expected', [
    ('2 ^ -1', 'Error - Negative exponents are not supported'),
    ('2 ^ 3000000000', 'Error - Exponent is too large'),
    ('1.5 + 1', "Error - Invalid character at position 1: '.'. "
                'Decimal numbers are not supported'),
])
def test_integer_errors(integer, expression, expected):
    assert integer.calculate(expression) == expected


@mark.parametrize('expression, expected', [
    ('0 ^ -1', 'Error - Cannot raise zero to a negative power'),
    ('(-8) ^ 0.5',
     'Error - Power operation resulted in overflow or invalid result'),
    ('.', 'Error - Invalid number format at position 0: no digits found'),
    ('123456789012345678901234567890',
     "Error - Invalid number format: '123456789012345678901234567890' has "
     'more than 28 significant digits'),
    ('9999999999999999999999999999 + 0.1',
     'Error - Result has more than 28 significant digits'),
])
def test_decimal_errors(decimal, expression, expected):
    assert decimal.calculate(expression) == expected


@mark.parametrize('expression', [
    '1 + 2 * 3',
    '-5 + 3',
    '(2 - 7) * 3 ^ 3',
    '99999999999999999999 * 99999999999999999999',
    '0 - 0',
])
def test_result_round_trips(integer, expression):
    output = integer.calculate(expression)
    assert tokenize(output) == [Number(integer.evaluate(expression), 0),
                                End(len(output))]


def test_is_valid(calculator):
    assert calculator.is_valid('1 + 2') == (True, '')
    assert calculator.is_valid('') == (False, 'Expression cannot be empty')
    assert calculator.is_valid('5 / 0') == (False, 'Division by zero')
    assert calculator.is_valid('1 +') == (
        False,
        "Invalid expression: not enough operands for operator '+' at "
        "position 2")


def test_postfix(integer):
    assert [str(token) for token in integer.postfix('1 + 2 * 3')] == \
        ['1', '2', '3', '*', '+']


class Exploding(IntegerBackend):
    def add(self, left, right):
        raise RuntimeError('boom')

    def divide(self, left, right):
        return left // right


def test_unexpected_errors_wrapped():
    calculator = Calculator(Exploding())
    assert calculator.calculate('1 + 1') == "Error - Cannot evaluate '1 + 1'"
    assert calculator.is_valid('1 + 1') == (False, "Cannot evaluate '1 + 1'")


def test_wrapped_division_by_zero():
    assert Calculator(Exploding()).calculate('1 / 0') == \
        'Error - Division by zero'


def test_module_level():
    assert engine.calculate('2 + 3 * 2') == '8'
    assert engine.calculate('   ') == EMPTY
    assert engine.is_valid('(1') == (
        False,
        'Mismatched parentheses: unclosed opening parenthesis at position 0')


def test_default_backend():
    assert isinstance(Calculator().backend, IntegerBackend)
    assert isinstance(Calculator(None).backend, IntegerBackend)
    assert isinstance(Calculator('D').backend, DecimalBackend)
