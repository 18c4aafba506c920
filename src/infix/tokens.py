'''
Tokens produced by the lexer and reordered by the converter.

One class per kind of token: only numbers carry a value and only operators
carry a symbol. Tokens are frozen, and compare equal only to tokens of the
same class.
'''

from dataclasses import dataclass
from decimal import Decimal
from typing import Union
import enum


class TokenKind(enum.Enum):
    NUMBER = enum.auto()
    OPERATOR = enum.auto()
    LEFT_PAREN = enum.auto()
    RIGHT_PAREN = enum.auto()
    END = enum.auto()

    def __str__(self):
        return self.name

    __repr__ = __str__


@dataclass(frozen=True)
class Number:
    value: Union[int, Decimal]
    position: int

    kind = TokenKind.NUMBER

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Operator:
    symbol: str
    position: int

    kind = TokenKind.OPERATOR

    def __str__(self):
        return self.symbol


@dataclass(frozen=True)
class LeftParen:
    position: int

    kind = TokenKind.LEFT_PAREN

    def __str__(self):
        return '('


@dataclass(frozen=True)
class RightParen:
    position: int

    kind = TokenKind.RIGHT_PAREN

    def __str__(self):
        return ')'


@dataclass(frozen=True)
class End:
    position: int

    kind = TokenKind.END

    def __str__(self):
        return ''


Token = Union[Number, Operator, LeftParen, RightParen, End]


def untokenize(tokens):
    '''
    Space separated rendering of tokens, e.g. for dumping postfix order.
    '''
    return ' '.join(str(token) for token in tokens if str(token))
