from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, field_serializer


class TokenKind(Enum):
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: Mapping[str, TokenKind] = MappingProxyType(
    {
        "and": TokenKind.AND,
        "class": TokenKind.CLASS,
        "else": TokenKind.ELSE,
        "false": TokenKind.FALSE,
        "for": TokenKind.FOR,
        "fun": TokenKind.FUN,
        "if": TokenKind.IF,
        "nil": TokenKind.NIL,
        "or": TokenKind.OR,
        "print": TokenKind.PRINT,
        "return": TokenKind.RETURN,
        "super": TokenKind.SUPER,
        "this": TokenKind.THIS,
        "true": TokenKind.TRUE,
        "var": TokenKind.VAR,
        "while": TokenKind.WHILE,
    }
)


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    lexeme: str
    line: int

    def __str__(self) -> str:
        return f"{self.kind.name} {self.lexeme} {self.line}"

    @field_serializer("kind")
    def _serialize_kind(self, kind: TokenKind) -> str:
        return kind.name
