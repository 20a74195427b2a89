import logging
from collections.abc import Iterator
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr

from rox.errors import ErrorReporter, LexErrorKind
from rox.token import KEYWORDS, Token, TokenKind

_logger = logging.getLogger(__name__)


def _is_digit(c: Optional[str]) -> bool:
    return c is not None and "0" <= c <= "9"


def _is_identifier_char(c: Optional[str]) -> bool:
    return c is not None and (c.isalpha() or _is_digit(c) or c == "_")


class Scanner(BaseModel, Iterator):
    source: str
    reporter: ErrorReporter = Field(default_factory=ErrorReporter)
    _start = PrivateAttr(0)
    _current = PrivateAttr(0)
    _line = PrivateAttr(1)
    _finished = PrivateAttr(False)

    @property
    def current(self) -> int:
        return self._current

    @property
    def line(self) -> int:
        return self._line

    def __iter__(self) -> "Scanner":
        return self

    def __next__(self) -> Token:
        while not self._is_at_end():
            self._start = self._current
            token = self._scan_token()
            if token is not None:
                return token
        if self._finished:
            raise StopIteration
        self._finished = True
        self._start = self._current
        return Token(kind=TokenKind.EOF, lexeme="", line=self._line)

    def scan_tokens(self) -> list[Token]:
        tokens = list(self)
        _logger.debug(
            "scanned %d tokens over %d lines, %d errors",
            len(tokens),
            self._line,
            len(self.reporter.diagnostics),
        )
        return tokens

    def _error(self, kind: LexErrorKind) -> None:
        _logger.debug("line %d: %s", self._line, kind.name)
        self.reporter.error(self._line, kind)

    def _scan_token(self) -> Optional[Token]:
        match self._advance():
            case "(":
                return self._add_token(TokenKind.LEFT_PAREN)
            case ")":
                return self._add_token(TokenKind.RIGHT_PAREN)
            case "{":
                return self._add_token(TokenKind.LEFT_BRACE)
            case "}":
                return self._add_token(TokenKind.RIGHT_BRACE)
            case ",":
                return self._add_token(TokenKind.COMMA)
            case ".":
                return self._add_token(TokenKind.DOT)
            case "-":
                return self._add_token(TokenKind.MINUS)
            case "+":
                return self._add_token(TokenKind.PLUS)
            case ";":
                return self._add_token(TokenKind.SEMICOLON)
            case "*":
                return self._add_token(TokenKind.STAR)
            case "!":
                if self._peek() == "=":
                    self._advance()
                    return self._add_token(TokenKind.BANG_EQUAL)
                else:
                    return self._add_token(TokenKind.BANG)
            case "=":
                if self._peek() == "=":
                    self._advance()
                    return self._add_token(TokenKind.EQUAL_EQUAL)
                else:
                    return self._add_token(TokenKind.EQUAL)
            case "<":
                if self._peek() == "=":
                    self._advance()
                    return self._add_token(TokenKind.LESS_EQUAL)
                else:
                    return self._add_token(TokenKind.LESS)
            case ">":
                if self._peek() == "=":
                    self._advance()
                    return self._add_token(TokenKind.GREATER_EQUAL)
                else:
                    return self._add_token(TokenKind.GREATER)
            case "/":
                if self._peek() == "/":
                    self._skip_comment()
                    return None
                else:
                    return self._add_token(TokenKind.SLASH)
            case "\n":
                self._line += 1
                return None
            case " " | "\t" | "\r":
                return None
            case '"':
                return self._lex_string()
            case c if _is_digit(c):
                return self._lex_number()
            case c if c is not None and c.isalpha():
                return self._lex_identifier_or_keyword()
            case _:
                self._error(LexErrorKind.UNEXPECTED_CHARACTER)
                return None

    def _skip_comment(self) -> None:
        # The newline is left for the main loop so it still bumps the line.
        while True:
            c = self._peek()
            if c is None or c == "\n":
                return
            self._advance()

    def _lex_string(self) -> Optional[Token]:
        line = self._line
        while True:
            match self._peek():
                case None:
                    self._error(LexErrorKind.UNTERMINATED_STRING)
                    return None
                case '"':
                    break
                case "\n":
                    self._line += 1
            self._advance()
        # closing quote
        self._advance()
        return self._add_token(TokenKind.STRING, line)

    def _lex_number(self) -> Token:
        self._skip_digits()
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            self._skip_digits()
        return self._add_token(TokenKind.NUMBER)

    def _skip_digits(self) -> None:
        while _is_digit(self._peek()):
            self._advance()

    def _lex_identifier_or_keyword(self) -> Token:
        while _is_identifier_char(self._peek()):
            self._advance()
        return self._add_token(KEYWORDS.get(self._text(), TokenKind.IDENTIFIER))

    def _add_token(self, kind: TokenKind, line: Optional[int] = None) -> Token:
        return Token(
            kind=kind,
            lexeme=self._text(),
            line=self._line if line is None else line,
        )

    def _text(self) -> str:
        return self.source[self._start : self._current]

    def _is_at_end(self) -> bool:
        return self._current >= len(self.source)

    def _advance(self) -> Optional[str]:
        c = self._peek()
        if c is not None:
            self._current += 1
        return c

    def _peek(self) -> Optional[str]:
        if self._is_at_end():
            return None
        return self.source[self._current]

    def _peek_next(self) -> Optional[str]:
        if self._current + 1 >= len(self.source):
            return None
        return self.source[self._current + 1]


def scan(source: str, reporter: Optional[ErrorReporter] = None) -> list[Token]:
    if reporter is None:
        reporter = ErrorReporter()
    return Scanner(source=source, reporter=reporter).scan_tokens()
