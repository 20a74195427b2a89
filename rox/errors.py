from enum import Enum
from typing import Optional

import click
from pydantic import BaseModel, ConfigDict, Field


class LexErrorKind(Enum):
    UNEXPECTED_CHARACTER = "Unexpected character."
    UNTERMINATED_STRING = "Unterminated string."


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    where: str = ""
    message: str
    kind: Optional[LexErrorKind] = None

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ErrorReporter(BaseModel):
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    def report(
        self,
        line: int,
        where: str,
        message: str,
        kind: Optional[LexErrorKind] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(line=line, where=where, message=message, kind=kind)
        self.diagnostics.append(diagnostic)
        self._emit(diagnostic)
        return diagnostic

    def error(self, line: int, kind: LexErrorKind) -> Diagnostic:
        return self.report(line, "", kind.value, kind)

    def reset(self) -> None:
        self.diagnostics.clear()

    def _emit(self, diagnostic: Diagnostic) -> None:
        pass


class EchoReporter(ErrorReporter):
    def _emit(self, diagnostic: Diagnostic) -> None:
        click.echo(str(diagnostic), err=True)
