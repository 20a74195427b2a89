import pytest
from pydantic import ValidationError

from rox.errors import Diagnostic, EchoReporter, ErrorReporter, LexErrorKind


def test_diagnostic_format() -> None:
    diagnostic = Diagnostic(line=3, message="Unexpected character.")
    assert str(diagnostic) == "[line 3] Error: Unexpected character."

    diagnostic = Diagnostic(line=1, where=" at end", message="Expect ';'.")
    assert str(diagnostic) == "[line 1] Error at end: Expect ';'."


def test_diagnostic_line_is_one_based() -> None:
    with pytest.raises(ValidationError):
        Diagnostic(line=0, message="nope")


def test_reporter_collects_in_order() -> None:
    reporter = ErrorReporter()
    assert not reporter.had_error

    reporter.error(1, LexErrorKind.UNEXPECTED_CHARACTER)
    reporter.report(2, "", "Something else.")

    assert reporter.had_error
    assert [(d.line, d.message, d.kind) for d in reporter.diagnostics] == [
        (1, "Unexpected character.", LexErrorKind.UNEXPECTED_CHARACTER),
        (2, "Something else.", None),
    ]

    reporter.reset()
    assert not reporter.had_error


def test_echo_reporter_writes_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    reporter = EchoReporter()
    reporter.error(4, LexErrorKind.UNTERMINATED_STRING)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[line 4] Error: Unterminated string.\n"
    assert reporter.had_error
