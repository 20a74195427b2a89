import logging
import sys
from typing import Optional

import click
from pydantic import BaseModel, TypeAdapter

from rox.errors import EchoReporter
from rox.scanner import Scanner
from rox.token import Token

_PROMPT = "ROX> "
_EXIT_LEX_ERROR = 65

_TOKEN_LIST = TypeAdapter(list[Token])


class Main(BaseModel):
    script: Optional[str]
    dump_tokens: bool
    verbose: bool

    def _run(self, source: str, reporter: EchoReporter) -> bool:
        tokens = Scanner(source=source, reporter=reporter).scan_tokens()
        if self.dump_tokens:
            click.echo(_TOKEN_LIST.dump_json(tokens, indent=2).decode())
        else:
            for token in tokens:
                click.echo(str(token))
        return not reporter.had_error

    def run_file(self, path: str) -> int:
        try:
            with open(path, "r", encoding="utf-8") as f:
                source = f.read()
        except UnicodeDecodeError as e:
            raise click.FileError(path, hint=f"not valid UTF-8 ({e.reason})")
        except OSError as e:
            raise click.FileError(path, hint=e.strerror)
        if not self._run(source, EchoReporter()):
            return _EXIT_LEX_ERROR
        return 0

    def run_prompt(self) -> int:
        reporter = EchoReporter()
        while True:
            click.echo(_PROMPT, nl=False)
            line = sys.stdin.readline()
            # EOF (Ctrl + D)
            if not line:
                click.echo()
                return 0
            reporter.reset()
            self._run(line, reporter)

    def run(self) -> int:
        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )
        if self.script is not None:
            return self.run_file(self.script)
        return self.run_prompt()


@click.command()
@click.help_option("-h", "--help")
@click.argument("script", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--dump-tokens", is_flag=True, help="Print the tokens as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(script: Optional[str], dump_tokens: bool, verbose: bool) -> None:
    """Scan SCRIPT, or start an interactive prompt when no SCRIPT is given."""
    sys.exit(Main(script=script, dump_tokens=dump_tokens, verbose=verbose).run())
