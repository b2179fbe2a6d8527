import logging
from typing import Optional, Sequence

from rich.console import Console as RichConsoleOutput
from rich.logging import RichHandler
from rich.prompt import Prompt

from .interfaces import Console


def configure_logging(level: str = "WARNING") -> None:
    """Route library logging through rich, once per process."""
    root = logging.getLogger("takeout")
    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        root.addHandler(RichHandler(console=RichConsoleOutput(stderr=True), show_path=False))
    root.setLevel(level.upper())


class RichConsole(Console):
    def __init__(self, console: Optional[RichConsoleOutput] = None):
        self.console = console or RichConsoleOutput()

    def ask(self, question: str, default: Optional[str] = None) -> str:
        if default is None:
            return Prompt.ask(f"[bold]{question}[/bold]", console=self.console)
        return Prompt.ask(f"[bold]{question}[/bold]", console=self.console, default=default) or default

    def choose(self, question: str, options: Sequence[str]) -> str:
        if not options:
            raise ValueError("Nothing to choose from")

        for index, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]  {option}")

        while True:
            answer = Prompt.ask(f"[bold]{question}[/bold]", console=self.console).strip()
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1]
            if answer in options:
                return answer
            self.error(f"'{answer}' is not one of the listed options.")

    def info(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/bold red]")
