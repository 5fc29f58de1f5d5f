"""User-facing output and interactive prompts rendered with rich."""

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

GUTTER = "[blue]┃[/blue]"


@dataclass
class Choice:
    """One option of a selection prompt."""

    name: str
    value: Any
    disabled: bool = False


class Terminal:
    """Renders messages and collects answers from the user.

    Every component that talks to the user receives a Terminal instead of
    printing directly, so prompts can be scripted in tests.

    Args:
        console: Console to render to. A new one is created if omitted.
        stream: Optional input stream for text prompts; defaults to stdin.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = console or Console()
        self.stream = stream

    # Output

    def header(self, title: str) -> None:
        """Print the session title bar."""
        self.console.print(f"[blue]┏━[/blue] [bold white on black]{escape(title)}[/bold white on black]")

    def log(self, message: str) -> None:
        """Print an informational line. ``message`` may contain rich markup."""
        self.console.print(f"{GUTTER} ▪ {message}")

    def warn(self, message: str) -> None:
        """Print a warning line in yellow."""
        self.log(f"[yellow]{message}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error line in red."""
        self.log(f"[red]{message}[/red]")

    def success(self, message: str) -> None:
        """Print a success line in green."""
        self.log(f"[green]{message}[/green]")

    def goodbye(self) -> None:
        """Close the session frame with a farewell."""
        self.console.print(f"{GUTTER}\n[blue]┗━[/blue] Okay, goodbye.")

    def status(self, message: str) -> AbstractContextManager:
        """Show a spinner while a network request is in flight."""
        return self.console.status(f"{GUTTER} {message}", spinner="star")

    # Input

    def select(self, message: str, choices: list[Choice]) -> Any:
        """Ask the user to pick exactly one enabled choice.

        Args:
            message: Question shown above the options.
            choices: Options in display order. Disabled options are listed
                but cannot be picked.

        Returns:
            The ``value`` of the chosen option.
        """
        allowed: list[str] = []
        self.console.print(f"{GUTTER}\n{GUTTER} [grey50]○[/grey50] {message}")
        for index, choice in enumerate(choices, start=1):
            if choice.disabled:
                self.console.print(f"{GUTTER}   [dim]-  {escape(choice.name)} (unavailable)[/dim]")
                continue
            allowed.append(str(index))
            self.console.print(f"{GUTTER}   [magenta]{index})[/magenta] {escape(choice.name)}")

        answer = IntPrompt.ask(
            f"{GUTTER} [magenta]»[/magenta]",
            console=self.console,
            choices=allowed,
            show_choices=False,
            stream=self.stream,
        )
        return choices[answer - 1].value

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""
        return Confirm.ask(f"{GUTTER} [grey50]○[/grey50] {message}", console=self.console, stream=self.stream)

    def ask(
        self,
        message: str,
        required: bool = False,
        validate: Callable[[str], bool] | None = None,
        invalid_message: str = "Invalid value, please try again.",
    ) -> str:
        """Ask for a line of text.

        Re-prompts while a required answer is blank or ``validate`` rejects it.
        """
        while True:
            value = self._read(f"{GUTTER} [grey50]○[/grey50] {message}")
            if required and not value.strip():
                self.warn("A value is required.")
                continue
            if validate is not None and not validate(value):
                self.warn(invalid_message)
                continue
            return value

    def _read(self, prompt: str) -> str:
        """Read one raw line of input; blank answers are allowed."""
        return Prompt.ask(
            prompt,
            console=self.console,
            default="",
            show_default=False,
            stream=self.stream,
        )

    def secret(self, message: str) -> str:
        """Ask for a value without echoing it."""
        return Prompt.ask(
            f"{GUTTER} [grey50]○[/grey50] {message}",
            console=self.console,
            password=True,
            default="",
            show_default=False,
        )
