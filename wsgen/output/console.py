"""Console output.

Services print through ``ConsoleProtocol`` so tests can swap in ``MockConsole``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from rich.console import Console
from rich.markup import escape

__all__ = ["ConsoleProtocol", "MockConsole", "RichConsole", "Style"]


class Style(Enum):
    DEFAULT = ""
    DIM = "dim"
    INFO = "cyan"
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR = "bold red"
    HEADER = "bold"


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def header(self, title: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...


class RichConsole:
    """Console backed by rich. Debug lines only show when ``verbose``."""

    def __init__(self, *, verbose: bool = False) -> None:
        self._console = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)
        self._verbose = verbose

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(escape(message), style=style.value or None)

    def header(self, title: str) -> None:
        self._console.print()
        self._console.print(escape(title), style=Style.HEADER.value)

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self._err.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self._err.print(f"[bold red]error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._console.print(escape(message), style=Style.DIM.value)


@dataclass
class MockConsole:
    """Records output for assertions."""

    messages: list[tuple[str, Style]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    debugs: list[str] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.messages.append((message, style))

    def header(self, title: str) -> None:
        self.messages.append((title, Style.HEADER))

    def success(self, message: str) -> None:
        self.messages.append((message, Style.SUCCESS))

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def debug(self, message: str) -> None:
        self.debugs.append(message)

    @property
    def text(self) -> str:
        return "\n".join(m for m, _ in self.messages)
