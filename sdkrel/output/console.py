"""Console output for release commands.

Commands write through ``ConsoleProtocol``; ``RichConsole`` renders to the
terminal and ``MockConsole`` records what was written so tests can assert on it.
Messages are plain text: library paths and artifact ids are never parsed as
markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = ["ConsoleProtocol", "MockConsole", "OutputRecord", "RichConsole", "Style"]


class Style(Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DIM = "dim"
    HEADER = "header"

    def __str__(self) -> str:
        return self.value


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def bullet(self, message: str) -> None:
        """One item of a list (a library, a workflow step)."""
        ...

    def newline(self) -> None: ...


_RICH_STYLES: dict[Style, str] = {
    Style.SUCCESS: "green",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.INFO: "cyan",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
}


class RichConsole:
    def __init__(self, *, stderr: bool = False) -> None:
        # Lazy so the release layer never pulls in rich
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def _prefixed(self, prefix: str, style: Style, message: str) -> None:
        from rich.text import Text

        line = Text(prefix, style=_RICH_STYLES.get(style, ""))
        line.append(f" {message}")
        self._console.print(line)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=_RICH_STYLES.get(style) or None, markup=False)

    def success(self, message: str) -> None:
        self._prefixed("OK", Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._prefixed("error:", Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._prefixed("warning:", Style.WARNING, message)

    def info(self, message: str) -> None:
        self._prefixed("info:", Style.INFO, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def bullet(self, message: str) -> None:
        self._prefixed("  -", Style.DIM, message)

    def newline(self) -> None:
        self._console.print()


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


_PREFIXES: dict[Style, str] = {
    Style.SUCCESS: "OK ",
    Style.ERROR: "error: ",
    Style.WARNING: "warning: ",
    Style.INFO: "info: ",
}


@dataclass
class MockConsole:
    """Records output; prefixes match what ``RichConsole`` shows."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def _record(self, style: Style, message: str) -> None:
        self.outputs.append(OutputRecord(_PREFIXES.get(style, "") + message, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._record(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._record(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._record(Style.INFO, message)

    def header(self, message: str) -> None:
        self._record(Style.HEADER, message)

    def bullet(self, message: str) -> None:
        self._record(Style.DEFAULT, f"- {message}")

    def newline(self) -> None:
        self._record(Style.DEFAULT, "")

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style is Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style is Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
