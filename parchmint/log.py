"""Structured diagnostics — an ordered, inspectable list of messages.

Validation never prints.  Every check appends a ``Message`` to the ``Log``
it was handed, and the caller decides what to show.  Each notification is
also forwarded to the ``parchmint.diagnostics`` logger so a host that has
configured ``logging`` sees the same stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


log = logging.getLogger("parchmint.diagnostics")


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    OTHER = "OTHER"


_LOG_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.OTHER: logging.INFO,
}


@dataclass
class Message:
    """One diagnostic line plus optional indented sub-lines.

    ``type_text`` replaces the bracketed tag when the severity is OTHER,
    e.g. ``[INFO]`` or ``[NOTE]``.
    """

    severity: Severity
    text: str = ""
    indent: int = 0
    type_text: str = ""
    extra_lines: list[str] = field(default_factory=list)

    @property
    def tag(self) -> str:
        if self.severity is Severity.OTHER and self.type_text:
            return self.type_text
        return self.severity.value

    def __str__(self) -> str:
        pad = "\t" * self.indent
        out = f"{pad}[{self.tag}] {self.text}\n"
        for line in self.extra_lines:
            out += f"{pad}\t{line}\n"
        return out


class Log:
    """Ordered collection of ``Message`` records."""

    def __init__(self) -> None:
        self.messages: list[Message] = []

    def notify(
        self,
        severity: Severity,
        text: str = "",
        *extra_lines: str,
        indent: int = 0,
        type_text: str = "",
    ) -> Message:
        if not isinstance(severity, Severity):
            raise TypeError(f"severity must be a Severity, got {severity!r}")
        msg = Message(
            severity=severity,
            text=text,
            indent=indent,
            type_text=type_text,
            extra_lines=list(extra_lines),
        )
        self.messages.append(msg)
        log.log(_LOG_LEVELS[severity], "%s", text)
        return msg

    # Convenience wrappers used throughout the model.
    def error(self, text: str, *extra_lines: str, indent: int = 0) -> Message:
        return self.notify(Severity.ERROR, text, *extra_lines, indent=indent)

    def warning(self, text: str, *extra_lines: str, indent: int = 0) -> Message:
        return self.notify(Severity.WARNING, text, *extra_lines, indent=indent)

    def peek(self) -> Message | None:
        """Most recent message, or None when empty."""
        return self.messages[-1] if self.messages else None

    def size(self) -> int:
        return len(self.messages)

    def clear(self) -> None:
        self.messages = []

    @property
    def errors(self) -> list[Message]:
        return [m for m in self.messages if m.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Message]:
        return [m for m in self.messages if m.severity is Severity.WARNING]

    def texts(self) -> list[str]:
        return [m.text for m in self.messages]

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __str__(self) -> str:
        return "".join(str(m) for m in self.messages)
