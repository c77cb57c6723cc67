"""Package exceptions.

Data problems never raise; they are logged and fail validation.  These are
for the few things a caller cannot continue past.
"""

from __future__ import annotations

from pathlib import Path


class ParchmintError(Exception):
    """Base class for parchmint exceptions."""


class DocumentReadError(ParchmintError):
    """Raised when a Parchmint file cannot be read from disk."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read '{path}': {reason}")
