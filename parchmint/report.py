"""One-call document checking: parse, then validate, on a shared log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from parchmint.errors import DocumentReadError
from parchmint.log import Log
from parchmint.model import Architecture
from parchmint.parsing import ParchmintParser

log = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Outcome of checking one document.

    ``parser_valid`` covers reference resolution (duplicates, unknown
    components/ports); ``architecture_valid`` covers structure and geometry.
    """

    architecture: Architecture | None
    parser_valid: bool
    architecture_valid: bool
    log: Log = field(default_factory=Log)
    extent: tuple[int, int] = (0, 0)

    @property
    def valid(self) -> bool:
        return self.parser_valid and self.architecture_valid


def check_document(
    document: str | bytes | dict,
    diagnostics: Log | None = None,
) -> ValidationReport:
    """Parse and validate a Parchmint document."""
    if diagnostics is None:
        diagnostics = Log()
    parser = ParchmintParser(document, log=diagnostics)
    arch = parser.parse()

    arch_valid = arch.validate(diagnostics) if arch is not None else False
    log.debug("Document check: parser=%s architecture=%s", parser.valid, arch_valid)

    return ValidationReport(
        architecture=arch,
        parser_valid=parser.valid,
        architecture_valid=arch_valid,
        log=diagnostics,
        extent=parser.extent,
    )


def check_file(path: str | Path) -> ValidationReport:
    """Read a UTF-8 Parchmint file and check it."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, str(exc)) from exc
    return check_document(text)
