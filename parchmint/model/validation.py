"""Field-level validation primitives and sentinel defaults.

Every check returns a ``CheckResult``:

  VALID    the value is usable
  INVALID  the value was set, but to something impossible
  DEFAULT  the value was never set (it still holds the sentinel)

Callers treat both INVALID and DEFAULT as failures; the distinction only
changes the wording of the diagnostic.
"""

from __future__ import annotations

from enum import Enum
from numbers import Real
from typing import Any, Iterable

from parchmint.log import Log, Severity


# ── Sentinels ──────────────────────────────────────────────────────

DEFAULT_STR_VALUE = "unassigned"
DEFAULT_SPAN_VALUE = -1
DEFAULT_COORD_VALUE = -1
DEFAULT_DIM_VALUE = -1
DEFAULT_CON_TYPE = "channel"


class CheckResult(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    DEFAULT = "default"


def is_valid(result: CheckResult) -> bool:
    return result is CheckResult.VALID


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _report(
    log: Log | None,
    severity: Severity,
    caller: str,
    field: str,
    problem: str,
) -> None:
    if log is not None:
        log.notify(severity, f'{caller}: Field "{field}" {problem}.')


def _check_number(
    value: Any,
    field: str,
    caller: str,
    log: Log | None,
    severity: Severity,
    sentinel: int,
    minimum: float,
    problem: str,
    strict: bool = False,
    whole: bool = False,
) -> CheckResult:
    if not _is_number(value):
        _report(log, severity, caller, field, f"is not a number ({value!r})")
        return CheckResult.INVALID
    if value == sentinel:
        _report(log, severity, caller, field, "is set to the default value")
        return CheckResult.DEFAULT
    if whole and not float(value).is_integer():
        _report(log, severity, caller, field, f"must be a whole number (got {value})")
        return CheckResult.INVALID
    if value < minimum or (strict and value == minimum):
        _report(log, severity, caller, field, f"{problem} (got {value})")
        return CheckResult.INVALID
    return CheckResult.VALID


# ── Primitive checks ───────────────────────────────────────────────

def check_string_value(
    value: Any,
    field: str,
    caller: str,
    log: Log | None = None,
    severity: Severity = Severity.ERROR,
) -> CheckResult:
    """Strings must be non-empty and not the sentinel."""
    if not isinstance(value, str):
        _report(log, severity, caller, field, f"is not a string ({value!r})")
        return CheckResult.INVALID
    if value == DEFAULT_STR_VALUE:
        _report(log, severity, caller, field, "is set to the default value")
        return CheckResult.DEFAULT
    if value == "":
        _report(log, severity, caller, field, "cannot be empty")
        return CheckResult.INVALID
    return CheckResult.VALID


def check_span_value(
    value: Any,
    field: str,
    caller: str,
    log: Log | None = None,
    severity: Severity = Severity.ERROR,
) -> CheckResult:
    """Spans are sizes and must be at least 1."""
    return _check_number(value, field, caller, log, severity,
                         DEFAULT_SPAN_VALUE, 1, "cannot be less than 1",
                         whole=True)


def check_coord_value(
    value: Any,
    field: str,
    caller: str,
    log: Log | None = None,
    severity: Severity = Severity.ERROR,
) -> CheckResult:
    """Coordinates are relative positions and must be non-negative."""
    return _check_number(value, field, caller, log, severity,
                         DEFAULT_COORD_VALUE, 0, "cannot be negative",
                         whole=True)


def check_dimension_value(
    value: Any,
    field: str,
    caller: str,
    log: Log | None = None,
    severity: Severity = Severity.ERROR,
) -> CheckResult:
    """Dimensions (width, depth) must be strictly positive."""
    return _check_number(value, field, caller, log, severity,
                         DEFAULT_DIM_VALUE, 0, "must be greater than 0",
                         strict=True)


def check_id_uniqueness(
    items: Iterable[Any],
    field: str,
    caller: str,
    log: Log | None = None,
) -> bool:
    """Report every pair of items sharing an ``id``.  True when all unique."""
    items = list(items)
    valid = True
    for i in range(len(items) - 1):
        for j in range(i + 1, len(items)):
            if items[i].id == items[j].id:
                valid = False
                if log is not None:
                    log.error(
                        f'{caller}: Field "{field}" has matching IDs '
                        f'("{items[i].id}") at indices {i} and {j}.'
                    )
    return valid
