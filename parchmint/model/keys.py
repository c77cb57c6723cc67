"""ParchKey — the shared ``(name, id)`` identity of named entities.

Layer, Component, Connection and ConnectionSegment all carry a name and a
unique id.  They satisfy ``ParchKey`` structurally; nothing inherits from
it, and it cannot be instantiated.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from parchmint.log import Log

from .validation import check_string_value, is_valid


@runtime_checkable
class ParchKey(Protocol):
    name: str
    id: str

    def validate(self, log: Log | None = None) -> bool: ...


def validate_key(entity: ParchKey, caller: str, log: Log | None = None) -> bool:
    """Check name and id.  Uniqueness is checked by the container."""
    name_ok = is_valid(check_string_value(entity.name, "name", caller, log))
    id_ok = is_valid(check_string_value(entity.id, "id", caller, log))
    return name_ok and id_ok
