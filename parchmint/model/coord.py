"""Coord — a 2-D position relative to a component's or layer's origin."""

from __future__ import annotations

from dataclasses import dataclass

from parchmint.log import Log

from .validation import DEFAULT_COORD_VALUE, check_coord_value, is_valid


@dataclass(eq=True)
class Coord:
    x: int = DEFAULT_COORD_VALUE
    y: int = DEFAULT_COORD_VALUE

    def set_location(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def validate(self, log: Log | None = None, caller: str = "Coord") -> bool:
        x_ok = is_valid(check_coord_value(self.x, "x", caller, log))
        y_ok = is_valid(check_coord_value(self.y, "y", caller, log))
        return x_ok and y_ok

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
