"""Architecture — the top-level device: ordered layers plus optional bounds."""

from __future__ import annotations

from dataclasses import dataclass, field

from parchmint.log import Log, Severity

from .coord import Coord
from .layer import Layer
from .validation import (
    DEFAULT_SPAN_VALUE, DEFAULT_STR_VALUE,
    check_id_uniqueness, check_span_value, check_string_value, is_valid,
)


@dataclass
class Architecture:
    """The validated object graph of one Parchmint document.

    ``x_span``/``y_span`` are optional.  When both are set (``has_params``),
    every placed component and every segment end point must fit inside
    ``[0, x_span] × [0, y_span]``.
    """

    name: str = DEFAULT_STR_VALUE
    layers: list[Layer] = field(default_factory=list)
    x_span: int = DEFAULT_SPAN_VALUE
    y_span: int = DEFAULT_SPAN_VALUE
    has_params: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.determine_params()

    def set_params(self, x_span: int, y_span: int) -> None:
        self.x_span = x_span
        self.y_span = y_span
        self.determine_params()

    def determine_params(self, log: Log | None = None) -> bool:
        """Set ``has_params`` when both spans are usable.  Missing bounds only warn."""
        x_ok = is_valid(check_span_value(self.x_span, "xSpan", "Architecture", log,
                                         Severity.WARNING))
        y_ok = is_valid(check_span_value(self.y_span, "ySpan", "Architecture", log,
                                         Severity.WARNING))
        self.has_params = x_ok and y_ok
        return self.has_params

    def validate(self, log: Log | None = None) -> bool:
        valid = is_valid(check_string_value(self.name, "name", "Architecture", log))
        has_params = self.determine_params(log)

        if not self.layers:
            valid = False
            if log is not None:
                log.error('Architecture: Field "layers" cannot be empty.')

        for i, layer in enumerate(self.layers):
            if not layer.validate(log):
                valid = False
                if log is not None:
                    log.error('Architecture: Field "layers" contains an invalid Layer:',
                              f"ID: {layer.id}", f"Index: {i}")

        valid = check_id_uniqueness(self.layers, "layers", "Architecture", log) and valid

        if has_params:
            for layer in self.layers:
                valid = self.validate_bounds(layer, log) and valid
        return valid

    def validate_bounds(self, layer: Layer, log: Log | None = None) -> bool:
        valid = True
        for i, comp in enumerate(layer.components):
            feature = comp.feature
            if feature is None or feature.location is None:
                continue
            if not self.validate_location(feature.location, comp.x_span, comp.y_span):
                valid = False
                if log is not None:
                    log.error(f"Architecture: Layer ({layer.id}) contains a Component "
                              f"(ID: {comp.id}, index: {i}) whose feature at "
                              f"{feature.location} exists outside of the params "
                              f"({self.x_span}, {self.y_span}).")

        for i, conn in enumerate(layer.connections):
            for j, seg in enumerate(conn.segments):
                for label, point in (("sourcePoint", seg.source_point),
                                     ("sinkPoint", seg.sink_point)):
                    if point is None or self.validate_location(point):
                        continue
                    valid = False
                    if log is not None:
                        log.error(f"Architecture: Layer ({layer.id}) contains a Connection "
                                  f"(ID: {conn.id}, index: {i}) whose {label} "
                                  f"(segment index: {j}) at {point} exists outside of "
                                  f"the params ({self.x_span}, {self.y_span}).")
        return valid

    def validate_location(self, location: Coord, x_span: int = 0, y_span: int = 0) -> bool:
        """True when ``location + span`` does not exceed the architecture bounds."""
        try:
            return (location.x + x_span <= self.x_span
                    and location.y + y_span <= self.y_span)
        except TypeError:
            # Non-numeric fields; the owning entity reports them.
            return False
