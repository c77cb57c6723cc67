"""Components, their ports, and their per-layer placement features."""

from __future__ import annotations

from dataclasses import dataclass, field

from shapely.geometry import Polygon, box

from parchmint.log import Log

from .coord import Coord
from .keys import validate_key
from .validation import (
    DEFAULT_DIM_VALUE, DEFAULT_SPAN_VALUE, DEFAULT_STR_VALUE,
    check_dimension_value, check_span_value, check_string_value, is_valid,
)


@dataclass
class Port:
    """A labeled attachment point on a component's boundary.

    ``pos`` is relative to the owning component's origin.  Whether it
    actually lies on the boundary is checked by ``Component.validate``,
    since only the component knows its spans.
    """

    label: str = DEFAULT_STR_VALUE
    pos: Coord = field(default_factory=Coord)
    layer: str = DEFAULT_STR_VALUE

    def validate(self, log: Log | None = None) -> bool:
        label_ok = is_valid(check_string_value(self.label, "label", "Port", log))
        pos_ok = self.pos is not None and self.pos.validate(log, caller="Port")
        if not pos_ok and log is not None:
            log.error(f'Port: Field "pos" of port "{self.label}" is invalid.')
        return label_ok and pos_ok


@dataclass
class ComponentFeature:
    """Placement of one component instance on one layer."""

    name: str = DEFAULT_STR_VALUE
    layer_id: str = DEFAULT_STR_VALUE
    x_span: int = DEFAULT_SPAN_VALUE
    y_span: int = DEFAULT_SPAN_VALUE
    location: Coord | None = None
    depth: float = DEFAULT_DIM_VALUE

    def validate(self, log: Log | None = None) -> bool:
        caller = "Component Feature"
        valid = is_valid(check_string_value(self.name, "name", caller, log))
        valid = is_valid(check_string_value(self.layer_id, "layer", caller, log)) and valid
        valid = is_valid(check_span_value(self.x_span, "xSpan", caller, log)) and valid
        valid = is_valid(check_span_value(self.y_span, "ySpan", caller, log)) and valid

        if self.location is None or not self.location.validate(log, caller=caller):
            valid = False
            if log is not None:
                log.error(f'{caller}: Field "location" is invalid.')

        valid = is_valid(check_dimension_value(self.depth, "depth", caller, log)) and valid
        return valid

    @property
    def bounding_box(self) -> Polygon:
        """Draw primitive: top-left at ``location``, size x_span × y_span."""
        x, y = self.location.x, self.location.y
        return box(x, y, x + self.x_span, y + self.y_span)


@dataclass
class Component:
    name: str = DEFAULT_STR_VALUE
    id: str = DEFAULT_STR_VALUE
    x_span: int = DEFAULT_SPAN_VALUE
    y_span: int = DEFAULT_SPAN_VALUE
    entity: str = DEFAULT_STR_VALUE
    ports: list[Port] = field(default_factory=list)
    feature: ComponentFeature | None = None

    def validate(self, log: Log | None = None) -> bool:
        """Validate every field; all failures are reported, none short-circuit."""
        valid = validate_key(self, "Component", log)
        valid = is_valid(check_span_value(self.x_span, "xSpan", "Component", log)) and valid
        valid = is_valid(check_span_value(self.y_span, "ySpan", "Component", log)) and valid
        valid = is_valid(check_string_value(self.entity, "entity", "Component", log)) and valid
        valid = self.validate_ports(log) and valid
        valid = self.validate_feature(log) and valid
        return valid

    def validate_ports(self, log: Log | None = None) -> bool:
        if not self.ports:
            if log is not None:
                log.error(f'Component ({self.id}): Field "ports" cannot be empty.')
            return False

        valid = True
        for i, port in enumerate(self.ports):
            if not port.validate(log):
                valid = False
                if log is not None:
                    log.error(f'Component ({self.id}): Field "ports" contains an '
                              f'invalid Port at index {i}.')

            for j in range(i + 1, len(self.ports)):
                other = self.ports[j]
                if port.label == other.label:
                    valid = False
                    if log is not None:
                        log.error(f'Component ({self.id}): Field "ports" has duplicate '
                                  f'labels ({port.label}) at indices {i} and {j}.')
                if port.pos == other.pos:
                    valid = False
                    if log is not None:
                        log.error(f'Component ({self.id}): Field "ports" has overlapping '
                                  f'ports at location {port.pos} at indices {i} and {j}.')

        spans_ok = (is_valid(check_span_value(self.x_span, "xSpan", "Component"))
                    and is_valid(check_span_value(self.y_span, "ySpan", "Component")))
        if spans_ok:
            for i, port in enumerate(self.ports):
                if not self._port_on_boundary(port, i, log):
                    valid = False

        return valid

    def _port_on_boundary(self, port: Port, index: int, log: Log | None) -> bool:
        pos = port.pos
        if pos is None or not pos.validate():
            # Already reported by Port.validate.
            return False
        if pos.x > self.x_span or pos.y > self.y_span:
            if log is not None:
                log.error(f'Component ({self.id}): Field "ports" contains a port that '
                          f'exists outside of the component at {pos} at index {index}.')
            return False
        if pos.x in (0, self.x_span) or pos.y in (0, self.y_span):
            return True
        if log is not None:
            log.error(f'Component ({self.id}): Field "ports" contains a port that is '
                      f'not on an edge at {pos} at index {index}.')
        return False

    def validate_feature(self, log: Log | None = None) -> bool:
        if self.feature is None:
            if log is not None:
                log.warning(f'Component ({self.id}): Field "feature" is not set; '
                            f'the component has no placement.')
            return True

        valid = self.feature.validate(log)
        if self.feature.name != self.name:
            valid = False
            if log is not None:
                log.error(f'Component ({self.id}): Feature name "{self.feature.name}" '
                          f'does not match component name "{self.name}".')
        if self.feature.x_span != self.x_span or self.feature.y_span != self.y_span:
            valid = False
            if log is not None:
                log.error(f'Component ({self.id}): Feature spans '
                          f'({self.feature.x_span}, {self.feature.y_span}) do not match '
                          f'component spans ({self.x_span}, {self.y_span}).')
        return valid
