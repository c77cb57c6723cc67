"""Connections (nets), their resolved terminals, and routed segments."""

from __future__ import annotations

from dataclasses import dataclass, field

from shapely.geometry import LineString

from parchmint.log import Log

from .component import Component, Port
from .coord import Coord
from .keys import validate_key
from .validation import (
    DEFAULT_CON_TYPE, DEFAULT_DIM_VALUE, DEFAULT_STR_VALUE,
    check_dimension_value, check_string_value, is_valid,
)


@dataclass
class ConnectionSegment:
    """One straight piece of a routed channel.

    The only geometric rule enforced is that the two end points differ;
    no axis-alignment is required.
    """

    name: str = DEFAULT_STR_VALUE
    id: str = DEFAULT_STR_VALUE
    width: float = DEFAULT_DIM_VALUE
    depth: float = DEFAULT_DIM_VALUE
    source_point: Coord | None = None
    sink_point: Coord | None = None
    connection_type: str = DEFAULT_CON_TYPE

    def validate(self, log: Log | None = None) -> bool:
        caller = "Connection Segment"
        valid = validate_key(self, caller, log)
        valid = is_valid(check_dimension_value(self.width, "width", caller, log)) and valid
        valid = is_valid(check_dimension_value(self.depth, "depth", caller, log)) and valid
        valid = self.validate_points(log) and valid

        if self.connection_type != DEFAULT_CON_TYPE:
            valid = False
            if log is not None:
                log.error(f'{caller} ({self.id}): Field "connectionType" must be '
                          f'"{DEFAULT_CON_TYPE}", but it is "{self.connection_type}".')
        return valid

    def validate_points(self, log: Log | None = None) -> bool:
        caller = "Connection Segment"
        valid = True
        for field_name, point in (("sourcePoint", self.source_point),
                                  ("sinkPoint", self.sink_point)):
            if point is None or not point.validate(log, caller=caller):
                valid = False
                if log is not None:
                    log.error(f'{caller} ({self.id}): Field "{field_name}" is invalid.')

        if not valid:
            return False

        if self.source_point == self.sink_point:
            if log is not None:
                log.error(f'{caller} ({self.id}): Fields "sourcePoint" and "sinkPoint" '
                          f'cannot both be {self.source_point}.')
            return False
        return True

    @property
    def line(self) -> LineString:
        """Draw primitive: the centre line from source to sink."""
        return LineString([self.source_point.as_tuple(), self.sink_point.as_tuple()])

    @property
    def stroke_width(self) -> float:
        return self.width


@dataclass
class Terminal:
    """A resolved (component, port) pair.

    Port membership in the component is not re-checked here; the parser only
    ever pairs a port with the component it was found on, and the owning
    layer checks that the component belongs to it.
    """

    component: Component | None = None
    port: Port | None = None

    def validate(self, log: Log | None = None) -> bool:
        valid = True
        if self.component is None or not self.component.validate(log):
            valid = False
            if log is not None:
                log.error('Terminal: Field "component" is invalid.')
        if self.port is None or not self.port.validate(log):
            valid = False
            if log is not None:
                log.error('Terminal: Field "port" is invalid.')
        return valid


@dataclass
class Connection:
    name: str = DEFAULT_STR_VALUE
    id: str = DEFAULT_STR_VALUE
    layer: str = DEFAULT_STR_VALUE
    source: Terminal | None = None
    sinks: list[Terminal] = field(default_factory=list)
    segments: list[ConnectionSegment] = field(default_factory=list)

    def validate(self, log: Log | None = None) -> bool:
        valid = validate_key(self, "Connection", log)
        valid = is_valid(check_string_value(self.layer, "layer", "Connection", log)) and valid
        valid = self.validate_source(log) and valid
        valid = self.validate_sinks(log) and valid
        valid = self.validate_segments(log) and valid
        return valid

    def validate_source(self, log: Log | None = None) -> bool:
        if self.source is None or not self.source.validate(log):
            if log is not None:
                log.error(f'Connection ({self.id}): Field "source" is invalid.')
            return False
        return True

    def validate_sinks(self, log: Log | None = None) -> bool:
        if not self.sinks:
            if log is not None:
                log.error(f'Connection ({self.id}): Field "sinks" cannot be empty.')
            return False

        valid = True
        for i, sink in enumerate(self.sinks):
            if sink is None or not sink.validate(log):
                valid = False
                if log is not None:
                    log.error(f'Connection ({self.id}): Field "sinks" contains an '
                              f'invalid Terminal at index {i}.')
        return valid

    def validate_segments(self, log: Log | None = None) -> bool:
        if not self.segments:
            if log is not None:
                log.warning(f'Connection ({self.id}): Field "segments" is empty; '
                            f'the connection is not routed.')
            return True

        valid = True
        for i, segment in enumerate(self.segments):
            if not segment.validate(log):
                valid = False
                if log is not None:
                    log.error(f'Connection ({self.id}): Field "segments" contains an '
                              f'invalid Connection Segment at index {i}.')
        return valid
