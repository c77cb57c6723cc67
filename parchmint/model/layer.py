"""Layer — one fabrication plane and the entities placed on it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from parchmint.log import Log

from .component import Component
from .connection import Connection, Terminal
from .keys import validate_key
from .validation import DEFAULT_STR_VALUE, check_id_uniqueness

if TYPE_CHECKING:
    from parchmint.render import Canvas, RenderConfig


@dataclass
class Layer:
    name: str = DEFAULT_STR_VALUE
    id: str = DEFAULT_STR_VALUE
    components: list[Component] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)

    def validate(self, log: Log | None = None) -> bool:
        valid = validate_key(self, "Layer", log)

        if log is not None:
            if not self.components and not self.connections:
                log.warning(f"Layer ({self.id}): has no components and no connections.")
            elif not self.components:
                log.warning(f"Layer ({self.id}): has no components.")
            elif not self.connections:
                log.warning(f"Layer ({self.id}): has no connections.")

        for i, comp in enumerate(self.components):
            if not comp.validate(log):
                valid = False
                if log is not None:
                    log.error(f'Layer ({self.id}): Field "components" contains an invalid '
                              f'Component (ID: {comp.id}, index: {i}).')

        for i, conn in enumerate(self.connections):
            if not conn.validate(log):
                valid = False
                if log is not None:
                    log.error(f'Layer ({self.id}): Field "connections" contains an invalid '
                              f'Connection (ID: {conn.id}, index: {i}).')

        valid = check_id_uniqueness(self.components, "components", f"Layer ({self.id})", log) and valid
        valid = check_id_uniqueness(self.connections, "connections", f"Layer ({self.id})", log) and valid
        valid = self.validate_containment(log) and valid
        return valid

    def validate_containment(self, log: Log | None = None) -> bool:
        """Every terminal's component must be one of this layer's components."""
        valid = True
        for i, conn in enumerate(self.connections):
            terminals = [("source", conn.source)] + [
                (f"sinks[{j}]", sink) for j, sink in enumerate(conn.sinks)
            ]
            for where, term in terminals:
                if not self._contains(term):
                    valid = False
                    if log is not None:
                        log.error(f"Layer ({self.id}): Connection (ID: {conn.id}, index: {i}) "
                                  f"{where} references Component ({term.component.id}) "
                                  f"which is not on this layer.")
        return valid

    def _contains(self, term: Terminal | None) -> bool:
        # Unresolved terminals fail their own validation instead.
        if term is None or term.component is None:
            return True
        return any(comp is term.component for comp in self.components)

    def render(self, canvas: Canvas, config: RenderConfig | None = None) -> Canvas:
        """Draw connections first, then components on top of them."""
        for conn in self.connections:
            for segment in conn.segments:
                if segment.source_point is None or segment.sink_point is None:
                    continue
                canvas.draw_line(segment.line, segment.stroke_width, config)
        for comp in self.components:
            if comp.feature is not None and comp.feature.location is not None:
                canvas.draw_box(comp.feature.bounding_box, config)
        return canvas
