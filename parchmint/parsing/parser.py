"""Parchmint parser — resolve a raw document into a cross-referenced graph.

A parser is single-use: construct it over one document, call ``parse()``
once, then read ``architecture``, ``valid`` and ``log``.

Stages, in order (each reads only what earlier stages produced):

  layers               skeleton Layer(name, id) per entry
  component features   placements keyed "<component id>_<layer id>"
  components + ports   one Component per declared layer
  connection features  segments grouped by connection id
  connections          terminals resolved to live Component/Port objects
  assembly             layers filled in and wrapped in an Architecture

``valid`` starts True and only ever latches to False.  It records problems
found while resolving references; ``Architecture.validate()`` is the
separate structural/geometric check and both must pass.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from parchmint.log import Log
from parchmint.model import (
    Architecture, Component, ComponentFeature, Connection, ConnectionSegment,
    Coord, Layer, Port, Terminal,
)

from .schema import (
    ParchmintDocument, RawComponent, RawComponentFeature, RawConnection,
    RawConnectionFeature, RawPoint, RawTerminal,
)

log = logging.getLogger(__name__)


def _add_to_map(mapping: dict[str, list], key: str, value: Any) -> None:
    mapping.setdefault(key, []).append(value)


def _coord(point: RawPoint | None) -> Coord | None:
    if point is None:
        return None
    return Coord(point.x, point.y)


class ParchmintParser:
    """Multi-pass resolver from a Parchmint document to an ``Architecture``."""

    def __init__(self, document: str | bytes | dict, log: Log | None = None) -> None:
        if not isinstance(document, (str, bytes, bytearray, dict)):
            raise TypeError(
                f"Parchmint document must be str, bytes or dict, got {type(document).__name__}"
            )
        self.document = document
        self.log = log if log is not None else Log()
        self.valid = True

        self.architecture: Architecture | None = None
        self.layers: list[Layer] = []
        self.component_features: dict[str, ComponentFeature] = {}
        self.components: dict[str, list[Component]] = {}
        # Inspection only: terminals resolve through each component's own ports.
        self.ports: dict[str, list[Port]] = {}
        self.connection_features: dict[str, list[ConnectionSegment]] = {}
        self.connections: dict[str, list[Connection]] = {}

        # Furthest x/y reached by any placed component or segment end point.
        self.max_x = 0
        self.max_y = 0

    # ── Public API ─────────────────────────────────────────────────

    def parse(self) -> Architecture | None:
        """Run every stage.  Returns None if the document itself is unusable."""
        doc = self._load()
        if doc is None:
            return None

        self.parse_layers(doc)
        self.parse_component_features(doc)
        self.parse_components(doc)
        self.parse_connection_features(doc)
        self.parse_connections(doc)
        self.architecture = self.assemble(doc)

        log.debug("Parsed '%s': %d layers, parser valid=%s",
                  doc.name, len(self.layers), self.valid)
        return self.architecture

    @property
    def extent(self) -> tuple[int, int]:
        return (self.max_x, self.max_y)

    def invalidate(self, text: str, *extra_lines: str) -> None:
        """Latch the parser invalid and record why."""
        self.valid = False
        self.log.error(f"Parser: {text}", *extra_lines)

    # ── Stage 0: decode + schema ───────────────────────────────────

    def _load(self) -> ParchmintDocument | None:
        data = self.document
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as exc:
                self.invalidate(f"Document is not valid JSON ({exc}). Aborting.")
                return None

        try:
            return ParchmintDocument.model_validate(data)
        except ValidationError as exc:
            lines = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in exc.errors()
            ]
            self.invalidate("Document does not match the Parchmint schema. Aborting.", *lines)
            return None

    # ── Stage 1: layers ────────────────────────────────────────────

    def parse_layers(self, doc: ParchmintDocument) -> None:
        seen: set[str] = set()
        for i, raw in enumerate(doc.layers):
            if raw.id in seen:
                self.invalidate(f'Duplicate Layer ID ({raw.id}). Skipping Layer with name '
                                f'"{raw.name}" at index {i}.')
                continue
            seen.add(raw.id)
            self.layers.append(Layer(name=raw.name, id=raw.id))

    # ── Stage 2: component features ────────────────────────────────

    def parse_component_features(self, doc: ParchmintDocument) -> None:
        for i, raw in enumerate(doc.component_features):
            key = f"{raw.id}_{raw.layer}"
            if key in self.component_features:
                # First one wins.
                self.invalidate(f"Duplicate Component Feature ({raw.id}) on Layer ({raw.layer}). "
                                f'Skipping Component Feature with name "{raw.name}" at index {i}.')
            else:
                self.component_features[key] = self.parse_component_feature(raw)
            self._grow_extent(raw.location, raw.x_span, raw.y_span)

    @staticmethod
    def parse_component_feature(raw: RawComponentFeature) -> ComponentFeature:
        return ComponentFeature(
            name=raw.name,
            layer_id=raw.layer,
            x_span=raw.x_span,
            y_span=raw.y_span,
            location=_coord(raw.location),
            depth=raw.depth,
        )

    # ── Stages 3 + 4: components and ports ─────────────────────────

    def parse_components(self, doc: ParchmintDocument) -> None:
        for i, raw in enumerate(doc.components):
            ports = self.parse_ports(raw)

            for layer_id in ports:
                if layer_id not in raw.layers:
                    self.log.warning(f'Parser: Component "{raw.id}" has a Port on Layer '
                                     f'({layer_id}) that is not in its layer list.')

            for layer_id in raw.layers:
                layer_ports = ports.get(layer_id, [])
                if not layer_ports:
                    self.log.warning(f'Parser: Component "{raw.id}" exists on Layer '
                                     f'({layer_id}) but has no Ports on that layer.')

                existing = self.components.get(layer_id, [])
                if any(c.id == raw.id for c in existing):
                    # Kept anyway; Layer.validate reports the collision too.
                    self.invalidate(f"Duplicate Component ID ({raw.id}) on Layer ({layer_id}) "
                                    f'for Component with name "{raw.name}" at index {i}.')

                comp = Component(
                    name=raw.name,
                    id=raw.id,
                    x_span=raw.x_span,
                    y_span=raw.y_span,
                    entity=raw.entity,
                    ports=layer_ports,
                    feature=self.component_features.get(f"{raw.id}_{layer_id}"),
                )
                _add_to_map(self.components, layer_id, comp)

    def parse_ports(self, raw: RawComponent) -> dict[str, list[Port]]:
        """Parse one component's ports, grouped by layer id."""
        by_layer: dict[str, list[Port]] = {}
        labels: set[str] = set()
        for p in raw.ports:
            if p.label in labels:
                self.invalidate(f'Duplicate Port label ({p.label}) on Component "{raw.id}".')
            labels.add(p.label)

            port = Port(label=p.label, pos=Coord(p.x, p.y), layer=p.layer)
            _add_to_map(by_layer, p.layer, port)
            _add_to_map(self.ports, p.layer, port)
        return by_layer

    # ── Stage 5: connection features ───────────────────────────────

    def parse_connection_features(self, doc: ParchmintDocument) -> None:
        seen: set[str] = set()
        for i, raw in enumerate(doc.connection_features):
            if raw.id in seen:
                # Kept anyway, unlike component features.
                self.invalidate(f"Duplicate Connection Feature ID ({raw.id}) for Connection "
                                f'({raw.connection}) with name "{raw.name}" at index {i}.')
            seen.add(raw.id)
            _add_to_map(self.connection_features, raw.connection,
                        self.parse_connection_feature(raw))
            self._grow_extent(raw.source)
            self._grow_extent(raw.sink)

    @staticmethod
    def parse_connection_feature(raw: RawConnectionFeature) -> ConnectionSegment:
        # The document's "type" is not read; every routed segment is a channel.
        return ConnectionSegment(
            name=raw.name,
            id=raw.id,
            width=raw.width,
            depth=raw.depth,
            source_point=_coord(raw.source),
            sink_point=_coord(raw.sink),
        )

    # ── Stage 6: connections ───────────────────────────────────────

    def parse_connections(self, doc: ParchmintDocument) -> None:
        known = {raw.id for raw in doc.connections}
        for conn_id in self.connection_features:
            if conn_id not in known:
                self.log.warning(f"Parser: Connection Features reference an unknown "
                                 f"Connection ({conn_id}).")

        for i, raw in enumerate(doc.connections):
            existing = self.connections.get(raw.layer, [])
            if any(c.id == raw.id for c in existing):
                self.invalidate(f"Duplicate Connection ID ({raw.id}) on Layer ({raw.layer}) "
                                f'for Connection with name "{raw.name}" at index {i}.')
            _add_to_map(self.connections, raw.layer, self.parse_connection(raw))

    def parse_connection(self, raw: RawConnection) -> Connection:
        source = self.parse_terminal(raw.source, raw.layer) if raw.source else None
        if source is None:
            self.invalidate(f"Connection ({raw.id}) has no source.")
        return Connection(
            name=raw.name,
            id=raw.id,
            layer=raw.layer,
            source=source,
            sinks=[self.parse_terminal(t, raw.layer) for t in raw.sinks],
            segments=self.connection_features.get(raw.id, []),
        )

    def parse_terminal(self, raw: RawTerminal, layer_id: str) -> Terminal:
        """Resolve (component id, port label) on one layer to live objects."""
        candidates = self.components.get(layer_id)
        if candidates is None:
            self.invalidate(f'No Components exist on Layer "{layer_id}"; cannot resolve '
                            f'Component "{raw.component}".')
            return Terminal()

        comp = next((c for c in candidates if c.id == raw.component), None)
        if comp is None:
            self.invalidate(f'Unable to find Component "{raw.component}" on Layer '
                            f'"{layer_id}". Using an empty Terminal.')
            return Terminal()

        port = next((p for p in comp.ports if p.label == raw.port), None)
        if port is None:
            self.invalidate(f'Unable to find Port "{raw.port}" on Component '
                            f'"{raw.component}". Using a Terminal with no Port.')
            return Terminal(component=comp)
        return Terminal(component=comp, port=port)

    # ── Stage 7: assembly ──────────────────────────────────────────

    def assemble(self, doc: ParchmintDocument) -> Architecture:
        layer_ids = {layer.id for layer in self.layers}
        for kind, mapping in (("Components", self.components),
                              ("Connections", self.connections)):
            for layer_id in mapping:
                if layer_id not in layer_ids:
                    self.invalidate(f"The {kind} list references an unknown Layer ({layer_id}).")

        for layer in self.layers:
            layer.components = self.components.get(layer.id, [])
            layer.connections = self.connections.get(layer.id, [])

        return Architecture(
            name=doc.name,
            layers=self.layers,
            x_span=doc.x_span,
            y_span=doc.y_span,
        )

    # ── Helpers ────────────────────────────────────────────────────

    def _grow_extent(self, point: RawPoint | None, x_span: int = 0, y_span: int = 0) -> None:
        if point is None:
            return
        self.max_x = max(self.max_x, point.x + max(x_span, 0))
        self.max_y = max(self.max_y, point.y + max(y_span, 0))
