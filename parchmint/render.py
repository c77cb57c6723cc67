"""Drawing surface for the validated graph.

The graph never draws itself onto a real image.  ``Layer.render`` walks its
connections and components and hands shapely geometry to a ``Canvas``; the
host supplies the canvas (an SVG writer, a plotting backend, ...) and a
``RenderConfig``.  ``GeometryCanvas`` is the in-memory canvas: it records
what was drawn, in order, and reports the union of everything drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from shapely.geometry import LineString, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from parchmint.model import Layer
from parchmint.model.validation import DEFAULT_SPAN_VALUE


@dataclass(frozen=True)
class RenderConfig:
    """Drawing options.

    ``max_x``/``max_y`` fix the canvas size; left at the sentinel, the
    canvas is sized from the document instead.
    """

    color: str = "black"
    """Stroke/fill color for every primitive."""

    max_x: int = DEFAULT_SPAN_VALUE
    max_y: int = DEFAULT_SPAN_VALUE

    margin: int = 0
    """Extra room added around a canvas sized from the document."""

    def canvas_size(self, fallback: tuple[int, int]) -> tuple[int, int]:
        width = self.max_x if self.max_x != DEFAULT_SPAN_VALUE else fallback[0] + self.margin
        height = self.max_y if self.max_y != DEFAULT_SPAN_VALUE else fallback[1] + self.margin
        return width, height


DEFAULT_RENDER_CONFIG = RenderConfig()


class Canvas(Protocol):
    def draw_line(self, line: LineString, width: float,
                  config: RenderConfig | None = None) -> None: ...

    def draw_box(self, box: Polygon, config: RenderConfig | None = None) -> None: ...


@dataclass
class DrawnItem:
    kind: str                  # "line" | "box"
    geometry: BaseGeometry
    color: str
    stroke_width: float | None = None

    @property
    def area(self) -> BaseGeometry:
        """Footprint on the canvas (lines are buffered by half their width)."""
        if self.kind == "line" and self.stroke_width:
            return self.geometry.buffer(self.stroke_width / 2, cap_style="flat")
        return self.geometry


@dataclass
class GeometryCanvas:
    width: int
    height: int
    items: list[DrawnItem] = field(default_factory=list)

    def draw_line(self, line: LineString, width: float,
                  config: RenderConfig | None = None) -> None:
        config = config or DEFAULT_RENDER_CONFIG
        self.items.append(DrawnItem("line", line, config.color, width))

    def draw_box(self, box: Polygon, config: RenderConfig | None = None) -> None:
        config = config or DEFAULT_RENDER_CONFIG
        self.items.append(DrawnItem("box", box, config.color))

    @property
    def kinds(self) -> list[str]:
        return [item.kind for item in self.items]

    def footprint(self) -> BaseGeometry:
        return unary_union([item.area for item in self.items])

    def overflows(self) -> bool:
        """True if anything drawn extends past (width, height)."""
        if not self.items:
            return False
        min_x, min_y, max_x, max_y = self.footprint().bounds
        return min_x < 0 or min_y < 0 or max_x > self.width or max_y > self.height


def render_layer(
    layer: Layer,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
    fallback: tuple[int, int] = (0, 0),
) -> GeometryCanvas:
    """Draw one layer onto a fresh ``GeometryCanvas``.

    ``fallback`` is used for any canvas dimension the config leaves unset,
    typically the architecture spans or the parser's ``extent``.
    """
    width, height = config.canvas_size(fallback)
    canvas = GeometryCanvas(width=width, height=height)
    layer.render(canvas, config)
    return canvas
