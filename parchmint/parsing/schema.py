"""Raw Parchmint document shape — pydantic models for the JSON input.

Only ``name`` and ``layers`` are required.  Every other field falls back to
its sentinel so that a missing value reaches the object graph as "unset"
and is reported by validation rather than rejected here.  Coordinates
and spans accept any number for the same reason: a fractional value is a
field-level problem, not a malformed document.

``features`` mixes two kinds of entries.  The kind is decided once, from
the shape of each entry, and stored in the ``kind`` tag:

  component   carries ``x-span`` / ``y-span`` (a placement)
  connection  anything else (a routed segment with source/sink points)
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from parchmint.model.validation import (
    DEFAULT_COORD_VALUE, DEFAULT_DIM_VALUE,
    DEFAULT_SPAN_VALUE, DEFAULT_STR_VALUE,
)


class _RawModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RawPoint(_RawModel):
    x: int | float = DEFAULT_COORD_VALUE
    y: int | float = DEFAULT_COORD_VALUE


class RawLayer(_RawModel):
    id: str = DEFAULT_STR_VALUE
    name: str = DEFAULT_STR_VALUE


class RawPort(_RawModel):
    label: str = DEFAULT_STR_VALUE
    layer: str = DEFAULT_STR_VALUE
    x: int | float = DEFAULT_COORD_VALUE
    y: int | float = DEFAULT_COORD_VALUE


class RawComponent(_RawModel):
    id: str = DEFAULT_STR_VALUE
    name: str = DEFAULT_STR_VALUE
    layers: list[str] = Field(default_factory=list)
    x_span: int | float = Field(DEFAULT_SPAN_VALUE, alias="x-span")
    y_span: int | float = Field(DEFAULT_SPAN_VALUE, alias="y-span")
    entity: str = DEFAULT_STR_VALUE
    ports: list[RawPort] = Field(default_factory=list)


class RawTerminal(_RawModel):
    component: str = DEFAULT_STR_VALUE
    port: str = DEFAULT_STR_VALUE


class RawConnection(_RawModel):
    id: str = DEFAULT_STR_VALUE
    name: str = DEFAULT_STR_VALUE
    layer: str = DEFAULT_STR_VALUE
    source: RawTerminal | None = None
    sinks: list[RawTerminal] = Field(default_factory=list)


class RawComponentFeature(_RawModel):
    kind: Literal["component"] = "component"
    id: str = DEFAULT_STR_VALUE
    name: str = DEFAULT_STR_VALUE
    layer: str = DEFAULT_STR_VALUE
    location: RawPoint | None = None
    x_span: int | float = Field(DEFAULT_SPAN_VALUE, alias="x-span")
    y_span: int | float = Field(DEFAULT_SPAN_VALUE, alias="y-span")
    depth: float = DEFAULT_DIM_VALUE


class RawConnectionFeature(_RawModel):
    kind: Literal["connection"] = "connection"
    id: str = DEFAULT_STR_VALUE
    name: str = DEFAULT_STR_VALUE
    connection: str = DEFAULT_STR_VALUE
    layer: str = DEFAULT_STR_VALUE
    width: float = DEFAULT_DIM_VALUE
    depth: float = DEFAULT_DIM_VALUE
    source: RawPoint | None = None
    sink: RawPoint | None = None


def feature_kind(value: Any) -> str:
    """Classify a ``features`` entry by shape: spans mean a component placement."""
    if isinstance(value, dict):
        return "component" if ("x-span" in value or "y-span" in value) else "connection"
    return getattr(value, "kind", "connection")


RawFeature = Annotated[
    Union[
        Annotated[RawComponentFeature, Tag("component")],
        Annotated[RawConnectionFeature, Tag("connection")],
    ],
    Discriminator(feature_kind),
]


class ParchmintDocument(_RawModel):
    name: str
    layers: list[RawLayer]
    components: list[RawComponent] = Field(default_factory=list)
    connections: list[RawConnection] = Field(default_factory=list)
    features: list[RawFeature] = Field(default_factory=list)
    x_span: int | float = Field(DEFAULT_SPAN_VALUE, alias="x-span")
    y_span: int | float = Field(DEFAULT_SPAN_VALUE, alias="y-span")

    @property
    def component_features(self) -> list[RawComponentFeature]:
        return [f for f in self.features if f.kind == "component"]

    @property
    def connection_features(self) -> list[RawConnectionFeature]:
        return [f for f in self.features if f.kind == "connection"]
