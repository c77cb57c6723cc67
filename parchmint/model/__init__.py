"""Parchmint object graph — dataclasses with self-validation.

Submodules:
  validation    Tri-state field checks and sentinel defaults.
  keys          ParchKey identity protocol.
  coord         2-D positions.
  component     Port, ComponentFeature, Component.
  connection    ConnectionSegment, Terminal, Connection.
  layer         Layer (containment rules, draw order).
  architecture  Architecture (bounds checks).
"""

from .validation import (
    CheckResult,
    DEFAULT_STR_VALUE, DEFAULT_SPAN_VALUE, DEFAULT_COORD_VALUE,
    DEFAULT_DIM_VALUE, DEFAULT_CON_TYPE,
)
from .keys import ParchKey
from .coord import Coord
from .component import Port, ComponentFeature, Component
from .connection import ConnectionSegment, Terminal, Connection
from .layer import Layer
from .architecture import Architecture

__all__ = [
    # Validation
    "CheckResult",
    "DEFAULT_STR_VALUE", "DEFAULT_SPAN_VALUE", "DEFAULT_COORD_VALUE",
    "DEFAULT_DIM_VALUE", "DEFAULT_CON_TYPE",
    # Entities
    "ParchKey", "Coord", "Port", "ComponentFeature", "Component",
    "ConnectionSegment", "Terminal", "Connection", "Layer", "Architecture",
]
