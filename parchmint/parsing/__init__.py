"""Parchmint parsing — raw document schema and the multi-pass parser."""

from .schema import (
    ParchmintDocument, RawComponent, RawComponentFeature, RawConnection,
    RawConnectionFeature, RawLayer, RawPoint, RawPort, RawTerminal,
)
from .parser import ParchmintParser

__all__ = [
    # Schema
    "ParchmintDocument", "RawComponent", "RawComponentFeature", "RawConnection",
    "RawConnectionFeature", "RawLayer", "RawPoint", "RawPort", "RawTerminal",
    # Parser
    "ParchmintParser",
]
