"""Parchmint — parse and validate microfluidic device layouts.

Stages:

  parsing   JSON document → cross-referenced object graph (ParchmintParser)
  model     the graph itself; every entity validates itself into a Log
  report    parse + validate in one call (check_document / check_file)
  render    hand geometry to an external canvas (render_layer)

Usage:
    report = check_document(json_text)
    if not report.valid:
        print(report.log)
"""

import logging

from .errors import ParchmintError, DocumentReadError
from .log import Log, Message, Severity
from .model import (
    Architecture, Component, ComponentFeature, Connection, ConnectionSegment,
    Coord, Layer, ParchKey, Port, Terminal,
)
from .parsing import ParchmintParser
from .report import ValidationReport, check_document, check_file

__all__ = [
    # Diagnostics
    "Log", "Message", "Severity", "ParchmintError", "DocumentReadError",
    # Model
    "Architecture", "Component", "ComponentFeature", "Connection",
    "ConnectionSegment", "Coord", "Layer", "ParchKey", "Port", "Terminal",
    # Parsing / Reporting
    "ParchmintParser", "ValidationReport", "check_document", "check_file",
]

# Diagnostics are returned in a Log; hosts opt in to seeing them via logging.
logging.getLogger("parchmint").addHandler(logging.NullHandler())
