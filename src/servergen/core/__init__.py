# src/servergen/core/__init__.py
"""Core infrastructure: Graph, Validation, Resolution, Emission, Configuration, Logging."""

from servergen.core.config import (
    DEFAULT_OUTPUT,
    DEFAULT_PORT,
    GeneratorSettings,
    load_settings,
)
from servergen.core.document import load_document, parse_nodes
from servergen.core.emitter import emit, route_message
from servergen.core.graph import GraphNode, GraphWarning, ServerGraph
from servergen.core.logging import configure_logging, get_logger
from servergen.core.resolver import resolve
from servergen.core.validation import validate_document

__all__ = [
    "DEFAULT_OUTPUT",
    "DEFAULT_PORT",
    "GeneratorSettings",
    "GraphNode",
    "GraphWarning",
    "ServerGraph",
    "configure_logging",
    "emit",
    "get_logger",
    "load_document",
    "load_settings",
    "parse_nodes",
    "resolve",
    "route_message",
    "validate_document",
]
