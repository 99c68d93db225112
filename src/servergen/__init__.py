"""
servergen: generate Express servers from declarative graph descriptions.

The pipeline validates a graph document, resolves its middleware and
route nodes into a normalized model, and emits server source text.
"""

__version__ = "0.1.0"

from servergen.contracts import ConfigShapeError, MissingEntryError, NormalizedModel, RouteRecord
from servergen.core import emit, load_document, resolve, validate_document
from servergen.pipeline import generate_server, generate_source

__all__ = [
    "ConfigShapeError",
    "MissingEntryError",
    "NormalizedModel",
    "RouteRecord",
    "__version__",
    "emit",
    "generate_server",
    "generate_source",
    "load_document",
    "resolve",
    "validate_document",
]
