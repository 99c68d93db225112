"""Shared contracts: enums, errors and the normalized server model.

Leaf package with no imports from servergen.core.
"""

from servergen.contracts.enums import AdminPropagation, NodeKind
from servergen.contracts.errors import (
    ConfigShapeError,
    DocumentLoadError,
    GraphDocumentError,
    MissingEntryError,
    ServerGenError,
)
from servergen.contracts.model import (
    AdminAuthFeature,
    AuthFeature,
    CorsFeature,
    LoggingFeature,
    NormalizedModel,
    RouteRecord,
)

__all__ = [
    "AdminAuthFeature",
    "AdminPropagation",
    "AuthFeature",
    "ConfigShapeError",
    "CorsFeature",
    "DocumentLoadError",
    "GraphDocumentError",
    "LoggingFeature",
    "MissingEntryError",
    "NodeKind",
    "NormalizedModel",
    "RouteRecord",
    "ServerGenError",
]
