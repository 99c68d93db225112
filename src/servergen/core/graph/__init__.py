# src/servergen/core/graph/__init__.py
"""Graph model for server descriptions: node records and the id-indexed arena."""

from servergen.core.graph.graph import ServerGraph, as_graph_nodes
from servergen.core.graph.models import (
    GraphNode,
    GraphWarning,
    NodeId,
    is_truthy,
)

__all__ = [
    "GraphNode",
    "GraphWarning",
    "NodeId",
    "ServerGraph",
    "as_graph_nodes",
    "is_truthy",
]
