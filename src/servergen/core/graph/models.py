# src/servergen/core/graph/models.py
"""Node and warning types for the server graph.

Leaf module: no intra-package imports beyond contracts.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from servergen.contracts.enums import NodeKind

# Ids are compared and hashed as written ("5" and 5 are different nodes).
# Containers and booleans cannot be ids; a node declaring one is kept but never addressable.
NodeId: TypeAlias = str | int | float


def is_truthy(value: Any) -> bool:
    """Truthiness as the JSON producer's JavaScript sees it.

    ``[]`` and ``{}`` are truthy here, unlike in Python. ``None``, ``False``,
    zero, NaN and the empty string are falsy.
    """
    if value is None or value is False:
        return False
    if isinstance(value, int | float):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def is_node_id(value: Any) -> bool:
    # true == 1 in Python but never in the JSON producer
    return isinstance(value, str | int | float) and not isinstance(value, bool)


def _edge_ids(value: Any) -> tuple[NodeId, ...]:
    """Normalize a ``source``/``target`` field to a tuple of ids.

    A falsy field means no edges, a scalar becomes a one-element tuple.
    Entries that cannot be ids are dropped.
    """
    if not is_truthy(value):
        return ()
    items = value if isinstance(value, list | tuple) else [value]
    return tuple(item for item in items if is_node_id(item))


@dataclass(frozen=True, slots=True)
class GraphWarning:
    """Non-fatal anomaly found while building the graph.

    Warnings never stop generation; they are logged so the operator can
    spot dangling references or duplicated ids.
    """

    code: str
    message: str
    node_ids: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class GraphNode:
    """One node of the input document.

    ``position`` is the node's index in the document. Resolution order is
    defined by it, never by container iteration order.
    """

    node_id: NodeId | None
    position: int
    name: str | None = None
    source: tuple[NodeId, ...] = ()
    target: tuple[NodeId, ...] = ()
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_raw(cls, raw: Any, position: int) -> GraphNode:
        """Build a node from its decoded document form.

        Anything malformed degrades to an inert node instead of failing:
        a non-mapping node or a non-mapping ``properties`` field yields
        empty properties.
        """
        if not isinstance(raw, Mapping):
            return cls(node_id=None, position=position)
        node_id = raw.get("id")
        name = raw.get("name")
        properties = raw.get("properties")
        return cls(
            node_id=node_id if is_node_id(node_id) else None,
            position=position,
            name=name if isinstance(name, str) else None,
            source=_edge_ids(raw.get("source")),
            target=_edge_ids(raw.get("target")),
            properties=MappingProxyType(dict(properties) if isinstance(properties, Mapping) else {}),
        )

    @property
    def kind(self) -> NodeKind | None:
        value = self.properties.get("type")
        if not isinstance(value, str):
            return None
        try:
            return NodeKind(value)
        except ValueError:
            return None

    @property
    def is_entry(self) -> bool:
        return self.kind is NodeKind.ENTRY

    @property
    def is_middleware(self) -> bool:
        return self.kind is NodeKind.MIDDLEWARE

    @property
    def is_route(self) -> bool:
        """Route nodes carry a non-empty string endpoint and are not middleware."""
        endpoint = self.properties.get("endpoint")
        return not self.is_middleware and isinstance(endpoint, str) and endpoint != ""

    @property
    def is_admin_middleware(self) -> bool:
        return self.is_middleware and is_truthy(self.properties.get("admin_required"))

    def flag(self, key: str) -> bool:
        """Truthiness of a boolean-ish property."""
        return is_truthy(self.properties.get(key))
