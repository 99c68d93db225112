# src/servergen/core/graph/graph.py
"""ServerGraph: the node sequence as an id-indexed arena with target adjacency.

Wraps a NetworkX DiGraph. Only ``target`` declarations become edges; a
node's ``source`` list is checked for dangling references but does not
take part in admin propagation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

import networkx as nx
from networkx import DiGraph

from servergen.core.graph.models import GraphNode, GraphWarning, NodeId


def as_graph_nodes(nodes: Iterable[GraphNode | Mapping[str, Any]]) -> tuple[GraphNode, ...]:
    """Coerce decoded document nodes to GraphNode, keeping document order."""
    return tuple(
        node if isinstance(node, GraphNode) else GraphNode.from_raw(node, position)
        for position, node in enumerate(nodes)
    )


class ServerGraph:
    """Arena of graph nodes indexed by id.

    The first node declaring an id owns it; later duplicates stay in the
    document sequence but are not addressable by id. Construction never
    fails: anomalies are recorded in ``warnings``.
    """

    def __init__(self, nodes: Sequence[GraphNode]) -> None:
        self._nodes: tuple[GraphNode, ...] = tuple(sorted(nodes, key=lambda node: node.position))
        self._graph: DiGraph[NodeId] = nx.DiGraph()
        self._warnings: list[GraphWarning] = []

        for node in self._nodes:
            if node.node_id is None:
                continue
            if self._graph.has_node(node.node_id):
                self._warn(
                    "duplicate_id",
                    f"Node id {node.node_id!r} is declared more than once; the first declaration wins",
                    node.node_id,
                )
                continue
            self._graph.add_node(node.node_id, node=node)

        for node in self._nodes:
            for target_id in node.target:
                if not self._graph.has_node(target_id):
                    self._warn(
                        "dangling_target",
                        f"Node {node.node_id!r} targets unknown node {target_id!r}",
                        node.node_id,
                        target_id,
                    )
                    continue
                if node.node_id is not None and self._graph.nodes[node.node_id]["node"] is node:
                    self._graph.add_edge(node.node_id, target_id)
            for source_id in node.source:
                if not self._graph.has_node(source_id):
                    self._warn(
                        "dangling_source",
                        f"Node {node.node_id!r} lists unknown source {source_id!r}",
                        node.node_id,
                        source_id,
                    )

        if not nx.is_directed_acyclic_graph(self._graph):
            cycle = nx.find_cycle(self._graph)
            cycle_str = " -> ".join(str(edge[0]) for edge in cycle)
            self._warn("cycle", f"Graph contains a cycle: {cycle_str}", *(edge[0] for edge in cycle))

    def _warn(self, code: str, message: str, *node_ids: Any) -> None:
        self._warnings.append(GraphWarning(code=code, message=message, node_ids=tuple(node_ids)))

    @classmethod
    def from_document_nodes(cls, nodes: Iterable[GraphNode | Mapping[str, Any]]) -> ServerGraph:
        return cls(as_graph_nodes(nodes))

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        """All nodes in document order, duplicates included."""
        return self._nodes

    @property
    def warnings(self) -> tuple[GraphWarning, ...]:
        return tuple(self._warnings)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes)

    def has_node(self, node_id: Any) -> bool:
        return self._graph.has_node(node_id)

    def get_node(self, node_id: Any) -> GraphNode | None:
        """Return the node owning ``node_id``, or None for unknown ids."""
        if not self._graph.has_node(node_id):
            return None
        node: GraphNode = self._graph.nodes[node_id]["node"]
        return node

    def successors(self, node_id: Any) -> list[NodeId]:
        """Target ids of the node owning ``node_id``, in declaration order."""
        if not self._graph.has_node(node_id):
            return []
        return list(self._graph.successors(node_id))

    def reachable_targets(self, node: GraphNode, *, depth_limit: int | None = 1) -> list[NodeId]:
        """Known node ids reachable from ``node`` along target edges.

        The first hop uses ``node``'s own target list, so duplicate-id nodes
        still propagate through what they declare. Further hops follow the
        arena's adjacency. Breadth-first, each id visited once, so cycles
        terminate. ``depth_limit=None`` walks to a fixed point.
        """
        reached: list[NodeId] = []
        seen: set[NodeId] = set()
        frontier: list[NodeId] = list(node.target)
        depth = 1
        while frontier and (depth_limit is None or depth <= depth_limit):
            next_frontier: list[NodeId] = []
            for target_id in frontier:
                if target_id in seen or not self._graph.has_node(target_id):
                    continue
                seen.add(target_id)
                reached.append(target_id)
                next_frontier.extend(self._graph.successors(target_id))
            frontier = next_frontier
            depth += 1
        return reached
