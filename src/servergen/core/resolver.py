# src/servergen/core/resolver.py
"""Resolution of a node sequence into the normalized server model.

Two passes over the nodes in document order:

1. Classification. Middleware nodes switch features on (CORS, auth, admin
   auth, logging); route nodes become RouteRecords in first-seen order.
2. Admin-edge propagation. Every admin middleware node forces
   ``admin_required`` onto the route nodes its ``target`` reaches, whatever
   the route declares itself.

Resolution never raises. Malformed nodes are inert and graph anomalies are
logged as warnings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from servergen.contracts.enums import AdminPropagation
from servergen.contracts.model import (
    AdminAuthFeature,
    AuthFeature,
    CorsFeature,
    LoggingFeature,
    NormalizedModel,
    RouteRecord,
)
from servergen.core.graph import GraphNode, ServerGraph, as_graph_nodes, is_truthy
from servergen.core.logging import get_logger

logger = get_logger(__name__)

_DEFAULT_METHOD = "GET"


def _freeze_origin(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value


def _route_record(node: GraphNode) -> RouteRecord:
    properties = node.properties
    method = properties.get("method")
    return RouteRecord(
        id=node.node_id,
        endpoint=properties["endpoint"],
        method=method if isinstance(method, str) and method else _DEFAULT_METHOD,
        # Secure by default: only an explicit false opts out
        auth_required=properties.get("auth_required") is not False,
        admin_required=is_truthy(properties.get("admin_required")),
    )


def _propagate_admin(
    graph: ServerGraph,
    routes: list[RouteRecord],
    depth_limit: int | None,
) -> list[str]:
    """Force admin protection onto routes targeted by admin middleware.

    Mutates ``routes`` in place and returns the governed endpoints in the
    order they were first reached.
    """
    index_by_id: dict[Any, int] = {}
    for index, route in enumerate(routes):
        index_by_id.setdefault(route.id, index)

    governed: list[str] = []
    for node in graph:
        if not node.is_admin_middleware:
            continue
        for target_id in graph.reachable_targets(node, depth_limit=depth_limit):
            target = graph.get_node(target_id)
            if target is None or not target.is_route or target_id not in index_by_id:
                continue
            index = index_by_id[target_id]
            routes[index] = replace(routes[index], admin_required=True)
            if routes[index].endpoint not in governed:
                governed.append(routes[index].endpoint)
    return governed


def resolve(
    nodes: ServerGraph | Iterable[GraphNode | Mapping[str, Any]],
    *,
    propagation: AdminPropagation = AdminPropagation.DIRECT,
) -> NormalizedModel:
    """Resolve nodes into a NormalizedModel.

    Args:
        nodes: A ServerGraph, GraphNodes, or raw decoded document nodes
        propagation: DIRECT limits admin propagation to one hop (the
            targets an admin node lists); TRANSITIVE follows target chains
            to a fixed point.

    Returns:
        The normalized model; nothing in it is shared with other runs.
    """
    graph = nodes if isinstance(nodes, ServerGraph) else ServerGraph(as_graph_nodes(nodes))
    for warning in graph.warnings:
        logger.warning("graph_warning", code=warning.code, detail=warning.message)

    cors_enabled = False
    cors_origin: Any = None
    auth_enabled = False
    admin_enabled = False
    logging_enabled = False
    routes: list[RouteRecord] = []

    for node in graph:
        if node.is_middleware:
            if node.flag("allowed_origins"):
                cors_enabled = True
                cors_origin = _freeze_origin(node.properties["allowed_origins"])
            if node.flag("auth_required"):
                auth_enabled = True
            if node.flag("admin_required"):
                admin_enabled = True
            if node.flag("log_requests"):
                logging_enabled = True
        elif node.is_route:
            routes.append(_route_record(node))

    depth_limit = 1 if AdminPropagation(propagation) is AdminPropagation.DIRECT else None
    governed = _propagate_admin(graph, routes, depth_limit)

    model = NormalizedModel(
        cors=CorsFeature(enabled=cors_enabled, origin=cors_origin),
        auth=AuthFeature(enabled=auth_enabled),
        admin_auth=AdminAuthFeature(enabled=admin_enabled, routes=tuple(governed)),
        logging=LoggingFeature(enabled=logging_enabled),
        routes=tuple(routes),
    )
    logger.debug(
        "model_resolved",
        routes=len(model.routes),
        middleware=list(model.enabled_middleware),
        admin_routes=list(governed),
        propagation=str(propagation),
    )
    return model
