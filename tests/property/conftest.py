# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Generated documents always carry one entry node first, then a shuffled
mix of middleware and route nodes with unique string ids. Admin
middleware targets are drawn from the generated route ids.

Usage:
    from tests.property.conftest import graph_documents

    @given(document=graph_documents())
    def test_generation_is_total(document: dict) -> None:
        ...
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

# Endpoints stay in a plain alphabet so tests can locate them in output
endpoint_names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=12)
endpoints = endpoint_names.map(lambda name: f"/{name}")

methods = st.one_of(st.none(), st.sampled_from(["GET", "POST", "PUT", "DELETE", "PATCH", "get", "post"]))

# Values seen in the wild for auth_required; only literal False opts out
auth_flags = st.one_of(st.none(), st.booleans(), st.sampled_from([0, 1, "", "no"]))


@st.composite
def route_specs(draw: st.DrawFn) -> dict[str, Any]:
    properties: dict[str, Any] = {"endpoint": draw(endpoints)}
    method = draw(methods)
    if method is not None:
        properties["method"] = method
    auth = draw(auth_flags)
    if auth is not None:
        properties["auth_required"] = auth
    if draw(st.booleans()):
        properties["admin_required"] = draw(st.booleans())
    return {"properties": properties}


@st.composite
def middleware_specs(draw: st.DrawFn) -> dict[str, Any]:
    flags = draw(
        st.fixed_dictionaries(
            {},
            optional={
                "auth_required": st.booleans(),
                "log_requests": st.booleans(),
                "allowed_origins": st.one_of(
                    st.just(["*"]),
                    st.lists(st.sampled_from(["https://a.example", "https://b.example"]), max_size=2),
                ),
            },
        )
    )
    return {"properties": {"type": "middleware", **flags}}


@st.composite
def graph_documents(draw: st.DrawFn, max_routes: int = 8, max_middleware: int = 4) -> dict[str, Any]:
    """A valid graph document with unique ids and optional admin middleware."""
    specs = draw(st.lists(route_specs(), max_size=max_routes)) + draw(st.lists(middleware_specs(), max_size=max_middleware))
    specs = draw(st.permutations(specs))

    nodes: list[dict[str, Any]] = [{"id": "entry", "name": "Start", "properties": {"type": "entry"}}]
    for index, spec in enumerate(specs):
        nodes.append({"id": f"n{index}", **spec})

    route_ids = [node["id"] for node in nodes if "endpoint" in node["properties"]]
    for admin_index in range(draw(st.integers(min_value=0, max_value=2))):
        targets = draw(st.lists(st.sampled_from(route_ids), unique=True)) if route_ids else []
        nodes.append(
            {
                "id": f"admin{admin_index}",
                "target": targets,
                "properties": {"type": "middleware", "admin_required": True},
            }
        )

    return {"nodes": nodes}
