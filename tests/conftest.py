# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"
EXPRESS_EXAMPLE_DIR = EXAMPLES_DIR / "express_server"

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Timing varies on CI runners
)
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by configure_logging() (CLI tests bind CliRunner streams)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def entry_node(node_id: str = "1", **extra: Any) -> dict[str, Any]:
    return {"id": node_id, "name": "Start", "properties": {"type": "entry"}, **extra}


def middleware_node(node_id: str, target: Any = None, **properties: Any) -> dict[str, Any]:
    node: dict[str, Any] = {"id": node_id, "name": f"Middleware {node_id}", "properties": {"type": "middleware", **properties}}
    if target is not None:
        node["target"] = target
    return node


def route_node(node_id: str, endpoint: str, method: str | None = None, **properties: Any) -> dict[str, Any]:
    props: dict[str, Any] = {"endpoint": endpoint, **properties}
    if method is not None:
        props["method"] = method
    return {"id": node_id, "name": f"Route {endpoint}", "properties": props}


def graph_document(*nodes: dict[str, Any]) -> dict[str, Any]:
    """Wrap nodes in a document, prepending an entry node."""
    return {"nodes": [entry_node(), *nodes]}


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[..., Path]:
    """Write a document to a JSON file under tmp_path and return its path."""

    def _write(document: Any, name: str = "graph.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def example_graph_path() -> Path:
    return EXPRESS_EXAMPLE_DIR / "graph.json"


@pytest.fixture
def example_server_text() -> str:
    return (EXPRESS_EXAMPLE_DIR / "server.js").read_text(encoding="utf-8")
