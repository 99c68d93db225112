# src/servergen/core/document.py
"""Reading graph documents from disk.

JSON is the interchange format; ``.yaml`` / ``.yml`` files are read with
PyYAML. Only the ``nodes`` field of the document root is interpreted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from servergen.contracts.errors import DocumentLoadError
from servergen.core.graph import GraphNode, as_graph_nodes

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _reject_nonfinite_constant(value: str) -> None:
    """Reject NaN / Infinity, which are not JSON."""
    raise ValueError(f"Non-standard JSON constant '{value}' not allowed")


def load_document(path: Path) -> Any:
    """Read and decode a graph document.

    The file handle is released before decoding starts, whether or not
    decoding succeeds.

    Raises:
        OSError: If the file cannot be read
        DocumentLoadError: If the content is not valid JSON / YAML
    """
    try:
        with path.open(encoding="utf-8") as handle:
            text = handle.read()
    except UnicodeDecodeError as e:
        raise DocumentLoadError(path.name, f"not valid UTF-8 ({e.reason})") from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text, parse_constant=_reject_nonfinite_constant)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(path.name, f"line {e.lineno} column {e.colno}: {e.msg}") from e
    except ValueError as e:
        raise DocumentLoadError(path.name, str(e)) from e
    except yaml.YAMLError as e:
        problem = getattr(e, "problem", None)
        raise DocumentLoadError(path.name, str(problem) if problem else str(e)) from e


def parse_nodes(document: Any) -> tuple[GraphNode, ...]:
    """Build the ordered node sequence of a validated document."""
    return as_graph_nodes(document["nodes"])
