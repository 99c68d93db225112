# src/servergen/core/validation.py
"""Structural validation of graph documents.

Two checks only: the document carries a ``nodes`` list, and one of its
nodes is tagged as the entry point. Duplicate ids, dangling edges and
cycles are tolerated here; ServerGraph reports them as warnings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from servergen.contracts.enums import NodeKind
from servergen.contracts.errors import ConfigShapeError, MissingEntryError


def _is_entry(node: Any) -> bool:
    if not isinstance(node, Mapping):
        return False
    properties = node.get("properties")
    return isinstance(properties, Mapping) and properties.get("type") == NodeKind.ENTRY


def validate_document(document: Any) -> None:
    """Validate the document shape, failing fast.

    Args:
        document: Decoded graph document

    Raises:
        ConfigShapeError: If ``nodes`` is missing or is not a list
        MissingEntryError: If no node has ``properties.type == "entry"``
    """
    if not isinstance(document, Mapping) or not isinstance(document.get("nodes"), list):
        raise ConfigShapeError()

    if not any(_is_entry(node) for node in document["nodes"]):
        raise MissingEntryError()
