# src/servergen/pipeline.py
"""End-to-end generation: document → validate → resolve → emit → file.

Each call starts from a freshly decoded document and builds its own
model; nothing is shared between calls. The output file is written only
after emission succeeds, so a failing run never leaves partial output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from servergen.core.config import GeneratorSettings
from servergen.core.document import load_document, parse_nodes
from servergen.core.emitter import emit
from servergen.core.graph import ServerGraph
from servergen.core.logging import get_logger
from servergen.core.resolver import resolve
from servergen.core.validation import validate_document

logger = get_logger(__name__)


def generate_source(document: Any, *, settings: GeneratorSettings | None = None) -> str:
    """Run validate → resolve → emit on a decoded document.

    Raises:
        ConfigShapeError: If the document has no ``nodes`` list
        MissingEntryError: If no entry node is present
    """
    settings = settings or GeneratorSettings()

    validate_document(document)
    graph = ServerGraph(parse_nodes(document))
    logger.debug("graph_loaded", nodes=graph.node_count, edges=graph.edge_count)

    model = resolve(graph, propagation=settings.admin_propagation)
    return emit(model, port=settings.port)


def generate_server(
    config_path: str | Path,
    output_path: str | Path | None = None,
    *,
    settings: GeneratorSettings | None = None,
) -> Path:
    """Generate a server file from a graph document file.

    Args:
        config_path: Graph document (JSON, or YAML by suffix)
        output_path: Destination; defaults to ``settings.default_output``
        settings: Generator settings (defaults when None)

    Returns:
        Path the server source was written to

    Raises:
        ConfigShapeError, MissingEntryError: Validation failures
        DocumentLoadError: If the document cannot be decoded
        OSError: If the input cannot be read or the output written
    """
    settings = settings or GeneratorSettings()
    source_path = Path(config_path)
    destination = Path(output_path) if output_path is not None else settings.default_output

    document = load_document(source_path)
    server_code = generate_source(document, settings=settings)

    destination.write_text(server_code, encoding="utf-8", newline="")
    logger.info(
        "server_generated",
        source=str(source_path),
        output=str(destination),
        size=len(server_code),
    )
    return destination
