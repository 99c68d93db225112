"""Exceptions raised across the generation pipeline.

Only the validator raises the named document errors. Resolution and
emission tolerate malformed nodes and never raise.
"""


class ServerGenError(Exception):
    """Base class for all servergen failures."""


class GraphDocumentError(ServerGenError, ValueError):
    """Raised when a graph document is structurally unusable."""


class ConfigShapeError(GraphDocumentError):
    """Raised when the document has no ``nodes`` list."""

    def __init__(self, message: str = 'Invalid configuration: "nodes" array is required') -> None:
        super().__init__(message)


class MissingEntryError(GraphDocumentError):
    """Raised when no node is tagged with ``properties.type == "entry"``."""

    def __init__(self, message: str = 'Invalid configuration: Entry node with type "entry" is required') -> None:
        super().__init__(message)


class DocumentLoadError(ServerGenError):
    """Raised when a graph document cannot be parsed.

    Attributes:
        path: File the document was read from
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")
