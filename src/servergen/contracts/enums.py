"""Kinds and modes shared between the graph, resolver and settings layers."""

from enum import StrEnum


class NodeKind(StrEnum):
    """Value of a node's ``properties.type`` field.

    Route nodes usually carry no type at all; they are recognised by
    their ``endpoint`` property instead.
    """

    ENTRY = "entry"
    EXIT = "exit"
    MIDDLEWARE = "middleware"


class AdminPropagation(StrEnum):
    """How far admin protection flows along ``target`` edges.

    DIRECT: only routes listed in an admin middleware node's own target.
    TRANSITIVE: every route reachable through a chain of targets.
    """

    DIRECT = "direct"
    TRANSITIVE = "transitive"
