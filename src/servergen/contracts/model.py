# src/servergen/contracts/model.py
"""Normalized server model produced by the resolver and consumed by the emitter.

Every record is frozen. The resolver builds a fresh model per generation
call and the emitter only reads it, so nothing here outlives one run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RouteRecord:
    """One HTTP route with its security requirements fully resolved.

    ``admin_required`` already includes protection inherited from admin
    middleware edges, not only the route's own declared flag.
    """

    id: Any
    endpoint: str
    method: str = "GET"
    auth_required: bool = True
    admin_required: bool = False


@dataclass(frozen=True, slots=True)
class CorsFeature:
    """CORS registration.

    ``origin`` holds the ``allowed_origins`` value exactly as declared
    (lists are stored as tuples).
    """

    enabled: bool = False
    origin: Any = None

    @property
    def is_wildcard(self) -> bool:
        """True when the origin is, or contains, the ``"*"`` wildcard."""
        if self.origin == "*":
            return True
        return isinstance(self.origin, tuple) and "*" in self.origin


@dataclass(frozen=True, slots=True)
class AuthFeature:
    enabled: bool = False


@dataclass(frozen=True, slots=True)
class AdminAuthFeature:
    """Admin authentication and the endpoints it governs through edges."""

    enabled: bool = False
    routes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LoggingFeature:
    enabled: bool = False


@dataclass(frozen=True, slots=True)
class NormalizedModel:
    """Middleware feature flags plus the ordered route table."""

    cors: CorsFeature
    auth: AuthFeature
    admin_auth: AdminAuthFeature
    logging: LoggingFeature
    routes: tuple[RouteRecord, ...]

    @property
    def enabled_middleware(self) -> tuple[str, ...]:
        """Names of the enabled features in emission order."""
        flags = (
            ("cors", self.cors.enabled),
            ("auth", self.auth.enabled),
            ("admin_auth", self.admin_auth.enabled),
            ("logging", self.logging.enabled),
        )
        return tuple(name for name, enabled in flags if enabled)

    def get_route(self, route_id: Any) -> RouteRecord | None:
        """Return the first route with the given id, or None."""
        for route in self.routes:
            if route.id == route_id:
                return route
        return None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation (used by ``servergen validate --format json``)."""
        return asdict(self)
