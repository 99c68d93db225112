# src/servergen/core/emitter.py
"""Emission of Express server source from a NormalizedModel.

The output is assembled from one renderer per section, always in this
order: imports, app setup, middleware definitions, route registrations,
startup. Each renderer is a pure function of the model, so emitting the
same model twice gives byte-identical text.

Templates run in a sandboxed Jinja2 environment with StrictUndefined, so
a missing variable fails loudly instead of rendering as an empty string.
"""

from __future__ import annotations

import json
from typing import Any

from jinja2 import StrictUndefined, Template
from jinja2.sandbox import SandboxedEnvironment

from servergen.contracts.model import CorsFeature, NormalizedModel, RouteRecord
from servergen.core.config import DEFAULT_PORT

__all__ = [
    "emit",
    "render_app_setup",
    "render_imports",
    "render_middleware",
    "render_route",
    "render_startup",
    "route_message",
    "route_middleware",
]

_env = SandboxedEnvironment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)

_IMPORTS = _env.from_string(
    'const express = require("express");\n'
    '{% if cors_enabled %}const cors = require("cors");\n{% endif %}'
    "const app = express();\n"
    "\n"
)

_APP_SETUP = _env.from_string(
    "{% if origin is not none %}app.use(cors({ origin: {{ origin }} }));\n{% endif %}"
    "app.use(express.json());\n"
    "\n"
)

_AUTH_MIDDLEWARE = _env.from_string(
    "const authMiddleware = (req, res, next) => {\n"
    "  if (!req.headers.authorization) {\n"
    '    return res.status(401).json({ message: "Unauthorized" });\n'
    "  }\n"
    "  next();\n"
    "};\n"
    "\n"
)

_ADMIN_MIDDLEWARE = _env.from_string(
    "const adminMiddleware = (req, res, next) => {\n"
    '  if (req.headers.authorization !== "admin") {\n'
    '    return res.status(403).json({ message: "Forbidden" });\n'
    "  }\n"
    "  next();\n"
    "};\n"
    "\n"
)

_LOGGING_MIDDLEWARE = _env.from_string(
    "const loggingMiddleware = (req, res, next) => {\n"
    "  console.log(`[${new Date().toISOString()}] ${req.method} ${req.url}`);\n"
    "  next();\n"
    "};\n"
    "\n"
)

_ROUTE = _env.from_string(
    'app.{{ method }}("{{ endpoint }}", '
    "{% for name in middleware %}{{ name }}, {% endfor %}"
    '(req, res) => res.json({ message: "{{ message }}" }));\n'
)

_STARTUP = _env.from_string('\napp.listen({{ port }}, () => console.log("Server running on port {{ port }}"));\n')

_ROUTE_MESSAGES: dict[str, str] = {
    "login": "Login successful",
    "signup": "Signup successful",
    "signout": "Signout successful",
    "user": "User data",
    "admin": "Admin data",
    "home": "Welcome to Home Page",
    "about": "About us",
    "news": "Latest news",
    "blogs": "Blogs list",
}


def _render(template: Template, **context: Any) -> str:
    return template.render(**context)


def route_message(endpoint: str) -> str:
    """Derive the handler's response message from a route endpoint.

    Examples:
        >>> route_message("/user")
        'User data'
        >>> route_message("/orders")
        'Orders resource'
    """
    name = endpoint[1:] if endpoint.startswith("/") else endpoint
    if name in _ROUTE_MESSAGES:
        return _ROUTE_MESSAGES[name]
    return f"{name[:1].upper()}{name[1:]} resource"


def _origin_literal(cors: CorsFeature) -> str:
    if cors.is_wildcard:
        return '"*"'
    return json.dumps(cors.origin, separators=(",", ":"), ensure_ascii=False)


def render_imports(model: NormalizedModel) -> str:
    return _render(_IMPORTS, cors_enabled=model.cors.enabled)


def render_app_setup(model: NormalizedModel) -> str:
    origin = _origin_literal(model.cors) if model.cors.enabled else None
    return _render(_APP_SETUP, origin=origin)


def render_middleware(model: NormalizedModel) -> str:
    """Middleware definitions in fixed order: auth, admin, logging."""
    sections = [
        (model.auth.enabled, _AUTH_MIDDLEWARE),
        (model.admin_auth.enabled, _ADMIN_MIDDLEWARE),
        (model.logging.enabled, _LOGGING_MIDDLEWARE),
    ]
    return "".join(_render(template) for enabled, template in sections if enabled)


def route_middleware(route: RouteRecord, model: NormalizedModel) -> list[str]:
    """Middleware attached to a route, left to right.

    A route's own requirement only attaches middleware that the graph
    actually defines.
    """
    names: list[str] = []
    if route.auth_required and model.auth.enabled:
        names.append("authMiddleware")
    if route.admin_required and model.admin_auth.enabled:
        names.append("adminMiddleware")
    if model.logging.enabled:
        names.append("loggingMiddleware")
    return names


def render_route(route: RouteRecord, model: NormalizedModel) -> str:
    return _render(
        _ROUTE,
        method=route.method.lower(),
        endpoint=route.endpoint,
        middleware=route_middleware(route, model),
        message=route_message(route.endpoint),
    )


def render_startup(port: int = DEFAULT_PORT) -> str:
    return _render(_STARTUP, port=port)


def emit(model: NormalizedModel, *, port: int = DEFAULT_PORT) -> str:
    """Emit the complete server source for a model.

    Args:
        model: Resolved server model
        port: Port the generated server listens on

    Returns:
        Server source text ending with a newline
    """
    parts = [
        render_imports(model),
        render_app_setup(model),
        render_middleware(model),
        *(render_route(route, model) for route in model.routes),
        render_startup(port),
    ]
    return "".join(parts)
