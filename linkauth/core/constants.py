"""
App-wide constants for route configuration.

Single source of truth for route prefixes, tags, and common response
definitions for API routes.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints."""

    AUTH = RouteConfig(prefix="/auth/email-link", tag="auth")
    HEALTH = RouteConfig(prefix="/health", tag="health")


class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    BAD_REQUEST: dict[int, dict[str, Any]] = {
        400: {"description": "Invalid request data or rejected by the backend"}
    }
    BAD_GATEWAY: dict[int, dict[str, Any]] = {
        502: {"description": "Authentication backend failed or replied malformed"}
    }
