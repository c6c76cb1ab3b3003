"""
GraphQL layer for the Campus gateway.

Composes resource fragments into one schema and exposes it over FastAPI with
uniform error formatting and a typed per-request context.
"""

from .composer import ComposedSchema, compose
from .context import GatewayContext, extract_bearer_token, get_context
from .errors import normalize_error
from .gateway import GraphQLGateway

__all__ = [
    "ComposedSchema",
    "compose",
    "GatewayContext",
    "extract_bearer_token",
    "get_context",
    "normalize_error",
    "GraphQLGateway",
]
