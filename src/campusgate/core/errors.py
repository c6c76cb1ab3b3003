"""
Exception types raised by the gateway.
"""

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Base class for gateway errors."""


class SchemaCompositionError(GatewayError):
    """Resource fragments could not be merged into one schema."""


class BackendError(GatewayError):
    """
    A backend call failed while resolving a field.

    ``error`` holds the ``{"id", "code", "description"}`` envelope when the
    backend answered with a structured failure, otherwise ``None``.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        error: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.error = error

    @property
    def is_structured(self) -> bool:
        return self.error is not None
