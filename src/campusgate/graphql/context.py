"""
Per-request GraphQL context.
"""

import re
import uuid
from typing import Optional

from fastapi import Request
from strawberry.fastapi import BaseContext

BEARER_PATTERN = re.compile(r"Bearer ([A-Za-z0-9]+)")


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of an ``Authorization: Bearer <token>`` header, if any."""
    if not authorization:
        return None
    match = BEARER_PATTERN.search(authorization)
    return match.group(1) if match else None


class GatewayContext(BaseContext):
    """
    Context handed to every resolver as ``info.context``.

    ``token`` is the caller's bearer credential, forwarded as-is and never
    validated by the gateway.
    """

    def __init__(self, token: Optional[str] = None, request_id: Optional[str] = None):
        super().__init__()
        self.token = token
        self.request_id = request_id or uuid.uuid4().hex


async def get_context(request: Request) -> GatewayContext:
    """Build the resolver context for an inbound GraphQL request."""
    return GatewayContext(
        token=extract_bearer_token(request.headers.get("authorization")),
        request_id=getattr(request.state, "request_id", None),
    )
