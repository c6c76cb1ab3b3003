"""
Outbound HTTP access to backend resource services.
"""

from .query_string import build_query, get_request
from .requester import BackendFailure, BackendRequester, RequestResult, encode_url

__all__ = [
    "BackendFailure",
    "BackendRequester",
    "RequestResult",
    "build_query",
    "encode_url",
    "get_request",
]
