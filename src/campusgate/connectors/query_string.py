"""
Query string helpers for backend GET routes.
"""

from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:
    from campusgate.connectors.requester import BackendRequester, RequestResult


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(base_url: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Append ``params`` to ``base_url`` as a query string.

    Falsy values (``""``, ``0``, ``None``, ``False``, empty lists) are skipped
    and list values expand to one ``key=value`` pair per item, in order. Every
    pair is followed by ``&``, so an empty mapping yields ``base_url + "?"``.
    """
    query_url = f"{base_url}?"
    for key, value in (params or {}).items():
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                query_url += f"{key}={_format_value(item)}&"
        else:
            query_url += f"{key}={_format_value(value)}&"
    return query_url


async def get_request(
    requester: "BackendRequester",
    url: str,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
) -> "RequestResult":
    """GET ``{url}/{path}`` with ``params`` as query string."""
    return await requester.perform(build_query(f"{url}/{path}", params), "GET")
