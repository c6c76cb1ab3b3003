"""
Backend requester for the REST resource services.

Every outbound call goes through ``BackendRequester.perform``, which never
raises: transport failures, non-2xx answers and unparseable bodies come back
as ``Result.err(BackendFailure)``.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple
from urllib.parse import quote

import httpx

from campusgate.core.logging import get_logger
from campusgate.core.result import Result

logger = get_logger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT"})

# Characters encodeURI leaves untouched besides alphanumerics
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


@dataclass(frozen=True)
class BackendFailure:
    """Why a backend call did not produce a value."""

    message: str
    url: str
    status_code: Optional[int] = None
    body: Any = None


RequestResult = Result[Any, BackendFailure]


def encode_url(url: str) -> str:
    """Percent-encode ``url`` keeping reserved URI characters intact."""
    return quote(url, safe=_URI_SAFE)


class BackendRequester:
    """
    Issues JSON requests against backend resource services.

    One ``httpx.AsyncClient`` is shared by all resources for the lifetime of
    the application; call ``aclose`` at shutdown.
    """

    def __init__(
        self,
        timeout_seconds: float = 30,
        show_urls: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.show_urls = show_urls
        self.timeout = httpx.Timeout(timeout_seconds)
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def perform(self, url: str, method: str, body: Any = None) -> RequestResult:
        """
        Execute a backend request.

        Args:
            url: Absolute backend URL, encoded before sending
            method: One of GET, POST, PUT, DELETE
            body: JSON-serializable payload, sent for POST and PUT only

        Returns:
            ``Result.ok(parsed_body)`` on a 2xx answer, ``Result.err(BackendFailure)`` otherwise
        """
        method = method.upper()
        encoded = encode_url(url)

        if method not in ALLOWED_METHODS:
            return Result.err(BackendFailure(message=f"Unsupported method: {method}", url=encoded))

        if self.show_urls:
            logger.info("Backend request", method=method, url=encoded)

        try:
            response = await self.client.request(
                method,
                encoded,
                json=body if method in BODY_METHODS and body is not None else None,
                headers={"Accept": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Backend request failed", method=method, url=encoded, error=str(e))
            return Result.err(
                BackendFailure(message=str(e) or e.__class__.__name__, url=encoded)
            )

        parsed, parse_error = self._parse_body(response)

        if response.is_success:
            if parse_error:
                logger.warning(
                    "Backend returned invalid JSON",
                    url=encoded,
                    status_code=response.status_code,
                )
                return Result.err(
                    BackendFailure(
                        message=f"Invalid JSON from backend: {parse_error}",
                        url=encoded,
                        status_code=response.status_code,
                        body=response.text,
                    )
                )
            return Result.ok(parsed)

        logger.warning("Backend returned error status", url=encoded, status_code=response.status_code)
        return Result.err(
            BackendFailure(
                message=f"{response.status_code} - {response.text}",
                url=encoded,
                status_code=response.status_code,
                body=response.text if parse_error else parsed,
            )
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Tuple[Any, Optional[str]]:
        if not response.content:
            return None, None
        try:
            return response.json(), None
        except ValueError as e:
            return None, str(e)
