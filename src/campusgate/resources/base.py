"""
Shared building blocks for backend resources.

A resource is one REST service fronted by the gateway. Each resource module
provides a ``build_descriptor`` function returning a ``ResourceDescriptor``
whose query and mutation fragments delegate to a ``ResourceResolverSet``.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

from strawberry.utils.str_converters import to_camel_case

from campusgate.connectors.query_string import get_request
from campusgate.connectors.requester import BackendFailure, BackendRequester, RequestResult
from campusgate.core.config import ResourceConfig
from campusgate.core.errors import BackendError


class ResourceResolverSet:
    """CRUD calls against one backend resource."""

    def __init__(self, config: ResourceConfig, requester: BackendRequester):
        self.config = config
        self.requester = requester
        self.base_url = config.base_url

    async def list(self) -> RequestResult:
        return await get_request(self.requester, self.base_url, "")

    async def get_by_key(self, key: Any) -> RequestResult:
        return await self.requester.perform(f"{self.base_url}/{key}", "GET")

    async def create(self, payload: Any) -> RequestResult:
        return await self.requester.perform(self.base_url, "POST", payload)

    async def update(self, key: Any, payload: Any) -> RequestResult:
        return await self.requester.perform(f"{self.base_url}/{key}", "PUT", payload)

    async def remove(self, key: Any) -> RequestResult:
        return await self.requester.perform(f"{self.base_url}/{key}", "DELETE")


def unwrap(result: RequestResult) -> Any:
    """
    Return the value of a successful backend call or raise ``BackendError``.

    A failure body shaped ``{"error": {...}}`` is attached to the exception
    as its structured envelope.
    """
    if result.is_ok:
        return result.value

    failure: BackendFailure = result.error
    envelope = None
    if isinstance(failure.body, Mapping) and isinstance(failure.body.get("error"), Mapping):
        envelope = dict(failure.body["error"])

    raise BackendError(
        failure.message,
        status_code=failure.status_code,
        body=failure.body,
        error=envelope,
    )


@dataclass(frozen=True)
class ResourceDescriptor:
    """Everything the composer needs from one resource."""

    name: str
    config: ResourceConfig
    query: type
    mutation: type
    types: Tuple[type, ...] = ()

    @property
    def query_fields(self) -> List[str]:
        return field_names(self.query)

    @property
    def mutation_fields(self) -> List[str]:
        return field_names(self.mutation)


def field_names(fragment: type) -> List[str]:
    """GraphQL names of the root fields a strawberry fragment declares."""
    definition = fragment.__strawberry_definition__
    return [f.graphql_name or to_camel_case(f.python_name) for f in definition.fields]
