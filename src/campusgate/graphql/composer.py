"""
Schema composition for the Campus gateway.

Each resource contributes a query fragment and a mutation fragment; the
composer merges them into the single ``Query`` and ``Mutation`` root types of
one strawberry schema.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import strawberry
from graphql import GraphQLError
from strawberry.scalars import JSON
from strawberry.schema.config import StrawberryConfig
from strawberry.tools import merge_types
from strawberry.types import ExecutionContext

from campusgate.core.errors import SchemaCompositionError
from campusgate.core.logging import get_logger
from campusgate.resources import ResourceDescriptor

logger = get_logger(__name__)


@strawberry.type(description="Structured failure envelope sent by backend services")
class BackendFault:
    id: str
    code: Optional[int]
    description: Optional[str]
    details: Optional[JSON] = None


def resolve_attribute(obj: Any, name: str) -> Any:
    """Default field resolver: backend payloads arrive as plain dicts."""
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


class GatewaySchema(strawberry.Schema):
    """Strawberry schema that reports execution errors through structlog."""

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            logger.warning(
                "GraphQL field error",
                message=error.message,
                path=error.path,
            )


@dataclass(frozen=True)
class ComposedSchema:
    """The executable schema plus the root field names each part contributed."""

    schema: strawberry.Schema
    descriptors: Tuple[ResourceDescriptor, ...]
    query_fields: Tuple[str, ...]
    mutation_fields: Tuple[str, ...]

    @property
    def sdl(self) -> str:
        return self.schema.as_str()

    def fields_by_resource(self) -> Dict[str, Dict[str, List[str]]]:
        return {
            d.name: {"query": d.query_fields, "mutation": d.mutation_fields}
            for d in self.descriptors
        }


def _ensure_unique(root: str, fields: Sequence[Tuple[str, List[str]]]) -> Tuple[str, ...]:
    """Flatten per-resource field names, failing on any name seen twice."""
    owners: Dict[str, List[str]] = {}
    for resource, names in fields:
        for name in names:
            owners.setdefault(name, []).append(resource)

    duplicates = sorted(name for name, resources in owners.items() if len(resources) > 1)
    if duplicates:
        detail = ", ".join(f"{name} ({'/'.join(owners[name])})" for name in duplicates)
        raise SchemaCompositionError(f"Duplicate {root} fields: {detail}")

    return tuple(name for _, names in fields for name in names)


def _extra_types(descriptors: Sequence[ResourceDescriptor]) -> List[type]:
    types: List[type] = [BackendFault]
    for descriptor in descriptors:
        for extra in descriptor.types:
            if extra not in types:
                types.append(extra)
    return types


def compose(descriptors: Sequence[ResourceDescriptor]) -> ComposedSchema:
    """
    Merge resource fragments into one executable schema.

    Args:
        descriptors: Resources in schema order

    Returns:
        The composed schema

    Raises:
        SchemaCompositionError: If no resources are given or two resources
            declare the same root field
    """
    descriptors = tuple(descriptors)
    if not descriptors:
        raise SchemaCompositionError("At least one resource is required")

    query_fields = _ensure_unique("Query", [(d.name, d.query_fields) for d in descriptors])
    mutation_fields = _ensure_unique("Mutation", [(d.name, d.mutation_fields) for d in descriptors])

    query = merge_types("Query", tuple(d.query for d in descriptors))
    mutation = merge_types("Mutation", tuple(d.mutation for d in descriptors))

    schema = GatewaySchema(
        query=query,
        mutation=mutation,
        types=_extra_types(descriptors),
        config=StrawberryConfig(default_resolver=resolve_attribute),
    )

    logger.info(
        "Composed GraphQL schema",
        resources=[d.name for d in descriptors],
        query_fields=len(query_fields),
        mutation_fields=len(mutation_fields),
    )
    return ComposedSchema(
        schema=schema,
        descriptors=descriptors,
        query_fields=query_fields,
        mutation_fields=mutation_fields,
    )
