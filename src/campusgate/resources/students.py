"""
Students resource: types and root fields backed by the students service.
"""

from typing import List, Optional

import strawberry

from campusgate.connectors.requester import BackendRequester
from campusgate.core.config import ResourceConfig
from .base import ResourceDescriptor, ResourceResolverSet, unwrap


@strawberry.type
class Student:
    code: int
    username: str
    password: str


@strawberry.input
class StudentInput:
    username: str
    password: str


def build_descriptor(config: ResourceConfig, requester: BackendRequester) -> ResourceDescriptor:
    """Bind the student fields to the service described by ``config``."""
    resolvers = ResourceResolverSet(config, requester)

    @strawberry.type
    class StudentQuery:
        @strawberry.field
        async def all_students(self) -> List[Optional[Student]]:
            return unwrap(await resolvers.list())

        @strawberry.field
        async def student_by_code(self, code: int) -> Student:
            return unwrap(await resolvers.get_by_key(code))

    @strawberry.type
    class StudentMutation:
        @strawberry.mutation
        async def create_student(self, student: StudentInput) -> Student:
            return unwrap(await resolvers.create(strawberry.asdict(student)))

        @strawberry.mutation
        async def update_student(self, code: int, student: StudentInput) -> Student:
            return unwrap(await resolvers.update(code, strawberry.asdict(student)))

        @strawberry.mutation
        async def delete_student(self, code: int) -> Optional[int]:
            return unwrap(await resolvers.remove(code))

    return ResourceDescriptor(
        name="students",
        config=config,
        query=StudentQuery,
        mutation=StudentMutation,
    )
