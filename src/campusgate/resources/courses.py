"""
Courses resource: types and root fields backed by the courses service.
"""

from typing import List, Optional

import strawberry

from campusgate.connectors.requester import BackendRequester
from campusgate.core.config import ResourceConfig
from .base import ResourceDescriptor, ResourceResolverSet, unwrap


@strawberry.type
class Course:
    code: int
    name: str
    credits: int
    professor: str


@strawberry.input
class CourseInput:
    name: str
    credits: int
    professor: str


def build_descriptor(config: ResourceConfig, requester: BackendRequester) -> ResourceDescriptor:
    """Bind the course fields to the service described by ``config``."""
    resolvers = ResourceResolverSet(config, requester)

    @strawberry.type
    class CourseQuery:
        @strawberry.field
        async def all_courses(self) -> List[Optional[Course]]:
            return unwrap(await resolvers.list())

        @strawberry.field
        async def course_by_code(self, code: int) -> Course:
            return unwrap(await resolvers.get_by_key(code))

    @strawberry.type
    class CourseMutation:
        @strawberry.mutation
        async def create_course(self, course: CourseInput) -> Course:
            return unwrap(await resolvers.create(strawberry.asdict(course)))

        @strawberry.mutation
        async def update_course(self, code: int, course: CourseInput) -> Course:
            return unwrap(await resolvers.update(code, strawberry.asdict(course)))

        @strawberry.mutation
        async def delete_course(self, code: int) -> Optional[int]:
            return unwrap(await resolvers.remove(code))

    return ResourceDescriptor(
        name="courses",
        config=config,
        query=CourseQuery,
        mutation=CourseMutation,
    )
