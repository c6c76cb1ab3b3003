"""End-to-end tests: GraphQL requests through FastAPI against a fake backend."""

import json
from typing import Optional

import httpx
import pytest
import strawberry
from fastapi import FastAPI
from fastapi.testclient import TestClient
from strawberry.types import Info

from campusgate.app import create_app
from campusgate.connectors.requester import BackendRequester
from campusgate.core.config import ResourceConfig
from campusgate.graphql import GraphQLGateway, compose
from campusgate.resources import ResourceDescriptor


@pytest.fixture
def client(settings, backend):
    requester = BackendRequester(timeout_seconds=5, transport=httpx.MockTransport(backend))
    app = create_app(settings, requester=requester)
    with TestClient(app) as client:
        yield client


def _graphql(client: TestClient, query: str, variables=None, headers=None) -> dict:
    response = client.post(
        "/graphql",
        json={"query": query, "variables": variables or {}},
        headers=headers or {},
    )
    assert response.status_code == 200
    return response.json()


class TestQueries:
    def test_all_courses(self, client, backend) -> None:
        backend.json("GET", "/courses/", [
            {"code": 1, "name": "Logic", "credits": 3, "professor": "Frege"},
            {"code": 2, "name": "Sets", "credits": 4, "professor": "Cantor"},
        ])

        body = _graphql(client, "{ allCourses { code name } }")

        assert body == {"data": {"allCourses": [
            {"code": 1, "name": "Logic"},
            {"code": 2, "name": "Sets"},
        ]}}
        assert str(backend.requests[0].url).startswith("http://courses.local:4000/courses/")

    def test_student_by_code(self, client, backend) -> None:
        backend.json("GET", "/students/3", {"code": 3, "username": "ada", "password": "x"})

        body = _graphql(client, "{ studentByCode(code: 3) { code username } }")

        assert body["data"] == {"studentByCode": {"code": 3, "username": "ada"}}

    def test_get_requests_are_served(self, client, backend) -> None:
        backend.json("GET", "/students/", [])

        response = client.get("/graphql", params={"query": "{ allStudents { code } }"})

        assert response.status_code == 200
        assert response.json() == {"data": {"allStudents": []}}

    def test_unreachable_backend_reports_error(self, client, backend) -> None:
        backend.on("GET", "/courses/", httpx.ConnectError("Connection refused"))

        body = _graphql(client, "{ allCourses { code } }")

        assert body["data"] is None
        assert "Connection refused" in body["errors"][0]["message"]
        assert body["errors"][0]["path"] == ["allCourses"]

    def test_structured_backend_error_is_normalized(self, client, backend) -> None:
        backend.json(
            "GET",
            "/courses/9",
            {"error": {"id": "E1", "code": 404, "description": "not found"}},
            status_code=404,
        )

        body = _graphql(client, "{ courseByCode(code: 9) { name } }")

        assert body["errors"] == [
            {"message": "E1", "code": 404, "description": "not found", "path": ["courseByCode"]}
        ]

    def test_invalid_query_uses_default_formatting(self, client) -> None:
        response = client.post("/graphql", json={"query": "{ allTeachers { code } }"})

        errors = response.json()["errors"]
        assert "allTeachers" in errors[0]["message"]
        assert "code" not in errors[0]


class TestMutations:
    def test_create_course_returns_backend_echo(self, client, backend) -> None:
        def echo_created(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"code": 7, **json.loads(request.content)})

        backend.on("POST", "/courses", echo_created)

        body = _graphql(
            client,
            """
            mutation {
              createCourse(course: {name: "Algorithms", credits: 4, professor: "Ada"}) {
                code name credits professor
              }
            }
            """,
        )

        assert body["data"]["createCourse"] == {
            "code": 7,
            "name": "Algorithms",
            "credits": 4,
            "professor": "Ada",
        }
        assert backend.body_of() == {"name": "Algorithms", "credits": 4, "professor": "Ada"}

    def test_update_student_sends_student_argument(self, client, backend) -> None:
        backend.json("PUT", "/students/3", {"code": 3, "username": "grace", "password": "y"})

        body = _graphql(
            client,
            "mutation($s: StudentInput!) { updateStudent(code: 3, student: $s) { username } }",
            variables={"s": {"username": "grace", "password": "y"}},
        )

        assert body["data"] == {"updateStudent": {"username": "grace"}}
        assert backend.requests[-1].method == "PUT"
        assert backend.body_of() == {"username": "grace", "password": "y"}

    def test_delete_student_passes_body_through(self, client, backend) -> None:
        backend.json("DELETE", "/students/3", 1)

        body = _graphql(client, "mutation { deleteStudent(code: 3) }")

        assert body == {"data": {"deleteStudent": 1}}

    def test_one_failing_field_keeps_partial_data(self, client, backend) -> None:
        backend.json("DELETE", "/students/3", 1)
        backend.on("DELETE", "/courses/1", httpx.ConnectError("Connection refused"))

        body = _graphql(client, "mutation { deleteCourse(code: 1) deleteStudent(code: 3) }")

        assert body["data"] == {"deleteCourse": None, "deleteStudent": 1}
        assert body["errors"][0]["path"] == ["deleteCourse"]


class TestFrontDoor:
    def test_graphiql_page_points_at_graphql(self, client) -> None:
        response = client.get("/graphiql")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "url: '/graphql'" in response.text

    def test_health_lists_resources(self, client) -> None:
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert [r["name"] for r in body["resources"]] == ["courses", "students"]
        assert body["resources"][0]["base_url"] == "http://courses.local:4000/courses"

    def test_request_id_echoed(self, client, backend) -> None:
        backend.json("GET", "/courses/", [])

        response = client.post(
            "/graphql",
            json={"query": "{ allCourses { code } }"},
            headers={"X-Request-ID": "abc", "Authorization": "Bearer t0ken"},
        )

        assert response.headers["X-Request-ID"] == "abc"
        assert response.json() == {"data": {"allCourses": []}}


@strawberry.type
class CallerQuery:
    @strawberry.field
    def who(self, info: Info) -> Optional[str]:
        return info.context.token


@strawberry.type
class CallerMutation:
    @strawberry.mutation
    def noop(self) -> Optional[int]:
        return None


@pytest.fixture
def caller_client():
    descriptor = ResourceDescriptor(
        name="caller",
        config=ResourceConfig(name="caller", host="caller.local", port=1, entry="caller"),
        query=CallerQuery,
        mutation=CallerMutation,
    )
    app = FastAPI()
    app.include_router(GraphQLGateway(compose([descriptor])).get_router())
    with TestClient(app) as client:
        yield client


class TestCredentialPassthrough:
    def test_bearer_token_reaches_resolvers(self, caller_client) -> None:
        body = _graphql(caller_client, "{ who }", headers={"Authorization": "Bearer abc"})

        assert body == {"data": {"who": "abc"}}

    def test_missing_header_gives_no_token(self, caller_client) -> None:
        body = _graphql(caller_client, "{ who }")

        assert body == {"data": {"who": None}}

    def test_non_bearer_scheme_is_ignored(self, caller_client) -> None:
        body = _graphql(caller_client, "{ who }", headers={"Authorization": "Basic dXNlcg=="})

        assert body == {"data": {"who": None}}
