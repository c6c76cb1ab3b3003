"""Tests for query string building."""

import pytest

from campusgate.connectors.query_string import build_query, get_request
from campusgate.core.result import Result


class RecordingRequester:
    def __init__(self):
        self.calls = []

    async def perform(self, url, method, body=None):
        self.calls.append((url, method, body))
        return Result.ok([])


class TestBuildQuery:
    def test_empty_params_end_with_question_mark(self) -> None:
        assert build_query("http://svc:80/courses", {}) == "http://svc:80/courses?"

    def test_none_params_behave_like_empty(self) -> None:
        assert build_query("http://svc:80/courses") == "http://svc:80/courses?"

    def test_falsy_values_skipped_and_lists_expanded(self) -> None:
        url = build_query("u", {"a": ["x", "y"], "b": 0, "c": None, "d": "z"})

        assert url == "u?a=x&a=y&d=z&"

    @pytest.mark.parametrize("value", ["", 0, None, False, []])
    def test_each_falsy_value_is_excluded(self, value) -> None:
        assert build_query("u", {"k": value}) == "u?"

    def test_parameter_order_is_preserved(self) -> None:
        assert build_query("u", {"b": 2, "a": 1}) == "u?b=2&a=1&"

    def test_tuple_values_expand_like_lists(self) -> None:
        assert build_query("u", {"id": (3, 1, 2)}) == "u?id=3&id=1&id=2&"

    def test_true_is_rendered_lowercase(self) -> None:
        assert build_query("u", {"active": True}) == "u?active=true&"


@pytest.mark.asyncio
async def test_get_request_joins_path_and_issues_get() -> None:
    requester = RecordingRequester()

    result = await get_request(requester, "http://svc:80/courses", "", {"page": 2})

    assert result.is_ok
    assert requester.calls == [("http://svc:80/courses/?page=2&", "GET", None)]
