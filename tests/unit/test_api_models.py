"""
Unit tests for API request/response models.

Tests camelCase aliasing, permissive request parsing and the page envelope.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from restdemo.api.models import (
    PageResponse,
    ResourceRequest,
    TodoFullResponse,
    TodoRequest,
    TodoResponse,
)
from restdemo.domain.pagination import Direction, Sort, paginate
from restdemo.domain.ports import Todo


class TestTodoRequest:
    """Tests for TodoRequest model."""

    def test_accepts_camel_case_due_date(self) -> None:
        request = TodoRequest.model_validate({"title": "Buy milk", "dueDate": "2026-10-20"})
        assert request.due_date == date(2026, 10, 20)

    def test_missing_title_is_left_to_constraints(self) -> None:
        """Presence rules are declared as constraints, not enforced by pydantic."""
        request = TodoRequest.model_validate({})
        assert request.title is None

    def test_invalid_date_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TodoRequest.model_validate({"title": "x", "dueDate": "not-a-date"})
        assert "dueDate" in str(exc_info.value)

    def test_dump_by_alias_matches_constraint_fields(self) -> None:
        payload = TodoRequest(title="x").model_dump(by_alias=True)
        assert {c.field for c in TodoRequest.constraints} <= set(payload)

    def test_constraints_are_not_fields(self) -> None:
        assert "constraints" not in TodoRequest.model_fields


class TestResourceRequest:
    """Tests for ResourceRequest model."""

    def test_constraint_messages(self) -> None:
        messages = [c.check(None, None) for c in ResourceRequest.constraints]
        assert messages == ["id is required", "name is required"]


class TestTodoResponses:
    """Tests for to-do response models."""

    def test_serializes_camel_case(self) -> None:
        todo = Todo(id=1, title="a", due_date=date(2026, 10, 20), tags=["x"])
        data = TodoResponse.from_entity(todo).model_dump(by_alias=True, mode="json")
        assert data == {"id": 1, "title": "a", "description": None, "dueDate": "2026-10-20", "tags": ["x"]}

    def test_full_response_carries_flags(self) -> None:
        todo = Todo(id=1, title="a", completed=True, archived=True)
        data = TodoFullResponse.from_entity(todo).model_dump(by_alias=True)
        assert data["completed"] is True
        assert data["archived"] is True
        assert data["tags"] is None


class TestPageResponse:
    """Tests for the page envelope model."""

    def test_from_page(self) -> None:
        page = paginate(5, 2, 2, ["e"], Sort.by("title", direction=Direction.DESC))
        data = PageResponse[str].from_page(page).model_dump(by_alias=True)

        assert data["content"] == ["e"]
        assert data["totalElements"] == 5
        assert data["totalPages"] == 3
        assert data["number"] == 2
        assert data["size"] == 2
        assert data["numberOfElements"] == 1
        assert data["first"] is False
        assert data["last"] is True
        assert data["empty"] is False
        assert data["pageable"] == {
            "pageNumber": 2,
            "pageSize": 2,
            "offset": 4,
            "sort": {"empty": False, "sorted": True, "unsorted": False},
            "paged": True,
            "unpaged": False,
        }
        assert data["sort"]["sorted"] is True
