"""
Unit tests for the in-memory repository adapters.

Tests verify:
- Id and created_at assignment
- Callers never share state with the store
- Filtered, ordered paging with full-dataset totals
"""

from concurrent.futures import ThreadPoolExecutor

from restdemo.adapters.repository.memory import InMemoryResourceRepository, InMemoryTodoRepository
from restdemo.domain.pagination import DEFAULT_SORT, Direction, Sort
from restdemo.domain.ports import Resource, Todo


class TestInMemoryTodoRepository:
    """Tests for InMemoryTodoRepository."""

    def test_save_assigns_ascending_ids(self) -> None:
        repo = InMemoryTodoRepository()
        first = repo.save(Todo(title="a"))
        second = repo.save(Todo(title="b"))
        assert (first.id, second.id) == (1, 2)
        assert first.created_at is not None

    def test_save_with_explicit_id_advances_sequence(self) -> None:
        repo = InMemoryTodoRepository()
        repo.save(Todo(id=10, title="a"))
        assert repo.save(Todo(title="b")).id == 11

    def test_returned_entities_are_copies(self) -> None:
        repo = InMemoryTodoRepository()
        saved = repo.save(Todo(title="a"))
        saved.title = "changed"
        assert repo.find_by_id(saved.id).title == "a"

    def test_find_by_id_unknown_returns_none(self) -> None:
        assert InMemoryTodoRepository().find_by_id(1) is None

    def test_delete_and_count(self) -> None:
        repo = InMemoryTodoRepository()
        saved = repo.save(Todo(title="a"))
        repo.delete_by_id(saved.id)
        repo.delete_by_id(saved.id)
        assert repo.count() == 0

    def test_find_page_slices_and_counts_all_matching(self) -> None:
        repo = InMemoryTodoRepository()
        for i in range(5):
            repo.save(Todo(title=f"t{i}"))

        items, total = repo.find_page(2, 2, DEFAULT_SORT)

        assert [t.id for t in items] == [3, 4]
        assert total == 5

    def test_find_page_past_the_end(self) -> None:
        repo = InMemoryTodoRepository()
        for i in range(5):
            repo.save(Todo(title=f"t{i}"))

        items, total = repo.find_page(6, 2, DEFAULT_SORT)

        assert items == []
        assert total == 5

    def test_find_page_archived_filter(self) -> None:
        repo = InMemoryTodoRepository()
        repo.save(Todo(title="live"))
        repo.save(Todo(title="old", archived=True))

        items, total = repo.find_page(0, 10, DEFAULT_SORT, archived=False)

        assert [t.title for t in items] == ["live"]
        assert total == 1

    def test_find_page_sorts_by_requested_field(self) -> None:
        repo = InMemoryTodoRepository()
        for title in ("b", "a", "c"):
            repo.save(Todo(title=title))

        items, _ = repo.find_page(0, 10, Sort.by("title", direction=Direction.DESC))

        assert [t.title for t in items] == ["c", "b", "a"]

    def test_concurrent_saves_get_unique_ids(self) -> None:
        repo = InMemoryTodoRepository()
        with ThreadPoolExecutor(max_workers=8) as executor:
            saved = list(executor.map(lambda i: repo.save(Todo(title=str(i))), range(50)))
        assert len({t.id for t in saved}) == 50


class TestInMemoryResourceRepository:
    """Tests for InMemoryResourceRepository."""

    def test_save_replaces_same_id(self) -> None:
        repo = InMemoryResourceRepository()
        repo.save(Resource("1", "old"))
        repo.save(Resource("1", "new"))
        assert repo.find_all() == [Resource("1", "new")]
        assert repo.count() == 1

    def test_delete_unknown_is_noop(self) -> None:
        repo = InMemoryResourceRepository()
        repo.delete_by_id("missing")
        assert repo.count() == 0
