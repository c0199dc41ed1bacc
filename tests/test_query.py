from datetime import date, datetime, timedelta, timezone

from todo_api.models import Priority
from todo_api.query import (
    SortDirection,
    TodoQuery,
    paginate,
    resolve_sort_field,
    run_query,
    sort_todos,
)

BASE = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_todo(
    todo_id,
    name="Task",
    description=None,
    is_complete=False,
    due_date=None,
    priority=Priority.MEDIUM,
    tags=None,
):
    return {
        "id": todo_id,
        "name": name,
        "description": description,
        "is_complete": is_complete,
        "created_date": BASE + timedelta(minutes=todo_id),
        "due_date": due_date,
        "priority": priority,
        "tags": list(tags or []),
    }


def ids(todos):
    return [t["id"] for t in todos]


class TestFilters:
    def test_search_matches_name_case_insensitively(self):
        todos = [make_todo(1, name="Buy milk"), make_todo(2, name="Walk dog")]
        page = run_query(todos, TodoQuery(search_query="MILK"))
        assert ids(page.data) == [1]

    def test_search_matches_description(self):
        todos = [make_todo(1, name="Errand", description="Pick up MILK"), make_todo(2, name="Walk dog")]
        page = run_query(todos, TodoQuery(search_query="milk"))
        assert ids(page.data) == [1]

    def test_empty_search_matches_everything(self):
        todos = [make_todo(1), make_todo(2)]
        page = run_query(todos, TodoQuery(search_query=""))
        assert page.total_count == 2

    def test_priority_filter(self):
        todos = [make_todo(1, priority=Priority.LOW), make_todo(2, priority=Priority.HIGH)]
        page = run_query(todos, TodoQuery(priority=Priority.HIGH))
        assert ids(page.data) == [2]

    def test_completion_filter(self):
        todos = [make_todo(1, is_complete=True), make_todo(2), make_todo(3, is_complete=True)]
        assert ids(run_query(todos, TodoQuery(is_complete=True)).data) == [1, 3]
        assert ids(run_query(todos, TodoQuery(is_complete=False)).data) == [2]

    def test_tag_filter_normalizes_probe(self):
        todos = [make_todo(1, tags=["shopping"]), make_todo(2, tags=["work"])]
        page = run_query(todos, TodoQuery(tag="  Shopping "))
        assert ids(page.data) == [1]

    def test_filters_combine(self):
        todos = [
            make_todo(1, name="Buy milk", tags=["shopping"], priority=Priority.HIGH),
            make_todo(2, name="Buy bread", tags=["shopping"], priority=Priority.LOW),
            make_todo(3, name="Buy milk", tags=["work"], priority=Priority.HIGH),
            make_todo(4, name="Buy milk", tags=["shopping"], priority=Priority.HIGH, is_complete=True),
        ]
        query = TodoQuery(tag="shopping", search_query="milk", priority=Priority.HIGH, is_complete=False)
        assert ids(run_query(todos, query).data) == [1]


class TestSorting:
    def test_sort_by_name(self):
        todos = [make_todo(1, name="b"), make_todo(2, name="a"), make_todo(3, name="c")]
        assert ids(sort_todos(todos, "name")) == [2, 1, 3]
        assert ids(sort_todos(todos, "name", SortDirection.DESC)) == [3, 1, 2]

    def test_sort_by_priority_uses_ordinal(self):
        todos = [
            make_todo(1, priority=Priority.HIGH),
            make_todo(2, priority=Priority.LOW),
            make_todo(3, priority=Priority.MEDIUM),
        ]
        assert ids(sort_todos(todos, "priority")) == [2, 3, 1]
        assert ids(sort_todos(todos, "priority", SortDirection.DESC)) == [1, 3, 2]

    def test_due_date_nulls_last_in_both_directions(self):
        todos = [
            make_todo(1),
            make_todo(2, due_date=date(2025, 3, 1)),
            make_todo(3),
            make_todo(4, due_date=date(2025, 1, 1)),
        ]
        assert ids(sort_todos(todos, "dueDate")) == [4, 2, 1, 3]
        assert ids(sort_todos(todos, "dueDate", SortDirection.DESC)) == [2, 4, 1, 3]

    def test_sort_is_stable_for_equal_keys(self):
        todos = [
            make_todo(1, priority=Priority.HIGH),
            make_todo(2, priority=Priority.LOW),
            make_todo(3, priority=Priority.HIGH),
            make_todo(4, priority=Priority.LOW),
        ]
        assert ids(sort_todos(todos, "priority")) == [2, 4, 1, 3]
        assert ids(sort_todos(todos, "priority", SortDirection.DESC)) == [1, 3, 2, 4]

    def test_sort_by_is_complete_and_created_date(self):
        todos = [make_todo(1, is_complete=True), make_todo(2), make_todo(3, is_complete=True)]
        assert ids(sort_todos(todos, "isComplete")) == [2, 1, 3]
        assert ids(sort_todos(todos, "createdDate", SortDirection.DESC)) == [3, 2, 1]

    def test_unrecognized_sort_field_keeps_incoming_order(self):
        todos = [make_todo(3, name="a"), make_todo(1, name="c"), make_todo(2, name="b")]
        assert ids(sort_todos(todos, "color")) == [3, 1, 2]
        assert ids(sort_todos(todos, None, SortDirection.DESC)) == [3, 1, 2]

    def test_resolve_sort_field_is_lenient(self):
        assert resolve_sort_field("DueDate") == "duedate"
        assert resolve_sort_field("due_date") == "duedate"
        assert resolve_sort_field(" isComplete ") == "iscomplete"
        assert resolve_sort_field("bogus") is None
        assert resolve_sort_field("") is None


class TestPagination:
    def test_twenty_three_items_in_pages_of_ten(self):
        items = [make_todo(i) for i in range(1, 24)]

        first = paginate(items, 1, 10)
        assert first.total_count == 23
        assert first.total_pages == 3
        assert first.has_next_page is True
        assert first.has_previous_page is False

        last = paginate(items, 3, 10)
        assert ids(last.data) == [21, 22, 23]
        assert last.has_next_page is False
        assert last.has_previous_page is True

        beyond = paginate(items, 4, 10)
        assert beyond.data == []
        assert beyond.total_pages == 3
        assert beyond.has_next_page is False

    def test_values_below_one_are_clamped(self):
        items = [make_todo(i) for i in range(1, 6)]
        page = paginate(items, 0, -5)
        assert page.page_number == 1
        assert page.page_size == 1
        assert ids(page.data) == [1]

    def test_empty_collection(self):
        page = paginate([], 1, 10)
        assert page.total_count == 0
        assert page.total_pages == 0
        assert page.has_next_page is False
        assert page.has_previous_page is False

    def test_total_count_is_post_filter(self):
        todos = [make_todo(i, is_complete=(i % 2 == 0)) for i in range(1, 11)]
        page = run_query(todos, TodoQuery(is_complete=True, page_size=2, page_number=2))
        assert page.total_count == 5
        assert page.total_pages == 3
        assert ids(page.data) == [6, 8]

    def test_sort_applies_before_paging(self):
        todos = [make_todo(i, name=f"n{10 - i}") for i in range(1, 6)]
        page = run_query(todos, TodoQuery(sort_by="name", page_size=2))
        assert ids(page.data) == [5, 4]
