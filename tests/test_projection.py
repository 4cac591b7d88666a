"""Tests for the task view projection."""
import copy

from taskboard.services.projection import project_tasks


def titles(tasks):
    return [t["title"] for t in tasks]


SNAPSHOT = [
    {"id": "1", "title": "A", "status": "done", "createdAt": "2024-01-01T10:00:00"},
    {"id": "2", "title": "B", "status": "todo", "createdAt": "2024-01-02T10:00:00"},
]


def test_default_view_is_newest_first():
    assert titles(project_tasks(SNAPSHOT)) == ["B", "A"]


def test_status_filter():
    assert titles(project_tasks(SNAPSHOT, status_filter="todo")) == ["B"]
    assert titles(project_tasks(SNAPSHOT, status_filter="in-progress")) == []


def test_priority_sort():
    tasks = [
        {"title": "l", "priority": "low"},
        {"title": "h", "priority": "high"},
        {"title": "m", "priority": "medium"},
    ]

    result = project_tasks(tasks, sort_by="priority")

    assert [t["priority"] for t in result] == ["high", "medium", "low"]


def test_priority_sort_is_stable():
    tasks = [
        {"title": "first high", "priority": "high"},
        {"title": "low", "priority": "low"},
        {"title": "second high", "priority": "high"},
    ]

    assert titles(project_tasks(tasks, sort_by="priority")) == ["first high", "second high", "low"]


def test_due_date_sort_puts_undated_last():
    tasks = [
        {"title": "none", "dueDate": None},
        {"title": "later", "dueDate": "2030-06-01"},
        {"title": "sooner", "dueDate": "2030-01-01"},
        {"title": "missing"},
    ]

    assert titles(project_tasks(tasks, sort_by="dueDate")) == ["sooner", "later", "none", "missing"]


def test_title_sort():
    tasks = [{"title": "banana"}, {"title": "Apple"}, {"title": "cherry"}]

    assert titles(project_tasks(tasks, sort_by="title")) == ["Apple", "banana", "cherry"]


def test_search_matches_title_or_description_case_insensitively():
    tasks = [
        {"title": "Groceries", "description": "milk and EGGS"},
        {"title": "Email Bob", "description": None},
        {"title": "Laundry"},
    ]

    assert titles(project_tasks(tasks, search_term="eggs")) == ["Groceries"]
    assert titles(project_tasks(tasks, search_term="BOB")) == ["Email Bob"]
    assert titles(project_tasks(tasks, search_term="")) == ["Groceries", "Email Bob", "Laundry"]


def test_search_and_status_combine():
    tasks = [
        {"title": "report draft", "status": "todo"},
        {"title": "report final", "status": "done"},
    ]

    assert titles(project_tasks(tasks, status_filter="done", search_term="report")) == ["report final"]


def test_tasks_without_title_are_dropped():
    tasks = [{"title": ""}, {"description": "orphan"}, None, {"title": "kept"}]

    assert titles(project_tasks(tasks)) == ["kept"]


def test_unknown_sort_key_falls_back_to_created_at():
    assert titles(project_tasks(SNAPSHOT, sort_by="bogus")) == ["B", "A"]


def test_input_is_not_mutated():
    snapshot = copy.deepcopy(SNAPSHOT)

    result = project_tasks(snapshot, sort_by="title")
    result.append({"title": "extra"})

    assert snapshot == SNAPSHOT


def test_mixed_naive_and_aware_timestamps():
    tasks = [
        {"title": "aware", "createdAt": "2024-01-03T00:00:00Z"},
        {"title": "naive", "createdAt": "2024-01-02T00:00:00"},
    ]

    assert titles(project_tasks(tasks)) == ["aware", "naive"]


def test_title_sort_ignores_accents():
    tasks = [{"title": "Zebra"}, {"title": "Émile"}, {"title": "eclair"}]

    assert titles(project_tasks(tasks, sort_by="title")) == ["eclair", "Émile", "Zebra"]
