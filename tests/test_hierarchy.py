"""Tests for the subtask fan-out and the /todos/tree endpoint."""

import asyncio

from planner.database import get_session
from planner.models import Todo
from planner.services import hierarchy
from planner.services.query import FilterSpec, parse_filter_spec


def test_subtask_spec_keeps_filters_and_resets_paging():
    spec = parse_filter_spec({
        "status": "all",
        "state": "todo",
        "category": "Kuku",
        "priority": "high",
        "parentId": "__root__",
        "q": "flight",
        "dueFrom": "2025-01-01",
        "skip": "50",
        "take": "5",
    })
    child_spec = hierarchy.subtask_spec(spec, "root-1")
    assert child_spec.parent_id == "root-1"
    assert child_spec.status == "all"
    assert child_spec.states == spec.states
    assert child_spec.categories == spec.categories
    assert child_spec.priorities == spec.priorities
    assert child_spec.search_text == ""
    assert child_spec.due_from is None
    assert child_spec.skip == 0
    assert child_spec.take == 100


def test_tree_returns_roots_with_subtasks(client, make_todo):
    trip = make_todo(title="Plan trip", dueAt="2025-05-01")
    flight = make_todo(title="Book flight", parentId=trip["id"], dueAt="2025-04-01")
    hotel = make_todo(title="Book hotel", parentId=trip["id"], dueAt="2025-04-15")
    chores = make_todo(title="Chores", dueAt="2025-06-01")

    response = client.get("/api/todos/tree")
    assert response.status_code == 200
    data = response.json()
    assert data["parentId"] == "__root__"
    assert data["total"] == 2
    assert [item["id"] for item in data["items"]] == [trip["id"], chores["id"]]
    assert [item["id"] for item in data["subtasks"][trip["id"]]] == [flight["id"], hotel["id"]]
    assert data["subtasks"][chores["id"]] == []


def test_tree_applies_filters_to_subtasks(client, make_todo):
    root = make_todo(title="Release", priority="high")
    visible = make_todo(title="Tag build", parentId=root["id"], priority="high")
    make_todo(title="Update wiki", parentId=root["id"], priority="low")
    hidden = make_todo(title="Old step", parentId=root["id"], priority="high")
    client.delete(f"/api/todos/{hidden['id']}")

    response = client.get("/api/todos/tree", params={"priority": "high"})
    data = response.json()
    assert [item["id"] for item in data["items"]] == [root["id"]]
    assert [item["id"] for item in data["subtasks"][root["id"]]] == [visible["id"]]


def test_tree_isolates_failed_fetches(client, make_todo, monkeypatch):
    good = make_todo(title="Good root")
    bad = make_todo(title="Bad root")
    child = make_todo(title="Child", parentId=good["id"])
    make_todo(title="Orphaned by failure", parentId=bad["id"])

    original = hierarchy.fetch_subtasks

    def flaky(session_factory, spec):
        if spec.parent_id == bad["id"]:
            raise RuntimeError("connection reset")
        return original(session_factory, spec)

    monkeypatch.setattr(hierarchy, "fetch_subtasks", flaky)

    response = client.get("/api/todos/tree")
    assert response.status_code == 200
    subtasks = response.json()["subtasks"]
    assert subtasks[bad["id"]] == []
    assert [item["id"] for item in subtasks[good["id"]]] == [child["id"]]


def test_load_subtasks_directly(make_todo):
    root = make_todo(title="Root")
    make_todo(title="Child", parentId=root["id"])

    with get_session() as session:
        roots = [session.get(Todo, root["id"])]

    subtasks = asyncio.run(hierarchy.load_subtasks(roots, FilterSpec(parent_scope="root")))
    assert list(subtasks) == [root["id"]]
    assert [todo.title for todo in subtasks[root["id"]]] == ["Child"]


def test_load_subtasks_empty_page():
    assert asyncio.run(hierarchy.load_subtasks([], FilterSpec())) == {}
