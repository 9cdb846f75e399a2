# tests/test_client_view.py

from __future__ import annotations

import httpx
import pytest

from todolist.client.api import TaskApiClient
from todolist.client.view import (
    ADD_ERROR,
    DELETE_ERROR,
    LOAD_ERROR,
    SAVE_ERROR,
    TOGGLE_ERROR,
    TaskFilter,
    TaskListView,
)

API = "/api/task"


@pytest.fixture()
def view(client) -> TaskListView:
    """View wired to the real app through the test HTTP client."""
    return TaskListView(TaskApiClient(f"http://test{API}", client=client))


def _failing_view(handler) -> TaskListView:
    transport = httpx.MockTransport(handler)
    http = httpx.AsyncClient(transport=transport, base_url="http://test")
    return TaskListView(TaskApiClient(f"http://test{API}", client=http))


async def test_load_populates_mirror(view, client) -> None:
    await client.post(API, json={"title": "one"})
    await client.post(API, json={"title": "two"})

    await view.load()

    assert view.loading is False
    assert view.error is None
    assert [t.title for t in view.tasks] == ["one", "two"]


async def test_view_is_loading_until_first_fetch(view) -> None:
    assert view.loading is True

    await view.load()

    assert view.loading is False


async def test_add_prepends_server_record(view) -> None:
    first = await view.add("  first  ", "  details ")
    second = await view.add("second")

    assert [t.id for t in view.tasks] == [second.id, first.id]
    assert first.title == "first"
    assert first.description == "details"
    assert first.is_completed is False


async def test_add_blank_title_sends_nothing(view, client) -> None:
    assert await view.add("   ") is None
    assert view.tasks == []
    assert (await client.get(API)).json() == []


async def test_toggle_complete_updates_server_then_mirror(view, client) -> None:
    task = await view.add("toggle me")

    await view.toggle_complete(task)

    assert view.tasks[0].is_completed is True
    assert (await client.get(f"{API}/{task.id}")).json()["isCompleted"] is True


async def test_toggle_failure_leaves_mirror_untouched(view, client) -> None:
    task = await view.add("gone soon")
    await client.delete(f"{API}/{task.id}")

    await view.toggle_complete(task)

    assert view.error == TOGGLE_ERROR
    assert view.tasks[0].is_completed is False


async def test_save_edit_updates_and_ends_editing(view, client) -> None:
    task = await view.add("typo")
    view.begin_edit(task)
    edited = view.editing.model_copy(update={"title": "fixed"})

    await view.save_edit(edited)

    assert view.editing is None
    assert view.tasks[0].title == "fixed"
    assert (await client.get(f"{API}/{task.id}")).json()["title"] == "fixed"


async def test_save_edit_with_blank_title_deletes(view, client) -> None:
    task = await view.add("to be blanked")
    view.begin_edit(task)

    await view.save_edit(task.model_copy(update={"title": "   "}))

    assert view.editing is None
    assert view.tasks == []
    assert (await client.get(f"{API}/{task.id}")).status_code == 404


async def test_cancel_edit(view) -> None:
    task = await view.add("leave me")
    view.begin_edit(task)
    view.cancel_edit()
    assert view.editing is None
    assert view.tasks[0].title == "leave me"


async def test_delete_removes_after_confirmation(view, client) -> None:
    keep = await view.add("keep")
    drop = await view.add("drop")

    await view.delete(drop.id)

    assert [t.id for t in view.tasks] == [keep.id]
    assert (await client.get(f"{API}/{drop.id}")).status_code == 404


async def test_delete_unknown_sets_error(view) -> None:
    await view.delete("does-not-exist")
    assert view.error == DELETE_ERROR


async def test_filters_are_local(view) -> None:
    done = await view.add("done")
    await view.add("open")
    await view.toggle_complete(done)

    view.set_filter("completed")
    assert [t.title for t in view.visible_tasks] == ["done"]
    view.set_filter(TaskFilter.ACTIVE)
    assert [t.title for t in view.visible_tasks] == ["open"]
    assert view.items_left_label == "1 task left"


async def test_load_failure_sets_dismissable_error() -> None:
    view = _failing_view(lambda request: httpx.Response(500))

    await view.load()

    assert view.loading is False
    assert view.error == LOAD_ERROR
    assert view.tasks == []

    view.dismiss_error()
    assert view.error is None


async def test_load_with_malformed_json_sets_error() -> None:
    view = _failing_view(lambda request: httpx.Response(200, content=b"<html>"))
    await view.load()
    assert view.error == LOAD_ERROR


async def test_transport_failure_on_add_leaves_list_unchanged() -> None:
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    view = _failing_view(unreachable)

    assert await view.add("never stored") is None
    assert view.error == ADD_ERROR
    assert view.tasks == []


async def test_save_failure_keeps_editing(view, client) -> None:
    task = await view.add("edit me")
    await client.delete(f"{API}/{task.id}")
    view.begin_edit(task)

    await view.save_edit(task.model_copy(update={"title": "edited"}))

    assert view.error == SAVE_ERROR
    assert view.editing is not None
    assert view.tasks[0].title == "edit me"


async def test_api_client_get_task_round_trip(client) -> None:
    api = TaskApiClient(f"http://test{API}", client=client)
    created = await api.create_task("fetch me", "by id", is_completed=True)

    fetched = await api.get_task(created.id)

    assert fetched == created
    assert fetched.is_completed is True


async def test_api_client_get_task_missing_raises(client) -> None:
    api = TaskApiClient(f"http://test{API}", client=client)

    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        await api.get_task("no-such-task")

    assert excinfo.value.response.status_code == 404
