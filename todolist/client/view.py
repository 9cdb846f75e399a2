import logging
from enum import Enum
from typing import Iterable

import httpx

from todolist.client.api import TaskApiClient
from todolist.models import TaskRead

logger = logging.getLogger(__name__)

# Failures the view turns into a banner message. ValueError covers bad JSON.
_REQUEST_ERRORS = (httpx.HTTPError, ValueError)

LOAD_ERROR = (
    "Failed to load tasks. Please ensure the backend is running "
    "and the API URL is correct."
)
ADD_ERROR = "Failed to add task."
TOGGLE_ERROR = "Failed to update task status."
SAVE_ERROR = "Failed to save task."
DELETE_ERROR = "Failed to delete task."


class TaskFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def filter_tasks(tasks: Iterable[TaskRead], task_filter: TaskFilter) -> list[TaskRead]:
    """Project the task list through a filter. Never mutates its input."""
    task_filter = TaskFilter(task_filter)
    if task_filter is TaskFilter.ACTIVE:
        return [task for task in tasks if not task.is_completed]
    if task_filter is TaskFilter.COMPLETED:
        return [task for task in tasks if task.is_completed]
    return list(tasks)


class TaskListView:
    """
    Client-side state for the task list.

    `tasks` mirrors the server and is only touched after the server has
    acknowledged a change; nothing is applied optimistically before that.
    """

    def __init__(self, api: TaskApiClient):
        self.api = api
        self.tasks: list[TaskRead] = []
        # nothing is known until the first load() finishes
        self.loading = True
        self.error: str | None = None
        self.filter = TaskFilter.ALL
        self.editing: TaskRead | None = None

    # --- derived state ---

    @property
    def visible_tasks(self) -> list[TaskRead]:
        return filter_tasks(self.tasks, self.filter)

    @property
    def active_count(self) -> int:
        return sum(1 for task in self.tasks if not task.is_completed)

    @property
    def items_left_label(self) -> str:
        count = self.active_count
        return f"{count} {'task' if count == 1 else 'tasks'} left"

    def set_filter(self, task_filter: TaskFilter | str) -> None:
        self.filter = TaskFilter(task_filter)

    def dismiss_error(self) -> None:
        self.error = None

    def _fail(self, message: str, exc: Exception) -> None:
        logger.error("%s (%s)", message, exc)
        self.error = message

    # --- actions ---

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.tasks = await self.api.list_tasks()
        except _REQUEST_ERRORS as exc:
            self._fail(LOAD_ERROR, exc)
        finally:
            self.loading = False

    async def add(self, title: str, description: str = "") -> TaskRead | None:
        title = title.strip()
        if not title:
            return None
        try:
            added = await self.api.create_task(title, description.strip())
        except _REQUEST_ERRORS as exc:
            self._fail(ADD_ERROR, exc)
            return None
        self.tasks = [added, *self.tasks]
        return added

    async def toggle_complete(self, task: TaskRead) -> None:
        updated = task.model_copy(update={"is_completed": not task.is_completed})
        try:
            await self.api.update_task(updated)
        except _REQUEST_ERRORS as exc:
            self._fail(TOGGLE_ERROR, exc)
            return
        self._replace(updated)

    def begin_edit(self, task: TaskRead) -> None:
        self.editing = task.model_copy()

    def cancel_edit(self) -> None:
        self.editing = None

    async def save_edit(self, task: TaskRead) -> None:
        """Save an edited task; a blank title deletes it instead."""
        if not task.title.strip():
            await self.delete(task.id)
            self.editing = None
            return
        try:
            await self.api.update_task(task)
        except _REQUEST_ERRORS as exc:
            self._fail(SAVE_ERROR, exc)
            return
        self._replace(task)
        self.editing = None

    async def delete(self, task_id: str) -> None:
        try:
            await self.api.delete_task(task_id)
        except _REQUEST_ERRORS as exc:
            self._fail(DELETE_ERROR, exc)
            return
        self.tasks = [task for task in self.tasks if task.id != task_id]

    def _replace(self, updated: TaskRead) -> None:
        self.tasks = [updated if t.id == updated.id else t for t in self.tasks]
