import logging

import httpx

from todolist.models import TaskRead

logger = logging.getLogger(__name__)


class TaskApiClient:
    """
    Thin async wrapper over the task REST API.

    Every non-2xx response raises httpx.HTTPStatusError; transport problems
    raise the other httpx.HTTPError subclasses. Nothing is retried.
    """

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, task_id: str | None = None) -> str:
        if task_id is None:
            return self.base_url
        return f"{self.base_url}/{task_id}"

    async def list_tasks(self) -> list[TaskRead]:
        response = await self._client.get(self._url())
        response.raise_for_status()
        return [TaskRead.model_validate(item) for item in response.json()]

    async def get_task(self, task_id: str) -> TaskRead:
        response = await self._client.get(self._url(task_id))
        response.raise_for_status()
        return TaskRead.model_validate(response.json())

    async def create_task(
        self, title: str, description: str = "", is_completed: bool = False
    ) -> TaskRead:
        payload = {
            "title": title,
            "description": description,
            "isCompleted": is_completed,
        }
        response = await self._client.post(self._url(), json=payload)
        response.raise_for_status()
        return TaskRead.model_validate(response.json())

    async def update_task(self, task: TaskRead) -> None:
        response = await self._client.put(
            self._url(task.id), json=task.model_dump(by_alias=True)
        )
        response.raise_for_status()

    async def delete_task(self, task_id: str) -> None:
        response = await self._client.delete(self._url(task_id))
        response.raise_for_status()
