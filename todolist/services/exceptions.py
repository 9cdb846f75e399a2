class TaskServiceError(Exception):
    """Base class for task store failures."""


class TaskConflictError(TaskServiceError):
    """The task was modified concurrently between read and write."""

    def __init__(self, task_id: str):
        super().__init__(f"Task with id {task_id} was modified concurrently")
        self.task_id = task_id
