import logging

from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todolist.models import Task, TaskCreate, TaskUpdate
from todolist.services.exceptions import TaskConflictError

logger = logging.getLogger(__name__)


class TaskService:
    @staticmethod
    async def list_tasks(db: AsyncSession):
        # sqlite rowid keeps insertion order for a text primary key
        result = await db.exec(select(Task))
        return result.all()

    @staticmethod
    async def get_task(task_id: str, db: AsyncSession):
        task = await db.get(Task, task_id)
        logger.debug("Fetched task %s (found=%s)", task_id, task is not None)
        return task

    @staticmethod
    async def task_exists(task_id: str, db: AsyncSession) -> bool:
        result = await db.exec(select(Task.id).where(Task.id == task_id))
        return result.first() is not None

    @staticmethod
    async def create_task(task_data: TaskCreate, db: AsyncSession):
        task = Task.model_validate(task_data.model_dump())
        db.add(task)
        await db.commit()
        await db.refresh(task)
        logger.info("Created task %s", task.id)
        return task

    @staticmethod
    async def update_task(task_id: str, task_data: TaskUpdate, db: AsyncSession):
        """
        Replace every mutable field of a task.

        Returns None when the task does not exist, including when it was
        deleted between our read and our write. Raises TaskConflictError when
        the write matched no row but the task is still there.
        """
        task = await db.get(Task, task_id)
        if not task:
            return None

        task.sqlmodel_update(task_data.model_dump(exclude={"id"}))
        try:
            await db.commit()
        except StaleDataError as exc:
            await db.rollback()
            if not await TaskService.task_exists(task_id, db):
                logger.info("Task %s vanished during update", task_id)
                return None
            logger.warning("Concurrent modification of task %s", task_id)
            raise TaskConflictError(task_id) from exc

        await db.refresh(task)
        logger.info("Updated task %s", task_id)
        return task

    @staticmethod
    async def delete_task(task_id: str, db: AsyncSession):
        task = await db.get(Task, task_id)
        if not task:
            return False
        await db.delete(task)
        await db.commit()
        logger.info("Deleted task %s", task_id)
        return True
