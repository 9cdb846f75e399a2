from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from todolist.database import get_db
from todolist.models import TaskCreate, TaskRead, TaskUpdate

from todolist.services.task_service import TaskService

router = APIRouter(prefix="/task", tags=["tasks"])


def _not_found(task_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Task with id {task_id} not found",
    )


@router.get("", response_model=list[TaskRead])
async def list_tasks(db: AsyncSession = Depends(get_db)):
    """List every task"""
    return await TaskService.list_tasks(db)


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: str, db: AsyncSession = Depends(get_db)):
    """Get a specific task by ID"""

    task = await TaskService.get_task(task_id, db)

    if not task:
        raise _not_found(task_id)
    return task


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create a new task"""
    task = await TaskService.create_task(task_data, db)
    response.headers["Location"] = str(request.url_for("get_task", task_id=task.id))
    return task


# A TaskConflictError from the service is deliberately left unhandled here.
@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_task(
    task_id: str, task_data: TaskUpdate, db: AsyncSession = Depends(get_db)
):
    """Replace a task with the full record in the body"""
    if task_data.id != task_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Body id {task_data.id} does not match path id {task_id}",
        )

    task = await TaskService.update_task(task_id, task_data, db)
    if not task:
        raise _not_found(task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a task"""
    result = await TaskService.delete_task(task_id, db)

    if not result:
        raise _not_found(task_id)
