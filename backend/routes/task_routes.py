import logging
from datetime import date as date_type
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from database import get_db
from routes.common import reject_none, require_subject
from services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    completed: bool = False
    date: date_type
    order: Optional[int] = Field(default=None, ge=0)  # omitted → appended after the date's last task
    subject_id: Optional[int] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    completed: Optional[bool] = None
    date: Optional[date_type] = None
    order: Optional[int] = Field(default=None, ge=0)
    subject_id: Optional[int] = None

    check_not_null = field_validator("title", "completed", "date", "order")(reject_none)


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    completed: bool
    date: date_type
    order: int
    subject_id: Optional[int] = None


@router.get("/{day}", response_model=List[TaskOut])
async def list_tasks(day: date_type, db: Session = Depends(get_db)):
    try:
        return TaskService.get_by_date(db, day)
    except Exception:
        logger.exception("Failed to fetch tasks for %s", day)
        raise HTTPException(status_code=500, detail="Failed to fetch tasks")


@router.post("", response_model=TaskOut, status_code=201)
async def create_task(body: TaskCreate, db: Session = Depends(get_db)):
    try:
        require_subject(db, body.subject_id)
        return TaskService.create(db, body.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create task")
        raise HTTPException(status_code=500, detail="Failed to create task")


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(task_id: int, body: TaskUpdate, db: Session = Depends(get_db)):
    try:
        data = body.model_dump(exclude_unset=True)
        require_subject(db, data.get("subject_id"))
        updated = TaskService.update(db, task_id, data)
        if not updated:
            raise HTTPException(status_code=404, detail="Task not found")
        return updated
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update task %s", task_id)
        raise HTTPException(status_code=500, detail="Failed to update task")


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int, db: Session = Depends(get_db)):
    try:
        if not TaskService.delete(db, task_id):
            raise HTTPException(status_code=404, detail="Task not found")
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete task %s", task_id)
        raise HTTPException(status_code=500, detail="Failed to delete task")
