"""
task_service.py — Daily task list
Handles CRUD for Tasks. Ordering is per date: a new task goes after every
existing task for its date, and reorders arrive as independent order updates.
"""

from datetime import date

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.task import Task


class TaskService:
    @staticmethod
    def get_by_date(db: Session, day: date) -> list[Task]:
        """All tasks for a date, by manual order."""
        return (
            db.query(Task)
            .filter(Task.date == day)
            .order_by(Task.order, Task.id)
            .all()
        )

    @staticmethod
    def next_order(db: Session, day: date) -> int:
        """Order for a task appended to *day*; 0 when the date has no tasks."""
        current_max = db.query(func.max(Task.order)).filter(Task.date == day).scalar()
        return (current_max if current_max is not None else -1) + 1

    @staticmethod
    def get_by_id(db: Session, task_id: int) -> Task | None:
        return db.get(Task, task_id)

    @staticmethod
    def create(db: Session, data: dict) -> Task:
        """Create a task; a missing order means "append to the end of its date"."""
        try:
            order = data.get("order")
            if order is None:
                order = TaskService.next_order(db, data["date"])

            task = Task(
                title=data["title"],
                completed=data.get("completed", False),
                date=data["date"],
                order=order,
                subject_id=data.get("subject_id"),
            )
            db.add(task)
            db.commit()
            db.refresh(task)
            return task
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update(db: Session, task_id: int, data: dict) -> Task | None:
        try:
            task = TaskService.get_by_id(db, task_id)
            if not task:
                return None

            for key, value in data.items():
                if hasattr(task, key):
                    setattr(task, key, value)

            db.commit()
            db.refresh(task)
            return task
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete(db: Session, task_id: int) -> bool:
        try:
            task = TaskService.get_by_id(db, task_id)
            if task:
                db.delete(task)
                db.commit()
                return True
            return False
        except Exception:
            db.rollback()
            raise
