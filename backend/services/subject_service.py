"""
subject_service.py — User-defined study subjects.
Deleting a subject nulls the reference on its events and tasks and removes its
conversations, learning preference and flashcard sets.
"""

from sqlalchemy.orm import Session

from models.subject import Subject


class SubjectService:
    @staticmethod
    def get_all(db: Session) -> list[Subject]:
        return db.query(Subject).order_by(Subject.created_at, Subject.id).all()

    @staticmethod
    def get_by_id(db: Session, subject_id: int) -> Subject | None:
        return db.get(Subject, subject_id)

    @staticmethod
    def create(db: Session, data: dict) -> Subject:
        try:
            subject = Subject(
                name=data["name"],
                color=data["color"],
                ai_category=data.get("ai_category"),
            )
            db.add(subject)
            db.commit()
            db.refresh(subject)
            return subject
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update(db: Session, subject_id: int, data: dict) -> Subject | None:
        try:
            subject = SubjectService.get_by_id(db, subject_id)
            if not subject:
                return None

            for key, value in data.items():
                if hasattr(subject, key):
                    setattr(subject, key, value)

            db.commit()
            db.refresh(subject)
            return subject
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete(db: Session, subject_id: int) -> bool:
        try:
            subject = SubjectService.get_by_id(db, subject_id)
            if not subject:
                return False
            db.delete(subject)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise
