"""
preference_service.py — Per-subject learning preferences (one row per subject).
"""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from models.learning_preference import LearningPreference

_FIELDS = ("explanation_style", "complexity_level", "custom_instructions")


class PreferenceService:
    @staticmethod
    def get_by_subject(db: Session, subject_id: int) -> LearningPreference | None:
        return db.query(LearningPreference).filter_by(subject_id=subject_id).first()

    @staticmethod
    def upsert(db: Session, data: dict) -> LearningPreference:
        """Update the subject's existing preference row, or create it."""
        try:
            pref = PreferenceService.get_by_subject(db, data["subject_id"])
            if pref is None:
                pref = LearningPreference(subject_id=data["subject_id"])
                db.add(pref)

            for key in _FIELDS:
                if key in data:
                    setattr(pref, key, data[key])
            pref.updated_at = datetime.now(timezone.utc)

            db.commit()
            db.refresh(pref)
            return pref
        except Exception:
            db.rollback()
            raise
