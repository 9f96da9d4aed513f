"""
flashcard_service.py — Flashcard sets and cards
Cards are ordered within their set the same way tasks are ordered within a date.
"""

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from models.flashcard import Flashcard
from models.flashcard_set import FlashcardSet


class FlashcardService:
    # ── Sets ─────────────────────────────────────────────────────────
    @staticmethod
    def get_all_sets(db: Session) -> list[FlashcardSet]:
        return db.query(FlashcardSet).order_by(desc(FlashcardSet.created_at), desc(FlashcardSet.id)).all()

    @staticmethod
    def get_sets_by_subject(db: Session, subject_id: int) -> list[FlashcardSet]:
        return (
            db.query(FlashcardSet)
            .filter(FlashcardSet.subject_id == subject_id)
            .order_by(desc(FlashcardSet.created_at), desc(FlashcardSet.id))
            .all()
        )

    @staticmethod
    def get_set(db: Session, set_id: int) -> FlashcardSet | None:
        return db.get(FlashcardSet, set_id)

    @staticmethod
    def create_set(db: Session, data: dict) -> FlashcardSet:
        try:
            fs = FlashcardSet(
                subject_id=data["subject_id"],
                title=data["title"],
                description=data.get("description"),
            )
            db.add(fs)
            db.commit()
            db.refresh(fs)
            return fs
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update_set(db: Session, set_id: int, data: dict) -> FlashcardSet | None:
        try:
            fs = FlashcardService.get_set(db, set_id)
            if not fs:
                return None
            for key, value in data.items():
                if hasattr(fs, key):
                    setattr(fs, key, value)
            db.commit()
            db.refresh(fs)
            return fs
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete_set(db: Session, set_id: int) -> bool:
        try:
            fs = FlashcardService.get_set(db, set_id)
            if not fs:
                return False
            db.delete(fs)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise

    # ── Cards ────────────────────────────────────────────────────────
    @staticmethod
    def get_cards(db: Session, set_id: int) -> list[Flashcard]:
        return (
            db.query(Flashcard)
            .filter(Flashcard.set_id == set_id)
            .order_by(Flashcard.order, Flashcard.id)
            .all()
        )

    @staticmethod
    def next_order(db: Session, set_id: int) -> int:
        current_max = db.query(func.max(Flashcard.order)).filter(Flashcard.set_id == set_id).scalar()
        return (current_max if current_max is not None else -1) + 1

    @staticmethod
    def get_card(db: Session, card_id: int) -> Flashcard | None:
        return db.get(Flashcard, card_id)

    @staticmethod
    def create_card(db: Session, data: dict) -> Flashcard:
        try:
            order = data.get("order")
            if order is None:
                order = FlashcardService.next_order(db, data["set_id"])
            card = Flashcard(
                set_id=data["set_id"],
                front=data["front"],
                back=data["back"],
                order=order,
            )
            db.add(card)
            db.commit()
            db.refresh(card)
            return card
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update_card(db: Session, card_id: int, data: dict) -> Flashcard | None:
        try:
            card = FlashcardService.get_card(db, card_id)
            if not card:
                return None
            for key, value in data.items():
                if hasattr(card, key):
                    setattr(card, key, value)
            db.commit()
            db.refresh(card)
            return card
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete_card(db: Session, card_id: int) -> bool:
        try:
            card = FlashcardService.get_card(db, card_id)
            if not card:
                return False
            db.delete(card)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise
