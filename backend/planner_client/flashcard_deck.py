"""
flashcard_deck.py — Editing the cards of one flashcard set
"""

from planner_client.api import PlannerAPI
from planner_client.mutations import optimistic_remove
from planner_client.ordering import compute_reorder, next_order, persist_reorder
from planner_client.query_cache import QueryCache


class FlashcardDeck:
    def __init__(self, api: PlannerAPI, cache: QueryCache, set_id: int):
        self.api = api
        self.cache = cache
        self.set_id = set_id

    @property
    def key(self) -> tuple:
        return ("/api/flashcards", self.set_id)

    def cards(self) -> list[dict]:
        cards = self.cache.fetch(self.key, lambda: self.api.flashcards(self.set_id))
        return sorted(cards, key=lambda c: (c["order"], c["id"]))

    def add(self, front: str, back: str) -> dict | None:
        if not front.strip() or not back.strip():
            return None
        try:
            return self.api.create_flashcard(
                set_id=self.set_id, front=front, back=back, order=next_order(self.cards())
            )
        finally:
            self.cache.invalidate(self.key)

    def edit(self, card_id: int, **fields) -> dict:
        try:
            return self.api.update_flashcard(card_id, **fields)
        finally:
            self.cache.invalidate(self.key)

    def move(self, active_id: int, over_id: int) -> list[tuple[int, int]]:
        changes = compute_reorder(self.cards(), active_id, over_id)
        if not changes:
            return []
        try:
            return persist_reorder(changes, lambda card_id, order: self.api.update_flashcard(card_id, order=order))
        finally:
            self.cache.invalidate(self.key)

    def delete(self, card_id: int):
        optimistic_remove(self.cache, [self.key], card_id, lambda: self.api.delete_flashcard(card_id))
