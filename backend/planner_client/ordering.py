"""
ordering.py — Manual ordering for tasks and flashcards
A drag from one position to another becomes a list of (id, order) writes for
just the items whose order value changed.
"""

import logging
from typing import Callable

from planner_client.api import PlannerAPIError

logger = logging.getLogger(__name__)


class ReorderError(Exception):
    """Some order writes failed; the ones in ``applied`` went through."""

    def __init__(self, applied: list[tuple[int, int]], failed: list[tuple[int, int]]):
        super().__init__(f"{len(failed)} of {len(applied) + len(failed)} order updates failed")
        self.applied = applied
        self.failed = failed


def next_order(items: list[dict]) -> int:
    """Order for an item appended after *items*."""
    return max((item["order"] for item in items), default=-1) + 1


def split_by_completion(tasks: list[dict]) -> tuple[list[dict], list[dict]]:
    """(incomplete, completed), each sorted by order."""
    ordered = sorted(tasks, key=lambda t: (t["order"], t["id"]))
    return (
        [t for t in ordered if not t["completed"]],
        [t for t in ordered if t["completed"]],
    )


def compute_reorder(items: list[dict], active_id: int, over_id: int) -> list[tuple[int, int]]:
    """Move *active_id* to the position of *over_id* and renumber by index.

    Returns only the (id, new_order) pairs that differ from the current order.
    Dropping an item on itself, or on an id not in *items*, changes nothing.
    """
    if active_id == over_id:
        return []
    ids = [item["id"] for item in items]
    if active_id not in ids or over_id not in ids:
        return []

    moved = list(items)
    moved.insert(ids.index(over_id), moved.pop(ids.index(active_id)))
    return [(item["id"], index) for index, item in enumerate(moved) if item["order"] != index]


def persist_reorder(changes: list[tuple[int, int]], update: Callable[[int, int], object]) -> list[tuple[int, int]]:
    """Send each order change as its own update.

    Every write is attempted; failures are collected and raised together.
    """
    applied, failed = [], []
    for item_id, order in changes:
        try:
            update(item_id, order)
            applied.append((item_id, order))
        except PlannerAPIError as e:
            logger.warning(f"Order update for {item_id} failed: {e}")
            failed.append((item_id, order))

    if failed:
        raise ReorderError(applied, failed)
    return applied
