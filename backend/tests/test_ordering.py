"""Tests for drag-reorder arithmetic."""

import pytest

from planner_client.api import PlannerAPIError
from planner_client.ordering import (
    ReorderError,
    compute_reorder,
    next_order,
    persist_reorder,
    split_by_completion,
)


def _items(*orders):
    return [{"id": i + 1, "order": order} for i, order in enumerate(orders)]


class TestComputeReorder:
    def test_move_down(self):
        # ids 1,2,3 → 2,3,1
        assert compute_reorder(_items(0, 1, 2), 1, 3) == [(2, 0), (3, 1), (1, 2)]

    def test_move_up_only_changed(self):
        # ids 1,2,3,4 → 1,4,2,3
        assert compute_reorder(_items(0, 1, 2, 3), 4, 2) == [(4, 1), (2, 2), (3, 3)]

    def test_drop_on_self_is_noop(self):
        assert compute_reorder(_items(0, 1, 2), 2, 2) == []

    def test_unknown_ids(self):
        assert compute_reorder(_items(0, 1), 1, 99) == []

    def test_gapped_orders_are_compacted(self):
        assert compute_reorder(_items(0, 5, 9), 3, 2) == [(3, 1), (2, 2)]


class TestHelpers:
    def test_next_order(self):
        assert next_order([]) == 0
        assert next_order(_items(3, 1)) == 4

    def test_split_by_completion(self):
        tasks = [
            {"id": 1, "order": 2, "completed": False},
            {"id": 2, "order": 0, "completed": True},
            {"id": 3, "order": 1, "completed": False},
        ]
        incomplete, completed = split_by_completion(tasks)
        assert [t["id"] for t in incomplete] == [3, 1]
        assert [t["id"] for t in completed] == [2]

    def test_persist_reorder_collects_failures(self):
        def update(item_id, order):
            if item_id == 2:
                raise PlannerAPIError(500, "Failed to update task")

        with pytest.raises(ReorderError) as exc_info:
            persist_reorder([(1, 0), (2, 1), (3, 2)], update)
        assert exc_info.value.applied == [(1, 0), (3, 2)]
        assert exc_info.value.failed == [(2, 1)]
