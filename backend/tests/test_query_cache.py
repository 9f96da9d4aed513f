"""Tests for the client query cache and the optimistic mutation helper."""

import pytest

from planner_client.mutations import optimistic_remove, run_optimistic
from planner_client.query_cache import QueryCache


class TestQueryCache:
    def test_fetch_loads_once(self):
        cache = QueryCache()
        calls = []

        def loader():
            calls.append(1)
            return [1, 2]

        assert cache.fetch(("/api/tasks", "2026-10-18"), loader) == [1, 2]
        assert cache.fetch(("/api/tasks", "2026-10-18"), loader) == [1, 2]
        assert len(calls) == 1
        assert cache.get_stats()["hits"] == 1

    def test_invalidate_prefix(self):
        cache = QueryCache()
        cache.set(("/api/calendar", 2026, 10), [])
        cache.set(("/api/calendar", 2026, 11), [])
        cache.set(("/api/calendar/upcoming", 10), [])

        assert cache.invalidate(("/api/calendar",)) == 2
        assert cache.is_stale(("/api/calendar", 2026, 10))
        assert not cache.is_stale(("/api/calendar/upcoming", 10))

    def test_stale_entry_refetched(self):
        cache = QueryCache()
        cache.set(("k",), "old")
        cache.invalidate(("k",))
        assert cache.peek(("k",)) == "old"
        assert cache.fetch(("k",), lambda: "new") == "new"
        assert not cache.is_stale(("k",))

    def test_set_optimistic_and_rollback(self):
        cache = QueryCache()
        rows = [{"id": 1}, {"id": 2}]
        cache.set(("/api/tasks", "d"), rows)

        snapshot = cache.set_optimistic(("/api/tasks",), lambda r: [x for x in r if x["id"] != 1])
        assert cache.peek(("/api/tasks", "d")) == [{"id": 2}]

        cache.rollback(snapshot)
        assert cache.peek(("/api/tasks", "d")) == rows


class TestRunOptimistic:
    def test_success_skips_revert(self):
        events = []
        result = run_optimistic(
            mutate=lambda: events.append("mutate") or "ok",
            apply=lambda: events.append("apply") or "ctx",
            revert=lambda ctx: events.append(("revert", ctx)),
            reconcile=lambda: events.append("reconcile"),
        )
        assert result == "ok"
        assert events == ["apply", "mutate", "reconcile"]

    def test_failure_reverts_then_reconciles(self):
        events = []

        def mutate():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            run_optimistic(
                mutate=mutate,
                apply=lambda: "ctx",
                revert=lambda ctx: events.append(("revert", ctx)),
                reconcile=lambda: events.append("reconcile"),
            )
        assert events == [("revert", "ctx"), "reconcile"]

    def test_optimistic_remove_across_keys(self):
        cache = QueryCache()
        cache.set(("/api/calendar", 2026, 10), [{"id": 1}, {"id": 2}])
        cache.set(("/api/calendar/upcoming", 10), [{"id": 2}, {"id": 3}])
        seen = {}

        def mutate():
            seen["month"] = cache.peek(("/api/calendar", 2026, 10))
            seen["upcoming"] = cache.peek(("/api/calendar/upcoming", 10))

        optimistic_remove(cache, [("/api/calendar",), ("/api/calendar/upcoming",)], 2, mutate)

        assert seen == {"month": [{"id": 1}], "upcoming": [{"id": 3}]}
        assert cache.is_stale(("/api/calendar", 2026, 10))
        assert cache.is_stale(("/api/calendar/upcoming", 10))
