"""
mutations.py — Optimistic mutation flow
apply → request → (revert on failure) → reconcile, where reconcile always runs.
"""

import logging
from typing import Any, Callable, Iterable

from planner_client.query_cache import QueryCache, QueryKey

logger = logging.getLogger(__name__)


def run_optimistic(
    mutate: Callable[[], Any],
    apply: Callable[[], Any],
    revert: Callable[[Any], None],
    reconcile: Callable[[], None],
) -> Any:
    """Run *mutate* with an optimistic local edit around it.

    ``apply`` returns a context that ``revert`` receives if ``mutate`` raises.
    The error is re-raised after reverting.
    """
    context = apply()
    try:
        return mutate()
    except Exception as e:
        logger.warning(f"Mutation failed, rolling back: {e}")
        revert(context)
        raise
    finally:
        reconcile()


def optimistic_remove(
    cache: QueryCache,
    prefixes: Iterable[QueryKey],
    item_id: int,
    mutate: Callable[[], Any],
    id_field: str = "id",
) -> Any:
    """Drop ``item_id`` from every cached list under *prefixes* before *mutate* runs."""
    prefixes = list(prefixes)

    def without_item(rows):
        return [row for row in rows if row[id_field] != item_id]

    def apply():
        snapshot = {}
        for prefix in prefixes:
            snapshot.update(cache.set_optimistic(prefix, without_item))
        return snapshot

    def reconcile():
        for prefix in prefixes:
            cache.invalidate(prefix)

    return run_optimistic(mutate, apply, cache.rollback, reconcile)
