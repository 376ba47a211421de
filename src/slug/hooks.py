"""Filter-hook wiring between a host's save path and the slug policy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from titleslug.content.models import BEFORE_INSERT, ContentRecord
from titleslug.slug.policy import SlugDecisionPolicy

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

FilterCallback = Callable[..., Any]


class HookDispatcher:
    """Named filter hooks, as owned by the host.

    Callbacks run in ascending priority, then registration order. Each
    one receives the value returned by the previous callback plus any
    extra arguments passed to ``apply_filters``.
    """

    def __init__(self) -> None:
        self._filters: dict[str, list[tuple[int, int, FilterCallback]]] = {}
        self._counter = 0

    def add_filter(
        self, hook: str, callback: FilterCallback, priority: int = DEFAULT_PRIORITY
    ) -> None:
        self._counter += 1
        self._filters.setdefault(hook, []).append((priority, self._counter, callback))
        self._filters[hook].sort(key=lambda entry: (entry[0], entry[1]))

    def remove_filter(self, hook: str, callback: FilterCallback) -> bool:
        """Unregister ``callback`` from ``hook``. Returns False if it was not registered."""
        entries = self._filters.get(hook, [])
        remaining = [entry for entry in entries if entry[2] is not callback]
        if len(remaining) == len(entries):
            return False
        self._filters[hook] = remaining
        return True

    def has_filter(self, hook: str) -> bool:
        return bool(self._filters.get(hook))

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        for _priority, _seq, callback in list(self._filters.get(hook, [])):
            value = callback(value, *args)
        return value


class SlugFilter:
    """``BEFORE_INSERT`` callback that fills in generated slugs.

    Never raises: a failure inside the policy leaves the record as the
    host passed it, so the save still goes through.
    """

    def __init__(self, policy: SlugDecisionPolicy) -> None:
        self.policy = policy

    def __call__(
        self, record: ContentRecord, prior_args: Mapping[str, Any] | None = None
    ) -> ContentRecord:
        return self.on_before_insert(record, prior_args)

    def on_before_insert(
        self, record: ContentRecord, prior_args: Mapping[str, Any] | None = None
    ) -> ContentRecord:
        """Handle one save event.

        Args:
            record: The record the host is about to persist.
            prior_args: Raw arguments of the insert call. Its ``"id"`` is
                used when ``record`` carries no id of its own.
        """
        candidate = record
        try:
            if record.id is None and prior_args and prior_args.get("id"):
                candidate = record.model_copy(update={"id": int(prior_args["id"])})
            decided = self.policy.decide(candidate)
        except Exception:
            logger.exception("Slug generation failed, saving record unchanged")
            return record

        if decided is candidate:
            return record
        return record.model_copy(update={"slug": decided.slug})


def register_slug_filter(
    dispatcher: HookDispatcher,
    policy: SlugDecisionPolicy,
    priority: int = DEFAULT_PRIORITY,
) -> SlugFilter:
    """Attach the slug policy to ``dispatcher``'s before-insert hook."""
    slug_filter = SlugFilter(policy)
    dispatcher.add_filter(BEFORE_INSERT, slug_filter, priority)
    return slug_filter
