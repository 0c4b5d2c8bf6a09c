"""In-memory dashboard store.

The store owns the authoritative subscription set for a running session and
the summary derived from it. Every change goes through
:meth:`DashboardStore.on_subscriptions_changed`, which re-summarizes the full
set and swaps in a new frozen summary, so readers never see a half-updated
one.
"""

import asyncio
from datetime import datetime, UTC
from typing import Callable, Iterable, Optional

from subtrack.domain.entities import DashboardSummary, Subscription, User
from subtrack.domain.errors import StorageError
from subtrack.domain.reminders import ReminderScheduler, build_reminder_plan
from subtrack.domain.summary import summarize
from subtrack.utils.logger import get_logger

logger = get_logger(__name__)

SummaryListener = Callable[[DashboardSummary], None]


def utc_now() -> datetime:
    return datetime.now(UTC)


class DashboardStore:
    """Holds subscriptions, the current summary and the loaded user."""

    def __init__(
        self,
        reminder_scheduler: Optional[ReminderScheduler] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize an empty, still-loading store.

        Args:
            reminder_scheduler: Optional collaborator that receives a reminder
                plan after each recomputation
            clock: Callable returning the current time
        """
        self.reminder_scheduler = reminder_scheduler
        self.clock = clock
        self.user: Optional[User] = None
        self.is_loading = True
        self.load_error: Optional[Exception] = None
        self._subscriptions: tuple[Subscription, ...] = ()
        self._summary: Optional[DashboardSummary] = None
        self._listeners: list[SummaryListener] = []

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        return self._subscriptions

    @property
    def summary(self) -> Optional[DashboardSummary]:
        """Latest summary, or None before the first load completes."""
        return self._summary

    def display_summary(self) -> DashboardSummary:
        """Summary for display; an absent summary shows as all zeros."""
        if self._summary is None:
            return DashboardSummary.empty()
        return self._summary

    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        for sub in self._subscriptions:
            if sub.id == subscription_id:
                return sub
        return None

    def subscribe(self, listener: SummaryListener) -> Callable[[], None]:
        """Register a listener for new summaries. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_subscriptions_changed(self, subscriptions: Iterable[Subscription]) -> DashboardSummary:
        """Replace the subscription set and publish a freshly computed summary."""
        previous = self._subscriptions
        current = tuple(subscriptions)
        now = self.clock()
        summary = summarize(current, now)

        self._subscriptions = current
        self._summary = summary
        logger.debug(
            "Recomputed summary: %d active of %d subscriptions",
            summary.active_subscriptions,
            len(current),
        )

        for listener in list(self._listeners):
            listener(summary)

        if self.reminder_scheduler is not None:
            self.reminder_scheduler.apply(build_reminder_plan(previous, current, now))

        return summary

    async def load(self, db, min_splash_seconds: float = 0.0) -> DashboardSummary:
        """Load the user and subscriptions from storage.

        Completes once both the load and the minimum splash delay have
        finished. A failed load leaves an empty dashboard in place and is
        re-raised as StorageError.

        Args:
            db: Database instance
            min_splash_seconds: Minimum time the load should appear to take
        """
        self.is_loading = True
        self.load_error = None
        # The splash timer is scheduled first so it runs while the read blocks
        results = await asyncio.gather(
            asyncio.sleep(min_splash_seconds),
            self._read_storage(db),
            return_exceptions=True,
        )
        outcome = results[1]
        try:
            if isinstance(outcome, BaseException):
                logger.error("Failed to load subscriptions: %s", outcome)
                self.load_error = outcome
                self.user = None
                self.on_subscriptions_changed(())
                raise StorageError(f"Failed to load data: {outcome}") from outcome

            user, subscriptions = outcome
            self.user = user
            return self.on_subscriptions_changed(subscriptions)
        finally:
            self.is_loading = False

    async def _read_storage(self, db) -> tuple[Optional[User], list[Subscription]]:
        user = db.get_user()
        subscriptions = db.list_subscriptions()
        return user, subscriptions
