"""Rule-based assistant over the published dashboard data.

Rules are ``(predicate, handler)`` pairs checked in order; the first
predicate that matches the normalized message picks the handler. The
assistant only reads the summary and subscription list it is given.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, Optional, Sequence

from subtrack.config import DEFAULT_CURRENCY
from subtrack.domain.entities import DashboardSummary, Subscription
from subtrack.domain.status import days_until
from subtrack.utils.formatting import format_currency, format_date

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class ChatResponse:
    """Reply text plus follow-up suggestions."""

    text: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)


def contains_any(*patterns: str) -> Predicate:
    """Predicate matching any of the phrases as whole words."""
    compiled = [re.compile(rf"\b{re.escape(pattern)}\b") for pattern in patterns]

    def predicate(message: str) -> bool:
        return any(regex.search(message) for regex in compiled)

    return predicate


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


SEARCH_PREFIX = re.compile(r"\b(find|search|look for|where is)\b")


class AssistantService:
    """Answers questions about spending, renewals and subscriptions."""

    def __init__(
        self,
        subscriptions: Sequence[Subscription],
        summary: Optional[DashboardSummary],
        currency: str = DEFAULT_CURRENCY,
        now: Optional[datetime] = None,
    ):
        self.subscriptions = tuple(subscriptions)
        self.summary = summary if summary is not None else DashboardSummary.empty()
        self.currency = currency
        self.now = now or datetime.now(UTC)
        self.rules: list[tuple[Predicate, Callable[[str], ChatResponse]]] = [
            (contains_any("hello", "hi", "hey", "good morning", "good afternoon", "good evening"), self.greeting),
            (contains_any("help", "what can you do", "commands", "options"), self.help),
            (contains_any("spending", "spend", "total", "cost", "money"), self.spending),
            (contains_any("upcoming", "renewal", "renewals", "due", "next", "billing"), self.upcoming_renewals),
            (contains_any("how many", "count", "number of"), self.subscription_count),
            (contains_any("category", "breakdown", "categories"), self.category_breakdown),
            (contains_any("expiring", "expire", "soon", "ending", "expired"), self.expiring_soon),
            (contains_any("add", "new subscription", "create", "subscribe"), self.add_subscription),
            (contains_any("list", "show all", "all subscriptions", "my subscriptions", "subscriptions"), self.list_subscriptions),
            (contains_any("find", "search", "look for", "where is"), self.search),
            (contains_any("analytics", "insights", "analysis", "report", "summary"), self.analytics),
            (contains_any("budget", "save", "savings", "reduce", "cut", "cancel"), self.budget),
        ]

    def process_message(self, message: str) -> ChatResponse:
        """Answer a free-text message."""
        normalized = message.lower().strip()
        for predicate, handler in self.rules:
            if predicate(normalized):
                return handler(normalized)
        return self.fallback(normalized)

    def _money(self, amount: Decimal, currency: Optional[str] = None) -> str:
        return format_currency(amount, currency or self.currency)

    def _dated_line(self, index: int, sub: Subscription) -> str:
        line = f"{index}. {sub.name} - {self._money(sub.amount, sub.currency)}"
        target = sub.target_date
        if target is not None:
            line += f" ({days_until(target, self.now)} days - {format_date(target)})"
        return line

    def greeting(self, message: str) -> ChatResponse:
        return ChatResponse(
            text=(
                "Hello! I'm your subscription assistant. "
                "How can I help you manage your subscriptions today?"
            ),
            suggestions=("Show my spending", "Upcoming renewals", "Add subscription", "Help"),
        )

    def help(self, message: str) -> ChatResponse:
        return ChatResponse(
            text="\n".join(
                [
                    "I can help you with:",
                    "• View spending summaries and breakdowns",
                    "• Check upcoming renewals and expiring subscriptions",
                    "• List and manage your subscriptions",
                    "• Add new subscriptions",
                    "• Get spending insights by category",
                    "• Find specific subscriptions",
                    "",
                    "What would you like to know?",
                ]
            ),
            suggestions=("Show spending", "List subscriptions", "Upcoming renewals", "Category breakdown"),
        )

    def spending(self, message: str) -> ChatResponse:
        monthly = self.summary.total_monthly_spending
        lines = [
            "Here's your spending summary:",
            f"Monthly: {self._money(monthly)}",
            f"Yearly: {self._money(self.summary.total_yearly_spending)}",
            f"Active subscriptions: {self.summary.active_subscriptions}",
        ]
        if monthly > 0:
            lines.append(f"That's about {self._money(monthly / 30)} per day")
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Category breakdown", "Upcoming renewals", "Analytics", "Budget tips"),
        )

    def upcoming_renewals(self, message: str) -> ChatResponse:
        upcoming = self.summary.upcoming_renewals
        if not upcoming:
            return ChatResponse(
                text="Great news! You have no upcoming renewals in the next 30 days.",
                suggestions=("Show all subscriptions", "Add subscription", "Spending summary"),
            )

        lines = [f"You have {_plural(len(upcoming), 'upcoming renewal')}:", ""]
        lines.extend(self._dated_line(index, sub) for index, sub in enumerate(upcoming[:5], 1))
        if len(upcoming) > 5:
            lines.append(f"... and {len(upcoming) - 5} more")
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Show all", "Spending summary", "Category breakdown"),
        )

    def subscription_count(self, message: str) -> ChatResponse:
        total = len(self.subscriptions)
        active = [sub for sub in self.subscriptions if sub.is_active]
        auto_pay = sum(1 for sub in active if sub.is_auto_pay_enabled)
        lines = [
            "Your subscription overview:",
            f"Total: {_plural(total, 'subscription')}",
            f"Active: {len(active)}",
            f"Auto-pay: {auto_pay}",
            f"Manual: {len(active) - auto_pay}",
        ]
        if total == 0:
            lines.append("Add your first subscription to get started!")
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("List all", "Add subscription", "Spending summary"),
        )

    def category_breakdown(self, message: str) -> ChatResponse:
        breakdown = self.summary.monthly_breakdown
        if not breakdown:
            return ChatResponse(
                text=(
                    "No category breakdown available yet. "
                    "Add some subscriptions to see your spending by category!"
                ),
                suggestions=("Add subscription", "Show spending", "List subscriptions"),
            )

        lines = ["Your spending by category:", ""]
        for index, item in enumerate(breakdown, 1):
            lines.append(
                f"{index}. {item.label}: {self._money(item.amount)} "
                f"({_plural(item.count, 'subscription')})"
            )
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Show spending", "Upcoming renewals", "Analytics"),
        )

    def expiring_soon(self, message: str) -> ChatResponse:
        expiring = self.summary.expiring_soon
        if not expiring:
            return ChatResponse(
                text="No subscriptions are expiring soon. You're all set!",
                suggestions=("Upcoming renewals", "Show spending", "List subscriptions"),
            )

        lines = [f"You have {_plural(len(expiring), 'subscription')} expiring soon:", ""]
        lines.extend(self._dated_line(index, sub) for index, sub in enumerate(expiring, 1))
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Renew now", "Show all", "Spending summary"),
        )

    def add_subscription(self, message: str) -> ChatResponse:
        return ChatResponse(
            text="I can help you add a new subscription! Run 'subtrack add' with a name, amount and renewal date.",
            suggestions=("Show me how", "What do I need?", "Go to dashboard"),
        )

    def list_subscriptions(self, message: str) -> ChatResponse:
        if not self.subscriptions:
            return ChatResponse(
                text="You don't have any subscriptions yet. Add your first one to get started!",
                suggestions=("Add subscription", "Help", "Show spending"),
            )

        lines = [f"Your {_plural(len(self.subscriptions), 'subscription')}:", ""]
        for index, sub in enumerate(self.subscriptions, 1):
            mode = "Auto-pay" if sub.is_auto_pay_enabled else "Manual"
            state = "active" if sub.is_active else "cancelled"
            lines.append(f"{index}. {sub.name} - {self._money(sub.amount, sub.currency)} ({mode}, {state})")
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Spending summary", "Upcoming renewals", "Category breakdown"),
        )

    def search(self, message: str) -> ChatResponse:
        term = SEARCH_PREFIX.sub("", message).strip()
        if term.startswith("for "):
            term = term[4:].strip()

        if not term:
            return ChatResponse(
                text="What would you like me to search for? Try saying 'find Netflix' or 'search for Spotify'.",
                suggestions=("List all", "Show spending", "Help"),
            )

        results = [
            sub
            for sub in self.subscriptions
            if term in sub.name.lower()
            or term in sub.category.value
            or (sub.provider and term in sub.provider.lower())
        ]
        if not results:
            return ChatResponse(
                text=f'No subscriptions found matching "{term}". Try a different search term.',
                suggestions=("List all", "Show spending", "Help"),
            )

        lines = [f'Found {_plural(len(results), "subscription")} matching "{term}":', ""]
        for index, sub in enumerate(results, 1):
            lines.append(f"{index}. {sub.name} - {self._money(sub.amount, sub.currency)}")
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Show spending", "Upcoming renewals", "List all"),
        )

    def analytics(self, message: str) -> ChatResponse:
        lines = [
            "Your Subscription Analytics:",
            "",
            f"Monthly Spending: {self._money(self.summary.total_monthly_spending)}",
            f"Yearly Spending: {self._money(self.summary.total_yearly_spending)}",
            f"Active Subscriptions: {self.summary.active_subscriptions}",
        ]
        if self.summary.monthly_breakdown:
            lines.extend(["", "Top Categories:"])
            for index, item in enumerate(self.summary.monthly_breakdown[:3], 1):
                lines.append(f"{index}. {item.label}: {self._money(item.amount)}")
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("Category breakdown", "Spending summary", "Upcoming renewals"),
        )

    def budget(self, message: str) -> ChatResponse:
        monthly = self.summary.total_monthly_spending
        if monthly == 0:
            return ChatResponse(
                text=(
                    "You don't have any subscriptions yet, so no budget concerns! "
                    "Add some subscriptions to start tracking your spending."
                ),
                suggestions=("Add subscription", "Help", "Show spending"),
            )

        lines = ["Budget Tips for Your Subscriptions:", "", f"Current monthly spending: {self._money(monthly)}"]
        if self.summary.monthly_breakdown:
            top = self.summary.monthly_breakdown[0]
            lines.append(f"Highest spending category: {top.label} ({self._money(top.amount)})")
        lines.extend(
            [
                "",
                "Tips to save money:",
                "• Review unused subscriptions",
                "• Consider annual plans for savings",
                "• Set spending alerts",
                "• Cancel duplicate services",
            ]
        )
        return ChatResponse(
            text="\n".join(lines),
            suggestions=("List subscriptions", "Show spending", "Upcoming renewals"),
        )

    def fallback(self, message: str) -> ChatResponse:
        return ChatResponse(
            text=(
                "I'm not sure I understand. Try asking me about your spending, "
                "upcoming renewals, or subscription count. You can also say 'help' to see what I can do!"
            ),
            suggestions=("Help", "Show spending", "List subscriptions", "Upcoming renewals"),
        )
