"""
Spend aggregation over the current Monday-Sunday window.

Every function here returns raw, unclamped figures: remaining amounts can be
negative and percentages can exceed 100. Clamping for display happens only in
``category_status``.
"""
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from finmate.domain.weeks import local_date, week_window
from finmate.models import Category, Transaction


def this_week_transactions(
    transactions: Iterable[Transaction],
    now: datetime | None = None,
) -> list[Transaction]:
    start, end = week_window(now)
    first_day, last_day = start.date(), end.date()
    return [
        transaction
        for transaction in transactions
        if first_day <= local_date(transaction.date) <= last_day
    ]


def total_spend(transactions: Iterable[Transaction], now: datetime | None = None) -> float:
    return sum((t.amount for t in this_week_transactions(transactions, now)), 0.0)


def spend_by_category(
    transactions: Iterable[Transaction],
    category_id: str,
    now: datetime | None = None,
) -> float:
    return sum(
        (t.amount for t in this_week_transactions(transactions, now) if t.category_id == category_id),
        0.0,
    )


def spend_per_category(
    transactions: Iterable[Transaction],
    now: datetime | None = None,
) -> dict[str, float]:
    totals: dict[str, float] = {}
    for transaction in this_week_transactions(transactions, now):
        totals[transaction.category_id] = totals.get(transaction.category_id, 0.0) + transaction.amount
    return totals


def remaining_this_week(
    weekly_budget: float,
    transactions: Iterable[Transaction],
    now: datetime | None = None,
) -> float:
    return weekly_budget - total_spend(transactions, now)


def progress_percent(spent: float, limit: float) -> float:
    if limit > 0:
        return (spent / limit) * 100
    return 0.0


@dataclass(frozen=True)
class CategoryStatus:
    category: Category
    spent: float
    remaining: float
    percent: float

    @property
    def display_remaining(self) -> float:
        return max(0.0, self.remaining)

    @property
    def display_percent(self) -> float:
        return min(max(self.percent, 0.0), 100.0)


def category_status(
    category: Category,
    transactions: Iterable[Transaction],
    now: datetime | None = None,
) -> CategoryStatus:
    spent = spend_by_category(transactions, category.id, now)
    return CategoryStatus(
        category=category,
        spent=spent,
        remaining=category.weekly_limit - spent,
        percent=progress_percent(spent, category.weekly_limit),
    )
