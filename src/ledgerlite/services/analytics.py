"""Balance and spending analytics.

Everything here is computed from scratch on each call from the sequences
passed in. Inputs are never mutated and degenerate input (no transactions,
no categories) yields zero-valued results rather than errors.

Month windows are half-open ``[start, next_start)`` intervals anchored on
``month_start_day`` of the anchor's calendar month, so with a start day of 15
the 14th of a month belongs to the previous window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Iterable, Mapping, Optional, Protocol, Sequence

from ..constants.categories import (
    FLOW_ADJUSTMENT,
    FLOW_EXPENSE,
    FLOW_INCOME,
    MONTH_START_DAY_MAX,
    MONTH_START_DAY_MIN,
    UNKNOWN_CATEGORY_COLOR,
    UNKNOWN_CATEGORY_NAME,
)
from ..domain.repositories import CategoryRepository, SettingsRepository, TransactionRepository
from .money import to_major_units


class TransactionLike(Protocol):
    flow: str
    amount: int
    category_id: Optional[str]
    happened_at: datetime


class CategoryLike(Protocol):
    id: str
    name: str
    color: str
    emoji: Optional[str]


@dataclass(slots=True, frozen=True)
class MonthSummary:
    """Income, expense and net for one month window."""

    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass(slots=True, frozen=True)
class BalanceInfo:
    current_balance: float
    this_month: MonthSummary


@dataclass(slots=True, frozen=True)
class CategorySpend:
    category_id: str
    category_name: str
    category_color: str
    category_emoji: Optional[str]
    amount: float
    percentage: float
    transaction_count: int


@dataclass(slots=True, frozen=True)
class MonthlyStats:
    month: str  # YYYY-MM of the anchor month
    total_income: float
    total_expense: float
    category_totals: dict[str, float] = field(default_factory=dict)

    @property
    def net_amount(self) -> float:
        return self.total_income - self.total_expense


@dataclass(slots=True, frozen=True)
class CategoryRef:
    """Display attributes for a category id, real or fallback."""

    name: str
    color: str
    emoji: Optional[str] = None
    known: bool = True


UNKNOWN_CATEGORY = CategoryRef(
    name=UNKNOWN_CATEGORY_NAME, color=UNKNOWN_CATEGORY_COLOR, emoji=None, known=False
)


def month_window(anchor: date, month_start_day: int = 1) -> tuple[datetime, datetime]:
    """Return ``(start, next_start)`` for the window anchored on ``anchor``'s month.

    A missing or zero start day means the 1st; other values are clamped to 1..28.
    """
    day = month_start_day or MONTH_START_DAY_MIN
    day = max(MONTH_START_DAY_MIN, min(MONTH_START_DAY_MAX, day))

    start = datetime(anchor.year, anchor.month, day)
    if anchor.month == 12:
        next_start = datetime(anchor.year + 1, 1, day)
    else:
        next_start = datetime(anchor.year, anchor.month + 1, day)
    return start, next_start


def _in_window(moment: date, window: tuple[datetime, datetime]) -> bool:
    start, next_start = window
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    elif moment.tzinfo is not None:
        moment = moment.astimezone().replace(tzinfo=None)
    return start <= moment < next_start


def build_category_lookup(categories: Iterable[CategoryLike]) -> dict[str, CategoryLike]:
    return {c.id: c for c in categories}


def resolve_category(
    category_id: Optional[str], lookup: Mapping[str, CategoryLike]
) -> CategoryRef:
    """Map a category id to display attributes, falling back for dangling ids."""
    category = lookup.get(category_id) if category_id else None
    if category is None:
        return UNKNOWN_CATEGORY
    return CategoryRef(name=category.name, color=category.color, emoji=category.emoji)


def calculate_balance(
    transactions: Iterable[TransactionLike],
    *,
    month_start_day: int = 1,
    now: Optional[datetime] = None,
) -> BalanceInfo:
    """Running balance over all transactions plus this month's income/expense.

    Adjustments move the running balance but are left out of the monthly
    figures.
    """
    window = month_window(now or datetime.now(), month_start_day)

    balance = 0.0
    income = 0.0
    expense = 0.0
    for txn in transactions:
        amount = to_major_units(txn.amount)
        if txn.flow in (FLOW_INCOME, FLOW_ADJUSTMENT):
            balance += amount
        elif txn.flow == FLOW_EXPENSE:
            balance -= amount

        if _in_window(txn.happened_at, window):
            if txn.flow == FLOW_INCOME:
                income += amount
            elif txn.flow == FLOW_EXPENSE:
                expense += amount

    return BalanceInfo(
        current_balance=balance,
        this_month=MonthSummary(income=income, expense=expense),
    )


def get_category_spending(
    transactions: Iterable[TransactionLike],
    categories: Iterable[CategoryLike],
    *,
    month_start_day: int = 1,
    month: Optional[date] = None,
) -> list[CategorySpend]:
    """Per-category expense totals for one month window, largest first.

    Ties keep the order in which each category was first seen.
    """
    window = month_window(month or datetime.now(), month_start_day)

    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    total_expense = 0.0
    for txn in transactions:
        if txn.flow != FLOW_EXPENSE or not txn.category_id:
            continue
        if not _in_window(txn.happened_at, window):
            continue
        amount = to_major_units(txn.amount)
        totals[txn.category_id] = totals.get(txn.category_id, 0.0) + amount
        counts[txn.category_id] = counts.get(txn.category_id, 0) + 1
        total_expense += amount

    lookup = build_category_lookup(categories)
    breakdown = []
    for category_id, amount in totals.items():
        ref = resolve_category(category_id, lookup)
        breakdown.append(
            CategorySpend(
                category_id=category_id,
                category_name=ref.name,
                category_color=ref.color,
                category_emoji=ref.emoji,
                amount=amount,
                percentage=(amount / total_expense * 100) if total_expense > 0 else 0.0,
                transaction_count=counts[category_id],
            )
        )
    # sorted() is stable, so equal amounts stay in encounter order.
    return sorted(breakdown, key=lambda entry: entry.amount, reverse=True)


def get_monthly_comparison(
    transactions: Sequence[TransactionLike],
    months: Iterable[date],
    *,
    month_start_day: int = 1,
) -> list[MonthlyStats]:
    """Income/expense totals for each requested month, in the order given."""

    stats = []
    for month in months:
        window = month_window(month, month_start_day)
        income = 0.0
        expense = 0.0
        category_totals: dict[str, float] = {}
        for txn in transactions:
            if not _in_window(txn.happened_at, window):
                continue
            amount = to_major_units(txn.amount)
            if txn.flow == FLOW_INCOME:
                income += amount
            elif txn.flow == FLOW_EXPENSE:
                expense += amount
                if txn.category_id:
                    category_totals[txn.category_id] = (
                        category_totals.get(txn.category_id, 0.0) + amount
                    )
        stats.append(
            MonthlyStats(
                month=f"{month.year:04d}-{month.month:02d}",
                total_income=income,
                total_expense=expense,
                category_totals=category_totals,
            )
        )
    return stats


class AnalyticsEngine:
    """Reads a fresh snapshot from the repositories on every call."""

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
        settings_repo: SettingsRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.transaction_repo = transaction_repo
        self.category_repo = category_repo
        self.settings_repo = settings_repo
        self.clock = clock

    def _month_start_day(self) -> int:
        return self.settings_repo.get().month_start_day

    def calculate_balance(self) -> BalanceInfo:
        return calculate_balance(
            self.transaction_repo.list_all(),
            month_start_day=self._month_start_day(),
            now=self.clock(),
        )

    def get_category_spending(self, month: Optional[date] = None) -> list[CategorySpend]:
        return get_category_spending(
            self.transaction_repo.list_all(),
            self.category_repo.list_all(),
            month_start_day=self._month_start_day(),
            month=month or self.clock(),
        )

    def get_monthly_comparison(self, months: Iterable[date]) -> list[MonthlyStats]:
        return get_monthly_comparison(
            self.transaction_repo.list_all(),
            months,
            month_start_day=self._month_start_day(),
        )


__all__ = [
    "AnalyticsEngine",
    "BalanceInfo",
    "CategoryRef",
    "CategorySpend",
    "MonthSummary",
    "MonthlyStats",
    "UNKNOWN_CATEGORY",
    "build_category_lookup",
    "calculate_balance",
    "get_category_spending",
    "get_monthly_comparison",
    "month_window",
    "resolve_category",
]
