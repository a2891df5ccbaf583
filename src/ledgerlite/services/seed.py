"""First-run seeding of default categories and sample transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..constants.categories import DEFAULT_CATEGORIES
from ..domain.repositories import CategoryRepository, TransactionRepository
from ..logging_config import get_logger

logger = get_logger(__name__)

SAMPLE_TRANSACTIONS = [
    {
        "flow": "income",
        "category": "Salary",
        "amount": 4500000,  # ₹45,000 in paise
        "payment_method": "upi",
        "reason": "Monthly salary",
        "days_ago": 5,
    },
    {
        "flow": "expense",
        "category": "Food",
        "amount": 25000,  # ₹250 in paise
        "payment_method": "upi",
        "reason": "Lunch with friends",
        "days_ago": 2,
    },
    {
        "flow": "expense",
        "category": "Transport",
        "amount": 6000,  # ₹60 in paise
        "payment_method": "cash",
        "reason": "Auto to market",
        "days_ago": 1,
    },
]


@dataclass(frozen=True)
class SeedSummary:
    """Counts returned after a seed attempt."""

    categories: int
    transactions: int
    seeded: bool


def _seed_categories(category_repo: CategoryRepository) -> None:
    # One transaction, so a failed seed leaves the collection empty for the next run.
    category_repo.create_many(DEFAULT_CATEGORIES)


def _seed_transactions(
    category_repo: CategoryRepository,
    transaction_repo: TransactionRepository,
    now: datetime,
) -> int:
    # Runs only after every default category is stored so names resolve to ids.
    resolved = {sample["category"]: category_repo.get_by_name(sample["category"]) for sample in SAMPLE_TRANSACTIONS}
    missing = sorted(name for name, category in resolved.items() if category is None)
    if missing:
        logger.warning(f"Skipping sample transactions, categories missing: {', '.join(missing)}")
        return 0

    for sample in SAMPLE_TRANSACTIONS:
        transaction_repo.create(
            flow=sample["flow"],
            category_id=resolved[sample["category"]].id,  # type: ignore[union-attr]
            amount=sample["amount"],
            payment_method=sample["payment_method"],
            reason=sample["reason"],
            happened_at=now - timedelta(days=sample["days_ago"]),
        )
    return len(SAMPLE_TRANSACTIONS)


def run_initial_seed(
    category_repo: CategoryRepository,
    transaction_repo: TransactionRepository,
    *,
    now: Optional[datetime] = None,
) -> SeedSummary:
    """Seed defaults idempotently and return the resulting counts.

    Nothing is written unless the category collection is empty. Sample
    transactions are additionally skipped when transactions already exist.
    """
    if category_repo.count() > 0:
        logger.debug("Categories present, skipping seed")
        return SeedSummary(
            categories=category_repo.count(),
            transactions=transaction_repo.count(),
            seeded=False,
        )

    _seed_categories(category_repo)
    added = 0
    if transaction_repo.count() == 0:
        added = _seed_transactions(category_repo, transaction_repo, now or datetime.now())

    summary = SeedSummary(
        categories=category_repo.count(),
        transactions=transaction_repo.count(),
        seeded=True,
    )
    logger.info(
        "Initial seed complete",
        extra={"categories": summary.categories, "sample_transactions": added},
    )
    return summary
