from datetime import datetime

from finmate.domain import aggregation
from finmate.domain.seed import blank_categories, initialize_categories
from finmate.logger import get_logger
from finmate.models import Category, LedgerSnapshot, Transaction

logger = get_logger(__name__)


class BudgetLedger:
    """
    Owns the weekly budget, the category limits and the append-only transaction log.

    All spend math is delegated to ``finmate.domain.aggregation``. Category
    limits are advisory and may drift away from the weekly budget after
    reallocations.
    """

    def __init__(
        self,
        weekly_budget: float = 0.0,
        categories: list[Category] | None = None,
        transactions: list[Transaction] | None = None,
    ):
        self.weekly_budget = weekly_budget
        self.categories: list[Category] = (
            list(categories) if categories is not None else blank_categories()
        )
        self.transactions: list[Transaction] = list(transactions) if transactions is not None else []

    @property
    def is_configured(self) -> bool:
        return self.weekly_budget > 0

    def get_category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def set_weekly_budget(self, amount: float) -> None:
        """Set the budget and replace every category with a fresh proportional split."""
        self.weekly_budget = amount
        self.categories = initialize_categories(amount)
        logger.info("[LEDGER] Weekly budget set to %.2f; categories re-initialized.", amount)

    def add_transaction(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)
        logger.debug(
            "[LEDGER] Added transaction %s: '%s' %.2f -> %s",
            transaction.id,
            transaction.label,
            transaction.amount,
            transaction.category_id,
        )

    def update_category_limit(self, category_id: str, limit: float) -> None:
        for index, category in enumerate(self.categories):
            if category.id == category_id:
                self.categories[index] = category.model_copy(update={"weekly_limit": limit})
                logger.info("[LEDGER] Limit for '%s' set to %.2f.", category_id, limit)
                return
        logger.debug("[LEDGER] Ignoring limit update for unknown category '%s'.", category_id)

    def reallocate(self, amount: float, from_category_id: str, to_category_id: str) -> bool:
        """Move ``amount`` of limit between two distinct categories.

        Returns False, leaving every limit untouched, if either category is
        missing or both ids name the same category.
        """
        from_category = self.get_category(from_category_id)
        to_category = self.get_category(to_category_id)
        if from_category is None or to_category is None:
            return False
        if from_category_id == to_category_id:
            logger.debug("[LEDGER] Ignoring reallocation within '%s'.", from_category_id)
            return False
        self.update_category_limit(from_category_id, from_category.weekly_limit - amount)
        self.update_category_limit(to_category_id, to_category.weekly_limit + amount)
        return True

    def reset_for_new_session(self) -> None:
        self.weekly_budget = 0.0
        self.categories = blank_categories()
        self.transactions = []
        logger.info("[LEDGER] Ledger reset for a new session.")

    def this_week_transactions(self, now: datetime | None = None) -> list[Transaction]:
        return aggregation.this_week_transactions(self.transactions, now)

    def remaining_this_week(self, now: datetime | None = None) -> float:
        return aggregation.remaining_this_week(self.weekly_budget, self.transactions, now)

    def spend_by_category(self, category_id: str, now: datetime | None = None) -> float:
        return aggregation.spend_by_category(self.transactions, category_id, now)

    def category_statuses(self, now: datetime | None = None) -> list[aggregation.CategoryStatus]:
        return [aggregation.category_status(c, self.transactions, now) for c in self.categories]

    def snapshot(self, now: datetime | None = None) -> LedgerSnapshot:
        if now is None:
            now = datetime.now()
        return LedgerSnapshot(
            weekly_budget=self.weekly_budget,
            categories=tuple(self.categories),
            transactions=tuple(self.transactions),
            remaining_this_week=self.remaining_this_week(now),
            category_spend=aggregation.spend_per_category(self.transactions, now),
        )
