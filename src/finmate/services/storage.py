import json
import os

from pydantic import BaseModel, ValidationError

from finmate.ledger import BudgetLedger
from finmate.logger import get_logger
from finmate.models import Category, Transaction

logger = get_logger(__name__)


class LedgerDocument(BaseModel):
    weekly_budget: float = 0.0
    categories: list[Category] = []
    transactions: list[Transaction] = []


class LedgerStore:
    """Keeps a JSON snapshot of one ledger on disk."""

    def __init__(self, data_path: str = "ledger.json"):
        self.data_path = data_path

    def load(self) -> BudgetLedger:
        if not os.path.exists(self.data_path):
            return BudgetLedger()
        try:
            with open(self.data_path, encoding="utf-8") as f:
                document = LedgerDocument.model_validate(json.load(f))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("[STORE] Ignoring unreadable ledger at %s: %s", self.data_path, e)
            return BudgetLedger()

        logger.info(
            "[STORE] Loaded ledger: budget=%.2f, %d transactions.",
            document.weekly_budget,
            len(document.transactions),
        )
        return BudgetLedger(
            weekly_budget=document.weekly_budget,
            categories=document.categories or None,
            transactions=document.transactions,
        )

    def save(self, ledger: BudgetLedger) -> None:
        document = LedgerDocument(
            weekly_budget=ledger.weekly_budget,
            categories=ledger.categories,
            transactions=ledger.transactions,
        )
        with open(self.data_path, "w", encoding="utf-8") as f:
            json.dump(document.model_dump(mode="json"), f, indent=2)

    def clear(self) -> None:
        if os.path.exists(self.data_path):
            os.remove(self.data_path)
