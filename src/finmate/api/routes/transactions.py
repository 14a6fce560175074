import uuid
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from finmate.api.dependencies import get_ledger, get_store
from finmate.api.schemas import TransactionRequest
from finmate.ledger import BudgetLedger
from finmate.models import Transaction
from finmate.services.storage import LedgerStore

router = APIRouter()


def is_all_scope(scope: str | None) -> bool:
    return (scope or "").lower() == "all"


@router.get("/api/transactions")
async def get_transactions(
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
    scope: str | None = None,
) -> dict[str, Any]:
    transactions = ledger.transactions if is_all_scope(scope) else ledger.this_week_transactions()
    return {
        "transactions": list(transactions),
        "remaining_this_week": ledger.remaining_this_week(),
    }


@router.post("/api/transactions")
async def add_transaction(
    req: TransactionRequest,
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
    store: Annotated[LedgerStore, Depends(get_store)],
) -> Transaction:
    transaction = Transaction(
        id=uuid.uuid4().hex,
        category_id=req.category_id,
        label=req.label,
        amount=req.amount,
        date=req.date or datetime.now(),
    )
    ledger.add_transaction(transaction)
    store.save(ledger)
    return transaction
