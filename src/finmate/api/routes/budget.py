from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from finmate.api.dependencies import get_ledger, get_store
from finmate.api.schemas import (
    BudgetRequest,
    BudgetSummary,
    CategoryLimitRequest,
    CategoryStatusPayload,
)
from finmate.ledger import BudgetLedger
from finmate.logger import get_logger
from finmate.models import Category
from finmate.services.storage import LedgerStore

logger = get_logger(__name__)

router = APIRouter()


def build_summary(ledger: BudgetLedger) -> BudgetSummary:
    statuses = [
        CategoryStatusPayload(
            category=status.category,
            spent=status.spent,
            remaining=status.remaining,
            percent=status.percent,
            display_remaining=status.display_remaining,
            display_percent=status.display_percent,
        )
        for status in ledger.category_statuses()
    ]
    return BudgetSummary(
        weekly_budget=ledger.weekly_budget,
        configured=ledger.is_configured,
        remaining_this_week=ledger.remaining_this_week(),
        categories=statuses,
    )


@router.get("/api/budget", response_model=BudgetSummary)
async def get_budget(
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
) -> BudgetSummary:
    return build_summary(ledger)


@router.post("/api/budget", response_model=BudgetSummary)
async def set_budget(
    req: BudgetRequest,
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
    store: Annotated[LedgerStore, Depends(get_store)],
) -> BudgetSummary:
    ledger.set_weekly_budget(req.weekly_budget)
    store.save(ledger)
    return build_summary(ledger)


@router.get("/api/categories")
async def get_categories(
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
) -> list[Category]:
    return ledger.categories


@router.put("/api/categories/{category_id}")
async def update_category_limit(
    category_id: str,
    req: CategoryLimitRequest,
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
    store: Annotated[LedgerStore, Depends(get_store)],
) -> Category | None:
    if ledger.get_category(category_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown category '{category_id}'")
    ledger.update_category_limit(category_id, req.weekly_limit)
    store.save(ledger)
    return ledger.get_category(category_id)


@router.post("/api/session/reset")
async def reset_session(
    ledger: Annotated[BudgetLedger, Depends(get_ledger)],
    store: Annotated[LedgerStore, Depends(get_store)],
) -> dict[str, str]:
    ledger.reset_for_new_session()
    store.save(ledger)
    return {"status": "reset"}
