from fastapi import HTTPException, Request

from finmate.ledger import BudgetLedger
from finmate.services.assistant import BudgetAssistant
from finmate.services.storage import LedgerStore


def get_ledger(request: Request) -> BudgetLedger:
    ledger = getattr(request.app.state, "ledger", None)
    if not ledger:
        raise HTTPException(status_code=500, detail="Ledger not initialized")
    return ledger


def get_store(request: Request) -> LedgerStore:
    store = getattr(request.app.state, "store", None)
    if not store:
        raise HTTPException(status_code=500, detail="Store not initialized")
    return store


def get_assistant(request: Request) -> BudgetAssistant:
    assistant = getattr(request.app.state, "assistant", None)
    if not assistant:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return assistant
