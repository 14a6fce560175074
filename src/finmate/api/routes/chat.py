from typing import Annotated

from fastapi import APIRouter, Depends

from finmate.api.dependencies import get_assistant, get_store
from finmate.api.schemas import ChatRequest, QuickActionRequest
from finmate.assistant.advice import welcome_turn
from finmate.logger import get_logger
from finmate.models import ChatTurn
from finmate.services.actions import apply_quick_action
from finmate.services.assistant import BudgetAssistant
from finmate.services.storage import LedgerStore

logger = get_logger(__name__)

router = APIRouter()


@router.get("/api/chat/welcome")
async def chat_welcome(
    assistant: Annotated[BudgetAssistant, Depends(get_assistant)],
) -> ChatTurn:
    return welcome_turn(assistant.ledger.snapshot())


@router.post("/api/chat")
async def chat(
    req: ChatRequest,
    assistant: Annotated[BudgetAssistant, Depends(get_assistant)],
) -> list[ChatTurn]:
    return assistant.reply(req.message)


@router.post("/api/chat/actions")
async def run_quick_action(
    req: QuickActionRequest,
    assistant: Annotated[BudgetAssistant, Depends(get_assistant)],
    store: Annotated[LedgerStore, Depends(get_store)],
) -> list[ChatTurn]:
    logger.info("[ACTION] Quick action requested: %s", req.action.action)
    turns = apply_quick_action(assistant.ledger, req.action)
    store.save(assistant.ledger)
    return turns
