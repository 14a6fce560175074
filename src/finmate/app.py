import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from finmate.api.routes import budget, chat, transactions
from finmate.core import settings
from finmate.logger import get_logger, setup_logging
from finmate.services.assistant import BudgetAssistant, build_advisor
from finmate.services.storage import LedgerStore

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        ledger_path = settings.get_ledger_path()
        settings.ensure_dir(os.path.dirname(ledger_path))
        store = LedgerStore(data_path=ledger_path)
        ledger = store.load()
        if not ledger.is_configured:
            logger.info("Weekly budget not configured yet.")

        app.state.store = store
        app.state.ledger = ledger
        app.state.assistant = BudgetAssistant(ledger=ledger, advisor=build_advisor())

        logger.info("Services initialized.")
        yield
        store.save(ledger)
        logger.info("Service shutting down.")

    app = FastAPI(title="Finmate", lifespan=lifespan)

    app.include_router(budget.router)
    app.include_router(transactions.router)
    app.include_router(chat.router)

    return app
