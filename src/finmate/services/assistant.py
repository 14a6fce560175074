import os

from finmate.assistant.advice import generate_response
from finmate.assistant.intents import parse_intent
from finmate.assistant.llm import LLMAdvisor
from finmate.core.settings import (
    DEFAULT_OPENAI_MODEL,
    DEFAULT_OPENAI_TEMPERATURE,
    get_env_float,
)
from finmate.ledger import BudgetLedger
from finmate.logger import get_logger
from finmate.models import ChatTurn, UnknownIntent

logger = get_logger(__name__)


def build_advisor() -> LLMAdvisor | None:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.info("OPENAI_API_KEY not set. LLM advisor disabled.")
        return None
    model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
    base_url = os.getenv("OPENAI_BASE_URL")
    temperature = get_env_float("OPENAI_TEMPERATURE", DEFAULT_OPENAI_TEMPERATURE)
    logger.info(f"LLM advisor enabled: model={model}, base_url={base_url or 'default'}")
    return LLMAdvisor(
        api_key=api_key,
        model=model,
        base_url=base_url,
        temperature=temperature,
    )


class BudgetAssistant:
    """
    Answers chat messages against a ledger.

    The rule engine always runs first. The optional advisor only rewrites the
    text of the fallback help turn; its quick actions are kept.
    """

    def __init__(self, ledger: BudgetLedger, advisor: LLMAdvisor | None = None):
        self.ledger = ledger
        self.advisor = advisor

    def reply(self, message: str) -> list[ChatTurn]:
        snapshot = self.ledger.snapshot()
        intent = parse_intent(message)
        response = generate_response(intent, snapshot)

        if isinstance(intent, UnknownIntent) and self.advisor:
            text = self.advisor.advise(message, snapshot)
            if text:
                response = response.model_copy(update={"text": text})
            else:
                logger.debug("[ADVICE] Advisor returned nothing; using help text.")

        return [response]
