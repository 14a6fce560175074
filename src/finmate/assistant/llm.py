import os

from openai import OpenAI

from finmate.core.settings import DEFAULT_OPENAI_MODEL, DEFAULT_OPENAI_TEMPERATURE
from finmate.domain.formatting import format_amount, join_names
from finmate.logger import get_logger
from finmate.models import LedgerSnapshot

logger = get_logger(__name__)


class LLMAdvisor:
    """Free-form answers from an OpenAI-compatible model, used for messages no rule understands."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str | None = None,
        temperature: float = DEFAULT_OPENAI_TEMPERATURE,
    ):
        self.client = OpenAI(
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url or os.getenv("OPENAI_BASE_URL") or None,
        )
        self.model = model
        self.temperature = temperature

    @staticmethod
    def build_instructions(snapshot: LedgerSnapshot) -> str:
        categories = join_names(
            [f"{c.name} ({format_amount(c.weekly_limit)})" for c in snapshot.categories]
        )
        return (
            "You are a helpful budget assistant. "
            f"The user has a weekly budget of {format_amount(snapshot.weekly_budget)} "
            f"with these categories: {categories}. "
            f"They have {format_amount(snapshot.remaining_this_week)} remaining this week. "
            "Keep responses concise and helpful."
        )

    def advise(self, message: str, snapshot: LedgerSnapshot) -> str | None:
        try:
            response = self.client.responses.create(
                model=self.model,
                instructions=self.build_instructions(snapshot),
                input=message,
                max_output_tokens=200,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"LLM Error: {e}")
            return None

        text = self._extract_output_text(response)
        return text.strip() if text else None

    @staticmethod
    def _extract_output_text(response: object) -> str | None:
        output_text = getattr(response, "output_text", None)
        if output_text:
            return output_text

        output = getattr(response, "output", None)
        if not output:
            return None

        parts: list[str] = []
        for item in output:
            content = getattr(item, "content", None)
            if not content:
                continue
            for block in content:
                if getattr(block, "type", None) in {"output_text", "text"}:
                    text = getattr(block, "text", None)
                    if text:
                        parts.append(text)

        return "".join(parts) or None
