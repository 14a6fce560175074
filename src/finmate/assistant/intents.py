import re
from abc import ABC, abstractmethod

from finmate.logger import get_logger
from finmate.models import Intent, PlanIntent, QueryIntent, ReallocateIntent, UnknownIntent

logger = get_logger(__name__)

_AMOUNT = r"\$?(\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?)"
_TRAILING_PUNCTUATION = ".!? "


def _to_amount(raw: str) -> float:
    return float(raw.replace(",", ""))


def _clean_reference(raw: str) -> str:
    return raw.strip().rstrip(_TRAILING_PUNCTUATION).strip()


class IntentRule(ABC):
    name: str
    pattern: re.Pattern[str]

    def match(self, message: str) -> Intent | None:
        found = self.pattern.search(message)
        if not found:
            return None
        return self.build(found)

    @abstractmethod
    def build(self, found: re.Match[str]) -> Intent:
        """Turn a successful match into a typed intent."""
        pass


class PlanRule(IntentRule):
    """plan <thing> for $<amount>"""
    name = "plan"
    pattern = re.compile(rf"plan\s+(.+?)\s+for\s+{_AMOUNT}", re.IGNORECASE)

    def build(self, found: re.Match[str]) -> Intent:
        return PlanIntent(thing=found.group(1).strip(), amount=_to_amount(found.group(2)))


class ReallocateRule(IntentRule):
    """(reallocate|move|transfer) $<amount> from <category> to <category>"""
    name = "reallocate"
    pattern = re.compile(
        rf"(?:reallocate|move|transfer)\s+{_AMOUNT}\s+from\s+(.+?)\s+to\s+(.+)",
        re.IGNORECASE,
    )

    def build(self, found: re.Match[str]) -> Intent:
        return ReallocateIntent(
            amount=_to_amount(found.group(1)),
            from_category=_clean_reference(found.group(2)),
            to_category=_clean_reference(found.group(3)),
        )


class QueryRule(IntentRule):
    name = "query"
    pattern = re.compile(
        r"how\s+much\s+can\s+i\s+spend\s+on\s+(.+?)\s*(?:\?|$)"
        r"|what['’]?s\s+my\s+(.+?)\s+budget\b"
        r"|how\s+much\s+left\s+for\s+(.+?)\s*(?:\?|$)",
        re.IGNORECASE,
    )

    def build(self, found: re.Match[str]) -> Intent:
        category = found.group(1) or found.group(2) or found.group(3)
        return QueryIntent(category=_clean_reference(category))


# Checked in order; the first rule that matches wins.
INTENT_RULES: tuple[IntentRule, ...] = (PlanRule(), ReallocateRule(), QueryRule())


def parse_intent(message: str, rules: tuple[IntentRule, ...] = INTENT_RULES) -> Intent:
    text = message.strip()
    for rule in rules:
        intent = rule.match(text)
        if intent is not None:
            logger.debug("[INTENT] '%s' matched rule '%s'.", text[:50], rule.name)
            return intent
    logger.debug("[INTENT] No rule matched '%s'.", text[:50])
    return UnknownIntent()
