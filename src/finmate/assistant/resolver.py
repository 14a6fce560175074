from collections.abc import Iterable

from finmate.logger import get_logger
from finmate.models import Category

logger = get_logger(__name__)

# Canonical category name (lowercase) -> keywords matched as substrings.
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "food": (
        "dinner", "lunch", "breakfast", "snack", "snacks", "meal", "meals",
        "eating", "restaurant", "cafe", "coffee",
    ),
    "transport": (
        "transportation", "travel", "traveling", "uber", "lyft", "bus",
        "train", "gas", "fuel",
    ),
    "social": (
        "socializing", "entertainment", "party", "parties", "friends", "date",
        "dating",
    ),
    "other": (
        "misc", "miscellaneous", "general", "stuff", "things", "shopping",
        "personal",
    ),
}


def _find_by_name(categories: Iterable[Category], lower_name: str) -> Category | None:
    for category in categories:
        if category.name.lower() == lower_name:
            return category
    return None


def resolve_category(categories: Iterable[Category], text: str) -> Category | None:
    """
    Map a free-text reference such as "dinner" or "Social" to a configured category.

    An exact, case-insensitive name match wins; otherwise the first keyword
    group contained in the text decides. Returns None when nothing matches.
    """
    categories = list(categories)
    lower_text = text.strip().lower()

    category = _find_by_name(categories, lower_text)
    if category:
        return category

    for category_name, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lower_text for keyword in keywords):
            category = _find_by_name(categories, category_name)
            if category:
                logger.debug("[RESOLVE] '%s' matched '%s' by keyword.", text, category.name)
                return category

    logger.debug("[RESOLVE] No category for '%s'.", text)
    return None
