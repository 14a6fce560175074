import math

from finmate.models import Category, CategoryName

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Food", color="#10B981"),
    Category(id="transport", name="Transport", color="#3B82F6"),
    Category(id="social", name="Social", color="#F59E0B"),
    Category(id="other", name="Other", color="#8B5CF6"),
)

CATEGORY_PROPORTIONS: dict[CategoryName, float] = {
    "Food": 0.40,
    "Transport": 0.20,
    "Social": 0.25,
    "Other": 0.15,
}


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def initialize_categories(weekly_budget: float) -> list[Category]:
    """Split ``weekly_budget`` across the four fixed categories, rounded to whole units."""
    return [
        category.model_copy(
            update={
                "weekly_limit": _round_half_up(
                    weekly_budget * CATEGORY_PROPORTIONS[category.name]
                )
            }
        )
        for category in DEFAULT_CATEGORIES
    ]


def blank_categories() -> list[Category]:
    return [category.model_copy(update={"weekly_limit": 0.0}) for category in DEFAULT_CATEGORIES]
