from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

CategoryName = Literal["Food", "Transport", "Social", "Other"]


class Category(BaseModel):
    id: str
    name: CategoryName
    color: str
    weekly_limit: float = 0.0


class Transaction(BaseModel):
    id: str
    category_id: str
    label: str
    amount: float
    date: datetime


# Intents

class PlanIntent(BaseModel):
    intent: Literal["plan"] = "plan"
    thing: str
    amount: float


class ReallocateIntent(BaseModel):
    intent: Literal["reallocate"] = "reallocate"
    amount: float
    from_category: str
    to_category: str


class QueryIntent(BaseModel):
    intent: Literal["query"] = "query"
    category: str


class UnknownIntent(BaseModel):
    intent: Literal["unknown"] = "unknown"


Intent = Annotated[
    Union[PlanIntent, ReallocateIntent, QueryIntent, UnknownIntent],
    Field(discriminator="intent"),
]


# Quick actions. Suggestions only; the caller decides whether to run them.

class SuggestAmountAction(BaseModel):
    action: Literal["suggest_amount"] = "suggest_amount"
    label: str
    thing: str
    amount: float


class SuggestReallocateAction(BaseModel):
    """Reallocation suggestion by category display name."""
    action: Literal["suggest_reallocate"] = "suggest_reallocate"
    label: str
    amount: float
    from_category: str
    to_category: str


class AddPlannedTransactionAction(BaseModel):
    action: Literal["add_planned_transaction"] = "add_planned_transaction"
    label: str
    thing: str
    amount: float
    category_id: str


class ReallocateAction(BaseModel):
    """Executable reallocation between two category ids."""
    action: Literal["reallocate"] = "reallocate"
    label: str
    amount: float
    from_category: str
    to_category: str


class SuggestPlanAction(BaseModel):
    action: Literal["suggest_plan"] = "suggest_plan"
    label: str
    amount: float
    category: str


class SuggestQueryAction(BaseModel):
    action: Literal["suggest_query"] = "suggest_query"
    label: str
    category: str


class ShowCategoriesAction(BaseModel):
    action: Literal["show_categories"] = "show_categories"
    label: str = "Show my categories"


QuickAction = Annotated[
    Union[
        SuggestAmountAction,
        SuggestReallocateAction,
        AddPlannedTransactionAction,
        ReallocateAction,
        SuggestPlanAction,
        SuggestQueryAction,
        ShowCategoriesAction,
    ],
    Field(discriminator="action"),
]


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    text: str
    quick_actions: list[QuickAction] = Field(default_factory=list)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time, read-only view of a ledger handed to the advice engine."""
    weekly_budget: float
    categories: tuple[Category, ...]
    transactions: tuple[Transaction, ...]
    remaining_this_week: float
    category_spend: Mapping[str, float] = field(default_factory=dict)

    def spend_by_category(self, category_id: str) -> float:
        return self.category_spend.get(category_id, 0.0)
