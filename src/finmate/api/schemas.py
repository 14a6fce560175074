from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from finmate.models import Category, QuickAction


class BudgetRequest(BaseModel):
    weekly_budget: float = Field(gt=0)


class CategoryLimitRequest(BaseModel):
    weekly_limit: float


class TransactionRequest(BaseModel):
    category_id: str
    label: str
    amount: float = Field(gt=0)
    date: datetime | None = None

    @field_validator("label")
    @classmethod
    def label_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Label must not be empty.")
        return value


class ChatRequest(BaseModel):
    message: str


class QuickActionRequest(BaseModel):
    action: QuickAction


class CategoryStatusPayload(BaseModel):
    category: Category
    spent: float
    remaining: float
    percent: float
    display_remaining: float
    display_percent: float


class BudgetSummary(BaseModel):
    weekly_budget: float
    configured: bool
    remaining_this_week: float
    categories: list[CategoryStatusPayload]
