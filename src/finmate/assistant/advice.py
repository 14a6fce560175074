"""
Rule-based budget advice.

``simulate_advice`` classifies a message and answers it from a ledger
snapshot. Each intent produces exactly one assistant turn. The generator
never mutates anything: quick actions are suggestions the caller may run.
"""
from finmate.assistant.intents import parse_intent
from finmate.assistant.resolver import resolve_category
from finmate.domain.aggregation import progress_percent
from finmate.domain.formatting import format_amount, join_names
from finmate.logger import get_logger
from finmate.models import (
    AddPlannedTransactionAction,
    ChatTurn,
    Intent,
    LedgerSnapshot,
    PlanIntent,
    QueryIntent,
    ReallocateAction,
    ReallocateIntent,
    ShowCategoriesAction,
    SuggestAmountAction,
    SuggestPlanAction,
    SuggestQueryAction,
    SuggestReallocateAction,
)

logger = get_logger(__name__)

# Plans are always budgeted against Food, whatever the planned thing is.
PLAN_CATEGORY = "Food"
PLAN_CATEGORY_FALLBACK_ID = "food"
QUERY_PLAN_CAP = 25.0

HELP_TEXT = (
    "I understand you want help with budgeting! I can help you:\n\n"
    "• Plan expenses: \"Plan dinner for $20 tomorrow\"\n"
    "• Reallocate money: \"Reallocate $15 from Social to Food\"\n"
    "• Check budgets: \"How much can I spend on Food?\"\n\n"
    "What would you like to do?"
)


def default_quick_actions() -> list:
    return [
        SuggestPlanAction(label="Plan dinner for $20", amount=20.0, category="Food"),
        SuggestQueryAction(label="Check Food budget", category="Food"),
        ShowCategoriesAction(),
    ]


def assistant_turn(text: str, quick_actions: list | None = None) -> ChatTurn:
    return ChatTurn(role="assistant", text=text, quick_actions=quick_actions or [])


def category_not_found(reference: str, snapshot: LedgerSnapshot) -> ChatTurn:
    names = join_names([category.name for category in snapshot.categories])
    return assistant_turn(
        f"I couldn't find a category matching \"{reference}\". Your categories are: {names}.",
        [ShowCategoriesAction()],
    )


def same_category(category_name: str) -> ChatTurn:
    return assistant_turn(
        f"{category_name} is both the source and the target, so there is nothing to "
        "reallocate. Pick two different categories.",
        [ShowCategoriesAction()],
    )


def welcome_turn(snapshot: LedgerSnapshot) -> ChatTurn:
    return assistant_turn(
        "Hi! I'm your budget assistant. I can help you plan expenses, reallocate money "
        "between categories, and check your budget status.\n\n"
        f"You have {format_amount(snapshot.remaining_this_week)} remaining this week. "
        "How can I help?",
        default_quick_actions(),
    )


def plan_response(intent: PlanIntent, snapshot: LedgerSnapshot) -> ChatTurn:
    thing, amount = intent.thing, intent.amount
    remaining = snapshot.remaining_this_week

    if amount > remaining:
        return assistant_turn(
            f"I'd love to help you plan {thing} for {format_amount(amount)}, but you only have "
            f"{format_amount(remaining)} remaining this week. Here are some suggestions:\n\n"
            f"• Reduce the budget to {format_amount(remaining)}\n"
            "• Wait until next week when your budget resets\n"
            "• Reallocate money from other categories",
            [
                SuggestAmountAction(
                    label=f"Plan {thing} for {format_amount(remaining)}",
                    thing=thing,
                    amount=remaining,
                ),
                SuggestReallocateAction(
                    label="Reallocate $15 from Social to Food",
                    amount=15.0,
                    from_category="Social",
                    to_category="Food",
                ),
            ],
        )

    food = resolve_category(snapshot.categories, PLAN_CATEGORY)
    if food:
        food_remaining = food.weekly_limit - snapshot.spend_by_category(food.id)
        if amount > food_remaining:
            return assistant_turn(
                f"Great idea to plan {thing} for {format_amount(amount)}! However, you only have "
                f"{format_amount(food_remaining)} left in your Food budget this week. You could:\n\n"
                f"• Use {format_amount(food_remaining)} from Food and "
                f"{format_amount(amount - food_remaining)} from other categories\n"
                "• Reallocate some money to Food first",
                [
                    SuggestAmountAction(
                        label=f"Use {format_amount(food_remaining)} from Food",
                        thing=thing,
                        amount=food_remaining,
                    ),
                    SuggestReallocateAction(
                        label="Reallocate $20 to Food",
                        amount=20.0,
                        from_category="Social",
                        to_category="Food",
                    ),
                ],
            )

    return assistant_turn(
        f"Perfect! You can definitely plan {thing} for {format_amount(amount)}. You have "
        f"{format_amount(remaining)} remaining this week, so this fits well within your budget. "
        "I recommend adding this as a planned expense to track it properly.",
        [
            AddPlannedTransactionAction(
                label=f"Add {thing} to Food category",
                thing=thing,
                amount=amount,
                category_id=food.id if food else PLAN_CATEGORY_FALLBACK_ID,
            )
        ],
    )


def reallocate_response(intent: ReallocateIntent, snapshot: LedgerSnapshot) -> ChatTurn:
    from_cat = resolve_category(snapshot.categories, intent.from_category)
    if not from_cat:
        return category_not_found(intent.from_category, snapshot)
    to_cat = resolve_category(snapshot.categories, intent.to_category)
    if not to_cat:
        return category_not_found(intent.to_category, snapshot)
    if from_cat.id == to_cat.id:
        return same_category(from_cat.name)

    amount = intent.amount
    from_spent = snapshot.spend_by_category(from_cat.id)
    from_remaining = from_cat.weekly_limit - from_spent

    if amount > from_remaining:
        return assistant_turn(
            f"You can't reallocate {format_amount(amount)} from {from_cat.name} because you only "
            f"have {format_amount(from_remaining)} remaining in that category. You've already "
            f"spent {format_amount(from_spent)} of your {format_amount(from_cat.weekly_limit)} limit.",
            [
                ReallocateAction(
                    label=f"Reallocate {format_amount(from_remaining)} instead",
                    amount=from_remaining,
                    from_category=from_cat.id,
                    to_category=to_cat.id,
                )
            ],
        )

    return assistant_turn(
        f"Great idea! I can help you reallocate {format_amount(amount)} from {from_cat.name} to "
        f"{to_cat.name}. This will give you more flexibility in your {to_cat.name} budget.",
        [
            ReallocateAction(
                label=f"Reallocate {format_amount(amount)} from {from_cat.name} to {to_cat.name}",
                amount=amount,
                from_category=from_cat.id,
                to_category=to_cat.id,
            )
        ],
    )


def query_response(intent: QueryIntent, snapshot: LedgerSnapshot) -> ChatTurn:
    category = resolve_category(snapshot.categories, intent.category)
    if not category:
        return category_not_found(intent.category, snapshot)

    spent = snapshot.spend_by_category(category.id)
    remaining = category.weekly_limit - spent
    percentage = progress_percent(spent, category.weekly_limit)
    suggested = min(remaining, QUERY_PLAN_CAP)

    return assistant_turn(
        f"Here's your {category.name} budget status:\n\n"
        f"• Weekly limit: {format_amount(category.weekly_limit)}\n"
        f"• Spent so far: {format_amount(spent)} ({percentage:.1f}%)\n"
        f"• Remaining: {format_amount(remaining)}\n\n"
        f"You can spend up to {format_amount(remaining)} more on {category.name} this week.",
        [
            SuggestPlanAction(
                label=f"Plan something for {format_amount(suggested)}",
                amount=suggested,
                category=category.name,
            )
        ],
    )


def generate_response(intent: Intent, snapshot: LedgerSnapshot) -> ChatTurn:
    if isinstance(intent, PlanIntent):
        return plan_response(intent, snapshot)
    if isinstance(intent, ReallocateIntent):
        return reallocate_response(intent, snapshot)
    if isinstance(intent, QueryIntent):
        return query_response(intent, snapshot)
    return assistant_turn(HELP_TEXT, default_quick_actions())


def simulate_advice(message: str, snapshot: LedgerSnapshot) -> list[ChatTurn]:
    intent = parse_intent(message)
    response = generate_response(intent, snapshot)
    logger.debug(
        "[ADVICE] intent=%s quick_actions=%s",
        intent.intent,
        [action.action for action in response.quick_actions],
    )
    return [response]
