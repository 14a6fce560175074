import uuid
from datetime import datetime

from finmate.assistant.advice import (
    assistant_turn,
    category_not_found,
    same_category,
    simulate_advice,
)
from finmate.domain.formatting import format_amount
from finmate.ledger import BudgetLedger
from finmate.logger import get_logger
from finmate.models import (
    AddPlannedTransactionAction,
    ChatTurn,
    QuickAction,
    ReallocateAction,
    ShowCategoriesAction,
    SuggestAmountAction,
    SuggestPlanAction,
    SuggestQueryAction,
    SuggestReallocateAction,
    Transaction,
)

logger = get_logger(__name__)


def suggestion_message(action: QuickAction) -> str | None:
    """Utterance a suggestion stands for, or None when the action is not a suggestion."""
    if isinstance(action, SuggestAmountAction):
        return f"Plan {action.thing} for {format_amount(action.amount)}"
    if isinstance(action, SuggestReallocateAction):
        return (
            f"Reallocate {format_amount(action.amount)} "
            f"from {action.from_category} to {action.to_category}"
        )
    if isinstance(action, SuggestPlanAction):
        return action.label
    if isinstance(action, SuggestQueryAction):
        return f"What's my {action.category} budget?"
    return None


def _apply_reallocate(ledger: BudgetLedger, action: ReallocateAction) -> list[ChatTurn]:
    from_cat = ledger.get_category(action.from_category)
    to_cat = ledger.get_category(action.to_category)
    snapshot = ledger.snapshot()
    if from_cat is None:
        return [category_not_found(action.from_category, snapshot)]
    if to_cat is None:
        return [category_not_found(action.to_category, snapshot)]
    if from_cat.id == to_cat.id:
        return [same_category(from_cat.name)]

    ledger.reallocate(action.amount, from_cat.id, to_cat.id)
    new_from = from_cat.weekly_limit - action.amount
    new_to = to_cat.weekly_limit + action.amount
    logger.info(
        "[ACTION] Reallocated %.2f from '%s' to '%s'.",
        action.amount,
        from_cat.id,
        to_cat.id,
    )
    return [assistant_turn(
        f"✅ Done! I've reallocated {format_amount(action.amount)} from {from_cat.name} to "
        f"{to_cat.name}. Your {from_cat.name} limit is now {format_amount(new_from)} and your "
        f"{to_cat.name} limit is now {format_amount(new_to)}."
    )]


def _apply_planned_transaction(
    ledger: BudgetLedger,
    action: AddPlannedTransactionAction,
    now: datetime,
) -> list[ChatTurn]:
    transaction = Transaction(
        id=uuid.uuid4().hex,
        category_id=action.category_id,
        label=action.thing,
        amount=action.amount,
        date=now,
    )
    ledger.add_transaction(transaction)
    logger.info("[ACTION] Planned '%s' for %.2f in '%s'.", action.thing, action.amount, action.category_id)
    return [assistant_turn(
        f"✅ Added \"{action.thing}\" for {format_amount(action.amount)} to your transactions. "
        f"You now have {format_amount(ledger.remaining_this_week(now))} remaining this week."
    )]


def category_overview(ledger: BudgetLedger, now: datetime | None = None) -> ChatTurn:
    lines = [
        f"• {status.category.name}: {format_amount(status.spent)} of "
        f"{format_amount(status.category.weekly_limit)} spent, "
        f"{format_amount(status.display_remaining)} left"
        for status in ledger.category_statuses(now)
    ]
    return assistant_turn(
        "Here are your categories this week:\n\n" + "\n".join(lines)
        + f"\n\nYou have {format_amount(ledger.remaining_this_week(now))} remaining overall."
    )


def apply_quick_action(
    ledger: BudgetLedger,
    action: QuickAction,
    now: datetime | None = None,
) -> list[ChatTurn]:
    """Run a quick action chosen by the user and return the turns to show next."""
    if now is None:
        now = datetime.now()

    if isinstance(action, ReallocateAction):
        return _apply_reallocate(ledger, action)
    if isinstance(action, AddPlannedTransactionAction):
        return _apply_planned_transaction(ledger, action, now)
    if isinstance(action, ShowCategoriesAction):
        return [category_overview(ledger, now)]

    message = suggestion_message(action)
    if message is None:
        logger.warning("[ACTION] Unsupported quick action '%s'.", action.action)
        return []
    logger.debug("[ACTION] Following suggestion: '%s'.", message)
    user_turn = ChatTurn(role="user", text=message)
    return [user_turn, *simulate_advice(message, ledger.snapshot(now))]
