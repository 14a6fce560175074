from datetime import datetime

import pytest

from finmate.domain.seed import DEFAULT_CATEGORIES, initialize_categories
from finmate.ledger import BudgetLedger
from finmate.models import Transaction

NOW = datetime(2024, 5, 15, 12, 0)


def make_tx(tx_id: str, category_id: str, amount: float, date: datetime = NOW) -> Transaction:
    return Transaction(id=tx_id, category_id=category_id, label="Item", amount=amount, date=date)


@pytest.fixture
def ledger() -> BudgetLedger:
    ledger = BudgetLedger()
    ledger.set_weekly_budget(500)
    return ledger


def limits(ledger: BudgetLedger) -> dict[str, float]:
    return {c.name: c.weekly_limit for c in ledger.categories}


def test_initialize_categories_uses_fixed_proportions():
    categories = initialize_categories(500)
    assert {c.name: c.weekly_limit for c in categories} == {
        "Food": 200,
        "Transport": 100,
        "Social": 125,
        "Other": 75,
    }
    assert [c.id for c in categories] == ["food", "transport", "social", "other"]


def test_initialize_categories_rounds_half_up():
    categories = initialize_categories(10)
    # 2.5 -> 3 for Social, 1.5 -> 2 for Other
    assert {c.name: c.weekly_limit for c in categories} == {
        "Food": 4,
        "Transport": 2,
        "Social": 3,
        "Other": 2,
    }


def test_weekly_scenario(ledger):
    ledger.add_transaction(make_tx("1", "food", 5.50))
    ledger.add_transaction(make_tx("2", "transport", 12.00))
    ledger.add_transaction(make_tx("3", "social", 35.00))

    assert limits(ledger) == {"Food": 200, "Transport": 100, "Social": 125, "Other": 75}
    assert ledger.remaining_this_week(NOW) == pytest.approx(447.50)
    assert ledger.spend_by_category("food", NOW) == pytest.approx(5.50)


def test_set_weekly_budget_discards_custom_limits(ledger):
    ledger.update_category_limit("food", 999)
    ledger.set_weekly_budget(100)

    assert limits(ledger) == {"Food": 40, "Transport": 20, "Social": 25, "Other": 15}


def test_update_category_limit(ledger):
    ledger.update_category_limit("social", -5)
    assert ledger.get_category("social").weekly_limit == -5


def test_update_unknown_category_is_ignored(ledger):
    before = list(ledger.categories)
    ledger.update_category_limit("groceries", 50)
    assert ledger.categories == before


def test_add_transaction_appends_without_validation(ledger):
    ledger.add_transaction(make_tx("1", "nowhere", 3.0))
    ledger.add_transaction(make_tx("2", "food", 4.0))

    assert [t.id for t in ledger.transactions] == ["1", "2"]
    assert ledger.remaining_this_week(NOW) == pytest.approx(493.0)


def test_reallocate_moves_limit_between_categories(ledger):
    assert ledger.reallocate(15, "social", "food") is True
    assert limits(ledger)["Social"] == 110
    assert limits(ledger)["Food"] == 215


def test_reallocate_with_unknown_category_changes_nothing(ledger):
    assert ledger.reallocate(15, "social", "groceries") is False
    assert limits(ledger)["Social"] == 125


def test_reallocate_within_one_category_changes_nothing(ledger):
    assert ledger.reallocate(50, "food", "food") is False
    assert limits(ledger)["Food"] == 200
    assert sum(limits(ledger).values()) == 500


def test_reset_matches_a_fresh_ledger(ledger):
    ledger.add_transaction(make_tx("1", "food", 5.0))
    ledger.reset_for_new_session()

    fresh = BudgetLedger()
    assert ledger.weekly_budget == fresh.weekly_budget == 0
    assert ledger.categories == fresh.categories
    assert ledger.transactions == fresh.transactions == []
    assert [c.id for c in ledger.categories] == [c.id for c in DEFAULT_CATEGORIES]
    assert all(c.weekly_limit == 0 for c in ledger.categories)


def test_reset_is_idempotent(ledger):
    ledger.add_transaction(make_tx("1", "food", 5.0))
    ledger.reset_for_new_session()
    once = (ledger.weekly_budget, list(ledger.categories), list(ledger.transactions))
    ledger.reset_for_new_session()

    assert (ledger.weekly_budget, ledger.categories, ledger.transactions) == once


def test_snapshot_is_point_in_time(ledger):
    ledger.add_transaction(make_tx("1", "food", 20.0))
    snapshot = ledger.snapshot(NOW)

    ledger.add_transaction(make_tx("2", "food", 30.0))
    ledger.update_category_limit("food", 1)

    assert snapshot.remaining_this_week == pytest.approx(480.0)
    assert snapshot.spend_by_category("food") == pytest.approx(20.0)
    assert snapshot.spend_by_category("other") == 0.0
    assert snapshot.categories[0].weekly_limit == 200
    assert len(snapshot.transactions) == 1
