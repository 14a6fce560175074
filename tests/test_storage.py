from datetime import datetime

import pytest

from finmate.ledger import BudgetLedger
from finmate.models import Transaction
from finmate.services.storage import LedgerStore


@pytest.fixture
def store(tmp_path):
    return LedgerStore(data_path=str(tmp_path / "ledger.json"))


def test_missing_file_gives_fresh_ledger(store):
    ledger = store.load()
    assert ledger.weekly_budget == 0
    assert ledger.transactions == []
    assert ledger.categories == BudgetLedger().categories


def test_save_and_load(store):
    ledger = BudgetLedger()
    ledger.set_weekly_budget(500)
    ledger.update_category_limit("food", 180)
    ledger.add_transaction(
        Transaction(id="1", category_id="food", label="Coffee", amount=4.5, date=datetime(2024, 5, 15, 8, 0))
    )

    store.save(ledger)
    loaded = store.load()

    assert loaded.weekly_budget == 500
    assert loaded.categories == ledger.categories
    assert loaded.transactions == ledger.transactions


def test_corrupt_file_is_ignored(store):
    with open(store.data_path, "w") as f:
        f.write("{not json")

    ledger = store.load()
    assert ledger.weekly_budget == 0


def test_undecodable_file_is_ignored(store):
    with open(store.data_path, "wb") as f:
        f.write(b"\xff\xfe\x00garbage")

    ledger = store.load()
    assert ledger.weekly_budget == 0
    assert ledger.categories == BudgetLedger().categories


def test_unreadable_path_is_ignored(tmp_path):
    # A directory where the file should be makes open() fail.
    (tmp_path / "ledger.json").mkdir()

    ledger = LedgerStore(data_path=str(tmp_path / "ledger.json")).load()
    assert ledger.transactions == []


def test_clear(store):
    store.save(BudgetLedger())
    store.clear()
    store.clear()

    assert store.load().weekly_budget == 0
