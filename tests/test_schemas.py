from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from splitwell.schemas.group import ExpenseRecord, GroupSnapshot, Member
from splitwell.schemas.settlement import SettlementParty, SettlementTransaction


def test_expense_amount_from_float():
    expense = ExpenseRecord(id="e1", amount=0.1, payer_id="alice")
    assert expense.amount == Decimal("0.1")


def test_expense_amount_from_string():
    assert ExpenseRecord(id="e1", amount="19.99", payer_id="alice").amount == Decimal("19.99")


@pytest.mark.parametrize("amount", [0, -5, "-0.01"])
def test_expense_amount_must_be_positive(amount):
    with pytest.raises(ValidationError):
        ExpenseRecord(id="e1", amount=amount, payer_id="alice")


def test_expense_requires_payer():
    with pytest.raises(ValidationError):
        ExpenseRecord(id="e1", amount=1, payer_id="")


def test_group_rejects_duplicate_members():
    with pytest.raises(ValidationError):
        GroupSnapshot(
            id="g1",
            name="Trip",
            members=[Member(user_id="alice", display_name="Alice"), Member(user_id="alice", display_name="Al")],
        )


def test_group_from_json():
    group = GroupSnapshot.model_validate_json("""
    {
        "id": "g1",
        "name": "Flat",
        "members": [{"user_id": "alice", "display_name": "Alice"}],
        "expenses": [{"id": "e1", "amount": "12.50", "payer_id": "alice",
                      "created_at": "2024-03-01T10:00:00Z"}]
    }
    """)
    assert group.get_member("alice").display_name == "Alice"
    assert group.get_member("bob") is None
    assert group.expenses[0].amount == Decimal("12.50")
    assert group.expenses[0].created_at == datetime.fromisoformat("2024-03-01T10:00:00+00:00")


def test_transaction_accepts_from_and_to_aliases():
    transaction = SettlementTransaction.model_validate({
        "from": {"id": "bob", "name": "Bob"},
        "to": {"id": "alice", "name": "Alice"},
        "amount": "30.00",
    })
    assert transaction.from_user == SettlementParty(id="bob", name="Bob")
    assert transaction.to_user.id == "alice"
