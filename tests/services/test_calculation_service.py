from decimal import Decimal

from splitwell.schemas.group import ExpenseRecord, Member
from splitwell.services.calculation_service import calculate_net_balances, get_member_totals

ALICE = Member(user_id="alice", display_name="Alice")
BOB = Member(user_id="bob", display_name="Bob")
CAROL = Member(user_id="carol", display_name="Carol")


def make_expense(expense_id, amount, payer_id):
    return ExpenseRecord(id=expense_id, amount=Decimal(amount), payer_id=payer_id)


def by_user(balances):
    return {b.user_id: b.amount for b in balances}


def test_single_payer_three_way_split():
    """Alice pays 90 for three people: she is owed 60, the others owe 30 each."""
    balances = calculate_net_balances([make_expense("e1", "90", "alice")], [ALICE, BOB, CAROL])
    assert by_user(balances) == {
        "alice": Decimal("60"),
        "bob": Decimal("-30"),
        "carol": Decimal("-30"),
    }


def test_equal_payments_cancel_out():
    balances = calculate_net_balances(
        [make_expense("e1", "100", "alice"), make_expense("e2", "100", "bob")],
        [ALICE, BOB],
    )
    assert by_user(balances) == {"alice": Decimal("0"), "bob": Decimal("0")}


def test_balances_sum_to_zero():
    expenses = [
        make_expense("e1", "30", "alice"),
        make_expense("e2", "60", "bob"),
        make_expense("e3", "10.01", "carol"),
        make_expense("e4", "0.07", "alice"),
    ]
    balances = calculate_net_balances(expenses, [ALICE, BOB, CAROL])
    assert abs(sum(b.amount for b in balances)) <= Decimal("1e-6") * len(expenses)


def test_output_follows_member_order_and_names():
    balances = calculate_net_balances([make_expense("e1", "10", "bob")], [CAROL, ALICE, BOB])
    assert [b.user_id for b in balances] == ["carol", "alice", "bob"]
    assert [b.user_name for b in balances] == ["Carol", "Alice", "Bob"]


def test_no_members_returns_empty_list():
    assert calculate_net_balances([], []) == []
    assert calculate_net_balances([make_expense("e1", "50", "alice")], []) == []


def test_no_expenses_gives_zero_balances():
    balances = calculate_net_balances([], [ALICE, BOB])
    assert by_user(balances) == {"alice": Decimal("0"), "bob": Decimal("0")}


def test_non_member_payer_credit_is_dropped():
    """Members are still debited their share; nobody is credited."""
    balances = calculate_net_balances([make_expense("e1", "40", "dave")], [ALICE, BOB])
    assert by_user(balances) == {"alice": Decimal("-20"), "bob": Decimal("-20")}


def test_does_not_mutate_inputs():
    expenses = [make_expense("e1", "90", "alice")]
    members = [ALICE, BOB, CAROL]
    calculate_net_balances(expenses, members)
    assert expenses == [make_expense("e1", "90", "alice")]
    assert members == [ALICE, BOB, CAROL]


def test_member_totals():
    totals = get_member_totals([
        make_expense("e1", "30", "alice"),
        make_expense("e2", "12.50", "alice"),
        make_expense("e3", "60", "bob"),
    ])
    assert totals["alice"] == {"paid": Decimal("42.50"), "expense_count": 2}
    assert totals["bob"] == {"paid": Decimal("60"), "expense_count": 1}
    assert "carol" not in totals


def test_member_totals_empty():
    assert get_member_totals([]) == {}
