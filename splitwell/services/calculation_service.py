import logging
from collections import defaultdict
from decimal import Decimal

from splitwell.schemas.group import ExpenseRecord, Member
from splitwell.schemas.settlement import NetBalance

logger = logging.getLogger(__name__)


def calculate_net_balances(
    expenses: list[ExpenseRecord],
    members: list[Member],
) -> list[NetBalance]:
    """
    Reduce a group's expense history to one net balance per member.
    Every expense is split equally among all current members: the payer is
    credited the full amount and every member (payer included) is debited
    amount / member_count.
    Positive amount = owed by others; negative = owes others.
    An expense whose payer is not a current member still debits the members,
    but its credit is dropped.
    """
    member_count = len(members)
    if member_count == 0:
        return []

    balances: dict[str, Decimal] = {m.user_id: Decimal("0") for m in members}

    for expense in expenses:
        share = expense.amount / member_count

        if expense.payer_id in balances:
            balances[expense.payer_id] += expense.amount
        else:
            logger.warning(
                f"Expense {expense.id} paid by non-member {expense.payer_id}; payer credit dropped"
            )

        for user_id in balances:
            balances[user_id] -= share

    return [
        NetBalance(user_id=m.user_id, user_name=m.display_name, amount=balances[m.user_id])
        for m in members
    ]


def get_member_totals(expenses: list[ExpenseRecord]) -> dict[str, dict]:
    """
    Per-payer totals over an expense list.
    Keys per user: paid, expense_count.
    """
    totals: dict = defaultdict(lambda: {"paid": Decimal("0"), "expense_count": 0})
    for expense in expenses:
        totals[expense.payer_id]["paid"] += expense.amount
        totals[expense.payer_id]["expense_count"] += 1
    return dict(totals)
