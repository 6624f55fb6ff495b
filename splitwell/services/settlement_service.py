import logging
from decimal import Decimal

from splitwell.schemas.group import ExpenseRecord, Member
from splitwell.schemas.settlement import (
    NetBalance,
    SettlementParty,
    SettlementPlan,
    SettlementTransaction,
)
from splitwell.services.calculation_service import calculate_net_balances
from splitwell.utils.currency_utils import format_money, quantize_money

logger = logging.getLogger(__name__)

# Balances within one cent of zero count as settled.
EPSILON = Decimal("0.01")


def optimize_settlements(
    balances: list[NetBalance],
    epsilon: Decimal = EPSILON,
) -> list[SettlementTransaction]:
    """
    Turn net balances into a short list of debtor -> creditor payments.

    Greedy largest-first matching: creditors and debtors are each sorted by
    outstanding amount (descending) once, then the current largest creditor
    is paid by the current largest debtor until one side is exhausted.
    O(n log n) time, O(n) space. Not guaranteed to reach the minimum number
    of transfers.
    Raises ValueError if epsilon is not positive.
    """
    if epsilon <= 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")

    creditors = [[b, b.amount] for b in balances if b.amount > epsilon]
    debtors = [[b, -b.amount] for b in balances if b.amount < -epsilon]

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    result = []
    i, j = 0, 0
    while i < len(creditors) and j < len(debtors):
        creditor, credit_amount = creditors[i]
        debtor, debt_amount = debtors[j]
        transfer = min(credit_amount, debt_amount)

        # Sub-cent transfers would print as 0.00.
        if quantize_money(transfer) > 0:
            result.append(SettlementTransaction(
                from_user=SettlementParty(id=debtor.user_id, name=debtor.user_name),
                to_user=SettlementParty(id=creditor.user_id, name=creditor.user_name),
                amount=format_money(transfer),
            ))

        creditors[i][1] -= transfer
        debtors[j][1] -= transfer
        if creditors[i][1] < epsilon:
            i += 1
        if debtors[j][1] < epsilon:
            j += 1

    logger.debug(
        f"Optimized {len(creditors)} creditors and {len(debtors)} debtors into {len(result)} transfers"
    )
    return result


def generate_settlement_plan(
    expenses: list[ExpenseRecord],
    members: list[Member],
    epsilon: Decimal = EPSILON,
) -> SettlementPlan:
    """Net balances, optimized transfers and totals for one expense history."""
    net_balances = calculate_net_balances(expenses, members)
    settlements = optimize_settlements(net_balances, epsilon=epsilon)
    total_expenses = sum((e.amount for e in expenses), Decimal("0"))

    return SettlementPlan(
        net_balances=net_balances,
        settlements=settlements,
        transaction_count=len(settlements),
        total_expenses=format_money(total_expenses),
    )
