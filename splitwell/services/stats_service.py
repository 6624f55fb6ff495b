import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

from splitwell.core.config import settings
from splitwell.core.exceptions import InvalidDateRangeError, MemberNotFoundError
from splitwell.schemas.group import ExpenseRecord, GroupSnapshot
from splitwell.schemas.settlement import (
    GroupSettlementResponse,
    MemberSummary,
    UserBalanceResponse,
)
from splitwell.services.calculation_service import calculate_net_balances, get_member_totals
from splitwell.services.settlement_service import generate_settlement_plan
from splitwell.utils.currency_utils import format_money

logger = logging.getLogger(__name__)


class Period(str, Enum):
    day = "1d"
    month = "1mo"
    year = "1yr"


def get_period_start(period: Period, now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    if period == Period.day:
        return now - timedelta(days=1)
    elif period == Period.month:
        return now - timedelta(days=30)
    else:
        return now - timedelta(days=365)


def _as_utc(value: datetime | None) -> datetime | None:
    # Naive timestamps are taken to be UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def filter_expenses(
    expenses: list[ExpenseRecord],
    since: datetime | None = None,
    until: datetime | None = None,
) -> list[ExpenseRecord]:
    """
    Keep expenses with since <= created_at <= until.
    Undated expenses only survive when no bound is given.
    """
    since, until = _as_utc(since), _as_utc(until)
    if since is not None and until is not None and since > until:
        raise InvalidDateRangeError(f"since ({since.isoformat()}) is after until ({until.isoformat()})")
    if since is None and until is None:
        return list(expenses)

    result = []
    for expense in expenses:
        created_at = _as_utc(expense.created_at)
        if created_at is None:
            continue
        if since is not None and created_at < since:
            continue
        if until is not None and created_at > until:
            continue
        result.append(expense)
    return result


def _total_share(total: Decimal, member_count: int) -> Decimal:
    if member_count == 0:
        return Decimal("0")
    return total / member_count


def calculate_group_settlement(
    group: GroupSnapshot,
    *,
    since: datetime | None = None,
    until: datetime | None = None,
    epsilon: Decimal | None = None,
    now: datetime | None = None,
) -> GroupSettlementResponse:
    """
    Full settlement report for a group: optimized transfers plus, per member,
    net balance, how much they paid and their equal share of the total.
    """
    expenses = filter_expenses(group.expenses, since=since, until=until)
    plan = generate_settlement_plan(
        expenses,
        group.members,
        epsilon=epsilon if epsilon is not None else settings.settlement_epsilon,
    )

    totals = get_member_totals(expenses)
    total_expenses = sum((e.amount for e in expenses), Decimal("0"))
    total_share = _total_share(total_expenses, len(group.members))

    net_balances = []
    for balance in plan.net_balances:
        paid = totals.get(balance.user_id, {}).get("paid", Decimal("0"))
        net_balances.append(MemberSummary(
            user_id=balance.user_id,
            user_name=balance.user_name,
            net_balance=format_money(balance.amount),
            total_paid=format_money(paid),
            total_share=format_money(total_share),
        ))

    logger.info(
        f"Group {group.id}: {len(expenses)} expenses, {plan.transaction_count} settlements"
    )
    return GroupSettlementResponse(
        group_id=group.id,
        group_name=group.name,
        calculated_at=now or datetime.now(timezone.utc),
        total_expenses=plan.total_expenses,
        net_balances=net_balances,
        settlements=plan.settlements,
        transaction_count=plan.transaction_count,
    )


def get_user_balance(
    group: GroupSnapshot,
    user_id: str,
    *,
    since: datetime | None = None,
    until: datetime | None = None,
) -> UserBalanceResponse:
    """Balance of one member. Raises MemberNotFoundError if user_id is not in the group."""
    if group.get_member(user_id) is None:
        raise MemberNotFoundError(user_id, group.id)

    expenses = filter_expenses(group.expenses, since=since, until=until)
    balances = calculate_net_balances(expenses, group.members)
    user_balance = next(b for b in balances if b.user_id == user_id)

    totals = get_member_totals(expenses).get(user_id, {"paid": Decimal("0"), "expense_count": 0})
    total_expenses = sum((e.amount for e in expenses), Decimal("0"))

    return UserBalanceResponse(
        user_id=user_balance.user_id,
        user_name=user_balance.user_name,
        group_id=group.id,
        group_name=group.name,
        net_balance=format_money(user_balance.amount),
        total_paid=format_money(totals["paid"]),
        total_share=format_money(_total_share(total_expenses, len(group.members))),
        expense_count=totals["expense_count"],
    )
