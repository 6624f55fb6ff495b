from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class NetBalance(BaseModel):
    """Positive amount = owed by others; negative = owes others."""
    user_id: str
    user_name: str
    amount: Decimal


class SettlementParty(BaseModel):
    id: str
    name: str


class SettlementTransaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    from_user: SettlementParty = Field(alias="from")
    to_user: SettlementParty = Field(alias="to")
    amount: str


class SettlementPlan(BaseModel):
    net_balances: list[NetBalance]
    settlements: list[SettlementTransaction]
    transaction_count: int
    total_expenses: str


class MemberSummary(BaseModel):
    user_id: str
    user_name: str
    net_balance: str
    total_paid: str
    total_share: str


class GroupSettlementResponse(BaseModel):
    group_id: str
    group_name: str
    calculated_at: datetime
    total_expenses: str
    net_balances: list[MemberSummary]
    settlements: list[SettlementTransaction]
    transaction_count: int


class UserBalanceResponse(BaseModel):
    user_id: str
    user_name: str
    group_id: str
    group_name: str
    net_balance: str
    total_paid: str
    total_share: str
    expense_count: int
