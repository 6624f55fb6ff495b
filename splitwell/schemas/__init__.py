from splitwell.schemas.group import Member, ExpenseRecord, GroupSnapshot
from splitwell.schemas.settlement import (
    NetBalance, SettlementParty, SettlementTransaction, SettlementPlan,
    MemberSummary, GroupSettlementResponse, UserBalanceResponse,
)

__all__ = [
    "Member", "ExpenseRecord", "GroupSnapshot",
    "NetBalance", "SettlementParty", "SettlementTransaction", "SettlementPlan",
    "MemberSummary", "GroupSettlementResponse", "UserBalanceResponse",
]
