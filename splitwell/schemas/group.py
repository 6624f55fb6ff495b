from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from splitwell.utils.currency_utils import to_decimal


class Member(BaseModel):
    model_config = ConfigDict(frozen=True)
    user_id: str = Field(min_length=1)
    display_name: str


class ExpenseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    payer_id: str = Field(min_length=1)
    description: str | None = None
    created_at: datetime | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return to_decimal(value)
        return value


class GroupSnapshot(BaseModel):
    """A group's current members and expense history, as handed over by the caller."""
    id: str = Field(min_length=1)
    name: str
    members: list[Member] = []
    expenses: list[ExpenseRecord] = []

    @model_validator(mode="after")
    def check_unique_members(self):
        seen = set()
        for member in self.members:
            if member.user_id in seen:
                raise ValueError(f"Duplicate member {member.user_id} in group {self.id}")
            seen.add(member.user_id)
        return self

    def get_member(self, user_id: str) -> Member | None:
        return next((m for m in self.members if m.user_id == user_id), None)
