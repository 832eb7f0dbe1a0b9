from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# --- Input Schemas ---


class PersonalExpenseRequest(BaseModel):
    """Wire name of the description is `desc`; `room_id` optionally tags a joined room."""

    model_config = ConfigDict(populate_by_name=True)

    description: str | None = Field(default=None, alias="desc", max_length=255)
    amount: Decimal | None = Field(default=None, description="Expense amount; must be positive")
    people: int | None = Field(default=None, description="Number of people sharing the cost; at least 1")
    room_id: int | str | None = Field(default=None, description="Optional room the expense relates to")


# --- Output Schemas ---


class PersonalExpenseEntry(BaseModel):
    description: str
    amount: Decimal
    people: int
    created_at: datetime
    room_name: str | None = None


class PersonalHistoryResponse(BaseModel):
    success: bool = True
    expenses: list[PersonalExpenseEntry]


class RoomSpendSummary(BaseModel):
    """Aggregated shared spend of one user in one room."""

    model_config = ConfigDict(from_attributes=True)

    room_id: int
    room_name: str
    total_amount: Decimal
    participants: int
    last_activity: datetime


class RoomSpendSummaryResponse(BaseModel):
    success: bool = True
    rooms: list[RoomSpendSummary]
