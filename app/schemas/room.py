from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# --- Input Schemas ---


class CreateRoomRequest(BaseModel):
    room_name: str | None = Field(default=None, max_length=100, description="Display name of the new room")


class JoinRoomRequest(BaseModel):
    room_id: int | str | None = Field(default=None, description="ID of the room to join")


class RoomExpenseRequest(BaseModel):
    """Shared expense posted by the room creator. Wire name of the description is `desc`."""

    model_config = ConfigDict(populate_by_name=True)

    description: str | None = Field(default=None, alias="desc", max_length=255)
    amount: Decimal | None = Field(default=None, description="Expense amount; must be positive")


# --- Output Schemas ---


class CreateRoomResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    room_id: int = Field(..., alias="roomId")
    room_name: str


class ParticipantsResponse(BaseModel):
    success: bool = True
    users: list[str]


class ParticipantName(BaseModel):
    name: str


class RoomDetailsResponse(BaseModel):
    success: bool = True
    participants: list[ParticipantName]
    created_by: str = Field(..., description="Creator username, empty string for an unknown room")


class RoomExpenseEntry(BaseModel):
    """One row of a room's shared history."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    description: str
    amount: Decimal
    people: int
    created_at: datetime


class RoomHistoryResponse(BaseModel):
    success: bool = True
    expenses: list[RoomExpenseEntry]
