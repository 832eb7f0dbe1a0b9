from .common import StatusResponse
from .expense import (
    PersonalExpenseEntry,
    PersonalExpenseRequest,
    PersonalHistoryResponse,
    RoomSpendSummary,
    RoomSpendSummaryResponse,
)
from .room import (
    CreateRoomRequest,
    CreateRoomResponse,
    JoinRoomRequest,
    ParticipantName,
    ParticipantsResponse,
    RoomDetailsResponse,
    RoomExpenseEntry,
    RoomExpenseRequest,
    RoomHistoryResponse,
)
from .user import AuthResponse, LoginRequest, SignupRequest, UserResponse

__all__ = [
    "StatusResponse",
    "PersonalExpenseEntry",
    "PersonalExpenseRequest",
    "PersonalHistoryResponse",
    "RoomSpendSummary",
    "RoomSpendSummaryResponse",
    "CreateRoomRequest",
    "CreateRoomResponse",
    "JoinRoomRequest",
    "ParticipantName",
    "ParticipantsResponse",
    "RoomDetailsResponse",
    "RoomExpenseEntry",
    "RoomExpenseRequest",
    "RoomHistoryResponse",
    "AuthResponse",
    "LoginRequest",
    "SignupRequest",
    "UserResponse",
]
