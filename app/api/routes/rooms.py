from fastapi import APIRouter, Depends

from app.api.deps import get_current_username, get_room_service
from app.schemas import (
    CreateRoomRequest,
    CreateRoomResponse,
    JoinRoomRequest,
    ParticipantName,
    ParticipantsResponse,
    RoomDetailsResponse,
    RoomExpenseEntry,
    RoomExpenseRequest,
    RoomHistoryResponse,
    StatusResponse,
)
from app.services import RoomService

router = APIRouter(prefix="/api", tags=["Rooms"])

# ============================================================================
# ROOM MANAGEMENT
# ============================================================================


@router.post("/rooms", response_model=CreateRoomResponse)
async def create_room(
    request: CreateRoomRequest,
    username: str = Depends(get_current_username),
    service: RoomService = Depends(get_room_service),
):
    """
    Create a room owned by the caller.

    The creator is not joined automatically; they must call /api/join-room to
    appear among the participants.
    """
    room = await service.create_room(username, request.room_name)
    return CreateRoomResponse(room_id=room.id, room_name=room.name)


@router.post("/join-room", response_model=StatusResponse)
async def join_room(
    request: JoinRoomRequest,
    username: str = Depends(get_current_username),
    service: RoomService = Depends(get_room_service),
):
    """Join a room. Joining twice succeeds without writing anything."""
    await service.join_room(username, request.room_id)
    return StatusResponse(message="Joined room successfully")


# ============================================================================
# SHARED EXPENSES
# ============================================================================


@router.post("/room/{room_id}/expense", response_model=StatusResponse)
async def add_room_expense(
    room_id: str,
    request: RoomExpenseRequest,
    username: str = Depends(get_current_username),
    service: RoomService = Depends(get_room_service),
):
    """Add a shared expense. Only the room creator may do this."""
    await service.add_room_expense(username, room_id, request.description, request.amount)
    return StatusResponse(message="Room expense added")


# ============================================================================
# READ QUERIES
# ============================================================================


@router.get("/room/{room_id}/participants", response_model=ParticipantsResponse)
async def list_participants(
    room_id: str,
    username: str = Depends(get_current_username),
    service: RoomService = Depends(get_room_service),
):
    users = await service.list_participants(room_id)
    return ParticipantsResponse(users=list(users))


@router.get("/room/{room_id}/details", response_model=RoomDetailsResponse)
async def room_details(
    room_id: str,
    username: str = Depends(get_current_username),
    service: RoomService = Depends(get_room_service),
):
    participants, created_by = await service.room_details(room_id)
    return RoomDetailsResponse(
        participants=[ParticipantName(name=name) for name in participants],
        created_by=created_by,
    )


@router.get("/room/{room_id}/history", response_model=RoomHistoryResponse)
async def room_history(
    room_id: str,
    username: str = Depends(get_current_username),
    service: RoomService = Depends(get_room_service),
):
    """Shared ledger of the room, newest first. Members only."""
    entries = await service.room_history(username, room_id)
    return RoomHistoryResponse(expenses=[RoomExpenseEntry.model_validate(entry) for entry in entries])
