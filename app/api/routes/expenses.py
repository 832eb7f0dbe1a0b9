from fastapi import APIRouter, Depends

from app.api.deps import get_current_username, get_expense_service
from app.schemas import (
    PersonalExpenseRequest,
    PersonalHistoryResponse,
    RoomSpendSummaryResponse,
    StatusResponse,
)
from app.services import ExpenseService

router = APIRouter(prefix="/api", tags=["Expenses"])


@router.post("/expense", response_model=StatusResponse, response_model_exclude_none=True)
async def add_personal_expense(
    request: PersonalExpenseRequest,
    username: str = Depends(get_current_username),
    service: ExpenseService = Depends(get_expense_service),
):
    await service.add_personal_expense(
        username, request.description, request.amount, request.people, request.room_id
    )
    return StatusResponse()


# /api/history is kept as an alias of the same flat personal history
@router.get("/expense/personal", response_model=PersonalHistoryResponse)
@router.get("/history", response_model=PersonalHistoryResponse)
async def personal_history(
    room_id: str | None = None,
    username: str = Depends(get_current_username),
    service: ExpenseService = Depends(get_expense_service),
):
    """The caller's personal expenses, newest first, optionally for one room."""
    expenses = await service.personal_history(username, room_id)
    return PersonalHistoryResponse(expenses=expenses)


@router.get("/history/rooms", response_model=RoomSpendSummaryResponse)
async def room_spend_summary(
    username: str = Depends(get_current_username),
    service: ExpenseService = Depends(get_expense_service),
):
    """Shared spend the caller recorded, aggregated per room."""
    return RoomSpendSummaryResponse(rooms=await service.room_spend_summary(username))
