from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.db.utils import transaction
from app.exceptions.http import AuthorizationError, NotFoundError
from app.models.ledger import PersonalExpense
from app.repositories import LedgerRepository, RoomRepository
from app.schemas import PersonalExpenseEntry, RoomSpendSummary

from .validation import parse_room_id, require_amount, require_people, require_text

logger = get_logger(__name__)


class ExpenseService:
    """Personal Ledger: expenses owned by one user, plus their per-room spend summary."""

    def __init__(self, session: AsyncSession, room_repo: RoomRepository, ledger_repo: LedgerRepository):
        self._session = session
        self._room_repo = room_repo
        self._ledger_repo = ledger_repo

    async def add_personal_expense(
        self, caller: str, description: str | None, amount: Any, people: Any, room_id: Any = None
    ) -> PersonalExpense:
        """
        Records a personal expense. When `room_id` is given the room must exist
        and the caller must have joined it.
        """
        description = require_text(description)
        amount = require_amount(amount)
        people = require_people(people)
        if room_id is not None:
            room_id = parse_room_id(room_id)

        async with transaction(self._session, "add personal expense"):
            if room_id is not None:
                if await self._room_repo.get_by_id(room_id) is None:
                    raise NotFoundError("Room not found")
                if not await self._room_repo.is_participant(room_id, caller):
                    raise AuthorizationError("You are not a member of this room")

            entry = await self._ledger_repo.record_personal_entry(
                username=caller, description=description, amount=amount, people=people, room_id=room_id
            )

        logger.info("Personal expense %s recorded for %s", entry.id, caller)
        return entry

    async def personal_history(self, caller: str, room_id: Any = None) -> list[PersonalExpenseEntry]:
        """
        The caller's personal entries, newest first, each with the name of the
        room it is tagged with (if any). Optionally restricted to one room.
        """
        if room_id is not None:
            room_id = parse_room_id(room_id)

        rows = await self._ledger_repo.get_personal_history(caller, room_id)
        return [
            PersonalExpenseEntry(
                description=expense.description,
                amount=expense.amount,
                people=expense.people,
                created_at=expense.created_at,
                room_name=room_name,
            )
            for expense, room_name in rows
        ]

    async def room_spend_summary(self, caller: str) -> list[RoomSpendSummary]:
        """Total shared spend the caller authored per room, most recent activity first."""
        rows = await self._ledger_repo.get_room_spend_summary(caller)
        return [RoomSpendSummary(**row._mapping) for row in rows]
