from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.db.utils import transaction
from app.exceptions.http import AuthorizationError, NotFoundError
from app.models.ledger import JOINED_ROOM_DESCRIPTION, Room, RoomExpense
from app.repositories import LedgerRepository, RoomRepository

from .validation import normalize_username, parse_room_id, require_amount, require_text

logger = get_logger(__name__)


def is_room_creator(username: str, room: Room) -> bool:
    """Creator check; normalizes both sides so rows written before normalization still match."""
    return normalize_username(username) == normalize_username(room.created_by)


class RoomService:
    """
    Room Ledger Core: room creation, membership and the shared expense ledger.

    Every write runs inside a single transaction; any failure leaves no partial
    rows behind (a join never produces a membership without its marker entry).
    """

    def __init__(self, session: AsyncSession, room_repo: RoomRepository, ledger_repo: LedgerRepository):
        self._session = session
        self._room_repo = room_repo
        self._ledger_repo = ledger_repo

    # --- 1. ROOM MANAGEMENT ---

    async def create_room(self, caller: str, name: str | None) -> Room:
        """
        Creates a room owned by `caller`. The creator is NOT joined automatically
        and will not appear in participant lists until they join.
        """
        room_name = require_text(name, "Room name is required")

        async with transaction(self._session, "create room"):
            room = await self._room_repo.create(name=room_name, created_by=caller)

        logger.info("Room %s (%r) created by %s", room.id, room.name, caller)
        return room

    async def join_room(self, caller: str, room_id: Any) -> bool:
        """
        Joins `caller` to a room. Idempotent: a repeat join writes nothing.

        On the first join the membership and a zero-amount "joined the room"
        entry (people=1) are written atomically.

        Returns:
            True if the caller joined now, False if they were already a member.
        """
        room_id = parse_room_id(room_id)

        async with transaction(self._session, "join room"):
            if await self._room_repo.get_by_id(room_id) is None:
                raise NotFoundError("Room not found")

            joined = await self._room_repo.add_participant_if_absent(room_id, caller)
            if joined:
                await self._ledger_repo.record_room_entry(
                    room_id=room_id,
                    username=caller,
                    description=JOINED_ROOM_DESCRIPTION,
                    amount=Decimal("0"),
                    people=1,
                )

        if joined:
            logger.info("%s joined room %s", caller, room_id)
        return joined

    # --- 2. SHARED EXPENSE RECORDING ---

    async def add_room_expense(self, caller: str, room_id: Any, description: str | None, amount: Any) -> RoomExpense:
        """
        Records a shared expense. Only the room's creator may post; being a member
        is not enough.

        The entry's `people` is the membership count read in the same transaction
        as the insert. It is a snapshot: later joins never change it.
        """
        description = require_text(description)
        amount = require_amount(amount)
        room_id = parse_room_id(room_id)

        async with transaction(self._session, "add room expense"):
            room = await self._room_repo.get_by_id(room_id)
            if room is None:
                raise NotFoundError("Room not found")

            if not is_room_creator(caller, room):
                logger.warning("%s tried to add an expense to room %s owned by %s", caller, room_id, room.created_by)
                raise AuthorizationError("Only room creator can add expenses")

            people = await self._room_repo.count_participants(room_id)
            entry = await self._ledger_repo.record_room_entry(
                room_id=room_id, username=caller, description=description, amount=amount, people=people
            )

        logger.info("Expense %s (%s) added to room %s, split by %s", entry.id, amount, room_id, people)
        return entry

    # --- 3. READ QUERIES ---

    async def list_participants(self, room_id: Any) -> Sequence[str]:
        """Members of a room. Readable by any authenticated user."""
        return await self._room_repo.list_participants(parse_room_id(room_id))

    async def room_details(self, room_id: Any) -> tuple[Sequence[str], str]:
        """
        Distinct participants and the creator of a room. An unknown room yields
        no participants and an empty creator instead of a not-found failure.
        """
        room_id = parse_room_id(room_id)
        participants = await self._room_repo.list_distinct_participants(room_id)
        room = await self._room_repo.get_by_id(room_id)
        return participants, room.created_by if room else ""

    async def room_history(self, caller: str, room_id: Any) -> Sequence[RoomExpense]:
        """The whole shared ledger of a room, newest first. Members only."""
        room_id = parse_room_id(room_id)

        if not await self._room_repo.is_participant(room_id, caller):
            raise AuthorizationError("You are not a member of this room")

        return await self._ledger_repo.get_room_history(room_id)
