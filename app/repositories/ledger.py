from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import Row, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.ledger import Membership, PersonalExpense, Room, RoomExpense


class LedgerRepository:
    """
    Manages data access for the append-only ledger tables (room_expenses and
    expenses). There are no update or delete methods by design of the ledger.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- 1. CORE FACT RECORDING ---

    async def record_room_entry(
        self, room_id: int, username: str, description: str, amount: Decimal, people: int
    ) -> RoomExpense:
        """Appends a shared entry with an already computed participant-count snapshot."""
        entry = RoomExpense(room_id=room_id, username=username, description=description, amount=amount, people=people)
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def record_personal_entry(
        self, username: str, description: str, amount: Decimal, people: int, room_id: int | None = None
    ) -> PersonalExpense:
        entry = PersonalExpense(
            username=username, description=description, amount=amount, people=people, room_id=room_id
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    # --- 2. HISTORY AND REPORTING ---

    async def get_room_history(self, room_id: int) -> Sequence[RoomExpense]:
        """All shared entries of a room, newest first (ID breaks timestamp ties)."""
        stmt = (
            select(RoomExpense)
            .where(RoomExpense.room_id == room_id)
            .order_by(RoomExpense.created_at.desc(), RoomExpense.id.desc())
        )
        return (await self.session.scalars(stmt)).all()

    async def get_personal_history(self, username: str, room_id: int | None = None) -> Sequence[Row]:
        """
        The user's personal entries joined with the room name (None when the
        entry is not tagged with a room), newest first.
        """
        stmt = (
            select(PersonalExpense, Room.name.label("room_name"))
            .select_from(PersonalExpense)
            .outerjoin(Room, PersonalExpense.room_id == Room.id)
            .where(PersonalExpense.username == username)
            .order_by(PersonalExpense.created_at.desc(), PersonalExpense.id.desc())
        )
        if room_id is not None:
            stmt = stmt.where(PersonalExpense.room_id == room_id)
        return (await self.session.execute(stmt)).all()

    async def get_room_spend_summary(self, username: str) -> Sequence[Row]:
        """
        Aggregates the shared entries authored by `username` per room:
        (room_id, room_name, total_amount, participants, last_activity),
        most recent activity first.
        """
        participant_count = (
            select(func.count(func.distinct(Membership.username)))
            .where(Membership.room_id == Room.id)
            .correlate(Room)
            .scalar_subquery()
        )
        last_activity = func.max(RoomExpense.created_at)
        stmt = (
            select(
                Room.id.label("room_id"),
                Room.name.label("room_name"),
                func.sum(RoomExpense.amount).label("total_amount"),
                participant_count.label("participants"),
                last_activity.label("last_activity"),
            )
            .select_from(RoomExpense)
            .join(Room, RoomExpense.room_id == Room.id)
            .where(RoomExpense.username == username)
            .group_by(Room.id, Room.name)
            .order_by(last_activity.desc(), Room.id.desc())
        )
        return (await self.session.execute(stmt)).all()
