from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions.http import StorageError
from app.models.ledger import Membership, Room

# Dialects with a native INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RoomRepository:
    """
    Manages data access for rooms and their memberships (the participants table).
    Methods only flush; the service layer owns the transaction boundary.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- 1. Room Methods ---

    async def get_by_id(self, room_id: int) -> Room | None:
        """Retrieves a Room by its ID."""
        return await self.session.get(Room, room_id)

    async def create(self, name: str, created_by: str) -> Room:
        """Creates a new Room; the storage layer assigns the ID on flush."""
        room = Room(name=name, created_by=created_by)
        self.session.add(room)
        await self.session.flush()
        return room

    # --- 2. Membership Methods ---

    async def add_participant_if_absent(self, room_id: int, username: str) -> bool:
        """
        Inserts a membership unless one already exists for (room_id, username).

        Relies on the unique constraint instead of check-then-insert, so two
        concurrent joins by the same user cannot both succeed.

        Returns:
            True if a new membership row was written, False if it already existed.
        """
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StorageError(f"Idempotent join is not supported on {dialect}")

        stmt = (
            insert(Membership)
            .values(room_id=room_id, username=username)
            .on_conflict_do_nothing(index_elements=["room_id", "username"])
            .returning(Membership.id)
        )
        inserted_id = (await self.session.execute(stmt)).scalar_one_or_none()
        return inserted_id is not None

    async def is_participant(self, room_id: int, username: str) -> bool:
        stmt = select(Membership.id).where(Membership.room_id == room_id, Membership.username == username)
        return (await self.session.scalar(stmt)) is not None

    async def count_participants(self, room_id: int) -> int:
        """Live count of memberships for a room."""
        stmt = select(func.count(Membership.id)).where(Membership.room_id == room_id)
        return (await self.session.scalar(stmt)) or 0

    async def list_participants(self, room_id: int) -> Sequence[str]:
        """Usernames holding a membership in the room, in join order."""
        stmt = select(Membership.username).where(Membership.room_id == room_id).order_by(Membership.id)
        return (await self.session.scalars(stmt)).all()

    async def list_distinct_participants(self, room_id: int) -> Sequence[str]:
        stmt = select(Membership.username).where(Membership.room_id == room_id).distinct().order_by(Membership.username)
        return (await self.session.scalars(stmt)).all()
