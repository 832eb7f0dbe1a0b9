from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.utils import apply_dict_updates
from app.models.definitions import User


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> User | None:
        """Retrieves a User by their unique (normalized) username."""
        stmt = select(User).where(User.username == username)
        return (await self.session.scalars(stmt)).one_or_none()

    async def create(self, create_data: dict[str, Any]) -> User:
        """Creates a new User record and flushes it (caller owns the commit)."""
        sensitive_fields = {"id", "created_at", "updated_at", "is_verified"}
        user = apply_dict_updates(User(is_verified=False), create_data, sensitive_fields)
        self.session.add(user)
        await self.session.flush()
        return user

    async def mark_verified(self, username: str) -> bool:
        """
        Flags the user as verified. Returns False when no such user exists.
        Marking an already verified user is a no-op that still returns True.
        """
        stmt = update(User).where(User.username == username).values(is_verified=True)
        result = await self.session.execute(stmt)
        return result.rowcount > 0
