from datetime import datetime
from decimal import Decimal

from sqlalchemy import DECIMAL, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, CreatedAtMixin, TimestampMixin, utcnow

# Audit marker written on a user's first join; amount is always zero.
JOINED_ROOM_DESCRIPTION = "joined the room"


# --- 1. ROOM AND MEMBERSHIP MODELS (Dimensions) ---


class Room(Base, TimestampMixin):
    """
    The Room Table (T_Room).
    A named shared-expense group. The creator is fixed at creation and is the
    only user allowed to post shared expenses.
    """

    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Storage-assigned room ID.")
    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Display name of the room.")
    created_by: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True, comment="Username of the creator (never reassigned)."
    )

    def __repr__(self) -> str:
        return f"<Room id={self.id!r} name={self.name!r} created_by={self.created_by!r}>"


class Membership(Base):
    """
    The Participants Table (T_Participants).
    Records that a user joined a room. A user may join a room at most once;
    the unique constraint is what makes concurrent joins safe.
    """

    __tablename__ = "participants"
    __table_args__ = (UniqueConstraint("room_id", "username", name="uq_participants_room_username"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Unique membership ID.")
    room_id: Mapped[int] = mapped_column(
        ForeignKey(Room.id), nullable=False, index=True, comment="The room that was joined."
    )
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True, comment="The joining user.")
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, comment="When the user joined (UTC)."
    )


# --- 2. LEDGER FACT MODELS (Append-only) ---


class RoomExpense(Base, CreatedAtMixin):
    """
    The Room Expense Table (T_RoomExpense) - The Shared Ledger.
    Every row is immutable. `people` is the number of room members at the moment
    the row was written and is never recomputed when membership changes later.
    """

    __tablename__ = "room_expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Unique shared entry ID.")
    room_id: Mapped[int] = mapped_column(
        ForeignKey(Room.id), nullable=False, index=True, comment="The room this entry belongs to."
    )
    username: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True, comment="Author of the entry (creator, or the joining user)."
    )
    description: Mapped[str] = mapped_column(String(255), nullable=False, comment="What the money was spent on.")
    amount: Mapped[Decimal] = mapped_column(
        DECIMAL(14, 2), nullable=False, comment="Expense amount (non-negative; zero only for join markers)."
    )
    people: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Participant-count snapshot taken when the entry was written."
    )


class PersonalExpense(Base, CreatedAtMixin):
    """
    The Expense Table (T_Expense) - The Personal Ledger.
    Expenses owned by a single user. `people` is supplied by the user; `room_id`
    optionally tags the entry with a room the user has joined.
    """

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Unique personal entry ID.")
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True, comment="Owner of the entry.")
    description: Mapped[str] = mapped_column(String(255), nullable=False, comment="What the money was spent on.")
    amount: Mapped[Decimal] = mapped_column(DECIMAL(14, 2), nullable=False, comment="Expense amount.")
    people: Mapped[int] = mapped_column(Integer, nullable=False, comment="Number of people the cost is shared by.")
    room_id: Mapped[None | int] = mapped_column(
        ForeignKey(Room.id), nullable=True, index=True, comment="Optional room the expense relates to."
    )
