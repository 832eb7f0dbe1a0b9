from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

# --- CORE IDENTITY ENTITY ---


class User(Base, TimestampMixin):
    """
    The User Definition Table (T_User).
    This is the identity entity referenced by rooms, memberships and ledger entries.

    CRITICAL DESIGN CHOICE: the username is the login identifier and the identity
    key stored on every other table. It is normalized (trimmed, lower-cased) before
    it is written, so all later comparisons are exact.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Unique User ID.")

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Normalized username, used as the login identifier and identity key.",
    )

    password_hash: Mapped[str] = mapped_column(
        String(128), nullable=False, comment="Secured bcrypt hash of the user's password."
    )

    email: Mapped[None | str] = mapped_column(
        String(100), nullable=True, comment="Optional email address used for account verification."
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, comment="Set once the user follows the verification link."
    )

    def __repr__(self) -> str:
        return f"<User id={self.id!r} username={self.username!r} is_verified={self.is_verified!r}>"
