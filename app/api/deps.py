from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security.tokens import TokenPurpose, decode_token
from app.db.session import get_session
from app.exceptions.http import CredentialError
from app.repositories import LedgerRepository, RoomRepository, UserRepository
from app.services import ExpenseService, Mailer, RoomService, UserService

# auto_error=False: a missing header must be a 401, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_username(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """
    Resolves the caller from `Authorization: Bearer <token>`.
    Use as dependency for protected endpoints.

    Missing token -> 401; invalid, expired or non-access token -> 403.
    """
    if credentials is None or not credentials.credentials:
        raise CredentialError("Token missing")
    return decode_token(credentials.credentials, TokenPurpose.ACCESS)


def get_mailer() -> Mailer:
    return Mailer()


def get_user_service(session: AsyncSession = Depends(get_session), mailer: Mailer = Depends(get_mailer)) -> UserService:
    return UserService(session, UserRepository(session), mailer)


def get_room_service(session: AsyncSession = Depends(get_session)) -> RoomService:
    return RoomService(session, RoomRepository(session), LedgerRepository(session))


def get_expense_service(session: AsyncSession = Depends(get_session)) -> ExpenseService:
    return ExpenseService(session, RoomRepository(session), LedgerRepository(session))
