from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security.password import MAX_PASSWORD_BYTES, check_password, hash_password
from app.core.security.tokens import TokenPurpose, create_token, decode_token
from app.db.utils import transaction
from app.exceptions.http import CredentialError, NotFoundError, ValidationError
from app.repositories import UserRepository
from app.schemas import AuthResponse, LoginRequest, SignupRequest, UserResponse

from .mailer import Mailer
from .validation import normalize_username

logger = get_logger(__name__)


class UserService:
    def __init__(
        self,
        session: AsyncSession,
        user_repo: UserRepository,
        mailer: Mailer | None = None,
        require_email_verification: bool | None = None,
    ):
        self._session = session
        self._user_repo = user_repo
        self._mailer = mailer or Mailer()
        self._require_verification = (
            settings.REQUIRE_EMAIL_VERIFICATION if require_email_verification is None else require_email_verification
        )

    # --- 1. USER REGISTRATION ---

    async def signup(self, data: SignupRequest) -> AuthResponse:
        """
        Registers a new user under the normalized username.

        When an email is given a verification link is mailed. If verification is
        required, no access token is issued until the link has been followed.
        """
        username = normalize_username(data.username)
        if not username or not data.password:
            raise ValidationError("Username and password required")

        if len(data.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if self._require_verification and not data.email:
            raise ValidationError("Email is required for account verification")

        if await self._user_repo.get_by_username(username):
            raise ValidationError("Username already exists")

        hashed_password = hash_password(data.password)

        async with transaction(self._session, "sign up"):
            try:
                await self._user_repo.create(
                    {"username": username, "password_hash": hashed_password, "email": data.email}
                )
            except IntegrityError as exc:
                # Lost a race against a concurrent signup for the same name
                raise ValidationError("Username already exists") from exc

        logger.info("User %s signed up", username)

        if data.email:
            await self._mailer.send_verification(
                data.email, username, create_token(username, TokenPurpose.EMAIL_VERIFICATION)
            )

        if self._require_verification:
            return AuthResponse(username=username, message="Check your email to verify your account")

        return AuthResponse(username=username, token=create_token(username, TokenPurpose.ACCESS))

    # --- 2. USER AUTHENTICATION ---

    async def authenticate(self, credentials: LoginRequest) -> AuthResponse:
        """
        Authenticates a user by username and password and issues an access token.
        """
        username = normalize_username(credentials.username)
        if not username or not credentials.password:
            raise ValidationError("Username and password required")

        user_orm = await self._user_repo.get_by_username(username)
        if not user_orm or not check_password(credentials.password, user_orm.password_hash):
            raise CredentialError("Invalid credentials")

        if self._require_verification and user_orm.email and not user_orm.is_verified:
            raise CredentialError("Email not verified", status_code=403)

        return AuthResponse(username=username, token=create_token(username, TokenPurpose.ACCESS))

    # --- 3. EMAIL VERIFICATION ---

    async def verify_email(self, token: str | None) -> UserResponse:
        """Marks the user named by a verification token as verified (idempotent)."""
        if not token:
            raise ValidationError("Verification token required")

        username = decode_token(token, TokenPurpose.EMAIL_VERIFICATION)

        async with transaction(self._session, "verify email"):
            if not await self._user_repo.mark_verified(username):
                raise NotFoundError("User not found")

        user_orm = await self._user_repo.get_by_username(username)
        logger.info("User %s verified their email", username)
        return UserResponse.model_validate(user_orm)
