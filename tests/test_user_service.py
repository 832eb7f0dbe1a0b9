"""Tests for signup, login, email verification and bearer tokens."""

from datetime import timedelta

import pytest

from app.core.security.tokens import TokenPurpose, create_token, decode_token
from app.exceptions.http import CredentialError, NotFoundError, ValidationError
from app.repositories import UserRepository
from app.schemas import LoginRequest, SignupRequest
from app.services import UserService


class TestSignup:
    async def test_signup_normalizes_and_issues_token(self, user_service) -> None:
        response = await user_service.signup(SignupRequest(username="  Alice ", password="secret"))

        assert response.username == "alice"
        assert decode_token(response.token, TokenPurpose.ACCESS) == "alice"

    async def test_duplicate_username_is_rejected(self, user_service) -> None:
        await user_service.signup(SignupRequest(username="alice", password="secret"))

        with pytest.raises(ValidationError, match="already exists"):
            await user_service.signup(SignupRequest(username="ALICE", password="other"))

    @pytest.mark.parametrize("username, password", [(None, "secret"), ("alice", None), ("  ", "secret")])
    async def test_missing_credentials_are_rejected(self, user_service, username, password) -> None:
        with pytest.raises(ValidationError):
            await user_service.signup(SignupRequest(username=username, password=password))

    async def test_overlong_password_is_rejected(self, user_service) -> None:
        with pytest.raises(ValidationError, match="72 bytes"):
            await user_service.signup(SignupRequest(username="alice", password="x" * 73))

    async def test_email_triggers_verification_mail(self, user_service, mailer) -> None:
        await user_service.signup(SignupRequest(username="alice", password="secret", email="alice@example.com"))

        assert len(mailer.sent) == 1
        email, username, token = mailer.sent[0]
        assert (email, username) == ("alice@example.com", "alice")
        assert decode_token(token, TokenPurpose.EMAIL_VERIFICATION) == "alice"


class TestLogin:
    async def test_login_with_any_casing(self, user_service) -> None:
        await user_service.signup(SignupRequest(username="alice", password="secret"))

        response = await user_service.authenticate(LoginRequest(username="Alice", password="secret"))

        assert response.username == "alice"
        assert decode_token(response.token, TokenPurpose.ACCESS) == "alice"

    async def test_wrong_password(self, user_service) -> None:
        await user_service.signup(SignupRequest(username="alice", password="secret"))

        with pytest.raises(CredentialError) as exc_info:
            await user_service.authenticate(LoginRequest(username="alice", password="wrong"))
        assert exc_info.value.status_code == 401

    async def test_unknown_user(self, user_service) -> None:
        with pytest.raises(CredentialError):
            await user_service.authenticate(LoginRequest(username="ghost", password="secret"))


class TestEmailVerification:
    @pytest.fixture
    def strict_service(self, session, mailer) -> UserService:
        return UserService(session, UserRepository(session), mailer, require_email_verification=True)

    async def test_signup_requires_email(self, strict_service) -> None:
        with pytest.raises(ValidationError, match="Email is required"):
            await strict_service.signup(SignupRequest(username="alice", password="secret"))

    async def test_unverified_login_is_refused_until_verified(self, strict_service, mailer) -> None:
        response = await strict_service.signup(
            SignupRequest(username="alice", password="secret", email="alice@example.com")
        )
        assert response.token is None

        with pytest.raises(CredentialError) as exc_info:
            await strict_service.authenticate(LoginRequest(username="alice", password="secret"))
        assert exc_info.value.status_code == 403

        user = await strict_service.verify_email(mailer.sent[0][2])
        assert user.is_verified is True

        login = await strict_service.authenticate(LoginRequest(username="alice", password="secret"))
        assert login.token

    async def test_access_token_cannot_verify(self, strict_service) -> None:
        with pytest.raises(CredentialError):
            await strict_service.verify_email(create_token("alice", TokenPurpose.ACCESS))

    async def test_unknown_user_token(self, strict_service) -> None:
        with pytest.raises(NotFoundError):
            await strict_service.verify_email(create_token("ghost", TokenPurpose.EMAIL_VERIFICATION))


class TestTokens:
    def test_expired_token_is_invalid(self) -> None:
        token = create_token("alice", TokenPurpose.ACCESS, expires_in=timedelta(seconds=-5))

        with pytest.raises(CredentialError) as exc_info:
            decode_token(token, TokenPurpose.ACCESS)
        assert exc_info.value.status_code == 403

    def test_tampered_token_is_invalid(self) -> None:
        token = create_token("alice", TokenPurpose.ACCESS)

        with pytest.raises(CredentialError):
            decode_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"), TokenPurpose.ACCESS)
