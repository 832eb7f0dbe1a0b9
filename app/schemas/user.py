"""
Pydantic schemas defining the contract for user identity and authentication
across the Presentation (API) and Service Layers.

Request fields are optional at this layer: presence rules live in the service
layer so a missing field is reported as a ValidationError (400) with the same
message whether the call came over HTTP or not.
"""

from pydantic import BaseModel, EmailStr, Field

# --- Input Schemas (Requests / Commands) ---


class SignupRequest(BaseModel):
    """Schema for user creation requests."""

    username: str | None = Field(default=None, max_length=50, description="Desired username (normalized on save)")
    password: str | None = Field(default=None, description="Plain text password (hashed with bcrypt)")
    email: EmailStr | None = Field(default=None, description="Email address for account verification")


class LoginRequest(BaseModel):
    """
    Minimal schema for user authentication/login command.
    """

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="User's plain text password")


# --- Output Schemas (Responses) ---


class AuthResponse(BaseModel):
    """
    Returned by signup and login. `token` is absent when signup is waiting for
    email verification; `message` then tells the user to check their inbox.
    """

    success: bool = True
    username: str = Field(..., description="Canonical username the token is issued for")
    token: str | None = Field(default=None, description="Bearer token for the Authorization header")
    message: str | None = None


class UserResponse(BaseModel):
    """Domain view of a user, mapped from the ORM object."""

    # Configuration allows mapping from SQLAlchemy ORM objects
    model_config = {"from_attributes": True}

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Canonical username")
    email: str | None = Field(default=None, description="User's email address")
    is_verified: bool = Field(default=False, description="Whether the email address was verified")
