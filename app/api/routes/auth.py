from fastapi import APIRouter, Depends

from app.api.deps import get_user_service
from app.schemas import AuthResponse, LoginRequest, SignupRequest, StatusResponse
from app.services import UserService

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/signup", response_model=AuthResponse, response_model_exclude_none=True)
async def signup(request: SignupRequest, service: UserService = Depends(get_user_service)):
    """
    Create a user. Returns an access token right away unless email
    verification is required, in which case a verification link is mailed.
    """
    return await service.signup(request)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(request: LoginRequest, service: UserService = Depends(get_user_service)):
    """Issue a one-hour bearer token."""
    return await service.authenticate(request)


@router.get("/verify-email", response_model=StatusResponse)
async def verify_email(token: str | None = None, service: UserService = Depends(get_user_service)):
    """Mark the account named by a (15 minute) verification token as verified."""
    user = await service.verify_email(token)
    return StatusResponse(message=f"Email verified for {user.username}")
