from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["System"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Server is running"


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy", "service": "roomsplit"}
