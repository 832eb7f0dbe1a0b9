from pydantic import BaseModel


class StatusResponse(BaseModel):
    """Generic acknowledgement body; failures use the same shape with success=False."""

    success: bool = True
    message: str | None = None
