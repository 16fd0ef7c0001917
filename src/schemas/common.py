"""Common response schemas."""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: str
    data: Optional[Dict[str, Any]] = None


class MessageResponse(BaseModel):
    """Simple message response."""
    message: str
