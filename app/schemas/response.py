"""
app/schemas/response.py

Purpose: Error body shared by every failing API response
"""

from pydantic import BaseModel
from typing import Optional, Any

from app.core.exceptions import NightListError


class ErrorResponse(BaseModel):
    """
    Error body returned by the API.
    `code` is the stable machine-readable value clients branch on.
    """
    error: str
    code: str
    details: Optional[Any] = None

    @classmethod
    def from_error(cls, exc: NightListError) -> "ErrorResponse":
        return cls(error=exc.message, code=exc.code, details=exc.details)
