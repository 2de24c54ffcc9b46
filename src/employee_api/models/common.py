"""
Envelope and demonstration-endpoint models
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class EnvelopeStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Envelope(BaseModel):
    """Generic wrapper for non-entity responses"""
    status: EnvelopeStatus
    message: str
    data: Optional[str] = None

    @classmethod
    def success(cls, message: str, data: Optional[str] = None) -> "Envelope":
        return cls(status=EnvelopeStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(cls, message: str, data: Optional[str] = None) -> "Envelope":
        return cls(status=EnvelopeStatus.ERROR, message=message, data=data)


class UserInfo(BaseModel):
    user_id: int = Field(..., ge=0, le=4_294_967_295)
    friend: str
