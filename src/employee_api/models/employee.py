"""
Employee Pydantic models
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class NewEmployee(BaseModel):
    """Create/update payload; created_at defaults server-side when omitted"""
    name: str = Field(..., min_length=1, max_length=255)
    created_at: Optional[datetime] = None


class Employee(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
