"""Customer Schema"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CustomerCreate(BaseModel):
    """Create customer"""
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)


class CustomerResponse(BaseModel):
    """Customer response"""
    id: int
    name: str
    phone: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
