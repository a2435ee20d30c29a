# File: fellowship/schemas/check_in.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CheckInCreate(BaseModel):
    location: Optional[str] = None
    notes: Optional[str] = None


class CheckInUpdate(CheckInCreate):
    pass


class CheckIn(BaseModel):
    id: str
    tenant_id: str
    user_id: str
    check_in_time: datetime
    location: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
