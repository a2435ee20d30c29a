# File: fellowship/schemas/admin.py
from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import datetime


class ActivityLog(BaseModel):
    id: str
    tenant_id: Optional[str] = None
    user_id: Optional[str] = None
    action: str
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PlatformAnalytics(BaseModel):
    total_tenants: int
    pending_tenants: int
    approved_tenants: int
    rejected_tenants: int
    total_users: int
    total_events: int
    total_posts: int
    total_messages: int
    connected_accounts: int
