# File: fellowship/schemas/ministry_team.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from fellowship.models.ministry_team import TeamRole
from fellowship.schemas.user import Member


class MinistryTeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class MinistryTeamUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class MinistryTeam(MinistryTeamCreate):
    id: str
    tenant_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class TeamMemberCreate(BaseModel):
    user_id: str
    role: TeamRole = TeamRole.MEMBER


class TeamMemberUpdate(BaseModel):
    role: TeamRole


class TeamMember(BaseModel):
    id: str
    team_id: str
    user_id: str
    role: TeamRole
    created_at: datetime

    class Config:
        from_attributes = True


class TeamMemberDetail(TeamMember):
    user: Optional[Member] = None


class MinistryTeamWithMembers(MinistryTeam):
    members: List[TeamMemberDetail] = []
