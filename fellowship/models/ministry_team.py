# File: fellowship/models/ministry_team.py
from sqlalchemy import Column, String, Text, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from fellowship.models.base import BaseModel, TenantBaseModel
import enum


class TeamRole(enum.Enum):
    LEADER = "leader"
    CO_LEADER = "co_leader"
    MEMBER = "member"
    VOLUNTEER = "volunteer"


class MinistryTeam(TenantBaseModel):
    __tablename__ = "ministry_teams"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    members = relationship("TeamMember", back_populates="team", cascade="all, delete-orphan")


class TeamMember(BaseModel):
    __tablename__ = "team_members"
    __table_args__ = (UniqueConstraint("team_id", "user_id", name="team_members_unique_idx"),)

    team_id = Column(String(36), ForeignKey("ministry_teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(Enum(TeamRole), nullable=False, default=TeamRole.MEMBER)

    team = relationship("MinistryTeam", back_populates="members")
    user = relationship("User")
