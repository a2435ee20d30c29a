# File: fellowship/crud/ministry_team.py
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from fellowship.crud.base import CRUDBase
from fellowship.models.ministry_team import MinistryTeam, TeamMember
from fellowship.schemas.ministry_team import MinistryTeamCreate, MinistryTeamUpdate, TeamMemberCreate, TeamMemberUpdate


class CRUDMinistryTeam(CRUDBase[MinistryTeam, MinistryTeamCreate, MinistryTeamUpdate]):

    def get_by_tenant(self, db: Session, *, tenant_id: str) -> List[MinistryTeam]:
        return db.query(MinistryTeam).filter(MinistryTeam.tenant_id == tenant_id).order_by(MinistryTeam.name).all()

    def get_directory(self, db: Session, *, tenant_id: str) -> List[MinistryTeam]:
        """Teams with their members and member accounts loaded."""
        return (
            db.query(MinistryTeam)
            .options(selectinload(MinistryTeam.members).selectinload(TeamMember.user))
            .filter(MinistryTeam.tenant_id == tenant_id)
            .order_by(MinistryTeam.name)
            .all()
        )


class CRUDTeamMember(CRUDBase[TeamMember, TeamMemberCreate, TeamMemberUpdate]):

    def get_by_team(self, db: Session, *, team_id: str) -> List[TeamMember]:
        return db.query(TeamMember).filter(TeamMember.team_id == team_id).order_by(TeamMember.created_at).all()

    def get_membership(self, db: Session, *, team_id: str, user_id: str) -> Optional[TeamMember]:
        return db.query(TeamMember).filter(TeamMember.team_id == team_id, TeamMember.user_id == user_id).first()


ministry_team = CRUDMinistryTeam(MinistryTeam)
team_member = CRUDTeamMember(TeamMember)
