# File: fellowship/api/v1/endpoints/ministry_teams.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound, ValidationError
from fellowship.core.permissions import TENANT_ADMIN, TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db
from fellowship.models.ministry_team import MinistryTeam, TeamMember

router = APIRouter()


def _get_team(db: Session, ctx: AuthContext, team_id: str) -> MinistryTeam:
    team = crud.ministry_team.get(db, team_id)
    if team is None:
        raise NotFound("Ministry team not found")
    ctx.ensure_same_tenant(team.tenant_id)
    return team


def _get_membership(db: Session, team: MinistryTeam, user_id: str) -> TeamMember:
    membership = crud.team_member.get_membership(db, team_id=team.id, user_id=user_id)
    if membership is None:
        raise NotFound("Team member not found")
    return membership


@router.get("", response_model=List[schemas.MinistryTeam])
def list_teams(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return crud.ministry_team.get_by_tenant(db, tenant_id=ctx.require_tenant())


@router.post("", response_model=schemas.MinistryTeam, status_code=status.HTTP_201_CREATED)
def create_team(
    *,
    db: Session = Depends(get_db),
    team_in: schemas.MinistryTeamCreate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    return crud.ministry_team.create(db, obj_in=team_in, tenant_id=ctx.require_tenant())


@router.get("/directory", response_model=List[schemas.MinistryTeamWithMembers])
def team_directory(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Every team in the organization with its members."""
    return crud.ministry_team.get_directory(db, tenant_id=ctx.require_tenant())


@router.get("/{team_id}", response_model=schemas.MinistryTeam)
def read_team(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return _get_team(db, ctx, team_id)


@router.patch("/{team_id}", response_model=schemas.MinistryTeam)
def update_team(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    team_in: schemas.MinistryTeamUpdate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    team = _get_team(db, ctx, team_id)
    return crud.ministry_team.update(db, db_obj=team, obj_in=team_in)


@router.delete("/{team_id}")
def delete_team(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    _get_team(db, ctx, team_id)
    crud.ministry_team.remove(db, id=team_id)
    return {"message": "Ministry team deleted"}


@router.get("/{team_id}/members", response_model=List[schemas.TeamMember])
def list_team_members(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    team = _get_team(db, ctx, team_id)
    return crud.team_member.get_by_team(db, team_id=team.id)


@router.post("/{team_id}/members", response_model=schemas.TeamMember, status_code=status.HTTP_201_CREATED)
def add_team_member(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    member_in: schemas.TeamMemberCreate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """Add an organization member to the team."""
    team = _get_team(db, ctx, team_id)
    if crud.user.get_in_tenant(db, user_id=member_in.user_id, tenant_id=team.tenant_id) is None:
        raise ValidationError("User is not a member of this organization")
    if crud.team_member.get_membership(db, team_id=team.id, user_id=member_in.user_id):
        raise ValidationError("User is already on this team")
    return crud.team_member.create(db, obj_in=member_in, team_id=team.id)


@router.patch("/{team_id}/members/{user_id}", response_model=schemas.TeamMember)
def update_team_member(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    user_id: str,
    member_in: schemas.TeamMemberUpdate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    team = _get_team(db, ctx, team_id)
    membership = _get_membership(db, team, user_id)
    return crud.team_member.update(db, db_obj=membership, obj_in=member_in)


@router.delete("/{team_id}/members/{user_id}")
def remove_team_member(
    *,
    db: Session = Depends(get_db),
    team_id: str,
    user_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    team = _get_team(db, ctx, team_id)
    membership = _get_membership(db, team, user_id)
    crud.team_member.remove(db, id=membership.id)
    return {"message": "Team member removed"}
