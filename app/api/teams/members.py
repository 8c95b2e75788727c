"""
Team Members Module.
Read access to a team's roster.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_verified_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.team import TeamMemberOut
from app.services.team_service import TeamService

router = APIRouter()


@router.get("/{team_id}/members", response_model=List[TeamMemberOut])
def list_members(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """List team members. Only team members can view the member list."""
    return TeamService.list_members(db, team_id, current_user)
