"""
Teams CRUD Module.
Handles team creation and retrieval.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_verified_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.team import TeamCreate, TeamListOut, TeamOut
from app.services.team_service import TeamService

router = APIRouter()


@router.post("/", response_model=TeamOut)
def create_team(
    payload: TeamCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Create a new team. The creator automatically becomes its captain."""
    return TeamService.create_team(db, payload.name, payload.description, current_user)


@router.get("/", response_model=List[TeamListOut])
def list_teams(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """List teams. Users can see teams they are members of."""
    return TeamService.list_teams(db, current_user, skip, limit)


@router.get("/{team_id}", response_model=TeamOut)
def get_team(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Get team details. Only team members can view team details."""
    return TeamService.get_team(db, team_id, current_user)
