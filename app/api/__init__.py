from fastapi import APIRouter
from . import teams, team_invitations


router = APIRouter()
router.include_router(teams.router, prefix="/teams", tags=["teams"])
router.include_router(team_invitations.router, prefix="/team-invitations", tags=["team invitations"])
