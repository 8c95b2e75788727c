"""Repository layer for database access."""

from app.repositories.user_repository import UserRepository
from app.repositories.team_repository import (
    TeamRepository,
    TeamMemberRepository,
)
from app.repositories.team_invitation_repository import TeamInvitationRepository

__all__ = [
    "UserRepository",
    "TeamRepository",
    "TeamMemberRepository",
    "TeamInvitationRepository",
]
