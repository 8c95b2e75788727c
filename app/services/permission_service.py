"""
Permission Service - Centralized Authorization Logic

Encapsulates the team-level permission checks shared by the team and
invitation endpoints so every route enforces access control the same way.
"""

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.models.team import Team, TeamMember, TeamMemberRole
from app.repositories.team_repository import TeamRepository, TeamMemberRepository

# Member roles allowed to manage a team's invitations besides its creator
TEAM_MANAGER_ROLES = [TeamMemberRole.admin, TeamMemberRole.captain]


class PermissionService:
    """
    Centralized service for permission and authorization checks on teams.
    """

    @staticmethod
    def get_team_or_404(db: Session, team_id: int) -> Team:
        """
        Get a team or raise 404.

        Raises:
            HTTPException 404: If the team does not exist
        """
        team = TeamRepository(db).get_by_id(team_id)
        if not team:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Team not found"
            )
        return team

    @staticmethod
    def verify_team_membership(db: Session, team_id: int, user_id: int) -> TeamMember:
        """
        Verify user is a member of a team.

        Args:
            db: Database session
            team_id: Team ID to check membership for
            user_id: User ID to verify

        Returns:
            TeamMember object if authorized

        Raises:
            HTTPException 403: If user is not a member
        """
        team_member = TeamMemberRepository(db).get_by_team_and_user(team_id, user_id)

        if not team_member:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. You are not a member of this team.",
            )

        return team_member

    @staticmethod
    def verify_team_manager(
        db: Session,
        team_id: int,
        user_id: int,
        detail: str = "Only team captains can manage invitations",
    ) -> Team:
        """
        Verify user may manage the team's invitations.

        The team creator always may; otherwise the user needs an admin or
        captain membership.

        Args:
            db: Database session
            team_id: Team ID to check
            user_id: User ID to verify
            detail: Message for the 403 response

        Returns:
            Team object if authorized

        Raises:
            HTTPException 404: If the team does not exist
            HTTPException 403: If user is not allowed to manage the team
        """
        team = PermissionService.get_team_or_404(db, team_id)
        if team.created_by == user_id:
            return team

        if not TeamMemberRepository(db).has_role(team_id, user_id, TEAM_MANAGER_ROLES):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

        return team
