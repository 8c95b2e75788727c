"""
Team Service Module.
Handles business logic for teams, their members, and sending invitations.
Following architectural rules: stateless, no direct db.session access, uses repositories.
"""
import logging
from typing import List

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.models.team import Team, TeamMember, TeamMemberRole
from app.models.team_invitation import TeamInvitation
from app.models.user import User
from app.services.permission_service import PermissionService
from app.services.team_invitation_service import TeamInvitationService
from app.repositories import (
    TeamRepository,
    TeamMemberRepository,
    TeamInvitationRepository,
    UserRepository,
)
from app.utils.invitation import (
    generate_invitation_token,
    invitation_expiry,
    notify_invitee,
)

logger = logging.getLogger(__name__)


class TeamService:
    """Service for managing team operations."""

    @staticmethod
    def create_team(
        db: Session, name: str, description: str, current_user: User
    ) -> Team:
        """Create a new team. The creator automatically becomes its captain."""
        team_repo = TeamRepository(db)
        team_member_repo = TeamMemberRepository(db)

        if team_repo.get_by_name_and_creator(name, current_user.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You already have a team with this name",
            )

        team = team_repo.create(
            Team(name=name, description=description, created_by=current_user.id)
        )
        team_member_repo.add_member(team.id, current_user.id, TeamMemberRole.captain)
        db.commit()

        logger.info("Team %s created by user %s", team.id, current_user.id)
        return team_repo.get_with_members(team.id)

    @staticmethod
    def list_teams(
        db: Session, current_user: User, skip: int = 0, limit: int = 100
    ) -> List[Team]:
        """List the teams the current user belongs to."""
        return TeamRepository(db).get_user_teams(current_user.id, skip, limit)

    @staticmethod
    def get_team(db: Session, team_id: int, current_user: User) -> Team:
        """Get team details. Only team members can view team details."""
        team = PermissionService.get_team_or_404(db, team_id)
        PermissionService.verify_team_membership(db, team.id, current_user.id)
        return TeamRepository(db).get_with_members(team_id)

    @staticmethod
    def list_members(
        db: Session, team_id: int, current_user: User
    ) -> List[TeamMember]:
        """List team members. Only team members can view the member list."""
        PermissionService.get_team_or_404(db, team_id)
        PermissionService.verify_team_membership(db, team_id, current_user.id)
        return TeamMemberRepository(db).get_team_members_with_users(team_id)

    @staticmethod
    def send_invitation(
        db: Session, team_id: int, email: str, role: str, current_user: User
    ) -> TeamInvitation:
        """
        Invite someone to join the team by email.

        Creates a pending invitation with a fresh token and emails the link.

        Raises:
            HTTPException 404: Team not found
            HTTPException 403: Caller does not manage the team
            HTTPException 400: Invitee already a member or already invited
        """
        team = PermissionService.verify_team_manager(
            db, team_id, current_user.id, detail="Only team captains can send invitations"
        )

        invitee = UserRepository(db).get_by_email(email)
        if invitee and TeamMemberRepository(db).is_member(team_id, invitee.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User is already a member of this team",
            )

        invitation_repo = TeamInvitationRepository(db)
        existing = invitation_repo.get_pending_for_team(team_id, email)
        # A lapsed invitation nobody opened must not block a new one
        if existing and TeamInvitationService.check_and_expire(db, existing).is_pending():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User has already been invited to this team",
            )

        invitation = invitation_repo.create_invitation(
            team_id=team_id,
            invited_by_user_id=current_user.id,
            invited_email=email,
            invited_role=role,
            token=generate_invitation_token(),
            expires_at=invitation_expiry(),
        )
        db.commit()
        db.refresh(invitation)
        logger.info("Invitation %s sent to %s for team %s", invitation.id, email, team_id)

        notify_invitee(
            email=email,
            token=invitation.token,
            team_name=team.name,
            inviter_name=current_user.username,
            role=role,
        )
        return invitation

    @staticmethod
    def list_team_invitations(
        db: Session, team_id: int, current_user: User
    ) -> List[TeamInvitation]:
        """List every invitation of a team. Only team managers can see them."""
        PermissionService.verify_team_manager(
            db, team_id, current_user.id, detail="Only team captains can view team invitations"
        )
        return TeamInvitationRepository(db).get_team_invitations(team_id)

    @staticmethod
    def delete_invitation(
        db: Session, team_id: int, invitation_id: int, current_user: User
    ) -> None:
        """Delete an invitation of the team, whatever its status."""
        PermissionService.verify_team_manager(
            db, team_id, current_user.id, detail="Only team captains can delete invitations"
        )

        invitation_repo = TeamInvitationRepository(db)
        invitation = invitation_repo.get_by_id(invitation_id)
        if not invitation or invitation.team_id != team_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found"
            )

        invitation_repo.delete(invitation)
        db.commit()
        logger.info("Invitation %s deleted from team %s by user %s", invitation_id, team_id, current_user.id)
