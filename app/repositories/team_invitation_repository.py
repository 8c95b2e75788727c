"""Repository for team invitation operations."""

from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session, joinedload

from app.models.team_invitation import TeamInvitation, InvitationStatus
from app.repositories.base_repository import BaseRepository


class TeamInvitationRepository(BaseRepository[TeamInvitation]):
    """
    Repository for TeamInvitation database operations.

    Every write is a single-row statement and only flushes; the caller decides
    when to commit.
    """

    def __init__(self, db: Session):
        super().__init__(TeamInvitation, db)

    def _query(self):
        return self.db.query(TeamInvitation).options(
            joinedload(TeamInvitation.team),
            joinedload(TeamInvitation.inviter),
        )

    def get_by_token(self, token: str) -> Optional[TeamInvitation]:
        """
        Get invitation by token, with team and inviter loaded.

        Args:
            token: Invitation token

        Returns:
            Invitation or None
        """
        return self._query().filter(TeamInvitation.token == token).first()

    def get_by_email(self, email: str) -> List[TeamInvitation]:
        """
        Get every invitation sent to an email address, newest first.

        Args:
            email: Invitee email (exact match)

        Returns:
            List of invitations in any status
        """
        return (
            self._query()
            .filter(TeamInvitation.invited_email == email)
            .order_by(TeamInvitation.created_at.desc(), TeamInvitation.id.desc())
            .all()
        )

    def get_team_invitations(self, team_id: int) -> List[TeamInvitation]:
        """
        Get invitations for a team, newest first.

        Args:
            team_id: Team ID

        Returns:
            List of invitations
        """
        return (
            self._query()
            .filter(TeamInvitation.team_id == team_id)
            .order_by(TeamInvitation.created_at.desc(), TeamInvitation.id.desc())
            .all()
        )

    def get_pending_for_team(self, team_id: int, email: str) -> Optional[TeamInvitation]:
        """Get the pending invitation for an email on a team, if any."""
        return (
            self.db.query(TeamInvitation)
            .filter(
                TeamInvitation.team_id == team_id,
                TeamInvitation.invited_email == email,
                TeamInvitation.status == InvitationStatus.pending.value,
            )
            .first()
        )

    def create_invitation(
        self,
        team_id: int,
        invited_by_user_id: int,
        invited_email: str,
        invited_role: str,
        token: str,
        expires_at: datetime,
    ) -> TeamInvitation:
        """Insert a new pending invitation."""
        return self.create(
            TeamInvitation(
                team_id=team_id,
                invited_by_user_id=invited_by_user_id,
                invited_email=invited_email,
                invited_role=invited_role,
                token=token,
                status=InvitationStatus.pending.value,
                expires_at=expires_at,
            )
        )

    def update_status(self, token: str, status: InvitationStatus) -> None:
        """
        Unconditionally set the status of the invitation with this token.

        Args:
            token: Invitation token
            status: New status
        """
        self.db.query(TeamInvitation).filter(TeamInvitation.token == token).update(
            {TeamInvitation.status: InvitationStatus(status).value},
            synchronize_session=False,
        )
        self.db.flush()

    def transition_status(
        self,
        token: str,
        new_status: InvitationStatus,
        expected_status: InvitationStatus = InvitationStatus.pending,
    ) -> bool:
        """
        Compare-and-swap the status of one invitation.

        The row is only updated while it still has ``expected_status``, so of
        two concurrent resolutions at most one can win.

        Args:
            token: Invitation token
            new_status: Status to write
            expected_status: Status the row must currently have

        Returns:
            True if exactly one row changed, False otherwise
        """
        updated = (
            self.db.query(TeamInvitation)
            .filter(
                TeamInvitation.token == token,
                TeamInvitation.status == InvitationStatus(expected_status).value,
            )
            .update(
                {TeamInvitation.status: InvitationStatus(new_status).value},
                synchronize_session=False,
            )
        )
        self.db.flush()
        return updated == 1

