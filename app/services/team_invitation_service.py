"""
Team Invitation Service Module.
Resolves team invitations by token: accept, decline, lookup and listing.

Stateless: every operation takes the database session explicitly, builds the
repositories it needs over it, and returns an InvitationResult instead of
raising. Status changes are compare-and-swap writes guarded on ``pending``.
"""
import logging
from typing import Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.team import TeamMemberRole
from app.models.team_invitation import TeamInvitation, InvitationStatus
from app.repositories import (
    TeamInvitationRepository,
    TeamMemberRepository,
    TeamRepository,
    UserRepository,
)
from app.schemas.team_invitation import (
    AcceptInvitationData,
    DeclineInvitationData,
    InvitationDetail,
    InvitationError,
    InvitationListData,
    InvitationLookupData,
    InvitationResult,
    InvitationSummary,
    TeamSummary,
    UserSummary,
)

logger = logging.getLogger(__name__)

AcceptResult = InvitationResult[AcceptInvitationData]
DeclineResult = InvitationResult[DeclineInvitationData]
LookupResult = InvitationResult[InvitationLookupData]
ListResult = InvitationResult[InvitationListData]

INVITATION_NOT_FOUND = "Invitation not found"
INVITATION_EXPIRED = "Invitation has expired"
USER_NOT_FOUND = "User not found"
TEAM_NOT_FOUND = "Team not found"
ALREADY_MEMBER = "You are already a member of this team"
NOT_AUTHORIZED_ACCEPT = "You are not authorized to accept this invitation"
NOT_AUTHORIZED_DECLINE = "You are not authorized to decline this invitation"
UNKNOWN_ERROR = "Unknown error occurred"


def no_longer_valid(status: str) -> str:
    return f"Invitation is no longer valid. Current status: {status}"


def _unexpected(db: Session, operation: str, exc: Exception, result_cls: Type[InvitationResult]):
    # Must be called from inside an ``except`` block so the traceback is logged
    logger.exception("Error in TeamInvitationService.%s", operation)
    db.rollback()
    return result_cls.fail(InvitationError.unexpected, str(exc) or UNKNOWN_ERROR)


def _lost_race(db: Session, token: str, result_cls: Type[InvitationResult]):
    """Report the state left behind by whoever resolved the invitation first."""
    # The conditional update bypassed the identity map; drop stale attributes
    db.expire_all()
    current = TeamInvitationRepository(db).get_by_token(token)
    if current is None:
        return result_cls.fail(InvitationError.not_found, INVITATION_NOT_FOUND)
    return result_cls.fail(InvitationError.invalid_state, no_longer_valid(current.status))


class TeamInvitationService:
    """Service for resolving team invitations."""

    @staticmethod
    def check_and_expire(db: Session, invitation: TeamInvitation) -> TeamInvitation:
        """
        Lazily expire a pending invitation whose deadline has passed.

        This is the only read-side write in the service. The status change is
        committed immediately. Invitations that are not pending, or still
        within their deadline, are returned untouched.

        Args:
            db: Database session
            invitation: Invitation loaded in ``db``

        Returns:
            The invitation, refreshed if its status may have changed
        """
        if not invitation.is_pending() or not invitation.is_expired():
            return invitation

        repo = TeamInvitationRepository(db)
        if repo.transition_status(invitation.token, InvitationStatus.expired):
            logger.info("Invitation %s for team %s expired on access", invitation.id, invitation.team_id)
        db.commit()
        db.refresh(invitation)
        return invitation

    @staticmethod
    def accept_invitation(db: Session, token: str, acting_user_id: int) -> AcceptResult:
        """
        Accept a team invitation on behalf of the invited user.

        Checks run in a fixed order and the first failure is returned:
        invitation exists, is pending, is not expired (expiring it if it is),
        the user exists, owns the invited email, is not already on the team,
        and the team exists. On success the membership row is written first,
        then the invitation is moved to ``accepted``.

        Args:
            db: Database session
            token: Invitation token
            acting_user_id: ID of the user accepting the invitation

        Returns:
            AcceptResult with the invitation, team and user summaries on success
        """
        try:
            return TeamInvitationService._accept(db, token, acting_user_id)
        except Exception as exc:
            return _unexpected(db, "accept_invitation", exc, AcceptResult)

    @staticmethod
    def _accept(db: Session, token: str, acting_user_id: int) -> AcceptResult:
        invitation_repo = TeamInvitationRepository(db)
        member_repo = TeamMemberRepository(db)

        invitation = invitation_repo.get_by_token(token)
        if not invitation:
            return AcceptResult.fail(InvitationError.not_found, INVITATION_NOT_FOUND)

        if not invitation.is_pending():
            return AcceptResult.fail(InvitationError.invalid_state, no_longer_valid(invitation.status))

        invitation = TeamInvitationService.check_and_expire(db, invitation)
        if invitation.status == InvitationStatus.expired.value:
            return AcceptResult.fail(InvitationError.expired, INVITATION_EXPIRED)
        if not invitation.is_pending():
            return AcceptResult.fail(InvitationError.invalid_state, no_longer_valid(invitation.status))

        user = UserRepository(db).get_by_id(acting_user_id)
        if not user:
            return AcceptResult.fail(InvitationError.not_found, USER_NOT_FOUND)

        if user.email != invitation.invited_email:
            return AcceptResult.fail(InvitationError.unauthorized, NOT_AUTHORIZED_ACCEPT)

        if member_repo.is_member(invitation.team_id, user.id):
            return AcceptResult.fail(InvitationError.conflict, ALREADY_MEMBER)

        team = TeamRepository(db).get_by_id(invitation.team_id)
        if not team:
            return AcceptResult.fail(InvitationError.not_found, TEAM_NOT_FOUND)

        # Membership first, so a retried accept stops at the membership check
        # instead of re-flipping the invitation.
        try:
            member_repo.add_member(invitation.team_id, user.id, TeamMemberRole(invitation.invited_role))
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Concurrent acceptance of invitation %s detected for user %s", token, acting_user_id)
            current = invitation_repo.get_by_token(token)
            if current is None:
                return AcceptResult.fail(InvitationError.not_found, INVITATION_NOT_FOUND)
            if not current.is_pending():
                return AcceptResult.fail(InvitationError.invalid_state, no_longer_valid(current.status))
            return AcceptResult.fail(InvitationError.conflict, ALREADY_MEMBER)

        if not invitation_repo.transition_status(token, InvitationStatus.accepted):
            # The membership row stays; there is no compensating delete.
            logger.warning(
                "Invitation %s was resolved elsewhere after user %s joined team %s",
                token, user.id, invitation.team_id,
            )
            return _lost_race(db, token, AcceptResult)
        db.commit()

        logger.info("User %s accepted invitation %s to team %s", user.id, invitation.id, team.id)
        return AcceptResult.ok(
            "Invitation accepted successfully",
            AcceptInvitationData(
                invitation=InvitationSummary.model_validate(invitation).model_copy(
                    update={"status": InvitationStatus.accepted.value}
                ),
                team=TeamSummary.model_validate(team),
                user=UserSummary.model_validate(user),
            ),
        )

    @staticmethod
    def decline_invitation(db: Session, token: str, acting_user_id: int) -> DeclineResult:
        """
        Decline a team invitation on behalf of the invited user.

        Unlike acceptance, the deadline is not checked: a pending invitation
        past ``expires_at`` can still be declined.

        Args:
            db: Database session
            token: Invitation token
            acting_user_id: ID of the user declining the invitation

        Returns:
            DeclineResult with the invitation summary on success
        """
        try:
            return TeamInvitationService._decline(db, token, acting_user_id)
        except Exception as exc:
            return _unexpected(db, "decline_invitation", exc, DeclineResult)

    @staticmethod
    def _decline(db: Session, token: str, acting_user_id: int) -> DeclineResult:
        invitation_repo = TeamInvitationRepository(db)

        invitation = invitation_repo.get_by_token(token)
        if not invitation:
            return DeclineResult.fail(InvitationError.not_found, INVITATION_NOT_FOUND)

        if not invitation.is_pending():
            return DeclineResult.fail(InvitationError.invalid_state, no_longer_valid(invitation.status))

        user = UserRepository(db).get_by_id(acting_user_id)
        if not user:
            return DeclineResult.fail(InvitationError.not_found, USER_NOT_FOUND)

        if user.email != invitation.invited_email:
            return DeclineResult.fail(InvitationError.unauthorized, NOT_AUTHORIZED_DECLINE)

        if not invitation_repo.transition_status(token, InvitationStatus.declined):
            return _lost_race(db, token, DeclineResult)
        db.commit()

        logger.info("User %s declined invitation %s to team %s", user.id, invitation.id, invitation.team_id)
        return DeclineResult.ok(
            "Invitation declined successfully",
            DeclineInvitationData(
                invitation=InvitationSummary.model_validate(invitation).model_copy(
                    update={"status": InvitationStatus.declined.value}
                ),
            ),
        )

    @staticmethod
    def get_invitation_by_token(db: Session, token: str) -> LookupResult:
        """
        Get invitation details by token.

        A pending invitation found past its deadline is expired and reported
        as such. Invitations in any other state are returned as they are.

        Args:
            db: Database session
            token: Invitation token

        Returns:
            LookupResult with the full invitation view on success
        """
        try:
            invitation = TeamInvitationRepository(db).get_by_token(token)
            if not invitation:
                return LookupResult.fail(InvitationError.not_found, INVITATION_NOT_FOUND)

            if invitation.is_pending():
                invitation = TeamInvitationService.check_and_expire(db, invitation)
                if invitation.status == InvitationStatus.expired.value:
                    return LookupResult.fail(InvitationError.expired, INVITATION_EXPIRED)

            return LookupResult.ok(
                "Invitation found",
                InvitationLookupData(invitation=InvitationDetail.model_validate(invitation)),
            )
        except Exception as exc:
            return _unexpected(db, "get_invitation_by_token", exc, LookupResult)

    @staticmethod
    def get_user_invitations(db: Session, email: str) -> ListResult:
        """
        Get every invitation sent to an email address, in any status.

        Args:
            db: Database session
            email: Invitee email (exact match)

        Returns:
            ListResult; an empty list is still a success
        """
        try:
            invitations = TeamInvitationRepository(db).get_by_email(email)
            return ListResult.ok(
                f"Found {len(invitations)} invitation(s)",
                InvitationListData(
                    invitations=[InvitationDetail.model_validate(inv) for inv in invitations]
                ),
            )
        except Exception as exc:
            return _unexpected(db, "get_user_invitations", exc, ListResult)
