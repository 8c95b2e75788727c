"""
Tests for TeamInvitationRepository.
"""
from datetime import timedelta

from sqlalchemy.orm import Session

from app.models.team import Team
from app.models.team_invitation import InvitationStatus, utcnow
from app.models.user import User
from app.repositories.team_invitation_repository import TeamInvitationRepository


class TestInvitationQueries:

    def test_get_by_token_loads_team_and_inviter(self, db: Session, team: Team, make_invitation):
        invitation = make_invitation(token="abc123")
        db.expire_all()

        found = TeamInvitationRepository(db).get_by_token("abc123")

        assert found.id == invitation.id
        assert found.team_name == "Rovers"
        assert found.invited_by_username == "alice"

    def test_get_by_token_missing(self, db: Session):
        assert TeamInvitationRepository(db).get_by_token("nope") is None

    def test_get_by_email_newest_first(self, db: Session, make_invitation):
        first = make_invitation()
        second = make_invitation(status="declined")

        invitations = TeamInvitationRepository(db).get_by_email("bob@x.com")

        # Same-second created_at falls back to id order
        assert [inv.id for inv in invitations] == [second.id, first.id]

    def test_get_pending_for_team_ignores_resolved(self, db: Session, team: Team, make_invitation):
        make_invitation(status="declined")
        repo = TeamInvitationRepository(db)

        assert repo.get_pending_for_team(team.id, "bob@x.com") is None

        pending = make_invitation()
        assert repo.get_pending_for_team(team.id, "bob@x.com").id == pending.id

    def test_create_invitation_is_pending(self, db: Session, team: Team, captain_user: User):
        repo = TeamInvitationRepository(db)

        invitation = repo.create_invitation(
            team_id=team.id,
            invited_by_user_id=captain_user.id,
            invited_email="new@x.com",
            invited_role="player",
            token="tok-1",
            expires_at=utcnow() + timedelta(days=7),
        )
        db.commit()

        assert invitation.id is not None
        assert invitation.status == "pending"
        assert repo.get_by_token("tok-1").invited_email == "new@x.com"


class TestStatusWrites:

    def test_transition_from_pending(self, db: Session, make_invitation):
        invitation = make_invitation()
        repo = TeamInvitationRepository(db)

        assert repo.transition_status(invitation.token, InvitationStatus.accepted) is True

        db.refresh(invitation)
        assert invitation.status == "accepted"

    def test_transition_only_once(self, db: Session, make_invitation):
        """A second compare-and-swap from pending loses."""
        invitation = make_invitation()
        repo = TeamInvitationRepository(db)

        assert repo.transition_status(invitation.token, InvitationStatus.accepted) is True
        assert repo.transition_status(invitation.token, InvitationStatus.declined) is False

        db.refresh(invitation)
        assert invitation.status == "accepted"

    def test_transition_unknown_token(self, db: Session):
        repo = TeamInvitationRepository(db)

        assert repo.transition_status("nope", InvitationStatus.expired) is False

    def test_transition_with_explicit_expected_status(self, db: Session, make_invitation):
        invitation = make_invitation(status="declined")
        repo = TeamInvitationRepository(db)

        assert repo.transition_status(
            invitation.token, InvitationStatus.expired, expected_status=InvitationStatus.declined
        ) is True

    def test_update_status_is_unconditional(self, db: Session, make_invitation):
        invitation = make_invitation(status="accepted")

        TeamInvitationRepository(db).update_status(invitation.token, InvitationStatus.expired)

        db.refresh(invitation)
        assert invitation.status == "expired"
