"""
Tests for team permission checks.
"""
import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.team import Team, TeamMember, TeamMemberRole
from app.models.user import User
from app.services.permission_service import PermissionService


class TestVerifyTeamMembership:

    @pytest.mark.parametrize("role", list(TeamMemberRole))
    def test_any_member_role_passes(self, db: Session, team: Team, bob: User, role):
        db.add(TeamMember(team_id=team.id, user_id=bob.id, role=role))
        db.commit()

        member = PermissionService.verify_team_membership(db, team.id, bob.id)

        assert member.user_id == bob.id
        assert member.role == role

    def test_non_member_rejected(self, db: Session, team: Team, other_user: User):
        with pytest.raises(HTTPException) as exc_info:
            PermissionService.verify_team_membership(db, team.id, other_user.id)
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Access denied. You are not a member of this team."


class TestVerifyTeamManager:

    def test_creator_passes(self, db: Session, team: Team, captain_user: User):
        assert PermissionService.verify_team_manager(db, team.id, captain_user.id).id == team.id

    @pytest.mark.parametrize("role", [TeamMemberRole.admin, TeamMemberRole.captain])
    def test_manager_roles_pass(self, db: Session, team: Team, bob: User, role):
        db.add(TeamMember(team_id=team.id, user_id=bob.id, role=role))
        db.commit()

        assert PermissionService.verify_team_manager(db, team.id, bob.id).id == team.id

    @pytest.mark.parametrize("role", [TeamMemberRole.player, TeamMemberRole.snack_provider])
    def test_other_roles_rejected(self, db: Session, team: Team, bob: User, role):
        db.add(TeamMember(team_id=team.id, user_id=bob.id, role=role))
        db.commit()

        with pytest.raises(HTTPException) as exc_info:
            PermissionService.verify_team_manager(db, team.id, bob.id, detail="nope")
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "nope"

    def test_missing_team(self, db: Session, bob: User):
        with pytest.raises(HTTPException) as exc_info:
            PermissionService.verify_team_manager(db, 9999, bob.id)
        assert exc_info.value.status_code == 404
