"""Team repository for database operations."""

from typing import Optional, List
from sqlalchemy.orm import Session, joinedload

from app.repositories.base_repository import BaseRepository
from app.models.team import Team, TeamMember, TeamMemberRole


class TeamRepository(BaseRepository[Team]):
    """Repository for Team model operations."""

    def __init__(self, db: Session):
        super().__init__(Team, db)

    def get_by_name_and_creator(self, name: str, created_by: int) -> Optional[Team]:
        """
        Get team by name and creator.

        Args:
            name: Team name
            created_by: Creator user ID

        Returns:
            Team or None if not found
        """
        return (
            self.db.query(Team)
            .filter(Team.name == name, Team.created_by == created_by)
            .first()
        )

    def get_user_teams(self, user_id: int, skip: int = 0, limit: int = 100) -> List[Team]:
        """
        Get all teams a user is a member of.

        Args:
            user_id: User ID
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of teams
        """
        return (
            self.db.query(Team)
            .join(TeamMember)
            .filter(TeamMember.user_id == user_id)
            .order_by(Team.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_with_members(self, team_id: int) -> Optional[Team]:
        """
        Get team with members eagerly loaded.

        Args:
            team_id: Team ID

        Returns:
            Team with members or None if not found
        """
        return (
            self.db.query(Team)
            .options(joinedload(Team.members))
            .filter(Team.id == team_id)
            .first()
        )


class TeamMemberRepository(BaseRepository[TeamMember]):
    """Repository for TeamMember model operations."""

    def __init__(self, db: Session):
        super().__init__(TeamMember, db)

    def get_by_team_and_user(
        self, team_id: int, user_id: int
    ) -> Optional[TeamMember]:
        """
        Get team member by team and user ID.

        Args:
            team_id: Team ID
            user_id: User ID

        Returns:
            TeamMember or None if not found
        """
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.team_id == team_id, TeamMember.user_id == user_id)
            .first()
        )

    def is_member(self, team_id: int, user_id: int) -> bool:
        """Check if user is a member of the team."""
        return self.get_by_team_and_user(team_id, user_id) is not None

    def add_member(
        self, team_id: int, user_id: int, role: TeamMemberRole
    ) -> TeamMember:
        """
        Insert a membership row.

        Raises:
            sqlalchemy.exc.IntegrityError: If (team_id, user_id) already exists
        """
        return self.create(TeamMember(team_id=team_id, user_id=user_id, role=role))

    def has_role(
        self, team_id: int, user_id: int, required_roles: List[TeamMemberRole]
    ) -> bool:
        """
        Check if user has one of the required roles in the team.

        Args:
            team_id: Team ID
            user_id: User ID
            required_roles: List of acceptable roles

        Returns:
            True if user has one of the required roles, False otherwise
        """
        member = self.get_by_team_and_user(team_id, user_id)
        return member is not None and member.role in required_roles

    def get_team_members_with_users(self, team_id: int) -> List[TeamMember]:
        """Get team members with user data eagerly loaded."""
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.team_id == team_id)
            .options(joinedload(TeamMember.user))
            .order_by(TeamMember.id)
            .all()
        )
