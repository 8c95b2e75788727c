"""
Pytest configuration and fixtures for testing the game scheduler backend.
"""
import sys
import os
from datetime import timedelta
from typing import Callable, Dict, Generator, Optional

# Settings are read at import time; tests never touch a real database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add the parent directory to the path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.main import app
from app.db.session import Base, get_db
from app.models.team import Team, TeamMember, TeamMemberRole
from app.models.team_invitation import TeamInvitation, utcnow
from app.models.user import User
from app.utils.hash import hash_password
from app.utils.invitation import generate_invitation_token


TEST_PASSWORD = "TestPassword123!"

# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _create_user(db: Session, username: str, email: str, is_verified: bool = True) -> User:
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        is_verified=is_verified,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Create a fresh database for each test function.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Reset rate limiter for each test to avoid rate limit issues in tests
    app.state.limiter.reset()

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def captain_user(db: Session) -> User:
    """Verified user who creates and captains the test team."""
    return _create_user(db, "alice", "alice@x.com")


@pytest.fixture
def bob(db: Session) -> User:
    """Verified user the test invitations are addressed to."""
    return _create_user(db, "bob", "bob@x.com")


@pytest.fixture
def other_user(db: Session) -> User:
    """Verified user with no relation to the test team."""
    return _create_user(db, "carol", "carol@x.com")


@pytest.fixture
def unverified_user(db: Session) -> User:
    return _create_user(db, "dave", "dave@x.com", is_verified=False)


@pytest.fixture
def team(db: Session, captain_user: User) -> Team:
    """Team created by the captain, with the captain as its only member."""
    team = Team(name="Rovers", description="Sunday league", created_by=captain_user.id)
    db.add(team)
    db.commit()
    db.refresh(team)
    db.add(TeamMember(team_id=team.id, user_id=captain_user.id, role=TeamMemberRole.captain))
    db.commit()
    return team


@pytest.fixture
def make_invitation(db: Session, team: Team, captain_user: User) -> Callable[..., TeamInvitation]:
    """
    Factory for invitations to the test team.

    ``expires_in`` is relative to now; pass a negative delta for a stale one.
    """
    def _make(
        email: str = "bob@x.com",
        role: str = "player",
        status: str = "pending",
        expires_in: timedelta = timedelta(hours=1),
        token: Optional[str] = None,
        team_id: Optional[int] = None,
    ) -> TeamInvitation:
        invitation = TeamInvitation(
            team_id=team_id or team.id,
            invited_by_user_id=captain_user.id,
            invited_email=email,
            invited_role=role,
            token=token or generate_invitation_token(),
            status=status,
            expires_at=utcnow() + expires_in,
        )
        db.add(invitation)
        db.commit()
        db.refresh(invitation)
        return invitation

    return _make


def login(client: TestClient, user: User) -> Dict[str, str]:
    """Log a user in through the API and return bearer headers."""
    response = client.post(
        "/auth/token",
        data={"username": user.email, "password": TEST_PASSWORD},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def captain_headers(client: TestClient, captain_user: User) -> Dict[str, str]:
    return login(client, captain_user)


@pytest.fixture
def bob_headers(client: TestClient, bob: User) -> Dict[str, str]:
    return login(client, bob)


@pytest.fixture
def other_headers(client: TestClient, other_user: User) -> Dict[str, str]:
    return login(client, other_user)


@pytest.fixture
def auth_headers(client: TestClient) -> Callable[[User], Dict[str, str]]:
    """Bearer headers for any user, e.g. ``auth_headers(unverified_user)``."""
    def _headers(user: User) -> Dict[str, str]:
        return login(client, user)

    return _headers
