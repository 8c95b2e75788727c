from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.session import Base
import enum
from datetime import datetime, timezone
from typing import Optional


class InvitationStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    expired = "expired"


class InvitedRole(str, enum.Enum):
    captain = "captain"
    player = "player"


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TeamInvitation(Base):
    __tablename__ = "team_invitations"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    invited_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    invited_email = Column(String(256), nullable=False, index=True)
    invited_role = Column(
        Enum(*[r.value for r in InvitedRole], name="invitedrole"),
        nullable=False,
    )
    token = Column(String(64), nullable=False, unique=True, index=True)
    status = Column(
        Enum(*[s.value for s in InvitationStatus], name="invitationstatus"),
        nullable=False,
        default=InvitationStatus.pending.value,
        server_default=InvitationStatus.pending.value,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    team = relationship("Team", back_populates="invitations")
    inviter = relationship("User", foreign_keys=[invited_by_user_id])

    @property
    def team_name(self) -> Optional[str]:
        return self.team.name if self.team else None

    @property
    def invited_by_username(self) -> Optional[str]:
        return self.inviter.username if self.inviter else None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the acceptance deadline has passed."""
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at < now

    def is_pending(self) -> bool:
        return self.status == InvitationStatus.pending.value
