import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from app.core.config import settings
from app.models.team_invitation import utcnow
from app.utils.email import send_invitation_email

logger = logging.getLogger(__name__)


def generate_invitation_token() -> str:
    """Generate an opaque invitation token (64 hex characters)."""
    return secrets.token_hex(32)


def invitation_expiry(expires_in_days: Optional[int] = None) -> datetime:
    """Deadline for an invitation created now, as naive UTC."""
    days = settings.INVITATION_EXPIRE_DAYS if expires_in_days is None else expires_in_days
    return utcnow() + timedelta(days=days)


def build_invitation_link(token: str) -> str:
    """
    Build the full invitation link shown to the invitee.

    Args:
        token: Invitation token

    Returns:
        Frontend URL for accepting or declining the invitation
    """
    return f"{settings.FRONTEND_URL}/invitations/{token}"


def notify_invitee(
    email: str, token: str, team_name: str, inviter_name: Optional[str] = None, role: str = "player"
) -> None:
    """
    Email the invitation link. Delivery failures are logged, never raised;
    the invitation row is already committed at this point.
    """
    invite_link = build_invitation_link(token)
    try:
        send_invitation_email(
            to_email=email,
            invite_link=invite_link,
            team_name=team_name,
            inviter_name=inviter_name,
            role=role,
        )
    except Exception:
        logger.exception("Failed to send invitation email to %s (link: %s)", email, invite_link)
