import html
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, html_content: str, text_content: Optional[str] = None):
    """
    Send an email via SMTP.

    When no SMTP host is configured the message is logged instead of sent.

    Args:
        to_email: Recipient email address
        subject: Email subject
        html_content: HTML content of the email
        text_content: Plain text content (optional, fallback)
    """
    if not settings.SMTP_HOST:
        logger.info("SMTP disabled, not sending %r to %s:\n%s", subject, to_email, text_content or html_content)
        return

    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL}>"
    msg['To'] = to_email

    if text_content:
        msg.attach(MIMEText(text_content, 'plain'))
    msg.attach(MIMEText(html_content, 'html'))

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.ehlo()
        server.starttls()
        server.ehlo()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.sendmail(settings.SMTP_FROM_EMAIL, to_email, msg.as_string())
    logger.info("Email %r sent to %s", subject, to_email)


def send_invitation_email(
    to_email: str,
    invite_link: str,
    team_name: str,
    inviter_name: Optional[str] = None,
    role: str = "player",
):
    """
    Send a team invitation email.

    Args:
        to_email: Recipient email address
        invite_link: Full invitation acceptance link
        team_name: Name of the team
        inviter_name: Username of the person who sent the invitation
        role: Role the invitee will get on the team
    """
    subject = f"You've been invited to join {team_name}"
    intro = f"{inviter_name} has invited you" if inviter_name else "You've been invited"
    days = settings.INVITATION_EXPIRE_DAYS

    # Team and user names are user input
    safe_intro = html.escape(intro)
    safe_team = html.escape(team_name)
    safe_role = html.escape(role)
    html_content = f"""
    <html>
    <body style="font-family: Arial, sans-serif;">
        <h2>You've been invited!</h2>
        <p>{safe_intro} to join <strong>{safe_team}</strong> as a {safe_role}.</p>
        <p><a href="{invite_link}">Accept Invitation</a></p>
        <p>Or copy and paste this link into your browser:<br>{invite_link}</p>
        <p><strong>Note:</strong> This invitation will expire in {days} days.</p>
    </body>
    </html>
    """

    text_content = f"""
    {intro} to join {team_name} as a {role}.

    Open the link below to accept or decline the invitation:
    {invite_link}

    This invitation will expire in {days} days.
    """

    send_email(to_email, subject, html_content, text_content)


def send_verification_email(to_email: str, username: str, verify_link: str):
    """Send the email-address verification link to a newly registered user."""
    subject = "Verify your email address"
    html_content = f"""
    <html>
    <body style="font-family: Arial, sans-serif;">
        <p>Hi {html.escape(username)},</p>
        <p>Confirm your email address to start joining teams:</p>
        <p><a href="{verify_link}">Verify email</a></p>
    </body>
    </html>
    """
    text_content = f"Hi {username},\n\nConfirm your email address:\n{verify_link}\n"
    send_email(to_email, subject, html_content, text_content)
