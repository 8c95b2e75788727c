"""
Team Invitations API Module.
HTTP adapters for sending, listing, resolving and deleting team invitations.

Every route requires a verified email. Resolution routes call
TeamInvitationService and translate its InvitationResult to a status code;
the ``/service/*`` variants return the result envelope as the response body.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.rate_limit import limiter, TOKEN_LOOKUP_LIMIT
from app.core.security import get_current_verified_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.team_invitation import (
    InvitationDetail,
    InvitationError,
    InvitationListResponse,
    InvitationLookupResponse,
    InvitationResult,
    InvitationSend,
    InvitationSendResponse,
    MessageResponse,
)
from app.services.team_invitation_service import TeamInvitationService
from app.services.team_service import TeamService

router = APIRouter()

_ERROR_STATUS = {
    InvitationError.not_found: status.HTTP_404_NOT_FOUND,
    InvitationError.unauthorized: status.HTTP_403_FORBIDDEN,
    InvitationError.unexpected: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(result: InvitationResult) -> int:
    """HTTP status for an invitation result. Business-rule failures are 400."""
    if result.success:
        return status.HTTP_200_OK
    return _ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST)


def raise_for_failure(result: InvitationResult) -> None:
    if not result.success:
        raise HTTPException(status_code=status_for(result), detail=result.message)


def envelope_response(result: InvitationResult) -> JSONResponse:
    return JSONResponse(status_code=status_for(result), content=result.to_envelope())


@router.post("/send", response_model=InvitationSendResponse, status_code=status.HTTP_201_CREATED)
def send_invitation(
    payload: InvitationSend,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Invite an email address to join a team. Team captains only."""
    invitation = TeamService.send_invitation(
        db, payload.team_id, payload.email, payload.role.value, current_user
    )
    return {
        "message": "Invitation sent successfully",
        "invitation": InvitationDetail.model_validate(invitation),
    }


@router.get("/team/{team_id}", response_model=InvitationListResponse)
def list_team_invitations(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """List every invitation a team has sent. Team captains only."""
    invitations = TeamService.list_team_invitations(db, team_id, current_user)
    return {"invitations": [InvitationDetail.model_validate(inv) for inv in invitations]}


@router.get("/my-invitations", response_model=InvitationListResponse)
def list_my_invitations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """List invitations sent to the current user's email, in any status."""
    result = TeamInvitationService.get_user_invitations(db, current_user.email)
    raise_for_failure(result)
    return {"invitations": result.data.invitations}


@router.get("/token/{token}", response_model=InvitationLookupResponse)
@limiter.limit(TOKEN_LOOKUP_LIMIT)
def get_invitation_by_token(
    request: Request,
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Get invitation details by token. Any business failure is a 404."""
    result = TeamInvitationService.get_invitation_by_token(db, token)
    if not result.success:
        code = (
            status.HTTP_500_INTERNAL_SERVER_ERROR
            if result.error == InvitationError.unexpected
            else status.HTTP_404_NOT_FOUND
        )
        raise HTTPException(status_code=code, detail=result.message)
    return {"invitation": result.data.invitation}


@router.post("/accept/{token}", response_model=MessageResponse)
def accept_invitation(
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Accept an invitation sent to the current user's email."""
    result = TeamInvitationService.accept_invitation(db, token, current_user.id)
    raise_for_failure(result)
    return {"message": result.message}


@router.post("/decline/{token}", response_model=MessageResponse)
def decline_invitation(
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Decline an invitation sent to the current user's email."""
    result = TeamInvitationService.decline_invitation(db, token, current_user.id)
    raise_for_failure(result)
    return {"message": result.message}


@router.delete("/{team_id}/{invitation_id}", response_model=MessageResponse)
def delete_invitation(
    team_id: int,
    invitation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Delete one of the team's invitations. Team captains only."""
    TeamService.delete_invitation(db, team_id, invitation_id, current_user)
    return {"message": "Invitation deleted successfully"}


@router.post("/service/accept/{token}")
def accept_invitation_envelope(
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Accept an invitation; the body is the ``{success, message, data}`` envelope."""
    result = TeamInvitationService.accept_invitation(db, token, current_user.id)
    return envelope_response(result)


@router.post("/service/decline/{token}")
def decline_invitation_envelope(
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Decline an invitation; the body is the ``{success, message, data}`` envelope."""
    result = TeamInvitationService.decline_invitation(db, token, current_user.id)
    return envelope_response(result)


@router.get("/service/token/{token}")
@limiter.limit(TOKEN_LOOKUP_LIMIT)
def get_invitation_envelope(
    request: Request,
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_verified_user),
):
    """Get invitation details; the body is the ``{success, message, data}`` envelope."""
    result = TeamInvitationService.get_invitation_by_token(db, token)
    return envelope_response(result)
