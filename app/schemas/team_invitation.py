from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from app.models.team_invitation import InvitedRole


DataT = TypeVar("DataT")


class InvitationError(str, Enum):
    """Why an invitation operation failed."""
    not_found = "not_found"
    invalid_state = "invalid_state"
    expired = "expired"
    unauthorized = "unauthorized"
    conflict = "conflict"
    unexpected = "unexpected"


class InvitationSend(BaseModel):
    """Schema for sending a team invitation."""
    team_id: int = Field(..., ge=1, alias="teamId")
    email: EmailStr
    role: InvitedRole

    class Config:
        populate_by_name = True


class InvitationSummary(BaseModel):
    """Invitation view returned after accepting or declining (no invitee email)."""
    id: int
    team_id: int
    team_name: Optional[str] = None
    invited_role: str
    status: str
    expires_at: datetime
    created_at: Optional[datetime] = None
    invited_by_username: Optional[str] = None

    class Config:
        from_attributes = True


class InvitationDetail(InvitationSummary):
    """Full invitation view for lookups and listings."""
    invited_email: str


class TeamSummary(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class AcceptInvitationData(BaseModel):
    invitation: InvitationSummary
    team: TeamSummary
    user: UserSummary


class DeclineInvitationData(BaseModel):
    invitation: InvitationSummary


class InvitationLookupData(BaseModel):
    invitation: InvitationDetail


class InvitationListData(BaseModel):
    invitations: List[InvitationDetail]


class InvitationResult(BaseModel, Generic[DataT]):
    """
    Outcome of an invitation operation.

    ``error`` is None exactly when ``success`` is True. ``data`` carries the
    operation-specific payload on success.
    """
    success: bool
    message: str
    error: Optional[InvitationError] = None
    data: Optional[DataT] = None

    @classmethod
    def ok(cls, message: str, data: Optional[DataT] = None):
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: InvitationError, message: str):
        return cls(success=False, message=message, error=error)

    def to_envelope(self) -> Dict[str, Any]:
        """Transport shape: ``{success, message, data}``."""
        return self.model_dump(mode="json", exclude={"error"})


class InvitationSendResponse(BaseModel):
    """Response after sending an invitation."""
    message: str
    invitation: InvitationDetail


class InvitationListResponse(BaseModel):
    invitations: List[InvitationDetail]


class InvitationLookupResponse(BaseModel):
    invitation: InvitationDetail


class MessageResponse(BaseModel):
    message: str
