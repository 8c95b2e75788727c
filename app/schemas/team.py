from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
import re

from app.models.team import TeamMemberRole


# User info for team member details
class MemberUserInfo(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)

    @validator('name')
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Team name cannot be empty')
        if not re.match(r'^[a-zA-Z0-9\s\-_\']+$', v):
            raise ValueError('Team name can only contain letters, numbers, spaces, hyphens, apostrophes, and underscores')
        return v

    @validator('description')
    def validate_description(cls, v):
        if v is not None:
            v = v.strip()
            dangerous_patterns = [r'<script', r'javascript:', r'onerror=', r'onclick=']
            for pattern in dangerous_patterns:
                if re.search(pattern, v, re.IGNORECASE):
                    raise ValueError('Description contains invalid content')
        return v


class TeamMemberOut(BaseModel):
    id: int
    team_id: int
    user_id: int
    role: TeamMemberRole
    created_at: Optional[datetime] = None
    user: Optional[MemberUserInfo] = None

    class Config:
        from_attributes = True


class TeamOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None
    members: List[TeamMemberOut] = []

    class Config:
        from_attributes = True


class TeamListOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
