from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from app.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserOut(BaseModel):
    id: int
    username: str
    email: EmailStr
    is_verified: bool
    role: Optional[UserRole] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
