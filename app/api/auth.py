import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm
from app.core.config import settings
from app.core.rate_limit import limiter, LOGIN_LIMIT, REGISTER_LIMIT
from app.core.security import create_access_token, get_current_user
from app.db.session import get_db
from app.models.user import User
from app.repositories import UserRepository
from app.schemas.team_invitation import MessageResponse
from app.schemas.user import Token, UserCreate, UserOut
from app.utils.email import send_verification_email
from app.utils.hash import hash_password, needs_rehash, verify_password

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
def register_user(request: Request, data: UserCreate, db: Session = Depends(get_db)):
    user_repo = UserRepository(db)
    if user_repo.get_by_email(data.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    if user_repo.get_by_username(data.username):
        raise HTTPException(status_code=400, detail="Username already taken")

    user = user_repo.create(
        User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            is_verified=False,
            verification_token=secrets.token_hex(32),
        )
    )
    db.commit()
    db.refresh(user)

    verify_link = f"{settings.FRONTEND_URL}/verify-email/{user.verification_token}"
    try:
        send_verification_email(user.email, user.username, verify_link)
    except Exception:
        logger.exception("Failed to send verification email to %s (link: %s)", user.email, verify_link)

    return user


@router.get("/verify-email/{token}", response_model=MessageResponse)
def verify_email(token: str, db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_verification_token(token)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired verification token",
        )

    user.is_verified = True
    user.verification_token = None
    db.commit()
    logger.info("User %s verified their email", user.id)
    return {"message": "Email verified successfully"}


@router.post("/token", response_model=Token)
@limiter.limit(LOGIN_LIMIT)
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_email(form_data.username)
    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is disabled")

    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(form_data.password)
        db.commit()
        logger.info("Upgraded password hash for user %s", user.id)

    token =create_access_token({"sub": str(user.id), "email": user.email})
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
