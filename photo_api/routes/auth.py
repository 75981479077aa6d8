import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from photo_api.db import get_db
from photo_api.models.user import User
from photo_api.utils.errors import BadRequest, Conflict, Unauthorized
from photo_api.utils.security import hash_password, verify_password, create_access_token, get_current_user
from photo_api.utils.validation import check_email, check_password, check_required


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


class RegisterRequest(BaseModel):
    username: Optional[str] = Field(None, validate_default=True)
    email: Optional[EmailStr] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def username_rules(cls, v):
        return check_required(v, "Username")

    @field_validator("email", mode="before")
    @classmethod
    def email_rules(cls, v):
        return check_email(v)

    @field_validator("password", mode="before")
    @classmethod
    def password_rules(cls, v):
        return check_password(v)


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def email_rules(cls, v):
        return check_required(v, "Email")

    @field_validator("password", mode="before")
    @classmethod
    def password_rules(cls, v):
        return check_required(v, "Password")


class UserProfile(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    if db.query(User).filter(User.username == payload.username).first():
        raise BadRequest("username already taken")
    if db.query(User).filter(User.email == payload.email).first():
        raise BadRequest("email already registered")

    user = User(username=payload.username, email=payload.email,
                password=hash_password(payload.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("username or email already registered")
    db.refresh(user)
    logger.info("registered user id=%s username=%s", user.id, user.username)
    return user


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email).first()
    if not user or not verify_password(payload.password, user.password):
        raise Unauthorized("invalid email or password")
    return TokenResponse(access_token=create_access_token(user.id, user.email))


@router.get("/me", response_model=UserProfile)
def me(current_user: User = Depends(get_current_user)):
    return current_user
