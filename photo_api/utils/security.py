import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from photo_api.db import get_db, parse_id
from photo_api.models.user import User
from photo_api.utils.config import settings
from photo_api.utils.errors import Unauthorized


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # stored value is not a recognised hash
        return False


def create_access_token(user_id: int, email: str, expires_minutes: Optional[int] = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "exp": now + timedelta(minutes=expires_minutes),
        "iat": now,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
    sub = payload["sub"]
    user_id = parse_id(sub) if isinstance(sub, str) else None
    if user_id is None:
        raise jwt.InvalidTokenError("subject is not a user id")
    payload["sub"] = user_id
    return payload


def _bearer_token(authorization: str) -> str:
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthorized("invalid token")
    return token


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    if authorization is None:
        logger.info("rejected request without Authorization header")
        raise Unauthorized("unauthorized")

    token = _bearer_token(authorization)
    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError as e:
        logger.info("rejected token: %s", e)
        raise Unauthorized("invalid token")

    user = db.get(User, payload["sub"])
    if user is None:
        logger.warning("token references unknown user id=%s", payload["sub"])
        raise Unauthorized("unauthorized")
    return user
