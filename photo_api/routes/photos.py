import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session, joinedload

from photo_api.db import get_db, parse_id
from photo_api.models.photo import Photo
from photo_api.models.user import User
from photo_api.routes.auth import UserProfile
from photo_api.utils.errors import NotFound
from photo_api.utils.security import get_current_user
from photo_api.utils.validation import check_optional, check_required, check_url, default_caption


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/photos", tags=["photos"])


class PhotoCreate(BaseModel):
    title: Optional[str] = Field(None, validate_default=True)
    image_url: Optional[str] = Field(None, validate_default=True)
    caption: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_rules(cls, v):
        return check_required(v, "Title")

    @field_validator("image_url", mode="before")
    @classmethod
    def image_url_rules(cls, v):
        return check_url(v)

    @field_validator("caption", mode="before")
    @classmethod
    def caption_rules(cls, v):
        return check_optional(v, "Caption")


class PhotoBase(BaseModel):
    id: int
    title: str
    caption: Optional[str] = None
    image_url: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True)


class PhotoOut(PhotoBase):
    user_id: int = Field(serialization_alias="UserId")


class PhotoDetail(PhotoBase):
    user: UserProfile = Field(serialization_alias="User")


@router.get("", response_model=List[PhotoOut])
def list_photos(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Photo).order_by(Photo.id).all()


@router.post("", response_model=PhotoOut, status_code=status.HTTP_201_CREATED)
def create_photo(
    payload: PhotoCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    caption = payload.caption
    if caption is None:
        caption = default_caption(payload.title, payload.image_url)

    photo = Photo(
        title=payload.title,
        caption=caption,
        image_url=payload.image_url,
        user_id=current_user.id,
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    logger.info("user id=%s created photo id=%s", current_user.id, photo.id)
    return photo


@router.get("/{photo_id}", response_model=PhotoDetail)
def get_photo(
    photo_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    pk = parse_id(photo_id)
    if pk is None:
        raise NotFound("data not found")

    photo = (
        db.query(Photo)
        .options(joinedload(Photo.user))
        .filter(Photo.id == pk)
        .first()
    )
    if photo is None or photo.user is None:
        raise NotFound("data not found")
    return photo
