import os

# Must be set before the application modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from photo_api.db import Base, SessionLocal, engine  # noqa: E402
from photo_api.main import app  # noqa: E402
from photo_api.models.photo import Photo  # noqa: E402
from photo_api.models.user import User  # noqa: E402
from photo_api.utils.security import create_access_token, hash_password  # noqa: E402


USER = {"username": "mimam", "email": "mimam@mail.com", "password": "password"}

DEFAULT_PHOTO = {
    "title": "Photo 1",
    "caption": "Photo 1 caption",
    "image_url": "http://image.com/photo.png",
}


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seeded(db):
    user = User(username=USER["username"], email=USER["email"],
                password=hash_password(USER["password"]))
    db.add(user)
    db.commit()
    db.refresh(user)
    photo = Photo(user_id=user.id, **DEFAULT_PHOTO)
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return {"user": user, "photo": photo}


@pytest.fixture
def auth_headers(seeded):
    token = create_access_token(seeded["user"].id, seeded["user"].email)
    return {"Authorization": f"Bearer {token}"}
