from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from photo_api.utils.config import settings


SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    # For SQLite, check_same_thread=False is required only for multi-threaded contexts.
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty database
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(SQLALCHEMY_DATABASE_URL, **_engine_kwargs(SQLALCHEMY_DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# Largest primary key a signed 64-bit INTEGER column can hold
MAX_ID = 2**63 - 1


def parse_id(value: str):
    if not (value.isascii() and value.isdigit()):
        return None
    pk = int(value)
    if pk > MAX_ID:
        return None
    return pk
