import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Base class for all table entities"""
    pass
