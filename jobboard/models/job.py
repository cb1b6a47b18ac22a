import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime

from jobboard.core.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Job(Base):
    """
    A job posting. Applications point at it by id but are not owned by it:
    deleting a job leaves its applications in place.
    """
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}')>"
