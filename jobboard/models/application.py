"""
Application database model.

An applicant's submission for a job posting. The resume itself lives in the
storage backend; only its URL is kept here.
"""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import relationship

from jobboard.core.database import Base
from jobboard.models.job import new_id, utcnow


class Application(Base):
    __tablename__ = "applications"

    id = Column(String(36), primary_key=True, default=new_id)

    # Plain reference, no foreign key: the job may be deleted later
    job_id = Column(String(36), nullable=False, index=True)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    portfolio = Column(String, nullable=True)

    # File Storage
    resume_url = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Resolves to None when the job no longer exists
    job = relationship(
        "Job",
        primaryjoin="foreign(Application.job_id) == Job.id",
        viewonly=True,
        lazy="joined"
    )

    def __repr__(self):
        return f"<Application(id={self.id}, job_id={self.job_id}, email='{self.email}')>"
