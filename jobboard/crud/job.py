"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from jobboard.models.job import Job
from jobboard.schemas.job import JobCreateRequest, JobUpdateRequest


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id
    """
    db_job = Job(
        title=job_data.title,
        description=job_data.description,
        location=job_data.location
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: str) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def get_all(db: Session) -> List[Job]:
    """All jobs, oldest first. No filtering or pagination."""
    return db.query(Job).order_by(Job.created_at).all()


def update(db: Session, job_id: str, job_data: JobUpdateRequest) -> Optional[Job]:
    """
    Overwrite title, description and location of a job.

    Returns:
        Updated Job instance if found, None otherwise
    """
    job = get_by_id(db, job_id)
    if not job:
        return None

    job.title = job_data.title
    job.description = job_data.description
    job.location = job_data.location

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job_id: str) -> bool:
    """
    Delete a job by ID.

    Returns:
        True if deleted, False if not found
    """
    job = get_by_id(db, job_id)
    if not job:
        return False

    db.delete(job)
    db.commit()

    return True
