"""
CRUD operations for Application model.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from jobboard.models.application import Application


def create(
    db: Session,
    job_id: str,
    name: str,
    email: str,
    phone: str,
    resume_url: str,
    portfolio: Optional[str] = None
) -> Application:
    """
    Persist an application. The caller must already hold a resume_url;
    job_id is stored as given, without checking that the job exists.
    """
    application = Application(
        job_id=job_id,
        name=name,
        email=email,
        phone=phone,
        portfolio=portfolio,
        resume_url=resume_url
    )

    db.add(application)
    db.commit()
    db.refresh(application)

    return application


def get_by_id(db: Session, application_id: str) -> Optional[Application]:
    return db.query(Application).filter(Application.id == application_id).first()


def get_all(db: Session) -> List[Application]:
    """All applications with their job eagerly joined, oldest first."""
    return db.query(Application).order_by(Application.created_at).all()


def delete(db: Session, application_id: str) -> bool:
    """
    Delete an application record. The stored resume file is left untouched.

    Returns:
        True if deleted, False if not found
    """
    application = get_by_id(db, application_id)
    if not application:
        return False

    db.delete(application)
    db.commit()

    return True
