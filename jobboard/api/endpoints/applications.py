"""
API endpoints for job applications.

Handles resume uploads, application listing with the job expanded, and
deletion.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from jobboard.core.database import get_db
from jobboard.core.deps import get_resume_pipeline
from jobboard.core.exceptions import NotFound, StoreUnavailable, ValidationError
from jobboard.crud import application as application_crud
from jobboard.schemas.application import ApplicationResponse, ApplicationSubmitResponse
from jobboard.services.upload_pipeline import UploadPipeline

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=ApplicationSubmitResponse)
async def submit_application(
    request: Request,
    job_id: str = Form(..., alias="jobId", min_length=1),
    name: str = Form(..., min_length=1),
    email: str = Form(..., min_length=1),
    phone: str = Form(..., min_length=1),
    portfolio: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    pipeline: UploadPipeline = Depends(get_resume_pipeline)
):
    """
    Submit an application for a job posting.

    Flow:
    1. Form fields are validated before anything is uploaded
    2. Resume (PDF, DOC, DOCX) is sent to the storage backend
    3. Application is saved with the returned resume URL
    4. If the save fails, the uploaded resume is deleted again

    jobId is not checked against existing jobs; an application for a
    deleted job is still accepted.

    Raises:
        ValidationError 400: missing field, missing/empty resume, wrong file type
        UploadError 500: storage backend failed; nothing is saved
        StoreUnavailable 500: database write failed; upload is discarded
    """
    if resume is None or not resume.filename:
        raise ValidationError("No file uploaded", {"field": "resume"})

    stored = await pipeline.run(resume, request)

    try:
        application = await run_in_threadpool(
            application_crud.create,
            db,
            job_id=job_id,
            name=name,
            email=email,
            phone=phone,
            portfolio=portfolio or None,
            resume_url=stored.url
        )
    except SQLAlchemyError as e:
        await run_in_threadpool(db.rollback)
        await run_in_threadpool(pipeline.discard, stored)
        raise StoreUnavailable("Failed to submit application", {"reason": e.__class__.__name__}) from e

    logger.info(f"Created application {application.id} for job {job_id}")

    return ApplicationSubmitResponse(
        message="Application submitted successfully",
        id=application.id,
        resume_url=application.resume_url
    )


@router.get("", response_model=list[ApplicationResponse])
def list_applications(db: Session = Depends(get_db)):
    """
    List all applications, each with its job embedded under `job`
    (null when the job has been deleted).
    """
    return application_crud.get_all(db)


@router.delete("/{application_id}", status_code=204)
def delete_application(application_id: str, db: Session = Depends(get_db)):
    """
    Delete an application. The stored resume file is not removed.
    """
    deleted = application_crud.delete(db, application_id)

    if not deleted:
        raise NotFound("Application not found", {"id": application_id})

    logger.info(f"Deleted application {application_id}")
    return Response(status_code=204)
