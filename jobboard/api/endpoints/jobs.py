import logging
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.exceptions import NotFound
from jobboard.crud import job as job_crud
from jobboard.schemas.job import JobCreateRequest, JobUpdateRequest, JobResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[JobResponse])
def list_jobs(db: Session = Depends(get_db)):
    """
    List all jobs. No filtering or pagination.
    """
    return job_crud.get_all(db)


@router.post("", status_code=201, response_model=JobResponse)
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a new job posting.

    title, description and location are all required and must be non-empty;
    a missing field is rejected with 400 before anything is written.
    """
    new_job = job_crud.create(db, request)
    logger.info(f"Created job {new_job.id}: {new_job.title}")
    return new_job


@router.put("/{job_id}", response_model=JobResponse)
def update_job(job_id: str, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Replace title, description and location of an existing job.
    """
    job = job_crud.update(db, job_id, request)

    if not job:
        raise NotFound("Job not found", {"id": job_id})

    logger.info(f"Updated job {job_id}")
    return job


@router.delete("/{job_id}", status_code=204)
def delete_job(job_id: str, db: Session = Depends(get_db)):
    """
    Delete a job by ID. Applications that reference it are kept.
    """
    deleted = job_crud.delete(db, job_id)

    if not deleted:
        raise NotFound("Job not found", {"id": job_id})

    logger.info(f"Deleted job {job_id}")
    return Response(status_code=204)
