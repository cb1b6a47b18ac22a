import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Request, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from jobboard.core.database import get_db
from jobboard.core.deps import get_image_pipeline
from jobboard.core.exceptions import NotFound, StoreUnavailable, ValidationError
from jobboard.crud import image as image_crud
from jobboard.schemas.image import ImageResponse, ImageUploadResponse, LatestImageResponse
from jobboard.services.upload_pipeline import UploadPipeline

router = APIRouter(prefix="/images", tags=["Images"])
logger = logging.getLogger(__name__)


@router.post("/upload", status_code=201, response_model=ImageUploadResponse)
async def upload_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    pipeline: UploadPipeline = Depends(get_image_pipeline)
):
    """
    Upload a standalone image and record its URL with the upload time.
    """
    if image is None or not image.filename:
        raise ValidationError("No file uploaded", {"field": "image"})

    stored = await pipeline.run(image, request)
    image_type = stored.content_type.split("/")[-1] if stored.content_type else None

    try:
        record = await run_in_threadpool(
            image_crud.create,
            db,
            image_path=stored.url,
            image_type=image_type,
            public_id=stored.public_id
        )
    except SQLAlchemyError as e:
        await run_in_threadpool(db.rollback)
        await run_in_threadpool(pipeline.discard, stored)
        raise StoreUnavailable("Error saving image to database", {"reason": e.__class__.__name__}) from e

    logger.info(f"Saved image {record.id} at {record.image_path}")

    return ImageUploadResponse(
        message="Image uploaded successfully!",
        image_path=record.image_path,
        image=ImageResponse.model_validate(record)
    )


@router.get("/latest", response_model=LatestImageResponse)
def latest_image(db: Session = Depends(get_db)):
    """Most recently uploaded image."""
    record = image_crud.get_latest(db)

    if not record:
        raise NotFound("No images found")

    return LatestImageResponse(image_path=record.image_path, image=ImageResponse.model_validate(record))
