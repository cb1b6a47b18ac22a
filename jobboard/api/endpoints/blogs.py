import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from jobboard.core.database import get_db
from jobboard.core.deps import get_blog_cover_pipeline
from jobboard.core.exceptions import NotFound, StoreUnavailable
from jobboard.core.storage import StoredFile
from jobboard.crud import blog as blog_crud
from jobboard.schemas.blog import BlogResponse
from jobboard.services.upload_pipeline import UploadPipeline

router = APIRouter(prefix="/blogs", tags=["Blogs"])
logger = logging.getLogger(__name__)


def _has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


@router.get("", response_model=list[BlogResponse])
def list_blogs(db: Session = Depends(get_db)):
    """List all blogs, most recent first."""
    return blog_crud.get_all(db)


@router.get("/{blog_id}", response_model=BlogResponse)
def get_blog(blog_id: str, db: Session = Depends(get_db)):
    blog = blog_crud.get_by_id(db, blog_id)

    if not blog:
        raise NotFound("Blog not found", {"id": blog_id})

    return blog


@router.post("", status_code=201, response_model=BlogResponse)
async def create_blog(
    request: Request,
    title: str = Form(..., min_length=1),
    content: str = Form(..., min_length=1),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    db: Session = Depends(get_db),
    pipeline: UploadPipeline = Depends(get_blog_cover_pipeline)
):
    """
    Create a blog post. An optional cover image is uploaded first; if that
    upload fails the post is not created.
    """
    stored: Optional[StoredFile] = None
    if _has_file(cover_image):
        stored = await pipeline.run(cover_image, request)

    try:
        blog = await run_in_threadpool(
            blog_crud.create, db, title, content, stored.url if stored else None
        )
    except SQLAlchemyError as e:
        await run_in_threadpool(db.rollback)
        if stored:
            await run_in_threadpool(pipeline.discard, stored)
        raise StoreUnavailable("Failed to create blog", {"reason": e.__class__.__name__}) from e

    logger.info(f"Created blog {blog.id}: {blog.title}")
    return blog


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: str,
    request: Request,
    title: str = Form(..., min_length=1),
    content: str = Form(..., min_length=1),
    cover_image: Optional[UploadFile] = File(None, alias="coverImage"),
    db: Session = Depends(get_db),
    pipeline: UploadPipeline = Depends(get_blog_cover_pipeline)
):
    """
    Update title and content. A new cover image replaces the current one;
    without a file the existing cover is kept.
    """
    blog = await run_in_threadpool(blog_crud.get_by_id, db, blog_id)
    if not blog:
        raise NotFound("Blog not found", {"id": blog_id})

    stored: Optional[StoredFile] = None
    if _has_file(cover_image):
        stored = await pipeline.run(cover_image, request)

    try:
        blog = await run_in_threadpool(
            blog_crud.update, db, blog, title, content, stored.url if stored else None
        )
    except SQLAlchemyError as e:
        await run_in_threadpool(db.rollback)
        if stored:
            await run_in_threadpool(pipeline.discard, stored)
        raise StoreUnavailable("Failed to update blog", {"reason": e.__class__.__name__}) from e

    logger.info(f"Updated blog {blog_id}" + (f" with new cover {stored.public_id}" if stored else ""))
    return blog


@router.delete("/{blog_id}", status_code=204)
def delete_blog(blog_id: str, db: Session = Depends(get_db)):
    deleted = blog_crud.delete(db, blog_id)

    if not deleted:
        raise NotFound("Blog not found", {"id": blog_id})

    logger.info(f"Deleted blog {blog_id}")
    return Response(status_code=204)
