"""
CRUD operations for Blog model.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from jobboard.models.blog import Blog


def create(db: Session, title: str, content: str, cover_image: Optional[str] = None) -> Blog:
    blog = Blog(title=title, content=content, cover_image=cover_image)

    db.add(blog)
    db.commit()
    db.refresh(blog)

    return blog


def get_by_id(db: Session, blog_id: str) -> Optional[Blog]:
    return db.query(Blog).filter(Blog.id == blog_id).first()


def get_all(db: Session) -> List[Blog]:
    """All blogs, most recent first."""
    return db.query(Blog).order_by(Blog.created_at.desc()).all()


def update(
    db: Session,
    blog: Blog,
    title: str,
    content: str,
    cover_image: Optional[str] = None
) -> Blog:
    """
    Overwrite title and content. cover_image replaces the existing one only
    when a new reference is given; None keeps the current cover.
    """
    blog.title = title
    blog.content = content
    if cover_image is not None:
        blog.cover_image = cover_image

    db.commit()
    db.refresh(blog)

    return blog


def delete(db: Session, blog_id: str) -> bool:
    blog = get_by_id(db, blog_id)
    if not blog:
        return False

    db.delete(blog)
    db.commit()

    return True
