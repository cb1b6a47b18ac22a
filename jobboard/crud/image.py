"""
CRUD operations for Image model. Images are write-once.
"""

from typing import Optional
from sqlalchemy.orm import Session
from jobboard.models.image import Image


def create(
    db: Session,
    image_path: str,
    image_type: Optional[str] = None,
    public_id: Optional[str] = None
) -> Image:
    image = Image(image_path=image_path, image_type=image_type, public_id=public_id)

    db.add(image)
    db.commit()
    db.refresh(image)

    return image


def get_latest(db: Session) -> Optional[Image]:
    """Image with the most recent upload_date, or None if there are none."""
    return db.query(Image).order_by(Image.upload_date.desc()).first()
