from sqlalchemy import Column, String, Text, DateTime

from jobboard.core.database import Base
from jobboard.models.job import new_id, utcnow


class Image(Base):
    """
    Generic uploaded image. Write-once: there is no update path, only create
    and "latest" lookups ordered by upload_date.
    """
    __tablename__ = "images"

    id = Column(String(36), primary_key=True, default=new_id)
    image_path = Column(Text, nullable=False)  # Storage backend URL
    upload_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    image_type = Column(String, nullable=True)  # e.g. png, jpeg
    public_id = Column(String, nullable=True)   # Storage backend object id

    def __repr__(self):
        return f"<Image(id={self.id}, image_path='{self.image_path}')>"
