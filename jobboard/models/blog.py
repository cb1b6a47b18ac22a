from sqlalchemy import Column, String, Text, DateTime

from jobboard.core.database import Base
from jobboard.models.job import new_id, utcnow


class Blog(Base):
    """Blog post with an optional cover image URL"""
    __tablename__ = "blogs"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    cover_image = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    def __repr__(self):
        return f"<Blog(id={self.id}, title='{self.title}')>"
