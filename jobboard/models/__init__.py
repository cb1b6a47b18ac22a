"""
Database models package.
"""

from jobboard.models.job import Job
from jobboard.models.application import Application
from jobboard.models.blog import Blog
from jobboard.models.image import Image

__all__ = ["Job", "Application", "Blog", "Image"]
