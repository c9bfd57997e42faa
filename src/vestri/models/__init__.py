"""SQLAlchemy ORM models."""

from vestri.models.base import Base
from vestri.models.showtime import Showtime

__all__ = ["Base", "Showtime"]
