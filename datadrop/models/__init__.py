"""SQLAlchemy ORM models."""

from datadrop.models.base import Base
from datadrop.models.record import DataRecord

__all__ = ["Base", "DataRecord"]
