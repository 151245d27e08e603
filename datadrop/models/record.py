"""ORM model for rows loaded from uploaded CSV/TSV files."""

from sqlalchemy import Column, Integer, String, Text

from datadrop.models.base import Base


class DataRecord(Base):
    """
    One stored row of the ``data`` table, keyed by the id taken from the file.

    The id is supplied by the upload, never generated; a duplicate id is
    rejected by the primary key and reported as a per-row failure.
    """

    __tablename__ = "data"

    post_id = Column("postId", Integer, nullable=True)
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    body = Column(Text, nullable=False, default="")
