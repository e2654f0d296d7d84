# backend/melipro/models/blob.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from .base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StoredBlob(Base):
    __tablename__ = "blobs"
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)  # JSON 文字列 {"version": N, "records": [...]}
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
