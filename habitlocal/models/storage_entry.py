from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from habitlocal.database import Base


class StorageEntry(Base):
    __tablename__ = "storage_entries"

    key = Column(String(200), primary_key=True)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
