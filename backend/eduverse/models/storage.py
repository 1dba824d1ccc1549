"""
Storage model for EduVerse.

Defines the StoredValue table that backs the durable key-value store.
Each row holds one serialized collection.
"""

from datetime import datetime
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from eduverse.core.database import Base


class StoredValue(Base):
    """
    One persisted key and its JSON text.
    """
    __tablename__ = "stored_values"

    # Primary key
    key: Mapped[str] = mapped_column(String(255), primary_key=True)

    # Serialized value
    value: Mapped[str] = mapped_column(Text, nullable=False)

    # Timestamps
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<StoredValue(key='{self.key}', size={len(self.value)})>"
