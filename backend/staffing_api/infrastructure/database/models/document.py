"""SQLAlchemy ORM model for one stored document."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from staffing_api.infrastructure.database.base import Base


class DocumentModel(Base):
    """ORM model mapped to the 'documents' table.

    One row per ``<collection>/<key>`` document. ``id`` only records
    insertion order so collection scans come back in the order documents
    were created. ``version`` is bumped on every write and checked by
    UPDATE and DELETE statements, so a stale read loses instead of
    overwriting a newer row.
    """

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    key: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[Any] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("collection", "key", name="uq_documents_collection_key"),
    )
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<DocumentModel(collection='{self.collection}', key='{self.key}')>"
