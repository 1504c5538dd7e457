"""Change and change/file models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from project_hub.database import Base, utcnow


class Change(Base):
    """A recorded modification, pending until a commit consumes it."""

    __tablename__ = "changes"
    __table_args__ = (Index("idx_changes_project_committed", "project_id", "committed"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    # add | modify | delete | free text
    kind: Mapped[str] = mapped_column("type", String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    committed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ChangeFile(Base):
    """File touched by a change."""

    __tablename__ = "change_files"

    change_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("changes.id", ondelete="CASCADE"), primary_key=True
    )
    file_path: Mapped[str] = mapped_column(String(1000), primary_key=True)
