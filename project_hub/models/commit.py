"""Local commit and commit/change association models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from project_hub.database import Base, utcnow


class LocalCommit(Base):
    """Commit in a project's local history. Immutable once written."""

    __tablename__ = "local_commits"
    __table_args__ = (Index("idx_local_commits_project_ts", "project_id", "timestamp"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), default="")
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    parent_commit_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("local_commits.id")
    )

    # Remote push state
    pushed_to_remote: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    remote_commit_sha: Mapped[str | None] = mapped_column(String(40))


class CommitChange(Base):
    """Links a change to the commit that consumed it."""

    __tablename__ = "commit_changes"

    commit_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("local_commits.id", ondelete="CASCADE"), primary_key=True
    )
    # A change belongs to at most one commit
    change_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("changes.id", ondelete="CASCADE"), primary_key=True, unique=True
    )
