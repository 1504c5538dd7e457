"""Local branch model."""

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from project_hub.database import Base


class LocalBranch(Base):
    """Named pointer to a commit; at most one per project is active."""

    __tablename__ = "local_branches"
    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_local_branches_project_name"),
        Index(
            "uq_local_branches_active",
            "project_id",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_commit_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("local_commits.id")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
