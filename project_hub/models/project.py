"""Project model."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from project_hub.database import Base


class Project(Base):
    """Tracked project - written by the companion tracker, read-only here."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(50))
    path: Mapped[str | None] = mapped_column(String(1000))

    # Remote repository reference
    repository_owner: Mapped[str | None] = mapped_column(String(255))
    repository_name: Mapped[str | None] = mapped_column(String(255))

    status: Mapped[str | None] = mapped_column(String(50))
    last_commit: Mapped[str | None] = mapped_column(String(255))
    technologies: Mapped[list | None] = mapped_column(JSON)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    @property
    def repository(self) -> dict[str, str | None] | None:
        if not self.repository_owner:
            return None
        return {"owner": self.repository_owner, "name": self.repository_name}
