"""SQLAlchemy models."""

from project_hub.models.project import Project
from project_hub.models.branch import LocalBranch
from project_hub.models.commit import CommitChange, LocalCommit
from project_hub.models.change import Change, ChangeFile
from project_hub.models.file_snapshot import FileSnapshot
from project_hub.models.note import Note

__all__ = [
    "Project",
    "LocalBranch",
    "LocalCommit",
    "CommitChange",
    "Change",
    "ChangeFile",
    "FileSnapshot",
    "Note",
]
