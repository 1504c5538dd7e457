"""Domain errors raised by the services."""


class ProjectHubError(Exception):
    """Base class for all project hub errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ProjectHubError):
    """A referenced record does not exist."""


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: str):
        super().__init__("Project not found")
        self.project_id = project_id


class BranchNotFoundError(NotFoundError):
    def __init__(self, branch_name: str):
        super().__init__("Branch not found")
        self.branch_name = branch_name


class CommitNotFoundError(NotFoundError):
    def __init__(self, commit_id: str):
        super().__init__("Commit not found")
        self.commit_id = commit_id


class SnapshotNotFoundError(NotFoundError):
    def __init__(self, snapshot_id: str):
        super().__init__("File snapshot not found")
        self.snapshot_id = snapshot_id


class NoteNotFoundError(NotFoundError):
    def __init__(self, note_id: str):
        super().__init__("Note not found")
        self.note_id = note_id


class PreconditionFailedError(ProjectHubError):
    """The request is valid but the project is not in a state that allows it."""


class NoPendingChangesError(PreconditionFailedError):
    def __init__(self):
        super().__init__("No pending changes to commit")


class NoActiveBranchError(PreconditionFailedError):
    def __init__(self):
        super().__init__("No active branch found")


class BranchExistsError(PreconditionFailedError):
    def __init__(self, branch_name: str):
        super().__init__("Branch already exists")
        self.branch_name = branch_name


class StorageError(ProjectHubError):
    """A query failed; details are logged, never returned to the caller."""
