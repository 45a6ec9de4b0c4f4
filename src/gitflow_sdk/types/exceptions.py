"""Git Flow Types - Exception Classes.

This module defines all exceptions raised by gitflow-sdk.
All exceptions inherit from GitFlowError for easy catching.

Engine failures (GitError and subclasses) are raised by the version-control
engine and travel through the workflows untouched, so callers can tell a merge
conflict apart from a missing branch.

Usage:
    try:
        await finish_hotfix(repo, "1.0.1")
    except MergeError as e:
        print(f"Conflicts: {e.conflicts}")
    except GitFlowError as e:
        print(f"git-flow error: {e}")
"""

from __future__ import annotations

from typing import Optional, Sequence


class GitFlowError(Exception):
    """Base exception for all gitflow-sdk errors."""
    pass


class MissingRepositoryError(GitFlowError):
    """Raised when a workflow is called without a repository."""

    def __init__(self, message: str = "Repo is required"):
        super().__init__(message)


class MissingVersionError(GitFlowError):
    """Raised when a workflow is called with an empty version."""

    def __init__(self, workflow: str = ""):
        self.workflow = workflow
        label = workflow.capitalize() if workflow else "Workflow"
        super().__init__(f"{label} version is required")


class ConfigError(GitFlowError):
    """Raised when git-flow configuration is missing or unreadable."""

    def __init__(self, message: str, key: str = ""):
        self.key = key
        super().__init__(f"Invalid git-flow configuration: {message}")


class GitError(GitFlowError):
    """Base class for failures reported by the version-control engine.

    Attributes:
        command: The git invocation that failed (if any)
        returncode: Process exit code (if any)
        stderr: Captured stderr of the failing command
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        if stderr:
            message += f": {stderr}"
        super().__init__(message)


class GitCommandError(GitError):
    """Raised when a git command fails and no more specific error applies."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
    ):
        super().__init__(
            f"git command failed ({' '.join(command)}, exit {returncode})",
            command=command,
            returncode=returncode,
            stderr=stderr,
        )


class BranchNotFoundError(GitError):
    """Raised when a branch name does not resolve to a local branch."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Branch not found: {name}", **kwargs)


class CommitNotFoundError(GitError):
    """Raised when a reference does not resolve to a commit."""

    def __init__(self, ref: str, **kwargs):
        self.ref = ref
        super().__init__(f"Commit not found: {ref}", **kwargs)


class BranchCreationError(GitError):
    """Raised when a branch cannot be created (e.g. it already exists)."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Failed to create branch {name}", **kwargs)


class CheckoutError(GitError):
    """Raised when a branch cannot be checked out."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Failed to checkout {name}", **kwargs)


class MergeError(GitError):
    """Raised when a merge cannot be completed.

    Attributes:
        target: Branch being merged into
        source: Branch being merged
        conflicts: Conflicting paths (empty for non-conflict failures)
    """

    def __init__(
        self,
        target: str,
        source: str,
        conflicts: Optional[Sequence[str]] = None,
        **kwargs,
    ):
        self.target = target
        self.source = source
        self.conflicts = list(conflicts) if conflicts else []
        msg = f"Failed to merge {source} into {target}"
        if self.conflicts:
            msg += f" (conflicts: {', '.join(self.conflicts)})"
        super().__init__(msg, **kwargs)


class TagCreationError(GitError):
    """Raised when a tag cannot be created."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Failed to create tag {name}", **kwargs)


class BranchDeletionError(GitError):
    """Raised when a branch cannot be deleted."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Failed to delete branch {name}", **kwargs)
