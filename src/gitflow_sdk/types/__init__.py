"""Git Flow Types - Shared type definitions.

Package Structure:
    - models.py: Engine handles (CommitRef, BranchRef, HeadRef, TagRef)
    - hooks.py: Callback signatures and their defaults
    - exceptions.py: Exception classes (GitFlowError and subclasses)

Usage:
    >>> from gitflow_sdk.types import BranchRef, CommitRef
    >>> from gitflow_sdk.types import GitFlowError, MergeError
"""

# Data models
from .models import (
    BranchRef,
    CommitRef,
    HeadRef,
    MergeOutcome,
    TagRef,
)

# Hook signatures
from .hooks import (
    BeforeMergeCallback,
    PostCheckoutHook,
    PostMergeCallback,
    ProcessMergeMessageCallback,
    SigningCallback,
    identity,
    noop,
)

# Exceptions
from .exceptions import (
    BranchCreationError,
    BranchDeletionError,
    BranchNotFoundError,
    CheckoutError,
    CommitNotFoundError,
    ConfigError,
    GitCommandError,
    GitError,
    GitFlowError,
    MergeError,
    MissingRepositoryError,
    MissingVersionError,
    TagCreationError,
)

__all__ = [
    # Models
    "BranchRef",
    "CommitRef",
    "HeadRef",
    "MergeOutcome",
    "TagRef",
    # Hooks
    "BeforeMergeCallback",
    "PostCheckoutHook",
    "PostMergeCallback",
    "ProcessMergeMessageCallback",
    "SigningCallback",
    "identity",
    "noop",
    # Exceptions
    "BranchCreationError",
    "BranchDeletionError",
    "BranchNotFoundError",
    "CheckoutError",
    "CommitNotFoundError",
    "ConfigError",
    "GitCommandError",
    "GitError",
    "GitFlowError",
    "MergeError",
    "MissingRepositoryError",
    "MissingVersionError",
    "TagCreationError",
]
