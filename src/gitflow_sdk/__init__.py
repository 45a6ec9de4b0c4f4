"""git-flow hotfix and release workflows for Python.

This package automates the git-flow branching convention on top of git:
`start` creates a workflow branch from its base and checks it out, `finish`
merges it into develop and master, tags the result and deletes the branch.

Basic Usage (Async):
    >>> from gitflow_sdk import Flow
    >>> flow = Flow("/path/to/repo")
    >>> await flow.start_hotfix("1.0.1")
    >>> merge_commit = await flow.finish_hotfix("1.0.1", message="Hotfix 1.0.1")

Basic Usage (Sync):
    >>> from gitflow_sdk import FlowSync
    >>> FlowSync("/path/to/repo").finish_release("2.0.0", keep_branch=True)

Hooks:
    >>> async def announce(target, source):
    ...     print(f"merging {source} into {target}")
    >>> await finish_release(repo, "2.0.0", before_merge_callback=announce)

Configuration:
    Branch names and prefixes come from the repository's gitflow.* git config
    (see GitConfigProvider.initialize) or any other ConfigProvider, such as
    MappingConfigProvider.from_yaml("gitflow.yml").
"""

__version__ = "0.1.0"

from gitflow_sdk.types import (
    # Data models
    BranchRef,
    CommitRef,
    HeadRef,
    MergeOutcome,
    TagRef,
    # Exceptions
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

from gitflow_sdk.config import (
    DEFAULT_CONFIG,
    HOTFIX,
    RELEASE,
    ConfigProvider,
    GitConfigProvider,
    MappingConfigProvider,
    WorkflowConfig,
    WorkflowKind,
)

from gitflow_sdk.vcs import GitCliEngine, VersionControlEngine

from gitflow_sdk.flow import (
    FinishOptions,
    Flow,
    FlowSync,
    GitFlowWorkflow,
    Hotfix,
    Release,
    StartOptions,
    finish_hotfix,
    finish_release,
    start_hotfix,
    start_release,
)

__all__ = [
    "__version__",
    # Models
    "BranchRef",
    "CommitRef",
    "HeadRef",
    "MergeOutcome",
    "TagRef",
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
    # Configuration
    "DEFAULT_CONFIG",
    "HOTFIX",
    "RELEASE",
    "ConfigProvider",
    "GitConfigProvider",
    "MappingConfigProvider",
    "WorkflowConfig",
    "WorkflowKind",
    # Engines
    "GitCliEngine",
    "VersionControlEngine",
    # Workflows
    "FinishOptions",
    "Flow",
    "FlowSync",
    "GitFlowWorkflow",
    "Hotfix",
    "Release",
    "StartOptions",
    "finish_hotfix",
    "finish_release",
    "start_hotfix",
    "start_release",
]
