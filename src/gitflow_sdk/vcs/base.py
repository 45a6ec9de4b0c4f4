"""Version-Control Engine Abstract Class.

Workflows depend only on this interface. Engines raise GitError subclasses
(BranchNotFoundError, MergeError, ...) and the workflows let them propagate
unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from gitflow_sdk.core.utils import call_hook
from gitflow_sdk.types import (
    BranchRef,
    CommitRef,
    HeadRef,
    PostCheckoutHook,
    ProcessMergeMessageCallback,
    SigningCallback,
    TagRef,
)

logger = logging.getLogger(__name__)


class VersionControlEngine(ABC):
    """Abstract base class for version-control engines.

    All engines must implement the primitive operations used by the
    workflows: branch lookup, commit resolution, branch creation, HEAD
    inspection, checkout, merge, tag creation and branch deletion.

    delete_branch_safely() is provided on top of those primitives.
    """

    @abstractmethod
    async def lookup_branch(self, repo: Any, name: str) -> BranchRef:
        """Look up a local branch by short name.

        Raises:
            BranchNotFoundError: If the branch does not exist
        """
        ...

    @abstractmethod
    async def resolve_commit(
        self, repo: Any, ref: Union[BranchRef, CommitRef, str]
    ) -> CommitRef:
        """Resolve a branch handle, commit handle or revision string to a commit.

        Raises:
            CommitNotFoundError: If the reference does not name a commit
        """
        ...

    @abstractmethod
    async def create_branch(
        self, repo: Any, name: str, start_commit: CommitRef
    ) -> BranchRef:
        """Create a local branch pointing at start_commit."""
        ...

    @abstractmethod
    async def current_head(self, repo: Any) -> HeadRef:
        """Return the current HEAD."""
        ...

    @abstractmethod
    async def checkout(self, repo: Any, branch: Union[BranchRef, str]) -> None:
        """Check out a branch, updating the working tree and HEAD."""
        ...

    @abstractmethod
    async def merge(
        self,
        into_branch: BranchRef,
        from_branch: BranchRef,
        repo: Any,
        message_callback: Optional[ProcessMergeMessageCallback] = None,
        signing_callback: Optional[SigningCallback] = None,
    ) -> CommitRef:
        """Merge from_branch into into_branch, creating a merge commit.

        Args:
            into_branch: Branch that receives the merge commit
            from_branch: Branch being merged
            repo: Repository handle
            message_callback: Receives the default merge message, returns the
                message to use
            signing_callback: Receives the raw commit content, returns a signature

        Returns:
            The new merge commit

        Raises:
            MergeError: If the merge conflicts or cannot be recorded
        """
        ...

    @abstractmethod
    async def create_tag(
        self, oid: str, name: str, message: str, repo: Any
    ) -> TagRef:
        """Create an annotated tag named name at commit oid."""
        ...

    @abstractmethod
    async def delete_branch(self, repo: Any, name: str) -> None:
        """Delete a local branch, merged or not."""
        ...

    async def delete_branch_safely(
        self,
        repo: Any,
        branch_name: str,
        fallback_branch_name: str,
        post_checkout_hook: Optional[PostCheckoutHook] = None,
    ) -> None:
        """Delete a branch without leaving HEAD pointing at it.

        When HEAD is on branch_name, fallback_branch_name is checked out first
        and post_checkout_hook is awaited with the old and new HEAD targets.
        """
        head = await self.current_head(repo)
        if head.branch == branch_name:
            logger.debug(
                f"HEAD is on {branch_name}, checking out {fallback_branch_name} first"
            )
            await self.checkout(repo, fallback_branch_name)
            new_head = await self.current_head(repo)
            await call_hook(post_checkout_hook, head.target, new_head.target)

        await self.delete_branch(repo, branch_name)
