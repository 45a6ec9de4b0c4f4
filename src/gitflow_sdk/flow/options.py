"""Options for starting and finishing git-flow workflows."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from gitflow_sdk.types import (
    BeforeMergeCallback,
    PostCheckoutHook,
    PostMergeCallback,
    ProcessMergeMessageCallback,
    SigningCallback,
    identity,
    noop,
)


@dataclass(frozen=True)
class StartOptions:
    """Options for start_hotfix / start_release.

    Attributes:
        post_checkout_hook: Called with (old_head_oid, new_head_oid) after the
            new branch is checked out
        sha: Commit to start from instead of the base branch (release only)
    """

    post_checkout_hook: PostCheckoutHook = noop
    sha: Optional[str] = None


@dataclass(frozen=True)
class FinishOptions:
    """Options for finish_hotfix / finish_release.

    Attributes:
        keep_branch: Keep the workflow branch after finishing
        message: Message of the annotated version tag
        process_merge_message_callback: Rewrites the default merge message
        before_merge_callback: Called with (target_branch, source_branch)
            before each merge; the result is ignored
        post_develop_merge_callback: Receives the develop merge commit; its
            return value replaces it
        post_master_merge_callback: Receives the master merge commit; its
            return value replaces it and is what gets tagged
        post_checkout_hook: Called with (old_head_oid, new_head_oid) when the
            cleanup step has to check out master
        signing_callback: Signs merge commits
        only_master: Skip the develop merge unconditionally
    """

    keep_branch: bool = False
    message: str = ""
    process_merge_message_callback: Optional[ProcessMergeMessageCallback] = None
    before_merge_callback: BeforeMergeCallback = noop
    post_develop_merge_callback: PostMergeCallback = identity
    post_master_merge_callback: PostMergeCallback = identity
    post_checkout_hook: PostCheckoutHook = noop
    signing_callback: Optional[SigningCallback] = None
    only_master: bool = False

    def with_overrides(self, **changes: Any) -> FinishOptions:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


def coerce_start_options(
    options: Optional[StartOptions] = None, **kwargs: Any
) -> StartOptions:
    """Build StartOptions from an options object and/or keyword overrides."""
    base = options or StartOptions()
    return replace(base, **kwargs) if kwargs else base


def coerce_finish_options(
    options: Optional[FinishOptions] = None, **kwargs: Any
) -> FinishOptions:
    """Build FinishOptions from an options object and/or keyword overrides."""
    base = options or FinishOptions()
    return base.with_overrides(**kwargs) if kwargs else base
