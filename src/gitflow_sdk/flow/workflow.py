"""Generic git-flow workflow engine.

Hotfix and release are the same pipeline, differing only in which prefix
names the workflow branch and which branch it starts from. Both run through
GitFlowWorkflow, parameterized by a WorkflowKind.

Finish Pipeline:
    config ─▶ branches ─▶ commits ─▶ develop merge ─▶ master merge ─▶ tag ─▶ cleanup
                (gather)   (gather)   (skippable)     (skippable)

    - A merge is skipped when the target already points at the workflow
      branch's commit; the develop merge is also skipped when only_master is set.
    - The tag is always created: on the master merge commit, or on master's
      current commit when the master merge was skipped.
    - Every failure aborts the call. Nothing is rolled back: a develop merge
      that landed stays landed if the master merge fails.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from gitflow_sdk.config import (
    ConfigProvider,
    GitConfigProvider,
    WorkflowConfig,
    WorkflowKind,
)
from gitflow_sdk.core.utils import call_hook
from gitflow_sdk.flow.options import FinishOptions, StartOptions
from gitflow_sdk.types import (
    BranchRef,
    CommitRef,
    MergeOutcome,
    MissingRepositoryError,
    MissingVersionError,
)
from gitflow_sdk.vcs.base import VersionControlEngine

logger = logging.getLogger(__name__)


class GitFlowWorkflow:
    """Start and finish one kind of git-flow workflow.

    Example:
        >>> workflow = GitFlowWorkflow(HOTFIX)
        >>> branch = await workflow.start("/path/to/repo", "1.0.1")
        >>> merge_commit = await workflow.finish("/path/to/repo", "1.0.1")
    """

    def __init__(
        self,
        kind: WorkflowKind,
        engine: Optional[VersionControlEngine] = None,
        config_provider: Optional[ConfigProvider] = None,
    ):
        """Initialize workflow.

        Args:
            kind: Which workflow to run (HOTFIX or RELEASE)
            engine: Version-control engine (default: GitCliEngine)
            config_provider: Configuration source (default: GitConfigProvider
                sharing the engine when it is a GitCliEngine)
        """
        from gitflow_sdk.vcs.git_cli import GitCliEngine

        self.kind = kind
        self.engine = engine or GitCliEngine()
        if config_provider is None:
            config_provider = GitConfigProvider(
                self.engine if isinstance(self.engine, GitCliEngine) else None
            )
        self.config_provider = config_provider

    def _check_inputs(self, repo: Any, version: Optional[str]) -> None:
        if not repo:
            raise MissingRepositoryError()
        if not version:
            raise MissingVersionError(self.kind.name)

    async def _resolve_config(self, repo: Any) -> WorkflowConfig:
        """Read configuration once; every name in a call derives from it."""
        values = await self.config_provider.get_config(repo)
        return WorkflowConfig.from_mapping(values)

    # =========================================================================
    # Start
    # =========================================================================

    async def start(
        self,
        repo: Any,
        version: str,
        options: Optional[StartOptions] = None,
    ) -> BranchRef:
        """Create the workflow branch and check it out.

        Args:
            repo: Repository handle
            version: Version being released or hotfixed
            options: StartOptions (defaults when None)

        Returns:
            The new workflow branch

        Raises:
            MissingRepositoryError: If repo is empty
            MissingVersionError: If version is empty
            GitError: Any engine failure, unchanged
        """
        self._check_inputs(repo, version)
        options = options or StartOptions()

        config = await self._resolve_config(repo)
        branch_name = config.branch_name(self.kind, version)

        if options.sha and self.kind.accepts_start_sha:
            start_commit = await self.engine.resolve_commit(repo, options.sha)
        else:
            if options.sha:
                logger.warning(
                    f"{self.kind.name} branches always start from "
                    f"{config.base_branch(self.kind)}; ignoring sha {options.sha}"
                )
            base_branch = await self.engine.lookup_branch(
                repo, config.base_branch(self.kind)
            )
            start_commit = await self.engine.resolve_commit(repo, base_branch)

        branch = await self.engine.create_branch(repo, branch_name, start_commit)

        old_head = await self.engine.current_head(repo)
        await self.engine.checkout(repo, branch)
        new_head = await self.engine.current_head(repo)
        await call_hook(options.post_checkout_hook, old_head.target, new_head.target)

        logger.info(f"Started {self.kind.name} {branch_name} at {start_commit.oid[:10]}")
        return branch

    # =========================================================================
    # Finish
    # =========================================================================

    async def finish(
        self,
        repo: Any,
        version: str,
        options: Optional[FinishOptions] = None,
    ) -> MergeOutcome:
        """Merge the workflow branch into develop and master, tag, clean up.

        Args:
            repo: Repository handle
            version: Version being finished
            options: FinishOptions (defaults when None)

        Returns:
            The develop merge commit as returned by post_develop_merge_callback,
            or None when the develop merge was skipped

        Raises:
            MissingRepositoryError: If repo is empty
            MissingVersionError: If version is empty
            ConfigError: If the git-flow configuration is incomplete
            GitError: Any engine failure, unchanged
        """
        self._check_inputs(repo, version)
        options = options or FinishOptions()

        config = await self._resolve_config(repo)
        develop_name = config.develop_branch
        workflow_name = config.branch_name(self.kind, version)
        master_name = config.master_branch

        develop_branch, workflow_branch, master_branch = await asyncio.gather(
            *(
                self.engine.lookup_branch(repo, name)
                for name in (develop_name, workflow_name, master_name)
            )
        )
        develop_commit, workflow_commit, master_commit = await asyncio.gather(
            *(
                self.engine.resolve_commit(repo, branch)
                for branch in (develop_branch, workflow_branch, master_branch)
            )
        )

        cancel_develop_merge = (
            options.only_master or develop_commit.oid == workflow_commit.oid
        )
        cancel_master_merge = master_commit.oid == workflow_commit.oid

        develop_outcome: MergeOutcome = None
        if cancel_develop_merge:
            logger.debug(
                f"Skipping merge of {workflow_name} into {develop_name}"
                + (" (only_master)" if options.only_master else " (same commit)")
            )
        else:
            develop_outcome = await self._merge(
                repo,
                develop_branch,
                workflow_branch,
                options,
                options.post_develop_merge_callback,
            )

        tag_name = config.tag_name(version)

        if cancel_master_merge:
            logger.debug(
                f"Skipping merge of {workflow_name} into {master_name} (same commit), "
                f"tagging {master_name} as is"
            )
            tag_oid = master_commit.oid
        else:
            master_outcome = await self._merge(
                repo,
                master_branch,
                workflow_branch,
                options,
                options.post_master_merge_callback,
            )
            tag_oid = _oid_of(master_outcome)

        await self.engine.create_tag(tag_oid, tag_name, options.message, repo)

        if not options.keep_branch:
            await self.engine.delete_branch_safely(
                repo, workflow_name, master_name, options.post_checkout_hook
            )

        logger.info(f"Finished {self.kind.name} {workflow_name}")
        return develop_outcome

    async def _merge(
        self,
        repo: Any,
        into_branch: BranchRef,
        from_branch: BranchRef,
        options: FinishOptions,
        post_merge_callback: Any,
    ) -> MergeOutcome:
        """before-merge hook, merge, then value = post_merge_callback(value)."""
        await call_hook(options.before_merge_callback, into_branch.name, from_branch.name)

        merge_commit = await self.engine.merge(
            into_branch,
            from_branch,
            repo,
            options.process_merge_message_callback,
            options.signing_callback,
        )
        if post_merge_callback is None:
            return merge_commit
        return await call_hook(post_merge_callback, merge_commit)


def _oid_of(outcome: Any) -> str:
    """Object id to tag, from whatever the post-master-merge hook returned."""
    if isinstance(outcome, CommitRef):
        return outcome.oid
    if isinstance(outcome, str) and outcome:
        return outcome
    raise TypeError(
        "post_master_merge_callback must return the merge commit "
        f"(CommitRef or object id), got {type(outcome).__name__}"
    )
