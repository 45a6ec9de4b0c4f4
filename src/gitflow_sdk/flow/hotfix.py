"""git-flow "hotfix" workflow.

Hotfix branches start from master and are merged back into both develop and
master when finished.

Usage:
    >>> from gitflow_sdk import Hotfix
    >>> hotfix = Hotfix("/path/to/repo")
    >>> await hotfix.start_hotfix("1.0.1")
    >>> # ... commit the fix ...
    >>> await hotfix.finish_hotfix("1.0.1", message="Hotfix 1.0.1")
"""

from __future__ import annotations

from typing import Any, Optional

from gitflow_sdk.config import HOTFIX, ConfigProvider
from gitflow_sdk.flow.options import (
    FinishOptions,
    StartOptions,
    coerce_finish_options,
    coerce_start_options,
)
from gitflow_sdk.flow.workflow import GitFlowWorkflow
from gitflow_sdk.types import BranchRef, MergeOutcome
from gitflow_sdk.vcs.base import VersionControlEngine


async def start_hotfix(
    repo: Any,
    version: str,
    options: Optional[StartOptions] = None,
    *,
    engine: Optional[VersionControlEngine] = None,
    config_provider: Optional[ConfigProvider] = None,
    **kwargs: Any,
) -> BranchRef:
    """Start a hotfix branch from master and check it out.

    Keyword arguments other than engine/config_provider override fields of
    options (e.g. post_checkout_hook=...).
    """
    workflow = GitFlowWorkflow(HOTFIX, engine=engine, config_provider=config_provider)
    return await workflow.start(repo, version, coerce_start_options(options, **kwargs))


async def finish_hotfix(
    repo: Any,
    version: str,
    options: Optional[FinishOptions] = None,
    *,
    engine: Optional[VersionControlEngine] = None,
    config_provider: Optional[ConfigProvider] = None,
    **kwargs: Any,
) -> MergeOutcome:
    """Finish a hotfix: merge into develop and master, tag, delete the branch.

    Returns the develop merge commit, or None if that merge was skipped.
    """
    workflow = GitFlowWorkflow(HOTFIX, engine=engine, config_provider=config_provider)
    return await workflow.finish(repo, version, coerce_finish_options(options, **kwargs))


class Hotfix:
    """Hotfix workflow bound to one repository."""

    def __init__(
        self,
        repo: Any,
        engine: Optional[VersionControlEngine] = None,
        config_provider: Optional[ConfigProvider] = None,
    ):
        self.repo = repo
        self._hotfix = GitFlowWorkflow(
            HOTFIX, engine=engine, config_provider=config_provider
        )

    async def start_hotfix(
        self, version: str, options: Optional[StartOptions] = None, **kwargs: Any
    ) -> BranchRef:
        return await self._hotfix.start(
            self.repo, version, coerce_start_options(options, **kwargs)
        )

    async def finish_hotfix(
        self, version: str, options: Optional[FinishOptions] = None, **kwargs: Any
    ) -> MergeOutcome:
        return await self._hotfix.finish(
            self.repo, version, coerce_finish_options(options, **kwargs)
        )
