"""git-flow "release" workflow.

Release branches start from develop (or from an explicit commit) and are
merged back into both develop and master when finished.
"""

from __future__ import annotations

from typing import Any, Optional

from gitflow_sdk.config import RELEASE, ConfigProvider
from gitflow_sdk.flow.options import (
    FinishOptions,
    StartOptions,
    coerce_finish_options,
    coerce_start_options,
)
from gitflow_sdk.flow.workflow import GitFlowWorkflow
from gitflow_sdk.types import BranchRef, MergeOutcome
from gitflow_sdk.vcs.base import VersionControlEngine


async def start_release(
    repo: Any,
    version: str,
    options: Optional[StartOptions] = None,
    *,
    engine: Optional[VersionControlEngine] = None,
    config_provider: Optional[ConfigProvider] = None,
    **kwargs: Any,
) -> BranchRef:
    """Start a release branch from develop (or options.sha) and check it out."""
    workflow = GitFlowWorkflow(RELEASE, engine=engine, config_provider=config_provider)
    return await workflow.start(repo, version, coerce_start_options(options, **kwargs))


async def finish_release(
    repo: Any,
    version: str,
    options: Optional[FinishOptions] = None,
    *,
    engine: Optional[VersionControlEngine] = None,
    config_provider: Optional[ConfigProvider] = None,
    **kwargs: Any,
) -> MergeOutcome:
    """Finish a release: merge into develop and master, tag, delete the branch."""
    workflow = GitFlowWorkflow(RELEASE, engine=engine, config_provider=config_provider)
    return await workflow.finish(repo, version, coerce_finish_options(options, **kwargs))


class Release:
    """Release workflow bound to one repository."""

    def __init__(
        self,
        repo: Any,
        engine: Optional[VersionControlEngine] = None,
        config_provider: Optional[ConfigProvider] = None,
    ):
        self.repo = repo
        self._release = GitFlowWorkflow(
            RELEASE, engine=engine, config_provider=config_provider
        )

    async def start_release(
        self, version: str, options: Optional[StartOptions] = None, **kwargs: Any
    ) -> BranchRef:
        return await self._release.start(
            self.repo, version, coerce_start_options(options, **kwargs)
        )

    async def finish_release(
        self, version: str, options: Optional[FinishOptions] = None, **kwargs: Any
    ) -> MergeOutcome:
        return await self._release.finish(
            self.repo, version, coerce_finish_options(options, **kwargs)
        )
