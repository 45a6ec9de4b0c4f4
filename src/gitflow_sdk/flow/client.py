"""Repository-bound git-flow clients.

Flow combines the hotfix and release workflows for one repository and
shares a single engine and configuration provider between them. FlowSync
offers the same operations as blocking calls.
"""

from __future__ import annotations

from typing import Any, Optional

from gitflow_sdk.config import HOTFIX, RELEASE, ConfigProvider
from gitflow_sdk.core.utils import run_sync
from gitflow_sdk.flow.hotfix import Hotfix
from gitflow_sdk.flow.options import FinishOptions, StartOptions
from gitflow_sdk.flow.release import Release
from gitflow_sdk.flow.workflow import GitFlowWorkflow
from gitflow_sdk.types import BranchRef, MergeOutcome
from gitflow_sdk.vcs.base import VersionControlEngine


class Flow(Hotfix, Release):
    """Async git-flow client for one repository.

    Basic Usage:
        >>> flow = Flow("/path/to/repo")
        >>> await flow.start_release("2.0.0")
        >>> await flow.finish_release("2.0.0", message="Release 2.0.0")

    Custom engine or configuration:
        >>> flow = Flow(repo, config_provider=MappingConfigProvider.from_yaml("gitflow.yml"))
    """

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
        # Share the defaults the hotfix workflow resolved
        self._release = GitFlowWorkflow(
            RELEASE,
            engine=self._hotfix.engine,
            config_provider=self._hotfix.config_provider,
        )

    @property
    def engine(self) -> VersionControlEngine:
        return self._hotfix.engine

    @property
    def config_provider(self) -> ConfigProvider:
        return self._hotfix.config_provider


class FlowSync:
    """Synchronous wrapper around Flow.

    Provides a blocking interface for scripts where async is not convenient.

    Basic Usage:
        >>> flow = FlowSync("/path/to/repo")
        >>> flow.start_hotfix("1.0.1")
        >>> flow.finish_hotfix("1.0.1", keep_branch=True)
    """

    def __init__(
        self,
        repo: Any,
        engine: Optional[VersionControlEngine] = None,
        config_provider: Optional[ConfigProvider] = None,
    ):
        self._flow = Flow(repo, engine=engine, config_provider=config_provider)

    @property
    def repo(self) -> Any:
        return self._flow.repo

    def start_hotfix(
        self, version: str, options: Optional[StartOptions] = None, **kwargs: Any
    ) -> BranchRef:
        return run_sync(self._flow.start_hotfix(version, options, **kwargs))

    def finish_hotfix(
        self, version: str, options: Optional[FinishOptions] = None, **kwargs: Any
    ) -> MergeOutcome:
        return run_sync(self._flow.finish_hotfix(version, options, **kwargs))

    def start_release(
        self, version: str, options: Optional[StartOptions] = None, **kwargs: Any
    ) -> BranchRef:
        return run_sync(self._flow.start_release(version, options, **kwargs))

    def finish_release(
        self, version: str, options: Optional[FinishOptions] = None, **kwargs: Any
    ) -> MergeOutcome:
        return run_sync(self._flow.finish_release(version, options, **kwargs))
