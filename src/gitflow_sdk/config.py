"""Configuration for gitflow-sdk.

git-flow stores its naming conventions as flat string keys, normally in the
repository's git config:

    gitflow.branch.master       = master
    gitflow.branch.develop      = develop
    gitflow.prefix.hotfix       = hotfix/
    gitflow.prefix.release      = release/
    gitflow.prefix.versiontag   = v

A ConfigProvider returns that mapping; WorkflowConfig is the typed snapshot a
workflow call builds from it exactly once.

Providers:
    >>> provider = GitConfigProvider()                  # git config of the repo
    >>> provider = MappingConfigProvider(DEFAULT_CONFIG)
    >>> provider = MappingConfigProvider.from_yaml(".gitflow.yml")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, Union

import yaml

from gitflow_sdk.types import ConfigError, GitCommandError

if TYPE_CHECKING:
    from gitflow_sdk.vcs.git_cli import GitCliEngine

logger = logging.getLogger(__name__)

# Configuration keys
MASTER_BRANCH_KEY = "gitflow.branch.master"
DEVELOP_BRANCH_KEY = "gitflow.branch.develop"
FEATURE_PREFIX_KEY = "gitflow.prefix.feature"
RELEASE_PREFIX_KEY = "gitflow.prefix.release"
HOTFIX_PREFIX_KEY = "gitflow.prefix.hotfix"
SUPPORT_PREFIX_KEY = "gitflow.prefix.support"
VERSION_TAG_KEY = "gitflow.prefix.versiontag"

REQUIRED_KEYS = (
    MASTER_BRANCH_KEY,
    DEVELOP_BRANCH_KEY,
    HOTFIX_PREFIX_KEY,
    RELEASE_PREFIX_KEY,
    VERSION_TAG_KEY,
)

DEFAULT_CONFIG: dict[str, str] = {
    MASTER_BRANCH_KEY: "master",
    DEVELOP_BRANCH_KEY: "develop",
    FEATURE_PREFIX_KEY: "feature/",
    RELEASE_PREFIX_KEY: "release/",
    HOTFIX_PREFIX_KEY: "hotfix/",
    SUPPORT_PREFIX_KEY: "support/",
    VERSION_TAG_KEY: "",
}


# =============================================================================
# Workflow Kinds
# =============================================================================


@dataclass(frozen=True)
class WorkflowKind:
    """Describes how one git-flow workflow names and sources its branches.

    Attributes:
        name: Workflow name ("hotfix", "release")
        prefix_key: Config key holding the workflow branch prefix
        base_branch_key: Config key holding the branch new workflow branches
            start from
        accepts_start_sha: Whether start() may begin at an explicit commit
    """

    name: str
    prefix_key: str
    base_branch_key: str
    accepts_start_sha: bool = False


HOTFIX = WorkflowKind(
    name="hotfix",
    prefix_key=HOTFIX_PREFIX_KEY,
    base_branch_key=MASTER_BRANCH_KEY,
)

RELEASE = WorkflowKind(
    name="release",
    prefix_key=RELEASE_PREFIX_KEY,
    base_branch_key=DEVELOP_BRANCH_KEY,
    accepts_start_sha=True,
)


# =============================================================================
# Workflow Configuration
# =============================================================================


@dataclass(frozen=True)
class WorkflowConfig:
    """Immutable snapshot of the git-flow naming configuration.

    Attributes:
        master_branch: Production branch name
        develop_branch: Integration branch name
        hotfix_prefix: Prefix of hotfix branches
        release_prefix: Prefix of release branches
        version_tag_prefix: Prefix prepended to versions to form tag names
    """

    master_branch: str
    develop_branch: str
    hotfix_prefix: str
    release_prefix: str
    version_tag_prefix: str = ""

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> WorkflowConfig:
        """Build a snapshot from a flat gitflow.* mapping.

        Raises:
            ConfigError: If a required key is missing or a branch name is empty
        """
        missing = [key for key in REQUIRED_KEYS if values.get(key) is None]
        if missing:
            raise ConfigError(
                f"missing {', '.join(missing)} (is git-flow initialized?)",
                key=missing[0],
            )

        for key in (MASTER_BRANCH_KEY, DEVELOP_BRANCH_KEY):
            if not str(values[key]).strip():
                raise ConfigError(f"{key} must not be empty", key=key)

        return cls(
            master_branch=str(values[MASTER_BRANCH_KEY]),
            develop_branch=str(values[DEVELOP_BRANCH_KEY]),
            hotfix_prefix=str(values[HOTFIX_PREFIX_KEY]),
            release_prefix=str(values[RELEASE_PREFIX_KEY]),
            version_tag_prefix=str(values[VERSION_TAG_KEY]),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert back to the flat gitflow.* mapping."""
        return {
            MASTER_BRANCH_KEY: self.master_branch,
            DEVELOP_BRANCH_KEY: self.develop_branch,
            HOTFIX_PREFIX_KEY: self.hotfix_prefix,
            RELEASE_PREFIX_KEY: self.release_prefix,
            VERSION_TAG_KEY: self.version_tag_prefix,
        }

    def branch_prefix(self, kind: WorkflowKind) -> str:
        return self._lookup(kind.prefix_key)

    def base_branch(self, kind: WorkflowKind) -> str:
        return self._lookup(kind.base_branch_key)

    def branch_name(self, kind: WorkflowKind, version: str) -> str:
        """Name of the workflow branch for version (e.g. "hotfix/1.0.1")."""
        return self.branch_prefix(kind) + version

    def tag_name(self, version: str) -> str:
        """Name of the tag created when a workflow finishes."""
        return self.version_tag_prefix + version

    def _lookup(self, key: str) -> str:
        values = self.to_dict()
        if key not in values:
            raise ConfigError(f"unsupported key {key}", key=key)
        return values[key]


# =============================================================================
# Providers
# =============================================================================


class ConfigProvider(Protocol):
    """Protocol for git-flow configuration sources."""

    async def get_config(self, repo: Any) -> Mapping[str, str]:
        """Return the flat gitflow.* mapping for repo."""
        ...


class MappingConfigProvider:
    """Serves a fixed mapping, regardless of repository.

    Accepts flat dotted keys ({"gitflow.branch.master": "main"}) or nested
    sections ({"gitflow": {"branch": {"master": "main"}}}).
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = _flatten(values if values is not None else DEFAULT_CONFIG)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> MappingConfigProvider:
        """Load configuration from a YAML file.

        Raises:
            ConfigError: If the file cannot be read or is not a mapping
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"cannot load {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"{path} must contain a mapping")

        logger.debug(f"Loaded git-flow configuration from {path}")
        return cls(data)

    async def get_config(self, repo: Any) -> Mapping[str, str]:
        return dict(self._values)


class GitConfigProvider:
    """Reads gitflow.* keys from the repository's git config.

    Example:
        >>> provider = GitConfigProvider()
        >>> await provider.initialize("/path/to/repo")     # write defaults
        >>> config = await provider.get_config("/path/to/repo")
        >>> config["gitflow.branch.develop"]
        'develop'
    """

    def __init__(self, engine: Optional[GitCliEngine] = None):
        if engine is None:
            from gitflow_sdk.vcs.git_cli import GitCliEngine

            engine = GitCliEngine()
        self.engine = engine

    async def get_config(self, repo: Any) -> Mapping[str, str]:
        result = await self.engine.run(repo, ["config", "--get-regexp", r"^gitflow\."])

        # Exit status 1 means no key matched
        if result.return_code == 1:
            return {}
        if not result.success:
            raise GitCommandError(result.args, result.return_code, result.error)

        values: dict[str, str] = {}
        for line in result.output.splitlines():
            key, _, value = line.partition(" ")
            if key:
                values[key] = value
        return values

    async def initialize(
        self,
        repo: Any,
        values: Optional[Mapping[str, Any]] = None,
        force: bool = False,
    ) -> Mapping[str, str]:
        """Write git-flow configuration into the repository.

        Args:
            repo: Repository path
            values: Keys to write (default: DEFAULT_CONFIG)
            force: Overwrite keys that are already set

        Returns:
            The configuration after initialization
        """
        current = await self.get_config(repo)
        for key, value in _flatten(values if values is not None else DEFAULT_CONFIG).items():
            if key in current and not force:
                continue
            result = await self.engine.run(repo, ["config", key, value])
            if not result.success:
                raise GitCommandError(result.args, result.return_code, result.error)
            logger.debug(f"Set {key}={value!r}")

        return await self.get_config(repo)


def _flatten(values: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested sections into dotted keys; None becomes ""."""
    flat: dict[str, str] = {}
    for key, value in values.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, prefix=f"{full_key}."))
        else:
            flat[full_key] = "" if value is None else str(value)
    return flat
