"""Tests for gitflow-sdk types."""

import pytest

from gitflow_sdk import (
    BranchCreationError,
    BranchNotFoundError,
    BranchRef,
    CommitRef,
    ConfigError,
    GitCommandError,
    GitError,
    GitFlowError,
    HeadRef,
    MergeError,
    MissingRepositoryError,
    MissingVersionError,
    TagRef,
)
from gitflow_sdk.types import identity, noop


class TestModels:
    """Test engine handle models."""

    def test_commit_ref(self):
        commit = CommitRef("a" * 40)

        assert commit.id == commit.oid
        assert str(commit) == "a" * 40
        assert commit == CommitRef("a" * 40)
        assert commit.to_dict() == {"oid": "a" * 40}

    def test_branch_ref(self):
        branch = BranchRef(name="hotfix/1.0", target="c" * 40)

        assert branch.ref_name == "refs/heads/hotfix/1.0"
        assert branch.to_dict() == {"name": "hotfix/1.0", "target": "c" * 40}

    def test_refs_are_frozen(self):
        branch = BranchRef(name="develop", target="b" * 40)
        with pytest.raises(AttributeError):
            branch.target = "a" * 40

    def test_head_ref(self):
        assert HeadRef(target="a" * 40).is_detached
        assert not HeadRef(target="a" * 40, branch="master").is_detached

    def test_tag_ref(self):
        tag = TagRef(name="v1.0", target="a" * 40)
        assert tag.to_dict() == {"name": "v1.0", "target": "a" * 40, "oid": None}


class TestHookDefaults:
    """Test default hook implementations."""

    def test_noop(self):
        assert noop("a", "b") is None

    def test_identity(self):
        commit = CommitRef("a" * 40)
        assert identity(commit) is commit


class TestExceptions:
    """Test exception hierarchy and messages."""

    def test_hierarchy(self):
        assert issubclass(MissingRepositoryError, GitFlowError)
        assert issubclass(MissingVersionError, GitFlowError)
        assert issubclass(ConfigError, GitFlowError)
        assert issubclass(GitError, GitFlowError)
        for cls in (GitCommandError, BranchNotFoundError, BranchCreationError, MergeError):
            assert issubclass(cls, GitError)

    def test_missing_repository(self):
        assert str(MissingRepositoryError()) == "Repo is required"

    def test_missing_version(self):
        assert str(MissingVersionError("hotfix")) == "Hotfix version is required"
        assert str(MissingVersionError("release")) == "Release version is required"
        assert MissingVersionError("hotfix").workflow == "hotfix"

    def test_config_error(self):
        error = ConfigError("missing gitflow.branch.master", key="gitflow.branch.master")

        assert error.key == "gitflow.branch.master"
        assert "Invalid git-flow configuration" in str(error)

    def test_git_command_error(self):
        error = GitCommandError(["git", "status"], 128, "fatal: not a git repository")

        assert error.command == ["git", "status"]
        assert error.returncode == 128
        assert error.stderr == "fatal: not a git repository"
        assert str(error).endswith(": fatal: not a git repository")

    def test_branch_not_found(self):
        error = BranchNotFoundError("hotfix/1.0")

        assert error.name == "hotfix/1.0"
        assert str(error) == "Branch not found: hotfix/1.0"
        assert error.command == []
        assert error.returncode is None

    def test_merge_error(self):
        error = MergeError("develop", "hotfix/1.0", conflicts=["a.txt", "b.txt"])

        assert error.target == "develop"
        assert error.source == "hotfix/1.0"
        assert error.conflicts == ["a.txt", "b.txt"]
        assert str(error) == (
            "Failed to merge hotfix/1.0 into develop (conflicts: a.txt, b.txt)"
        )

    def test_merge_error_without_conflicts(self):
        error = MergeError("master", "release/2.0", stderr="fatal: bad object")

        assert error.conflicts == []
        assert str(error) == "Failed to merge release/2.0 into master: fatal: bad object"

    def test_catch_all(self):
        with pytest.raises(GitFlowError):
            raise BranchCreationError("release/2.0", stderr="already exists")
