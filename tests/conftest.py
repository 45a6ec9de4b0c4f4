"""Test configuration for gitflow-sdk."""
import re
import shutil
import subprocess
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from gitflow_sdk import (
    BranchCreationError,
    BranchDeletionError,
    BranchNotFoundError,
    BranchRef,
    CommitNotFoundError,
    CommitRef,
    HeadRef,
    MappingConfigProvider,
    MergeError,
    TagRef,
    VersionControlEngine,
)
from gitflow_sdk.core.utils import maybe_await

TEST_CONFIG = {
    "gitflow.branch.master": "master",
    "gitflow.branch.develop": "develop",
    "gitflow.prefix.feature": "feature/",
    "gitflow.prefix.release": "release/",
    "gitflow.prefix.hotfix": "hotfix/",
    "gitflow.prefix.versiontag": "v",
}


# =============================================================================
# In-memory engine
# =============================================================================


class FakeEngine(VersionControlEngine):
    """In-memory engine recording every call in self.events."""

    def __init__(self, branches=None, head="develop"):
        self.branches = dict(branches or {})
        self.commits = set(self.branches.values())
        self.head = head
        self.tags = {}
        self.events = []
        self.merge_messages = []
        self.fail_merge_into = set()
        self._counter = 0

    def record(self, *event):
        self.events.append(event)

    async def lookup_branch(self, repo, name):
        self.record("lookup_branch", name)
        if name not in self.branches:
            raise BranchNotFoundError(name)
        return BranchRef(name=name, target=self.branches[name])

    async def resolve_commit(self, repo, ref):
        if isinstance(ref, BranchRef):
            oid = ref.target
        elif isinstance(ref, CommitRef):
            oid = ref.oid
        else:
            oid = ref
        self.record("resolve_commit", oid)
        if oid not in self.commits:
            raise CommitNotFoundError(oid)
        return CommitRef(oid=oid)

    async def create_branch(self, repo, name, start_commit):
        self.record("create_branch", name, start_commit.oid)
        if name in self.branches:
            raise BranchCreationError(name, stderr="already exists")
        self.branches[name] = start_commit.oid
        return BranchRef(name=name, target=start_commit.oid)

    async def current_head(self, repo):
        return HeadRef(target=self.branches[self.head], branch=self.head)

    async def checkout(self, repo, branch):
        name = branch.name if isinstance(branch, BranchRef) else branch
        self.record("checkout", name)
        self.head = name

    async def merge(
        self,
        into_branch,
        from_branch,
        repo,
        message_callback=None,
        signing_callback=None,
    ):
        self.record("merge", into_branch.name, from_branch.name)
        if into_branch.name in self.fail_merge_into:
            raise MergeError(into_branch.name, from_branch.name, conflicts=["README.md"])

        message = f"Merge branch '{from_branch.name}' into {into_branch.name}"
        if message_callback is not None:
            message = await maybe_await(message_callback(message))
        self.merge_messages.append(message)
        if signing_callback is not None:
            await maybe_await(signing_callback(message))

        self._counter += 1
        oid = f"merge{self._counter:035d}"
        self.commits.add(oid)
        self.branches[into_branch.name] = oid
        return CommitRef(oid=oid)

    async def create_tag(self, oid, name, message, repo):
        self.record("create_tag", name, oid, message)
        self.tags[name] = oid
        return TagRef(name=name, target=oid)

    async def delete_branch(self, repo, name):
        self.record("delete_branch", name)
        if name not in self.branches:
            raise BranchDeletionError(name)
        del self.branches[name]

    def event_names(self):
        return [event[0] for event in self.events]


@pytest.fixture
def fake_engine():
    """Engine with master, develop and hotfix/1.0 at three distinct commits."""
    return FakeEngine(
        branches={
            "master": "a" * 40,
            "develop": "b" * 40,
            "hotfix/1.0": "c" * 40,
            "release/2.0": "d" * 40,
        },
        head="develop",
    )


@pytest.fixture
def config_provider():
    return MappingConfigProvider(TEST_CONFIG)


# =============================================================================
# Real git repositories
# =============================================================================


def _git_version():
    if shutil.which("git") is None:
        return None
    output = subprocess.run(
        ["git", "--version"], capture_output=True, text=True
    ).stdout
    match = re.search(r"(\d+)\.(\d+)", output)
    return (int(match.group(1)), int(match.group(2))) if match else None


GIT_VERSION = _git_version()

requires_git = pytest.mark.skipif(
    GIT_VERSION is None or GIT_VERSION < (2, 38),
    reason="git >= 2.38 is required",
)


def run_git(repo, *args, input=None):
    """Run git synchronously and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        input=input,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo, name, content, message):
    (Path(repo) / name).write_text(content, encoding="utf-8")
    run_git(repo, "add", name)
    run_git(repo, "commit", "--quiet", "-m", message)
    return run_git(repo, "rev-parse", "HEAD")


@pytest.fixture
def git():
    return run_git


@pytest.fixture
def git_repo(tmp_path):
    """Repository with master at M and develop at D (one commit ahead of M).

    HEAD is on develop. git-flow configuration is written into the repository.
    """
    if GIT_VERSION is None or GIT_VERSION < (2, 38):
        pytest.skip("git >= 2.38 is required")

    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "--quiet")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/master")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    run_git(repo, "config", "tag.gpgsign", "false")
    for key, value in TEST_CONFIG.items():
        run_git(repo, "config", key, value)

    commit_file(repo, "README.md", "initial\n", "Initial commit")
    run_git(repo, "checkout", "--quiet", "-b", "develop")
    commit_file(repo, "feature.txt", "feature\n", "Add feature")
    return repo
