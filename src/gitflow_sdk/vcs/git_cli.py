"""Git CLI Engine.

Implements VersionControlEngine by running the git executable.

Key Design:
    - All operations use asyncio subprocesses (no git library)
    - Merges are always true merge commits (never fast-forward)
    - Merges are built with plumbing commands, so the target branch does
      not need to be checked out:

        merge-tree --write-tree  ->  commit-tree / hash-object  ->  update-ref

    - When the target branch IS checked out, the merge commit is applied with
      a fast-forward so the working tree and index follow the branch.

Merge Path:
    develop ──────────────●── (merge commit)
                         /
    hotfix/1.0 ──●──●──●

Requires git >= 2.38 (merge-tree --write-tree).
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from gitflow_sdk.core.utils import maybe_await
from gitflow_sdk.types import (
    BranchCreationError,
    BranchDeletionError,
    BranchNotFoundError,
    BranchRef,
    CheckoutError,
    CommitNotFoundError,
    CommitRef,
    GitCommandError,
    HeadRef,
    MergeError,
    ProcessMergeMessageCallback,
    SigningCallback,
    TagCreationError,
    TagRef,
)
from gitflow_sdk.vcs.base import VersionControlEngine

logger = logging.getLogger(__name__)


@dataclass
class GitResult:
    """Result of a git invocation.

    Attributes:
        args: Full command line
        success: Whether git exited with status 0
        output: stdout from git (stripped)
        error: stderr from git (stripped)
        return_code: Process return code
    """

    args: List[str]
    success: bool
    output: str = ""
    error: str = ""
    return_code: int = 0

    def error_kwargs(self) -> dict:
        """Keyword arguments for GitError subclasses."""
        return {
            "command": self.args,
            "returncode": self.return_code,
            "stderr": self.error,
        }


class GitCliEngine(VersionControlEngine):
    """Version-control engine backed by the git command line.

    The repository handle is a path to the working tree (str or PathLike).

    Example:
        >>> engine = GitCliEngine()
        >>> develop = await engine.lookup_branch("/path/to/repo", "develop")
        >>> print(develop.target)
    """

    TIMEOUT = 30.0

    def __init__(self, git_binary: str = "git", timeout: Optional[float] = None):
        """Initialize engine.

        Args:
            git_binary: git executable to run (default: "git" from PATH)
            timeout: Per-command timeout in seconds (default: 30)
        """
        self.git_binary = git_binary
        self.timeout = timeout if timeout is not None else self.TIMEOUT

    async def run(
        self,
        repo: Any,
        args: Sequence[str],
        input: Optional[str] = None,
    ) -> GitResult:
        """Run a git command in repo.

        Args:
            repo: Repository path
            args: Git command arguments (without 'git')
            input: Text written to the command's stdin

        Returns:
            GitResult with output and status (non-zero exits do not raise)

        Raises:
            GitCommandError: If git cannot be started or times out
        """
        cmd = [self.git_binary, *args]
        env = os.environ.copy()
        env["LC_ALL"] = "C"
        env["GIT_TERMINAL_PROMPT"] = "0"

        logger.debug(f"Running {' '.join(cmd)} in {repo}")
        try:
            # NOTE: create_subprocess_exec is shell-injection safe (no shell)
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE if input is not None else None,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=os.fspath(repo),
                env=env,
            )
        except OSError as e:
            raise GitCommandError(cmd, None, str(e)) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(
                    input.encode("utf-8") if input is not None else None
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise GitCommandError(cmd, None, f"timed out after {self.timeout}s")

        return_code = process.returncode or 0
        return GitResult(
            args=cmd,
            success=return_code == 0,
            output=stdout_bytes.decode("utf-8", errors="replace").strip(),
            error=stderr_bytes.decode("utf-8", errors="replace").strip(),
            return_code=return_code,
        )

    # =========================================================================
    # Lookup
    # =========================================================================

    async def lookup_branch(self, repo: Any, name: str) -> BranchRef:
        result = await self.run(
            repo, ["rev-parse", "--verify", "--quiet", f"refs/heads/{name}^{{commit}}"]
        )
        if not result.success or not result.output:
            raise BranchNotFoundError(name, **result.error_kwargs())
        return BranchRef(name=name, target=result.output)

    async def resolve_commit(
        self, repo: Any, ref: Union[BranchRef, CommitRef, str]
    ) -> CommitRef:
        if isinstance(ref, BranchRef):
            rev = ref.target
        elif isinstance(ref, CommitRef):
            rev = ref.oid
        else:
            rev = ref

        result = await self.run(
            repo, ["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"]
        )
        if not result.success or not result.output:
            raise CommitNotFoundError(rev, **result.error_kwargs())
        return CommitRef(oid=result.output)

    async def current_head(self, repo: Any) -> HeadRef:
        target = await self.run(repo, ["rev-parse", "--verify", "--quiet", "HEAD"])
        if not target.success or not target.output:
            raise CommitNotFoundError("HEAD", **target.error_kwargs())

        # Exit status 1 means HEAD is detached. --short would give
        # "heads/<name>" when a tag shares the branch name.
        symbolic = await self.run(repo, ["symbolic-ref", "--quiet", "HEAD"])
        branch = None
        if symbolic.success and symbolic.output.startswith("refs/heads/"):
            branch = symbolic.output.removeprefix("refs/heads/")
        return HeadRef(target=target.output, branch=branch)

    # =========================================================================
    # Branches
    # =========================================================================

    async def create_branch(
        self, repo: Any, name: str, start_commit: CommitRef
    ) -> BranchRef:
        result = await self.run(repo, ["branch", name, start_commit.oid])
        if not result.success:
            raise BranchCreationError(name, **result.error_kwargs())

        logger.info(f"Created branch {name} at {start_commit.oid[:10]}")
        return BranchRef(name=name, target=start_commit.oid)

    async def checkout(self, repo: Any, branch: Union[BranchRef, str]) -> None:
        name = branch.name if isinstance(branch, BranchRef) else branch
        result = await self.run(repo, ["checkout", "--quiet", name, "--"])
        if not result.success:
            raise CheckoutError(name, **result.error_kwargs())

    async def delete_branch(self, repo: Any, name: str) -> None:
        result = await self.run(repo, ["branch", "-D", name])
        if not result.success:
            raise BranchDeletionError(name, **result.error_kwargs())
        logger.info(f"Deleted branch {name}")

    # =========================================================================
    # Merge
    # =========================================================================

    async def merge(
        self,
        into_branch: BranchRef,
        from_branch: BranchRef,
        repo: Any,
        message_callback: Optional[ProcessMergeMessageCallback] = None,
        signing_callback: Optional[SigningCallback] = None,
    ) -> CommitRef:
        message = f"Merge branch '{from_branch.name}' into {into_branch.name}"
        if message_callback is not None:
            message = await maybe_await(message_callback(message))
            if not isinstance(message, str):
                raise TypeError(
                    "process_merge_message_callback must return a string, "
                    f"got {type(message).__name__}"
                )
        if not message.endswith("\n"):
            message += "\n"

        tree = await self._merge_tree(into_branch, from_branch, repo)
        parents = [into_branch.target, from_branch.target]

        if signing_callback is None:
            args = ["commit-tree", tree]
            for parent in parents:
                args.extend(["-p", parent])
            args.extend(["-F", "-"])
            result = await self.run(repo, args, input=message)
        else:
            content = await self._commit_content(repo, tree, parents, message)
            signature = await maybe_await(signing_callback(content))
            if signature:
                content = _add_signature(content, signature)
            result = await self.run(
                repo, ["hash-object", "-t", "commit", "-w", "--stdin"], input=content
            )

        if not result.success or not result.output:
            raise MergeError(
                into_branch.name, from_branch.name, **result.error_kwargs()
            )
        merge_oid = result.output

        await self._advance_branch(repo, into_branch, from_branch, merge_oid)
        logger.info(
            f"Merged {from_branch.name} into {into_branch.name} ({merge_oid[:10]})"
        )
        return CommitRef(oid=merge_oid)

    async def _merge_tree(
        self, into_branch: BranchRef, from_branch: BranchRef, repo: Any
    ) -> str:
        """Compute the merged tree without touching the working tree."""
        result = await self.run(
            repo,
            [
                "merge-tree",
                "--write-tree",
                "--name-only",
                "--no-messages",
                into_branch.target,
                from_branch.target,
            ],
        )
        lines = result.output.splitlines()

        if result.return_code == 1 and lines:
            conflicts = [line for line in lines[1:] if line]
            raise MergeError(
                into_branch.name,
                from_branch.name,
                conflicts=conflicts,
                **result.error_kwargs(),
            )
        if not result.success or not lines:
            raise MergeError(
                into_branch.name, from_branch.name, **result.error_kwargs()
            )
        return lines[0]

    async def _commit_content(
        self, repo: Any, tree: str, parents: List[str], message: str
    ) -> str:
        """Build the raw commit object that signing callbacks sign."""
        author = await self.run(repo, ["var", "GIT_AUTHOR_IDENT"])
        committer = await self.run(repo, ["var", "GIT_COMMITTER_IDENT"])
        for ident in (author, committer):
            if not ident.success:
                raise GitCommandError(ident.args, ident.return_code, ident.error)

        headers = [f"tree {tree}"]
        headers.extend(f"parent {parent}" for parent in parents)
        headers.append(f"author {author.output}")
        headers.append(f"committer {committer.output}")
        return "\n".join(headers) + "\n\n" + message

    async def _advance_branch(
        self,
        repo: Any,
        into_branch: BranchRef,
        from_branch: BranchRef,
        merge_oid: str,
    ) -> None:
        """Point into_branch at the merge commit."""
        head = await self.current_head(repo)
        if head.branch == into_branch.name:
            # The merge commit's first parent is the branch tip, so this
            # always fast-forwards and keeps the working tree in sync.
            result = await self.run(repo, ["merge", "--ff-only", "--quiet", merge_oid])
        else:
            result = await self.run(
                repo,
                [
                    "update-ref",
                    "-m",
                    f"merge {from_branch.name}: Merge made by gitflow-sdk",
                    into_branch.ref_name,
                    merge_oid,
                    into_branch.target,
                ],
            )

        if not result.success:
            raise MergeError(
                into_branch.name, from_branch.name, **result.error_kwargs()
            )

    # =========================================================================
    # Tags
    # =========================================================================

    async def create_tag(
        self, oid: str, name: str, message: str, repo: Any
    ) -> TagRef:
        result = await self.run(repo, ["tag", "-a", "-m", message or "", name, oid])
        if not result.success:
            raise TagCreationError(name, **result.error_kwargs())

        tag_oid = await self.run(repo, ["rev-parse", "--verify", f"refs/tags/{name}"])
        logger.info(f"Created tag {name} at {oid[:10]}")
        return TagRef(
            name=name,
            target=oid,
            oid=tag_oid.output if tag_oid.success else None,
        )


def _add_signature(content: str, signature: str) -> str:
    """Insert a gpgsig header into raw commit content."""
    headers, body = content.split("\n\n", 1)
    signature_lines = signature.strip("\n").split("\n")
    gpgsig = "gpgsig " + "\n ".join(signature_lines)
    return f"{headers}\n{gpgsig}\n\n{body}"
