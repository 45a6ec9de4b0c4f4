"""Git Flow Types - Data Models.

Lightweight, immutable handles returned by the version-control engine.
They are resolved fresh on every workflow call; the repository itself is the
only persistent state.

Identity:
    Commits and branch targets are identified by their full hex object id.
    Two CommitRef values are equal exactly when their oids are equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CommitRef:
    """A commit, identified by its object id.

    Attributes:
        oid: Full hex object id of the commit
    """

    oid: str

    @property
    def id(self) -> str:
        """Alias for oid."""
        return self.oid

    def __str__(self) -> str:
        return self.oid

    def to_dict(self) -> dict:
        return {"oid": self.oid}


@dataclass(frozen=True)
class BranchRef:
    """A local branch and the commit it currently targets.

    Attributes:
        name: Short branch name (e.g. "hotfix/1.0.1")
        target: Object id of the commit the branch points at
    """

    name: str
    target: str

    @property
    def ref_name(self) -> str:
        """Full reference name (refs/heads/...)."""
        return f"refs/heads/{self.name}"

    def to_dict(self) -> dict:
        return {"name": self.name, "target": self.target}


@dataclass(frozen=True)
class HeadRef:
    """The repository HEAD.

    Attributes:
        target: Object id HEAD resolves to
        branch: Short name of the checked-out branch, None when detached
    """

    target: str
    branch: Optional[str] = None

    @property
    def is_detached(self) -> bool:
        return self.branch is None


@dataclass(frozen=True)
class TagRef:
    """A tag created by a finish call.

    Attributes:
        name: Tag name (e.g. "v1.0.1")
        target: Object id of the tagged commit
        oid: Object id of the annotated tag object
    """

    name: str
    target: str
    oid: Optional[str] = None

    def to_dict(self) -> dict:
        return {"name": self.name, "target": self.target, "oid": self.oid}


# Result of a finish call: the develop merge commit (as returned by the
# post-develop-merge hook), or None when no develop merge was performed.
MergeOutcome = Optional[Any]
