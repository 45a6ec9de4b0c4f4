"""Version-control engines.

Available engines:
    - VersionControlEngine: Abstract interface used by the workflows
    - GitCliEngine: Implementation on top of the git command line
"""

from .base import VersionControlEngine
from .git_cli import GitCliEngine, GitResult

__all__ = [
    "VersionControlEngine",
    "GitCliEngine",
    "GitResult",
]
