"""git-flow workflows.

Modules:
    - workflow.py: GitFlowWorkflow, the shared start/finish pipeline
    - hotfix.py: Hotfix workflow (start_hotfix, finish_hotfix)
    - release.py: Release workflow (start_release, finish_release)
    - client.py: Flow / FlowSync, both workflows bound to one repository
    - options.py: StartOptions, FinishOptions
"""

from .options import FinishOptions, StartOptions
from .workflow import GitFlowWorkflow
from .hotfix import Hotfix, finish_hotfix, start_hotfix
from .release import Release, finish_release, start_release
from .client import Flow, FlowSync

__all__ = [
    "FinishOptions",
    "StartOptions",
    "GitFlowWorkflow",
    "Hotfix",
    "Release",
    "Flow",
    "FlowSync",
    "start_hotfix",
    "finish_hotfix",
    "start_release",
    "finish_release",
]
