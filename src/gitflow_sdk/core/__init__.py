"""Core utilities for gitflow-sdk."""

from .utils import call_hook, maybe_await, run_sync

__all__ = [
    "call_hook",
    "maybe_await",
    "run_sync",
]
