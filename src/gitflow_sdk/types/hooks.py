"""Git Flow Types - Callback Signatures.

Every hook may be a plain function or a coroutine function. Workflows await
awaitable results before moving on, so a slow hook stalls the pipeline.

Hook kinds:
    - Observation hooks (post_checkout_hook, before_merge_callback):
      the return value is discarded.
    - Transforming hooks (post_develop_merge_callback, post_master_merge_callback):
      the return value replaces the merge result flowing through the pipeline.
    - Engine hooks (process_merge_message_callback, signing_callback):
      handed to the version-control engine during a merge.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional, Union

# (old_head_oid, new_head_oid) -> ignored
PostCheckoutHook = Callable[[str, str], Union[None, Awaitable[None]]]

# (target_branch_name, source_branch_name) -> ignored
BeforeMergeCallback = Callable[[str, str], Any]

# (merge_result) -> new merge_result
PostMergeCallback = Callable[[Any], Any]

# (default_message) -> message
ProcessMergeMessageCallback = Callable[[str], Union[str, Awaitable[str]]]

# (raw_commit_content) -> ASCII-armored signature, or None to leave unsigned
SigningCallback = Callable[[str], Union[Optional[str], Awaitable[Optional[str]]]]


def noop(*args: Any, **kwargs: Any) -> None:
    """Default observation hook."""
    return None


def identity(value: Any) -> Any:
    """Default transforming hook: passes the merge result through unchanged."""
    return value
