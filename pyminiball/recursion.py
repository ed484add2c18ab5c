"""Temporarily raise the interpreter recursion limit around a deep recursive call.

Welzl's recursive driver nests once per input point, so a few thousand points
already exceed CPython's default limit of 1000. On CPython >= 3.11 pure-Python
calls do not consume C stack, so raising the limit is all that is needed to
grow the usable stack.
"""

import inspect
import logging
import sys
import threading
from typing import Optional

from pyminiball.config import MAX_RECURSION_DEPTH, RECURSION_RED_ZONE
from pyminiball.errors import RecursionDepthError

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_active = 0
_saved_limit: Optional[int] = None


def current_depth() -> int:
    """Number of frames on the calling thread's stack."""
    depth = 0
    frame = inspect.currentframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


class RecursionGuard:
    """
    Context manager ensuring ``depth`` further nested calls fit under the
    recursion limit.

    Guards are reference counted: the limit is only ever raised while any
    guard is active, and the original limit is restored when the last one
    exits.
    """

    def __init__(self, depth: int, red_zone: int = RECURSION_RED_ZONE):
        """
        Parameters
        ----------
        depth : int
            Number of nested calls the guarded block will make.
        red_zone : int, optional
            Extra frames kept free for callees such as numpy and scipy wrappers.
        """
        if depth < 0:
            raise ValueError("depth must be non-negative")
        if depth > MAX_RECURSION_DEPTH:
            raise RecursionDepthError(
                f"recursion depth {depth} exceeds the supported maximum of "
                f"{MAX_RECURSION_DEPTH}; use method='iterative'"
            )
        self.depth = depth
        self.red_zone = red_zone
        self.raised = False

    def __enter__(self) -> "RecursionGuard":
        global _active, _saved_limit
        needed = current_depth() + self.depth + self.red_zone
        with _lock:
            if _active == 0:
                _saved_limit = sys.getrecursionlimit()
            _active += 1
            limit = sys.getrecursionlimit()
            if needed > limit:
                logger.warning(
                    "Raising recursion limit from %d to %d for a depth-%d recursion",
                    limit,
                    needed,
                    self.depth,
                )
                sys.setrecursionlimit(needed)
                self.raised = True
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        global _active, _saved_limit
        with _lock:
            _active -= 1
            if _active == 0:
                if _saved_limit is not None and sys.getrecursionlimit() != _saved_limit:
                    sys.setrecursionlimit(_saved_limit)
                _saved_limit = None
