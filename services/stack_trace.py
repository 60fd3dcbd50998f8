"""
services/stack_trace.py
-----------------------
Turns an error passed to the logger into a one-line diagnostic that
points at the code which called the logger.
"""

import inspect
from typing import Optional


def capture_stack_trace(err: Optional[BaseException], depth: int = 1) -> str:
    """
    Describe `err` together with the source location of the logger's caller.

    Args:
        err: The error handed to the logger, or None.
        depth: Frames to walk up from the function calling this one.
            1 means "the caller of my caller".

    Returns:
        "" when `err` is None, otherwise
        "Error: <message> | File: <path> | Line: <n>", or just
        "Error: <message>" when the frame cannot be resolved.
    """
    if err is None:
        return ""

    frame = inspect.currentframe()
    try:
        target = frame.f_back if frame is not None else None
        for _ in range(depth):
            if target is None:
                break
            target = target.f_back
        if target is None:
            return f"Error: {err}"
        return f"Error: {err} | File: {target.f_code.co_filename} | Line: {target.f_lineno}"
    finally:
        del frame
