"""
One-tick deferral on the asyncio event loop.

Every completion the store reports goes through ``defer`` so callers never
see a callback invoked during the call that registered it.
"""

import asyncio
from typing import Any, Callable, Optional


def resolve_loop(loop: Optional[asyncio.AbstractEventLoop] = None) -> asyncio.AbstractEventLoop:
    """Return the pinned loop, or the loop running in this thread."""
    if loop is not None:
        return loop
    return asyncio.get_running_loop()


def defer(
    fn: Callable[..., Any],
    *args: Any,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> asyncio.Handle:
    """
    Schedule ``fn(*args)`` for the next iteration of the event loop.
    
    Args:
        fn: Callable to run later
        *args: Positional arguments for fn
        loop: Optional loop to schedule on (defaults to the running loop)
        
    Returns:
        Handle that can cancel the scheduled call
        
    Raises:
        RuntimeError: If no loop is given and none is running
    """
    return resolve_loop(loop).call_soon(fn, *args)
