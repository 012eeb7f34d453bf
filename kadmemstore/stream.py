"""
Pull-driven read streams over a snapshot of store keys.

A stream captures the keys present when it is created and hands out one
Entry per pull. Nothing is produced until the consumer asks for it, and each
element is delivered one loop tick after the request.

Usage:
    stream = store.create_read_stream()

    # Pull-callback interface
    stream.read(lambda entry: print(entry))

    # Async iterator interface
    async for entry in store.create_read_stream():
        print(entry.key, entry.value)
"""

import asyncio
import logging
from enum import Enum, auto
from typing import Callable, Iterable, Optional

from .exceptions import ContractViolation
from .models import Entry
from .scheduler import defer, resolve_loop

logger = logging.getLogger(__name__)


class StreamState(Enum):
    """Lifecycle of a read stream."""

    IDLE = auto()
    PULLING = auto()
    EXHAUSTED = auto()


class ReadStream:
    """
    Lazy, finite, non-restartable enumeration of store entries.

    Values are looked up when an element is delivered, not when the snapshot
    is taken, so a key deleted in between yields an Entry with value None.
    """

    def __init__(
        self,
        keys: Iterable[str],
        lookup: Callable[[str], Optional[str]],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Initialize stream.

        Args:
            keys: Snapshot of keys to enumerate
            lookup: Returns the current value for a key, or None
            loop: Optional loop to deliver on (defaults to the running loop)
        """
        self._keys: list[str] = list(keys)
        self._lookup = lookup
        self._loop = loop
        self._index = 0
        # Keys handed back by cancelled pulls, re-emitted before the rest
        self._returned: list[str] = []
        self._state = StreamState.IDLE

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def remaining(self) -> int:
        """Number of snapshot keys not yet handed out."""
        return len(self._keys) - self._index + len(self._returned)

    def __len__(self) -> int:
        return len(self._keys)

    def read(self, callback: Callable[[Optional[Entry]], None]) -> None:
        """
        Pull the next entry.

        ``callback(entry)`` runs on the next loop tick; ``callback(None)``
        signals the end of the stream and repeats on every later pull.
        """
        if not callable(callback):
            raise ContractViolation("callback is not a valid function")

        if self._returned:
            key = self._returned.pop(0)
            self._state = StreamState.PULLING
            defer(self._push, key, callback, loop=self._loop)
            return

        if self._index >= len(self._keys):
            if self._state is not StreamState.EXHAUSTED:
                logger.debug(f"Read stream exhausted after {len(self._keys)} entries")
            self._state = StreamState.EXHAUSTED
            defer(callback, None, loop=self._loop)
            return

        # Claim the key now so back-to-back pulls never emit the same entry
        key = self._keys[self._index]
        self._index += 1
        self._state = StreamState.PULLING
        defer(self._push, key, callback, loop=self._loop)

    def _push(self, key: str, callback: Callable[[Optional[Entry]], None]) -> None:
        callback(Entry(key=key, value=self._lookup(key)))

    def __aiter__(self) -> "ReadStream":
        return self

    async def __anext__(self) -> Entry:
        future = resolve_loop(self._loop).create_future()

        def _deliver(entry: Optional[Entry]) -> None:
            if future.cancelled():
                if entry is not None:
                    self._returned.append(entry.key)
                return
            future.set_result(entry)

        self.read(_deliver)
        entry = await future
        if entry is None:
            raise StopAsyncIteration
        return entry
