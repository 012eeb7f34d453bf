"""
In-memory storage adapter for a Kademlia DHT.

This module provides the storage backend a DHT node plugs in for its
key-value data:
- Callback-style get/put/delete with one-tick deferred completion
- Pull-driven read streams over a snapshot of the stored keys
- Awaitable wrappers for coroutine callers

Usage:
    from kadmemstore import MemStore

    store = MemStore()
    store.put("x", "hello")
    store.get("x", lambda err, value=None: print(err, value))

    # Or from a coroutine
    value = await store.get_async("x")
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from .config import MemStoreConfig
from .exceptions import ContractViolation, KeyNotFoundError, StoreFullError
from .scheduler import defer, resolve_loop
from .stream import ReadStream

logger = logging.getLogger(__name__)

Callback = Callable[..., None]


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise ContractViolation("key is not a valid string")


def _check_value(value: Any) -> None:
    if not isinstance(value, str):
        raise ContractViolation("value is not a valid string")


def _check_callback(callback: Any, required: bool = False) -> None:
    if callback is None and not required:
        return
    if not callable(callback):
        raise ContractViolation("callback is not a valid function")


def _noop(*args: Any) -> None:
    pass


class MemStore:
    """
    In-memory key-value store with an asynchronous callback contract.

    Features:
    - Mutations apply synchronously, notifications arrive one tick later
    - Not-found is delivered as KeyNotFoundError through the callback
    - Bad arguments raise ContractViolation at the call site

    Callbacks receive the error (or None) first:
        get:    callback(None, value) / callback(KeyNotFoundError)
        put:    callback(None) / callback(StoreFullError)
        delete: callback(None) / callback(KeyNotFoundError)
    """

    def __init__(
        self,
        config: Optional[MemStoreConfig] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Initialize store.

        Args:
            config: Optional store configuration
            loop: Optional loop to deliver callbacks on (defaults to the
                loop running at call time)
        """
        self.config = config or MemStoreConfig()
        self._loop = loop
        self._data: dict[str, str] = {}

        logger.info(f"Memory store created: {self.config.name}")

    def get(self, key: str, callback: Callback) -> None:
        """
        Get an item from the store.

        Args:
            key: Storage key
            callback: Receives (None, value) or (KeyNotFoundError,)
        """
        _check_key(key)
        _check_callback(callback, required=True)
        defer(self._deliver_get, key, callback, loop=self._loop)

    def _deliver_get(self, key: str, callback: Callback) -> None:
        if key in self._data:
            callback(None, self._data[key])
        else:
            logger.debug(f"Get miss: {key}")
            callback(KeyNotFoundError(key=key))

    def put(self, key: str, value: str, callback: Optional[Callback] = None) -> None:
        """
        Put an item into the store.

        The mapping is updated before this method returns; only the
        notification is deferred.

        Args:
            key: Storage key
            value: Opaque string value
            callback: Optional, receives (None,) or (StoreFullError,)
        """
        _check_key(key)
        _check_value(value)
        _check_callback(callback)

        limit = self.config.max_entries
        if limit and key not in self._data and len(self._data) >= limit:
            error = StoreFullError(f"Store is full ({limit} entries)", limit=limit)
            if callback is None:
                logger.warning(f"Dropped put for {key}: {error.message}")
            else:
                defer(callback, error, loop=self._loop)
            return

        self._data[key] = value
        logger.debug(f"Put {key} ({len(value)} chars)")

        if callback is not None:
            defer(callback, None, loop=self._loop)

    def delete(self, key: str, callback: Optional[Callback] = None) -> None:
        """
        Delete an item from the store.

        Args:
            key: Storage key
            callback: Optional, receives (None,) or (KeyNotFoundError,).
                Without one, failures are discarded.
        """
        _check_key(key)
        _check_callback(callback)
        defer(self._deliver_delete, key, callback or _noop, loop=self._loop)

    # Host DHTs call the backend's ``del``, which is reserved in Python
    del_ = delete

    def _deliver_delete(self, key: str, callback: Callback) -> None:
        if key in self._data:
            del self._data[key]
            logger.debug(f"Deleted {key}")
            callback(None)
        else:
            logger.debug(f"Delete miss: {key}")
            callback(KeyNotFoundError(key=key))

    def create_read_stream(self) -> ReadStream:
        """
        Return a pull-driven stream over the keys present right now.

        Keys put after this call are not enumerated.
        """
        stream = ReadStream(list(self._data), self._data.get, loop=self._loop)
        logger.debug(f"Read stream opened over {len(stream)} keys")
        return stream

    createReadStream = create_read_stream

    # Awaitable wrappers

    async def get_async(self, key: str) -> str:
        """Async get; raises KeyNotFoundError if the key is absent."""
        future = resolve_loop(self._loop).create_future()

        def _done(error: Optional[Exception], value: Optional[str] = None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(value)

        self.get(key, _done)
        return await future

    async def put_async(self, key: str, value: str) -> None:
        """Async put; raises StoreFullError if the entry limit is reached."""
        future = resolve_loop(self._loop).create_future()
        self.put(key, value, lambda error: _settle(future, error))
        await future

    async def delete_async(self, key: str) -> None:
        """Async delete; raises KeyNotFoundError if the key is absent."""
        future = resolve_loop(self._loop).create_future()
        self.delete(key, lambda error: _settle(future, error))
        await future

    # Introspection

    def clear(self) -> int:
        """Remove every entry. Returns the number removed."""
        count = len(self._data)
        self._data.clear()
        logger.info(f"Cleared {count} entries from {self.config.name}")
        return count

    def get_stats(self) -> dict[str, Any]:
        """Get store statistics."""
        return {
            "name": self.config.name,
            "entries": len(self._data),
            "max_entries": self.config.max_entries,
        }

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def _settle(future: asyncio.Future, error: Optional[Exception]) -> None:
    # The awaiting task may have been cancelled before delivery
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(None)
