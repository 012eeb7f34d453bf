"""
kadmemstore - In-memory storage adapter for Kademlia DHT nodes.

Exposes the four storage operations a DHT host expects (get, put, del and
createReadStream) over a single in-memory map, with every completion
delivered asynchronously on the asyncio event loop.

Quick Start:
    from kadmemstore import MemStore
    
    store = MemStore()
    store.put("key", "value")
    
    value = await store.get_async("key")
    
    async for entry in store.create_read_stream():
        print(entry.key, entry.value)
"""

from .store import MemStore
from .stream import ReadStream, StreamState
from .models import Entry
from .config import MemStoreConfig, configure_logging
from .exceptions import (
    MemStoreError,
    ContractViolation,
    KeyNotFoundError,
    StoreFullError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "MemStore",
    "ReadStream",
    "StreamState",
    "Entry",
    "MemStoreConfig",
    "configure_logging",
    # Exceptions
    "MemStoreError",
    "ContractViolation",
    "KeyNotFoundError",
    "StoreFullError",
    # Version
    "__version__",
]
