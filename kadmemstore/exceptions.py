"""
Memory store exceptions.

All store exceptions inherit from MemStoreError for easy catching.
"""


class MemStoreError(Exception):
    """Base exception for all memory store errors."""
    
    def __init__(self, message: str, code: str = "MEMSTORE_ERROR"):
        super().__init__(message)
        self.code = code
        self.message = message


class ContractViolation(MemStoreError, TypeError):
    """Caller passed an argument of the wrong type or shape.
    
    Raised synchronously at the call site, never delivered to a callback.
    """
    
    def __init__(self, message: str):
        super().__init__(message, "CONTRACT_VIOLATION")


class KeyNotFoundError(MemStoreError):
    """No entry exists for the requested key."""
    
    def __init__(self, message: str = "Key not found", key: str = None):
        super().__init__(message, "KEY_NOT_FOUND")
        self.key = key


class StoreFullError(MemStoreError):
    """Store reached its configured entry limit."""
    
    def __init__(self, message: str, limit: int = None):
        super().__init__(message, "STORE_FULL")
        self.limit = limit
