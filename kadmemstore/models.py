"""Data types shared by the store and its read streams."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Entry:
    """A single key/value pair emitted by a read stream."""
    
    key: str
    # None when the key was deleted after the stream took its snapshot
    value: Optional[str]
    
    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
        }
    
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        return cls(
            key=data["key"],
            value=data.get("value"),
        )
