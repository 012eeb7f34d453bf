"""
Memory store configuration.

Provides sensible defaults with override capability.
"""

import logging
import os
from typing import Any

from pydantic import BaseModel, Field


class MemStoreConfig(BaseModel):
    """
    Configuration for the in-memory store.
    
    Environment variables override defaults (KADMEMSTORE_* prefix).
    """
    
    # Label used in logs and stats
    name: str = "kad-memstore"
    
    # 0 = unlimited
    max_entries: int = Field(default=0, ge=0)
    
    # Logging
    log_level: str = "INFO"

    def model_post_init(self, __context):
        """Apply environment variable overrides."""
        self._apply_env_overrides()
    
    def _apply_env_overrides(self):
        """Override config from environment variables."""
        env_map = {
            "KADMEMSTORE_NAME": ("name", str),
            "KADMEMSTORE_MAX_ENTRIES": ("max_entries", int),
            "KADMEMSTORE_LOG_LEVEL": ("log_level", str),
        }
        
        for env_var, (attr, type_fn) in env_map.items():
            value = os.environ.get(env_var)
            if value is not None:
                setattr(self, attr, type_fn(value))
        
        if self.max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {self.max_entries}")
        self.log_level = self.log_level.upper()
    
    def to_dict(self) -> dict[str, Any]:
        """Export config to dictionary."""
        return {
            "name": self.name,
            "max_entries": self.max_entries,
            "log_level": self.log_level,
        }
    
    @classmethod
    def development(cls) -> "MemStoreConfig":
        """Create development config with verbose logging."""
        return cls(
            name="dev-memstore",
            log_level="DEBUG",
        )
    
    @classmethod
    def production(cls) -> "MemStoreConfig":
        """Create production config with quiet logging."""
        return cls(
            name="prod-memstore",
            log_level="WARNING",
        )


def configure_logging(config: MemStoreConfig) -> None:
    """Configure root logging from a store config."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )
