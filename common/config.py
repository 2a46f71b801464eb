"""Configuration management for the record dashboard."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Configuration settings for the record dashboard."""
    
    # JSON array file backing the record collection
    db_path: str = "./data/db.json"
    
    # Which record kind the store holds (see records.RECORD_KINDS)
    record_kind: str = "pet"
    
    # Input pump tick interval; drives redraws and edit previews
    tick_rate_ms: int = 200
    
    # Store retry settings for transient I/O errors
    store_retries: int = 3
    store_retry_backoff_ms: int = 50
    
    # How long a footer notice stays visible
    notice_ttl_s: float = 3.0
    
    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def tick_rate(self) -> float:
        """Tick interval in seconds."""
        return self.tick_rate_ms / 1000.0

    @property
    def store_retry_backoff(self) -> float:
        """Initial retry backoff in seconds."""
        return self.store_retry_backoff_ms / 1000.0
