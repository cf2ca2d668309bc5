"""Configuration settings for eacc-mcp."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DEFAULT_RPC_URL = "https://arb1.arbitrum.io/rpc"


class Settings(BaseSettings):
    """Server settings loaded from environment (``EACC_`` prefix)."""

    # Chain
    rpc_url: str = Field(
        DEFAULT_RPC_URL,
        validation_alias=AliasChoices("EACC_RPC_URL", "ARBITRUM_RPC_URL"),
    )
    marketplace_address: str | None = None  # Required by the chain source
    rpc_timeout: float = Field(30.0, gt=0)

    # Query engine
    chunk_size: int = Field(20, ge=1, le=500)
    search_oversample: int = Field(3, ge=1, le=100)  # search scans limit * this many jobs
    default_limit: int = Field(10, ge=1)
    max_limit: int = Field(100, ge=1)

    # Rendering
    payment_unit: str = "ETH"

    # Logging
    log_level: str = "WARNING"
    log_to_file: bool = False
    data_dir: Path = Path.home() / ".eacc-mcp"

    class Config:
        env_prefix = "EACC_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars not in model
        populate_by_name = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
