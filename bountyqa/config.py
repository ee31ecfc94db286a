"""Configuration settings for the BountyQA engine."""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


FEE_DENOMINATOR = 10_000
TOKEN_DECIMALS = 6


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Fees
    fee_bps: int = 200
    
    # Pool questions (seconds)
    min_pool_duration: int = 60 * 60
    max_pool_duration: int = 30 * 24 * 60 * 60
    max_pool_winners: int = 3
    
    # Eligibility gate: 0.001 of the native unit (18 decimals)
    min_participation_balance: int = 10**15
    
    # Treasury
    platform_owner: str = "platform"
    
    # In-memory collaborators
    default_native_balance: int = 0
    max_deposit: int = 1_000 * 10**TOKEN_DECIMALS
    
    log_level: str = "INFO"
    
    # Browser frontends allowed to call the API
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
