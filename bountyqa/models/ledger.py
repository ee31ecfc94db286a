"""Wallet, treasury and configuration views."""

from pydantic import BaseModel, Field


class WalletInfo(BaseModel):
    """An identity's funds as seen by the custody ledger."""
    identity: str
    balance: int
    native_balance: int
    can_participate: bool


class DepositRequest(BaseModel):
    """Mock deposit into the in-memory ledger."""
    amount: int = Field(gt=0)


class TreasuryInfo(BaseModel):
    """Accrued platform fees."""
    owner: str
    balance: int


class PlatformConstants(BaseModel):
    """Read-only configuration exposed to callers."""
    min_pool_duration: int
    max_pool_duration: int
    fee_bps: int
    fee_denominator: int
    max_pool_winners: int
    min_participation_balance: int
    token_decimals: int
