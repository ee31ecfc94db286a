"""Wallet and treasury router."""

from fastapi import APIRouter, HTTPException, Depends
from bountyqa.engine import get_platform
from bountyqa.models.ledger import DepositRequest, TreasuryInfo, WalletInfo
from bountyqa.routers.auth import require_identity
from bountyqa.services.ledger import InMemoryFundLedger

router = APIRouter(prefix="/wallet", tags=["Wallet"])


def _wallet(identity: str) -> WalletInfo:
    platform = get_platform()
    return WalletInfo(
        identity=identity,
        balance=platform.fund_ledger.balance_of(identity),
        native_balance=platform.balance_oracle.native_balance(identity),
        can_participate=platform.reputation.can_participate(identity)
    )


@router.get("", response_model=WalletInfo)
async def get_wallet(identity: str = Depends(require_identity)):
    """Get current caller's wallet info."""
    return _wallet(identity)


@router.post("/deposit", response_model=WalletInfo)
async def deposit(
    data: DepositRequest,
    identity: str = Depends(require_identity)
):
    """Mock deposit into the in-memory ledger (for demos)."""
    platform = get_platform()
    settings = platform.settings
    
    if not isinstance(platform.fund_ledger, InMemoryFundLedger):
        raise HTTPException(status_code=400, detail="Deposits go through the external ledger")
    
    if data.amount > settings.max_deposit:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {settings.max_deposit} units per deposit"
        )
    
    platform.fund_ledger.deposit(identity, data.amount)
    return _wallet(identity)


@router.get("/treasury", response_model=TreasuryInfo)
async def get_treasury():
    """Get accrued platform fees."""
    treasury = get_platform().treasury
    return TreasuryInfo(owner=treasury.owner, balance=treasury.balance())


@router.post("/treasury/withdraw", response_model=TreasuryInfo)
async def withdraw_treasury(identity: str = Depends(require_identity)):
    """Withdraw all accrued fees (platform owner only)."""
    treasury = get_platform().treasury
    treasury.withdraw(identity)
    return TreasuryInfo(owner=treasury.owner, balance=treasury.balance())
