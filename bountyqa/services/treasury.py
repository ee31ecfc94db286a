"""Platform fee treasury."""

import logging

from bountyqa.config import FEE_DENOMINATOR
from bountyqa.database import Store
from bountyqa.exceptions import FundTransferFailed, NotAuthorized
from bountyqa.services.ledger import FundLedger

logger = logging.getLogger(__name__)


def fee_for(amount: int, fee_bps: int) -> int:
    """Platform fee on a locked amount, rounded down."""
    return amount * fee_bps // FEE_DENOMINATOR


class FeeTreasury:
    """Running total of accrued fees, held in custody until withdrawn."""
    
    def __init__(self, store: Store, ledger: FundLedger, owner: str, fee_bps: int):
        self.store = store
        self.ledger = ledger
        self.owner = owner
        self.fee_bps = fee_bps
    
    def fee_for(self, amount: int) -> int:
        return fee_for(amount, self.fee_bps)
    
    def balance(self) -> int:
        return self.store.treasury_balance
    
    def accrue(self, amount: int) -> None:
        with self.store.transaction():
            self.store.treasury_balance += amount
    
    def withdraw(self, caller: str) -> int:
        """
        Pay the whole fee balance to the platform owner.
        
        Returns the amount withdrawn.
        """
        if caller != self.owner:
            raise NotAuthorized("Only the platform owner can withdraw fees", {"caller": caller})
        
        with self.store.transaction():
            amount = self.store.treasury_balance
            self.store.treasury_balance = 0
            
            if amount and not self.ledger.pay(self.owner, amount):
                raise FundTransferFailed("Fee withdrawal transfer rejected", {"amount": amount})
        
        logger.info("Treasury withdrawal of %d to %s", amount, self.owner)
        return amount
