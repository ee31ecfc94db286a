"""External collaborators: fund custody ledger and native balance oracle.

The engine only talks to these through the abstract interfaces. The in-memory
implementations back the API and the tests.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from bountyqa.database import Store

logger = logging.getLogger(__name__)


class FundLedger(ABC):
    """Moves value between identities and the platform's custody account.

    Amounts are unsigned integers with 6 decimals. Every method that moves
    funds reports success as a bool; callers must fail on ``False``.
    """

    @abstractmethod
    def lock(self, payer: str, amount: int) -> bool:
        """Move ``amount`` from ``payer`` into custody."""

    @abstractmethod
    def pay(self, recipient: str, amount: int) -> bool:
        """Move ``amount`` out of custody to ``recipient``."""

    @abstractmethod
    def balance_of(self, holder: str) -> int:
        ...


class BalanceOracle(ABC):
    """Reports an identity's native balance (18 decimals)."""

    @abstractmethod
    def native_balance(self, identity: str) -> int:
        ...


class InMemoryFundLedger(FundLedger):
    """Ledger whose balances live in the Store, so transactions cover them."""

    CUSTODY = "__custody__"

    def __init__(self, store: Store, frozen: Optional[Iterable[str]] = None):
        self.store = store
        self.frozen = set(frozen or ())

    def deposit(self, holder: str, amount: int) -> int:
        """Mint funds to a holder. Returns the new balance."""
        if amount <= 0:
            raise ValueError("Deposit amount must be positive")
        with self.store.transaction():
            balance = self.store.balances.get(holder, 0) + amount
            self.store.put("balances", holder, balance)
            return balance

    def _move(self, source: str, target: str, amount: int) -> bool:
        if amount < 0:
            return False
        if source in self.frozen or target in self.frozen:
            logger.warning("Transfer of %d from %s to %s rejected: frozen account", amount, source, target)
            return False
        with self.store.transaction():
            balances = self.store.balances
            if balances.get(source, 0) < amount:
                logger.warning("Transfer of %d from %s rejected: insufficient balance", amount, source)
                return False
            self.store.put("balances", source, balances.get(source, 0) - amount)
            self.store.put("balances", target, balances.get(target, 0) + amount)
        return True

    def lock(self, payer: str, amount: int) -> bool:
        return self._move(payer, self.CUSTODY, amount)

    def pay(self, recipient: str, amount: int) -> bool:
        return self._move(self.CUSTODY, recipient, amount)

    def balance_of(self, holder: str) -> int:
        return self.store.balances.get(holder, 0)


class InMemoryBalanceOracle(BalanceOracle):
    """Native balances set by hand, with a default for unknown identities."""

    def __init__(self, default: int = 0, balances: Optional[Dict[str, int]] = None):
        self.default = default
        self.balances: Dict[str, int] = dict(balances or {})

    def set_balance(self, identity: str, amount: int) -> None:
        self.balances[identity] = amount

    def native_balance(self, identity: str) -> int:
        return self.balances.get(identity, self.default)
