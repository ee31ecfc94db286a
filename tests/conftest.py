"""Shared fixtures: a platform on a fake clock with funded, eligible identities."""

import pytest
from fastapi.testclient import TestClient

from bountyqa.config import Settings
from bountyqa.engine import Platform, set_platform
from bountyqa.main import app


START_TIME = 1_700_000_000
UNIT = 10**6  # one token, 6 decimals
ELIGIBLE = 10**15


class FakeClock:
    """Manually advanced unix-seconds clock."""

    def __init__(self, now: int = START_TIME):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def platform(settings, clock):
    """Platform where alice..frank hold funds and the minimum native balance."""
    p = Platform(settings=settings, clock=clock)
    for identity in ("alice", "bob", "carol", "dave", "erin", "frank"):
        p.fund_ledger.deposit(identity, 100 * UNIT)
        p.balance_oracle.set_balance(identity, ELIGIBLE)
    return p


@pytest.fixture
def client(platform):
    set_platform(platform)
    yield TestClient(app)
    set_platform(None)