"""Tests for fee accrual and treasury withdrawal."""

import pytest

from bountyqa.exceptions import FundTransferFailed, NotAuthorized
from bountyqa.services.treasury import fee_for

from conftest import UNIT


@pytest.fixture
def funded_treasury(platform):
    """Treasury holding the fee from one withdrawn bounty."""
    question = platform.questions.create_question("ipfs://q", UNIT, 0, False, "alice")
    platform.questions.withdraw_bounty(question.id, "alice")
    return platform.treasury


class TestFeeFor:

    @pytest.mark.parametrize("amount,fee", [
        (1_000_000, 20_000),
        (1_000_003, 20_000),
        (49, 0),
        (50, 1),
        (0, 0),
    ])
    def test_two_percent_rounded_down(self, amount, fee):
        assert fee_for(amount, 200) == fee


class TestWithdraw:

    def test_owner_receives_everything(self, platform, funded_treasury):
        amount = funded_treasury.withdraw("platform")

        assert amount == 20_000
        assert funded_treasury.balance() == 0
        assert platform.fund_ledger.balance_of("platform") == 20_000
        assert platform.fund_ledger.balance_of("__custody__") == 0

    def test_only_owner(self, funded_treasury):
        with pytest.raises(NotAuthorized):
            funded_treasury.withdraw("alice")

        assert funded_treasury.balance() == 20_000

    def test_empty_treasury(self, platform):
        assert platform.treasury.withdraw("platform") == 0

    def test_rejected_transfer_keeps_balance(self, platform, funded_treasury):
        platform.fund_ledger.frozen.add("platform")

        with pytest.raises(FundTransferFailed):
            funded_treasury.withdraw("platform")

        assert funded_treasury.balance() == 20_000

    def test_accrues_across_exits(self, platform, clock, funded_treasury):
        pool = platform.questions.create_question("ipfs://p", 2 * UNIT, 60 * 60, True, "bob")
        clock.advance(60 * 60)
        platform.questions.withdraw_pool(pool.id, "bob")

        assert funded_treasury.balance() == 60_000
