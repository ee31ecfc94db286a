"""Wiring of the engine components around one Store."""

import time
from typing import Callable, Optional

from bountyqa.config import Settings, get_settings
from bountyqa.database import Store
from bountyqa.models.answer import AnswerWithPrize, ContentKind, VoteTally
from bountyqa.services.answers import AnswerRegistry
from bountyqa.services.ledger import (
    BalanceOracle, FundLedger, InMemoryBalanceOracle, InMemoryFundLedger
)
from bountyqa.services.pool import PoolDistributionEngine
from bountyqa.services.questions import QuestionRegistry
from bountyqa.services.reputation import ReputationLedger
from bountyqa.services.treasury import FeeTreasury


def system_clock() -> int:
    return int(time.time())


class Platform:
    """All engine components sharing a store, ledger, oracle and clock."""
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[Store] = None,
        fund_ledger: Optional[FundLedger] = None,
        balance_oracle: Optional[BalanceOracle] = None,
        clock: Optional[Callable[[], int]] = None
    ):
        self.settings = settings or get_settings()
        self.store = store or Store()
        self.clock = clock or system_clock
        self.fund_ledger = fund_ledger or InMemoryFundLedger(self.store)
        self.balance_oracle = balance_oracle or InMemoryBalanceOracle(
            default=self.settings.default_native_balance
        )
        
        self.reputation = ReputationLedger(
            self.store, self.balance_oracle, self.settings.min_participation_balance
        )
        self.treasury = FeeTreasury(
            self.store, self.fund_ledger, self.settings.platform_owner, self.settings.fee_bps
        )
        self.pool_engine = PoolDistributionEngine(
            self.store, self.settings.fee_bps, self.settings.max_pool_winners
        )
        self.answers = AnswerRegistry(self.store, self.reputation, self.clock)
        self.questions = QuestionRegistry(
            self.store,
            self.fund_ledger,
            self.treasury,
            self.reputation,
            self.answers,
            self.pool_engine,
            self.settings,
            self.clock
        )
    
    def vote_on_question(self, question_id: int, is_upvote: bool, voter: str) -> VoteTally:
        question = self.questions.get_question(question_id)
        return self.reputation.cast_vote(
            question_id, question_id, ContentKind.QUESTION, is_upvote, question.owner, voter
        )
    
    def vote_on_answer(self, answer_id: int, is_upvote: bool, voter: str) -> VoteTally:
        answer = self.answers.get_answer(answer_id)
        return self.reputation.cast_vote(
            answer.question_id, answer_id, ContentKind.ANSWER, is_upvote, answer.provider, voter
        )
    
    def answer_with_prize(self, answer_id: int) -> AnswerWithPrize:
        """Answer state with its tally, live prize preview and amount awarded."""
        answer = self.answers.get_answer(answer_id)
        question = self.questions.get_question(answer.question_id)
        upvotes, downvotes = self.reputation.get_tally(
            answer.question_id, answer_id, ContentKind.ANSWER
        )
        return AnswerWithPrize(
            **answer.model_dump(),
            upvotes=upvotes,
            downvotes=downvotes,
            prize_preview=self.pool_engine.preview_prize(question, answer_id),
            awarded=self.store.awarded.get(answer_id, 0)
        )


_platform: Optional[Platform] = None


def get_platform() -> Platform:
    """Get the process-wide platform instance."""
    global _platform
    
    if _platform is None:
        _platform = Platform()
    
    return _platform


def set_platform(platform: Optional[Platform]) -> None:
    """Replace the process-wide platform (``None`` rebuilds it lazily)."""
    global _platform
    _platform = platform
