"""Question lifecycle: asking, funding, and the four monetary exits.

Every action runs its checks and its mutations in one store transaction, so
two callers racing on the same question cannot both pass a check.
Each exit first commits the terminal state, then moves funds. A rejected
transfer raises ``FundTransferFailed`` inside the same store transaction, which
rolls the whole action back, so a question is never left finalized but unpaid.
"""

import logging
from typing import Callable

from bountyqa.config import Settings
from bountyqa.database import Store
from bountyqa.exceptions import (
    AlreadyDistributed, AlreadyFinalized, AlreadySelected, AnswerMismatch,
    AnswersExist, FundTransferFailed, GoodAnswersExist, InvalidDuration,
    NoAnswers, NoBounty, NoPool, NotExpired, NotOwner, QuestionNotFound,
    ZeroAmount
)
from bountyqa.models.answer import ContentKey, ContentKind
from bountyqa.models.question import (
    PoolDistribution, Question, QuestionIndex, QuestionStatus
)
from bountyqa.services.answers import AnswerRegistry
from bountyqa.services.ledger import FundLedger
from bountyqa.services.pool import PoolDistributionEngine
from bountyqa.services.reputation import ReputationLedger
from bountyqa.services.treasury import FeeTreasury

logger = logging.getLogger(__name__)


ASK_REWARD = 1
BEST_ANSWER_REWARD = 10


class QuestionRegistry:
    """Creates questions and settles their locked rewards."""
    
    def __init__(
        self,
        store: Store,
        ledger: FundLedger,
        treasury: FeeTreasury,
        reputation: ReputationLedger,
        answers: AnswerRegistry,
        pool_engine: PoolDistributionEngine,
        settings: Settings,
        clock: Callable[[], int]
    ):
        self.store = store
        self.ledger = ledger
        self.treasury = treasury
        self.reputation = reputation
        self.answers = answers
        self.pool_engine = pool_engine
        self.settings = settings
        self.clock = clock
        reputation.authorize(self)
    
    # Reads
    
    def get_question(self, question_id: int) -> Question:
        question = self.store.questions.get(question_id)
        if question is None:
            raise QuestionNotFound("Question not found", {"question_id": question_id})
        return question
    
    def list_questions(self) -> QuestionIndex:
        index = QuestionIndex()
        for question_id in sorted(self.store.questions):
            q = self.store.questions[question_id]
            index.ids.append(q.id)
            index.content_refs.append(q.content_ref)
            index.creators.append(q.owner)
            index.amounts.append(q.effective_amount)
            index.is_pool.append(q.is_pool)
            index.is_active.append(q.is_active)
            index.created_at.append(q.created_at)
        return index
    
    def is_pool_expired(self, question_id: int) -> bool:
        question = self.get_question(question_id)
        return question.is_pool and self.clock() >= question.pool_end_time
    
    def preview_distribution(self, question_id: int) -> PoolDistribution:
        """Payouts ``distribute_pool`` would make right now."""
        question = self.get_question(question_id)
        if not question.is_pool:
            raise NoPool("Not a pool question", {"question_id": question_id})
        return self.pool_engine.compute_distribution(question)
    
    # Helpers
    
    def _require_owner(self, question: Question, caller: str) -> None:
        if caller != question.owner:
            raise NotOwner("Only the question owner can do this", {"question_id": question.id})
    
    def _lock(self, payer: str, amount: int) -> None:
        if not self.ledger.lock(payer, amount):
            raise FundTransferFailed("Could not lock funds", {"payer": payer, "amount": amount})
    
    def _pay(self, recipient: str, amount: int) -> None:
        if amount and not self.ledger.pay(recipient, amount):
            raise FundTransferFailed("Payout rejected", {"recipient": recipient, "amount": amount})
    
    def _take_fee(self, amount: int) -> int:
        """Accrue the fee on ``amount`` and return what is left."""
        fee = self.treasury.fee_for(amount)
        self.treasury.accrue(fee)
        return amount - fee
    
    # Actions
    
    def create_question(
        self,
        content_ref: str,
        amount: int,
        pool_duration: int,
        is_pool: bool,
        owner: str
    ) -> Question:
        """Ask a question, locking ``amount`` as its bounty or pool."""
        if amount == 0:
            raise ZeroAmount("Reward amount must be nonzero")
        
        settings = self.settings
        if is_pool and not (settings.min_pool_duration <= pool_duration <= settings.max_pool_duration):
            raise InvalidDuration(
                "Pool duration out of range",
                {
                    "pool_duration": pool_duration,
                    "min": settings.min_pool_duration,
                    "max": settings.max_pool_duration
                }
            )
        
        with self.store.transaction():
            now = self.clock()
            self._lock(owner, amount)
            
            question = Question(
                id=self.store.allocate_question_id(),
                owner=owner,
                content_ref=content_ref,
                bounty_amount=0 if is_pool else amount,
                pool_amount=amount if is_pool else 0,
                pool_end_time=now + pool_duration if is_pool else 0,
                created_at=now
            )
            self.store.put("questions", question.id, question)
            self.reputation.adjust_reputation(owner, ASK_REWARD, caller=self)
        
        logger.info(
            "Question %d created by %s (%s %d)",
            question.id, owner, "pool" if is_pool else "bounty", amount
        )
        return question
    
    def increase_bounty(self, question_id: int, extra: int, caller: str) -> Question:
        """Add ``extra`` to an open bounty. Anyone may contribute."""
        if extra == 0:
            raise ZeroAmount("Bounty increase must be nonzero")
        
        with self.store.transaction():
            question = self.get_question(question_id)
            if question.is_pool:
                raise NoBounty("Pool questions have no bounty", {"question_id": question_id})
            if question.status != QuestionStatus.OPEN:
                raise AlreadyFinalized("Bounty already settled", {"status": question.status.value})
            
            self._lock(caller, extra)
            self.store.touch("questions", question_id)
            question.bounty_amount += extra
        
        return question
    
    def select_best_answer(self, question_id: int, answer_id: int, caller: str) -> Question:
        """Pay the bounty, less the fee, to the chosen answer's provider."""
        with self.store.transaction():
            question = self.get_question(question_id)
            self._require_owner(question, caller)
            
            if question.selected_answer_id != 0:
                raise AlreadySelected("Bounty already settled", {"status": question.status.value})
            if question.bounty_amount == 0:
                raise NoBounty("Question has no bounty", {"question_id": question_id})
            
            answer = self.answers.get_answer(answer_id)
            if answer.question_id != question_id:
                raise AnswerMismatch(
                    "Answer belongs to another question",
                    {"answer_id": answer_id, "question_id": answer.question_id}
                )
            
            bounty = question.bounty_amount
            self.store.touch("questions", question_id)
            question.status = QuestionStatus.BEST_ANSWER_SELECTED
            question.selected_answer = answer_id
            question.bounty_amount = 0
            
            payout = self._take_fee(bounty)
            self._pay(answer.provider, payout)
            self.store.put("awarded", answer_id, payout)
            self.reputation.adjust_reputation(answer.provider, BEST_ANSWER_REWARD, caller=self)
        
        logger.info(
            "Question %d: answer %d selected, %d paid to %s",
            question_id, answer_id, payout, answer.provider
        )
        return question
    
    def withdraw_bounty(self, question_id: int, caller: str) -> Question:
        """Return an unanswered bounty, less the fee, to its owner."""
        with self.store.transaction():
            question = self.get_question(question_id)
            self._require_owner(question, caller)
            
            if question.is_pool or question.bounty_amount == 0 or question.status != QuestionStatus.OPEN:
                raise NoBounty("No bounty to withdraw", {"question_id": question_id})
            if question.answer_ids:
                raise AnswersExist(
                    "Cannot withdraw once answers exist",
                    {"answers": len(question.answer_ids)}
                )
            
            bounty = question.bounty_amount
            self.store.touch("questions", question_id)
            question.status = QuestionStatus.BOUNTY_WITHDRAWN
            question.bounty_amount = 0
            
            refund = self._take_fee(bounty)
            self._pay(question.owner, refund)
        
        logger.info("Question %d: bounty withdrawn, %d returned to %s", question_id, refund, question.owner)
        return question
    
    def _check_pool_settleable(self, question: Question) -> None:
        if not question.is_pool:
            raise NoPool("Not a pool question", {"question_id": question.id})
        if question.pool_distributed:
            raise AlreadyDistributed("Pool already settled", {"status": question.status.value})
        if question.pool_amount == 0:
            raise NoPool("Pool is empty", {"question_id": question.id})
        if self.clock() < question.pool_end_time:
            raise NotExpired("Pool has not expired", {"pool_end_time": question.pool_end_time})
    
    def distribute_pool(self, question_id: int, caller: str) -> PoolDistribution:
        """Pay an expired pool out to its top-ranked answers. Anyone may trigger."""
        with self.store.transaction():
            question = self.get_question(question_id)
            self._check_pool_settleable(question)
            if not question.answer_ids:
                raise NoAnswers("Pool has no answers to reward", {"question_id": question_id})
            
            distribution = self.pool_engine.compute_distribution(question)
            self.store.touch("questions", question_id)
            question.status = QuestionStatus.POOL_DISTRIBUTED
            question.pool_amount = 0
            
            self.treasury.accrue(distribution.fee)
            for payout in distribution.payouts:
                self._pay(payout.provider, payout.amount)
                self.store.put("awarded", payout.answer_id, payout.amount)
        
        logger.info(
            "Question %d: pool distributed by %s to %d winners",
            question_id, caller, len(distribution.payouts)
        )
        return distribution
    
    def withdraw_pool(self, question_id: int, caller: str) -> Question:
        """Return an expired pool with no well-received answers to its owner."""
        with self.store.transaction():
            question = self.get_question(question_id)
            self._require_owner(question, caller)
            self._check_pool_settleable(question)
            
            for answer_id in question.answer_ids:
                tally = self.store.tally(ContentKey(question_id, answer_id, ContentKind.ANSWER))
                if tally.upvotes > tally.downvotes:
                    raise GoodAnswersExist(
                        "An answer has more upvotes than downvotes",
                        {"answer_id": answer_id}
                    )
            
            pool = question.pool_amount
            self.store.touch("questions", question_id)
            question.status = QuestionStatus.POOL_WITHDRAWN
            question.pool_amount = 0
            
            refund = self._take_fee(pool)
            self._pay(question.owner, refund)
        
        logger.info("Question %d: pool withdrawn, %d returned to %s", question_id, refund, question.owner)
        return question
