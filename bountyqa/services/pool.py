"""Weighted payout computation for pool questions.

Two computations live here and they are deliberately not the same:

* ``compute_distribution`` is what ``distribute_pool`` pays. Only the top
  ``max_winners`` answers take part, weights use the positive scores inside
  that winner set, and the rounding remainder goes to the rank-0 winner.
* ``preview_prize`` is the per-answer figure shown before distribution. Its
  weights use the positive scores of *all* answers and it does no remainder
  correction, so with more than ``max_winners`` answers it can disagree with
  the final payout.
"""

from typing import List

from bountyqa.database import Store
from bountyqa.models.answer import ContentKey, ContentKind
from bountyqa.models.question import PoolDistribution, PoolPayout, Question
from bountyqa.services.treasury import fee_for


class PoolDistributionEngine:
    """Read-only ranking and share computation over store state."""
    
    def __init__(self, store: Store, fee_bps: int, max_winners: int = 3):
        self.store = store
        self.fee_bps = fee_bps
        self.max_winners = max_winners
    
    def score(self, question_id: int, answer_id: int) -> int:
        return self.store.tally(ContentKey(question_id, answer_id, ContentKind.ANSWER)).score
    
    def rank_answers(self, question: Question) -> List[int]:
        """Answer ids by score descending; earlier submissions win ties."""
        # sorted() is stable, so equal scores keep submission order
        return sorted(question.answer_ids, key=lambda a: -self.score(question.id, a))
    
    def compute_distribution(self, question: Question) -> PoolDistribution:
        """Split the post-fee pool among the winner set.
        
        Shares always sum to exactly ``pool_amount - fee``.
        """
        pool = question.pool_amount
        fee = fee_for(pool, self.fee_bps)
        distribution_amount = pool - fee
        
        winners = self.rank_answers(question)[:self.max_winners]
        scores = [self.score(question.id, a) for a in winners]
        total_score = sum(s for s in scores if s > 0)
        
        if not winners:
            shares = []
        elif total_score > 0:
            shares = [
                distribution_amount * s // total_score if s > 0 else 0
                for s in scores
            ]
            shares[0] += distribution_amount - sum(shares)
        else:
            base, remainder = divmod(distribution_amount, len(winners))
            shares = [base + (1 if rank < remainder else 0) for rank in range(len(winners))]
        
        payouts = [
            PoolPayout(
                rank=rank,
                answer_id=answer_id,
                provider=self.store.answers[answer_id].provider,
                score=score,
                amount=share
            )
            for rank, (answer_id, score, share) in enumerate(zip(winners, scores, shares))
        ]
        
        return PoolDistribution(
            question_id=question.id,
            pool_amount=pool,
            fee=fee,
            distribution_amount=distribution_amount,
            payouts=payouts
        )
    
    def preview_prize(self, question: Question, answer_id: int) -> int:
        """Display estimate of one answer's share, weighted across all answers."""
        if not question.is_pool or not question.is_active or not question.pool_amount:
            return 0
        
        score = self.score(question.id, answer_id)
        if score <= 0:
            return 0
        
        total_score = sum(
            max(self.score(question.id, a), 0) for a in question.answer_ids
        )
        distribution_amount = question.pool_amount - fee_for(question.pool_amount, self.fee_bps)
        return distribution_amount * score // total_score
