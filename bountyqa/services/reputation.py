"""Reputation ledger: scores, vote tallies and participation gating."""

import logging
from typing import List, Tuple

from bountyqa.database import Store
from bountyqa.exceptions import (
    DuplicateVote, InsufficientEligibility, NotAuthorized, SelfVoteForbidden
)
from bountyqa.models.answer import ContentKey, ContentKind, VoteTally
from bountyqa.models.reputation import ReputationRecord, ReputationStats
from bountyqa.services.ledger import BalanceOracle

logger = logging.getLogger(__name__)


UPVOTE_REWARD = 2
DOWNVOTE_PENALTY = -1


class ReputationLedger:
    """Per-identity reputation and per-content vote tallies."""
    
    def __init__(self, store: Store, oracle: BalanceOracle, min_balance: int):
        self.store = store
        self.oracle = oracle
        self.min_balance = min_balance
        self._authorized: set = set()
    
    def authorize(self, component: object) -> None:
        """Allow ``component`` to call ``adjust_reputation``."""
        self._authorized.add(id(component))
    
    def can_participate(self, identity: str) -> bool:
        """True if the identity holds at least the minimum native balance."""
        return self.oracle.native_balance(identity) >= self.min_balance
    
    def get_reputation(self, identity: str) -> ReputationRecord:
        record = self.store.reputation.get(identity)
        return record.model_copy() if record else ReputationRecord()
    
    def _record(self, identity: str) -> ReputationRecord:
        """Record for ``identity``, logged for rollback before it is changed."""
        self.store.touch("reputation", identity)
        return self.store.reputation.setdefault(identity, ReputationRecord())
    
    def _apply(self, identity: str, delta: int) -> int:
        record = self._record(identity)
        record.score = max(0, record.score + delta)
        return record.score
    
    def adjust_reputation(self, identity: str, delta: int, caller: object) -> int:
        """
        Apply a signed delta to an identity's score, clamped at zero.
        
        Only components registered through ``authorize`` may call this.
        Returns the new score.
        """
        if id(caller) not in self._authorized:
            raise NotAuthorized("Caller may not adjust reputation")
        with self.store.transaction():
            return self._apply(identity, delta)
    
    def cast_vote(
        self,
        question_id: int,
        answer_id: int,
        content_kind: ContentKind,
        is_upvote: bool,
        content_owner: str,
        voter: str
    ) -> VoteTally:
        """
        Record a permanent vote and move the content owner's reputation.
        
        Upvotes give the owner +2, downvotes cost -1 (never below zero).
        Votes cannot be changed or withdrawn.
        """
        key = ContentKey(question_id, answer_id, ContentKind(content_kind))
        
        with self.store.transaction():
            if not self.can_participate(voter):
                raise InsufficientEligibility(
                    "Voter does not hold the minimum balance",
                    {"voter": voter, "minimum": self.min_balance}
                )
            if voter == content_owner:
                raise SelfVoteForbidden("Cannot vote on your own content")
            if (key, voter) in self.store.vote_records:
                raise DuplicateVote("Already voted on this content", {"voter": voter})
            
            self.store.add("vote_records", (key, voter))
            self.store.touch("tallies", key)
            tally = self.store.tallies.setdefault(key, VoteTally())
            if is_upvote:
                tally.upvotes += 1
                self._apply(content_owner, UPVOTE_REWARD)
            else:
                tally.downvotes += 1
                self._apply(content_owner, DOWNVOTE_PENALTY)
            self._record(voter).votes_cast += 1
            return tally.model_copy()
    
    def get_tally(
        self,
        question_id: int,
        answer_id: int,
        content_kind: ContentKind
    ) -> Tuple[int, int]:
        """Return (upvotes, downvotes) for a content key."""
        tally = self.store.tally(ContentKey(question_id, answer_id, ContentKind(content_kind)))
        return tally.upvotes, tally.downvotes
    
    def leaderboard(self, limit: int = 20, offset: int = 0) -> List[ReputationStats]:
        """Identities ranked by score, ties broken by identity."""
        asked: dict = {}
        for q in self.store.questions.values():
            asked[q.owner] = asked.get(q.owner, 0) + 1
        given: dict = {}
        for a in self.store.answers.values():
            given[a.provider] = given.get(a.provider, 0) + 1
        
        ranked = sorted(
            self.store.reputation.items(),
            key=lambda item: (-item[1].score, item[0])
        )
        
        results = []
        for rank, (identity, record) in enumerate(ranked[offset:offset + limit], start=offset + 1):
            results.append(ReputationStats(
                identity=identity,
                score=record.score,
                votes_cast=record.votes_cast,
                rank=rank,
                questions_asked=asked.get(identity, 0),
                answers_given=given.get(identity, 0)
            ))
        
        return results
