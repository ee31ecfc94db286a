"""Answer submission and lookup."""

import logging
from typing import Callable

from bountyqa.database import Store
from bountyqa.exceptions import (
    AlreadyAnswered, AnswerNotFound, NotEligible, QuestionClosed, QuestionNotFound
)
from bountyqa.models.answer import Answer
from bountyqa.services.reputation import ReputationLedger

logger = logging.getLogger(__name__)


ANSWER_REWARD = 1


class AnswerRegistry:
    """Creates answers and enforces one answer per identity per question."""
    
    def __init__(self, store: Store, reputation: ReputationLedger, clock: Callable[[], int]):
        self.store = store
        self.reputation = reputation
        self.clock = clock
        reputation.authorize(self)
    
    def get_answer(self, answer_id: int) -> Answer:
        answer = self.store.answers.get(answer_id)
        if answer is None:
            raise AnswerNotFound("Answer not found", {"answer_id": answer_id})
        return answer
    
    def has_answered(self, question_id: int, provider: str) -> bool:
        return (question_id, provider) in self.store.answered
    
    def submit_answer(self, question_id: int, content_ref: str, provider: str) -> Answer:
        """Submit an answer to an open question."""
        with self.store.transaction():
            question = self.store.questions.get(question_id)
            if question is None:
                raise QuestionNotFound("Question not found", {"question_id": question_id})
            
            if not self.reputation.can_participate(provider):
                raise NotEligible("Provider does not hold the minimum balance", {"provider": provider})
            
            if self.has_answered(question_id, provider):
                raise AlreadyAnswered("Already answered this question", {"question_id": question_id})
            
            now = self.clock()
            if not question.is_active:
                raise QuestionClosed("Question is no longer active", {"question_id": question_id})
            if question.is_pool and now >= question.pool_end_time:
                raise QuestionClosed("Pool has expired", {"pool_end_time": question.pool_end_time})
            
            answer = Answer(
                id=self.store.allocate_answer_id(),
                question_id=question_id,
                provider=provider,
                content_ref=content_ref,
                created_at=now
            )
            self.store.put("answers", answer.id, answer)
            self.store.touch("questions", question_id)
            question.answer_ids.append(answer.id)
            self.store.add("answered", (question_id, provider))
            self.reputation.adjust_reputation(provider, ANSWER_REWARD, caller=self)
        
        logger.debug("Answer %d submitted to question %d by %s", answer.id, question_id, provider)
        return answer
