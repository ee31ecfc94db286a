"""Question and pool payout models."""

from enum import Enum
from pydantic import BaseModel, Field, computed_field
from typing import Optional, List


# Reported as selected_answer_id once a bounty has been withdrawn
WITHDRAWN_SENTINEL = 2**256 - 1


class QuestionStatus(str, Enum):
    """Question lifecycle status."""
    OPEN = "open"
    BEST_ANSWER_SELECTED = "best_answer_selected"
    BOUNTY_WITHDRAWN = "bounty_withdrawn"
    POOL_DISTRIBUTED = "pool_distributed"
    POOL_WITHDRAWN = "pool_withdrawn"


class QuestionCreate(BaseModel):
    """Payload to ask a new question."""
    content_ref: str
    amount: int = Field(ge=0)
    is_pool: bool = False
    pool_duration: int = Field(default=0, ge=0)


class BountyIncrease(BaseModel):
    """Payload to add to a question's bounty."""
    amount: int = Field(ge=0)


class BestAnswerSelect(BaseModel):
    """Payload to pick the winning answer of a bounty question."""
    answer_id: int


class Question(BaseModel):
    """Full question state."""
    id: int
    owner: str
    content_ref: str
    bounty_amount: int = 0
    pool_amount: int = 0
    pool_end_time: int = 0
    status: QuestionStatus = QuestionStatus.OPEN
    selected_answer: Optional[int] = None
    answer_ids: List[int] = []
    created_at: int
    
    @computed_field
    @property
    def is_pool(self) -> bool:
        return self.pool_end_time != 0
    
    @computed_field
    @property
    def is_active(self) -> bool:
        return self.status == QuestionStatus.OPEN
    
    @computed_field
    @property
    def pool_distributed(self) -> bool:
        return self.status in (
            QuestionStatus.POOL_DISTRIBUTED,
            QuestionStatus.POOL_WITHDRAWN,
        )
    
    @computed_field
    @property
    def selected_answer_id(self) -> int:
        """0 when nothing is selected, the sentinel after a bounty withdrawal."""
        if self.status == QuestionStatus.BOUNTY_WITHDRAWN:
            return WITHDRAWN_SENTINEL
        return self.selected_answer or 0
    
    @property
    def effective_amount(self) -> int:
        return self.pool_amount if self.is_pool else self.bounty_amount


class QuestionIndex(BaseModel):
    """All questions as parallel arrays, in id order."""
    ids: List[int] = []
    content_refs: List[str] = []
    creators: List[str] = []
    amounts: List[int] = []
    is_pool: List[bool] = []
    is_active: List[bool] = []
    created_at: List[int] = []


class PoolPayout(BaseModel):
    """One winner's share of a pool, in rank order."""
    rank: int
    answer_id: int
    provider: str
    score: int
    amount: int


class PoolDistribution(BaseModel):
    """Result of (or preview of) a pool distribution."""
    question_id: int
    pool_amount: int
    fee: int
    distribution_amount: int
    payouts: List[PoolPayout]
