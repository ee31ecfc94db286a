"""Answer and Vote models."""

from enum import Enum
from pydantic import BaseModel
from typing import NamedTuple


class ContentKind(str, Enum):
    """What a vote is cast on."""
    QUESTION = "question"
    ANSWER = "answer"


class ContentKey(NamedTuple):
    """Identifies one votable piece of content.

    For a question the content id is the question id itself.
    """
    question_id: int
    content_id: int
    kind: ContentKind


class AnswerCreate(BaseModel):
    """Payload to submit an answer."""
    content_ref: str


class Answer(BaseModel):
    """Full answer model. Immutable once created."""
    id: int
    question_id: int
    provider: str
    content_ref: str
    created_at: int
    
    class Config:
        frozen = True


class AnswerWithPrize(Answer):
    """Answer with live voting and prize figures."""
    upvotes: int = 0
    downvotes: int = 0
    prize_preview: int = 0
    awarded: int = 0
    
    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes


class VoteCreate(BaseModel):
    """Payload to cast a vote."""
    is_upvote: bool


class VoteTally(BaseModel):
    """Up and down counts for one content key."""
    upvotes: int = 0
    downvotes: int = 0
    
    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes
