"""Answers router with voting and prize previews."""

from fastapi import APIRouter, Depends
from bountyqa.engine import get_platform
from bountyqa.models.answer import (
    AnswerCreate, AnswerWithPrize, ContentKind, VoteCreate, VoteTally
)
from bountyqa.routers.auth import require_identity

router = APIRouter(prefix="/answers", tags=["Answers"])


@router.post("/questions/{question_id}", response_model=AnswerWithPrize)
async def submit_answer(
    question_id: int,
    data: AnswerCreate,
    identity: str = Depends(require_identity)
):
    """Submit an answer to a question."""
    platform = get_platform()
    
    answer = platform.answers.submit_answer(question_id, data.content_ref, identity)
    return platform.answer_with_prize(answer.id)


@router.get("/{answer_id}", response_model=AnswerWithPrize)
async def get_answer(answer_id: int):
    """Get an answer with its votes and live prize preview."""
    return get_platform().answer_with_prize(answer_id)


@router.post("/{answer_id}/vote", response_model=VoteTally)
async def vote_on_answer(
    answer_id: int,
    data: VoteCreate,
    identity: str = Depends(require_identity)
):
    """Vote on an answer. Votes are permanent."""
    return get_platform().vote_on_answer(answer_id, data.is_upvote, identity)


@router.get("/{answer_id}/votes", response_model=VoteTally)
async def get_vote_tally(answer_id: int):
    """Get the vote tally for an answer."""
    platform = get_platform()
    
    answer = platform.answers.get_answer(answer_id)
    upvotes, downvotes = platform.reputation.get_tally(
        answer.question_id, answer_id, ContentKind.ANSWER
    )
    return VoteTally(upvotes=upvotes, downvotes=downvotes)
