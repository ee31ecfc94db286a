"""Questions router."""

from fastapi import APIRouter, Depends
from bountyqa.engine import get_platform
from bountyqa.models.answer import VoteCreate, VoteTally
from bountyqa.models.question import (
    BestAnswerSelect, BountyIncrease, PoolDistribution, Question,
    QuestionCreate, QuestionIndex
)
from bountyqa.routers.auth import require_identity

router = APIRouter(prefix="/questions", tags=["Questions"])


@router.post("", response_model=Question)
async def create_question(
    data: QuestionCreate,
    identity: str = Depends(require_identity)
):
    """Ask a question and lock its bounty or pool."""
    platform = get_platform()
    
    return platform.questions.create_question(
        content_ref=data.content_ref,
        amount=data.amount,
        pool_duration=data.pool_duration,
        is_pool=data.is_pool,
        owner=identity
    )


@router.get("", response_model=QuestionIndex)
async def list_questions():
    """List all questions as parallel arrays."""
    return get_platform().questions.list_questions()


@router.get("/{question_id}", response_model=Question)
async def get_question(question_id: int):
    """Get question details by ID."""
    return get_platform().questions.get_question(question_id)


@router.get("/{question_id}/expired")
async def is_pool_expired(question_id: int):
    """Check whether a pool question's deadline has passed."""
    return {
        "question_id": question_id,
        "expired": get_platform().questions.is_pool_expired(question_id)
    }


@router.post("/{question_id}/bounty", response_model=Question)
async def increase_bounty(
    question_id: int,
    data: BountyIncrease,
    identity: str = Depends(require_identity)
):
    """Add funds to an open bounty."""
    return get_platform().questions.increase_bounty(question_id, data.amount, identity)


@router.post("/{question_id}/select", response_model=Question)
async def select_best_answer(
    question_id: int,
    data: BestAnswerSelect,
    identity: str = Depends(require_identity)
):
    """Pick the best answer and pay out the bounty (owner only)."""
    return get_platform().questions.select_best_answer(question_id, data.answer_id, identity)


@router.post("/{question_id}/withdraw", response_model=Question)
async def withdraw(
    question_id: int,
    identity: str = Depends(require_identity)
):
    """Withdraw an unanswered bounty or an expired, unrewarded pool (owner only)."""
    platform = get_platform()
    
    question = platform.questions.get_question(question_id)
    if question.is_pool:
        return platform.questions.withdraw_pool(question_id, identity)
    return platform.questions.withdraw_bounty(question_id, identity)


@router.get("/{question_id}/distribution", response_model=PoolDistribution)
async def preview_distribution(question_id: int):
    """Payouts an expired pool would make if distributed now."""
    return get_platform().questions.preview_distribution(question_id)


@router.post("/{question_id}/distribute", response_model=PoolDistribution)
async def distribute_pool(
    question_id: int,
    identity: str = Depends(require_identity)
):
    """Distribute an expired pool among its top answers (any caller)."""
    return get_platform().questions.distribute_pool(question_id, identity)


@router.post("/{question_id}/vote", response_model=VoteTally)
async def vote_on_question(
    question_id: int,
    data: VoteCreate,
    identity: str = Depends(require_identity)
):
    """Vote on a question."""
    return get_platform().vote_on_question(question_id, data.is_upvote, identity)
