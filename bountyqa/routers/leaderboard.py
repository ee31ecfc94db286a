"""Leaderboard router for reputation rankings."""

from fastapi import APIRouter, Query
from typing import List
from bountyqa.engine import get_platform
from bountyqa.models.question import QuestionStatus
from bountyqa.models.reputation import ReputationRecord, ReputationStats

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=List[ReputationStats])
async def get_leaderboard(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0)
):
    """Get identities ranked by reputation score."""
    return get_platform().reputation.leaderboard(limit=limit, offset=offset)


@router.get("/identities/{identity}", response_model=ReputationRecord)
async def get_reputation(identity: str):
    """Get an identity's reputation score and vote count."""
    return get_platform().reputation.get_reputation(identity)


@router.get("/stats/dashboard")
async def get_dashboard_stats():
    """Get platform-wide statistics."""
    platform = get_platform()
    questions = list(platform.store.questions.values())
    
    open_questions = [q for q in questions if q.is_active]
    locked = sum(q.effective_amount for q in open_questions)
    
    settled = {status.value: 0 for status in QuestionStatus}
    for q in questions:
        settled[q.status.value] += 1
    
    return {
        "total_questions": len(questions),
        "open_questions": len(open_questions),
        "pool_questions": sum(1 for q in questions if q.is_pool),
        "total_answers": len(platform.store.answers),
        "total_locked": locked,
        "treasury_balance": platform.treasury.balance(),
        "questions_by_status": settled
    }
