"""Reputation models."""

from pydantic import BaseModel, Field


class ReputationRecord(BaseModel):
    """Per-identity reputation. The score never drops below zero."""
    score: int = Field(default=0, ge=0)
    votes_cast: int = 0


class ReputationStats(ReputationRecord):
    """Reputation with identity and rank for leaderboard display."""
    identity: str
    rank: int = 0
    questions_asked: int = 0
    answers_given: int = 0
