"""Typed failures raised by the engine.

Every failure means the requested action is invalid for the current state.
Nothing is retried internally and no state is left partially applied.
"""

from typing import Any, Optional


class PlatformError(Exception):
    """Base exception for all engine errors."""

    status_code = 400

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# Categories

class NotFoundError(PlatformError):
    status_code = 404


class AuthorizationError(PlatformError):
    status_code = 403


class EligibilityError(PlatformError):
    status_code = 403


class StateConflictError(PlatformError):
    status_code = 409


class InvalidValueError(PlatformError):
    status_code = 400


class ExternalDependencyError(PlatformError):
    status_code = 502


# Not found

class QuestionNotFound(NotFoundError):
    pass


class AnswerNotFound(NotFoundError):
    pass


# Authorization

class NotOwner(AuthorizationError):
    pass


class NotAuthorized(AuthorizationError):
    pass


# Eligibility

class InsufficientEligibility(EligibilityError):
    pass


class NotEligible(EligibilityError):
    pass


class SelfVoteForbidden(EligibilityError):
    pass


class DuplicateVote(EligibilityError):
    pass


class AlreadyAnswered(EligibilityError):
    pass


# State conflicts

class QuestionClosed(StateConflictError):
    pass


class AlreadySelected(StateConflictError):
    pass


class AlreadyFinalized(StateConflictError):
    pass


class AlreadyDistributed(StateConflictError):
    pass


class NotExpired(StateConflictError):
    pass


class NoBounty(StateConflictError):
    pass


class NoPool(StateConflictError):
    pass


class AnswersExist(StateConflictError):
    pass


class GoodAnswersExist(StateConflictError):
    pass


# Values

class ZeroAmount(InvalidValueError):
    pass


class InvalidDuration(InvalidValueError):
    pass


class NoAnswers(InvalidValueError):
    pass


class AnswerMismatch(InvalidValueError):
    pass


# External dependencies

class FundTransferFailed(ExternalDependencyError):
    pass
