"""Tests for the reputation ledger: eligibility, votes and score clamping."""

import pytest

from bountyqa.exceptions import (
    DuplicateVote, EligibilityError, InsufficientEligibility, NotAuthorized,
    SelfVoteForbidden
)
from bountyqa.models.answer import ContentKind

from conftest import ELIGIBLE, UNIT


@pytest.fixture
def bounty(platform):
    """Bounty question by alice with one answer by bob."""
    question = platform.questions.create_question("ipfs://q", UNIT, 0, False, "alice")
    answer = platform.answers.submit_answer(question.id, "ipfs://a", "bob")
    return question.id, answer.id


class TestCanParticipate:

    def test_threshold_is_inclusive(self, platform):
        platform.balance_oracle.set_balance("zed", ELIGIBLE)
        assert platform.reputation.can_participate("zed")

    def test_below_threshold(self, platform):
        platform.balance_oracle.set_balance("zed", ELIGIBLE - 1)
        assert not platform.reputation.can_participate("zed")

    def test_unknown_identity_uses_default(self, platform):
        assert not platform.reputation.can_participate("nobody")


class TestCastVote:

    def test_upvote_rewards_owner(self, platform, bounty):
        _, answer_id = bounty
        before = platform.reputation.get_reputation("bob").score

        tally = platform.vote_on_answer(answer_id, True, "carol")

        assert (tally.upvotes, tally.downvotes) == (1, 0)
        assert platform.reputation.get_reputation("bob").score == before + 2
        assert platform.reputation.get_reputation("carol").votes_cast == 1

    def test_downvote_penalizes_owner(self, platform, bounty):
        _, answer_id = bounty
        before = platform.reputation.get_reputation("bob").score

        platform.vote_on_answer(answer_id, False, "carol")

        assert platform.reputation.get_reputation("bob").score == before - 1

    def test_downvote_never_goes_below_zero(self, platform):
        ledger = platform.reputation
        for voter in ("bob", "carol", "dave"):
            ledger.cast_vote(1, 1, ContentKind.ANSWER, False, "zed", voter)

        assert ledger.get_reputation("zed").score == 0
        assert ledger.get_tally(1, 1, ContentKind.ANSWER) == (0, 3)

    def test_vote_on_question_credits_asker(self, platform, bounty):
        question_id, _ = bounty

        platform.vote_on_question(question_id, True, "carol")

        assert platform.reputation.get_tally(question_id, question_id, ContentKind.QUESTION) == (1, 0)
        assert platform.reputation.get_reputation("alice").score == 3

    def test_ineligible_voter(self, platform, bounty):
        question_id, answer_id = bounty

        with pytest.raises(InsufficientEligibility):
            platform.vote_on_answer(answer_id, True, "nobody")

        assert platform.reputation.get_tally(question_id, answer_id, ContentKind.ANSWER) == (0, 0)

    def test_self_vote_forbidden(self, platform, bounty):
        _, answer_id = bounty

        with pytest.raises(SelfVoteForbidden):
            platform.vote_on_answer(answer_id, True, "bob")

    def test_vote_cannot_be_repeated_or_flipped(self, platform, bounty):
        question_id, answer_id = bounty
        platform.vote_on_answer(answer_id, True, "carol")

        with pytest.raises(DuplicateVote):
            platform.vote_on_answer(answer_id, True, "carol")
        with pytest.raises(DuplicateVote):
            platform.vote_on_answer(answer_id, False, "carol")

        assert platform.reputation.get_tally(question_id, answer_id, ContentKind.ANSWER) == (1, 0)
        assert platform.reputation.get_reputation("carol").votes_cast == 1

    def test_question_and_answer_votes_are_separate_keys(self, platform, bounty):
        question_id, answer_id = bounty
        # Question 1 also happens to have answer id 1
        assert question_id == answer_id

        platform.vote_on_question(question_id, True, "carol")
        platform.vote_on_answer(answer_id, True, "carol")

        assert platform.reputation.get_reputation("carol").votes_cast == 2

    def test_eligibility_errors_share_a_category(self):
        assert issubclass(DuplicateVote, EligibilityError)
        assert issubclass(SelfVoteForbidden, EligibilityError)


class TestAdjustReputation:

    def test_rejects_unregistered_caller(self, platform):
        with pytest.raises(NotAuthorized):
            platform.reputation.adjust_reputation("alice", 100, caller=object())

        assert platform.reputation.get_reputation("alice").score == 0

    def test_floor_clamp_at_zero(self, platform):
        ledger = platform.reputation
        for _ in range(5):
            ledger.adjust_reputation("zed", -1, caller=platform.questions)

        assert ledger.get_reputation("zed").score == 0

    def test_clamp_when_penalty_exceeds_score(self, platform):
        ledger = platform.reputation
        ledger.adjust_reputation("zed", 3, caller=platform.answers)

        assert ledger.adjust_reputation("zed", -10, caller=platform.answers) == 0

    def test_get_reputation_returns_copy(self, platform):
        record = platform.reputation.get_reputation("alice")
        record.score = 99

        assert platform.reputation.get_reputation("alice").score == 0


class TestLeaderboard:

    def test_ranked_by_score_then_identity(self, platform, bounty):
        _, answer_id = bounty
        platform.vote_on_answer(answer_id, True, "carol")

        board = platform.reputation.leaderboard()

        assert [s.identity for s in board] == ["bob", "alice", "carol"]
        assert [s.rank for s in board] == [1, 2, 3]
        assert board[0].answers_given == 1
        assert board[1].questions_asked == 1

    def test_offset_and_limit(self, platform, bounty):
        _, answer_id = bounty
        platform.vote_on_answer(answer_id, True, "carol")

        board = platform.reputation.leaderboard(limit=1, offset=1)

        assert [(s.identity, s.rank) for s in board] == [("alice", 2)]
