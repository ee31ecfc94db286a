"""Tests for answer submission."""

import pytest

from bountyqa.exceptions import (
    AlreadyAnswered, AnswerNotFound, NotEligible, QuestionClosed, QuestionNotFound
)

from conftest import START_TIME, UNIT


HOUR = 60 * 60


@pytest.fixture
def question_id(platform):
    return platform.questions.create_question("ipfs://q", UNIT, 0, False, "alice").id


@pytest.fixture
def pool_id(platform):
    return platform.questions.create_question("ipfs://pool", UNIT, HOUR, True, "alice").id


class TestSubmitAnswer:

    def test_appends_in_submission_order(self, platform, question_id):
        first = platform.answers.submit_answer(question_id, "ipfs://a1", "bob")
        second = platform.answers.submit_answer(question_id, "ipfs://a2", "carol")

        question = platform.questions.get_question(question_id)
        assert question.answer_ids == [first.id, second.id]
        assert second.id == first.id + 1
        assert first.question_id == question_id
        assert first.created_at == START_TIME

    def test_grants_one_reputation(self, platform, question_id):
        platform.answers.submit_answer(question_id, "ipfs://a", "bob")

        assert platform.reputation.get_reputation("bob").score == 1

    def test_one_answer_per_provider(self, platform, question_id):
        platform.answers.submit_answer(question_id, "ipfs://a", "bob")

        with pytest.raises(AlreadyAnswered):
            platform.answers.submit_answer(question_id, "ipfs://b", "bob")

        assert len(platform.questions.get_question(question_id).answer_ids) == 1

    def test_same_provider_may_answer_other_questions(self, platform, question_id):
        other = platform.questions.create_question("ipfs://q2", UNIT, 0, False, "carol")
        platform.answers.submit_answer(question_id, "ipfs://a", "bob")

        platform.answers.submit_answer(other.id, "ipfs://a", "bob")

        assert platform.answers.has_answered(other.id, "bob")

    def test_ineligible_provider(self, platform, question_id):
        with pytest.raises(NotEligible):
            platform.answers.submit_answer(question_id, "ipfs://a", "nobody")

        assert not platform.answers.has_answered(question_id, "nobody")

    def test_unknown_question(self, platform):
        with pytest.raises(QuestionNotFound):
            platform.answers.submit_answer(42, "ipfs://a", "bob")

    def test_closed_after_selection(self, platform, question_id):
        answer = platform.answers.submit_answer(question_id, "ipfs://a", "bob")
        platform.questions.select_best_answer(question_id, answer.id, "alice")

        with pytest.raises(QuestionClosed):
            platform.answers.submit_answer(question_id, "ipfs://b", "carol")

    def test_pool_open_until_end_time(self, platform, clock, pool_id):
        clock.advance(HOUR - 1)

        platform.answers.submit_answer(pool_id, "ipfs://a", "bob")

    def test_pool_closed_at_end_time(self, platform, clock, pool_id):
        clock.advance(HOUR)

        with pytest.raises(QuestionClosed):
            platform.answers.submit_answer(pool_id, "ipfs://a", "bob")

        assert platform.reputation.get_reputation("bob").score == 0


class TestGetAnswer:

    def test_unknown_answer(self, platform):
        with pytest.raises(AnswerNotFound):
            platform.answers.get_answer(7)

    def test_answer_with_prize_includes_tally(self, platform, question_id):
        answer = platform.answers.submit_answer(question_id, "ipfs://a", "bob")
        platform.vote_on_answer(answer.id, True, "carol")
        platform.vote_on_answer(answer.id, False, "dave")

        view = platform.answer_with_prize(answer.id)

        assert (view.upvotes, view.downvotes, view.score) == (1, 1, 0)
        assert view.provider == "bob"
