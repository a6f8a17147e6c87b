"""
Unit tests for practice quizzes and assessments.
"""

import json
from unittest.mock import AsyncMock

import pytest

from careercoach.core.exceptions import ModelNotAvailableError, UnauthorizedError
from careercoach.repositories import AssessmentRepository, UserRepository
from careercoach.schemas import QuizQuestion
from careercoach.services import InterviewService, PLACEHOLDER_QUESTION, PLACEHOLDER_TIP
from careercoach.services.interview_service import score_answers, validate_questions


@pytest.fixture
def interview_service(db_session, structured):
    return InterviewService(UserRepository(db_session), AssessmentRepository(db_session), structured, question_count=3)


def question(text, correct="A", **extra):
    data = {"question": text, "options": ["A", "B", "C", "D"], "correct_answer": correct, "explanation": "Because."}
    data.update(extra)
    return data


def quiz_questions(*texts):
    return [QuizQuestion.model_validate(question(text)) for text in texts]


class TestValidateQuestions:

    def test_invalid_questions_dropped(self):
        raw = [
            question("What is REST?"),
            {"question": "No options", "correct_answer": "A"},
            "not an object",
            {"question": "Camel", "options": ["x", "y"], "correctAnswer": "y"},
        ]

        questions = validate_questions(raw)

        assert [q["question"] for q in questions] == ["What is REST?", "Camel"]
        assert questions[1]["correct_answer"] == "y"

    def test_score_answers_counts_missing_as_unanswered(self):
        results = score_answers(quiz_questions("Q1", "Q2", "Q3"), ["A", "B"])

        assert [r.is_correct for r in results] == [True, False, False]
        assert results[2].user_answer is None


class TestGenerateQuiz:
    """Test suite for quiz generation with the placeholder policy."""

    async def test_generated_questions_returned(self, interview_service, identity, test_user, text_client):
        test_user.industry = "tech"
        text_client.queue(json.dumps({"questions": [question("Q1"), question("Q2", correct="B")]}))

        questions = await interview_service.generate_quiz(identity)

        assert [q["question"] for q in questions] == ["Q1", "Q2"]
        assert "Generate 3 technical interview questions for a tech professional" in text_client.prompts[0]

    async def test_generation_failure_returns_single_placeholder(
        self, interview_service, identity, test_user, text_client
    ):
        text_client.queue(ModelNotAvailableError("bad key"))

        questions = await interview_service.generate_quiz(identity)

        assert questions == [PLACEHOLDER_QUESTION]

    async def test_no_valid_questions_returns_single_placeholder(
        self, interview_service, identity, test_user, text_client
    ):
        text_client.queue(json.dumps({"questions": [{"question": "broken"}]}))

        questions = await interview_service.generate_quiz(identity)

        assert len(questions) == 1
        assert questions[0] == PLACEHOLDER_QUESTION

    async def test_placeholder_is_a_copy(self, interview_service, identity, test_user, text_client):
        text_client.queue("not json")

        questions = await interview_service.generate_quiz(identity)
        questions[0]["question"] = "changed"

        assert PLACEHOLDER_QUESTION["question"] != "changed"

    async def test_requires_identity(self, interview_service, text_client):
        with pytest.raises(UnauthorizedError):
            await interview_service.generate_quiz(None)
        assert text_client.call_count == 0


class TestSaveQuizResult:
    """Test suite for scoring, tips and persistence."""

    async def test_all_correct_skips_tip(self, interview_service, identity, test_user, text_client):
        assessment = await interview_service.save_quiz_result(
            identity, quiz_questions("Q1", "Q2"), ["A", "A"], 100.0
        )

        assert text_client.call_count == 0
        assert assessment.improvement_tip is None
        assert assessment.quiz_score == 100.0
        assert assessment.category == "Technical"
        assert all(q["is_correct"] for q in assessment.questions)

    async def test_wrong_answer_requests_tip(self, interview_service, identity, test_user, text_client):
        text_client.queue(json.dumps({"tip": "Review HTTP caching."}))

        assessment = await interview_service.save_quiz_result(
            identity, quiz_questions("What is an ETag?", "Q2"), ["B", "A"], 50.0
        )

        assert assessment.improvement_tip == "Review HTTP caching."
        assert "- What is an ETag?" in text_client.prompts[0]
        assert [q["question"] for q in assessment.wrong_answers] == ["What is an ETag?"]

    async def test_no_transaction_open_while_generating(
        self, interview_service, identity, test_user, text_client, db_session
    ):
        text_client.queue(json.dumps({"questions": [question("Q1")]}), json.dumps({"tip": "Review HTTP."}))
        text_client.observer = db_session.in_transaction

        await interview_service.generate_quiz(identity)
        await interview_service.save_quiz_result(identity, quiz_questions("Q1"), ["B"], 0.0)

        assert text_client.observed == [False, False]

    async def test_tip_failure_uses_placeholder(self, interview_service, identity, test_user, text_client):
        text_client.queue("no json here")

        assessment = await interview_service.save_quiz_result(identity, quiz_questions("Q1"), ["C"], 0.0)

        assert assessment.improvement_tip == PLACEHOLDER_TIP

    async def test_missing_answers_count_as_wrong(self, interview_service, identity, test_user, text_client):
        text_client.queue(json.dumps({"tip": "Finish every question."}))

        assessment = await interview_service.save_quiz_result(identity, quiz_questions("Q1", "Q2"), ["A"], 50.0)

        assert [q["is_correct"] for q in assessment.questions] == [True, False]
        assert assessment.questions[1]["user_answer"] is None

    async def test_assessments_oldest_first(self, interview_service, identity, test_user):
        first = await interview_service.save_quiz_result(identity, quiz_questions("Q1"), ["A"], 100.0)
        second = await interview_service.save_quiz_result(identity, quiz_questions("Q1"), ["A"], 100.0)

        assessments = await interview_service.get_assessments(identity)

        assert [a.id for a in assessments] == [first.id, second.id]

    async def test_requires_identity_before_store_access(self, structured):
        users = AsyncMock(spec=UserRepository)
        assessments = AsyncMock(spec=AssessmentRepository)
        service = InterviewService(users, assessments, structured)

        with pytest.raises(UnauthorizedError):
            await service.save_quiz_result(None, quiz_questions("Q1"), ["A"], 100.0)
        users.find_by_subject.assert_not_called()
        assessments.add.assert_not_called()
