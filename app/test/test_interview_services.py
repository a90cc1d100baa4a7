"""
Test Interview Services Module

Tests question generation, answer scoring, ideal answer synthesis and session
summaries against an in-memory store and a scripted generative client.

Dependencies:
- pytest: For testing framework
- pytest-asyncio: For async service calls
- app.services.interview: The services being tested
"""

import asyncio
import contextlib
import pytest
from app.core.session_locks import SessionLockRegistry
from app.errors.exceptions import InvalidInput, SessionNotFound, UpstreamUnavailable
from app.services.interview.question_generator import QuestionGenerator, DEFAULT_ROLE
from app.services.interview.answer_evaluator import AnswerEvaluator
from app.services.interview.ideal_answer_synthesizer import (
    IdealAnswerSynthesizer,
    PLACEHOLDER_ANSWER,
    pair_answers,
)
from app.services.interview.session_summary import SessionSummaryService, verdict_for, average_of

QUESTIONS = ["What is REST?", "Explain SQL joins.", "What is a race condition?"]


class UnserializedLocks:
    """Lock registry stand-in that lets every submission through at once."""

    def lock_for(self, session_id):
        return contextlib.nullcontext()


def assert_aligned(session):
    assert len(session.answers) == len(session.scores) == len(session.feedback) <= len(session.questions)


class TestQuestionGenerator:
    """Test opening sessions."""

    @pytest.mark.asyncio
    async def test_generates_numbered_questions(self, store, scripted_client):
        client = scripted_client("1. What is REST?\n2. Explain SQL joins.\n3. What is a race condition?")
        result = await QuestionGenerator(store, client).start_session("user-1", "Backend Engineer", "Beginner", 3)

        assert result.questions == QUESTIONS
        assert len(client.calls) == 1
        assert client.calls[0]["max_tokens"] == 512
        assert client.calls[0]["temperature"] == 0.7
        session = store.get_session(result.interviewId, "user-1")
        assert session.role_title == "Backend Engineer"
        assert session.questions == QUESTIONS
        assert session.answers == []

    @pytest.mark.asyncio
    async def test_count_is_only_a_hint(self, store, scripted_client):
        client = scripted_client("1. What is REST?\n2. Explain SQL joins.")
        result = await QuestionGenerator(store, client).start_session("user-1", "Backend Engineer", "Beginner", 5)
        assert len(result.questions) == 2

    @pytest.mark.asyncio
    async def test_passed_questions_skip_the_model(self, store, scripted_client):
        client = scripted_client("unused")
        preset = ["Tell me about yourself.", "Why this company?"]
        result = await QuestionGenerator(store, client).start_session(
            "user-1", "Product Manager", passed_questions=preset, session_type="resume-based"
        )
        assert result.questions == preset
        assert client.calls == []
        assert store.get_session(result.interviewId, "user-1").session_type == "resume-based"

    @pytest.mark.asyncio
    async def test_blank_role_uses_default(self, store, scripted_client):
        client = scripted_client("1. What is a linked list?")
        result = await QuestionGenerator(store, client).start_session("user-1", "  ")
        assert store.get_session(result.interviewId, "user-1").role_title == DEFAULT_ROLE
        assert DEFAULT_ROLE in client.calls[0]["user_prompt"]

    @pytest.mark.asyncio
    async def test_resume_context_tailors_prompt(self, store, scripted_client):
        client = scripted_client("1. Tell me about the Acme migration.")
        await QuestionGenerator(store, client).start_session(
            "user-1", "Backend Engineer", resume_context="Led the Acme Postgres migration."
        )
        assert "Acme Postgres migration" in client.calls[0]["user_prompt"]

    @pytest.mark.asyncio
    async def test_invalid_difficulty(self, store, scripted_client):
        with pytest.raises(InvalidInput):
            await QuestionGenerator(store, scripted_client("")).start_session("user-1", "QA", difficulty="Expert")

    @pytest.mark.asyncio
    async def test_invalid_count(self, store, scripted_client):
        with pytest.raises(InvalidInput):
            await QuestionGenerator(store, scripted_client("")).start_session("user-1", "QA", question_count=0)

    @pytest.mark.asyncio
    async def test_unreadable_role_is_rejected(self, store, scripted_client):
        client = scripted_client("")
        with pytest.raises(InvalidInput):
            await QuestionGenerator(store, client).start_session("user-1", "\x01\x02")
        assert client.calls == []
        assert store.list_sessions("user-1") == []

    @pytest.mark.asyncio
    async def test_upstream_failure_creates_no_session(self, store, scripted_client):
        client = scripted_client(UpstreamUnavailable())
        with pytest.raises(UpstreamUnavailable):
            await QuestionGenerator(store, client).start_session("user-1", "QA")
        assert store.list_sessions("user-1") == []


class TestAnswerEvaluator:
    """Test scoring and recording answers."""

    @pytest.mark.asyncio
    async def test_records_score_and_feedback(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        text = "Score (out of 10): 8\nFeedback: Clear and accurate."
        client = scripted_client(text)

        result = await AnswerEvaluator(store, client).submit_answer("user-1", session.id, QUESTIONS[0], "An architectural style for APIs.")

        assert result.score == 8
        assert result.feedback == text
        assert client.calls[0]["max_tokens"] == 256
        updated = store.get_session(session.id, "user-1")
        assert updated.answers == ["An architectural style for APIs."]
        assert updated.scores == [8]
        assert updated.feedback == [text]

    @pytest.mark.asyncio
    async def test_missing_score_line_records_zero(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        text = "Feedback: Mention idempotency."
        result = await AnswerEvaluator(store, scripted_client(text)).submit_answer("user-1", session.id, QUESTIONS[0], "REST uses HTTP.")
        assert result.score == 0
        assert result.feedback == text
        updated = store.get_session(session.id, "user-1")
        assert updated.scores == [0]
        assert updated.feedback == [text]

    @pytest.mark.asyncio
    async def test_histories_stay_aligned(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        evaluator = AnswerEvaluator(store, scripted_client("Score (out of 10): 6\nFeedback: Fine."))
        for question in QUESTIONS:
            await evaluator.submit_answer("user-1", session.id, question, "My answer.")
            assert_aligned(store.get_session(session.id, "user-1"))

        with pytest.raises(InvalidInput, match="already been answered"):
            await evaluator.submit_answer("user-1", session.id, QUESTIONS[0], "One more.")
        assert_aligned(store.get_session(session.id, "user-1"))

    @pytest.mark.asyncio
    async def test_empty_answer_is_rejected(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        client = scripted_client("Score (out of 10): 6")
        with pytest.raises(InvalidInput):
            await AnswerEvaluator(store, client).submit_answer("user-1", session.id, QUESTIONS[0], "   ")
        assert client.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("question, answer", [
        (QUESTIONS[0], "\x01"),
        (QUESTIONS[0], "\x01\x02\x7f"),
        ("\x03", "A fine answer"),
    ])
    async def test_unreadable_text_is_rejected(self, store, scripted_client, question, answer):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        client = scripted_client("Score (out of 10): 6")
        with pytest.raises(InvalidInput):
            await AnswerEvaluator(store, client).submit_answer("user-1", session.id, question, answer)
        assert client.calls == []
        assert store.get_session(session.id, "user-1").answers == []

    @pytest.mark.asyncio
    async def test_unknown_session(self, store, scripted_client):
        with pytest.raises(SessionNotFound):
            await AnswerEvaluator(store, scripted_client("")).submit_answer("user-1", "missing", "Q?", "A")

    @pytest.mark.asyncio
    async def test_other_owner_cannot_answer(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        with pytest.raises(SessionNotFound):
            await AnswerEvaluator(store, scripted_client("")).submit_answer("user-2", session.id, QUESTIONS[0], "A")

    @pytest.mark.asyncio
    async def test_upstream_failure_leaves_session_unchanged(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        with pytest.raises(UpstreamUnavailable):
            await AnswerEvaluator(store, scripted_client(UpstreamUnavailable())).submit_answer("user-1", session.id, QUESTIONS[0], "A")
        assert store.get_session(session.id, "user-1").answers == []


class TestConcurrentSubmissions:
    """Overlapping submissions for one session."""

    @pytest.mark.asyncio
    async def test_unserialized_submissions_lose_an_update(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        evaluator = AnswerEvaluator(store, scripted_client("Score (out of 10): 5"), locks=UnserializedLocks())

        await asyncio.gather(
            evaluator.submit_answer("user-1", session.id, QUESTIONS[0], "First answer"),
            evaluator.submit_answer("user-1", session.id, QUESTIONS[1], "Second answer"),
        )

        assert len(store.get_session(session.id, "user-1").answers) == 1

    @pytest.mark.asyncio
    async def test_session_lock_keeps_both_answers(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        evaluator = AnswerEvaluator(store, scripted_client("Score (out of 10): 5"), locks=SessionLockRegistry())

        await asyncio.gather(
            evaluator.submit_answer("user-1", session.id, QUESTIONS[0], "First answer"),
            evaluator.submit_answer("user-1", session.id, QUESTIONS[1], "Second answer"),
        )

        updated = store.get_session(session.id, "user-1")
        assert sorted(updated.answers) == ["First answer", "Second answer"]
        assert updated.scores == [5, 5]
        assert_aligned(updated)

    @pytest.mark.asyncio
    async def test_registry_hands_out_one_lock_per_session(self):
        locks = SessionLockRegistry()
        lock = locks.lock_for("a")
        assert locks.lock_for("a") is lock
        assert locks.lock_for("b") is not lock


class TestIdealAnswerSynthesizer:
    """Test batched ideal answers and their fallback."""

    @pytest.mark.asyncio
    async def test_pairs_answers_with_questions(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        client = scripted_client('["REST is...", "A join combines...", "A race condition is..."]')

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert [pair.question for pair in result.idealAnswers] == QUESTIONS
        assert result.idealAnswers[1].idealAnswer == "A join combines..."
        assert len(client.calls) == 1
        assert client.calls[0]["max_tokens"] == 1500

    @pytest.mark.asyncio
    async def test_wrong_length_every_attempt_falls_back(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        client = scripted_client('["only", "two"]')

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert len(client.calls) == 3
        assert len(result.idealAnswers) == 3
        assert all(pair.idealAnswer == PLACEHOLDER_ANSWER for pair in result.idealAnswers)
        assert [pair.question for pair in result.idealAnswers] == QUESTIONS

    @pytest.mark.asyncio
    async def test_recovers_on_second_attempt(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS[:2])
        client = scripted_client("Sure! Here are the answers:", '```json\n["A1", "A2"]\n```')

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert len(client.calls) == 2
        assert [pair.idealAnswer for pair in result.idealAnswers] == ["A1", "A2"]

    @pytest.mark.asyncio
    async def test_deeply_nested_reply_is_retried(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS[:2])
        client = scripted_client("[" * 100000 + "]" * 100000, '["A1", "A2"]')

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert len(client.calls) == 2
        assert [pair.idealAnswer for pair in result.idealAnswers] == ["A1", "A2"]

    @pytest.mark.asyncio
    async def test_oversized_question_list_falls_back_without_a_call(self, store, scripted_client):
        questions = [f"Question {index}: " + "x" * 1000 for index in range(30)]
        session = store.create_session("user-1", "Backend Engineer", questions)
        client = scripted_client('["unused"]')

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert client.calls == []
        assert len(result.idealAnswers) == 30
        assert all(pair.idealAnswer == PLACEHOLDER_ANSWER for pair in result.idealAnswers)

    @pytest.mark.asyncio
    async def test_upstream_failure_falls_back(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        client = scripted_client(UpstreamUnavailable())

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert len(client.calls) == 3
        assert len(result.idealAnswers) == len(QUESTIONS)

    @pytest.mark.asyncio
    async def test_unexpected_error_falls_back(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        client = scripted_client(RuntimeError("boom"))

        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)

        assert len(client.calls) == 1
        assert all(pair.idealAnswer == PLACEHOLDER_ANSWER for pair in result.idealAnswers)

    @pytest.mark.asyncio
    async def test_unknown_session_is_an_error(self, store, scripted_client):
        with pytest.raises(SessionNotFound):
            await IdealAnswerSynthesizer(store, scripted_client("[]")).synthesize("user-1", "missing")

    @pytest.mark.asyncio
    async def test_session_without_questions(self, store, scripted_client):
        session = store.create_session("user-1", "Backend Engineer", [])
        client = scripted_client("[]")
        result = await IdealAnswerSynthesizer(store, client).synthesize("user-1", session.id)
        assert result.idealAnswers == []
        assert client.calls == []

    def test_empty_answers_get_placeholder(self):
        pairs = pair_answers(["Q1?", "Q2?", "Q3?"], ["  ", None, 42])
        assert pairs[0].idealAnswer == PLACEHOLDER_ANSWER
        assert pairs[1].idealAnswer == PLACEHOLDER_ANSWER
        assert pairs[2].idealAnswer == "42"


class TestSessionSummary:
    """Test summaries and session views."""

    @pytest.mark.parametrize("average, verdict", [
        (9.0, "Strong performance"),
        (7.0, "Strong performance"),
        (6.9, "Average performance"),
        (5.0, "Average performance"),
        (4.9, "Needs improvement"),
        (0.0, "Needs improvement"),
    ])
    def test_verdict_thresholds(self, average, verdict):
        assert verdict_for(average) == verdict

    def test_average_rounds_to_one_decimal(self):
        assert average_of([7, 8, 8]) == 7.7
        assert average_of([6, 6, 6, 7]) == 6.3
        assert average_of([6, 6, 7, 7, 6, 6, 6, 6]) == 6.3
        assert average_of([]) == 0.0

    def test_summarize(self, store):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        store.write_histories(session.id, ["A1", "A2"], [8, 7], ["F1", "F2"])

        summary = SessionSummaryService(store).summarize("user-1", session.id)

        assert summary.role == "Backend Engineer"
        assert summary.totalQuestions == 3
        assert summary.averageScore == 7.5
        assert summary.scores == [8, 7]
        assert summary.verdict == "Strong performance"

    def test_summarize_unanswered_session(self, store):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        summary = SessionSummaryService(store).summarize("user-1", session.id)
        assert summary.averageScore == 0.0
        assert summary.verdict == "Needs improvement"

    def test_summarize_unknown_session(self, store):
        with pytest.raises(SessionNotFound):
            SessionSummaryService(store).summarize("user-1", "missing")

    def test_detail_and_list(self, store):
        session = store.create_session("user-1", "Backend Engineer", QUESTIONS)
        store.write_histories(session.id, ["A1"], [6], ["F1"])
        service = SessionSummaryService(store)

        detail = service.get_detail("user-1", session.id)
        assert detail.feedbacks == ["F1"]
        assert detail.type == "standard"

        listed = service.list_sessions("user-1")
        assert [item.id for item in listed] == [session.id]
        assert listed[0].scores == [6]
        assert service.list_sessions("user-2") == []
