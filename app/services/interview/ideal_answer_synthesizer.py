"""
Ideal Answer Synthesizer Module

This module produces a reference ("ideal", 10/10) answer for every question in
a session with one batched model call. The model must return a raw JSON array
whose length matches the question count; any other response is discarded and
the call is repeated, up to three attempts in total.

The operation as a whole never fails once the session is found: if synthesis
cannot produce a valid array (or fails in any other way) the questions are
re-read and each is paired with a placeholder answer instead. Ideal answers
are not stored; every request synthesizes them again.

Dependencies:
- loguru: For logging operations.
- app.core.ai_client_manager: For the GenerativeClient boundary.
- app.core.secure_prompt_manager: For the batched prompt.
- app.helper.parse_model_output: For validating the JSON array.
- app.helper.retry: For the bounded retry fold.
- app.services.session_store: For reading the session.
"""

from typing import Any, List
from loguru import logger
from app.core.ai_client_manager import GenerativeClient
from app.core.secure_prompt_manager import secure_prompt_manager
from app.errors.exceptions import SessionNotFound, UpstreamUnavailable
from app.helper.parse_model_output import parse_answer_array
from app.helper.retry import retry_until_valid, MAX_ATTEMPTS
from app.schemas.interview_schemas import IdealAnswerPair, IdealAnswersResponse
from app.schemas.model_output import RawText, ParseError
from app.services.session_store import SessionStore

PLACEHOLDER_ANSWER = "Detailed AI answer unavailable. Please focus on relevant skills and use the STAR method."


def pair_answers(questions: List[str], answers: List[Any]) -> List[IdealAnswerPair]:
    """Zip questions with answers by position, substituting the placeholder for empty entries."""
    pairs = []
    for question, answer in zip(questions, answers):
        if isinstance(answer, str):
            answer = answer.strip()
        elif answer:
            answer = str(answer)
        pairs.append(IdealAnswerPair(question=question, idealAnswer=answer or PLACEHOLDER_ANSWER))
    return pairs


def placeholder_pairs(questions: List[str]) -> List[IdealAnswerPair]:
    return [IdealAnswerPair(question=question, idealAnswer=PLACEHOLDER_ANSWER) for question in questions]


class IdealAnswerSynthesizer:
    """
    Batch-produces reference answers for an existing session.
    """

    def __init__(self, store: SessionStore, client: GenerativeClient, max_attempts: int = MAX_ATTEMPTS):
        self.store = store
        self.client = client
        self.max_attempts = max_attempts

    async def synthesize(self, owner_id: str, session_id: str) -> IdealAnswersResponse:
        """
        Produce one ideal answer per session question.

        Args:
            owner_id (str): Identifier of the calling user
            session_id (str): Session whose questions are answered

        Returns:
            IdealAnswersResponse: Exactly one pair per question, from the model
                or from the placeholder fallback

        Raises:
            SessionNotFound: If the caller owns no session with that id
        """
        session = self.store.get_session(session_id, owner_id)
        if session is None:
            raise SessionNotFound(session_id)
        if not session.questions:
            return IdealAnswersResponse(idealAnswers=[])

        try:
            pairs = await self._synthesize(session.questions)
            logger.info(f"Structured {len(pairs)} ideal answers for session {session_id}")
            return IdealAnswersResponse(idealAnswers=pairs)
        except Exception as e:
            logger.error(f"Ideal answer synthesis failed for session {session_id}, using fallback: {e}")
            return IdealAnswersResponse(idealAnswers=self._fallback(owner_id, session_id, session.questions))

    async def _synthesize(self, questions: List[str]) -> List[IdealAnswerPair]:
        system_prompt, user_prompt = secure_prompt_manager.get_ideal_answers_prompt(questions)

        async def attempt(n: int):
            try:
                text = await self.client.complete(system_prompt, user_prompt, max_tokens=1500, temperature=0.7)
            except UpstreamUnavailable as e:
                return ParseError(reason=str(e.detail))
            return parse_answer_array(RawText(text), len(questions))

        answers = await retry_until_valid(attempt, self.max_attempts, label="Ideal Answers")
        return pair_answers(questions, answers)

    def _fallback(self, owner_id: str, session_id: str, known_questions: List[str]) -> List[IdealAnswerPair]:
        questions = known_questions
        try:
            session = self.store.get_session(session_id, owner_id)
            if session is not None:
                questions = session.questions
        except Exception as e:
            logger.warning(f"Could not re-read session {session_id} for fallback, using loaded questions: {e}")
        return placeholder_pairs(questions)
