"""
Answer Evaluator Module

This module scores one submitted answer against one question and appends the
answer, its score and the raw feedback text to the session's histories.

The model is asked for a "Score (out of 10): N" line plus a one sentence
feedback line. When the score line is missing the score is recorded as 0 and
the response text is still kept as feedback; a malformed score never fails the
submission.

The session is read, scored and written back as one unit guarded by the
session's lock, so overlapping submissions for the same session each land in
the history instead of overwriting one another.

Dependencies:
- loguru: For logging operations.
- app.core.ai_client_manager: For the GenerativeClient boundary.
- app.core.secure_prompt_manager: For the scoring prompt.
- app.core.session_locks: For per-session serialization.
- app.helper.parse_model_output: For reading the score line.
- app.services.session_store: For reading and writing the session.
"""

from typing import Optional
from loguru import logger
from app.core.ai_client_manager import GenerativeClient
from app.core.secure_prompt_manager import secure_prompt_manager
from app.core.session_locks import SessionLockRegistry
from app.errors.exceptions import InvalidInput, SessionNotFound
from app.helper.parse_model_output import extract_score
from app.schemas.interview_schemas import AnswerFeedbackResponse
from app.services.session_store import SessionStore


class AnswerEvaluator:
    """
    Scores answers and appends them to a session's parallel histories.
    """

    def __init__(self, store: SessionStore, client: GenerativeClient, locks: Optional[SessionLockRegistry] = None):
        self.store = store
        self.client = client
        self.locks = locks if locks is not None else SessionLockRegistry()

    async def submit_answer(self, owner_id: str, session_id: str, question: str, answer: str) -> AnswerFeedbackResponse:
        """
        Score an answer and record it on the session.

        Args:
            owner_id (str): Identifier of the calling user
            session_id (str): Session the answer belongs to
            question (str): Question being answered
            answer (str): The user's answer

        Returns:
            AnswerFeedbackResponse: Raw feedback text and integer score

        Raises:
            SessionNotFound: If the caller owns no session with that id
            InvalidInput: If the answer or question is blank, or every
                question has already been answered
            UpstreamUnavailable: If the model could not be reached
        """
        async with self.locks.lock_for(session_id):
            session = self.store.get_session(session_id, owner_id)
            if session is None:
                raise SessionNotFound(session_id)
            if not answer or not answer.strip():
                raise InvalidInput("Answer is required")
            if not question or not question.strip():
                raise InvalidInput("Question is required")
            if session.is_complete():
                raise InvalidInput("All questions in this interview have already been answered")

            try:
                system_prompt, user_prompt = secure_prompt_manager.get_answer_scoring_prompt(question, answer)
            except ValueError as e:
                # only control characters, nothing left after sanitizing
                raise InvalidInput("Question and answer must contain readable text") from e
            text = await self.client.complete(system_prompt, user_prompt, max_tokens=256, temperature=0.7)

            score = extract_score(text)
            self.store.write_histories(
                session_id,
                answers=session.answers + [answer],
                scores=session.scores + [score],
                feedback=session.feedback + [text],
            )
            logger.info(f"Recorded answer {session.answered_count() + 1}/{len(session.questions)} for session {session_id} (score {score})")

        return AnswerFeedbackResponse(feedback=text, score=score)
