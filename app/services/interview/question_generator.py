"""
Question Generator Module

This module opens interview sessions. It either takes a caller-supplied
question list as-is or asks the generative model for a fresh set tailored to
the role, difficulty and (optionally) the candidate's resume, then records the
new session with empty answer histories.

Generation is a single model call. Free-text questions have no validity
contract to retry against, so a transport failure fails the whole request and
the requested count is only a hint: the model may return more or fewer.

Dependencies:
- loguru: For logging operations.
- app.core.ai_client_manager: For the GenerativeClient boundary.
- app.core.secure_prompt_manager: For prompt templates.
- app.helper.parse_model_output: For splitting the question list.
- app.services.session_store: For persisting the session.
"""

from typing import List, Optional, Union
from loguru import logger
from app.core.ai_client_manager import GenerativeClient
from app.core.secure_prompt_manager import secure_prompt_manager
from app.errors.exceptions import InvalidInput
from app.helper.parse_model_output import parse_question_lines
from app.schemas.interview_schemas import Difficulty, SessionType, StartSessionResponse
from app.services.session_store import SessionStore

DEFAULT_ROLE = "Software Engineer"
DEFAULT_QUESTION_COUNT = 3


class QuestionGenerator:
    """
    Produces the initial question set for a session and opens the session record.
    """

    def __init__(self, store: SessionStore, client: GenerativeClient):
        self.store = store
        self.client = client

    async def start_session(
        self,
        owner_id: str,
        role: Optional[str] = None,
        difficulty: Union[Difficulty, str] = Difficulty.BEGINNER,
        question_count: int = DEFAULT_QUESTION_COUNT,
        resume_context: Optional[str] = None,
        passed_questions: Optional[List[str]] = None,
        session_type: Union[SessionType, str] = SessionType.STANDARD,
    ) -> StartSessionResponse:
        """
        Open a new interview session.

        Args:
            owner_id (str): Identifier of the user starting the session
            role (str, optional): Job role; blank falls back to DEFAULT_ROLE
            difficulty (Difficulty): Beginner, Intermediate or Advanced
            question_count (int): Requested number of questions (a hint)
            resume_context (str, optional): Resume text to tailor questions to
            passed_questions (List[str], optional): Questions to use verbatim
            session_type (SessionType): standard or resume-based

        Returns:
            StartSessionResponse: The new session id and its questions

        Raises:
            InvalidInput: If difficulty, session type or count is invalid
            UpstreamUnavailable: If the model could not be reached
        """
        role = role.strip() if role and role.strip() else DEFAULT_ROLE
        try:
            difficulty = Difficulty(difficulty)
            session_type = SessionType(session_type)
        except ValueError as e:
            raise InvalidInput(str(e)) from e
        if question_count is None or question_count < 1:
            raise InvalidInput("questionCount must be a positive integer")

        if passed_questions:
            questions = list(passed_questions)
            logger.info(f"Using {len(questions)} caller-supplied questions for {role}")
        else:
            questions = await self._generate_questions(role, difficulty, question_count, resume_context)

        session = self.store.create_session(
            owner_id=owner_id,
            role_title=role,
            questions=questions,
            session_type=session_type.value,
        )
        return StartSessionResponse(interviewId=session.id, questions=session.questions)

    async def _generate_questions(self, role: str, difficulty: Difficulty, question_count: int, resume_context: Optional[str]) -> List[str]:
        try:
            system_prompt, user_prompt = secure_prompt_manager.get_question_generation_prompt(
                role=role,
                difficulty=difficulty.value,
                question_count=question_count,
                resume_context=resume_context,
            )
        except ValueError as e:
            raise InvalidInput("Role must contain readable text") from e
        text = await self.client.complete(system_prompt, user_prompt, max_tokens=512, temperature=0.7)
        questions = parse_question_lines(text)
        if len(questions) != question_count:
            logger.warning(f"Requested {question_count} questions for {role}, model produced {len(questions)}")
        return questions
