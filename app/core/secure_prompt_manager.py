"""
Secure Prompt Manager Module

Keeps the wording of every model prompt in one place, separate from the user
data placed into it. Prompts are templates with named placeholders; each value
is sanitized (control characters removed, length capped, optionally HTML
escaped) before it is substituted.

The module contains:
- sanitize_text: Cleans one user-supplied value
- PromptTemplate: A system prompt plus a user prompt template
- SecurePromptManager: The prompts for question generation, answer scoring,
  ideal answers and resume analysis

Dependencies:
- re: For stripping control characters
- html: For HTML entity encoding
- loguru: For logging truncation and unknown placeholders
"""

from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass
import re
import html
from loguru import logger

RESUME_CONTEXT_LIMIT = 4000
IDEAL_ANSWERS_QUESTIONS_LIMIT = 20000

def sanitize_text(text: str, max_length: int = 1000, escape_html: bool = True) -> str:
    """
    Clean a user-supplied value before it is placed into a prompt.

    Args:
        text (str): The value to clean
        max_length (int): Characters kept after cleaning (default: 1000)
        escape_html (bool): HTML-escape the value first (default: True)

    Returns:
        str: The cleaned value

    Raises:
        ValueError: If text is None or nothing is left after cleaning
    """
    if text is None:
        raise ValueError("Text cannot be None")

    text = str(text)
    if escape_html:
        text = html.escape(text)
    text = text.strip()

    # Newlines and tabs survive; every other C0 control character and DEL is dropped
    text = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', text)

    if len(text) > max_length:
        logger.warning(f"Prompt value truncated from {len(text)} to {max_length} characters")
        text = text[:max_length]

    # Drop lone surrogates that cannot be encoded
    text = text.encode('utf-8', errors='ignore').decode('utf-8')

    if not text:
        raise ValueError("Text cannot be empty after sanitization")
    return text

@dataclass
class PromptTemplate:
    """
    A prompt with named placeholders.

    `sanitization_config` maps a placeholder name to sanitize_text options
    (`max_length`, `escape_html`); placeholders without an entry use the
    defaults.
    """
    template: str
    placeholders: Dict[str, str]
    system_prompt: str = ""
    sanitization_config: Optional[Dict[str, Dict]] = None

    def render(self, **kwargs) -> str:
        """
        Substitute sanitized values into the template.

        Keys that are not declared placeholders are ignored.

        Raises:
            ValueError: If a declared placeholder has no value, or a value
                is empty after sanitization
        """
        missing = set(self.placeholders) - set(kwargs)
        if missing:
            raise ValueError(f"Missing required placeholders: {missing}")

        config = self.sanitization_config or {}
        values = {}
        for key, value in kwargs.items():
            if key not in self.placeholders:
                logger.warning(f"Unknown placeholder key: {key}")
                continue
            options = config.get(key, {})
            values[key] = sanitize_text(
                str(value),
                max_length=options.get('max_length', 1000),
                escape_html=options.get('escape_html', True)
            )

        try:
            return self.template.format(**values)
        except KeyError as e:
            raise ValueError(f"Template rendering error: {e}") from e


class SecurePromptManager:
    """
    Secure prompt manager that isolates prompts from user data.

    Each getter returns a (system_prompt, user_prompt) pair ready to hand to
    the generative client.
    """

    def __init__(self):
        self._templates = self._initialize_templates()

    def _initialize_templates(self) -> Dict[str, PromptTemplate]:
        """Initialize secure prompt templates with explicit placeholders."""
        return {
            "question_generation": PromptTemplate(
                system_prompt="You are a professional interviewer.",
                template="Ask exactly {question_count} short and to the point {difficulty}-level interview questions for a {role}. Return only numbered questions.",
                placeholders={
                    "question_count": "Requested number of questions",
                    "difficulty": "Difficulty level",
                    "role": "Job role to interview for"
                },
                sanitization_config={
                    "role": {"max_length": 200, "escape_html": False}
                }
            ),
            "resume_question_generation": PromptTemplate(
                system_prompt="You are a professional interviewer.",
                template="""You are an expert technical interviewer.
ROLE: {role}
RESUME: \"\"\"{resume_context}\"\"\"
INSTRUCTIONS: Ask exactly {question_count} {difficulty}-level questions.
Return ONLY the numbered questions.""",
                placeholders={
                    "role": "Job role to interview for",
                    "resume_context": "Resume text the questions should be tailored to",
                    "question_count": "Requested number of questions",
                    "difficulty": "Difficulty level"
                },
                sanitization_config={
                    "role": {"max_length": 200, "escape_html": False},
                    "resume_context": {"max_length": RESUME_CONTEXT_LIMIT, "escape_html": False}
                }
            ),
            "answer_scoring": PromptTemplate(
                system_prompt="You are an interview coach.",
                template="""Question: {question}
Answer: {answer}
Evaluate briefly:
Score (out of 10): <number>
Feedback: <sentence>""",
                placeholders={
                    "question": "Interview question being answered",
                    "answer": "User's answer to score"
                },
                sanitization_config={
                    "question": {"max_length": 1000, "escape_html": False},
                    "answer": {"max_length": 5000, "escape_html": False}
                }
            ),
            "ideal_answers": PromptTemplate(
                system_prompt="You are a senior interview coach.",
                template="""Questions:
{numbered_questions}

INSTRUCTIONS:
1. Generate a concise, ideal (10/10) answer for each question above.
2. Return ONLY a valid JSON array of exactly {question_count} strings, where each string is the ideal answer to the corresponding question.
3. Do NOT wrap the JSON in markdown formatting (like ```json). Return the raw JSON array.
4. Do NOT include any intro or outro text.""",
                placeholders={
                    "numbered_questions": "Numbered list of the session's questions",
                    "question_count": "Number of answers expected"
                },
                sanitization_config={
                    "numbered_questions": {"max_length": IDEAL_ANSWERS_QUESTIONS_LIMIT, "escape_html": False}
                }
            ),
            "resume_analysis": PromptTemplate(
                system_prompt="You are an expert ATS (Applicant Tracking System) and Resume Coach.",
                template="""Analyze this resume for the role: "{target_role}".
Resume Text: {resume_text}

Provide analysis including:
- ATS compatibility score
- Matched keywords and skills
- Missing critical skills for the role
- Formatting issues (structure, readability, ATS problems)
- Grammatical and writing errors (be accurate - only report actual errors, not stylistic preferences)

Return JSON:
{{
  "atsScore": <0-100>,
  "keywordsMatched": [relevant skills/keywords found],
  "missingSkills": [critical skills missing for this role],
  "formattingIssues": [formatting, structure, ATS issues, and ACTUAL grammatical errors only]
}}""",
                placeholders={
                    "target_role": "Role the resume is assessed against",
                    "resume_text": "Normalized resume text"
                },
                sanitization_config={
                    "target_role": {"max_length": 200, "escape_html": False},
                    "resume_text": {"max_length": RESUME_CONTEXT_LIMIT, "escape_html": False}
                }
            )
        }

    def _prompt(self, name: str, **kwargs) -> Tuple[str, str]:
        template = self._templates[name]
        return template.system_prompt, template.render(**kwargs)

    def get_question_generation_prompt(self, role: str, difficulty: str, question_count: int, resume_context: Optional[str] = None) -> Tuple[str, str]:
        """
        Get the question generation prompt.

        The resume-tailored variant is used when resume context is present;
        only its first 4000 characters are embedded.

        Returns:
            Tuple[str, str]: (system_prompt, user_prompt)
        """
        if resume_context and resume_context.strip():
            return self._prompt(
                "resume_question_generation",
                role=role,
                resume_context=resume_context[:RESUME_CONTEXT_LIMIT],
                question_count=question_count,
                difficulty=difficulty
            )
        return self._prompt(
            "question_generation",
            question_count=question_count,
            difficulty=difficulty,
            role=role
        )

    def get_answer_scoring_prompt(self, question: str, answer: str) -> Tuple[str, str]:
        """Get the fixed-template scoring prompt for one answer."""
        return self._prompt("answer_scoring", question=question, answer=answer)

    def get_ideal_answers_prompt(self, questions: List[str]) -> Tuple[str, str]:
        """Get the batched ideal answer prompt for a session's questions.

        Raises:
            ValueError: If the numbered list does not fit the prompt. A cut
                list would no longer match the answer count the prompt asks for.
        """
        numbered_questions = "\n".join(f"{index}. {question}" for index, question in enumerate(questions, start=1))
        if len(numbered_questions) > IDEAL_ANSWERS_QUESTIONS_LIMIT:
            logger.warning(f"Question list of {len(numbered_questions)} characters exceeds the ideal answer prompt limit")
            raise ValueError("Question list too long for the ideal answer prompt")
        return self._prompt(
            "ideal_answers",
            numbered_questions=numbered_questions,
            question_count=len(questions)
        )

    def get_resume_analysis_prompt(self, target_role: str, resume_text: str) -> Tuple[str, str]:
        """Get the structured resume assessment prompt."""
        return self._prompt("resume_analysis", target_role=target_role, resume_text=resume_text)


# Global instance for reuse across the application
secure_prompt_manager = SecurePromptManager()
