"""
Description:
Helpers that turn free-text generative model output into structured values.

Every parser here is total: free-text readers fall back to a default, and
structured readers return a ParsedValid or ParseError tag instead of raising,
so callers decide whether a bad response is retried, degraded or surfaced.

Dependencies:
- app.constants.regex_patterns: For accessing precompiled regex patterns.
- app.schemas.model_output: For the tagged parse result.
- app.schemas.resume_schemas: For the resume assessment shape.
- pydantic: For validating the resume assessment.
- json: For structural parsing.
"""
import json
from typing import List, Optional, Union
from pydantic import ValidationError
from app.constants.regex_patterns import REGEX_PATTERNS
from app.schemas.model_output import RawText, ParsedValid, ParseError
from app.schemas.resume_schemas import ResumeAssessment

MIN_QUESTION_LENGTH = 5
MAX_SCORE = 10


def parse_question_lines(text: str) -> List[str]:
    """
    Split a free-text question list into individual questions.

    Lines are trimmed, a leading "1.", "2)" or "3-" marker is removed, and
    fragments of MIN_QUESTION_LENGTH characters or fewer are dropped.

    Example:
        >>> parse_question_lines("1. What is REST?\\n2) Explain joins.\\nOk")
        ['What is REST?', 'Explain joins.']
    """
    questions = []
    for line in (text or "").split("\n"):
        line = line.strip()
        if not line:
            continue
        line = REGEX_PATTERNS['enumeration_marker'].sub("", line)
        if len(line) > MIN_QUESTION_LENGTH:
            questions.append(line)
    return questions


def extract_score(text: str) -> int:
    """
    Read the "Score (out of 10): N" line from scoring feedback.

    Returns 0 when the line is missing. Scores above 10 are clamped.
    """
    match = REGEX_PATTERNS['score'].search(text or "")
    if not match:
        return 0
    digits = match.group(1).lstrip("0") or "0"
    # int() refuses very long digit strings
    if len(digits) > len(str(MAX_SCORE)):
        return MAX_SCORE
    return min(int(digits), MAX_SCORE)


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` fences wrapped around a completion."""
    text = (text or "").strip()
    if text.startswith("```"):
        text = REGEX_PATTERNS['code_fence'].sub("", text).strip()
    return text


def extract_json_object(text: str) -> Optional[str]:
    """Return the first "{" through last "}" span of the text, if any."""
    match = REGEX_PATTERNS['json_object'].search(text or "")
    return match.group(0) if match else None


def parse_answer_array(raw: RawText, expected_length: int) -> Union[ParsedValid, ParseError]:
    """
    Parse a completion that must be a JSON array of exactly expected_length items.
    """
    cleaned = strip_code_fences(raw.text)
    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        return ParseError(reason=f"invalid JSON: {e}", raw=raw.text)

    if not isinstance(parsed, list):
        return ParseError(reason=f"expected a JSON array, got {type(parsed).__name__}", raw=raw.text)
    if len(parsed) != expected_length:
        return ParseError(reason=f"invalid array length ({len(parsed)} vs {expected_length})", raw=raw.text)
    return ParsedValid(value=parsed, raw=raw.text)


def parse_resume_assessment(raw: RawText) -> Union[ParsedValid, ParseError]:
    """
    Parse a completion that must contain a ResumeAssessment JSON object.

    Prose around the object is tolerated; only the first brace-delimited
    span is read.
    """
    candidate = extract_json_object(raw.text)
    if candidate is None:
        return ParseError(reason="No JSON object found in AI response", raw=raw.text)
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        return ParseError(reason=f"invalid JSON: {e}", raw=raw.text)
    try:
        assessment = ResumeAssessment.model_validate(data)
    except ValidationError as e:
        return ParseError(reason=f"assessment failed validation: {e.error_count()} error(s)", raw=raw.text)
    return ParsedValid(value=assessment, raw=raw.text)


def normalize_resume_text(text: str, limit: int = 4000) -> str:
    """
    Normalize extracted resume text and cap its length.

    Runs of spaces and tabs collapse to one space, spaces next to line breaks
    are dropped, three or more consecutive newlines become two, and the result
    is trimmed and cut to `limit` characters. Text already within the limit
    keeps all of its content in order.
    """
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    text = REGEX_PATTERNS['horizontal_whitespace'].sub(" ", text)
    text = REGEX_PATTERNS['space_around_newline'].sub("\n", text)
    text = REGEX_PATTERNS['excess_newlines'].sub("\n\n", text)
    return text.strip()[:limit]
