"""
Description:
Bounded retry over tagged model output.

`retry_until_valid` folds an attempt function over range(max_attempts): each
attempt returns ParsedValid or ParseError, the first ParsedValid stops the
fold, and running out of attempts raises ValidationFailed. There is no delay
between attempts.

Dependencies:
- loguru: For logging discarded attempts.
- app.schemas.model_output: For the tagged parse result.
- app.errors.exceptions: For ValidationFailed.
"""
from typing import Awaitable, Callable, Union
from loguru import logger
from app.schemas.model_output import ParsedValid, ParseError
from app.errors.exceptions import ValidationFailed

MAX_ATTEMPTS = 3

Attempt = Callable[[int], Awaitable[Union[ParsedValid, ParseError]]]


async def retry_until_valid(attempt: Attempt, max_attempts: int = MAX_ATTEMPTS, label: str = "Model output"):
    """
    Run `attempt(n)` for n = 0..max_attempts-1 until one returns ParsedValid.

    Args:
        attempt: Coroutine function producing a tagged result for attempt n
        max_attempts: Hard cap on attempts
        label: Prefix for log messages

    Returns:
        The value carried by the first ParsedValid result

    Raises:
        ValidationFailed: If no attempt produced a valid result
    """
    last_reason = "no attempts made"
    for n in range(max_attempts):
        outcome = await attempt(n)
        if isinstance(outcome, ParsedValid):
            if n > 0:
                logger.info(f"[{label}] Valid output on attempt {n + 1}")
            return outcome.value
        last_reason = outcome.reason
        logger.warning(f"[{label}] Attempt {n + 1} failed: {outcome.reason}")

    logger.error(f"[{label}] No valid output after {max_attempts} attempts")
    raise ValidationFailed(
        f"{label}: failed to get valid output after {max_attempts} attempts ({last_reason})",
        attempts=max_attempts
    )
