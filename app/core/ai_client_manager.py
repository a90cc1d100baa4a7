"""
AI Client Manager

This module defines the boundary to the external text-generation service. Every
model-backed component talks to a GenerativeClient: one awaited call in, one
text completion out, or UpstreamUnavailable when the transport fails. The
production implementation wraps an AsyncOpenAI client pointed at an
OpenAI-compatible endpoint (the Hugging Face router by default).
"""

import os
import threading
from typing import Optional, Protocol
from openai import AsyncOpenAI, OpenAIError
from dotenv import load_dotenv
from loguru import logger
from app.errors.exceptions import UpstreamUnavailable

# Ensure .env is loaded
load_dotenv()

DEFAULT_BASE_URL = "https://router.huggingface.co/v1"
DEFAULT_MODEL = "Qwen/Qwen2.5-72B-Instruct"


def _clean_api_key(key: Optional[str]) -> Optional[str]:
    """Strip whitespace and wrapping quotes copied in from .env files."""
    if not key:
        return None
    key = key.strip()
    if len(key) >= 2 and key[0] == key[-1] and key[0] in ("'", '"'):
        key = key[1:-1]
    return key or None


class GenerativeClient(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int = 512, temperature: float = 0.7) -> str: ...


class OpenAIGenerativeClient:
    """
    GenerativeClient backed by an AsyncOpenAI chat completion endpoint.
    """

    def __init__(self, client: AsyncOpenAI, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int = 512, temperature: float = 0.7) -> str:
        """
        Issue one chat completion and return its text.

        Args:
            system_prompt (str): Instructions for the model persona
            user_prompt (str): The task prompt
            max_tokens (int): Completion length limit
            temperature (float): Sampling temperature

        Returns:
            str: The completion text (empty string if the model sent none)

        Raises:
            UpstreamUnavailable: If the request could not be completed
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt}
                ],
                max_tokens=max_tokens,
                temperature=temperature
            )
        except OpenAIError as e:
            logger.error(f"Generative model call failed: {e}")
            raise UpstreamUnavailable(f"Failed to connect to AI service: {e}") from e

        if not response.choices:
            logger.error("Generative model returned no choices")
            raise UpstreamUnavailable("AI service returned an empty response")

        content = response.choices[0].message.content or ""
        logger.debug(f"Generative model returned {len(content)} characters")
        return content


class AIClientManager:
    """
    Lazily builds the shared GenerativeClient.

    The underlying AsyncOpenAI client keeps a connection pool, so one instance
    is reused across requests.
    """

    _instance: Optional['AIClientManager'] = None
    _lock = threading.Lock()

    def __init__(self):
        self._client: Optional[OpenAIGenerativeClient] = None

    @classmethod
    def get_instance(cls) -> 'AIClientManager':
        """Thread-safe singleton instance getter."""
        if cls._instance is None:
            with cls._lock:
                # Double-check locking pattern
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def _initialize_client(self):
        """Lazy initialization of the client instance."""
        if self._client is not None:
            return

        with self._lock:
            if self._client is not None:
                return

            api_key = _clean_api_key(os.getenv("AI_API_KEY") or os.getenv("HF_API_KEY"))
            if not api_key:
                if os.getenv("ENV") == "test":
                    logger.warning("AI_API_KEY not set - generative client unavailable in test environment")
                    return
                raise RuntimeError(
                    "AI_API_KEY (or HF_API_KEY) environment variable is not set. "
                    "Please set it in your .env file or environment variables."
                )

            base_url = os.getenv("AI_BASE_URL", DEFAULT_BASE_URL)
            model = os.getenv("AI_MODEL", DEFAULT_MODEL)

            try:
                self._client = OpenAIGenerativeClient(
                    AsyncOpenAI(base_url=base_url, api_key=api_key),
                    model=model
                )
                logger.info(f"Initialized generative client for model {model}")
            except Exception as e:
                logger.error(f"Failed to initialize AI client: {e}")
                raise RuntimeError(f"Failed to initialize AI client: {e}") from e

    def get_client(self) -> GenerativeClient:
        """
        Get the shared generative client.

        Returns:
            GenerativeClient: Client instance

        Raises:
            RuntimeError: If the client failed to initialize
        """
        self._initialize_client()

        if self._client is None:
            raise RuntimeError("AI client failed to initialize properly")

        return self._client


def get_generative_client() -> GenerativeClient:
    """FastAPI dependency returning the shared generative client."""
    return AIClientManager.get_instance().get_client()
