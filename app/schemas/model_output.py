"""
Model Output Schemas

This module defines the tagged result used to carry every generative model
response through validation. A response starts as RawText and is turned into
either ParsedValid (it matched the expected shape) or ParseError (it did not,
or the call itself failed). Retry loops branch on the tag instead of relying
on exceptions for control flow.

Dependencies:
- dataclasses: For the immutable result variants.
- typing: For the generic payload type.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class RawText:
    """Unvalidated completion text exactly as returned by the model."""
    text: str


@dataclass(frozen=True)
class ParsedValid(Generic[T]):
    """A completion that parsed and passed validation."""
    value: T
    raw: str = ""


@dataclass(frozen=True)
class ParseError:
    """A discarded attempt and the reason it was discarded."""
    reason: str
    raw: str = ""


ModelOutput = Union[RawText, ParsedValid, ParseError]
