"""
Description:
This module contains precompiled regex patterns for reading free-text output
produced by the generative model.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.
"""

import re

# Compile regex patterns once for better performance
REGEX_PATTERNS = {
    # "Score (out of 10): 7"
    'score': re.compile(r"Score\s*\(out of 10\)\s*:\s*(\d+)", re.IGNORECASE),
    # "1. ", "2) ", "3 - ", "4 "
    'enumeration_marker': re.compile(r"^\d+[\s.)\-]+\s*"),
    # first "{" through last "}"
    'json_object': re.compile(r"\{.*\}", re.DOTALL),
    'code_fence': re.compile(r"```(?:json)?", re.IGNORECASE),
    'horizontal_whitespace': re.compile(r"[^\S\r\n]+"),
    'space_around_newline': re.compile(r" *\n *"),
    'excess_newlines': re.compile(r"\n{3,}"),
}
