"""
Description:
This module defines the schema for health check responses using Pydantic.

Dependencies:
- pydantic: For data validation and settings management.
"""
from pydantic import BaseModel

class HealthResponse(BaseModel):
    """
    Schema for health check endpoint responses.

    `database` is "ok" when a trivial query succeeds, otherwise "unavailable".
    """
    status: str
    database: str
