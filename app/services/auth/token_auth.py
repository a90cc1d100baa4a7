"""Token Authentication Module

This module identifies the caller of a protected route. Tokens are issued by
the account service (outside this API) as HS256 JWTs signed with JWT_SECRET;
their `id` claim is the owner id every session and review is keyed by.

Dependencies:
- jwt (PyJWT): For token verification.
- fastapi: For the request dependency.
- loguru: For logging operations.
- dotenv: For environment variable loading.
"""

import os
from typing import Optional, Tuple
import jwt
from dotenv import load_dotenv
from fastapi import Request
from loguru import logger
from app.errors.exceptions import Unauthorized

load_dotenv()

JWT_ALGORITHM = "HS256"


def _jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise RuntimeError("JWT_SECRET environment variable is not set.")
    return secret


def verify_token(token: str) -> Tuple[Optional[dict], Optional[str]]:
    """Verify a bearer token and extract the owner id.

    Args:
        token (str): Encoded JWT

    Returns:
        tuple: (decoded_token, owner_id) if valid, (None, None) if invalid
    """
    try:
        decoded_token = jwt.decode(token, _jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None, None

    owner_id = decoded_token.get("id")
    if owner_id is None:
        return None, None
    return decoded_token, str(owner_id)


def get_current_owner_id(request: Request) -> str:
    """Extract and verify the bearer token from request headers.

    Serves as a FastAPI dependency for every owner-scoped route.

    Args:
        request (Request): FastAPI request object containing headers

    Returns:
        str: Owner id of the authenticated user

    Raises:
        Unauthorized: If the authorization header is missing, invalid, or the token is expired
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthorized("Missing or invalid authorization header")

    token = auth_header.split(" ", 1)[1].strip()
    _, owner_id = verify_token(token)
    if not owner_id:
        raise Unauthorized("Invalid or expired token")

    return owner_id
