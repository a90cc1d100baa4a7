"""
Test Error Handlers Module

Tests the response bodies produced by the centralized exception handlers and
the status codes of the service's error taxonomy.
"""

import json
import pytest
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request
from app.errors.exceptions import (
    InvalidInput,
    SessionNotFound,
    ReviewNotFound,
    UpstreamUnavailable,
    ValidationFailed,
    UnsupportedFileType,
    TextExtractionFailed,
    Unauthorized,
    InternalServerError,
)
from app.errors.handlers import http_exception_handler, generic_exception_handler, database_integrity_handler


def make_request(path="/api/interviews"):
    return Request({"type": "http", "method": "POST", "path": path, "headers": [], "query_string": b""})


def body_of(response):
    return json.loads(response.body)


@pytest.mark.parametrize("exc, status", [
    (InvalidInput(), 400),
    (UnsupportedFileType("application/msword"), 400),
    (Unauthorized(), 401),
    (SessionNotFound("abc"), 404),
    (ReviewNotFound("abc"), 404),
    (TextExtractionFailed(), 422),
    (InternalServerError(), 500),
    (UpstreamUnavailable(), 502),
    (ValidationFailed(attempts=3), 502),
])
def test_taxonomy_status_codes(exc, status):
    assert exc.status_code == status


def test_not_found_names_the_identifier():
    assert SessionNotFound("abc").detail == "Interview 'abc' not found."
    assert ReviewNotFound().detail == "Resume review not found."


def test_http_exception_body():
    response = http_exception_handler(make_request(), SessionNotFound("abc"))
    assert response.status_code == 404
    assert body_of(response) == {"detail": "Interview 'abc' not found."}


def test_http_exception_body_includes_suggestion():
    exc = TextExtractionFailed("Failed to extract text from pdf file", suggestion="Try a standard PDF.")
    body = body_of(http_exception_handler(make_request(), exc))
    assert body == {"detail": "Failed to extract text from pdf file", "suggestion": "Try a standard PDF."}


def test_generic_exception_hides_details():
    response = generic_exception_handler(make_request(), RuntimeError("secret connection string"))
    assert response.status_code == 500
    assert "secret" not in response.body.decode()


def test_integrity_error_duplicate():
    exc = IntegrityError("INSERT INTO interviews", {}, Exception("UNIQUE constraint failed: interviews.id"))
    response = database_integrity_handler(make_request(), exc)
    assert response.status_code == 400
    assert body_of(response)["message"] == "Record already exists"


def test_integrity_error_other_constraint():
    exc = IntegrityError("INSERT INTO resume_reviews", {}, Exception("NOT NULL constraint failed: resume_reviews.ats_score"))
    body = body_of(database_integrity_handler(make_request(), exc))
    assert body["message"] == "Data constraint violation"
    assert "NOT NULL" not in json.dumps(body)
