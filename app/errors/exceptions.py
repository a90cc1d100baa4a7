from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=HTTP_404_NOT_FOUND, detail=detail)

class InternalServerError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(status_code=HTTP_401_UNAUTHORIZED, detail=detail)

class BadGateway(HTTPException):
    def __init__(self, detail: str = "Upstream service error"):
        super().__init__(status_code=HTTP_502_BAD_GATEWAY, detail=detail)

class InvalidInput(BadRequest):
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(detail=detail)

class SessionNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Interview '{identifier}' not found." if identifier else "Interview not found."
        super().__init__(detail=detail)

class ReviewNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Resume review '{identifier}' not found." if identifier else "Resume review not found."
        super().__init__(detail=detail)

class UpstreamUnavailable(BadGateway):
    def __init__(self, detail: str = "Failed to connect to AI service"):
        super().__init__(detail=detail)

class ValidationFailed(BadGateway):
    def __init__(self, detail: str = "AI service returned invalid output after retries", attempts: int = 0):
        self.attempts = attempts
        super().__init__(detail=detail)

class UnsupportedFileType(BadRequest):
    def __init__(self, media_type: str = None):
        detail = "Unsupported file type. Please upload PDF or plain text files only."
        if media_type:
            detail = f"Unsupported file type '{media_type}'. Please upload PDF or plain text files only."
        super().__init__(detail=detail)

class TextExtractionFailed(HTTPException):
    def __init__(self, detail: str = "Failed to extract text from file", suggestion: str = None):
        self.suggestion = suggestion
        super().__init__(status_code=HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)
