"""
Error taxonomy for the interview engine.

Every error carries a short message that is safe to show to the candidate.
"""
from typing import Optional


class MockInterviewError(Exception):
    """Base class for all interview engine errors."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str = ""):
        super().__init__(message or self.user_message)


class InvalidInput(MockInterviewError, ValueError):
    """Programmatic misuse, e.g. aggregating an empty evaluation list."""
    user_message = "Invalid input."


class ValidationError(MockInterviewError, ValueError):
    """Malformed user input, e.g. an empty answer."""
    user_message = "Please check your input and try again."


class OracleError(MockInterviewError):
    """The scoring/question service failed or was unreachable."""
    user_message = "The AI service is unavailable. Please try again."

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimited(OracleError):
    user_message = "Rate limit exceeded. Please try again later."


class QuotaExhausted(OracleError):
    user_message = "AI credits exhausted. Please add more credits."


class PersistenceError(MockInterviewError):
    """A database or blob-store write failed."""
    user_message = "Could not save your interview. Please try again."


class CameraAccessDenied(MockInterviewError):
    """The webcam could not be opened; proctoring is disabled."""
    user_message = "Camera access denied. Please enable camera access for proctored interviews."
