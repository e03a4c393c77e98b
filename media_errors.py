"""
Error taxonomy for the AI Media Studio engine.

Every error carries a ``user_message`` that is safe to show to an end user
verbatim and the HTTP status the API layer maps it to.
"""

from typing import Any, Dict, List, Optional, Sequence


class MediaStudioError(Exception):
    """Base class for every failure surfaced to callers."""

    status_code: int = 500
    default_message: str = "Media generation failed."

    def __init__(self, message: Optional[str] = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.user_message, "error": type(self).__name__}


class BackendUnavailable(MediaStudioError):
    """The generation backend could not be reached or rejected the call."""

    status_code = 502
    default_message = "The generation service is unavailable. Please try again later."

    def __init__(self, message: Optional[str] = None, model: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.model = model
        self.cause = cause


class ConfigurationError(BackendUnavailable):
    """The generation client cannot be built (e.g. no credential configured)."""

    status_code = 503
    default_message = "API key is missing. Set GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) in the environment."


class EmptyResponse(MediaStudioError):
    """The backend answered without a body."""

    status_code = 502
    default_message = "No response was generated by the model."


class MalformedResponse(MediaStudioError):
    """The backend body is not the structured document that was asked for."""

    status_code = 502
    default_message = "The model returned a response that could not be parsed."


class IncompleteResponse(MediaStudioError):
    """A required field is missing or empty in the backend payload."""

    status_code = 502

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields: List[str] = list(missing_fields)
        names = ", ".join(self.missing_fields)
        super().__init__(f"The model response is missing required field(s): {names}.")


class NoArtifactsProduced(MediaStudioError):
    """A batch finished without producing a single artifact."""

    status_code = 502

    def __init__(self, attempted: int, last_error: Optional[str] = None):
        self.attempted = attempted
        self.last_error = last_error
        message = f"Failed to generate any images ({attempted} attempted)."
        if last_error:
            message = f"{message} Last error: {last_error}"
        super().__init__(message)


class RequestValidationError(MediaStudioError):
    """The caller supplied an invalid request."""

    status_code = 422

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class GenerationTimeout(MediaStudioError):
    """A single backend call exceeded the configured time budget."""

    status_code = 504

    def __init__(self, timeout_seconds: float, model: Optional[str] = None):
        self.timeout_seconds = timeout_seconds
        self.model = model
        super().__init__(f"The generation request timed out after {timeout_seconds:g} seconds.")
