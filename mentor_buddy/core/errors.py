"""Upstream (LLM API) failure classification.

Classification happens once, in the chat orchestrator, from the HTTP status
code the upstream exception carries. Anything unrecognised stays unclassified
and ends up as a plain 500.
"""


class UpstreamError(Exception):
    status_code = 500
    error_type = "upstream_error"
    message = "The AI service failed to respond. Please try again."

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message, "error_type": self.error_type}


class QuotaExceededError(UpstreamError):
    status_code = 429
    error_type = "quota_exceeded"
    message = (
        "Gemini API quota exceeded. Please check your plan and billing details "
        "in Google AI Studio or wait before sending more messages."
    )


class InvalidApiKeyError(UpstreamError):
    status_code = 401
    error_type = "invalid_api_key"
    message = "Invalid Gemini API key. Please check your GEMINI_API_KEY configuration."


class ApiRequestError(UpstreamError):
    status_code = 400
    error_type = "api_request_error"
    message = "Gemini API request error. Please try again."


_BY_STATUS = {
    429: QuotaExceededError,
    401: InvalidApiKeyError,
    403: InvalidApiKeyError,
    400: ApiRequestError,
}

# Gemini answers a bad key with 400 + reason API_KEY_INVALID
_INVALID_KEY_REASON = "API_KEY_INVALID"
_INVALID_KEY_TEXT = "api key not valid"


def _status_of(exc: Exception) -> int | None:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        # grpc style .code() methods and string codes are ignored
        if isinstance(value, int) and not isinstance(value, bool):
            return int(value)
    return None


def _is_invalid_key(exc: Exception) -> bool:
    if getattr(exc, "reason", None) == _INVALID_KEY_REASON:
        return True
    return _INVALID_KEY_TEXT in str(exc).lower()


def classify_upstream_error(exc: Exception) -> UpstreamError | None:
    """Matching UpstreamError for a failed model call, None if unclassified."""
    status = _status_of(exc)
    if status == 400 and _is_invalid_key(exc):
        return InvalidApiKeyError()
    error_cls = _BY_STATUS.get(status)
    return error_cls() if error_cls else None
