from typing import Any

INVALID_INPUT_MESSAGE = "'messages' field is required and must be an array."
UPSTREAM_ERROR_FALLBACK = "OpenAI API error"
MALFORMED_RESPONSE_MESSAGE = "Invalid response from OpenAI API"
INTERNAL_ERROR_FALLBACK = "Internal server error"


class RelayError(Exception):
    """Base error carrying the HTTP status and the ``error`` payload returned to the caller."""

    status_code: int = 500

    def __init__(self, error: Any, status_code: int | None = None) -> None:
        super().__init__(error if isinstance(error, str) else repr(error))
        self.error = error
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(RelayError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__(INVALID_INPUT_MESSAGE)


class UpstreamError(RelayError):
    """The completion API answered with a non-2xx status."""

    def __init__(self, status_code: int, error: Any) -> None:
        super().__init__(error, status_code=status_code)


class MalformedUpstreamResponseError(RelayError):
    def __init__(self) -> None:
        super().__init__(MALFORMED_RESPONSE_MESSAGE)


class InternalRelayError(RelayError):
    def __init__(self, message: str = "") -> None:
        super().__init__(message or INTERNAL_ERROR_FALLBACK)
