"""Exceptions raised by the OpenWeatherMap clients."""

from typing import Optional


class OpenWeatherError(Exception):
    """Base class for client errors.

    Args:
        message: Human readable description
        cause: Underlying exception, if any
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class MissingCredential(OpenWeatherError):
    """Raised when a client is built without an API key."""

    def __init__(self, message: str = "no api key provided, use with_api_key()"):
        super().__init__(message)


class MissingLocation(OpenWeatherError):
    """Raised when a weather client is built without a location."""

    def __init__(self, message: str = "no location provided, use with_location()"):
        super().__init__(message)


class TransportError(OpenWeatherError):
    """Raised when the request could not be completed or its body read."""
    pass


class APIError(OpenWeatherError):
    """Raised when the remote service rejects a request.

    Args:
        code: HTTP status code of the response
        message: Message supplied by the remote service
    """

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return f"API error {self.code}: {self.message}"


class DecodeError(OpenWeatherError):
    """Raised when a success body does not match the expected schema.

    Args:
        message: Human readable description
        raw_body: The undecodable response body
        cause: Underlying validation error
    """

    def __init__(self, message: str, raw_body: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause)
        self.raw_body = raw_body


class EnrichmentError(OpenWeatherError):
    """Raised when a derived icon URL is malformed."""
    pass
