"""
Exceptions raised while building a responder or collecting a response.
"""

from typing import Optional


class ResponderError(Exception):
    """Base class for every error raised by keyresponder."""


class ConfigError(ResponderError, ValueError):
    """The responder was configured with values that can never work."""


class ResponseError(ResponderError):
    """Base class for errors raised while reading a response."""


class InvalidResponse(ResponseError):
    """The user entered a character that is not a valid response."""

    def __init__(self, response: str):
        super().__init__(f"Bad response: {response}")
        self.response = response


class ReadError(ResponseError):
    """Reading from the terminal failed for a reason other than end of input."""


class InputClosed(ResponseError, EOFError):
    """The input stream is exhausted; no further response can arrive."""

    def __init__(self, message: str = "end of input"):
        super().__init__(message)


class RetriesExhausted(ResponseError):
    def __init__(self, attempts: int, last_error: Optional[ResponseError] = None):
        msg = f"no valid response after {attempts} attempts"
        if last_error is not None:
            msg = f"{msg}: {last_error}"
        super().__init__(msg)
        self.attempts = attempts
        self.last_error = last_error
