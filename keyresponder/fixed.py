from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Optional

from .errors import ResponseError
from .responder import ERR_EXIT_STATUS, ExitFunc


@dataclass(frozen=True)
class FixedResponse:
    """
    Always gives the same response, without touching the terminal.

    Useful for testing code that takes a responder. No checks are made of
    ``response`` so it may be something a real ``Responder`` could never
    return, such as an uppercase or whitespace character.
    """

    response: str
    err: Optional[ResponseError] = None
    exit_func: Optional[ExitFunc] = field(default=None, compare=False, repr=False)

    def get_response(self) -> str:
        if self.err is not None:
            raise self.err
        return self.response

    def get_response_or_die(self) -> str:
        if self.err is not None:
            exit_func = self.exit_func if self.exit_func is not None else sys.exit
            exit_func(ERR_EXIT_STATUS)
            raise self.err
        return self.response

    def get_response_indent(self, first: int, second: int) -> str:
        return self.get_response()

    def get_response_indent_or_die(self, first: int, second: int) -> str:
        return self.get_response_or_die()
