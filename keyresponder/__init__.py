"""
keyresponder - single keypress answers to terminal prompts.

This library provides:
- A validated set of single character responses with an optional default
- A prompt line and help listing built from those responses
- A response loop that reads one raw keypress at a time and reprompts on
  invalid input, up to an optional limit
- A fixed responder for testing code that asks questions
"""

__version__ = "0.1.0"

from .errors import (
    ResponderError,
    ConfigError,
    ResponseError,
    InvalidResponse,
    ReadError,
    InputClosed,
    RetriesExhausted,
)
from .responder import (
    HELP_RUNE,
    ERR_EXIT_STATUS,
    Responder,
    ResponderProtocol,
    new,
    new_or_panic,
    set_default,
    set_max_reprompts,
    set_indents,
    set_reader,
    set_streams,
    set_wrapper,
    set_exit_func,
)
from .fixed import FixedResponse
from .rawterm import RawMode, TerminalReader
from .text import TextWrapper
from .config import get_config, configure
from .log import setup_logging

__all__ = [
    "ResponderError",
    "ConfigError",
    "ResponseError",
    "InvalidResponse",
    "ReadError",
    "InputClosed",
    "RetriesExhausted",
    "HELP_RUNE",
    "ERR_EXIT_STATUS",
    "Responder",
    "ResponderProtocol",
    "new",
    "new_or_panic",
    "set_default",
    "set_max_reprompts",
    "set_indents",
    "set_reader",
    "set_streams",
    "set_wrapper",
    "set_exit_func",
    "FixedResponse",
    "RawMode",
    "TerminalReader",
    "TextWrapper",
    "get_config",
    "configure",
    "setup_logging",
]
