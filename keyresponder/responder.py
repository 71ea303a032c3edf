"""Prompting for, reading and checking a single character response.

A ``Responder`` is built once with ``new`` (or ``new_or_panic``) and then
asked for any number of responses. Each request prints the prompt, puts the
terminal into raw mode for a single character read, and repeats until the
user enters one of the valid characters. Whitespace selects the default
response (if there is one) and ``?`` shows a help listing of the choices.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Protocol, TextIO

from .config import get_config
from .errors import ConfigError, InputClosed, InvalidResponse, ReadError, ResponseError, RetriesExhausted
from .rawterm import TerminalReader
from .text import TextWrapper

logger = logging.getLogger(__name__)

HELP_RUNE = "?"
ERR_EXIT_STATUS = 1

_CHAR_FMT = "{}  "
_LIST_INDENT = 4
_ERR_INDENT = "    "

ExitFunc = Callable[[int], Any]


class CharReader(Protocol):
    def read_one_char(self) -> str:
        ...


class ResponderProtocol(Protocol):
    """The ways of getting a response, shared by ``Responder`` and ``FixedResponse``."""

    def get_response(self) -> str:
        ...

    def get_response_or_die(self) -> str:
        ...

    def get_response_indent(self, first: int, second: int) -> str:
        ...

    def get_response_indent_or_die(self, first: int, second: int) -> str:
        ...


@dataclass(frozen=True)
class Responder:
    """
    The validated details needed to collect and check a response.

    Build instances with ``new`` rather than calling the constructor
    directly; the constructor does no validation.
    """

    prompt: str
    responses: Mapping[str, str] = field(hash=False)
    default: Optional[str] = None
    max_reprompts: Optional[int] = None
    indent_first: int = 0
    indent: int = 0

    reader: Optional[CharReader] = field(default=None, compare=False, repr=False)
    out: Optional[TextIO] = field(default=None, compare=False, repr=False)
    err: Optional[TextIO] = field(default=None, compare=False, repr=False)
    wrapper: Optional[TextWrapper] = field(default=None, compare=False, repr=False)
    exit_func: Optional[ExitFunc] = field(default=None, compare=False, repr=False)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def _out(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _err(self) -> TextIO:
        return self.err if self.err is not None else sys.stderr

    def _reader(self) -> CharReader:
        return self.reader if self.reader is not None else TerminalReader()

    def _wrapper(self) -> TextWrapper:
        return self.wrapper if self.wrapper is not None else TextWrapper()

    def _exit(self) -> ExitFunc:
        return self.exit_func if self.exit_func is not None else sys.exit

    # Rendering

    def sorted_responses(self) -> List[str]:
        """The valid responses in lexicographic order."""
        return sorted(self.responses)

    def valid_responses_text(self) -> str:
        """
        The valid responses separated by a slash.

        The default, if any, comes first and is shown in brackets (like so:
        ``[y]``). The help character is always last.
        """
        parts: List[str] = []
        if self.has_default:
            parts.append(f"[{self.default}]")
        parts.extend(c for c in self.sorted_responses() if c != self.default)
        parts.append(HELP_RUNE)
        return "(" + "/".join(parts) + "): "

    def prompt_line(self) -> str:
        return f"{self.prompt}? {self.valid_responses_text()}"

    def help_lines(self, indent: int) -> List[str]:
        """
        The lines of the help message, starting with an empty line.

        Args:
            indent: Indent of the heading and closing lines. The list of
                choices is indented a further four spaces.

        Returns:
            Lines without trailing newlines
        """
        wrapper = self._wrapper()
        list_indent = indent + _LIST_INDENT

        lines = [""]
        lines.extend(wrapper.wrap_lines("Enter one of:", indent))

        if self.has_default:
            lines.extend(
                wrapper.prefixed_lines(
                    _CHAR_FMT.format(self.default),
                    f"{self.responses[self.default]} (this is the default)",
                    list_indent,
                )
            )

        for k in self.sorted_responses():
            if k == self.default:
                continue
            lines.extend(wrapper.prefixed_lines(_CHAR_FMT.format(k), self.responses[k], list_indent))

        lines.extend(wrapper.prefixed_lines(_CHAR_FMT.format(HELP_RUNE), "to show this message\n", list_indent))
        lines.extend(
            wrapper.wrap_lines(
                "to select the default either enter the character or whitespace"
                " (a space, tab or return character)",
                indent,
            )
        )
        return lines

    def print_valid_responses(self) -> None:
        out = self._out()
        out.write(self.valid_responses_text())
        out.flush()

    def print_prompt(self) -> None:
        out = self._out()
        out.write(self.prompt_line())
        out.flush()

    def print_help(self) -> None:
        self.print_help_indent(self.indent)

    def print_help_indent(self, indent: int) -> None:
        out = self._out()
        for line in self.help_lines(indent):
            out.write(line + "\n")
        out.flush()

    # Reading

    def _get_resp(self, reader: CharReader) -> str:
        resp = reader.read_one_char()

        if self.has_default and resp.isspace():
            return self.default  # type: ignore[return-value]
        if resp == HELP_RUNE:
            return resp

        resp = resp.lower()
        if resp not in self.responses:
            raise InvalidResponse(resp)
        return resp

    def get_response(self) -> str:
        """
        Print the prompt and read a single character from standard input.

        An invalid response is reported on the error stream and the user is
        prompted again. If a maximum number of reprompts was set, the
        request gives up once it has been exceeded.

        Returns:
            The accepted response

        Raises:
            InputClosed: Standard input is exhausted
            RetriesExhausted: Too many invalid responses were entered
        """
        return self.get_response_indent(self.indent_first, self.indent)

    def get_response_indent(self, first: int, second: int) -> str:
        """As ``get_response`` but with the indents given explicitly."""
        out = self._out()
        err = self._err()
        reader = self._reader()

        prefix = " " * first
        second_prefix = " " * second
        attempts = 0

        while True:
            logger.debug("prompting", extra={"data": {"prompt": self.prompt, "attempt": attempts + 1}})
            out.write(prefix)
            prefix = second_prefix

            self.print_prompt()

            try:
                resp = self._get_resp(reader)
            except InputClosed:
                logger.debug("input closed", extra={"data": {"prompt": self.prompt, "attempts": attempts}})
                raise
            except (InvalidResponse, ReadError) as e:
                attempts += 1
                logger.debug(
                    "response rejected",
                    extra={"data": {"prompt": self.prompt, "attempt": attempts, "error": str(e)}},
                )
                if self.max_reprompts is not None and attempts > self.max_reprompts:
                    raise RetriesExhausted(attempts, e) from e

                err.write("\n")
                err.write(prefix + _ERR_INDENT + str(e) + "\n")
                err.flush()
                continue

            if resp == HELP_RUNE:
                logger.debug("help requested", extra={"data": {"prompt": self.prompt}})
                self.print_help_indent(second)
                continue

            logger.debug("response accepted", extra={"data": {"prompt": self.prompt, "response": resp}})
            return resp

    def get_response_or_die(self) -> str:
        """
        As ``get_response`` but any error is printed and the process exits
        with status 1.
        """
        return self.get_response_indent_or_die(self.indent_first, self.indent)

    def get_response_indent_or_die(self, first: int, second: int) -> str:
        try:
            return self.get_response_indent(first, second)
        except ResponseError as e:
            err = self._err()
            err.write("\n")
            err.write(" " * second + _ERR_INDENT + str(e) + "\n")
            err.flush()
            self._exit()(ERR_EXIT_STATUS)
            raise


RespOpt = Callable[[Responder], Responder]


def set_default(d: str) -> RespOpt:
    """Set the response chosen when the user enters whitespace."""

    def opt(r: Responder) -> Responder:
        if d not in r.responses:
            raise ConfigError(
                f"set_default: the default response ({d}) is not in the list of valid responses"
            )
        return replace(r, default=d)

    return opt


def set_max_reprompts(maximum: int) -> RespOpt:
    """
    Set the number of times the user will be reprompted for a valid response
    before an error is raised. The value must be greater than 0.
    """

    def opt(r: Responder) -> Responder:
        if maximum <= 0:
            raise ConfigError(
                f"set_max_reprompts: the maximum number of reprompts ({maximum}) must be greater than 0"
            )
        return replace(r, max_reprompts=maximum)

    return opt


def set_indents(indent_first: int, indent: int) -> RespOpt:
    """Set the indents for the first and subsequent lines of output."""

    def opt(r: Responder) -> Responder:
        if indent < 0:
            raise ConfigError(f"set_indents: the indent ({indent}) must be greater than or equal to 0")
        if indent_first < 0:
            raise ConfigError(
                f"set_indents: the first indent ({indent_first}) must be greater than or equal to 0"
            )
        return replace(r, indent_first=indent_first, indent=indent)

    return opt


def set_reader(reader: CharReader) -> RespOpt:
    def opt(r: Responder) -> Responder:
        return replace(r, reader=reader)

    return opt


def set_streams(out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> RespOpt:
    def opt(r: Responder) -> Responder:
        return replace(r, out=out, err=err)

    return opt


def set_wrapper(wrapper: TextWrapper) -> RespOpt:
    def opt(r: Responder) -> Responder:
        return replace(r, wrapper=wrapper)

    return opt


def set_exit_func(exit_func: ExitFunc) -> RespOpt:
    def opt(r: Responder) -> Responder:
        return replace(r, exit_func=exit_func)

    return opt


def _check_responses(responses: Mapping[str, str]) -> None:
    if len(responses) <= 1:
        raise ConfigError("too few allowed responses - there must be at least 2")

    for v in responses:
        if not isinstance(v, str) or len(v) != 1:
            raise ConfigError(f"responses must be single characters - {v!r} is not")
        if v.isupper():
            raise ConfigError(f"only lowercase responses are allowed - '{v}' is uppercase")
        if v.isspace():
            raise ConfigError(
                "a whitespace character is not an allowed response"
                " - it is used to select the default response"
            )
        if v == HELP_RUNE:
            raise ConfigError(f"'{HELP_RUNE}' is not an allowed response - it is used to request help")
        if not v.isprintable():
            raise ConfigError(f"only printable responses are allowed - {v!r} is not printable")


def _check_settings(r: Responder) -> None:
    if r.default is not None and r.default not in r.responses:
        raise ConfigError(f"the default response ({r.default}) is not in the list of valid responses")
    if r.max_reprompts is not None and r.max_reprompts <= 0:
        raise ConfigError(f"the maximum number of reprompts ({r.max_reprompts}) must be greater than 0")
    if r.indent < 0:
        raise ConfigError(f"the indent ({r.indent}) must be greater than or equal to 0")
    if r.indent_first < 0:
        raise ConfigError(f"the first indent ({r.indent_first}) must be greater than or equal to 0")


def new(prompt: str, responses: Mapping[str, str], *opts: RespOpt) -> Responder:
    """
    Create a responder and check that it is correct.

    Configured indents and reprompt limit are applied first, then each
    option in turn, so later options override earlier ones.

    Args:
        prompt: Question text; ``"? "`` and the valid responses follow it
        responses: Map of valid response characters to their descriptions
        *opts: Option functions such as ``set_default('y')``

    Returns:
        The validated responder

    Raises:
        ConfigError: Any of the responses or options is invalid
    """
    _check_responses(responses)

    cfg = get_config().prompt
    r = Responder(
        prompt=prompt,
        responses=MappingProxyType(dict(responses)),
        max_reprompts=cfg.max_reprompts,
        indent_first=cfg.indent_first,
        indent=cfg.indent,
    )

    for o in opts:
        r = o(r)

    _check_settings(r)
    return r


def new_or_panic(prompt: str, responses: Mapping[str, str], *opts: RespOpt) -> Responder:
    """Create a responder, treating any configuration error as a bug."""
    try:
        return new(prompt, responses, *opts)
    except ConfigError as e:
        raise RuntimeError(f"bad responder configuration: {e}") from e
