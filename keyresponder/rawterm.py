"""
Raw mode terminal access for single character reads.
"""

import logging
import os
import sys
from typing import List, Optional, TextIO

try:
    import termios  # type: ignore
    import tty  # type: ignore
except ImportError:  # pragma: no cover
    termios = None  # type: ignore
    tty = None  # type: ignore

from .errors import InputClosed, ReadError

logger = logging.getLogger(__name__)


class RawMode:
    """
    Scoped raw mode for a terminal file descriptor.

    The previous terminal attributes are saved on entry and restored on
    exit, whether the body returns normally or raises. If the descriptor
    is not a terminal, or raw mode cannot be set, the guard does nothing
    and reads fall back to the terminal's current (line buffered) mode.

    Example:
        >>> with RawMode(sys.stdin.fileno()):
        ...     ch = sys.stdin.read(1)
    """

    def __init__(self, fd: Optional[int]):
        self.fd = fd
        self.applied = False
        self._saved_attrs: Optional[List] = None

    def __enter__(self) -> "RawMode":
        self.enable()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.restore()
        return False

    def enable(self) -> None:
        if self.applied or self.fd is None:
            return
        if termios is None or tty is None:
            return
        try:
            if not os.isatty(self.fd):
                return
        except OSError:
            return

        try:
            self._saved_attrs = termios.tcgetattr(self.fd)
            tty.setraw(self.fd, when=termios.TCSANOW)
            self.applied = True
        except (termios.error, OSError) as e:
            logger.debug("raw mode unavailable on fd %s: %s", self.fd, e)
            self.applied = False

    def restore(self) -> None:
        if not self.applied:
            return
        saved = self._saved_attrs
        if saved is None:
            return

        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, saved)
        except (termios.error, OSError) as e:
            logger.warning("could not restore terminal mode on fd %s: %s", self.fd, e)
        finally:
            self.applied = False


class TerminalReader:
    """Reads one character at a time from a text stream in raw mode.

    Args:
        stream: Text stream to read from. ``None`` means whatever
            ``sys.stdin`` is at the time of the read.
        fd: Descriptor to put into raw mode. Defaults to the stream's own
            descriptor; streams without one are read without raw mode.
    """

    def __init__(self, stream: Optional[TextIO] = None, fd: Optional[int] = None):
        self._stream = stream
        self._fd = fd

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    def _resolve_fd(self, stream: TextIO) -> Optional[int]:
        if self._fd is not None:
            return self._fd
        try:
            return stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def read_one_char(self) -> str:
        """
        Read exactly one character.

        Returns:
            The character read

        Raises:
            InputClosed: The stream is at end of input
            ReadError: The read failed or the input could not be decoded
        """
        stream = self.stream
        with RawMode(self._resolve_fd(stream)):
            try:
                ch = stream.read(1)
            except UnicodeDecodeError as e:
                raise ReadError(f"undecodable input: {e}") from e
            except OSError as e:
                raise ReadError(f"read failed: {e}") from e

        if not ch:
            raise InputClosed()
        return ch
