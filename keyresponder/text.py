"""
Text wrapping for help listings.
"""

from __future__ import annotations

import shutil
import textwrap
from typing import List, Optional

from .config import get_config


class TextWrapper:
    """
    Wraps paragraphs to a target width at a given indent.

    Args:
        width: Target line length. ``None`` takes the configured help
            width; ``0`` means the current terminal width.
    """

    def __init__(self, width: Optional[int] = None):
        self._width = width

    @property
    def width(self) -> int:
        w = self._width if self._width is not None else get_config().help.wrap_width
        if w <= 0:
            w = shutil.get_terminal_size().columns
        return w

    def wrap_lines(self, text: str, indent: int) -> List[str]:
        return self.prefixed_lines("", text, indent)

    def prefixed_lines(self, prefix: str, text: str, indent: int) -> List[str]:
        """
        Wrap text with a prefix on its first line.

        Continuation lines hang under the text, not under the prefix. Each
        newline-separated paragraph is wrapped on its own and an empty
        paragraph gives an empty line.

        Args:
            prefix: Printed once, before the first line of text
            text: Text to wrap
            indent: Spaces before the prefix

        Returns:
            Lines without trailing newlines
        """
        lead = " " * indent
        hang = " " * (indent + len(prefix))
        # the text column must fit on the line
        width = max(self.width, len(hang) + 1)

        lines: List[str] = []
        first = True
        for para in text.split("\n"):
            if not para.strip():
                lines.append((lead + prefix).rstrip() if first else "")
                first = False
                continue
            lines.extend(
                textwrap.wrap(
                    para,
                    width=width,
                    initial_indent=(lead + prefix) if first else hang,
                    subsequent_indent=hang,
                    break_long_words=False,
                    break_on_hyphens=False,
                )
            )
            first = False
        return lines
