from __future__ import annotations

import io
import logging
from typing import Iterable, List, Union

import pytest

from keyresponder import configure, get_config, new, set_reader, set_streams
from keyresponder.errors import InputClosed

_ENV_VARS = (
    "KEYRESPONDER_CONFIG",
    "KEYRESPONDER_INDENT_FIRST",
    "KEYRESPONDER_INDENT",
    "KEYRESPONDER_MAX_REPROMPTS",
    "KEYRESPONDER_WRAP_WIDTH",
)

YES_NO = {"y": "delete the file", "n": "leave the file alone"}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config file and environment out of every test."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    configure(config_path=tmp_path / "missing.toml")
    yield
    get_config.cache_clear()


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("keyresponder")
    saved_level = logger.level
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(saved_level)


class ScriptedReader:
    """Hands out characters (or raises exceptions) in order, then end of input."""

    def __init__(self, items: Iterable[Union[str, BaseException]]):
        self._items: List[Union[str, BaseException]] = list(items)
        self.reads = 0

    def read_one_char(self) -> str:
        self.reads += 1
        if not self._items:
            raise InputClosed()
        item = self._items.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class Harness:
    def __init__(self, items, responses, opts):
        self.reader = ScriptedReader(items)
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.responder = new(
            "Delete File",
            responses,
            set_reader(self.reader),
            set_streams(out=self.out, err=self.err),
            *opts,
        )

    @property
    def output(self) -> str:
        return self.out.getvalue()

    @property
    def errors(self) -> str:
        return self.err.getvalue()


@pytest.fixture
def harness():
    def make(items, *opts, responses=None):
        return Harness(items, YES_NO if responses is None else responses, opts)

    return make
