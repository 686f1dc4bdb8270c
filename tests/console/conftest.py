"""Pytest fixtures for console UI tests."""

import io
from typing import Callable

import pytest
from rich.console import Console

from console_ui.prompts import ConsolePrompts


class ScriptedReader:
    """Line reader that answers from a list, or from a prompt -> answer function."""

    def __init__(self, answers: list[str] | Callable[[str], str]) -> None:
        self._answers = answers
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if callable(self._answers):
            return self._answers(prompt)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self._answers.pop(0)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    """A plain, wide console writing to a string buffer."""
    return Console(file=output, width=120, color_system=None, force_terminal=False)


@pytest.fixture
def make_prompts(console):
    def _make(answers):
        reader = ScriptedReader(answers)
        return ConsolePrompts(console, read=reader), reader

    return _make
