"""Shared test doubles: a scripted chooser and a fake HTTP session."""

from typing import List, Optional, Sequence

import pytest
import requests

from gguf_launcher.chooser import Chooser


class ScriptedChooser(Chooser):
    """Chooser that replays canned answers and records what it was asked."""

    def __init__(self, choices: Sequence[Optional[int]] = (), texts: Sequence[Optional[str]] = ()):
        self.choices = list(choices)
        self.texts = list(texts)
        self.menus: List[tuple] = []
        self.text_prompts: List[str] = []

    def choose(self, prompt, options, default=0):
        self.menus.append((prompt, list(options), default))
        assert self.choices, f"Unexpected menu: {prompt}"
        return self.choices.pop(0)

    def ask_text(self, prompt):
        self.text_prompts.append(prompt)
        assert self.texts, f"Unexpected text prompt: {prompt}"
        return self.texts.pop(0)


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(self, url, chunks=(), status_code=200, error=None, headers=None):
        self.url = url
        self.chunks = list(chunks)
        self.status_code = status_code
        self.error = error
        self.headers = headers or {}
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error for url: {self.url}", response=self)

    def iter_content(self, chunk_size=1):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class FakeSession:
    """Records get() calls and returns a canned response (or raises)."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_chooser():
    return ScriptedChooser


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession
