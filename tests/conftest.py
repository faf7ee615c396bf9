# tests/conftest.py
import json
from types import SimpleNamespace

import pytest

from curator.models import Candidate, default_preferences
from curator.preferences import PreferenceStore, save_preferences
from curator.utils import utc_now

LONG_EXCERPT = (
    "A detailed look at how the latest developments affect the industry, "
    "with commentary from analysts and a summary of what comes next for users."
)


@pytest.fixture()
def now():
    return utc_now()


@pytest.fixture()
def make_candidate(now):
    """Factory building candidates relative to ``now``."""

    def _make(
        title="Regional council approves new transit budget",
        hours_old=2.0,
        source="Local Herald",
        source_id=None,
        category="general",
        tags=None,
        excerpt=LONG_EXCERPT,
        author=None,
        read_time=None,
        url=None,
    ):
        return Candidate(
            title=title,
            url=url or f"https://example.com/{abs(hash((title, hours_old)))}",
            excerpt=excerpt,
            author=author,
            published_at=now.subtract(minutes=int(hours_old * 60)),
            source={"id": source_id or source.lower().replace(" ", "-"), "name": source},
            category=category,
            tags=tags or [],
            read_time=read_time,
        )

    return _make


@pytest.fixture()
def preferences():
    return default_preferences()


@pytest.fixture()
def preferences_path(tmp_path, preferences):
    path = tmp_path / "preferences.json"
    save_preferences(preferences, path)
    return path


@pytest.fixture()
def store(preferences_path):
    return PreferenceStore(preferences_path)


class FakeOpenAI:
    """Stands in for ``openai.OpenAI``; records calls and replays a canned reply."""

    def __init__(self, content="[]", prompt_tokens=1000, completion_tokens=500, error=None):
        self.calls = []
        self.content = content
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))],
            usage=SimpleNamespace(
                prompt_tokens=self.prompt_tokens,
                completion_tokens=self.completion_tokens,
            ),
        )


class FakeAnthropic:
    """Stands in for ``anthropic.Anthropic``."""

    def __init__(self, content="[]", input_tokens=1000, output_tokens=500, error=None):
        self.calls = []
        self.content = content
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens
        self.error = error
        self.messages = SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            content=[SimpleNamespace(type="text", text=self.content)],
            usage=SimpleNamespace(input_tokens=self.input_tokens, output_tokens=self.output_tokens),
        )


def _selections_json(*entries):
    return "Here is the selection:\n" + json.dumps(list(entries)) + "\nHope this helps."


@pytest.fixture()
def fake_openai():
    return FakeOpenAI


@pytest.fixture()
def fake_anthropic():
    return FakeAnthropic


@pytest.fixture()
def selections_json():
    return _selections_json
