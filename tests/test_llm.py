"""Tests for the LLM client wrapper and companion prompts."""

from types import SimpleNamespace

import pytest

from soulsync.config import reset_settings
from soulsync.counselor.models import ConversationTurn, Sender
from soulsync.llm.client import FALLBACK_REPLY, LLMClient
from soulsync.llm.prompts import HISTORY_TURNS, build_counselor_prompt, format_history


class _FakeMessages:
    def __init__(self, blocks):
        self.blocks = blocks
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(
            content=self.blocks,
            usage=SimpleNamespace(input_tokens=12, output_tokens=8),
        )


def _client_with(blocks):
    client = LLMClient(model="test-model", api_key="test-key")
    messages = _FakeMessages(blocks)
    client._client = SimpleNamespace(messages=messages)
    return client, messages


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    reset_settings()
    yield
    reset_settings()


def test_unconfigured_client_returns_stub(no_api_key):
    client = LLMClient()
    assert not client.configured
    response = client.complete("hello")
    assert "not configured" in response.content
    assert response.total_tokens == 0


def test_complete_joins_text_blocks():
    client, messages = _client_with([SimpleNamespace(text="I hear "), SimpleNamespace(text="you.")])
    response = client.complete("I feel low", system_prompt="be kind", max_tokens=200)

    assert response.content == "I hear you."
    assert response.model == "test-model"
    assert response.total_tokens == 20
    [call] = messages.calls
    assert call["system"] == "be kind"
    assert call["max_tokens"] == 200
    assert call["messages"] == [{"role": "user", "content": "I feel low"}]


def test_empty_completion_falls_back():
    client, _ = _client_with([])
    assert client.complete("hello").content == FALLBACK_REPLY


def test_format_history_keeps_last_turns():
    turns = [
        ConversationTurn(sender=Sender.user if i % 2 == 0 else Sender.assistant, text=f"message-{i:02d}")
        for i in range(14)
    ]
    lines = format_history(turns).splitlines()
    assert len(lines) == HISTORY_TURNS
    assert lines[0] == "User: message-04"
    assert lines[-1] == "AI: message-13"
    assert format_history(turns, limit=0) == ""


def test_build_counselor_prompt():
    turns = [ConversationTurn(sender=Sender.user, text="I failed my exam")]
    prompt = build_counselor_prompt(turns, mood="sad", level="college", course="B.Sc", persona="girl")
    assert "Mood: sad" in prompt
    assert "Course: B.Sc" in prompt
    assert "Assistant: girl" in prompt
    assert "User: I failed my exam" in prompt
    assert prompt.rstrip().endswith("Respond empathetically.")


def test_build_counselor_prompt_defaults():
    prompt = build_counselor_prompt([])
    assert "Mood: unknown" in prompt
    assert "Assistant: boy" in prompt
