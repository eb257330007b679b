"""Tests for the response orchestrator: fallback chain, persistence and ordering."""

import asyncio

import pytest

from src.companions.repository import get_by_id
from src.config.settings import Settings
from src.conversations import repository as conversations
from src.exceptions import NotFoundError, PersistenceError
from src.llm.errors import (
    InvalidCredentialError,
    MissingCredentialError,
    UpstreamFormatError,
    UpstreamUnavailableError,
)
from src.llm.orchestrator import ResponseOrchestrator
from src.llm.prompts import build_apology
from tests.helpers import FakeCredentials, scripted_client

APOLOGY_PREFIX = "I'm Luna, but I'm having trouble connecting"


def make_orchestrator(providers, credentials=None, **overrides) -> ResponseOrchestrator:
    settings = Settings(DEFAULT_PROVIDER="gemini", **overrides)
    return ResponseOrchestrator(credentials=credentials or FakeCredentials(), providers=providers, settings=settings)


def stored_messages(companion) -> list:
    conv = conversations.get_by_companion(companion.id)
    return conversations.list_messages(conv.id) if conv else []


@pytest.mark.asyncio
async def test_requested_provider_success(luna):
    calls, prompts = [], []
    orch = make_orchestrator({"deepseek": scripted_client("deepseek", "Hi from DeepSeek", calls, prompts)})

    exchange = await orch.respond(luna.id, "hello", "deepseek")

    assert exchange.result.text == "Hi from DeepSeek"
    assert exchange.result.model == "deepseek"
    assert calls == ["deepseek"]
    assert exchange.user_message.role == "user"
    assert exchange.assistant_message.content == "Hi from DeepSeek"


@pytest.mark.asyncio
async def test_first_message_has_no_context_but_keeps_persona(luna):
    calls, prompts = [], []
    orch = make_orchestrator({"gemini": scripted_client("gemini", "hey", calls, prompts)})

    await orch.respond(luna.id, "hello", "gemini")

    assert prompts[0].text == "hello"
    assert prompts[0].system.startswith("You are Luna, an imaginative")


@pytest.mark.asyncio
async def test_context_uses_last_ten_messages(luna):
    conv = conversations.get_or_create(luna)
    for i in range(12):
        conversations.append_message(conv, "user" if i % 2 == 0 else "assistant", f"msg-{i}")

    calls, prompts = [], []
    orch = make_orchestrator({"gemini": scripted_client("gemini", "ok", calls, prompts)})
    await orch.respond(luna.id, "latest", "gemini")

    text = prompts[0].text
    assert "msg-0" not in text
    assert "msg-1\n" not in text
    assert "msg-2" in text and "msg-11" in text
    assert text.index("msg-2") < text.index("msg-11")
    assert text.endswith("\nlatest")
    # The new user message is not part of its own context.
    assert text.count("latest") == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        MissingCredentialError("deepseek"),
        InvalidCredentialError("deepseek", "HTTP 401"),
        UpstreamUnavailableError("deepseek", "HTTP 503"),
        UpstreamFormatError("deepseek", "no choices"),
        RuntimeError("boom"),
    ],
)
async def test_failure_falls_back_to_default_once(luna, error):
    calls = []
    orch = make_orchestrator(
        {
            "deepseek": scripted_client("deepseek", error, calls),
            "gemini": scripted_client("gemini", "Gemini to the rescue", calls),
        }
    )

    exchange = await orch.respond(luna.id, "hello", "deepseek")

    assert calls == ["deepseek", "gemini"]
    assert exchange.result.text == "Gemini to the rescue"
    assert exchange.result.model == "gemini"


@pytest.mark.asyncio
async def test_total_failure_returns_apology_tagged_with_requested_provider(luna):
    calls = []
    orch = make_orchestrator(
        {
            "deepseek": scripted_client("deepseek", UpstreamUnavailableError("deepseek", "down"), calls),
            "gemini": scripted_client("gemini", MissingCredentialError("gemini"), calls),
        }
    )

    exchange = await orch.respond(luna.id, "hello", "deepseek")

    assert calls == ["deepseek", "gemini"]
    assert exchange.result.text == build_apology(luna)
    assert exchange.result.model == "deepseek"
    assert exchange.assistant_message.content == build_apology(luna)


@pytest.mark.asyncio
async def test_default_provider_failure_is_not_retried(luna):
    calls = []
    orch = make_orchestrator({"gemini": scripted_client("gemini", MissingCredentialError("gemini"), calls)})

    exchange = await orch.respond(luna.id, "hello", "gemini")

    assert calls == ["gemini"]
    assert exchange.result.text.startswith(APOLOGY_PREFIX)
    assert exchange.result.model == "gemini"


@pytest.mark.asyncio
async def test_unknown_provider_falls_back(luna):
    calls = []
    orch = make_orchestrator({"gemini": scripted_client("gemini", "fallback reply", calls)})

    exchange = await orch.respond(luna.id, "hello", "nonexistent")

    assert calls == ["gemini"]
    assert exchange.result.model == "gemini"


@pytest.mark.asyncio
async def test_slow_provider_times_out_and_falls_back(luna):
    calls = []

    async def never_finishes(prompt):
        await asyncio.sleep(5)
        return "too late"

    orch = make_orchestrator(
        {
            "deepseek": scripted_client("deepseek", never_finishes, calls),
            "gemini": scripted_client("gemini", "on time", calls),
        },
        PROVIDER_TIMEOUT_SECONDS=0.05,
    )

    exchange = await orch.respond(luna.id, "hello", "deepseek")

    assert exchange.result.text == "on time"
    assert exchange.result.model == "gemini"


@pytest.mark.asyncio
async def test_rejected_credential_is_marked_invalid(luna):
    calls = []
    credentials = FakeCredentials(deepseek="sk-old")
    orch = make_orchestrator(
        {
            "deepseek": scripted_client("deepseek", InvalidCredentialError("deepseek", "HTTP 401"), calls),
            "gemini": scripted_client("gemini", "ok", calls),
        },
        credentials=credentials,
    )

    await orch.respond(luna.id, "hello", "deepseek")

    assert credentials.invalidated == ["deepseek"]


@pytest.mark.asyncio
async def test_image_markdown_is_extracted_before_storage(luna):
    orch = make_orchestrator({"gemini": scripted_client("gemini", "Here: ![pic](http://x/y.png) enjoy", [])})

    exchange = await orch.respond(luna.id, "draw", "gemini")

    assert exchange.result.text == "Here:  enjoy"
    assert exchange.result.image_url == "http://x/y.png"
    assert exchange.assistant_message.content == "Here:  enjoy"
    assert exchange.assistant_message.image_url == "http://x/y.png"


@pytest.mark.asyncio
async def test_luna_without_credentials_gets_apology(luna):
    # Real adapters, empty credential store: no network call is made.
    orch = ResponseOrchestrator(credentials=FakeCredentials(), settings=Settings(DEFAULT_PROVIDER="gemini"))

    exchange = await orch.respond(luna.id, "hello", "gemini")

    assert exchange.result.text.startswith(APOLOGY_PREFIX)
    assert exchange.result.model == "gemini"
    assert [m.role for m in stored_messages(luna)] == ["user", "assistant"]


@pytest.mark.asyncio
async def test_unknown_companion_persists_nothing(luna):
    calls = []
    orch = make_orchestrator({"gemini": scripted_client("gemini", "hi", calls)})

    with pytest.raises(NotFoundError):
        await orch.respond(9999, "hello", "gemini")

    assert calls == []
    assert conversations.get_by_companion(9999) is None


@pytest.mark.asyncio
async def test_sequential_messages_are_ordered(luna):
    orch = make_orchestrator({"gemini": scripted_client("gemini", "reply", [])})

    for i in range(3):
        await orch.respond(luna.id, f"question {i}", "gemini")

    messages = stored_messages(luna)
    assert [m.role for m in messages] == ["user", "assistant"] * 3
    assert [m.content for m in messages if m.role == "user"] == ["question 0", "question 1", "question 2"]


@pytest.mark.asyncio
async def test_concurrent_messages_to_one_companion_do_not_interleave(luna):
    async def slow_echo(prompt):
        await asyncio.sleep(0.01)
        return "echo"

    orch = make_orchestrator({"gemini": scripted_client("gemini", slow_echo, [])})

    await asyncio.gather(*(orch.respond(luna.id, f"q{i}", "gemini") for i in range(4)))

    assert [m.role for m in stored_messages(luna)] == ["user", "assistant"] * 4


@pytest.mark.asyncio
async def test_user_message_failure_aborts_before_generation(luna, monkeypatch):
    calls = []
    orch = make_orchestrator({"gemini": scripted_client("gemini", "hi", calls)})

    def failing_append(*args, **kwargs):
        raise PersistenceError("Database operation failed")

    monkeypatch.setattr(conversations, "append_message", failing_append)

    with pytest.raises(PersistenceError):
        await orch.respond(luna.id, "hello", "gemini")
    assert calls == []


@pytest.mark.asyncio
async def test_assistant_message_failure_keeps_user_message(luna, monkeypatch):
    orch = make_orchestrator({"gemini": scripted_client("gemini", "generated", [])})
    original = conversations.append_message

    def append(conversation, role, content, image_url=None):
        if role == "assistant":
            raise PersistenceError("Database operation failed")
        return original(conversation, role, content, image_url=image_url)

    monkeypatch.setattr(conversations, "append_message", append)

    with pytest.raises(PersistenceError):
        await orch.respond(luna.id, "hello", "gemini")

    monkeypatch.undo()
    assert [m.role for m in stored_messages(luna)] == ["user"]


@pytest.mark.asyncio
async def test_exchange_bumps_timestamps(luna):
    orch = make_orchestrator({"gemini": scripted_client("gemini", "hi", [])})
    assert luna.last_interaction is None

    await orch.respond(luna.id, "hello", "gemini")

    assert get_by_id(luna.id).last_interaction is not None


@pytest.mark.asyncio
async def test_companion_locks_are_released_when_idle(luna):
    async def slow_echo(prompt):
        await asyncio.sleep(0.01)
        return "echo"

    orch = make_orchestrator({"gemini": scripted_client("gemini", slow_echo, [])})

    await asyncio.gather(*(orch.respond(luna.id, f"q{i}", "gemini") for i in range(3)))
    assert orch._locks == {}

    await orch.respond(luna.id, "again", "gemini")
    assert orch._locks == {}
    assert [m.role for m in stored_messages(luna)] == ["user", "assistant"] * 4
