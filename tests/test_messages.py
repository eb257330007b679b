"""Tests for message endpoints."""

import respx

from src.config.settings import get_settings
from src.conversations import repository as conversations
from src.credentials.service import get_credential_store
from src.preferences import repository as preferences

APOLOGY_PREFIX = "I'm Luna, but I'm having trouble connecting"


def gemini_url() -> str:
    settings = get_settings()
    return f"{settings.GEMINI_BASE_URL}/{settings.GEMINI_MODEL}:generateContent"


def test_send_message_without_keys_returns_apology(client, luna):
    resp = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "hello", "model": "gemini"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["model"] == "gemini"
    assert data["userMessage"]["role"] == "user"
    assert data["userMessage"]["content"] == "hello"
    assert data["assistantMessage"]["role"] == "assistant"
    assert data["assistantMessage"]["content"].startswith(APOLOGY_PREFIX)
    assert data["assistantMessage"]["imageUrl"] is None

    conv = conversations.get_by_companion(luna.id)
    assert len(conversations.list_messages(conv.id)) == 2


def test_list_messages_oldest_first(client, luna):
    client.post(f"/api/conversations/{luna.id}/messages", json={"content": "first"})
    client.post(f"/api/conversations/{luna.id}/messages", json={"content": "second"})

    resp = client.get(f"/api/conversations/{luna.id}/messages")
    assert resp.status_code == 200
    messages = resp.json()
    assert [m["role"] for m in messages] == ["user", "assistant", "user", "assistant"]
    assert messages[0]["content"] == "first"
    assert messages[2]["content"] == "second"
    assert len({m["conversationId"] for m in messages}) == 1


def test_list_messages_creates_empty_conversation(client, luna):
    resp = client.get(f"/api/conversations/{luna.id}/messages")
    assert resp.status_code == 200
    assert resp.json() == []
    assert conversations.get_by_companion(luna.id) is not None


def test_unknown_companion(client):
    assert client.get("/api/conversations/9999/messages").status_code == 404

    resp = client.post("/api/conversations/9999/messages", json={"content": "hello"})
    assert resp.status_code == 404
    assert conversations.get_by_companion(9999) is None


def test_unknown_model_rejected(client, luna):
    resp = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "hello", "model": "gpt-9"})
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "validation_error"
    assert conversations.get_by_companion(luna.id) is None


def test_blank_content_rejected(client, luna):
    resp = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "   "})
    assert resp.status_code == 400
    assert conversations.get_by_companion(luna.id) is None


def test_active_model_preference_is_default(client, luna):
    preferences.update({"active_model": "deepseek"})

    resp = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "hello"})
    assert resp.status_code == 200
    assert resp.json()["model"] == "deepseek"


@respx.mock
def test_gemini_reply_with_image(client, luna):
    get_credential_store().upsert("gemini", "AIza-test")
    route = respx.post(gemini_url()).respond(
        200,
        json={"candidates": [{"content": {"parts": [{"text": "Look! ![sketch](https://img.example/fox.png) cute"}]}}]},
    )

    resp = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "draw a fox", "model": "gemini"})
    assert resp.status_code == 200
    assert route.called
    assistant = resp.json()["assistantMessage"]
    assert assistant["content"] == "Look!  cute"
    assert assistant["imageUrl"] == "https://img.example/fox.png"


@respx.mock
def test_rejected_key_is_reported_invalid(client, luna):
    get_credential_store().upsert("gemini", "AIza-revoked")
    respx.post(gemini_url()).respond(403, json={"error": {"status": "PERMISSION_DENIED"}})

    resp = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "hello", "model": "gemini"})
    assert resp.status_code == 200
    assert resp.json()["assistantMessage"]["content"].startswith(APOLOGY_PREFIX)
    assert client.get("/api/settings/api-keys").json()["gemini"] is False


def test_message_timestamps_match_between_send_and_list(client, luna):
    sent = client.post(f"/api/conversations/{luna.id}/messages", json={"content": "hello"}).json()

    listed = client.get(f"/api/conversations/{luna.id}/messages").json()
    assert listed[0]["createdAt"] == sent["userMessage"]["createdAt"]
    assert listed[1]["createdAt"] == sent["assistantMessage"]["createdAt"]
