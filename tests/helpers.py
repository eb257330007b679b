"""Test doubles shared across test modules."""

from src.llm.client import Completion, GenerationParams, LLMClient, Prompt


class FakeCredentials:
    """In-memory stand-in for CredentialStore."""

    def __init__(self, **keys: str):
        self.keys = dict(keys)
        self.invalidated: list[str] = []

    def get(self, provider: str) -> str | None:
        return self.keys.get(provider)

    def mark_invalid(self, provider: str) -> None:
        self.invalidated.append(provider)
        self.keys.pop(provider, None)


def scripted_client(name: str, outcome, calls: list, prompts: list | None = None) -> type[LLMClient]:
    """Build an LLMClient class that records calls and returns or raises `outcome`.

    `outcome` may be a string (the reply), an exception instance, or an async
    callable taking the prompt.
    """

    class ScriptedClient(LLMClient):
        async def generate_text(self, prompt: Prompt, params: GenerationParams) -> Completion:
            calls.append(name)
            if prompts is not None:
                prompts.append(prompt)
            if isinstance(outcome, BaseException):
                raise outcome
            if callable(outcome):
                return Completion(text=await outcome(prompt), provider=name)
            return Completion(text=outcome, provider=name)

    ScriptedClient.name = name
    return ScriptedClient
