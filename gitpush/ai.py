import logging
import warnings

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Type

import requests

from gitpush.errors import (
    AiError,
    EmptyResponse,
    InvalidCredentials,
    ProviderError,
    RateLimited,
)

try:
    from urllib3.exceptions import NotOpenSSLWarning
    warnings.filterwarnings("ignore", category=NotOpenSSLWarning)
except ImportError:
    pass

logger = logging.getLogger("gitpush.ai")

COMMIT_PROMPT = (
    "You are an expert developer. Based on the following git diff, write a concise, "
    "professional commit message following conventional commit standards. "
    "Output only the message text, nothing else:"
)

REQUEST_TIMEOUT = 60

SAMPLE_DIFF = """diff --git a/README.md b/README.md
--- a/README.md
+++ b/README.md
@@ -1 +1 @@
-# Project
+# Project title
"""


def _chat_body(model: str) -> Callable[[str], Dict[str, Any]]:
    def build(prompt: str) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": 200,
        }
    return build


def _bearer(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}


@dataclass(frozen=True)
class Provider:
    """Endpoint, auth and parsing rules for one AI backend."""

    name: str
    label: str
    key_url: str
    url: Callable[[str], str]
    headers: Callable[[str], Dict[str, str]]
    body: Callable[[str], Dict[str, Any]]
    path: Tuple[Any, ...]
    invalid_key_message: str
    errors: Dict[int, Type[AiError]] = field(default_factory=lambda: {401: InvalidCredentials})


PROVIDERS: Dict[str, Provider] = {
    "gemini": Provider(
        name="gemini",
        label="Gemini",
        key_url="https://aistudio.google.com/app/apikey",
        url=lambda key: (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            f"gemini-2.0-flash:generateContent?key={key}"
        ),
        headers=lambda key: {"Content-Type": "application/json"},
        body=lambda prompt: {"contents": [{"parts": [{"text": prompt}]}]},
        path=("candidates", 0, "content", "parts", 0, "text"),
        invalid_key_message="Invalid Gemini API key. Please run setup again.",
        errors={401: InvalidCredentials, 403: InvalidCredentials, 429: RateLimited},
    ),
    "openai": Provider(
        name="openai",
        label="OpenAI",
        key_url="https://platform.openai.com/api-keys",
        url=lambda key: "https://api.openai.com/v1/chat/completions",
        headers=_bearer,
        body=_chat_body("gpt-4o-mini"),
        path=("choices", 0, "message", "content"),
        invalid_key_message="Invalid OpenAI API key. Please run setup again.",
    ),
    "anthropic": Provider(
        name="anthropic",
        label="Anthropic",
        key_url="https://console.anthropic.com/settings/keys",
        url=lambda key: "https://api.anthropic.com/v1/messages",
        headers=lambda key: {
            "x-api-key": key,
            "anthropic-version": "2023-06-01",
            "Content-Type": "application/json",
        },
        body=_chat_body("claude-3-haiku-20240307"),
        path=("content", 0, "text"),
        invalid_key_message="Invalid Anthropic API key. Please run setup again.",
    ),
    "github": Provider(
        name="github",
        label="GitHub Models",
        key_url="https://github.com/settings/tokens",
        url=lambda key: "https://models.inference.ai.azure.com/chat/completions",
        headers=_bearer,
        body=_chat_body("gpt-4o-mini"),
        path=("choices", 0, "message", "content"),
        invalid_key_message="Invalid GitHub PAT. Please run setup again.",
    ),
}


def extract_text(data: Any, path: Tuple[Any, ...]) -> Optional[str]:
    """Walk ``path`` through nested dicts/lists, returning None if any hop is missing."""
    node = data
    for key in path:
        try:
            node = node[key]
        except (KeyError, IndexError, TypeError):
            return None
    return node if isinstance(node, str) else None


def _classify(provider: Provider, response: requests.Response) -> AiError:
    status = response.status_code
    error_class = provider.errors.get(status)
    if error_class is InvalidCredentials:
        return InvalidCredentials(provider.invalid_key_message)
    if error_class is RateLimited:
        return RateLimited(
            f"{provider.label} API rate limit exceeded. Please wait a moment and try again."
        )
    return ProviderError(f"{provider.label} API error: {status}")


def get_provider(name: str) -> Provider:
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ProviderError(f"Unknown AI provider: {name}") from None


def generate_commit_message(diff: str, provider: str, api_key: str) -> str:
    """Ask ``provider`` for a commit message describing ``diff``.

    Raises InvalidCredentials, RateLimited, EmptyResponse or ProviderError.
    """
    backend = get_provider(provider)
    prompt = f"{COMMIT_PROMPT}\n\n{diff}"

    try:
        response = requests.post(
            backend.url(api_key),
            json=backend.body(prompt),
            headers=backend.headers(api_key),
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise ProviderError(f"{backend.label} API error: {e}") from e

    logger.debug("%s responded with HTTP %s", backend.label, response.status_code)
    if not response.ok:
        raise _classify(backend, response)

    try:
        data = response.json()
    except ValueError:
        data = None

    text = extract_text(data, backend.path)
    if not text or not text.strip():
        raise EmptyResponse(f"Empty response from {backend.label}")
    return text.strip()


def validate_api_key(provider: str, api_key: str) -> Tuple[bool, Optional[str]]:
    try:
        generate_commit_message(SAMPLE_DIFF, provider, api_key)
        return True, None
    except AiError as e:
        return False, str(e)

