"""AI text provider for generating diet plan text.

The backend is picked from the credential prefix:

- ``sk-``   -> OpenAI chat completions
- ``pplx-`` -> Perplexity chat completions
- other     -> Google Gemini, trying several models in order

Backends are tried sequentially and the first successful answer wins. A rate
limit stops the chain at once; any other failure moves on to the next
candidate. The returned text is opaque and is handed straight to the parser.
"""

from typing import Any, Dict, List, Optional

import httpx

from core.config import (
    AI_HTTP_TIMEOUT,
    GEMINI_API_URL,
    GEMINI_MODELS,
    OPENAI_API_URL,
    OPENAI_MODEL,
    PERPLEXITY_API_URL,
    PERPLEXITY_MODEL,
)
from core.exceptions import ConfigurationError, ProviderError, RateLimitError, ValidationError
from core.logger import get_logger
from data.prompts import CLIENT_DATA_HEADER, SYSTEM_PROMPT

logger = get_logger("services.ai_provider")


def detect_provider(api_key: str) -> str:
    if api_key.startswith("sk-"):
        return "openai"
    if api_key.startswith("pplx-"):
        return "perplexity"
    return "gemini"


def _read_json(response: httpx.Response, provider: str) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        raise ProviderError(f"{provider} returned a non-JSON response (HTTP {response.status_code})", provider=provider)
    if not isinstance(data, dict):
        raise ProviderError(f"{provider} returned an unexpected response", provider=provider)
    return data


class ChatCompletionsBackend:
    """OpenAI-compatible chat completions endpoint (OpenAI, Perplexity)."""

    def __init__(self, name: str, url: str, model: str, temperature: float):
        self.name = name
        self.url = url
        self.model = model
        self.temperature = temperature

    def generate(self, client: httpx.Client, api_key: str, client_data: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": CLIENT_DATA_HEADER + client_data},
            ],
            "temperature": self.temperature,
        }
        response = client.post(self.url, json=payload, headers={"Authorization": f"Bearer {api_key}"})
        if response.status_code == 429:
            raise RateLimitError(provider=self.name)
        data = _read_json(response, self.name)
        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderError(message or f"{self.name} API Error", provider=self.name)
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError(f"{self.name} response has no message content", provider=self.name)


class GeminiBackend:
    """Google Gemini `generateContent` for a single model."""

    def __init__(self, model: str, base_url: str = GEMINI_API_URL):
        self.model = model
        self.name = f"gemini:{model}"
        self.url = f"{base_url}/{model}:generateContent"

    def generate(self, client: httpx.Client, api_key: str, client_data: str) -> str:
        prompt = SYSTEM_PROMPT + "\n\n" + CLIENT_DATA_HEADER + client_data
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        response = client.post(self.url, params={"key": api_key}, json=payload)
        if response.status_code == 429:
            raise RateLimitError(provider=self.name)
        data = _read_json(response, self.name)
        error = data.get("error")
        if error:
            if not isinstance(error, dict):
                raise ProviderError(str(error), provider=self.name)
            if error.get("code") == 429 or error.get("status") == "RESOURCE_EXHAUSTED":
                raise RateLimitError(provider=self.name)
            raise ProviderError(error.get("message") or "Gemini API Error", provider=self.name)
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ProviderError(f"{self.name} response has no candidate text", provider=self.name)


def select_backends(api_key: str) -> List[Any]:
    """Return the ordered candidate backends for a credential."""
    provider = detect_provider(api_key)
    if provider == "openai":
        return [ChatCompletionsBackend("openai", OPENAI_API_URL, OPENAI_MODEL, 0.3)]
    if provider == "perplexity":
        return [ChatCompletionsBackend("perplexity", PERPLEXITY_API_URL, PERPLEXITY_MODEL, 0.2)]
    return [GeminiBackend(model) for model in GEMINI_MODELS]


def generate_plan_text(api_key: str, client_data: str, http_client: Optional[httpx.Client] = None) -> str:
    """Ask the configured AI provider for a plan and return its raw text.

    Args:
        api_key: Provider credential; its prefix selects the backend.
        client_data: Free-text client details appended to the system prompt.
        http_client: Optional client to use instead of a fresh one.

    Raises:
        ConfigurationError: If no credential is given.
        ValidationError: If the client data is empty.
        RateLimitError: As soon as any backend reports rate limiting.
        ProviderError: If every backend failed; carries the last error message.
    """
    api_key = (api_key or "").strip()
    if not api_key:
        raise ConfigurationError("API key is required for AI generation", config_key="api_key")
    if not (client_data or "").strip():
        raise ValidationError("Client data is required", field="client_data")

    client = http_client or httpx.Client(timeout=AI_HTTP_TIMEOUT)
    last_error: Optional[ProviderError] = None
    try:
        for backend in select_backends(api_key):
            try:
                text = backend.generate(client, api_key, client_data)
                logger.info("Plan text generated by %s (%d chars)", backend.name, len(text))
                return text
            except RateLimitError:
                logger.warning("Rate limited by %s; aborting", backend.name)
                raise
            except ProviderError as exc:
                logger.warning("Backend %s failed: %s", backend.name, exc.message)
                last_error = exc
            except httpx.HTTPError as exc:
                logger.warning("Backend %s unreachable: %s", backend.name, exc)
                last_error = ProviderError(f"Network error: {exc}", provider=backend.name)
    finally:
        if http_client is None:
            client.close()

    raise last_error or ProviderError("All AI backends failed")
