"""Text-generation backends: Anthropic and OpenAI-compatible chat endpoints."""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import TYPE_CHECKING, Any

import anthropic
import httpx

from generator.prompts import SYSTEM_PROMPT

if TYPE_CHECKING:
    from config import Config, GenerationSettings

logger = logging.getLogger(__name__)

# Back off and retry on 429
_MAX_RETRIES = 3
_RETRY_BASE_DELAY = 2.0  # seconds


class GenerationError(Exception):
    """The LLM backend could not produce text (network, auth, API error)."""


class TextGenerator(abc.ABC):
    """Produces a block of raw text for a prompt."""

    @abc.abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the generated text, possibly empty.

        Raises :class:`GenerationError` when the backend call fails.
        """

    async def close(self) -> None:
        """Release network resources, if any."""


# ---------------------------------------------------------------------------
# Anthropic Messages API
# ---------------------------------------------------------------------------

class AnthropicGenerator(TextGenerator):
    """Generate articles with Claude.

    Parameters
    ----------
    api_key:
        Anthropic API key.  If ``None``, the ``ANTHROPIC_API_KEY`` env var
        is used (handled by the SDK).
    model:
        Claude model to use.
    max_tokens:
        Maximum tokens for the Claude response.
    """

    MODEL = "claude-sonnet-4-6"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 4096,
    ) -> None:
        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model or self.MODEL
        self.max_tokens = max_tokens

    async def generate(self, prompt: str) -> str:
        logger.info("Requesting article from %s", self.model)
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except (anthropic.AnthropicError, TypeError) as exc:
            # The SDK raises TypeError when no API key or auth token resolves.
            logger.error("Anthropic request failed: %s", exc)
            raise GenerationError(f"Anthropic request failed: {exc}") from exc

        parts = [
            block.text for block in message.content if getattr(block, "text", None)
        ]
        return "".join(parts).strip()

    async def close(self) -> None:
        await self.client.close()


# ---------------------------------------------------------------------------
# OpenAI-compatible chat completions (OpenRouter and friends)
# ---------------------------------------------------------------------------

class ChatCompletionsGenerator(TextGenerator):
    """Generate articles through an OpenAI-style ``/chat/completions`` endpoint.

    Parameters
    ----------
    endpoint_url:
        Full URL of the chat completions endpoint.
    api_key:
        Bearer token for the endpoint.
    model:
        Model identifier understood by the endpoint.
    referer, title:
        Sent as ``HTTP-Referer`` / ``X-Title`` (used by OpenRouter for
        attribution).
    """

    def __init__(
        self,
        endpoint_url: str,
        api_key: str,
        model: str,
        referer: str = "http://localhost:4000",
        title: str = "AI Blog Generator",
        timeout: float = 120.0,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.api_key = api_key
        self.model = model
        self.referer = referer
        self.title = title
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    # -- HTTP helpers --------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
            "Content-Type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._headers(),
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _post_with_retry(self, payload: dict[str, Any]) -> httpx.Response:
        """POST the completion request, backing off while the endpoint answers 429.

        Returns the last response once it is not a 429 or the attempts run out.
        """
        client = await self._get_client()
        attempt = 1
        while True:
            resp = await client.post(self.endpoint_url, json=payload)
            if resp.status_code != 429 or attempt >= _MAX_RETRIES:
                return resp
            delay = _RETRY_BASE_DELAY * attempt
            logger.warning(
                "Completion for %s throttled by %s, sleeping %.1fs before attempt %d of %d",
                self.model, self.endpoint_url, delay, attempt + 1, _MAX_RETRIES,
            )
            await asyncio.sleep(delay)
            attempt += 1

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }

    # -- TextGenerator implementation ----------------------------------------

    async def generate(self, prompt: str) -> str:
        logger.info("Requesting article from %s via %s", self.model, self.endpoint_url)
        try:
            resp = await self._post_with_retry(self._build_payload(prompt))
        except httpx.HTTPError as exc:
            logger.error("LLM endpoint unreachable: %s", exc)
            raise GenerationError(f"LLM endpoint unreachable: {exc}") from exc

        if resp.status_code == 429:
            logger.error(
                "%s still throttling after %d attempts, giving up",
                self.endpoint_url, _MAX_RETRIES,
            )
            raise GenerationError(
                f"LLM endpoint rate-limited (429) after {_MAX_RETRIES} attempts"
            )
        if resp.status_code != 200:
            logger.error(
                "LLM endpoint error %d: %s", resp.status_code, resp.text[:500]
            )
            raise GenerationError(
                f"LLM endpoint returned {resp.status_code}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise GenerationError("LLM endpoint returned invalid JSON") from exc

        return _extract_message_content(data)


def _extract_message_content(data: Any) -> str:
    """Pull ``choices[0].message.content`` out of a completion response.

    A missing or oddly shaped field gives an empty string; the assembler
    copes with empty text.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content.strip() if isinstance(content, str) else ""


def build_generator(
    cfg: Config, settings: GenerationSettings | None = None
) -> TextGenerator:
    """Pick the backend named by ``cfg.llm_provider``.

    The model id comes from *settings*, built from *cfg* when not given.
    """
    settings = settings or cfg.generation_settings()
    if cfg.llm_provider == "anthropic":
        return AnthropicGenerator(
            api_key=cfg.llm_api_key or None,
            model=settings.model,
            max_tokens=cfg.llm_max_tokens,
        )
    if cfg.llm_provider in ("openrouter", "openai"):
        return ChatCompletionsGenerator(
            endpoint_url=cfg.llm_endpoint_url,
            api_key=cfg.llm_api_key,
            model=settings.model,
        )
    raise ValueError(
        f"Unknown LLM provider '{cfg.llm_provider}'. "
        "Must be one of: anthropic, openrouter, openai"
    )
