"""
Remote provider adapter for OpenAI-compatible chat completions.

One outbound POST per message, single user turn, no retries. Every failure
is reported as ProviderError so the caller can fall back.
"""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp

from ..config import Settings

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when the remote provider cannot produce a reply."""


class RemoteProvider(ABC):
    """Abstract remote chat backend."""

    @abstractmethod
    async def complete(self, message: str) -> str:
        """
        Return the provider's reply to a single user message.

        Raises:
            ProviderError: on network failure, error status or malformed payload.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release any held connections."""
        return None


class OpenAIProvider(RemoteProvider):
    """Direct HTTP client for the OpenAI chat completion endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        max_tokens: int = 500,
        temperature: float = 0.7,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.endpoint = base_url.rstrip("/") + "/chat/completions"
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    async def close(self) -> None:
        """Close aiohttp session."""
        if self.session and not self.session.closed:
            await self.session.close()

    def build_payload(self, message: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": message}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    async def complete(self, message: str) -> str:
        session = await self._get_session()
        try:
            async with session.post(self.endpoint, json=self.build_payload(message)) as response:
                status = response.status
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            raise ProviderError(f"OpenAI request failed: {str(exc) or type(exc).__name__}") from exc

        logger.debug(f"OpenAI responded with status {status}")

        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            data = None

        if not 200 <= status < 300:
            raise ProviderError(_error_message(data) or body)

        if data is None:
            raise ProviderError(f"OpenAI returned non-JSON body: {body[:200]}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(f"OpenAI response missing reply text: {body[:200]}") from exc
        if not isinstance(content, str):
            raise ProviderError(f"OpenAI response missing reply text: {body[:200]}")
        return content.strip()


def _error_message(data: Any) -> Optional[str]:
    """Pull ``error.message`` out of a provider error payload, if present."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def build_provider(settings: Settings) -> Optional[OpenAIProvider]:
    """Create the provider handle, or None when no API key is configured."""
    if not settings.openai_api_key:
        logger.info("No OPENAI_API_KEY set - replies will come from the local responder")
        return None

    provider = OpenAIProvider(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        max_tokens=settings.openai_max_tokens,
        temperature=settings.openai_temperature,
        base_url=settings.openai_base_url,
        timeout=settings.openai_timeout,
    )
    logger.info("OpenAI client initialized (will be used if enabled).")
    return provider
