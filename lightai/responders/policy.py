"""
Reply routing policy.

Decides per message whether the remote provider is tried, and guarantees a
reply by falling back to the local responder on any remote failure.
"""
import logging
from typing import Optional

from ..config import Settings
from ..models import Reply, ReplySource
from .local import local_reply
from .remote import ProviderError, RemoteProvider

logger = logging.getLogger(__name__)


class ResponderPolicy:
    """Chooses the backend for each message."""

    def __init__(self, provider: Optional[RemoteProvider] = None, remote_enabled: bool = False):
        self.provider = provider
        self.remote_enabled = remote_enabled

    @classmethod
    def from_settings(cls, settings: Settings, provider: Optional[RemoteProvider]) -> "ResponderPolicy":
        return cls(provider=provider, remote_enabled=settings.use_openai)

    @property
    def provider_available(self) -> bool:
        return self.provider is not None

    def should_use_remote(self, use_remote: bool = False) -> bool:
        """Routing decision for one message. Computed fresh every call."""
        if use_remote:
            return True
        return self.remote_enabled and self.provider is not None

    async def _call_remote(self, message: str) -> str:
        if self.provider is None:
            raise ProviderError("OpenAI client not initialized")
        return await self.provider.complete(message)

    async def get_reply(self, message: str, use_remote: bool = False) -> Reply:
        """
        Return a reply for the message. Never raises.

        Args:
            message: The user's message; may be empty.
            use_remote: Force a remote attempt for this message only.
        """
        if self.should_use_remote(use_remote):
            try:
                text = await self._call_remote(message)
                return Reply(reply=text, source=ReplySource.REMOTE)
            except Exception as exc:
                logger.warning(f"OpenAI call failed, falling back to local AI: {exc}")

        return Reply(reply=local_reply(message), source=ReplySource.LOCAL)

    async def close(self) -> None:
        if self.provider is not None:
            await self.provider.close()
