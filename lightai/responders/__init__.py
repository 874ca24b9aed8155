"""
Reply backends and the policy that chooses between them.
"""
from .local import local_reply
from .remote import OpenAIProvider, ProviderError, RemoteProvider, build_provider
from .policy import ResponderPolicy

__all__ = [
    "local_reply",
    "OpenAIProvider",
    "ProviderError",
    "RemoteProvider",
    "build_provider",
    "ResponderPolicy",
]
