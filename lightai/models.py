"""
Data models for chat requests, replies, and the service descriptor.
"""
from enum import Enum

from pydantic import BaseModel


class ReplySource(str, Enum):
    """Backend that produced a reply."""
    LOCAL = "local"
    REMOTE = "remote"


class Reply(BaseModel):
    """A single reply to a single message."""
    reply: str
    source: ReplySource


class ChatResponse(BaseModel):
    """Response body for POST /chat."""
    reply: str
    source: ReplySource


class ErrorResponse(BaseModel):
    """Error body shared by 400 and 500 responses."""
    error: str


class ServiceInfo(BaseModel):
    """Descriptor returned by GET /."""
    name: str
    version: str
    openai_available: bool
    instructions: str
