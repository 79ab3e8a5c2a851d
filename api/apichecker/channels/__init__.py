"""Base types for notification channels."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FileUpload:
    """A file to attach to a channel message."""
    filename: str
    content: bytes
    content_type: str
    title: str


@dataclass
class Notification:
    """What to send: a text message, optionally with a file attached."""
    message: str
    file: Optional[FileUpload] = None
