"""Chat transcript models."""

from dataclasses import dataclass
from typing import Optional

from .poem import PoemRecord


@dataclass
class ChatMessage:
    """One message in a chat transcript."""
    
    role: str  # "user" or "assistant"
    content: str
    poem: Optional[PoemRecord] = None
