"""Canonical poem record."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

TITLE_PLACEHOLDER = "无题"
AUTHOR_PLACEHOLDER = "佚名"


@dataclass
class PoemRecord:
    """Normalized in-memory representation of one poem."""
    
    id: str
    title: str = TITLE_PLACEHOLDER
    author: str = AUTHOR_PLACEHOLDER
    dynasty: str = ""
    # Lines or stanza paragraphs, rendered in order
    content: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the canonical dictionary shape."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "dynasty": self.dynasty,
            "content": list(self.content),
            "tags": list(self.tags),
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoemRecord":
        """Create a record from the canonical dictionary shape."""
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or TITLE_PLACEHOLDER,
            author=data.get("author") or AUTHOR_PLACEHOLDER,
            dynasty=data.get("dynasty", ""),
            content=list(data.get("content") or []),
            tags=list(data.get("tags") or []),
        )

    @property
    def text(self) -> str:
        """Content joined with newlines."""
        return "\n".join(self.content)
