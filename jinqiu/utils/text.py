"""Text utilities for classical Chinese poem content."""

import re
from typing import Any, List


class HanText:
    """
    Centralized Han-character helpers.
    
    Every game and statistic uses the same definition of a "Han character"
    (the CJK Unified Ideographs block U+4E00..U+9FA5).
    """
    
    HAN_PATTERN = re.compile(r'[\u4e00-\u9fa5]')
    
    # Sentence-ending punctuation used to cut couplet clauses
    CLAUSE_PATTERN = re.compile(r'[，。；\n\r]')
    
    @classmethod
    def is_han(cls, char: str) -> bool:
        """Check if a single character is a Han character."""
        return bool(char) and len(char) == 1 and bool(cls.HAN_PATTERN.match(char))
    
    @classmethod
    def han_positions(cls, line: str) -> List[int]:
        """Indexes of all Han characters in a line."""
        return [i for i, ch in enumerate(line) if cls.is_han(ch)]
    
    @classmethod
    def split_clauses(cls, text: str) -> List[str]:
        """Split text on clause punctuation, stripping each piece."""
        return [s.strip() for s in cls.CLAUSE_PATTERN.split(text or "")]


def split_content(value: Any) -> List[str]:
    """
    Coerce a raw content field into a flat list of lines.
    
    Strings are split on newlines with blank lines dropped. Lists keep their
    order; nested strings holding newlines are split in place.
    
    Args:
        value: Raw field (str, list, or anything else)
        
    Returns:
        List of lines without embedded newline characters
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [line for line in value.splitlines() if line.strip()]
    if isinstance(value, (list, tuple)):
        lines: List[str] = []
        for item in value:
            if item is None:
                continue
            text = str(item)
            if "\n" in text or "\r" in text:
                lines.extend(line for line in text.splitlines() if line.strip())
            else:
                lines.append(text)
        return lines
    return []
