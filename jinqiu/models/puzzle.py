"""Puzzle question models for the word games."""

from dataclasses import dataclass, field
from typing import List, Optional

from .poem import PoemRecord

BLANK = "___"


@dataclass
class FillBlankQuestion:
    """A poem line with one Han character hidden."""
    
    poem: PoemRecord
    line: str
    index: int
    answer: str
    options: List[str] = field(default_factory=list)
    
    # Set once, when the question is answered
    user_answer: Optional[str] = None
    is_correct: Optional[bool] = None
    
    @property
    def question(self) -> str:
        """Line text with the blank marker in place of the answer."""
        return self.line[:self.index] + BLANK + self.line[self.index + 1:]
    
    @property
    def is_answered(self) -> bool:
        return self.user_answer is not None


@dataclass
class Blank:
    """One hidden position in a couplet clause."""
    
    index: int
    char: str


@dataclass
class CoupletQuestion:
    """A couplet clause with one or two hidden characters."""
    
    original_text: str
    blanks: List[Blank]
    options: List[str] = field(default_factory=list)
    user_answers: List[Optional[str]] = field(default_factory=list)
    is_answered: bool = False
    is_correct: Optional[bool] = None
    
    def __post_init__(self) -> None:
        if not self.user_answers:
            self.user_answers = [None] * len(self.blanks)
    
    @property
    def question_text(self) -> List[Optional[str]]:
        """Clause characters with ``None`` at every blank position."""
        hidden = {b.index for b in self.blanks}
        return [None if i in hidden else ch for i, ch in enumerate(self.original_text)]
    
    @property
    def correct_chars(self) -> List[str]:
        return [b.char for b in self.blanks]
    
    def fill(self, answers: List[Optional[str]]) -> str:
        """Rebuild the clause with the given answers placed in the blanks."""
        chars = self.question_text
        for blank, answer in zip(self.blanks, answers):
            chars[blank.index] = answer
        return "".join(ch if ch is not None else BLANK for ch in chars)
