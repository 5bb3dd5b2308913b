"""
Couplet game - restore the hidden characters of a 声律启蒙 clause.

Clauses pair two words around the character 对 ("云对雨", "雪对风").
Each question hides one character or one contiguous same-side pair and
offers a pool of twelve candidate characters.
"""

import random
from typing import List, Optional, Sequence

from ..config import Config
from ..corpus.sources import BaseSource
from ..models import Blank, CoupletQuestion
from ..utils import HanText, setup_logger
from .fill_blank import SessionState

logger = setup_logger(__name__)

PAIR_MARK = "对"
MIN_CLAUSE_LENGTH = 3
MAX_OPTION_ATTEMPTS = 100


def parse_couplets(text: str) -> List[str]:
    """
    Cut source text into playable clauses.

    Args:
        text: Raw 声律启蒙 text

    Returns:
        Trimmed clauses that contain 对 and are at least three characters long
    """
    return [
        clause for clause in HanText.split_clauses(text)
        if PAIR_MARK in clause and len(clause) >= MIN_CLAUSE_LENGTH
    ]


async def load_couplets(source: BaseSource, path: str = Config.COUPLET_FILE) -> List[str]:
    """Fetch and parse the couplet source text; a failed fetch yields no clauses."""
    text = await source.fetch_text(path)
    if text is None:
        logger.warning("Failed to load couplet data: %s", path)
        return []
    return parse_couplets(text)


def choose_blanks(clause: str, rng: random.Random) -> List[int]:
    """
    Pick the positions to hide, in ascending order.

    Any position except 对 itself may be hidden alone. Adjacent positions on
    the same side of 对 may be hidden together. When such a pair exists a
    fair coin decides between a single blank and a pair.
    """
    mark = clause.index(PAIR_MARK)
    left = list(range(mark))
    right = list(range(mark + 1, len(clause)))
    singles = left + right

    pairs = [[left[i], left[i + 1]] for i in range(len(left) - 1)]
    pairs += [[right[i], right[i + 1]] for i in range(len(right) - 1)]

    if pairs and rng.random() > 0.5:
        chosen = list(rng.choice(pairs))
    else:
        chosen = [rng.choice(singles)]
    return sorted(chosen)


def generate_options(
    correct: Sequence[str],
    clauses: Sequence[str],
    rng: random.Random,
    count: int = Config.COUPLET_OPTIONS
) -> List[str]:
    """Correct characters plus Han distractors from random clauses, shuffled."""
    options: List[str] = []
    for char in correct:
        if char not in options:
            options.append(char)

    attempts = 0
    while len(options) < count and attempts < MAX_OPTION_ATTEMPTS:
        attempts += 1
        clause = rng.choice(clauses)
        char = rng.choice(clause)
        if char != PAIR_MARK and HanText.is_han(char) and char not in options:
            options.append(char)

    rng.shuffle(options)
    return options


class CoupletSession:
    """
    One round of the couplet game.

    Usage:
        session = CoupletSession(parse_couplets(text))
        session.build()
        for char in session.current.options[:2]:
            session.choose_option(char)
    """

    def __init__(
        self,
        clauses: Sequence[str],
        rng: Optional[random.Random] = None,
        total: int = Config.SESSION_QUESTIONS,
        points: int = Config.POINTS_PER_ANSWER
    ):
        self.clauses = list(clauses)
        self.rng = rng or random.Random()
        self.total = total
        self.points = points

        self.state = SessionState.BUILDING
        self.questions: List[CoupletQuestion] = []
        self.current_index = 0
        self.score = 0

    def _make_question(self, clause: str) -> CoupletQuestion:
        positions = choose_blanks(clause, self.rng)
        blanks = [Blank(index=i, char=clause[i]) for i in positions]
        return CoupletQuestion(
            original_text=clause,
            blanks=blanks,
            options=generate_options([b.char for b in blanks], self.clauses, self.rng),
        )

    def build(self) -> List[CoupletQuestion]:
        """
        Draw up to ``total`` distinct clauses and start the session.

        Returns:
            The generated questions
        """
        self.state = SessionState.BUILDING
        self.questions = []
        self.current_index = 0
        self.score = 0

        used = set()
        while len(self.questions) < self.total and len(used) < len(self.clauses):
            index = self.rng.randrange(len(self.clauses))
            if index in used:
                continue
            used.add(index)
            clause = self.clauses[index]
            if PAIR_MARK not in clause:
                continue
            self.questions.append(self._make_question(clause))

        self.state = SessionState.IN_PROGRESS if self.questions else SessionState.FINISHED
        return self.questions

    @property
    def current(self) -> Optional[CoupletQuestion]:
        if not self.questions:
            return None
        return self.questions[self.current_index]

    def choose_option(self, char: str) -> None:
        """
        Put a character into the first empty blank.

        Filling the last blank answers the question: it is correct when
        every blank holds its original character.
        """
        question = self.current
        if question is None or question.is_answered:
            return
        if None not in question.user_answers:
            return

        question.user_answers[question.user_answers.index(None)] = char

        if None not in question.user_answers:
            question.is_answered = True
            question.is_correct = question.user_answers == question.correct_chars
            if question.is_correct:
                self.score += self.points

    def clear_blank(self, position: int) -> None:
        """Empty one filled blank; answered questions are locked."""
        question = self.current
        if question is None or question.is_answered:
            return
        if 0 <= position < len(question.user_answers):
            question.user_answers[position] = None

    def next(self) -> None:
        """Advance; moving past the last question finishes the session."""
        if self.state != SessionState.IN_PROGRESS:
            return
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
        else:
            self.state = SessionState.FINISHED

    @property
    def max_score(self) -> int:
        return self.points * len(self.questions)
