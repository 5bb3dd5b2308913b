"""
Fill-blank game - guess the hidden character of a poem line.

A session draws ten questions from the loaded corpus. Each question hides
one Han character of a line and offers up to four candidate characters.
"""

import random
from enum import Enum
from typing import List, Optional, Sequence

from ..config import Config
from ..models import FillBlankQuestion, PoemRecord
from ..utils import HanText, setup_logger

logger = setup_logger(__name__)

MIN_LINE_LENGTH = 5
MAX_DRAW_ATTEMPTS = 100
MAX_CHAR_ATTEMPTS = 20
MAX_OPTION_ATTEMPTS = 100
OPTION_COUNT = 4


class SessionState(Enum):
    """Lifecycle of a game session."""
    BUILDING = "building"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


def generate_options(
    answer: str,
    poems: Sequence[PoemRecord],
    rng: random.Random,
    count: int = OPTION_COUNT
) -> List[str]:
    """
    Build the shuffled candidate list for one question.

    Distractors are random Han characters of random lines. Sampling stops
    after a bounded number of attempts, so a tiny corpus may yield fewer
    than ``count`` options.

    Args:
        answer: The correct character (always included)
        poems: Corpus to sample distractors from
        rng: Random source
        count: Target option count

    Returns:
        Deduplicated options in random order
    """
    options = [answer]
    attempts = 0
    while len(options) < count and attempts < MAX_OPTION_ATTEMPTS and poems:
        attempts += 1
        poem = rng.choice(poems)
        if not poem.content:
            continue
        line = rng.choice(poem.content)
        if not line:
            continue
        char = rng.choice(line)
        if HanText.is_han(char) and char not in options:
            options.append(char)

    rng.shuffle(options)
    return options


class FillBlankSession:
    """
    One round of the fill-blank game.

    Usage:
        session = FillBlankSession(poems)
        session.build()
        session.answer(session.current.options[0])
        session.next()
    """

    def __init__(
        self,
        poems: Sequence[PoemRecord],
        rng: Optional[random.Random] = None,
        total: int = Config.SESSION_QUESTIONS,
        points: int = Config.POINTS_PER_ANSWER
    ):
        self.poems = list(poems)
        self.rng = rng or random.Random()
        self.total = total
        self.points = points

        self.state = SessionState.BUILDING
        self.questions: List[FillBlankQuestion] = []
        self.current_index = 0
        self.score = 0

    def _draw_question(self) -> Optional[FillBlankQuestion]:
        """Draw one question, or None when the random draw found nothing."""
        poem = self.rng.choice(self.poems)
        lines = [line for line in poem.content if len(line) >= MIN_LINE_LENGTH]
        if not lines:
            return None

        line = self.rng.choice(lines)
        for _ in range(MAX_CHAR_ATTEMPTS):
            index = self.rng.randrange(len(line))
            if HanText.is_han(line[index]):
                answer = line[index]
                return FillBlankQuestion(
                    poem=poem,
                    line=line,
                    index=index,
                    answer=answer,
                    options=generate_options(answer, self.poems, self.rng),
                )
        return None

    def build(self) -> List[FillBlankQuestion]:
        """
        Generate a fresh set of questions and start the session.

        Generation is best effort: after the draw budget runs out the session
        starts with however many questions were found. With none at all the
        session is immediately finished.

        Returns:
            The generated questions
        """
        self.state = SessionState.BUILDING
        self.questions = []
        self.current_index = 0
        self.score = 0

        attempts = 0
        while self.poems and len(self.questions) < self.total and attempts < MAX_DRAW_ATTEMPTS:
            attempts += 1
            question = self._draw_question()
            if question is not None:
                self.questions.append(question)

        if len(self.questions) < self.total:
            logger.info("Built %d of %d questions", len(self.questions), self.total)

        self.state = SessionState.IN_PROGRESS if self.questions else SessionState.FINISHED
        return self.questions

    @property
    def current(self) -> Optional[FillBlankQuestion]:
        if not self.questions:
            return None
        return self.questions[self.current_index]

    def answer(self, option: str) -> bool:
        """
        Answer the current question.

        Only the first answer counts; later calls leave the question and the
        score untouched.

        Returns:
            Whether the recorded answer is correct
        """
        question = self.current
        if question is None or self.state != SessionState.IN_PROGRESS:
            return False
        if question.is_answered:
            return bool(question.is_correct)

        question.user_answer = option
        question.is_correct = option == question.answer
        if question.is_correct:
            self.score += self.points
        return question.is_correct

    def next(self) -> None:
        """Advance; moving past the last question finishes the session."""
        if self.state != SessionState.IN_PROGRESS:
            return
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
        else:
            self.state = SessionState.FINISHED

    def previous(self) -> None:
        if self.state == SessionState.IN_PROGRESS and self.current_index > 0:
            self.current_index -= 1

    @property
    def max_score(self) -> int:
        return self.points * len(self.questions)

    def wrong_questions(self) -> List[FillBlankQuestion]:
        """Questions answered incorrectly, for the end-of-session review."""
        return [q for q in self.questions if q.is_answered and not q.is_correct]
