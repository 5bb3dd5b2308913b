import asyncio
import random

from jinqiu.corpus import LocalSource
from jinqiu.games import CoupletSession, FillBlankSession, SessionState, load_couplets, parse_couplets
from jinqiu.games.couplet import choose_blanks
from jinqiu.models import BLANK, Blank, CoupletQuestion
from jinqiu.utils import HanText

from .conftest import COUPLET_TEXT


# Fill-blank

def test_fill_blank_builds_ten_well_formed_questions(poems):
    session = FillBlankSession(poems, rng=random.Random(7))
    questions = session.build()

    assert session.state == SessionState.IN_PROGRESS
    assert len(questions) == 10
    for q in questions:
        assert len(q.line) >= 5
        assert q.line[q.index] == q.answer
        assert HanText.is_han(q.answer)
        assert q.answer in q.options
        assert len(q.options) <= 4
        assert len(set(q.options)) == len(q.options)
        assert q.question == q.line[:q.index] + BLANK + q.line[q.index + 1:]


def test_all_correct_answers_score_one_hundred(poems):
    session = FillBlankSession(poems, rng=random.Random(1))
    session.build()

    for _ in range(10):
        assert session.answer(session.current.answer) is True
        session.next()

    assert session.score == 100
    assert session.state == SessionState.FINISHED
    assert session.wrong_questions() == []


def test_answers_are_accepted_once(poems):
    session = FillBlankSession(poems, rng=random.Random(2))
    session.build()
    question = session.current
    wrong = next((o for o in question.options if o != question.answer), "错")

    assert session.answer(wrong) is False
    assert session.answer(question.answer) is False
    assert question.user_answer == wrong
    assert session.score == 0
    assert session.wrong_questions() == [question]


def test_navigation_stays_in_bounds(poems):
    session = FillBlankSession(poems, rng=random.Random(3))
    session.build()

    session.previous()
    assert session.current_index == 0
    session.next()
    session.next()
    session.previous()
    assert session.current_index == 1


def test_corpus_without_long_lines_finishes_immediately():
    from jinqiu.models import PoemRecord
    session = FillBlankSession([PoemRecord(id="x", content=["短句"])], rng=random.Random(0))

    assert session.build() == []
    assert session.state == SessionState.FINISHED


# Couplets

def test_parse_couplets_keeps_clauses_with_pair_mark():
    assert parse_couplets(COUPLET_TEXT) == ["云对雨", "雪对风", "晚照对晴空", "来鸿对去燕", "宿鸟对鸣虫"]
    assert parse_couplets("对，对子。") == []


def test_load_couplets_from_source(corpus_dir):
    clauses = asyncio.run(load_couplets(LocalSource(str(corpus_dir))))
    assert clauses[0] == "云对雨"
    assert asyncio.run(load_couplets(LocalSource(str(corpus_dir)), "missing.txt")) == []


class FixedRandom:
    """Deterministic stand-in: fixed coin value, always picks the first choice."""

    def __init__(self, coin):
        self.coin = coin

    def random(self):
        return self.coin

    def choice(self, seq):
        return seq[0]


def test_choose_blanks_policy():
    # pair available and coin says pair
    assert choose_blanks("晚照对晴空", FixedRandom(0.9)) == [0, 1]
    # coin says single
    assert choose_blanks("晚照对晴空", FixedRandom(0.1)) == [0]
    # no adjacent pair means one blank, never the mark itself
    assert choose_blanks("云对雨", FixedRandom(0.9)) == [0]


def test_couplet_session_questions_are_well_formed():
    clauses = parse_couplets(COUPLET_TEXT)
    session = CoupletSession(clauses, rng=random.Random(5))
    questions = session.build()

    assert len(questions) == len(clauses)
    assert sorted(q.original_text for q in questions) == sorted(clauses)
    for q in questions:
        mark = q.original_text.index("对")
        positions = [b.index for b in q.blanks]
        assert 1 <= len(positions) <= 2
        assert mark not in positions
        assert positions == sorted(positions)
        if len(positions) == 2:
            assert positions[1] == positions[0] + 1
            assert (positions[0] < mark) == (positions[1] < mark)
        assert all(b.char == q.original_text[b.index] for b in q.blanks)
        assert set(q.correct_chars) <= set(q.options)
        assert len(q.options) <= 12
        assert "对" not in q.options
        assert all(HanText.is_han(o) for o in q.options)


def test_couplet_correct_fill_reconstructs_clause():
    session = CoupletSession(parse_couplets(COUPLET_TEXT), rng=random.Random(11))
    session.build()

    for _ in range(len(session.questions)):
        question = session.current
        for char in question.correct_chars:
            session.choose_option(char)
        assert question.is_answered
        assert question.is_correct
        assert question.fill(question.user_answers) == question.original_text
        session.next()

    assert session.score == 10 * len(session.questions)
    assert session.state == SessionState.FINISHED


def pair_session():
    session = CoupletSession(["晚照对晴空"], rng=random.Random(0))
    session.questions = [CoupletQuestion(
        original_text="晚照对晴空",
        blanks=[Blank(3, "晴"), Blank(4, "空")],
        options=["晴", "空", "雨", "风"],
    )]
    session.state = SessionState.IN_PROGRESS
    return session


def test_couplet_blanks_fill_left_to_right_and_clear_before_answer():
    session = pair_session()
    question = session.current

    session.choose_option("晴")
    assert question.user_answers == ["晴", None]
    assert question.question_text == ["晚", "照", "对", None, None]

    session.clear_blank(0)
    assert question.user_answers == [None, None]
    assert not question.is_answered


def test_couplet_wrong_answer_locks_question():
    session = pair_session()
    question = session.current

    session.choose_option("空")
    session.choose_option("晴")

    assert question.is_answered
    assert question.is_correct is False
    assert session.score == 0
    assert question.fill(question.user_answers) == "晚照对空晴"

    session.clear_blank(0)
    session.choose_option("雨")
    assert question.user_answers == ["空", "晴"]
