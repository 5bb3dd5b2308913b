"""
Corpus statistics and the 飞花令 browse mode.

compute_stats() is a pure function of the loaded records. Its character
and phrase tallies feed FeiHuaLing, which pages through every poem that
contains a chosen character or phrase.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import jieba

from ..config.collections import SONG, TANG
from ..models import PoemRecord
from ..search.matcher import filter_records
from ..utils import HanText

STOP_WORDS = frozenset([
    '的', '了', '在', '是', '我', '有', '和', '就', '不', '人', '都', '一', '一个',
    '上', '也', '很', '到', '说', '要', '去', '你', '会', '着', '没有', '看', '好',
    '自己', '这', '，', '。', '？', '！', '、', '：', '；', '“', '”', '‘', '’',
    '（', '）', '《', '》',
])

TOP_AUTHORS = 10
TOP_TERMS = 20

Ranking = List[Tuple[str, int]]


@dataclass
class CorpusStats:
    """Top-k tallies over a corpus, each as (term, count) pairs."""
    tang_authors: Ranking = field(default_factory=list)
    song_authors: Ranking = field(default_factory=list)
    top_chars: Ranking = field(default_factory=list)
    top_phrases: Ranking = field(default_factory=list)


def top_k(counter: Counter, k: int) -> Ranking:
    """Highest counts first; equal counts keep first-encounter order."""
    return sorted(counter.items(), key=lambda item: item[1], reverse=True)[:k]


def is_word_like(segment: str) -> bool:
    """A segment made only of letters, digits or ideographs."""
    return bool(segment) and all(ch.isalnum() for ch in segment)


def segment_line(line: str) -> Iterable[str]:
    return jieba.cut(line)


def compute_stats(records: Sequence[PoemRecord]) -> CorpusStats:
    """
    Tally authors, characters and phrases over a corpus.

    Args:
        records: Loaded corpus

    Returns:
        CorpusStats with the top 10 authors of 唐 and 宋 and the top 20
        characters and phrases. Stop words and non-Han characters are
        excluded; phrases are segments longer than one character.
    """
    tang_authors: Counter = Counter()
    song_authors: Counter = Counter()
    chars: Counter = Counter()
    phrases: Counter = Counter()

    for record in records:
        if record.dynasty == TANG:
            tang_authors[record.author] += 1
        elif record.dynasty == SONG:
            song_authors[record.author] += 1

        for line in record.content:
            for ch in line:
                if HanText.is_han(ch) and ch not in STOP_WORDS:
                    chars[ch] += 1

            for segment in segment_line(line):
                if len(segment) > 1 and is_word_like(segment) and segment not in STOP_WORDS:
                    phrases[segment] += 1

    return CorpusStats(
        tang_authors=top_k(tang_authors, TOP_AUTHORS),
        song_authors=top_k(song_authors, TOP_AUTHORS),
        top_chars=top_k(chars, TOP_TERMS),
        top_phrases=top_k(phrases, TOP_TERMS),
    )


class FeiHuaLing:
    """
    Browse poems containing one word, one poem at a time.

    Matching is plain containment over title, author and lines, with no
    script-variant expansion.
    """

    def __init__(self, records: Sequence[PoemRecord], word: str):
        self.word = word
        self.matches = filter_records(list(records), word)
        self.index = 0

    def __len__(self) -> int:
        return len(self.matches)

    @property
    def current(self) -> Optional[PoemRecord]:
        if not self.matches:
            return None
        return self.matches[self.index]

    @property
    def has_next(self) -> bool:
        return self.index < len(self.matches) - 1

    @property
    def has_prev(self) -> bool:
        return self.index > 0

    def next(self) -> Optional[PoemRecord]:
        if self.has_next:
            self.index += 1
        return self.current

    def previous(self) -> Optional[PoemRecord]:
        if self.has_prev:
            self.index -= 1
        return self.current
