"""Literal substring matching over poem records."""

from typing import Any, Dict, Iterable, List, Sequence

from ..models import PoemRecord


def matches(record: PoemRecord, query: str) -> bool:
    """
    Check whether a query occurs in a record.

    The query must be a literal, case-sensitive substring of the title, the
    author or any single content line.
    """
    return (
        query in record.title
        or query in record.author
        or any(query in line for line in record.content)
    )


def matches_any(record: PoemRecord, queries: Sequence[str]) -> bool:
    """Check whether any of several query variants occurs in a record."""
    return any(matches(record, q) for q in queries)


def raw_matches_any(raw: Dict[str, Any], queries: Sequence[str]) -> bool:
    """
    Match a raw external-corpus object without normalizing it first.

    Fields resolve the same way the external normalizer resolves them.
    """
    title = str(raw.get("title") or raw.get("rhythmic") or "")
    author = str(raw.get("author") or raw.get("authorName") or "")
    content = raw.get("paragraphs") or raw.get("content") or raw.get("para") or []
    if isinstance(content, str):
        content = content.splitlines()
    return any(
        q in title or q in author or any(q in line for line in content if isinstance(line, str))
        for q in queries
    )


def filter_records(records: Iterable[PoemRecord], query: str) -> List[PoemRecord]:
    """
    Keep records containing the query, preserving order.

    An empty query keeps everything.
    """
    if not query:
        return list(records)
    return [r for r in records if matches(r, query)]
