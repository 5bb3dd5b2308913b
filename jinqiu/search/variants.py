"""Simplified / Traditional script variants of a search query."""

from functools import lru_cache
from typing import List

from opencc import OpenCC


@lru_cache(maxsize=None)
def _converter(config: str) -> OpenCC:
    return OpenCC(config)


def to_simplified(text: str) -> str:
    """Traditional (Hong Kong) to Simplified."""
    return _converter("hk2s").convert(text)


def to_traditional(text: str) -> str:
    """Simplified to Traditional (Hong Kong)."""
    return _converter("s2hk").convert(text)


def script_variants(query: str) -> List[str]:
    """
    Expand a query into its script variants.

    Returns:
        ``[original, simplified, traditional]`` with duplicates removed,
        first occurrence kept
    """
    variants: List[str] = []
    for candidate in (query, to_simplified(query), to_traditional(query)):
        if candidate not in variants:
            variants.append(candidate)
    return variants
