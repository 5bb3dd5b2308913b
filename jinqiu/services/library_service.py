"""
Library Service - the user's custom collection and poem preview navigation.

Nothing here is persisted: the custom collection lives for one session.
"""

from typing import List, Optional, Sequence, Tuple

from ..config import category_for_poem_id
from ..models import PoemRecord
from ..utils import setup_logger

logger = setup_logger(__name__)

ADDED_NOTICE = "已将《{title}》收入个性化藏书"
DUPLICATE_NOTICE = "此作已在您的藏书阁中"
REMOVED_NOTICE = "已从个性化藏书中移除"


class CustomLibrary:
    """
    User-curated poems, newest first.

    Usage:
        library = CustomLibrary()
        added, notice = library.add(poem)
    """

    def __init__(self):
        self.poems: List[PoemRecord] = []

    def __contains__(self, poem_id: str) -> bool:
        return any(p.id == poem_id for p in self.poems)

    def __len__(self) -> int:
        return len(self.poems)

    def add(
        self,
        poem: PoemRecord,
        search_results: Optional[List[PoemRecord]] = None
    ) -> Tuple[bool, str]:
        """
        Add a poem to the front of the collection.

        Args:
            poem: Poem to keep
            search_results: External search results; the poem is removed
                            from them once it has been added

        Returns:
            (added, notice) where notice is the message to show the user
        """
        if poem.id in self:
            return False, DUPLICATE_NOTICE

        self.poems.insert(0, poem)
        if search_results is not None:
            search_results[:] = [p for p in search_results if p.id != poem.id]
        logger.debug("Added %s to custom library", poem.id)
        return True, ADDED_NOTICE.format(title=poem.title)

    def remove(self, poem_id: str) -> str:
        """Remove a poem by id and return the notice to show."""
        self.poems[:] = [p for p in self.poems if p.id != poem_id]
        return REMOVED_NOTICE


class PreviewNavigator:
    """
    Step through poems of the list a preview was opened from.

    Usage:
        nav = PreviewNavigator()
        nav.open(poem, context=results)
        if nav.has_next:
            nav.next()
    """

    def __init__(self):
        self.context: List[PoemRecord] = []
        self.index = 0
        self.current: Optional[PoemRecord] = None
        self.is_open = False

    def open(self, poem: PoemRecord, context: Optional[Sequence[PoemRecord]] = None) -> None:
        """Show a poem; navigation runs over ``context`` (just the poem by default)."""
        self.context = list(context) if context is not None else [poem]
        self.current = poem
        self.index = next((i for i, p in enumerate(self.context) if p.id == poem.id), 0)
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    @property
    def has_next(self) -> bool:
        return self.index < len(self.context) - 1

    @property
    def has_prev(self) -> bool:
        return self.index > 0

    def next(self) -> Optional[PoemRecord]:
        if self.has_next:
            self.index += 1
            self.current = self.context[self.index]
        return self.current

    def previous(self) -> Optional[PoemRecord]:
        if self.has_prev:
            self.index -= 1
            self.current = self.context[self.index]
        return self.current


def locate_poem(poem_id: str, poems: Sequence[PoemRecord]) -> Tuple[Optional[PoemRecord], Optional[str]]:
    """
    Find a poem by id for "go to poem", with the library category it lives in.

    Returns:
        (poem, category); poem is None when the id is unknown and category
        is None when no category owns the id prefix
    """
    poem = next((p for p in poems if p.id == poem_id), None)
    if poem is None:
        return None, None
    return poem, category_for_poem_id(poem_id)
