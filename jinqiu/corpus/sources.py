"""Corpus sources - read JSON and Markdown documents from disk or HTTP."""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import aiofiles
import aiohttp

from ..config import Config
from ..utils import setup_logger

logger = setup_logger(__name__)


class BaseSource(ABC):
    """
    Abstract base class for corpus sources.

    Provides lifecycle management and async context manager support.
    Subclasses implement fetch_text() and optionally override close().
    """

    @abstractmethod
    async def fetch_text(self, path: str) -> Optional[str]:
        """
        Fetch one document as text.

        Args:
            path: Path relative to the source root

        Returns:
            Document text, or None when it cannot be read
        """
        pass

    async def fetch_json(self, path: str) -> Optional[Any]:
        """
        Fetch and parse one JSON document.

        Failures (missing file, non-success status, malformed JSON) are
        logged and reported as None; they never raise.
        """
        text = await self.fetch_text(path)
        if text is None:
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            logger.warning("Malformed JSON in %s: %s", path, str(e)[:80])
            return None

    async def close(self) -> None:
        """Close any open resources (sessions, connections, etc.)."""
        pass

    async def __aenter__(self) -> "BaseSource":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - ensure resources are closed."""
        await self.close()


class LocalSource(BaseSource):
    """Read corpus files from a local directory."""

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or Config.DATA_DIR)

    def resolve(self, path: str) -> Path:
        return self.root / path.lstrip("/")

    async def fetch_text(self, path: str) -> Optional[str]:
        file_path = self.resolve(path)
        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", file_path, e)
            return None


class HttpSource(BaseSource):
    """Fetch corpus files over HTTP with a shared session."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or Config.DATA_URL).rstrip("/")
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock: Optional[asyncio.Lock] = None

    def _get_session_lock(self) -> asyncio.Lock:
        """Get or create the session lock (lazy initialization)."""
        if self._session_lock is None:
            self._session_lock = asyncio.Lock()
        return self._session_lock

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create a shared aiohttp session (connection pooling)."""
        async with self._get_session_lock():
            if self._session is None or self._session.closed:
                connector = aiohttp.TCPConnector(limit_per_host=Config.CONCURRENCY)
                # No timeout: a hung request simply never resolves
                timeout = aiohttp.ClientTimeout(total=None)
                self._session = aiohttp.ClientSession(connector=connector, timeout=timeout)
            return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        async with self._get_session_lock():
            if self._session and not self._session.closed:
                await self._session.close()
                self._session = None

    def resolve(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def fetch_text(self, path: str) -> Optional[str]:
        url = self.resolve(path)
        session = await self._get_session()
        try:
            async with session.get(url) as response:
                if response.status != 200:
                    logger.warning("Fetch %s failed with status %s", url, response.status)
                    return None
                return await response.text(encoding="utf-8")
        except (aiohttp.ClientError, UnicodeDecodeError) as e:
            logger.warning("Fetch %s failed: %s", url, str(e)[:80])
            return None


def create_source(location: Optional[str] = None) -> BaseSource:
    """
    Create the source matching a location.

    Args:
        location: Directory or http(s) base URL. Defaults to
                  Config.DATA_URL when set, otherwise Config.DATA_DIR.

    Returns:
        Source instance
    """
    location = location or Config.DATA_URL or Config.DATA_DIR
    if location.startswith(("http://", "https://")):
        return HttpSource(location)
    return LocalSource(location)
