"""
Chat Service - poem Q&A and appreciation through the Spark chat API.

The Spark v4.0 Ultra endpoint streams answers over a signed WebSocket:
- SparkClient: one request, tokens streamed to a callback
- ChatSession: the transcript, with last-request-wins token routing
"""

import base64
import hashlib
import hmac
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote, urlencode

import aiohttp

from ..config import Config
from ..models import ChatMessage, PoemRecord
from ..utils import setup_logger

logger = setup_logger(__name__)

SYSTEM_PROMPT = "你是一位博学多才的国学大师，精通唐诗宋词。请用优雅、古风的白话文回答用户的问题。"
GREETING = "阁下好，我是您的诗词侍读。您可以问我关于诗词的任何问题，或者让我为您赏析诗词。"
APOLOGY = "抱歉，侍读今日略感疲乏，请稍后再试。"

TokenCallback = Callable[[str], None]


class ChatServiceError(Exception):
    """Raised when the chat service rejects a request or the connection fails."""
    pass


@dataclass
class SparkConfig:
    """Configuration for the Spark chat API."""
    app_id: str = field(default_factory=lambda: Config.SPARK_APP_ID)
    api_key: str = field(default_factory=lambda: Config.SPARK_API_KEY)
    api_secret: str = field(default_factory=lambda: Config.SPARK_API_SECRET)
    host: str = Config.SPARK_HOST
    path: str = Config.SPARK_PATH
    domain: str = Config.SPARK_DOMAIN
    temperature: float = Config.SPARK_TEMPERATURE
    max_tokens: int = Config.SPARK_MAX_TOKENS
    uid: str = "user_default"
    # Overrides the wss://{host}{path} endpoint (signing still uses host/path)
    url: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.app_id and self.api_key and self.api_secret)


def build_auth_url(config: SparkConfig, now: Optional[datetime] = None) -> str:
    """
    Build the signed WebSocket URL.

    The request line ``host/date/GET path`` is signed with HMAC-SHA256 using
    the API secret. The resulting authorization line is base64-encoded and
    sent, with the date and host, as query parameters.

    Args:
        config: Spark credentials and endpoint
        now: Signing time (defaults to the current UTC time)

    Returns:
        URL to open the WebSocket against
    """
    now = now or datetime.now(timezone.utc)
    date = format_datetime(now.astimezone(timezone.utc), usegmt=True)

    signature_origin = f"host: {config.host}\ndate: {date}\nGET {config.path} HTTP/1.1"
    digest = hmac.new(
        config.api_secret.encode("utf-8"),
        signature_origin.encode("utf-8"),
        hashlib.sha256
    ).digest()
    signature = base64.b64encode(digest).decode("ascii")

    authorization_origin = (
        f'api_key="{config.api_key}", algorithm="hmac-sha256", '
        f'headers="host date request-line", signature="{signature}"'
    )
    authorization = base64.b64encode(authorization_origin.encode("utf-8")).decode("ascii")

    base = config.url or f"wss://{config.host}{config.path}"
    query = urlencode({"authorization": authorization, "date": date, "host": config.host}, quote_via=quote)
    return f"{base}?{query}"


def analysis_prompt(poem: PoemRecord) -> str:
    """Prompt asking for an appreciation of one poem."""
    lines = "\n".join(poem.content)
    return f"请赏析《{poem.title}》\n作者：{poem.author}\n内容：\n{lines}"


def deep_analysis_prompt(poem: PoemRecord) -> str:
    """Longer appreciation prompt covering imagery, mood and feeling."""
    lines = "\n".join(poem.content)
    return (
        f"请赏析这首诗：\n题目：《{poem.title}》\n作者：{poem.author}\n内容：\n{lines}"
        "\n\n请从意象、意境、情感等方面进行深度赏析。"
    )


class SparkClient:
    """
    Streaming client for the Spark chat API.

    Usage:
        client = SparkClient()
        answer = await client.chat("《静夜思》写于何时？", on_token=print)
        await client.close()
    """

    def __init__(self, config: Optional[SparkConfig] = None):
        self.config = config or SparkConfig()
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            # No timeout: a hung answer simply never resolves
            timeout = aiohttp.ClientTimeout(total=None)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "SparkClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def build_request(self, message: str) -> Dict[str, Any]:
        """Request frame: persona prompt plus one user message."""
        return {
            "header": {
                "app_id": self.config.app_id,
                "uid": self.config.uid,
            },
            "parameter": {
                "chat": {
                    "domain": self.config.domain,
                    "temperature": self.config.temperature,
                    "max_tokens": self.config.max_tokens,
                }
            },
            "payload": {
                "message": {
                    "text": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": message},
                    ]
                }
            },
        }

    @staticmethod
    def parse_frame(data: Dict[str, Any]) -> tuple:
        """
        Read one response frame.

        Returns:
            (token or None, is_last)

        Raises:
            ChatServiceError: If the frame carries a non-zero error code
        """
        header = data.get("header") or {}
        code = header.get("code", 0)
        if code != 0:
            raise ChatServiceError(header.get("message") or f"Spark API error {code}")

        token = None
        text = ((data.get("payload") or {}).get("choices") or {}).get("text")
        if text:
            token = text[0].get("content", "")
        return token, header.get("status") == 2

    async def chat(self, message: str, on_token: Optional[TokenCallback] = None) -> str:
        """
        Send one message and stream the answer.

        Args:
            message: User message
            on_token: Called with each streamed token

        Returns:
            The full answer

        Raises:
            ChatServiceError: On missing credentials, API errors or a
                              connection that closes before any answer
        """
        if not self.config.has_credentials:
            raise ChatServiceError("Spark credentials are not configured")

        session = await self._get_session()
        url = build_auth_url(self.config)
        logger.debug("Connecting to Spark API at %s", self.config.host)

        parts: List[str] = []
        try:
            async with session.ws_connect(url) as ws:
                await ws.send_json(self.build_request(message))
                async for msg in ws:
                    if msg.type != aiohttp.WSMsgType.TEXT:
                        break
                    token, is_last = self.parse_frame(json.loads(msg.data))
                    if token:
                        parts.append(token)
                        if on_token:
                            on_token(token)
                    if is_last:
                        return "".join(parts)
                close_code = ws.close_code
        except (aiohttp.ClientError, ValueError) as e:
            raise ChatServiceError(str(e)) from e

        if not parts:
            raise ChatServiceError(f"WebSocket closed unexpectedly with code {close_code}")
        return "".join(parts)

    async def analyze(self, poem: PoemRecord, on_token: Optional[TokenCallback] = None) -> str:
        """Ask for an in-depth appreciation of one poem."""
        return await self.chat(deep_analysis_prompt(poem), on_token)


@dataclass(frozen=True)
class RequestToken:
    """Identifies one chat request; only the latest token may update the transcript."""
    id: int


class ChatSession:
    """
    Chat transcript with the poetry tutor.

    Every request is tagged with a RequestToken. Streamed tokens, failure
    messages and the loading flag are applied only while the request is the
    latest one issued; older requests keep running but are ignored.

    Usage:
        session = ChatSession()
        await session.send("李白是谁？")
        await session.analyze(poem)
    """

    def __init__(self, client: Optional[SparkClient] = None):
        self.client = client or SparkClient()
        self.messages: List[ChatMessage] = [ChatMessage("assistant", GREETING)]
        self.loading = False
        self._latest = 0

    def issue_token(self) -> RequestToken:
        self._latest += 1
        return RequestToken(self._latest)

    def is_current(self, token: RequestToken) -> bool:
        return token.id == self._latest

    async def close(self) -> None:
        await self.client.close()

    async def _run(self, prompt: str, show_error: bool) -> Optional[str]:
        token = self.issue_token()
        self.loading = True
        reply = ChatMessage("assistant", "")
        self.messages.append(reply)

        def on_token(text: str) -> None:
            if self.is_current(token):
                reply.content += text

        try:
            return await self.client.chat(prompt, on_token)
        except ChatServiceError as e:
            logger.error("Chat request %d failed: %s", token.id, e)
            if self.is_current(token):
                content = f"(连接错误: {str(e) or APOLOGY}) {APOLOGY}" if show_error else APOLOGY
                self.messages.append(ChatMessage("assistant", content))
            return None
        finally:
            if self.is_current(token):
                self.loading = False

    async def send(self, text: str) -> Optional[str]:
        """
        Send a free-form question.

        Blank input, or input while a request is loading, is ignored.

        Returns:
            The answer, or None when ignored or failed
        """
        text = text.strip()
        if not text or self.loading:
            return None
        self.messages.append(ChatMessage("user", text))
        return await self._run(text, show_error=True)

    async def analyze(self, poem: PoemRecord) -> Optional[str]:
        """
        Ask for an appreciation of a poem.

        Asking again for the poem that was just asked about is ignored.
        """
        last = self.messages[-1] if self.messages else None
        if last is not None and last.poem is not None and last.poem.id == poem.id:
            return None
        self.messages.append(ChatMessage("user", f"请赏析《{poem.title}》", poem=poem))
        return await self._run(analysis_prompt(poem), show_error=False)
