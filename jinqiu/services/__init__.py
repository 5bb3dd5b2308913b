"""Services module - chat tutor and custom library."""

from .chat_service import (
    APOLOGY,
    GREETING,
    ChatServiceError,
    ChatSession,
    RequestToken,
    SparkClient,
    SparkConfig,
    analysis_prompt,
    build_auth_url,
    deep_analysis_prompt,
)
from .library_service import CustomLibrary, PreviewNavigator, locate_poem

__all__ = [
    'APOLOGY',
    'GREETING',
    'ChatServiceError',
    'ChatSession',
    'RequestToken',
    'SparkClient',
    'SparkConfig',
    'analysis_prompt',
    'build_auth_url',
    'deep_analysis_prompt',
    'CustomLibrary',
    'PreviewNavigator',
    'locate_poem',
]
