"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass
class Config:
    """Application-wide configuration."""
    
    # Cross-platform paths using pathlib
    # BASE_DIR is the project root (parent of jinqiu/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()
    
    # Corpus location: a local directory, or an HTTP base URL when set
    DATA_DIR: str = os.environ.get("JINQIU_DATA_DIR", str(BASE_DIR / "public" / "data"))
    DATA_URL: str = os.environ.get("JINQIU_DATA_URL", "")
    
    # Optional index of the large external-search corpus: [{path, dynasty, category}]
    SEARCH_INDEX_FILE: str = os.environ.get("JINQIU_SEARCH_INDEX", "")
    
    # Card assets
    WALLPAPER_DIR: str = os.environ.get("JINQIU_WALLPAPER_DIR", str(BASE_DIR / "public" / "wallpaper"))
    FIGURE_DIR: str = os.environ.get("JINQIU_FIGURE_DIR", str(BASE_DIR / "public" / "figure"))
    FONT_PATH: str = os.environ.get("JINQIU_FONT_PATH", "")
    EXPORT_DIR: str = os.environ.get("JINQIU_EXPORT_DIR", str(BASE_DIR / "data" / "output"))
    
    # Library view
    PAGE_SIZE: int = 200
    SHARD_STEP: int = 1000
    
    # Games
    SESSION_QUESTIONS: int = 10
    POINTS_PER_ANSWER: int = 10
    COUPLET_FILE: str = "raw.txt"  # 声律启蒙
    COUPLET_OPTIONS: int = 12
    
    # Spark chat service (v4.0 Ultra)
    # NEVER hardcode secret keys in source code!
    SPARK_APP_ID: str = os.environ.get("SPARK_APP_ID", "")
    SPARK_API_KEY: str = os.environ.get("SPARK_API_KEY", "")
    SPARK_API_SECRET: str = os.environ.get("SPARK_API_SECRET", "")
    SPARK_HOST: str = "spark-api.xf-yun.com"
    SPARK_PATH: str = "/v4.0/chat"
    SPARK_DOMAIN: str = "4.0Ultra"
    SPARK_TEMPERATURE: float = 0.5
    SPARK_MAX_TOKENS: int = 4096
    
    # Fetch concurrency
    CONCURRENCY: int = 4
