"""
Runtime configuration for idea_miner.

Keys come from the environment (optionally seeded from a .env file) and are
carried around in a Settings object instead of module globals.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_ENV_FILE = ".env"
DEFAULT_PORT = 5001

# YouTube Data API
YOUTUBE_API_SERVICE = "youtube"
YOUTUBE_API_VERSION = "v3"
SEARCH_PAGE_SIZE = 25
COMMENT_PAGE_SIZE = 50
MAX_IDS_PER_REQUEST = 50  # videos.list / channels.list limit

DURATION_BUCKETS = ("any", "short", "medium", "long")

# Ranking
DEFAULT_MIN_EFFICIENCY = 1.0

# LLM prompts
PROMPT_COMMENT_LIMIT = 40
ANALYSIS_MAX_TOKENS = 2000
OUTLINE_MAX_TOKENS = 2000
TEMPERATURE = 0.3


@dataclass
class Settings:
    youtube_api_key: str = ""
    anthropic_api_key: str = ""
    anthropic_model: str = DEFAULT_MODEL
    env_file: str = DEFAULT_ENV_FILE
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Load .env (without overriding real env vars) and read settings"""
        env_file = env_file or os.getenv("IDEA_MINER_ENV_FILE", DEFAULT_ENV_FILE)
        load_dotenv(env_file)
        return cls(
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", "").strip(),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", "").strip(),
            anthropic_model=os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL),
            env_file=env_file,
            port=int(os.getenv("PORT", DEFAULT_PORT)),
        )

    @property
    def has_youtube_key(self) -> bool:
        return bool(self.youtube_api_key)

    @property
    def has_llm_key(self) -> bool:
        return bool(self.anthropic_api_key)
