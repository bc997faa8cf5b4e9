"""
Persistence of the YouTube API key in a dotenv file under a fixed key.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import get_key, set_key

logger = logging.getLogger(__name__)

YOUTUBE_KEY_NAME = "YOUTUBE_API_KEY"


class CredentialStore:
    def __init__(self, env_file: str = ".env"):
        self.path = Path(env_file)

    def load(self) -> Optional[str]:
        """The stored key, or None when the file or the key is absent"""
        if not self.path.exists():
            return None
        value = get_key(str(self.path), YOUTUBE_KEY_NAME)
        return value.strip() if value and value.strip() else None

    def save(self, api_key: str) -> str:
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        set_key(str(self.path), YOUTUBE_KEY_NAME, api_key)
        # keep the running process in step with the file
        os.environ[YOUTUBE_KEY_NAME] = api_key
        logger.info("Saved %s to %s", YOUTUBE_KEY_NAME, self.path)
        return api_key
