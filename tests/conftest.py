# tests/conftest.py
"""
Pytest configuration and shared fixtures for the IdeaMiner test suite.

This module provides:
- A mocked YouTube Data API service (MagicMock chains mirroring
  `service.search().list(...).execute()`)
- A three-video ranking scenario and a well-formed analysis payload
- Settings pointing at a temporary .env file and an isolated os.environ
"""

import os
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest

from idea_miner.config import Settings
from idea_miner.gateway import YouTubeGateway
from tests.helpers import channel_item, search_item, set_response, video_item


# =============================================================================
# YouTube fixtures
# =============================================================================

@pytest.fixture
def youtube_service() -> MagicMock:
    """
    A MagicMock standing in for `build('youtube', 'v3', ...)`.

    Configure responses with e.g.
    `youtube_service.search.return_value.list.return_value.execute.return_value = {...}`.
    Every resource returns an empty page unless a test says otherwise.
    """
    service = MagicMock(name="youtube")
    for resource in ("search", "videos", "channels", "commentThreads"):
        getattr(service, resource).return_value.list.return_value.execute.return_value = {"items": []}
    return service


@pytest.fixture
def gateway(youtube_service) -> YouTubeGateway:
    return YouTubeGateway(api_key="test-key", service=youtube_service)


@pytest.fixture
def scenario_service(youtube_service) -> MagicMock:
    """
    Three videos on three channels:
    A: 100000 views / 10000 subs (10.0), B: 500 / 5000 (0.1), C: 20000 / 4000 (5.0)
    """
    set_response(youtube_service, "search", {
        "items": [search_item("A", "cA"), search_item("B", "cB"), search_item("C", "cC")]
    })
    set_response(youtube_service, "videos", {
        "items": [
            video_item("A", "cA", 100000),
            video_item("B", "cB", 500),
            video_item("C", "cC", 20000),
        ]
    })
    set_response(youtube_service, "channels", {
        "items": [channel_item("cA", 10000), channel_item("cB", 5000), channel_item("cC", 4000)]
    })
    return youtube_service


@pytest.fixture
def analysis_payload() -> Dict[str, Any]:
    return {
        "sentiment": "대체로 긍정적인 반응입니다.",
        "audienceReaction": "시청자들은 솔직한 비교와 빠른 전개를 좋아했습니다.",
        "topKeywords": ["배터리", "카메라", "가격", "디자인", "발열"],
        "recommendations": [
            {"keyword": "배터리 실사용 테스트", "description": "배터리 관련 질문이 가장 많았습니다."},
            {"keyword": "카메라 야간 비교", "description": "야간 촬영 비교 요청이 많았습니다."},
            {"keyword": "가성비 대안 추천", "description": "가격 부담을 언급한 댓글이 많았습니다."},
            {"keyword": "디자인 언박싱", "description": "색상과 마감에 대한 관심이 높았습니다."},
            {"keyword": "발열 해결 팁", "description": "발열 불만이 반복적으로 등장했습니다."},
        ],
    }


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        youtube_api_key="yt-test-key",
        anthropic_api_key="llm-test-key",
        env_file=str(tmp_path / ".env"),
    )


# =============================================================================
# Environment
# =============================================================================

ENV_VARS = (
    "YOUTUBE_API_KEY",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "PORT",
    "IDEA_MINER_ENV_FILE",
    "FLASK_DEBUG",
    "GAE_ENV",
)


@pytest.fixture
def isolated_env():
    """
    Strip idea_miner's variables from os.environ and restore the original
    environment afterwards, including anything load_dotenv or
    CredentialStore.save added during the test.
    """
    with patch.dict(os.environ):
        for name in ENV_VARS:
            os.environ.pop(name, None)
        yield os.environ
