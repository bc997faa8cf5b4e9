# tests/helpers.py
"""
Payload builders and fakes shared by the test modules.

- YouTube Data API items (`search_item`, `video_item`, `channel_item`, `comment_item`)
- Real `HttpError` instances carrying YouTube error envelopes
- A fake Anthropic client whose `messages.create` replays canned responses
"""

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import httplib2
from googleapiclient.errors import HttpError

from idea_miner.gateway import YouTubeGateway
from idea_miner.insights import ANALYSIS_TOOL_NAME, InsightGenerator, ScriptGenerator
from idea_miner.pipeline import IdeaMiner


# =============================================================================
# YouTube payload builders
# =============================================================================

def search_item(video_id: str, channel_id: str = "UC_default") -> Dict[str, Any]:
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {"title": f"Video {video_id}", "channelId": channel_id},
    }


def video_item(
    video_id: str,
    channel_id: str,
    views: Optional[int],
    comments: Optional[int] = 10,
    thumbnails: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    stats: Dict[str, str] = {}
    if views is not None:
        stats["viewCount"] = str(views)
    if comments is not None:
        stats["commentCount"] = str(comments)
    return {
        "id": video_id,
        "snippet": {
            "title": f"Video {video_id}",
            "description": f"About {video_id}",
            "channelId": channel_id,
            "channelTitle": f"Channel {channel_id}",
            "publishedAt": "2025-01-01T00:00:00Z",
            "thumbnails": thumbnails if thumbnails is not None else {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
            },
        },
        "statistics": stats,
    }


def channel_item(channel_id: str, subscribers: Optional[int]) -> Dict[str, Any]:
    stats: Dict[str, Any] = {"viewCount": "1000", "videoCount": "10"}
    if subscribers is None:
        stats["hiddenSubscriberCount"] = True
    else:
        stats["subscriberCount"] = str(subscribers)
    return {"id": channel_id, "statistics": stats}


def comment_item(text: str) -> Dict[str, Any]:
    return {
        "snippet": {
            "topLevelComment": {"snippet": {"textDisplay": text, "authorDisplayName": "@viewer"}}
        }
    }


def make_http_error(status: int, message: str, reason: str) -> HttpError:
    """An HttpError shaped like the ones googleapiclient raises for YouTube"""
    content = json.dumps({
        "error": {
            "code": status,
            "message": message,
            "errors": [{"message": message, "domain": "youtube.commentThread", "reason": reason}],
        }
    }).encode("utf-8")
    return HttpError(httplib2.Response({"status": status}), content)


def set_response(service: MagicMock, resource: str, response: Any = None, error: Exception = None):
    execute = getattr(service, resource).return_value.list.return_value.execute
    if error is not None:
        execute.side_effect = error
    else:
        execute.return_value = response


# =============================================================================
# Anthropic fakes
# =============================================================================

class FakeMessages:
    def __init__(self, responses: List[Any]):
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeAnthropic:
    """Replays canned Messages API responses in order"""

    def __init__(self, *responses):
        self.messages = FakeMessages(list(responses))


def tool_response(payload: Any) -> SimpleNamespace:
    return SimpleNamespace(
        stop_reason="tool_use",
        content=[SimpleNamespace(type="tool_use", id="toolu_1", name=ANALYSIS_TOOL_NAME, input=payload)],
    )


def text_response(text: str) -> SimpleNamespace:
    return SimpleNamespace(stop_reason="end_turn", content=[SimpleNamespace(type="text", text=text)])


def make_miner(service, *llm_responses) -> IdeaMiner:
    """IdeaMiner wired to a mocked YouTube service and one shared fake LLM client"""
    client = FakeAnthropic(*llm_responses)
    return IdeaMiner(
        gateway=YouTubeGateway(api_key="test-key", service=service),
        insight_generator=InsightGenerator(client=client),
        script_generator=ScriptGenerator(client=client),
    )
