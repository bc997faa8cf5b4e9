"""
Video data gateway - thin, typed wrapper around the YouTube Data API v3.

Every call is a single blocking request (no retries, no caching) on its own
HTTP connection, so one gateway can serve concurrent callers. Upstream and
network failures surface as RemoteAPIError, response items missing required
fields surface as MalformedResponseError.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import build_http

from .config import (
    COMMENT_PAGE_SIZE,
    DURATION_BUCKETS,
    MAX_IDS_PER_REQUEST,
    SEARCH_PAGE_SIZE,
    YOUTUBE_API_SERVICE,
    YOUTUBE_API_VERSION,
)
from .errors import MalformedResponseError, MissingCredentialError, RemoteAPIError
from .models import SearchHit, VideoDetail

logger = logging.getLogger(__name__)

COMMENTS_DISABLED_REASON = "commentsDisabled"
COMMENTS_DISABLED_PLACEHOLDER = "(Comments are disabled for this video)"


def _require(item: Dict[str, Any], *path: str) -> Any:
    """Walk `path` through nested dicts, raising if any key is missing"""
    node: Any = item
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise MalformedResponseError(
                f"YouTube response item is missing '{'.'.join(path)}'"
            )
        node = node[key]
    return node


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _batches(ids: Sequence[str], size: int = MAX_IDS_PER_REQUEST):
    for i in range(0, len(ids), size):
        yield ids[i:i + size]


def error_from_envelope(envelope: Dict[str, Any], status: Optional[int] = None) -> RemoteAPIError:
    """Turn a `{error: {message, errors: [{reason}]}}` envelope into RemoteAPIError"""
    error = envelope.get("error") or {}
    if isinstance(error, str):
        return RemoteAPIError(error, status=status)
    reasons = [e.get("reason") for e in error.get("errors") or [] if isinstance(e, dict) and e.get("reason")]
    message = error.get("message") or "Unknown YouTube API error"
    return RemoteAPIError(message, reasons=reasons, status=status or _to_int(error.get("code")) or None)


def error_from_http(err: HttpError) -> RemoteAPIError:
    status = getattr(err.resp, "status", None)
    status = _to_int(status) or None
    try:
        envelope = json.loads(err.content.decode("utf-8"))
    except (AttributeError, UnicodeDecodeError, ValueError):
        envelope = None
    if isinstance(envelope, dict) and "error" in envelope:
        return error_from_envelope(envelope, status)
    return RemoteAPIError(getattr(err, "reason", None) or str(err), status=status)


class YouTubeGateway:
    """Read-only access to search, videos, channels and commentThreads"""

    def __init__(self, api_key: str = "", service: Any = None):
        self._api_key = (api_key or "").strip()
        self._service = service

    @property
    def service(self):
        """Get or create the YouTube service instance"""
        if self._service is None:
            if not self._api_key:
                raise MissingCredentialError("YouTube API Key")
            self._service = build(
                YOUTUBE_API_SERVICE,
                YOUTUBE_API_VERSION,
                developerKey=self._api_key,
                cache_discovery=False,
            )
        return self._service

    def _execute(self, request, endpoint: str) -> Dict[str, Any]:
        logger.debug("YouTube %s request", endpoint)
        try:
            # httplib2.Http is not thread-safe; the shared service only builds requests
            response = request.execute(http=build_http())
        except HttpError as err:
            error = error_from_http(err)
            logger.warning("YouTube %s failed (%s): %s", endpoint, error.status, error.message)
            raise error from err
        except (httplib2.HttpLib2Error, OSError) as err:
            logger.warning("YouTube %s could not be reached: %s", endpoint, err)
            raise RemoteAPIError(f"Could not reach the YouTube API: {err}") from err
        if isinstance(response, dict) and "error" in response:
            error = error_from_envelope(response)
            logger.warning("YouTube %s returned an error envelope: %s", endpoint, error.message)
            raise error
        return response or {}

    def search(self, keyword: str, duration: str = "any") -> List[SearchHit]:
        """Search one page of videos for `keyword`, optionally by duration bucket"""
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValueError("keyword must not be empty")
        if duration not in DURATION_BUCKETS:
            raise ValueError(f"unknown duration bucket: {duration!r}")

        params = {
            "part": "snippet",
            "q": keyword,
            "type": "video",
            "maxResults": SEARCH_PAGE_SIZE,
        }
        if duration != "any":
            params["videoDuration"] = duration

        resp = self._execute(self.service.search().list(**params), "search.list")
        hits = []
        for item in resp.get("items", []):
            hits.append(SearchHit(
                video_id=_require(item, "id", "videoId"),
                title=item.get("snippet", {}).get("title", ""),
                channel_id=item.get("snippet", {}).get("channelId", ""),
            ))
        return hits

    def fetch_video_statistics(self, video_ids: Sequence[str]) -> List[VideoDetail]:
        """Snippet and statistics for each video, in upstream order"""
        details: List[VideoDetail] = []
        for batch in _batches(list(video_ids)):
            resp = self._execute(
                self.service.videos().list(part="statistics,snippet", id=",".join(batch)),
                "videos.list",
            )
            for v in resp.get("items", []):
                snippet = _require(v, "snippet")
                stats = v.get("statistics", {})
                thumbnails = snippet.get("thumbnails", {})
                thumbnail = thumbnails.get("high") or thumbnails.get("default") or {}
                details.append(VideoDetail(
                    video_id=_require(v, "id"),
                    title=snippet.get("title", ""),
                    thumbnail_url=thumbnail.get("url", ""),
                    description=snippet.get("description", ""),
                    channel_id=_require(v, "snippet", "channelId"),
                    channel_title=snippet.get("channelTitle", ""),
                    published_at=snippet.get("publishedAt", ""),
                    view_count=_to_int(stats.get("viewCount")),
                    comment_count=_to_int(stats.get("commentCount")),
                ))
        return details

    def fetch_channel_statistics(self, channel_ids: Sequence[str]) -> Dict[str, int]:
        """Map channel id -> subscriber count; unknown channels are left out"""
        unique_ids = list(dict.fromkeys(c for c in channel_ids if c))
        subscribers: Dict[str, int] = {}
        for batch in _batches(unique_ids):
            resp = self._execute(
                self.service.channels().list(part="statistics", id=",".join(batch)),
                "channels.list",
            )
            for channel in resp.get("items", []):
                stats = channel.get("statistics", {})
                subscribers[_require(channel, "id")] = _to_int(stats.get("subscriberCount"))
        return subscribers

    def fetch_comments(self, video_id: str) -> List[str]:
        """
        Top-level comments ordered by relevance.

        A video with comments turned off yields a single placeholder line
        instead of an error.
        """
        request = self.service.commentThreads().list(
            part="snippet",
            videoId=video_id,
            maxResults=COMMENT_PAGE_SIZE,
            order="relevance",
        )
        try:
            resp = self._execute(request, "commentThreads.list")
        except RemoteAPIError as error:
            if error.reasons and error.reasons[0] == COMMENTS_DISABLED_REASON:
                logger.info("Comments are disabled for %s", video_id)
                return [COMMENTS_DISABLED_PLACEHOLDER]
            raise

        return [
            _require(item, "snippet", "topLevelComment", "snippet", "textDisplay")
            for item in resp.get("items", [])
        ]
