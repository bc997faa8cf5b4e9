"""
Data model: search criteria, decoded platform records, ranked videos and
LLM analysis results.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

from .config import DEFAULT_MIN_EFFICIENCY, DURATION_BUCKETS


def efficiency_ratio(view_count: int, subscriber_count: int) -> float:
    """Views per subscriber, with the subscriber count floored at 1"""
    return view_count / max(subscriber_count, 1)


@dataclass(frozen=True)
class SearchCriteria:
    keyword: str
    duration: str = "any"
    min_efficiency: float = DEFAULT_MIN_EFFICIENCY

    def __post_init__(self):
        keyword = str(self.keyword).strip() if self.keyword is not None else ""
        if not keyword:
            raise ValueError("keyword must not be empty")
        if self.duration not in DURATION_BUCKETS:
            raise ValueError(
                f"duration must be one of {', '.join(DURATION_BUCKETS)}, got {self.duration!r}"
            )
        try:
            min_efficiency = float(self.min_efficiency)
        except (TypeError, ValueError):
            raise ValueError(f"min_efficiency must be a number, got {self.min_efficiency!r}")
        if not math.isfinite(min_efficiency) or min_efficiency < 0:
            raise ValueError(f"min_efficiency must be a finite, non-negative number, got {self.min_efficiency!r}")
        object.__setattr__(self, "keyword", keyword)
        object.__setattr__(self, "min_efficiency", min_efficiency)


@dataclass(frozen=True)
class SearchHit:
    video_id: str
    title: str
    channel_id: str


@dataclass(frozen=True)
class VideoDetail:
    video_id: str
    title: str
    thumbnail_url: str
    description: str
    channel_id: str
    channel_title: str
    published_at: str
    view_count: int
    comment_count: int


@dataclass(frozen=True)
class VideoRecord:
    video_id: str
    title: str
    thumbnail_url: str
    description: str
    channel_id: str
    channel_title: str
    published_at: str
    view_count: int
    comment_count: int
    subscriber_count: int

    @classmethod
    def from_detail(cls, detail: VideoDetail, subscriber_count: int) -> "VideoRecord":
        return cls(
            video_id=detail.video_id,
            title=detail.title,
            thumbnail_url=detail.thumbnail_url,
            description=detail.description,
            channel_id=detail.channel_id,
            channel_title=detail.channel_title,
            published_at=detail.published_at,
            view_count=detail.view_count,
            comment_count=detail.comment_count,
            subscriber_count=max(subscriber_count, 1),
        )

    @property
    def efficiency_ratio(self) -> float:
        return efficiency_ratio(self.view_count, self.subscriber_count)

    @property
    def url(self) -> str:
        return f"https://youtu.be/{self.video_id}"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["efficiency_ratio"] = self.efficiency_ratio
        data["url"] = self.url
        return data


@dataclass(frozen=True)
class Recommendation:
    keyword: str
    description: str


@dataclass(frozen=True)
class AnalysisResult:
    sentiment: str
    audience_reaction: str
    top_keywords: Tuple[str, ...] = field(default_factory=tuple)
    recommendations: Tuple[Recommendation, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentiment": self.sentiment,
            "audience_reaction": self.audience_reaction,
            "top_keywords": list(self.top_keywords),
            "recommendations": [asdict(r) for r in self.recommendations],
        }


@dataclass(frozen=True)
class ScriptOutline:
    keyword: str
    markdown: str

    def to_dict(self) -> Dict[str, str]:
        return {"keyword": self.keyword, "markdown": self.markdown}


def records_to_dicts(records: List[VideoRecord]) -> List[Dict[str, Any]]:
    return [r.to_dict() for r in records]
