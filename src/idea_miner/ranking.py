"""
Ranking engine: merge video details with channel subscriber counts, keep the
videos at or above the efficiency threshold and order them by ratio.
"""

from typing import Dict, Iterable, List

from .models import VideoDetail, VideoRecord, efficiency_ratio

__all__ = ["efficiency_ratio", "rank"]


def rank(
    details: Iterable[VideoDetail],
    subscribers: Dict[str, int],
    min_efficiency: float,
) -> List[VideoRecord]:
    """
    Build VideoRecords and return those with ratio >= min_efficiency.

    Channels missing from `subscribers` (or reporting 0) count as 1 subscriber,
    so the ratio falls back to the raw view count. The sort is stable: videos
    with equal ratios keep their upstream order.
    """
    records = [
        VideoRecord.from_detail(detail, subscribers.get(detail.channel_id) or 1)
        for detail in details
    ]
    kept = [r for r in records if r.efficiency_ratio >= min_efficiency]
    kept.sort(key=lambda r: r.efficiency_ratio, reverse=True)
    return kept
