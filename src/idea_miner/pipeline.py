"""
Orchestration of the three user actions: search, analyze and outline.

Each action runs its upstream calls strictly in sequence; any failure fails
the whole action and nothing is kept from the calls that did succeed.
"""

import logging
from typing import List, Optional

from .config import Settings
from .gateway import YouTubeGateway
from .insights import InsightGenerator, ScriptGenerator
from .models import AnalysisResult, ScriptOutline, SearchCriteria, VideoRecord
from .ranking import rank

logger = logging.getLogger(__name__)


class IdeaMiner:
    def __init__(
        self,
        gateway: YouTubeGateway,
        insight_generator: InsightGenerator,
        script_generator: ScriptGenerator,
    ):
        self.gateway = gateway
        self.insight_generator = insight_generator
        self.script_generator = script_generator

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdeaMiner":
        return cls(
            gateway=YouTubeGateway(settings.youtube_api_key),
            insight_generator=InsightGenerator(settings.anthropic_api_key, settings.anthropic_model),
            script_generator=ScriptGenerator(settings.anthropic_api_key, settings.anthropic_model),
        )

    def search_videos(self, criteria: SearchCriteria) -> List[VideoRecord]:
        """search -> video statistics -> channel statistics -> rank"""
        hits = self.gateway.search(criteria.keyword, criteria.duration)
        if not hits:
            logger.info("No videos found for %r", criteria.keyword)
            return []

        details = self.gateway.fetch_video_statistics([h.video_id for h in hits])
        if not details:
            return []
        subscribers = self.gateway.fetch_channel_statistics([d.channel_id for d in details])

        results = rank(details, subscribers, criteria.min_efficiency)
        logger.info(
            "%r: %d hits, %d at or above efficiency %.2f",
            criteria.keyword, len(details), len(results), criteria.min_efficiency,
        )
        return results

    def analyze_video(self, video_id: str, title: str) -> AnalysisResult:
        comments = self.gateway.fetch_comments(video_id)
        return self.insight_generator.analyze(title, comments)

    def generate_outline(self, keyword: str, audience_context: str = "") -> ScriptOutline:
        markdown = self.script_generator.generate_outline(keyword, audience_context)
        return ScriptOutline(keyword=keyword, markdown=markdown)

    def open_session(self, video_id: str, title: str) -> "AnalysisSession":
        return AnalysisSession(self, video_id, title, self.analyze_video(video_id, title))


class AnalysisSession:
    """
    The analysis of one video plus at most one live script outline.

    Choosing a new keyword replaces the outline; choosing the same keyword
    again returns the live one without another LLM call.
    """

    def __init__(self, miner: IdeaMiner, video_id: str, title: str, analysis: AnalysisResult):
        self.miner = miner
        self.video_id = video_id
        self.title = title
        self.analysis = analysis
        self.outline: Optional[ScriptOutline] = None

    @property
    def selected_keyword(self) -> Optional[str]:
        return self.outline.keyword if self.outline else None

    def choose_keyword(self, keyword: str) -> ScriptOutline:
        if self.outline is not None and self.outline.keyword == keyword:
            return self.outline
        # a failed call leaves no outline
        self.outline = None
        self.outline = self.miner.generate_outline(keyword, self.analysis.audience_reaction)
        return self.outline
