#!/usr/bin/env python3
"""
IdeaMiner MCP Server - exposes search, comment analysis and script outlines
as tools for MCP clients such as Claude Desktop.
"""

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_MIN_EFFICIENCY, Settings
from .errors import IdeaMinerError
from .models import SearchCriteria, records_to_dicts
from .pipeline import AnalysisSession, IdeaMiner

logger = logging.getLogger(__name__)

app = FastMCP("idea-miner")

_miner: Optional[IdeaMiner] = None
# last analyzed video; script outlines default to its audience reaction
_session: Optional[AnalysisSession] = None


def configure(miner: Optional[IdeaMiner] = None) -> IdeaMiner:
    """Install the IdeaMiner used by the tools (built from the environment by default)"""
    global _miner, _session
    _miner = miner or IdeaMiner.from_settings(Settings.from_env())
    _session = None
    return _miner


def get_miner() -> IdeaMiner:
    return _miner if _miner is not None else configure()


@app.tool()
def search_videos(
    keyword: str,
    duration: str = "any",
    min_efficiency: float = DEFAULT_MIN_EFFICIENCY,
) -> Dict[str, Any]:
    """
    Search YouTube videos by keyword and rank them by views per subscriber.

    Args:
        keyword: Keyword(s) to search for, e.g. "tech review"
        duration: One of "any", "short", "medium", "long" (default: "any")
        min_efficiency: Minimum views-per-subscriber ratio to keep (default: 1.0)

    Returns:
        Videos sorted by efficiency ratio, highest first
    """
    try:
        criteria = SearchCriteria(keyword=keyword, duration=duration, min_efficiency=min_efficiency)
        results = get_miner().search_videos(criteria)
        return {"keyword": criteria.keyword, "videos": records_to_dicts(results)}
    except (IdeaMinerError, ValueError) as e:
        return {"error": f"Search failed: {e}"}


@app.tool()
def analyze_video(video_id: str, title: str) -> Dict[str, Any]:
    """
    Analyze a video's top comments: sentiment, audience reaction, keywords
    and five recommended follow-up topics (answers are in Korean).

    Args:
        video_id: YouTube video ID
        title: Video title, used as context for the analysis
    """
    global _session
    try:
        _session = get_miner().open_session(video_id, title)
        return {"video_id": video_id, **_session.analysis.to_dict()}
    except IdeaMinerError as e:
        _session = None
        return {"error": f"Analysis failed: {e}"}


@app.tool()
def generate_script_outline(keyword: str, audience_context: Optional[str] = None) -> Dict[str, Any]:
    """
    Generate a markdown script outline (hook, intro, body, call to action).

    Args:
        keyword: Recommended topic to write the outline for
        audience_context: Audience reaction to ground the outline in; defaults
            to the one from the last analyze_video call
    """
    try:
        if audience_context is None and _session is not None:
            return _session.choose_keyword(keyword).to_dict()
        return get_miner().generate_outline(keyword, audience_context or "").to_dict()
    except IdeaMinerError as e:
        return {"error": f"Outline generation failed: {e}"}


@app.tool()
def ping() -> str:
    """Simple ping to test if the MCP server is working"""
    return "pong from IdeaMiner MCP Server!"


def main() -> None:
    """Run the MCP server"""
    logging.basicConfig(level=logging.INFO)
    configure()
    app.run()


if __name__ == "__main__":
    main()
