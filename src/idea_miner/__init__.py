"""
IdeaMiner - find videos that outperform their channel's size and mine their
comments for new content ideas.
"""

from .config import Settings
from .errors import IdeaMinerError, MalformedResponseError, MissingCredentialError, RemoteAPIError
from .gateway import YouTubeGateway
from .insights import InsightGenerator, ScriptGenerator
from .models import AnalysisResult, Recommendation, ScriptOutline, SearchCriteria, VideoRecord
from .pipeline import AnalysisSession, IdeaMiner
from .ranking import efficiency_ratio, rank

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalysisSession",
    "IdeaMiner",
    "IdeaMinerError",
    "InsightGenerator",
    "MalformedResponseError",
    "MissingCredentialError",
    "Recommendation",
    "RemoteAPIError",
    "ScriptGenerator",
    "ScriptOutline",
    "SearchCriteria",
    "Settings",
    "VideoRecord",
    "YouTubeGateway",
    "efficiency_ratio",
    "rank",
]
