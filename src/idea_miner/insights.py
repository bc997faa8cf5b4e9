"""
LLM-backed generators: comment insight analysis and script outlines.

Both talk to the Anthropic Messages API. The insight call forces a single
tool whose input schema is the analysis shape, so the model's answer arrives
as structured JSON. The outline call is plain free text.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import anthropic

from .config import (
    ANALYSIS_MAX_TOKENS,
    DEFAULT_MODEL,
    OUTLINE_MAX_TOKENS,
    PROMPT_COMMENT_LIMIT,
    TEMPERATURE,
)
from .errors import MalformedResponseError, MissingCredentialError, RemoteAPIError
from .models import AnalysisResult, Recommendation

logger = logging.getLogger(__name__)

OUTLINE_FALLBACK = "목차 생성에 실패했습니다."

ANALYSIS_TOOL_NAME = "record_video_analysis"

ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "sentiment": {"type": "string"},
        "audienceReaction": {"type": "string"},
        "topKeywords": {"type": "array", "items": {"type": "string"}},
        "recommendations": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "keyword": {"type": "string"},
                    "description": {"type": "string"},
                },
                "required": ["keyword", "description"],
            },
        },
    },
    "required": ["sentiment", "audienceReaction", "topKeywords", "recommendations"],
}

ANALYSIS_PROMPT = """아래 유튜브 영상의 제목과 댓글을 읽고 시청자 반응을 요약한 뒤, 새로운 콘텐츠 아이디어를 제안해 주세요.

영상 제목: {title}

댓글:
{comments}

**댓글이 어떤 언어로 작성되었든 모든 응답은 반드시 한국어로 작성해 주세요.**

{tool} 도구를 사용해 다음 필드로 응답해 주세요:
- sentiment: 시청자 전반의 분위기를 한 문장으로 요약
- audienceReaction: 시청자들이 이 영상을 왜 좋아하거나 싫어했는지에 대한 구체적인 분석
- topKeywords: 댓글에서 가장 많이 언급된 핵심 키워드/주제 5개
- recommendations: 다음 영상으로 제작을 추천하는 구체적인 주제 5개. 각 항목에는 'keyword'(키워드)와 'description'(추천 이유)이 모두 있어야 합니다."""

OUTLINE_PROMPT = """다음 주제로 전문적인 유튜브 영상 대본 목차를 한국어로 작성해 주세요.

주제: {keyword}
시청자 반응 참고: {context}

**반드시 한국어로 작성해 주세요.**

다음 네 부분을 포함해 주세요:
1. 인트로/훅 (첫 5초 안에 시청자를 붙잡는 멘트)
2. 도입부 (영상 소개)
3. 본문 (핵심 포인트 3~5개)
4. 결론 및 행동 유도 (구독, 좋아요 등)

마크다운(Markdown) 형식으로, 임팩트 있고 간결하게 작성해 주세요."""


def build_anthropic_client(api_key: str):
    if not api_key:
        raise MissingCredentialError("ANTHROPIC_API_KEY")
    return anthropic.Anthropic(api_key=api_key)


def build_analysis_prompt(title: str, comments: Sequence[str]) -> str:
    """Embed the title and the first PROMPT_COMMENT_LIMIT comments"""
    return ANALYSIS_PROMPT.format(
        title=title,
        comments="\n".join(list(comments)[:PROMPT_COMMENT_LIMIT]),
        tool=ANALYSIS_TOOL_NAME,
    )


def build_outline_prompt(keyword: str, context: str) -> str:
    return OUTLINE_PROMPT.format(keyword=keyword, context=context)


def _strip_code_fence(content: str) -> str:
    # The model sometimes wraps JSON in a markdown fence
    if "```json" in content:
        start = content.find("```json") + 7
        end = content.find("```", start)
        return content[start:end if end != -1 else None].strip()
    if content.strip().startswith("```"):
        inner = content.strip()[3:]
        end = inner.find("```")
        return inner[:end if end != -1 else None].strip()
    return content.strip()


def _text_of(response) -> str:
    return "".join(
        getattr(block, "text", "") or ""
        for block in getattr(response, "content", None) or []
        if getattr(block, "type", None) == "text"
    )


def _structured_payload(response) -> Any:
    """Tool input when the model used the tool, otherwise its text parsed as JSON"""
    for block in getattr(response, "content", None) or []:
        if getattr(block, "type", None) == "tool_use":
            return block.input
    content = _text_of(response)
    if not content.strip():
        raise MalformedResponseError("LLM returned an empty analysis")
    try:
        return json.loads(_strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"LLM analysis is not valid JSON: {e}") from e


def _string_field(payload: Dict[str, Any], name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str):
        raise MalformedResponseError(f"LLM analysis is missing string field '{name}'")
    return value


def _list_field(payload: Dict[str, Any], name: str) -> List[Any]:
    value = payload.get(name)
    if not isinstance(value, list):
        raise MalformedResponseError(f"LLM analysis is missing list field '{name}'")
    return value


def parse_analysis(payload: Any) -> AnalysisResult:
    """Validate a decoded analysis payload; nothing partial is ever returned"""
    if not isinstance(payload, dict):
        raise MalformedResponseError("LLM analysis must be a JSON object")

    keywords = _list_field(payload, "topKeywords")
    if not all(isinstance(k, str) for k in keywords):
        raise MalformedResponseError("topKeywords must contain only strings")

    recommendations = []
    for item in _list_field(payload, "recommendations"):
        if not isinstance(item, dict):
            raise MalformedResponseError("recommendations must contain objects")
        recommendations.append(Recommendation(
            keyword=_string_field(item, "keyword"),
            description=_string_field(item, "description"),
        ))

    return AnalysisResult(
        sentiment=_string_field(payload, "sentiment"),
        audience_reaction=_string_field(payload, "audienceReaction"),
        top_keywords=tuple(keywords),
        recommendations=tuple(recommendations),
    )


class _AnthropicGenerator:
    def __init__(self, api_key: str = "", model: str = DEFAULT_MODEL, client: Any = None):
        self._api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = build_anthropic_client(self._api_key)
        return self._client

    def _create(self, **kwargs):
        try:
            return self.client.messages.create(model=self.model, **kwargs)
        except anthropic.APIError as e:
            status = getattr(e, "status_code", None)
            logger.warning("Anthropic API error (%s): %s", status, e.message)
            raise RemoteAPIError(e.message, status=status) from e


class InsightGenerator(_AnthropicGenerator):
    """Sentiment, audience reaction, keywords and recommendations from comments"""

    def analyze(self, title: str, comments: Sequence[str]) -> AnalysisResult:
        prompt = build_analysis_prompt(title, comments)
        response = self._create(
            max_tokens=ANALYSIS_MAX_TOKENS,
            temperature=TEMPERATURE,
            tools=[{
                "name": ANALYSIS_TOOL_NAME,
                "description": "Record the structured audience analysis of a YouTube video.",
                "input_schema": ANALYSIS_SCHEMA,
            }],
            tool_choice={"type": "tool", "name": ANALYSIS_TOOL_NAME},
            messages=[{"role": "user", "content": prompt}],
        )
        result = parse_analysis(_structured_payload(response))
        logger.info(
            "Analysis for %r: %d keywords, %d recommendations",
            title, len(result.top_keywords), len(result.recommendations),
        )
        return result


class ScriptGenerator(_AnthropicGenerator):
    """Free-text markdown script outline for one recommended topic"""

    def generate_outline(self, keyword: str, audience_context: Optional[str] = "") -> str:
        response = self._create(
            max_tokens=OUTLINE_MAX_TOKENS,
            temperature=TEMPERATURE,
            messages=[{"role": "user", "content": build_outline_prompt(keyword, audience_context or "")}],
        )
        text = _text_of(response)
        if not text.strip():
            logger.warning("Empty outline returned for %r", keyword)
            return OUTLINE_FALLBACK
        return text
