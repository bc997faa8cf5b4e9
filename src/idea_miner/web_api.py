#!/usr/bin/env python3
"""
HTTP API for the IdeaMiner dashboard.

The browser front end talks to these JSON endpoints; this layer is where
errors from the core are caught and turned into user-facing messages.
"""

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from .config import DEFAULT_MIN_EFFICIENCY, Settings
from .credentials import CredentialStore
from .errors import MalformedResponseError, MissingCredentialError, RemoteAPIError
from .models import SearchCriteria, records_to_dicts
from .pipeline import IdeaMiner

logger = logging.getLogger(__name__)

ENDPOINTS = [
    {"path": "/health", "method": "GET", "description": "Health check"},
    {
        "path": "/search",
        "method": "POST",
        "description": "Search videos by keyword and rank them by views per subscriber",
        "parameters": ["keyword", "duration", "min_efficiency"],
    },
    {
        "path": "/analyze",
        "method": "POST",
        "description": "Summarize audience reaction from a video's top comments",
        "parameters": ["video_id", "title"],
    },
    {
        "path": "/script_outline",
        "method": "POST",
        "description": "Generate a script outline for a recommended topic",
        "parameters": ["keyword", "audience_context"],
    },
    {"path": "/settings", "method": "GET", "description": "Which API keys are configured"},
    {
        "path": "/settings",
        "method": "POST",
        "description": "Save the YouTube API key",
        "parameters": ["youtube_api_key"],
    },
    {"path": "/endpoints", "method": "GET", "description": "List all available endpoints"},
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _ok(result: Any):
    return jsonify({"success": True, "result": result, "timestamp": _now()})


def _fail(error: Exception, status: int, **extra):
    body: Dict[str, Any] = {"success": False, "error": str(error), "timestamp": _now()}
    body.update(extra)
    return jsonify(body), status


def _error_response(error: Exception):
    """Map the core error taxonomy onto HTTP statuses"""
    if isinstance(error, MissingCredentialError):
        return _fail(error, 401)
    if isinstance(error, RemoteAPIError):
        return _fail(error, 502, reasons=list(error.reasons))
    if isinstance(error, MalformedResponseError):
        return _fail(error, 502)
    if isinstance(error, ValueError):
        return _fail(error, 400)
    logger.exception("Unhandled error")
    return _fail(error, 500)


def _missing(data: Dict[str, Any], *names: str) -> Optional[str]:
    for name in names:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            return name
    return None


def create_app(
    miner: Optional[IdeaMiner] = None,
    store: Optional[CredentialStore] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    settings = settings or Settings.from_env()
    store = store or CredentialStore(settings.env_file)

    stored_key = store.load()
    if stored_key and not settings.youtube_api_key:
        settings.youtube_api_key = stored_key

    app = Flask(__name__)
    CORS(app)
    app.extensions["idea_miner"] = miner or IdeaMiner.from_settings(settings)
    app.extensions["idea_miner.settings"] = settings

    def current_miner() -> IdeaMiner:
        return app.extensions["idea_miner"]

    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({
            "status": "healthy",
            "service": "IdeaMiner API",
            "timestamp": _now(),
        })

    @app.route("/search", methods=["POST"])
    def search_endpoint():
        data = request.get_json(silent=True) or {}
        if _missing(data, "keyword"):
            return _fail(ValueError("Missing required parameter: keyword"), 400)
        try:
            criteria = SearchCriteria(
                keyword=data["keyword"],
                duration=data.get("duration", "any"),
                min_efficiency=data.get("min_efficiency", DEFAULT_MIN_EFFICIENCY),
            )
            results = current_miner().search_videos(criteria)
            return _ok({
                "keyword": criteria.keyword,
                "duration": criteria.duration,
                "min_efficiency": criteria.min_efficiency,
                "videos": records_to_dicts(results),
            })
        except Exception as e:
            return _error_response(e)

    @app.route("/analyze", methods=["POST"])
    def analyze_endpoint():
        data = request.get_json(silent=True) or {}
        missing = _missing(data, "video_id", "title")
        if missing:
            return _fail(ValueError(f"Missing required parameter: {missing}"), 400)
        try:
            analysis = current_miner().analyze_video(data["video_id"], data["title"])
            return _ok(analysis.to_dict())
        except Exception as e:
            return _error_response(e)

    @app.route("/script_outline", methods=["POST"])
    def script_outline_endpoint():
        data = request.get_json(silent=True) or {}
        if _missing(data, "keyword"):
            return _fail(ValueError("Missing required parameter: keyword"), 400)
        try:
            outline = current_miner().generate_outline(
                data["keyword"], data.get("audience_context") or ""
            )
            return _ok(outline.to_dict())
        except Exception as e:
            return _error_response(e)

    @app.route("/settings", methods=["GET"])
    def get_settings_endpoint():
        return _ok({
            "has_youtube_key": settings.has_youtube_key,
            "has_llm_key": settings.has_llm_key,
        })

    @app.route("/settings", methods=["POST"])
    def save_settings_endpoint():
        data = request.get_json(silent=True) or {}
        try:
            settings.youtube_api_key = store.save(data.get("youtube_api_key", ""))
            app.extensions["idea_miner"] = IdeaMiner.from_settings(settings)
            return _ok({"has_youtube_key": True, "has_llm_key": settings.has_llm_key})
        except Exception as e:
            return _error_response(e)

    @app.route("/endpoints", methods=["GET"])
    def list_endpoints():
        return jsonify({
            "service": "IdeaMiner API",
            "version": "0.1.0",
            "endpoints": ENDPOINTS,
            "timestamp": _now(),
        })

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    app = create_app(settings=settings)

    port = int(os.environ.get("PORT", settings.port))
    debug = os.environ.get("FLASK_DEBUG", "").lower() in ("1", "true", "yes")
    if not os.environ.get("GAE_ENV", "").startswith("standard"):
        print("🚀 Starting IdeaMiner API...", file=sys.stderr)
        print(f"🔗 Available at: http://localhost:{port}", file=sys.stderr)
        print(f"📋 Endpoints: http://localhost:{port}/endpoints", file=sys.stderr)
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
