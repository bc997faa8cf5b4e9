# tests/__init__.py
"""
Test suite for IdeaMiner.

This package contains tests for:
- The YouTube gateway and efficiency ranking
- LLM comment analysis and script outlines
- The pipeline, the Flask API and the MCP tools
"""
