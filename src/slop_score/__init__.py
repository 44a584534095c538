"""
slop_score package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import SlopScoreConfig, config_from_dict, config_from_yaml, load_config
from .context import AnalysisContext, build_context
from .pipeline import analyze_corpus, analyze_document, analyze_text

__all__ = [
    "SlopScoreConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "AnalysisContext",
    "build_context",
    "analyze_text",
    "analyze_document",
    "analyze_corpus",
]

__version__ = "0.1.0"
