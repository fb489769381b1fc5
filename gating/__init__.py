"""
gating — silnik bramkowania treści HTML dla GateKeep.

Publiczne API:
  gate(html, content_type, authenticated, config)  dokument wynikowy
  analyze(html, authenticated, config)             → GatingResult
  is_gating_required(html)                         bramka decyzyjna
  extract_markers(substrate)                       → ExtractedMarkers
  resolve(markers, authenticated, config)          → list[RewriteAction]
  apply_actions(html, actions, origin)             → str
  render_teaser(path, granularity, origin)         → str
  GatingConfig, load_config                        konfiguracja
  GatingError, ConfigError, OriginError            wyjątki
"""

from .config import GatingConfig, load_config
from .decision import is_gating_required
from .engine import GatingResult, analyze, build_substrate, gate, is_html_content_type
from .errors import ConfigError, GatingError, OriginError
from .extractor import extract_markers, looks_like_path, read_rows
from .resolver import drop_overlaps, resolve
from .rewriter import apply_actions
from .teaser import render_teaser

__all__ = [
    "GatingConfig",
    "load_config",
    "is_gating_required",
    "GatingResult",
    "analyze",
    "build_substrate",
    "gate",
    "is_html_content_type",
    "ConfigError",
    "GatingError",
    "OriginError",
    "extract_markers",
    "looks_like_path",
    "read_rows",
    "drop_overlaps",
    "resolve",
    "apply_actions",
    "render_teaser",
]
