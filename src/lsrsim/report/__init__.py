"""Text and JSON renderers for router tables."""

from lsrsim.report.text import format_router_report, render, render_json, render_text

__all__ = ["format_router_report", "render", "render_json", "render_text"]
