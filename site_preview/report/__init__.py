# File: site_preview/report/__init__.py
"""site_preview.report: report writers used by the CLI and tests."""

from site_preview.report.json_report import previews_to_data, render_json

__all__ = ["previews_to_data", "render_json"]
