# site_preview/report/json_report.py

"""
JSON report for site_preview results.

Serializes a list of PagePreview objects to a file.
"""
import json
from pathlib import Path
from typing import Iterable, List

from site_preview.fetcher.models import PagePreview


def previews_to_data(previews: Iterable[PagePreview]) -> List[dict]:
    """Plain JSON-ready dicts; images are summarized, raw bytes are left out."""
    return [p.as_dict() for p in previews]


def render_json(previews: Iterable[PagePreview], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *previews* as JSON at *output_path*.

    :param previews: resolved PagePreview objects
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from site_preview.report.json_report import render_json
    report_path = render_json(previews, 'reports/previews.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(previews_to_data(previews), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
