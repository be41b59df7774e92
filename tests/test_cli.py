# File: tests/test_cli.py
"""Tests for the CLI (`site_preview.cli`) using click.testing.CliRunner.
Cover the `preview` and `config` commands, `--version` and error handling.
"""
import asyncio
import json

import pytest
import site_preview.cli as cli_module
from click.testing import CliRunner
from site_preview.cli import cli
from site_preview.fetcher.models import ImageHandle, PagePreview

from conftest import png_bytes


@pytest.fixture(autouse=True)
def patch_preview_urls(monkeypatch):
    """Replace preview_urls so no network access happens."""
    calls = []

    async def fake_preview(cfg, urls):
        calls.append((cfg, list(urls)))
        icon = ImageHandle(
            url="https://acme.test/favicon.ico",
            data=png_bytes((16, 16)),
            content_type="image/png",
            format="PNG",
            size=(16, 16),
            mode="RGB",
        )
        return [PagePreview(url=u, title="Acme", favicon=icon) for u in urls]

    monkeypatch.setattr(cli_module, "preview_urls", fake_preview)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "site_preview" in result.output


def test_show_default_config():
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["timeout"] == 10.0
    assert data["favicon_path"] == "/favicon.ico"


def test_show_config_from_file(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout: 2.5\ncache_ttl: 30\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["timeout"] == 2.5
    assert data["cache_ttl"] == 30


def test_invalid_config_exits(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout: -3\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_preview_stdout(patch_preview_urls):
    runner = CliRunner()
    result = runner.invoke(cli, ["preview", "https://acme.test/", "https://other.test/"])
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert [o["url"] for o in output] == ["https://acme.test/", "https://other.test/"]
    assert output[0]["title"] == "Acme"
    assert output[0]["image"] is None
    assert output[0]["favicon"]["width"] == 16
    assert patch_preview_urls[0][1] == ["https://acme.test/", "https://other.test/"]


def test_preview_requires_urls():
    runner = CliRunner()
    result = runner.invoke(cli, ["preview"])
    assert result.exit_code != 0


def test_preview_json_file(tmp_path):
    out = tmp_path / "reports" / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["preview", "https://acme.test/", "--json", str(out), "--pretty"])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["url"] == "https://acme.test/"
    assert data[0]["favicon"]["format"] == "PNG"
    assert "JSON report" in result.output


def test_preview_timeout(monkeypatch):
    async def slow(cfg, urls):
        await asyncio.sleep(2)
        return []

    monkeypatch.setattr(cli_module, "preview_urls", slow)

    runner = CliRunner()
    result = runner.invoke(cli, ["preview", "https://acme.test/", "--timeout", "0.2"])
    assert result.exit_code != 0
    assert "did not finish" in result.output
