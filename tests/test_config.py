# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_preview.config import PreviewConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("timeout: 3.5\ncache_max_entries: 10", ".yaml", None),
        (json.dumps({"timeout": 3.5, "cache_max_entries": 10}), ".json", None),
        ("", ".yml", None),
        ("timeout: -1", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("favicon_path: favicon.ico", ".yaml", ValidationError),
        ("- a\n- b", ".yaml", TypeError),
        ("key: [unclosed", ".yaml", ValueError),
        ("{not json", ".json", ValueError),
        ("timeout = 1", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, PreviewConfig)
        if content:
            assert cfg.timeout == 3.5
            assert cfg.cache_max_entries == 10


def test_load_config_defaults_without_path():
    cfg = load_config(None)
    assert cfg == PreviewConfig()
    assert cfg.cache_ttl is None
    assert cfg.resolve_relative_urls is True
    assert cfg.favicon_path == "/favicon.ico"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_config_is_frozen():
    cfg = PreviewConfig()
    with pytest.raises(ValidationError):
        cfg.timeout = 1.0


def test_bundled_default_config_is_valid():
    path = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"
    cfg = load_config(path)
    assert cfg.cache_ttl == 900
