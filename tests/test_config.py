import json

import pytest

from bookrender.config import (
    ConfigError,
    RenderConfig,
    build_link_context,
    language_fallback_path,
    load_config,
    parse_config,
)


def _write_config(tmp_path, data):
    path = tmp_path / "render.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return str(path)


def test_load_config(tmp_path):
    path = _write_config(tmp_path, {"curly-quotes": True, "src": "src/fr", "fallback": "../en", "theme": "x"})
    config = load_config(path)
    assert config == RenderConfig(curly_quotes=True, src_dir="src/fr", fallback_path="../en")


def test_missing_keys_use_defaults():
    assert parse_config({}) == RenderConfig()
    assert parse_config({"src": None}) == RenderConfig()


def test_invalid_json_is_a_config_error(tmp_path):
    path = _write_config(tmp_path, "{not json")
    with pytest.raises(ConfigError) as excinfo:
        load_config(path)
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


@pytest.mark.parametrize("data", [
    {"curly-quotes": "yes"},
    {"src": 3},
    {"fallback": ["en"]},
    ["not", "an", "object"],
])
def test_wrong_types_are_rejected(data):
    with pytest.raises(ConfigError):
        parse_config(data)


def test_build_link_context():
    config = RenderConfig(src_dir="src", fallback_path="en")
    context = build_link_context(config, "guide/intro.md")
    assert context.path == "guide/intro.md"
    assert context.src_dir == "src"
    assert context.fallback_path == "en"
    assert build_link_context(config).path is None


def test_language_fallback_path():
    assert language_fallback_path("src/fr", "en") == "../en"
    assert language_fallback_path("src/fr/", "en") == "../en"
    assert language_fallback_path("fr", "en") == "../en"
