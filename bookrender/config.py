"""Load renderer settings from a JSON file."""

import json
import os
from dataclasses import dataclass
from typing import Optional

from .links import LinkContext
from .utils import path_to_root


class ConfigError(ValueError):
    """Raised when a renderer configuration file can't be used."""


@dataclass
class RenderConfig:
    """Settings shared by every page of a render."""
    curly_quotes: bool = False
    src_dir: Optional[str] = None
    fallback_path: Optional[str] = None  # relative to src_dir


# JSON key -> (attribute, expected type)
CONFIG_KEYS = {
    'curly-quotes': ('curly_quotes', bool),
    'src': ('src_dir', str),
    'fallback': ('fallback_path', str),
}


def parse_config(data: dict) -> RenderConfig:
    """Build a RenderConfig from decoded JSON. Unknown keys are ignored."""
    if not isinstance(data, dict):
        raise ConfigError(f'Expected a JSON object, got {type(data).__name__}')

    config = RenderConfig()
    for key, (attr, expected) in CONFIG_KEYS.items():
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if not isinstance(value, expected):
            raise ConfigError(
                f'"{key}" must be a {expected.__name__}, got {type(value).__name__}'
            )
        setattr(config, attr, value)
    return config


def load_config(path: str) -> RenderConfig:
    """Read renderer settings from a JSON file."""
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f'Invalid config file {path}') from e
    return parse_config(data)


def build_link_context(config: RenderConfig, page_path: Optional[str] = None) -> LinkContext:
    """Build the link context for one page (or the print page when ``page_path`` is None)."""
    return LinkContext(
        path=page_path,
        src_dir=config.src_dir,
        fallback_path=config.fallback_path,
    )


def language_fallback_path(src_dir: str, language: str) -> str:
    """Return the fallback path from a translation's source directory to ``language``.

    Translations sit side by side, one directory per language, so the
    ``src/fr`` translation falls back to ``../en``.
    """
    name = os.path.basename(os.path.normpath(os.fspath(src_dir)))
    return path_to_root(f'{name}/') + language
