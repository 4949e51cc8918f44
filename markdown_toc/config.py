"""Option resolution for TOC builds, plus loading from .markdown-toc.yml."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Tuple

import yaml

from .logging import get_logger
from .models import HeadingRecord
from .slugify import default_slug

logger = get_logger("config")

CONFIG_FILENAME = ".markdown-toc.yml"
DEFAULT_BULLETS: Tuple[str, ...] = ("-", "*", "+")
DEFAULT_MAXDEPTH = 6
DEFAULT_OPEN = "<!-- toc -->"
DEFAULT_CLOSE = "<!-- tocstop -->"

# Keys that may come from a YAML file; callables only make sense in code.
_FILE_KEYS = {
    "maxdepth",
    "firsth1",
    "bullets",
    "indent",
    "linkify",
    "strip",
    "strip_heading_tags",
    "append",
    "open",
    "close",
    "slugify",
}


class ConfigError(ValueError):
    """Raised when TOC options are malformed."""


class SlugFunction(Protocol):
    def __call__(self, text: str) -> str: ...


class TextStripper(Protocol):
    def __call__(self, text: str) -> str: ...


class EntryFilter(Protocol):
    def __call__(
        self, text: str, record: HeadingRecord, records: Sequence[HeadingRecord]
    ) -> bool: ...


class WordStripper:
    """Removes literal words from display text, then one edge hyphen per side."""

    def __init__(self, words: Sequence[str]) -> None:
        self.words = tuple(words)
        self._pattern = re.compile("|".join(re.escape(word) for word in self.words))

    def __call__(self, text: str) -> str:
        stripped = self._pattern.sub("", text.strip())
        if stripped.startswith("-"):
            stripped = stripped[1:]
        if stripped.endswith("-"):
            stripped = stripped[:-1]
        return stripped

    def __repr__(self) -> str:
        return f"WordStripper({list(self.words)!r})"


def _raw_slug(text: str) -> str:
    return text


@dataclass(frozen=True)
class TocOptions:
    """Resolved, immutable options for one TOC build or insertion."""

    slugify: SlugFunction = default_slug
    strip: Optional[TextStripper] = None
    filter: Optional[EntryFilter] = None
    maxdepth: int = DEFAULT_MAXDEPTH
    firsth1: bool = True
    bullets: Tuple[str, ...] = DEFAULT_BULLETS
    indent: str = "  "
    linkify: bool = True
    strip_heading_tags: bool = True
    append: Optional[str] = None
    toc: Optional[str] = None
    open: str = DEFAULT_OPEN
    close: str = DEFAULT_CLOSE


_OPTION_NAMES = {item.name for item in fields(TocOptions)}


def resolve_options(
    options: Mapping[str, Any] | TocOptions | None = None, **overrides: Any
) -> TocOptions:
    """Normalise a flat option mapping into :class:`TocOptions`.

    Unknown keys are ignored and missing keys take their defaults. Misuse
    (a non-callable ``filter``, empty ``bullets`` and so on) raises
    :class:`ConfigError` here rather than producing a wrong TOC later.
    """
    if isinstance(options, TocOptions):
        if not overrides:
            return options
        merged: Dict[str, Any] = {
            item.name: getattr(options, item.name) for item in fields(TocOptions)
        }
    elif options is None:
        merged = {}
    elif isinstance(options, Mapping):
        merged = dict(options)
    else:
        raise ConfigError(
            f"options must be a mapping or TocOptions, got {type(options).__name__}"
        )
    merged.update(overrides)

    unknown = sorted(key for key in merged if key not in _OPTION_NAMES)
    if unknown:
        logger.debug("Ignoring unknown TOC options: %s", ", ".join(unknown))

    return TocOptions(
        slugify=_resolve_slugify(merged.get("slugify")),
        strip=_resolve_strip(merged.get("strip")),
        filter=_resolve_filter(merged.get("filter")),
        maxdepth=_resolve_maxdepth(merged.get("maxdepth")),
        firsth1=_resolve_bool("firsth1", merged.get("firsth1"), True),
        bullets=_resolve_bullets(merged.get("bullets")),
        indent=_resolve_indent(merged.get("indent")),
        linkify=_resolve_bool("linkify", merged.get("linkify"), True),
        strip_heading_tags=_resolve_bool(
            "strip_heading_tags", merged.get("strip_heading_tags"), True
        ),
        append=_resolve_str("append", merged.get("append")),
        toc=_resolve_str("toc", merged.get("toc")),
        open=_resolve_marker("open", merged.get("open"), DEFAULT_OPEN),
        close=_resolve_marker("close", merged.get("close"), DEFAULT_CLOSE),
    )


def load_options(config_path: Path, **overrides: Any) -> TocOptions:
    """Load TOC options from a YAML file; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        logger.debug("No %s found at %s; using defaults", CONFIG_FILENAME, config_file)
        return resolve_options(None, **overrides)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    ignored = sorted(str(key) for key in data if key not in _FILE_KEYS)
    if ignored:
        logger.debug("Ignoring keys in %s: %s", config_file.name, ", ".join(ignored))
    file_options = {key: value for key, value in data.items() if key in _FILE_KEYS}
    return resolve_options(file_options, **overrides)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _resolve_slugify(value: Any) -> SlugFunction:
    if value is None or value is True:
        return default_slug
    if value is False:
        return _raw_slug
    if callable(value):
        return value
    raise ConfigError(
        f"slugify must be False or a callable, got {type(value).__name__}"
    )


def _resolve_strip(value: Any) -> Optional[TextStripper]:
    if value is None or value is False:
        return None
    if callable(value):
        return value
    if isinstance(value, str):
        value = [value]
    if isinstance(value, Sequence) and all(isinstance(item, str) for item in value):
        words = [item for item in value if item]
        return WordStripper(words) if words else None
    raise ConfigError("strip must be a callable or a sequence of strings")


def _resolve_filter(value: Any) -> Optional[EntryFilter]:
    if value is None:
        return None
    if callable(value):
        return value
    raise ConfigError(f"filter must be a callable, got {type(value).__name__}")


def _resolve_maxdepth(value: Any) -> int:
    if value is None:
        return DEFAULT_MAXDEPTH
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"maxdepth must be a positive integer, got {value!r}")
    return value


def _resolve_bullets(value: Any) -> Tuple[str, ...]:
    if value is None:
        return DEFAULT_BULLETS
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Sequence) or not value:
        raise ConfigError("bullets must be a non-empty sequence of strings")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError("bullets must only contain strings")
    return tuple(value)


def _resolve_bool(name: str, value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def _resolve_str(name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise ConfigError(f"{name} must be a string, got {type(value).__name__}")


def _resolve_indent(value: Any) -> str:
    indent = _resolve_str("indent", value)
    return "  " if indent is None else indent


def _resolve_marker(name: str, value: Any, default: str) -> str:
    marker = _resolve_str(name, value)
    if marker is None:
        return default
    if not marker.strip():
        raise ConfigError(f"{name} marker must not be empty")
    return marker


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "EntryFilter",
    "SlugFunction",
    "TextStripper",
    "TocOptions",
    "WordStripper",
    "load_options",
    "resolve_options",
]
