"""Parse and render configuration for podrender.

Parse configuration is held in a ContextVar: it is set once around a parse
call and read by the parser (and any sub-parser for nested delimited blocks)
without being threaded through every constructor. Render configuration is
plain data passed to the renderer.

Usage:
    from podrender.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(strict=True)):
        blocks = Parser(source).parse()

    # Both configs can be loaded from one TOML file
    parse_config, render_config = load_config("podrender.toml")

"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from podrender.errors import ConfigError
from podrender.utils.logger import get_logger

logger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Target format of a render."""

    TEXT = "text"
    HTML = "html"
    POD = "pod"


def _require(name: str, value: Any, kind: type) -> None:
    if not isinstance(value, kind):
        raise ConfigError(f"{name} must be {kind.__name__}, got {value!r}")


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        strict: Raise ParseError for unknown directives instead of passing
            them through as paragraph text
        default_language: Language hint for code samples that declare none
            (indented blocks, ``=begin code`` without ``:lang``)

    """

    strict: bool = False
    default_language: str = ""

    def __post_init__(self) -> None:
        _require("strict", self.strict, bool)
        _require("default_language", self.default_language, str)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParseConfig:
        """Create ParseConfig from a mapping; unknown keys are ignored.

        Example:
            >>> ParseConfig.from_dict({"strict": True, "other": 1}).strict
            True
        """
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in valid_fields})


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        format: Output format
        references: Mapping from reference name to target location
        highlight: Syntax-highlight code samples in HTML output
        standalone: Wrap HTML output in a complete page
        text_width: Wrap plain-text paragraphs at this width (None = no wrap)
        title: Page title for standalone HTML (defaults to first heading)

    """

    format: OutputFormat = OutputFormat.TEXT
    references: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    highlight: bool = False
    standalone: bool = False
    text_width: int | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.format, OutputFormat):
            try:
                object.__setattr__(self, "format", OutputFormat(self.format))
            except ValueError:
                choices = ", ".join(f.value for f in OutputFormat)
                raise ConfigError(
                    f"unknown output format {self.format!r} (expected one of {choices})"
                ) from None
        if not isinstance(self.references, MappingProxyType):
            object.__setattr__(self, "references", MappingProxyType(dict(self.references)))
        _require("highlight", self.highlight, bool)
        _require("standalone", self.standalone, bool)
        if self.title is not None:
            _require("title", self.title, str)
        if self.text_width is not None:
            if isinstance(self.text_width, bool) or not isinstance(self.text_width, int):
                raise ConfigError(f"text_width must be int, got {self.text_width!r}")
            if self.text_width < 1:
                raise ConfigError(f"text_width must be positive, got {self.text_width}")

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> RenderConfig:
        """Create RenderConfig from a mapping; unknown keys are ignored."""
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in valid_fields})

    def with_references(self, references: Mapping[str, str]) -> RenderConfig:
        """Return a copy with ``references`` merged over the current mapping."""
        merged = dict(self.references)
        merged.update(references)
        return replace(self, references=merged)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the parse configuration active in the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(strict=True)):
        ...     get_parse_config().strict
        True
        >>> get_parse_config().strict
        False

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


# =============================================================================
# File loading
# =============================================================================


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML: {e}", path=str(path)) from e


def _table(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    table = data.get(key, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[{key}] must be a table", path=str(path))
    return table


def _check_references(raw: Any, path: Path) -> dict[str, str]:
    if not isinstance(raw, dict):
        raise ConfigError("references must be a table of name = location", path=str(path))
    bad = [k for k, v in raw.items() if not isinstance(v, str)]
    if bad:
        raise ConfigError(f"reference locations must be strings: {', '.join(bad)}", path=str(path))
    return raw


def load_references(path: str | Path) -> dict[str, str]:
    """Load a reference mapping from a JSON object or a TOML file.

    TOML files may hold the mapping at top level or under ``[references]``.

    Raises:
        OSError: If the file cannot be read
        ConfigError: If the file is not a flat name→location mapping
    """
    path = Path(path)
    if path.suffix == ".toml":
        data = _read_toml(path)
        raw = data.get("references", data)
    else:
        with path.open(encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"invalid JSON: {e}", path=str(path)) from e
    references = _check_references(raw, path)
    logger.debug("Loaded %d references from %s", len(references), path)
    return references


def load_config(path: str | Path) -> tuple[ParseConfig, RenderConfig]:
    """Load parse and render configuration from a TOML file.

    Recognized tables: ``[parse]``, ``[render]`` and ``[references]``.

    Example file::

        [parse]
        default_language = "raku"

        [render]
        format = "html"
        standalone = true

        [references]
        "IO::Path" = "/type/IO::Path"

    Raises:
        OSError: If the file cannot be read
        ConfigError: If the file is not valid TOML or holds invalid values
    """
    path = Path(path)
    data = _read_toml(path)
    parse_table = _table(data, "parse", path)
    render_table = dict(_table(data, "render", path))
    if "references" in render_table:
        _check_references(render_table["references"], path)
    if "references" in data:
        render_table["references"] = _check_references(data["references"], path)
    try:
        parse_config = ParseConfig.from_dict(parse_table)
        render_config = RenderConfig.from_dict(render_table)
    except ConfigError as e:
        raise ConfigError(str(e), path=str(path)) from e
    return parse_config, render_config


__all__ = [
    "OutputFormat",
    "ParseConfig",
    "RenderConfig",
    "get_parse_config",
    "load_config",
    "load_references",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
