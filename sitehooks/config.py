"""Site configuration for the build hooks.

The configuration mirrors the ``_config.yml`` layout the hooks read::

    hierarchical_topics: [Notes, Projects]
    slugify:
      mode: default            # raw / default / pretty / ascii / latin
      slug_from_title: true
      slug_rules_debug: false
    post_tail_format:
      both: [Notes]
      post_nav_only: [Projects]
      related_only: []
      none: [Publications]
    showcase:
      enabled: true
      debug: false
      pagination:
        per_page: 12
        sort_reverse: true
        title: ":title"
    showcase_rank:
      enabled: true
      collections: [posts]
      pin_field: pin
      date_fields: [date]
      pin_weight: 10000000000000
      debug: false

Every key is optional.  Values that cannot be used log a warning and fall
back to the documented default; only an unreadable file is fatal.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
from typing import Any, Iterable, Mapping

import yaml

from .slug import SlugMode

__all__ = [
    "ConfigError",
    "DEFAULT_PER_PAGE",
    "DEFAULT_TITLE_TEMPLATE",
    "PIN_WEIGHT",
    "PaginationDefaults",
    "RankConfig",
    "ShowcaseConfig",
    "SiteConfig",
    "SlugConfig",
    "TailFormatConfig",
    "coerce_bool",
    "load_config",
]

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 12
DEFAULT_TITLE_TEMPLATE = ":title"
# 10^13 is far above any epoch-second value, so every pinned item outranks
# every unpinned one.
PIN_WEIGHT = 10_000_000_000_000

TRUE_STRINGS = frozenset({"1", "true", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"0", "false", "no", "n", "off"})


class ConfigError(ValueError):
    """Raised when the configuration file itself cannot be used."""


def coerce_bool(value: Any, default: bool = False) -> bool:
    """Interpret YAML/front-matter style flags (``"yes"``, ``"off"``, ``1``)."""

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    return bool(value)


def _coerce_int(value: Any, default: int, *, name: str, positive: bool = True) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        logger.warning("Invalid %s=%r; falling back to %s", name, value, default)
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        logger.warning("Invalid %s=%r; falling back to %s", name, value, default)
        return default
    if positive and parsed <= 0:
        logger.warning("Invalid %s=%r; falling back to %s", name, value, default)
        return default
    return parsed


def _string_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        value = [value]
    if not isinstance(value, Iterable):
        return ()
    cleaned: list[str] = []
    for entry in value:
        if entry is None:
            continue
        text = str(entry).strip()
        if text:
            cleaned.append(text)
    return tuple(cleaned)


def _mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    logger.warning("Ignoring %s: expected a mapping, got %s", name, type(value).__name__)
    return {}


@dataclasses.dataclass(frozen=True, slots=True)
class SlugConfig:
    mode: SlugMode = SlugMode.DEFAULT
    slug_from_title: bool = True
    debug: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "SlugConfig":
        try:
            mode = SlugMode.parse(raw.get("mode"))
        except ValueError as exc:
            logger.warning("%s; falling back to %s", exc, SlugMode.DEFAULT.value)
            mode = SlugMode.DEFAULT
        return cls(
            mode=mode,
            slug_from_title=coerce_bool(raw.get("slug_from_title"), True),
            debug=coerce_bool(raw.get("slug_rules_debug"), False),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class TailFormatConfig:
    """Top categories (lower-cased) grouped by which tail fragments they show."""

    both: tuple[str, ...] = ()
    nav_only: tuple[str, ...] = ()
    related_only: tuple[str, ...] = ()
    none: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "TailFormatConfig":
        def _norm(key: str) -> tuple[str, ...]:
            return tuple(label.lower() for label in _string_tuple(raw.get(key)))

        return cls(
            both=_norm("both"),
            nav_only=_norm("post_nav_only"),
            related_only=_norm("related_only"),
            none=_norm("none"),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class PaginationDefaults:
    per_page: int = DEFAULT_PER_PAGE
    sort_reverse: bool = True
    title_template: str = DEFAULT_TITLE_TEMPLATE

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "PaginationDefaults":
        title = str(raw.get("title") or "").strip()
        return cls(
            per_page=_coerce_int(raw.get("per_page"), DEFAULT_PER_PAGE, name="showcase.pagination.per_page"),
            sort_reverse=coerce_bool(raw.get("sort_reverse"), True),
            title_template=title or DEFAULT_TITLE_TEMPLATE,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ShowcaseConfig:
    enabled: bool = True
    debug: bool = False
    pagination: PaginationDefaults = dataclasses.field(default_factory=PaginationDefaults)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ShowcaseConfig":
        return cls(
            enabled=coerce_bool(raw.get("enabled"), True),
            debug=coerce_bool(raw.get("debug"), False),
            pagination=PaginationDefaults.from_mapping(
                _mapping(raw.get("pagination"), name="showcase.pagination")
            ),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class RankConfig:
    enabled: bool = True
    collections: tuple[str, ...] = ("posts",)
    pin_field: str = "pin"
    date_fields: tuple[str, ...] = ("date",)
    pin_weight: int = PIN_WEIGHT
    debug: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RankConfig":
        collections = _string_tuple(raw.get("collections")) if "collections" in raw else ("posts",)
        date_fields = _string_tuple(raw.get("date_fields")) if "date_fields" in raw else ("date",)
        pin_field = str(raw.get("pin_field") or "").strip() or "pin"
        return cls(
            enabled=coerce_bool(raw.get("enabled"), True),
            collections=collections,
            pin_field=pin_field,
            date_fields=date_fields,
            pin_weight=_coerce_int(raw.get("pin_weight"), PIN_WEIGHT, name="showcase_rank.pin_weight"),
            debug=coerce_bool(raw.get("debug"), False),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Immutable view of every setting the hooks consume."""

    topics: tuple[str, ...] = ()
    slugify: SlugConfig = dataclasses.field(default_factory=SlugConfig)
    tail_format: TailFormatConfig = dataclasses.field(default_factory=TailFormatConfig)
    showcase: ShowcaseConfig = dataclasses.field(default_factory=ShowcaseConfig)
    rank: RankConfig = dataclasses.field(default_factory=RankConfig)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "SiteConfig":
        raw = _mapping(raw, name="site config")
        return cls(
            topics=_string_tuple(raw.get("hierarchical_topics")),
            slugify=SlugConfig.from_mapping(_mapping(raw.get("slugify"), name="slugify")),
            tail_format=TailFormatConfig.from_mapping(
                _mapping(raw.get("post_tail_format"), name="post_tail_format")
            ),
            showcase=ShowcaseConfig.from_mapping(_mapping(raw.get("showcase"), name="showcase")),
            rank=RankConfig.from_mapping(_mapping(raw.get("showcase_rank"), name="showcase_rank")),
        )


def load_config(path: pathlib.Path | str) -> SiteConfig:
    """Read a YAML site config from ``path``."""

    config_path = pathlib.Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"{config_path}: cannot read config ({exc})") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{config_path}: invalid YAML ({exc})") from exc

    if data is None:
        return SiteConfig()
    if not isinstance(data, Mapping):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")
    return SiteConfig.from_mapping(data)
