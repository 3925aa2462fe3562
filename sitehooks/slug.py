"""Turn arbitrary labels, titles and file names into URL slugs.

Every mode produces a lowercase, hyphen-delimited token with no leading or
trailing hyphen and no repeated hyphens.  The modes only differ in which
characters survive:

``raw``
    Only whitespace is replaced.
``default``
    Unicode letters, combining marks and decimal digits are kept, so
    ``"Český Krumlov"`` becomes ``"český-krumlov"``.
``pretty``
    Like ``default`` but the URL-safe punctuation ``._~!$&'()+,;=@`` is kept.
``ascii``
    Only ``A-Z``, ``a-z`` and ``0-9`` are kept; anything else is a separator.
``latin``
    Accented and non-Latin characters are transliterated to ASCII first
    (``"Český Krumlov"`` becomes ``"cesky-krumlov"``).
"""

from __future__ import annotations

import enum
import re
import unicodedata
from typing import Callable

from slugify import slugify as _transliterate

__all__ = ["SlugMode", "slugify"]

PRETTY_EXTRA_CHARS = frozenset("._~!$&'()+,;=@")

_HYPHEN_RUN_RE = re.compile(r"-{2,}")


class SlugMode(str, enum.Enum):
    RAW = "raw"
    DEFAULT = "default"
    PRETTY = "pretty"
    ASCII = "ascii"
    LATIN = "latin"

    @classmethod
    def parse(cls, value: "SlugMode | str | None") -> "SlugMode":
        """Return the mode named by ``value``; ``None`` means ``default``."""

        if value is None:
            return cls.DEFAULT
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if not text:
            return cls.DEFAULT
        try:
            return cls(text)
        except ValueError:
            known = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown slug mode {value!r}; expected one of: {known}") from None


def _is_word_char(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category[0] in ("L", "M") or category == "Nd"


def _is_pretty_char(ch: str) -> bool:
    return ch in PRETTY_EXTRA_CHARS or _is_word_char(ch)


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _is_not_space(ch: str) -> bool:
    return not ch.isspace()


_KEEP: dict[SlugMode, Callable[[str], bool]] = {
    SlugMode.RAW: _is_not_space,
    SlugMode.DEFAULT: _is_word_char,
    SlugMode.PRETTY: _is_pretty_char,
    SlugMode.ASCII: _is_ascii_alnum,
    SlugMode.LATIN: _is_ascii_alnum,
}


def _replace_runs(text: str, keep: Callable[[str], bool]) -> str:
    """Replace every run of characters rejected by ``keep`` with one hyphen."""

    parts: list[str] = []
    pending = False
    for ch in text:
        if keep(ch):
            if pending and parts:
                parts.append("-")
            pending = False
            parts.append(ch)
        else:
            pending = True
    return "".join(parts)


def slugify(text: object, mode: SlugMode | str | None = SlugMode.DEFAULT) -> str:
    """Return the slug for ``text`` under ``mode``.

    ``None``, blank strings and strings without a single valid character all
    map to ``""``.  Non-string values are converted with ``str`` first so
    that numeric category labels such as ``2024`` slugify naturally.
    """

    slug_mode = SlugMode.parse(mode)
    if text is None:
        return ""
    value = str(text).strip()
    if not value:
        return ""

    if slug_mode is SlugMode.LATIN:
        value = _transliterate(value, lowercase=True)

    slug = _replace_runs(value, _KEEP[slug_mode])
    slug = _HYPHEN_RUN_RE.sub("-", slug).strip("-")
    return slug.lower()
