"""In-memory documents, pages and the site container the hooks mutate."""

from __future__ import annotations

import dataclasses
import posixpath
from typing import Any, Iterator, Mapping

from .config import SiteConfig

__all__ = ["Document", "IndexPage", "Page", "Site"]


def _coerce_string(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


@dataclasses.dataclass(slots=True)
class Document:
    """A collection item (usually a post) and its front matter.

    ``data`` holds the parsed front matter and is where every hook writes its
    computed fields.  ``fallback_date`` is the timestamp the host derives for
    the file (for example from a ``YYYY-MM-DD-`` file name prefix) and is
    used whenever the front matter has no usable ``date``.
    """

    path: str
    data: dict[str, Any] = dataclasses.field(default_factory=dict)
    collection: str = "posts"
    content: str = ""
    fallback_date: Any = None

    @classmethod
    def from_front_matter(
        cls,
        path: str,
        front_matter: Mapping[str, Any] | None,
        *,
        collection: str = "posts",
        content: str = "",
        fallback_date: Any = None,
    ) -> "Document":
        return cls(
            path=str(path),
            data=dict(front_matter or {}),
            collection=collection,
            content=content,
            fallback_date=fallback_date,
        )

    @property
    def title(self) -> str:
        return _coerce_string(self.data.get("title"))

    @property
    def categories(self) -> list[str]:
        """Category labels, top first; a bare string counts as one label."""

        raw = self.data.get("categories")
        if raw is None:
            return []
        if isinstance(raw, (str, int, float)) and not isinstance(raw, bool):
            text = str(raw).strip()
            return [text] if text else []
        if not isinstance(raw, (list, tuple)):
            return []
        return ["" if item is None else str(item) for item in raw]

    @property
    def slug(self) -> str:
        return _coerce_string(self.data.get("slug"))

    @property
    def layout(self) -> str:
        return _coerce_string(self.data.get("layout"))

    @property
    def date(self) -> Any:
        return self.data.get("date")

    @property
    def permalink(self) -> str:
        return _coerce_string(self.data.get("permalink"))

    @property
    def basename_without_ext(self) -> str:
        base = posixpath.basename(self.path.replace("\\", "/"))
        stem, _ = posixpath.splitext(base)
        return stem


@dataclasses.dataclass(slots=True)
class Page:
    """A standalone page outside any collection (tabs, listings, take-overs)."""

    path: str
    data: dict[str, Any] = dataclasses.field(default_factory=dict)
    content: str = ""

    @property
    def title(self) -> str:
        return _coerce_string(self.data.get("title"))

    @property
    def layout(self) -> str:
        return _coerce_string(self.data.get("layout"))

    @property
    def permalink(self) -> str:
        return _coerce_string(self.data.get("permalink"))


@dataclasses.dataclass(frozen=True, slots=True)
class IndexPage:
    """A synthetic listing for one ``(top, level1, level2)`` category node."""

    top: str
    level1: str | None
    level2: str | None
    title: str
    dir: str
    posts: tuple[Document, ...] = ()
    layout: str = "list"

    @property
    def key(self) -> tuple[str, str | None, str | None]:
        return (self.top, self.level1, self.level2)

    def to_dict(self) -> dict[str, Any]:
        """Return the page variables handed to the list layout."""

        return {
            "layout": self.layout,
            "top": self.top,
            "level1": self.level1,
            "level2": self.level2,
            "title": self.title,
            "permalink": self.dir,
            "posts": list(self.posts),
        }


@dataclasses.dataclass(slots=True)
class Site:
    """Everything a build run works on: config, documents and pages."""

    config: SiteConfig = dataclasses.field(default_factory=SiteConfig)
    documents: list[Document] = dataclasses.field(default_factory=list)
    pages: list[Page] = dataclasses.field(default_factory=list)
    index_pages: list[IndexPage] = dataclasses.field(default_factory=list)
    history: Any = None

    @property
    def posts(self) -> list[Document]:
        return self.collection("posts")

    def collection(self, label: str) -> list[Document]:
        return [doc for doc in self.documents if doc.collection == label]

    def iter_collections(self) -> Iterator[tuple[str, list[Document]]]:
        """Yield ``(label, documents)`` pairs in first-seen label order."""

        grouped: dict[str, list[Document]] = {}
        for doc in self.documents:
            grouped.setdefault(doc.collection, []).append(doc)
        yield from grouped.items()
