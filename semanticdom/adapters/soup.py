"""BeautifulSoup-backed element adapter."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from bs4 import BeautifulSoup, Tag

from semanticdom.adapters.base import ElementAdapter
from semanticdom.builder.selectors import iter_paths
from semanticdom.core.types import Bounds

logger = logging.getLogger(__name__)

_PARSER = "html.parser"


class SoupElement(ElementAdapter):
    """Wraps one bs4 ``Tag``. Two wrappers are equal when they wrap the same tag."""

    __slots__ = ("_tag", "_document")

    def __init__(self, tag: Tag, document: SoupDocument) -> None:
        self._tag = tag
        self._document = document

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupElement) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"SoupElement(<{self._tag.name}>)"

    @property
    def tag(self) -> Tag:
        return self._tag

    @property
    def document(self) -> SoupDocument:
        return self._document

    @property
    def tag_name(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def attributes(self) -> dict[str, str]:
        # multi-valued attributes (class, rel, ...) come back as lists
        return {
            name: " ".join(value) if isinstance(value, list) else str(value)
            for name, value in self._tag.attrs.items()
        }

    def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def has_attribute(self, name: str) -> bool:
        return self._tag.has_attr(name)

    @property
    def children(self) -> list[SoupElement]:
        return [SoupElement(c, self._document) for c in self._tag.children if isinstance(c, Tag)]

    @property
    def parent(self) -> SoupElement | None:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SoupElement(parent, self._document)

    @property
    def text_content(self) -> str:
        return self._tag.get_text()

    def get_element_by_id(self, element_id: str) -> SoupElement | None:
        return self._document.get_element_by_id(element_id)

    def find_label_for(self, element_id: str) -> SoupElement | None:
        return self._document.find_label_for(element_id)

    def bounds(self) -> Bounds | None:
        return self._document.bounds_of(self._tag)


class SoupDocument:
    """
    A parsed markup document plus the lookups the parser needs.

    The id and label maps are built lazily on first use; the first element
    carrying a given id wins, as with ``document.getElementById``.
    """

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup
        self._ids: dict[str, Tag] | None = None
        self._labels: dict[str, Tag] | None = None
        self._bounds: dict[int, Bounds] = {}

    @classmethod
    def from_html(cls, html: str) -> SoupDocument:
        """Parse *html*; fragments are wrapped so the root is always ``<html>``."""
        soup = BeautifulSoup(html, _PARSER)
        if soup.find("html") is None:
            if soup.find("body") is None:
                html = f"<body>{html}</body>"
            soup = BeautifulSoup(f"<html>{html}</html>", _PARSER)
        return cls(soup)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    @property
    def root(self) -> SoupElement:
        html = self._soup.find("html")
        if html is None:
            html = next(c for c in self._soup.children if isinstance(c, Tag))
        return SoupElement(html, self)

    @property
    def title(self) -> str:
        title = self._soup.find("title")
        return " ".join(title.get_text().split()) if title is not None else ""

    @property
    def language(self) -> str | None:
        html = self._soup.find("html")
        if html is None:
            return None
        lang = html.get("lang")
        return (str(lang).strip() or None) if lang else None

    def get_element_by_id(self, element_id: str) -> SoupElement | None:
        if self._ids is None:
            self._ids = {}
            for tag in self._soup.find_all(id=True):
                self._ids.setdefault(str(tag["id"]), tag)
        tag = self._ids.get(element_id)
        return SoupElement(tag, self) if tag is not None else None

    def find_label_for(self, element_id: str) -> SoupElement | None:
        if self._labels is None:
            self._labels = {}
            for tag in self._soup.find_all("label", attrs={"for": True}):
                self._labels.setdefault(str(tag["for"]), tag)
        tag = self._labels.get(element_id)
        return SoupElement(tag, self) if tag is not None else None

    def attach_bounds(self, rects: Mapping[str, Sequence[float]]) -> int:
        """
        Attach geometry keyed by index path (``/html[1]/body[1]/div[2]``).

        Paths that do not resolve to an element are ignored. Returns the
        number of elements that received bounds.
        """
        self._bounds.clear()
        if not rects:
            return 0
        for element, path in iter_paths(self.root):
            rect = rects.get(path)
            if rect is not None and len(rect) == 4:
                x, y, width, height = (float(v) for v in rect)
                self._bounds[id(element.tag)] = Bounds(x, y, width, height)
        logger.debug("attached bounds to %d of %d rects", len(self._bounds), len(rects))
        return len(self._bounds)

    def bounds_of(self, tag: Tag) -> Bounds | None:
        return self._bounds.get(id(tag))


def from_html(html: str) -> SoupDocument:
    return SoupDocument.from_html(html)
