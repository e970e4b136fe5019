"""Abstract element adapter — the read-only view the parser walks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from semanticdom.core.types import Bounds


class ElementAdapter(ABC):
    """
    Read-only view over one element of a source markup tree.

    The parser only ever calls these members; it never mutates the source.
    Implementations must compare equal when they wrap the same element.
    """

    @property
    @abstractmethod
    def tag_name(self) -> str:
        """Lower-case tag name."""

    @property
    @abstractmethod
    def attributes(self) -> Mapping[str, str]: ...

    @property
    @abstractmethod
    def children(self) -> list[ElementAdapter]:
        """Child elements in document order (text nodes excluded)."""

    @property
    @abstractmethod
    def parent(self) -> ElementAdapter | None: ...

    @property
    @abstractmethod
    def text_content(self) -> str:
        """Concatenated text of the element and its descendants."""

    @abstractmethod
    def get_element_by_id(self, element_id: str) -> ElementAdapter | None:
        """Look up an element by id in the owning document."""

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def find_label_for(self, element_id: str) -> ElementAdapter | None:
        """Return the ``<label for=element_id>`` in the owning document, if known."""
        return None

    def bounds(self) -> Bounds | None:
        """Geometry, when the adapter can supply it."""
        return None

    @property
    def element_id(self) -> str | None:
        value = self.get_attribute("id")
        return value if value else None

    @property
    def class_list(self) -> list[str]:
        return (self.get_attribute("class") or "").split()
