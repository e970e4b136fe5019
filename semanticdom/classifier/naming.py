"""Accessible-name and description computation."""

from __future__ import annotations

from semanticdom.adapters.base import ElementAdapter
from semanticdom.classifier.tables import NAME_FROM_CONTENT_ROLES
from semanticdom.core.types import SemanticRole

_INPUT_BUTTON_DEFAULTS = {"submit": "Submit", "reset": "Reset"}


def normalize_text(text: str | None) -> str:
    """Collapse runs of whitespace and strip the ends."""
    if not text:
        return ""
    return " ".join(text.split())


def _text_of_ids(element: ElementAdapter, ids: str) -> str:
    parts: list[str] = []
    for ref in ids.split():
        target = element.get_element_by_id(ref)
        if target is not None:
            text = normalize_text(target.text_content)
            if text:
                parts.append(text)
    return " ".join(parts)


def _is_image_input(element: ElementAdapter) -> bool:
    return element.tag_name == "input" and (element.get_attribute("type") or "").strip().lower() == "image"


def _content_name(element: ElementAdapter) -> str:
    if element.tag_name == "input":
        input_type = (element.get_attribute("type") or "").lower()
        if input_type in ("button", "submit", "reset"):
            value = element.get_attribute("value")
            if value:
                return normalize_text(value)
            return _INPUT_BUTTON_DEFAULTS.get(input_type, "")
        return ""
    return normalize_text(element.text_content)


def compute_accessible_name(element: ElementAdapter, role: SemanticRole) -> str:
    """
    First non-empty source wins:

    1. ``aria-labelledby`` (each referenced element's text, space-joined)
    2. ``aria-label``
    3. ``<label for=...>`` pointing at the element's id
    4. own text content, for roles named from content
    5. ``alt`` on images
    6. ``title``
    """
    labelled_by = element.get_attribute("aria-labelledby")
    if labelled_by:
        name = _text_of_ids(element, labelled_by)
        if name:
            return name

    name = normalize_text(element.get_attribute("aria-label"))
    if name:
        return name

    element_id = element.element_id
    if element_id:
        label = element.find_label_for(element_id)
        if label is not None:
            name = normalize_text(label.text_content)
            if name:
                return name

    if role in NAME_FROM_CONTENT_ROLES:
        name = _content_name(element)
        if name:
            return name

    if element.tag_name == "img" or role == SemanticRole.IMG or _is_image_input(element):
        name = normalize_text(element.get_attribute("alt"))
        if name:
            return name

    return normalize_text(element.get_attribute("title"))


def compute_description(element: ElementAdapter) -> str | None:
    described_by = element.get_attribute("aria-describedby")
    if described_by:
        text = _text_of_ids(element, described_by)
        return text or None
    return normalize_text(element.get_attribute("aria-description")) or None
