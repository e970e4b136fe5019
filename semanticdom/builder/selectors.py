"""CSS selector and index-path generation for source elements."""

from __future__ import annotations

import re
from collections import Counter

from semanticdom.adapters.base import ElementAdapter

# Same character class the browser-side escapeCSS helpers use
_CSS_SPECIAL = re.compile(r"""([!"#$%&'()*+,./:;<=>?@\[\\\]^`{|}~\s])""")
_LEADING_DIGIT = re.compile(r"^(-?)(\d)")


def escape_css(value: str) -> str:
    """Escape an identifier for use in a CSS selector."""
    escaped = _CSS_SPECIAL.sub(r"\\\1", value)
    # identifiers may not start with a digit
    return _LEADING_DIGIT.sub(lambda m: f"{m.group(1)}\\3{m.group(2)} ", escaped)


def sibling_positions(children: list[ElementAdapter]) -> list[tuple[int, int]]:
    """1-based position and same-tag sibling count for each child, in one pass."""
    totals = Counter(c.tag_name for c in children)
    seen: Counter[str] = Counter()
    positions: list[tuple[int, int]] = []
    for child in children:
        seen[child.tag_name] += 1
        positions.append((seen[child.tag_name], totals[child.tag_name]))
    return positions


def _position(element: ElementAdapter) -> tuple[int, int]:
    parent = element.parent
    if parent is None:
        return 1, 1
    children = parent.children
    index = next(i for i, c in enumerate(children) if c == element)
    return sibling_positions(children)[index]


def child_path(path: str, element: ElementAdapter, position: int) -> str:
    return f"{path}/{element.tag_name}[{position}]"


def build_path(element: ElementAdapter) -> str:
    """
    Index path such as ``/html[1]/body[1]/div[2]``.

    Every level carries its 1-based position among same-tag siblings.
    """
    parts: list[str] = []
    current: ElementAdapter | None = element
    while current is not None:
        parts.append(f"{current.tag_name}[{_position(current)[0]}]")
        current = current.parent
    return "/" + "/".join(reversed(parts))


def iter_paths(root: ElementAdapter):
    """Yield ``(element, path)`` for every element under *root*."""
    stack = [(root, build_path(root))]
    while stack:
        element, path = stack.pop()
        yield element, path
        children = element.children
        for child, (position, _) in zip(children, sibling_positions(children)):
            stack.append((child, child_path(path, child, position)))


class SelectorBuilder:
    """
    Builds ancestor-chain CSS selectors.

    The chain stops at the first ancestor whose id is unique in the source
    tree. Duplicate ids are treated as absent so a selector never points
    at two elements through its id part.

    ``step`` extends a parent's selector by one level, which lets a tree
    walk build every selector without climbing back to the root.
    """

    def __init__(self, root: ElementAdapter | None = None) -> None:
        self._id_counts: Counter[str] = Counter()
        if root is not None:
            self.index_ids(root)

    def index_ids(self, root: ElementAdapter) -> None:
        self._id_counts.clear()
        stack = [root]
        while stack:
            element = stack.pop()
            element_id = element.element_id
            if element_id:
                self._id_counts[element_id] += 1
            stack.extend(element.children)

    def _unique_id(self, element: ElementAdapter) -> str | None:
        element_id = element.element_id
        if element_id and self._id_counts.get(element_id, 1) == 1:
            return element_id
        return None

    def step(self, element: ElementAdapter, prefix: str, position: int, count: int) -> str:
        """Selector for *element* below a parent whose chain is *prefix* ("" under the document element)."""
        element_id = self._unique_id(element)
        if element_id:
            return f"#{escape_css(element_id)}"

        part = element.tag_name
        classes = element.class_list
        if classes:
            part += "." + ".".join(escape_css(c) for c in classes)
        if count > 1:
            part += f":nth-of-type({position})"
        return f"{prefix} > {part}" if prefix else part

    def build(self, element: ElementAdapter) -> str:
        if element.parent is None:
            # the document element itself
            element_id = self._unique_id(element)
            return f"#{escape_css(element_id)}" if element_id else element.tag_name

        parts: list[str] = []
        current = element
        while current.parent is not None:
            parts.append(self.step(current, "", *_position(current)))
            if self._unique_id(current):
                break
            current = current.parent
        return " > ".join(reversed(parts))


def build_selector(element: ElementAdapter) -> str:
    """One-off selector for *element*; ids are counted over its whole tree."""
    top = element
    while top.parent is not None:
        top = top.parent
    return SelectorBuilder(top).build(element)
