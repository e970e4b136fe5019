"""Directional navigation over a SemanticDocument."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from semanticdom.core.types import NavigationDirection, SemanticDocument, SemanticNode, StateType
from semanticdom.query.query import SemanticQuery

D = NavigationDirection

_DOCUMENT_ORDER = frozenset({D.NEXT, D.PREVIOUS, D.FIRST, D.LAST})


@dataclass
class NavigateOptions:
    direction: NavigationDirection = NavigationDirection.NEXT
    filter: SemanticQuery | None = None
    wrap: bool = False
    skip_hidden: bool = False
    focusable_only: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.direction, NavigationDirection):
            self.direction = NavigationDirection(str(self.direction).lower())

    def accepts(self, node: SemanticNode) -> bool:
        if self.skip_hidden and node.state == StateType.HIDDEN:
            return False
        if self.focusable_only and not node.accessibility.focusable:
            return False
        if self.filter is not None and not self.filter.matches(node):
            return False
        return True


def _first(candidates: Sequence[SemanticNode], options: NavigateOptions) -> SemanticNode | None:
    return next((n for n in candidates if options.accepts(n)), None)


def navigate(
    document: SemanticDocument,
    current_id: str,
    options: NavigateOptions | NavigationDirection | str | None = None,
    **kwargs,
) -> SemanticNode | None:
    """
    Move from *current_id* in the given direction.

    Returns None when the id is unknown, there is nowhere to go, or no
    candidate passes the options, even after wrapping. Never raises for
    a miss.
    """
    if options is None or not isinstance(options, NavigateOptions):
        if options is not None:
            kwargs["direction"] = options
        options = NavigateOptions(**kwargs)

    current = document.get(current_id)
    if current is None:
        return None

    direction = options.direction
    if direction in _DOCUMENT_ORDER:
        return _document_order(document, current, options)

    if direction == D.PARENT:
        parent = document.get(current.parent) if current.parent else None
        if parent is None or not options.accepts(parent):
            return None
        return parent

    if direction == D.FIRST_CHILD:
        return _first(current.children, options)
    if direction == D.LAST_CHILD:
        return _first(current.children[::-1], options)

    parent = document.get(current.parent) if current.parent else None
    if parent is None:
        return None
    siblings = parent.children
    position = next((i for i, s in enumerate(siblings) if s.id == current.id), None)
    if position is None:
        return None

    if direction == D.NEXT_SIBLING:
        found = _first(siblings[position + 1:], options)
        if found is None and options.wrap:
            found = _first(siblings, options)
        return found

    found = _first(siblings[:position][::-1], options)
    if found is None and options.wrap:
        found = _first(siblings[::-1], options)
    return found


def _document_order(
    document: SemanticDocument,
    current: SemanticNode,
    options: NavigateOptions,
) -> SemanticNode | None:
    # recomputed on every call; documents are rebuilt per parse anyway
    flat = document.flat_nodes()
    direction = options.direction

    if direction == D.FIRST:
        return _first(flat, options)
    if direction == D.LAST:
        return _first(flat[::-1], options)

    position = next(i for i, n in enumerate(flat) if n.id == current.id)
    if direction == D.NEXT:
        found = _first(flat[position + 1:], options)
        if found is None and options.wrap:
            found = _first(flat, options)
        return found

    found = _first(flat[:position][::-1], options)
    if found is None and options.wrap:
        found = _first(flat[::-1], options)
    return found
