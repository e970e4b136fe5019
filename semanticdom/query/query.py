"""SemanticQuery — predicate matching over a SemanticNode tree."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Union

from semanticdom.core.types import SemanticIntent, SemanticNode, SemanticRole, StateType

TextMatch = Union[str, re.Pattern]


def _enum_set(enum_cls, value) -> frozenset | None:
    if value is None:
        return None
    if isinstance(value, (str, enum_cls)):
        value = [value]
    return frozenset(v if isinstance(v, enum_cls) else enum_cls(str(v).lower()) for v in value)


def _text_matches(pattern: TextMatch, text: str) -> bool:
    if isinstance(pattern, str):
        return pattern.lower() in text.lower()
    return pattern.search(text) is not None


@dataclass
class SemanticQuery:
    """
    A conjunction of optional predicates. Unset fields do not filter.

    ``text`` matches the label or the accessible name; ``label`` matches the
    label only. Strings match case-insensitively as substrings, compiled
    patterns with ``search``. ``limit=None`` is unlimited; ``deep=False``
    evaluates the start node only.
    """

    role: SemanticRole | Iterable[SemanticRole] | None = None
    intent: SemanticIntent | Iterable[SemanticIntent] | None = None
    state: StateType | Iterable[StateType] | None = None
    text: TextMatch | None = None
    label: TextMatch | None = None
    interactive: bool | None = None
    visible: bool | None = None
    focusable: bool | None = None
    filter: Callable[[SemanticNode], bool] | None = None
    limit: int | None = None
    deep: bool = True

    def __post_init__(self) -> None:
        self.role = _enum_set(SemanticRole, self.role)
        self.intent = _enum_set(SemanticIntent, self.intent)
        self.state = _enum_set(StateType, self.state)
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")

    def matches(self, node: SemanticNode) -> bool:
        if self.role is not None and node.role not in self.role:
            return False
        if self.intent is not None and node.intent not in self.intent:
            return False
        if self.state is not None and node.state not in self.state:
            return False
        if self.text is not None and not (
            _text_matches(self.text, node.label) or _text_matches(self.text, node.accessibility.name)
        ):
            return False
        if self.label is not None and not _text_matches(self.label, node.label):
            return False
        if self.interactive is not None and node.is_interactive != self.interactive:
            return False
        if self.visible is not None and node.is_visible != self.visible:
            return False
        if self.focusable is not None and node.is_focusable != self.focusable:
            return False
        if self.filter is not None and not self.filter(node):
            return False
        return True


def query(root: SemanticNode, options: SemanticQuery | None = None, **criteria) -> list[SemanticNode]:
    """
    Return the nodes under *root* (inclusive) matching the query, in pre-order.

    Criteria may be passed as a SemanticQuery or as keyword arguments.
    Traversal stops as soon as ``limit`` matches are found.
    """
    if options is None:
        options = SemanticQuery(**criteria)
    elif criteria:
        raise TypeError("pass either a SemanticQuery or keyword criteria, not both")

    limit = options.limit
    if limit == 0:
        return []

    results: list[SemanticNode] = []
    if not options.deep:
        return [root] if options.matches(root) else []

    stack = [root]
    while stack:
        node = stack.pop()
        if options.matches(node):
            results.append(node)
            if limit is not None and len(results) >= limit:
                break
        stack.extend(reversed(node.children))
    return results
