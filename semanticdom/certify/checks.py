"""The certification checks run against every parsed document."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Mapping

from semanticdom.core.types import (
    CheckCategory,
    SemanticNode,
    SemanticRole,
    Severity,
    SSGNode,
    ValidationCheck,
)

STATE_COVERAGE_THRESHOLD = 0.8
INTENT_COVERAGE_THRESHOLD = 0.7
MIN_LANDMARKS = 2


@dataclass
class CheckContext:
    """Read-only view of a built tree handed to every check."""

    root: SemanticNode
    nodes: list[SemanticNode]
    index: Mapping[str, SemanticNode]
    landmarks: tuple[SemanticNode, ...]
    interactables: tuple[SemanticNode, ...]
    state_graph: Mapping[str, SSGNode] = field(default_factory=dict)

    @classmethod
    def from_tree(
        cls,
        root: SemanticNode,
        state_graph: Mapping[str, SSGNode] | None = None,
    ) -> CheckContext:
        nodes = list(root.iter_nodes())
        return cls(
            root=root,
            nodes=nodes,
            index={n.id: n for n in nodes},
            landmarks=tuple(n for n in nodes if n.is_landmark),
            interactables=tuple(n for n in nodes if n.is_interactive),
            state_graph=state_graph or {},
        )

    @property
    def headings(self) -> list[SemanticNode]:
        return [n for n in self.nodes if n.role == SemanticRole.HEADING]


# (passed, message, offending node ids)
Outcome = tuple[bool, str, tuple[str, ...]]


@dataclass(frozen=True)
class Check:
    id: str
    name: str
    category: CheckCategory
    severity: Severity
    run: Callable[[CheckContext], Outcome]

    def __call__(self, ctx: CheckContext) -> ValidationCheck:
        passed, message, nodes = self.run(ctx)
        return ValidationCheck(
            id=self.id,
            name=self.name,
            category=self.category,
            passed=passed,
            message=message,
            severity=None if passed else self.severity,
            nodes=() if passed else nodes,
        )


CHECKS: list[Check] = []


def check(check_id: str, name: str, category: CheckCategory, severity: Severity):
    """Register a check function. Checks run in registration order."""

    def decorator(fn: Callable[[CheckContext], Outcome]) -> Callable[[CheckContext], Outcome]:
        CHECKS.append(Check(check_id, name, category, severity, fn))
        return fn

    return decorator


def _coverage(covered: int, total: int) -> float:
    return covered / total if total else 1.0


# --- Structure ---


@check("structure-main", "Main landmark present", CheckCategory.STRUCTURE, Severity.WARNING)
def check_main_landmark(ctx: CheckContext) -> Outcome:
    if any(n.role == SemanticRole.MAIN for n in ctx.landmarks):
        return True, "Document has a main landmark", ()
    return False, "Document should have a main landmark", ()


@check("structure-landmarks", "Sufficient landmarks", CheckCategory.STRUCTURE, Severity.WARNING)
def check_landmark_count(ctx: CheckContext) -> Outcome:
    count = len(ctx.landmarks)
    if count >= MIN_LANDMARKS:
        return True, f"Found {count} landmarks", ()
    return False, f"Document should have at least {MIN_LANDMARKS} landmarks, found {count}", ()


# --- Accessibility ---


@check("a11y-names", "Interactive elements have accessible names", CheckCategory.A11Y, Severity.ERROR)
def check_accessible_names(ctx: CheckContext) -> Outcome:
    unnamed = tuple(n.id for n in ctx.interactables if not n.accessibility.name)
    if not unnamed:
        return True, "All interactive elements have accessible names", ()
    return False, f"{len(unnamed)} interactive elements missing accessible names", unnamed


@check("a11y-headings", "Heading hierarchy valid", CheckCategory.A11Y, Severity.WARNING)
def check_heading_hierarchy(ctx: CheckContext) -> Outcome:
    offending: list[str] = []
    last_level = 0
    for heading in ctx.headings:
        level = heading.accessibility.level or 1
        if level > last_level + 1:
            offending.append(heading.id)
        last_level = level
    if not offending:
        return True, "Heading levels follow a proper hierarchy", ()
    return False, "Heading levels skip levels (e.g. h1 to h3)", tuple(offending)


# --- Navigation ---


@check("navigation-keyboard", "Keyboard navigation available", CheckCategory.NAVIGATION, Severity.ERROR)
def check_keyboard_navigation(ctx: CheckContext) -> Outcome:
    in_tab_order = [
        n for n in ctx.nodes if n.accessibility.focusable and n.accessibility.in_tab_order
    ]
    if in_tab_order:
        return True, f"{len(in_tab_order)} elements in tab order", ()
    return False, "No elements in keyboard tab order", ()


@check("navigation-unique-ids", "All semantic IDs unique", CheckCategory.NAVIGATION, Severity.CRITICAL)
def check_unique_ids(ctx: CheckContext) -> Outcome:
    """
    Fails on repeated node ids, and on explicit source ids that several
    elements share (those were renamed at build time, but the markup is
    still ambiguous for anything addressing it by id).
    """
    id_counts = Counter(n.id for n in ctx.nodes)
    source_counts = Counter(n.source_id for n in ctx.nodes if n.source_id)
    offending = [
        n.id
        for n in ctx.nodes
        if id_counts[n.id] > 1 or (n.source_id and source_counts[n.source_id] > 1)
    ]
    if not offending:
        return True, "All IDs are unique", ()
    duplicated = {k for k, c in id_counts.items() if c > 1} | {
        k for k, c in source_counts.items() if c > 1
    }
    return False, f"{len(duplicated)} duplicate IDs found: {', '.join(sorted(duplicated))}", tuple(
        dict.fromkeys(offending)
    )


@check("navigation-selectors", "All nodes have valid selectors", CheckCategory.NAVIGATION, Severity.ERROR)
def check_selectors(ctx: CheckContext) -> Outcome:
    missing = tuple(n.id for n in ctx.nodes if not n.selector)
    if not missing:
        return True, "All nodes have CSS selectors", ()
    return False, f"{len(missing)} nodes missing selectors", missing


# --- State ---


@check("state-transitions", "State transitions defined", CheckCategory.STATE, Severity.WARNING)
def check_state_transitions(ctx: CheckContext) -> Outcome:
    uncovered = tuple(
        n.id
        for n in ctx.interactables
        if n.id not in ctx.state_graph or not ctx.state_graph[n.id].transitions
    )
    coverage = _coverage(len(ctx.interactables) - len(uncovered), len(ctx.interactables))
    if coverage >= STATE_COVERAGE_THRESHOLD:
        return True, f"{round(coverage * 100)}% state coverage", ()
    return False, f"Insufficient state transition coverage ({round(coverage * 100)}%)", uncovered


# --- Interoperability ---


@check("interop-intent", "Semantic intents defined", CheckCategory.INTEROPERABILITY, Severity.INFO)
def check_intents(ctx: CheckContext) -> Outcome:
    missing = tuple(n.id for n in ctx.interactables if n.intent is None)
    coverage = _coverage(len(ctx.interactables) - len(missing), len(ctx.interactables))
    if coverage >= INTENT_COVERAGE_THRESHOLD:
        return True, f"{round(coverage * 100)}% intent coverage", ()
    return False, f"Many interactive elements lack semantic intent ({round(coverage * 100)}%)", missing
