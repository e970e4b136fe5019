"""Diff two SemanticDocument snapshots of the same page."""

from __future__ import annotations

from collections import defaultdict, deque
from typing import Any, Iterator

from semanticdom.core.types import DocumentDelta, NodeChange, SemanticDocument, SemanticNode, SemanticRole

# Properties compared between matched nodes
_COMPARED_PROPS: tuple[str, ...] = ("state", "value", "label", "intent", "state_flags")

Fingerprint = tuple[SemanticRole, str, "SemanticRole | None"]


def _with_fingerprints(document: SemanticDocument) -> Iterator[tuple[SemanticNode, Fingerprint]]:
    for node in document.root.iter_nodes():
        parent = document.get(node.parent) if node.parent else None
        yield node, (node.role, node.label, parent.role if parent is not None else None)


class _OldNodes:
    """
    Nodes of the earlier parse, each handed out to at most one new node.

    Fingerprint buckets keep pre-order, so repeated lookalikes pair up in
    document order. A bucket entry already claimed by id is skipped.
    """

    def __init__(self, document: SemanticDocument) -> None:
        self._nodes: dict[str, SemanticNode] = {}
        self._buckets: defaultdict[Fingerprint, deque[str]] = defaultdict(deque)
        self._claimed: set[str] = set()
        for node, fingerprint in _with_fingerprints(document):
            self._nodes[node.id] = node
            self._buckets[fingerprint].append(node.id)

    def claim_id(self, node_id: str) -> SemanticNode | None:
        if node_id not in self._nodes or node_id in self._claimed:
            return None
        self._claimed.add(node_id)
        return self._nodes[node_id]

    def claim_lookalike(self, fingerprint: Fingerprint) -> SemanticNode | None:
        bucket = self._buckets.get(fingerprint)
        while bucket:
            node_id = bucket.popleft()
            if node_id not in self._claimed:
                self._claimed.add(node_id)
                return self._nodes[node_id]
        return None

    def unclaimed(self) -> list[SemanticNode]:
        return [node for node_id, node in self._nodes.items() if node_id not in self._claimed]


def _changed_props(old: SemanticNode, new: SemanticNode) -> dict[str, tuple[Any, Any]]:
    pairs = ((prop, getattr(old, prop), getattr(new, prop)) for prop in _COMPARED_PROPS)
    return {prop: (before, after) for prop, before, after in pairs if before != after}


def diff_documents(old: SemanticDocument, new: SemanticDocument) -> DocumentDelta:
    """
    Report what changed between two parses.

    Generated ids differ between parses, so nodes are matched:
      1. by id (explicit ids persist across parses)
      2. by (role, label, parent role) fingerprint, earliest unmatched first
    """
    pool = _OldNodes(old)
    delta = DocumentDelta()
    seen = 0

    for node, fingerprint in _with_fingerprints(new):
        seen += 1
        previous = pool.claim_id(node.id)
        if previous is None:
            previous = pool.claim_lookalike(fingerprint)
        if previous is None:
            delta.added.append(node)
            continue
        props = _changed_props(previous, node)
        if props:
            delta.changed.append(NodeChange(id=node.id, role=node.role, label=node.label, changed_props=props))

    delta.removed.extend(pool.unclaimed())
    delta.unchanged_count = max(seen - len(delta.added) - len(delta.changed), 0)
    return delta
