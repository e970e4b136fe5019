"""StateGraphSynthesizer — attaches static transition tables to stateful nodes."""

from __future__ import annotations

from typing import Iterable

from semanticdom.core.types import MAX_HISTORY, SemanticNode, SSGNode, StateType
from semanticdom.state.transitions import transitions_for


def is_stateful(node: SemanticNode) -> bool:
    """Interactive nodes, plus any real node whose state is not idle."""
    if node.is_interactive:
        return True
    return node.state != StateType.IDLE and not node.placeholder


class StateGraphSynthesizer:
    """
    Builds the Semantic State Graph for a document.

    Tables come from the node's role, not from observed behaviour; the
    history buffer starts empty and is only filled by a runtime StateStore.
    """

    def __init__(self, max_history: int = MAX_HISTORY) -> None:
        self._max_history = max_history

    def node(self, node: SemanticNode) -> SSGNode:
        return SSGNode(
            semantic_id=node.id,
            current_state=node.state,
            transitions=transitions_for(node.role, node.state),
            max_history=self._max_history,
        )

    def synthesize(self, nodes: Iterable[SemanticNode]) -> dict[str, SSGNode]:
        return {n.id: self.node(n) for n in nodes if is_stateful(n)}
