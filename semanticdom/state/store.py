"""StateStore — caller-owned runtime state for a parsed document."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable, Iterable

from semanticdom.core.errors import TransitionError
from semanticdom.core.types import MAX_HISTORY, SemanticDocument, SSGNode, StateHistoryEntry, StateType

logger = logging.getLogger(__name__)

# callback(node_id, old_state, new_state)
Listener = Callable[[str, StateType, StateType], None]


class StateStore:
    """
    Current state and bounded transition history per semantic id.

    The parsed document stays immutable; this store is where runtime state
    changes live. Safe to share between threads. Listeners are called after
    the lock is released, in subscription order.
    """

    def __init__(self, max_history: int = MAX_HISTORY) -> None:
        self._lock = threading.RLock()
        self._max_history = max_history
        self._graphs: dict[str, SSGNode] = {}
        self._states: dict[str, StateType] = {}
        self._history: dict[str, deque[StateHistoryEntry]] = {}
        self._listeners: list[Listener] = []

    @classmethod
    def from_document(cls, document: SemanticDocument, max_history: int = MAX_HISTORY) -> StateStore:
        store = cls(max_history=max_history)
        store.load(document.state_graph.values())
        return store

    def load(self, graph_nodes: Iterable[SSGNode]) -> None:
        """Seed the store; existing entries for the same ids are replaced."""
        with self._lock:
            for node in graph_nodes:
                self._graphs[node.semantic_id] = node
                self._states[node.semantic_id] = node.current_state
                self._history[node.semantic_id] = deque(node.history, maxlen=self._max_history)

    def __contains__(self, node_id: str) -> bool:
        with self._lock:
            return node_id in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def get(self, node_id: str) -> StateType | None:
        with self._lock:
            return self._states.get(node_id)

    def set(self, node_id: str, state: StateType, trigger: str = "set") -> None:
        """Force a state without consulting the transition table."""
        with self._lock:
            old = self._states.get(node_id, StateType.IDLE)
            self._record(node_id, old, state, trigger)
        self._notify(node_id, old, state)

    def apply(self, node_id: str, trigger: str, to_state: StateType | None = None) -> StateType:
        """
        Fire *trigger* on a node and return its new state.

        When several transitions share the trigger (e.g. validate → valid
        or invalid), ``to_state`` picks one; otherwise the first listed wins.
        """
        with self._lock:
            graph = self._graphs.get(node_id)
            if graph is None:
                raise TransitionError(node_id)
            old = self._states[node_id]
            candidates = [
                t for t in graph.transitions
                if t.from_state == old and t.trigger == trigger
                and (to_state is None or t.to_state == to_state)
            ]
            if not candidates:
                raise TransitionError(node_id, old.value, trigger)
            new = candidates[0].to_state
            self._record(node_id, old, new, trigger)
        self._notify(node_id, old, new)
        return new

    def available_triggers(self, node_id: str) -> list[str]:
        with self._lock:
            graph = self._graphs.get(node_id)
            if graph is None:
                return []
            return list(dict.fromkeys(graph.triggers_from(self._states[node_id])))

    def history(self, node_id: str) -> list[StateHistoryEntry]:
        with self._lock:
            return list(self._history.get(node_id, ()))

    def snapshot(self, node_id: str) -> SSGNode | None:
        """The node's graph entry with its live state and history filled in."""
        with self._lock:
            graph = self._graphs.get(node_id)
            if graph is None:
                return None
            return SSGNode(
                semantic_id=node_id,
                current_state=self._states[node_id],
                transitions=graph.transitions,
                history=tuple(self._history[node_id]),
                max_history=self._max_history,
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> None:
        """Restore every node to its build-time state and clear history."""
        with self._lock:
            for node_id, graph in self._graphs.items():
                self._states[node_id] = graph.current_state
                self._history[node_id] = deque(maxlen=self._max_history)

    def _record(self, node_id: str, old: StateType, new: StateType, trigger: str) -> None:
        self._states[node_id] = new
        history = self._history.setdefault(node_id, deque(maxlen=self._max_history))
        history.append(StateHistoryEntry(old, new, trigger, time.time()))
        logger.debug("%s: %s -> %s on %s", node_id, old.value, new.value, trigger)

    def _notify(self, node_id: str, old: StateType, new: StateType) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(node_id, old, new)
