"""Exceptions raised by SemanticDOM."""

from __future__ import annotations


class SemanticDOMError(Exception):
    """Base class for all SemanticDOM errors."""


class ConfigurationError(SemanticDOMError, ValueError):
    """Invalid parse configuration. Raised before any tree is built."""


class TransitionError(SemanticDOMError):
    """A runtime state change that the node's transition table does not allow."""

    def __init__(self, node_id: str, state: str | None = None, trigger: str | None = None) -> None:
        self.node_id = node_id
        self.state = state
        self.trigger = trigger
        if state is None:
            message = f"unknown node id {node_id!r}"
        else:
            message = f"no transition from {state!r} on {trigger!r} for {node_id!r}"
        super().__init__(message)
