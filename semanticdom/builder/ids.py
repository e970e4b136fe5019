"""IdGenerator — issues semantic node ids for one parse."""

from __future__ import annotations

import logging
import uuid

from semanticdom.core.types import SemanticRole

logger = logging.getLogger(__name__)

# Data attributes carrying an explicit semantic id, in priority order.
# The plain ``id`` attribute is consulted after these.
EXPLICIT_ID_ATTRIBUTES = ("data-semantic-id", "data-agent-id")


class IdGenerator:
    """
    Generated ids look like ``sdom-button-3-9f2c1a``: prefix, role, a
    per-document ordinal and a random disambiguator.

    Explicit ids are used verbatim. When an explicit id is already taken the
    next free ``<id>-<n>`` is issued instead, counting up from 1 per id.
    """

    def __init__(self, prefix: str = "sdom") -> None:
        self._prefix = prefix
        self._ordinal = 0
        self._used: set[str] = set()
        self._duplicates: dict[str, int] = {}

    def generate(self, role: SemanticRole) -> str:
        self._ordinal += 1
        while True:
            candidate = f"{self._prefix}-{role.value}-{self._ordinal}-{uuid.uuid4().hex[:6]}"
            if candidate not in self._used:
                break
        self._used.add(candidate)
        return candidate

    def claim(self, explicit_id: str) -> str:
        """Register an author-supplied id, disambiguating repeats deterministically."""
        if explicit_id not in self._used:
            self._used.add(explicit_id)
            return explicit_id

        n = self._duplicates.get(explicit_id, 0)
        while True:
            n += 1
            candidate = f"{explicit_id}-{n}"
            if candidate not in self._used:
                break
        self._duplicates[explicit_id] = n
        self._used.add(candidate)
        logger.debug("explicit id %r already used, issued %r", explicit_id, candidate)
        return candidate

    def reset(self) -> None:
        self._ordinal = 0
        self._used.clear()
        self._duplicates.clear()

    @property
    def total_ids(self) -> int:
        return len(self._used)
