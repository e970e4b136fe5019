"""Certifier — turns check results into an AgentCertification."""

from __future__ import annotations

import logging
import math
import time
from typing import Iterable, Mapping, Sequence

from semanticdom.certify.checks import CHECKS, Check, CheckContext
from semanticdom.core.types import (
    AgentCertification,
    CertificationLevel,
    CertificationStats,
    SemanticNode,
    Severity,
    SSGNode,
    ValidationCheck,
)

logger = logging.getLogger(__name__)

# Points removed per failure in weighted mode
SEVERITY_DEDUCTIONS: dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.ERROR: 15,
    Severity.WARNING: 5,
    Severity.INFO: 0,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ratio_score(results: Sequence[ValidationCheck]) -> int:
    """round(100 * passed / total); no checks scores 0."""
    if not results:
        return 0
    passed = sum(1 for r in results if r.passed)
    return _round_half_up(100 * passed / len(results))


def weighted_score(results: Sequence[ValidationCheck]) -> int:
    """Pass ratio minus a fixed deduction per failure severity, floored at 0."""
    deductions = sum(
        SEVERITY_DEDUCTIONS[r.severity] for r in results if not r.passed and r.severity is not None
    )
    return max(0, ratio_score(results) - deductions)


class Certifier:
    """
    Runs the registered checks over a built tree.

    ``scoring="ratio"`` is the primary mode. ``"weighted"`` applies
    severity deductions on top of the ratio and is never mixed with it.
    """

    def __init__(self, scoring: str = "ratio", checks: Iterable[Check] | None = None) -> None:
        if scoring not in ("ratio", "weighted"):
            raise ValueError(f"unknown scoring mode: {scoring!r}")
        self._scoring = scoring
        self._checks = list(checks) if checks is not None else list(CHECKS)

    @property
    def checks(self) -> list[Check]:
        return list(self._checks)

    def run(self, ctx: CheckContext) -> list[ValidationCheck]:
        return [c(ctx) for c in self._checks]

    def score(self, results: Sequence[ValidationCheck]) -> int:
        if self._scoring == "weighted":
            return weighted_score(results)
        return ratio_score(results)

    def certify(
        self,
        root: SemanticNode,
        state_graph: Mapping[str, SSGNode] | None = None,
        ctx: CheckContext | None = None,
    ) -> AgentCertification:
        if ctx is None:
            ctx = CheckContext.from_tree(root, state_graph)

        results = self.run(ctx)
        passed = tuple(r for r in results if r.passed)
        failures = tuple(r for r in results if not r.passed)
        score = self.score(results)
        level = CertificationLevel.from_score(score)

        logger.debug(
            "certified: %d/%d checks passed, score %d, level %s",
            len(passed), len(results), score, level.value,
        )
        for failure in failures:
            logger.debug("check %s failed (%s): %s", failure.id, failure.severity.value, failure.message)

        return AgentCertification(
            level=level,
            score=score,
            checks=passed,
            failures=failures,
            certified_at=int(time.time() * 1000),
            stats=CertificationStats(
                total_checks=len(results),
                passed_checks=len(passed),
                landmark_count=len(ctx.landmarks),
                interactable_count=len(ctx.interactables),
                heading_count=len(ctx.headings),
            ),
        )
