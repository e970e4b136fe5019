"""ParseConfig — options accepted by the SemanticDOM parser."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from semanticdom.core.errors import ConfigurationError
from semanticdom.core.types import CertificationLevel, SemanticIntent, SemanticRole

DEFAULT_EXCLUDE: tuple[str, ...] = ("script", "style", "noscript", "template")
DEFAULT_MAX_DEPTH = 50
DEFAULT_ID_PREFIX = "sdom"

SCORING_MODES = ("ratio", "weighted")

_WHITESPACE = re.compile(r"\s")


def _tags(values: Iterable[str] | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(v.strip().lower() for v in values)


@dataclass
class ParseConfig:
    """
    Options for one parse call. All fields are optional.

    ``exclude=None`` means the default exclusion list; ``include`` removes
    tags from the default list. Naming a tag in both an explicit
    ``exclude`` and ``include`` is a conflict.
    """

    compute_bounds: bool = True
    include_state_graph: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    exclude: tuple[str, ...] | None = None
    include: tuple[str, ...] = ()
    role_mapping: Mapping[str, SemanticRole] = field(default_factory=dict)
    intent_mapping: Mapping[str, SemanticIntent] = field(default_factory=dict)
    id_prefix: str = DEFAULT_ID_PREFIX
    validate: bool = True
    target_certification: CertificationLevel = CertificationLevel.STANDARD
    scoring: str = "ratio"

    def __post_init__(self) -> None:
        # bool is an int subclass; True is not a depth
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigurationError(f"max_depth must be an int, got {self.max_depth!r}")
        if self.max_depth < 0:
            raise ConfigurationError(f"max_depth must be >= 0, got {self.max_depth}")

        include = _tags(self.include)
        if self.exclude is not None:
            exclude = _tags(self.exclude)
            overlap = sorted(set(exclude) & set(include))
            if overlap:
                raise ConfigurationError(
                    f"tags both excluded and included: {', '.join(overlap)}"
                )
            self.exclude = exclude
        self.include = include

        self.role_mapping = {
            tag.lower(): self._coerce(SemanticRole, value, "role")
            for tag, value in dict(self.role_mapping).items()
        }
        self.intent_mapping = {
            tag.lower(): self._coerce(SemanticIntent, value, "intent")
            for tag, value in dict(self.intent_mapping).items()
        }

        if not isinstance(self.id_prefix, str) or not self.id_prefix:
            raise ConfigurationError("id_prefix must be a non-empty string")
        if _WHITESPACE.search(self.id_prefix):
            raise ConfigurationError(f"id_prefix may not contain whitespace: {self.id_prefix!r}")

        self.target_certification = self._coerce(
            CertificationLevel, self.target_certification, "certification level"
        )

        if self.scoring not in SCORING_MODES:
            raise ConfigurationError(
                f"scoring must be one of {', '.join(SCORING_MODES)}, got {self.scoring!r}"
            )

    @staticmethod
    def _coerce(enum_cls, value, what: str):
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"unknown {what}: {value!r}") from None

    @property
    def excluded_tags(self) -> frozenset[str]:
        """Effective set of tags materialized as placeholders."""
        if self.exclude is not None:
            return frozenset(self.exclude)
        return frozenset(DEFAULT_EXCLUDE) - frozenset(self.include)
