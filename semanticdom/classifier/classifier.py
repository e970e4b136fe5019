"""Classifier — maps a source element to role, intent, state and accessibility info."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from semanticdom.adapters.base import ElementAdapter
from semanticdom.classifier.naming import compute_accessible_name, compute_description, normalize_text
from semanticdom.classifier.tables import (
    BUTTON_INTENT_KEYWORDS,
    CHECKED_STATES,
    CURRENT_VALUES,
    EXPANDED_STATES,
    FOCUSABLE_TAGS,
    GRID_ROLES,
    IMPLICIT_LIVE,
    INPUT_TYPE_ROLES,
    INTENT_ATTRIBUTES,
    LIVE_VALUES,
    METADATA_PREFIX,
    ROLE_INTENTS,
    TAG_ROLES,
)
from semanticdom.core.types import A11yInfo, NodeValue, SemanticIntent, SemanticRole, StateType

_HEADING_TAG = re.compile(r"^h([1-6])$")


@dataclass(frozen=True)
class Classification:
    """Everything the classifier derives from one element."""

    role: SemanticRole
    label: str
    state: StateType
    intent: SemanticIntent | None = None
    state_flags: frozenset[StateType] = frozenset()
    value: NodeValue | None = None
    accessibility: A11yInfo = field(default_factory=A11yInfo)
    metadata: dict[str, Any] = field(default_factory=dict)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _is_true(element: ElementAdapter, name: str) -> bool:
    return (element.get_attribute(name) or "").strip().lower() == "true"


def _input_type(element: ElementAdapter) -> str:
    return (element.get_attribute("type") or "text").strip().lower()


def _in_grid(element: ElementAdapter) -> bool:
    # only cells of an interactive grid table are gridcells
    current = element.parent
    while current is not None:
        if current.tag_name == "table":
            return bool(GRID_ROLES.intersection((current.get_attribute("role") or "").split()))
        current = current.parent
    return False


class Classifier:
    """
    Pure classification of source elements.

    Every method only reads the element; missing or malformed attributes
    resolve to defaults (``generic`` role, ``idle`` state, empty name).
    """

    def __init__(
        self,
        role_mapping: Mapping[str, SemanticRole] | None = None,
        intent_mapping: Mapping[str, SemanticIntent] | None = None,
    ) -> None:
        self._role_mapping = dict(role_mapping or {})
        self._intent_mapping = dict(intent_mapping or {})

    def classify(self, element: ElementAdapter) -> Classification:
        role = self.role(element)
        name = compute_accessible_name(element, role)
        return Classification(
            role=role,
            label=name,
            state=self.state(element),
            intent=self.intent(element, role, name),
            state_flags=self.state_flags(element),
            value=self.value(element),
            accessibility=self.accessibility(element, role, name),
            metadata=self.metadata(element),
        )

    # ------------------------------------------------------------------
    # Role
    # ------------------------------------------------------------------

    def role(self, element: ElementAdapter) -> SemanticRole:
        # role="..." may list fallbacks; the first recognised token wins
        for token in (element.get_attribute("role") or "").split():
            explicit = SemanticRole.parse(token)
            if explicit is not None:
                return explicit

        tag = element.tag_name
        if tag in self._role_mapping:
            return self._role_mapping[tag]

        if tag == "input":
            role = INPUT_TYPE_ROLES.get(_input_type(element))
            if role is not None:
                return role
        elif tag == "a" and not element.has_attribute("href"):
            return SemanticRole.GENERIC
        elif tag == "td" and _in_grid(element):
            return SemanticRole.GRIDCELL

        return TAG_ROLES.get(tag, SemanticRole.GENERIC)

    # ------------------------------------------------------------------
    # Intent
    # ------------------------------------------------------------------

    def intent(self, element: ElementAdapter, role: SemanticRole, name: str = "") -> SemanticIntent | None:
        for attribute in INTENT_ATTRIBUTES:
            explicit = SemanticIntent.parse(element.get_attribute(attribute))
            if explicit is not None:
                return explicit

        tag = element.tag_name
        if tag in self._intent_mapping:
            return self._intent_mapping[tag]

        if role == SemanticRole.BUTTON:
            return self._button_intent(element, name)
        return ROLE_INTENTS.get(role)

    @staticmethod
    def _button_intent(element: ElementAdapter, name: str) -> SemanticIntent:
        lowered = name.lower()
        for keyword, intent in BUTTON_INTENT_KEYWORDS:
            if keyword in lowered:
                return intent
        if (element.get_attribute("type") or "").lower() == "submit":
            return SemanticIntent.SUBMIT
        return SemanticIntent.TOGGLE

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def state(self, element: ElementAdapter) -> StateType:
        """First match in a fixed attribute ladder; simultaneous states do not combine."""
        if element.has_attribute("disabled") or _is_true(element, "aria-disabled"):
            return StateType.DISABLED
        if _is_true(element, "aria-busy"):
            return StateType.LOADING
        if _is_true(element, "aria-invalid"):
            return StateType.INVALID
        if _is_true(element, "aria-selected"):
            return StateType.SELECTED

        expanded = (element.get_attribute("aria-expanded") or "").strip().lower()
        if expanded in EXPANDED_STATES:
            return EXPANDED_STATES[expanded]

        checked = (element.get_attribute("aria-checked") or "").strip().lower()
        if checked in CHECKED_STATES:
            return CHECKED_STATES[checked]
        if element.tag_name == "input" and _input_type(element) in ("checkbox", "radio"):
            return StateType.CHECKED if element.has_attribute("checked") else StateType.UNCHECKED

        if element.has_attribute("hidden") or _is_true(element, "aria-hidden"):
            return StateType.HIDDEN
        return StateType.IDLE

    @staticmethod
    def state_flags(element: ElementAdapter) -> frozenset[StateType]:
        flags: set[StateType] = set()
        if element.has_attribute("disabled") or _is_true(element, "aria-disabled"):
            flags.add(StateType.DISABLED)
        if element.has_attribute("readonly") or _is_true(element, "aria-readonly"):
            flags.add(StateType.READONLY)
        if element.has_attribute("required") or _is_true(element, "aria-required"):
            flags.add(StateType.REQUIRED)
        return frozenset(flags)

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    @staticmethod
    def value(element: ElementAdapter) -> NodeValue | None:
        tag = element.tag_name
        if tag == "input":
            input_type = _input_type(element)
            if input_type in ("checkbox", "radio"):
                return element.has_attribute("checked")
            raw = element.get_attribute("value")
            if input_type in ("number", "range"):
                return _parse_float(raw)
            return raw or None

        if tag == "textarea":
            return normalize_text(element.text_content) or None

        if tag == "select":
            options = [c for c in _descendants(element) if c.tag_name == "option"]
            chosen = next((o for o in options if o.has_attribute("selected")), None)
            if chosen is None and options:
                chosen = options[0]
            if chosen is None:
                return None
            return chosen.get_attribute("value") or normalize_text(chosen.text_content) or None

        return _parse_float(element.get_attribute("aria-valuenow"))

    # ------------------------------------------------------------------
    # Accessibility
    # ------------------------------------------------------------------

    def accessibility(self, element: ElementAdapter, role: SemanticRole, name: str) -> A11yInfo:
        tab_index = _parse_int(element.get_attribute("tabindex"))
        focusable = self.is_focusable(element)
        return A11yInfo(
            name=name,
            focusable=focusable,
            in_tab_order=focusable and (tab_index is None or tab_index >= 0),
            level=self.heading_level(element) if role == SemanticRole.HEADING else None,
            live=self._live(element),
            pos_in_set=_parse_int(element.get_attribute("aria-posinset")),
            set_size=_parse_int(element.get_attribute("aria-setsize")),
            description=compute_description(element),
            atomic=_is_true(element, "aria-atomic"),
            busy=_is_true(element, "aria-busy"),
            current=self._current(element),
            keyboard_shortcut=element.get_attribute("aria-keyshortcuts") or None,
            tab_index=tab_index,
        )

    @staticmethod
    def is_focusable(element: ElementAdapter) -> bool:
        if element.has_attribute("disabled"):
            return False
        tag = element.tag_name
        if tag in FOCUSABLE_TAGS:
            if tag == "a" and not element.has_attribute("href"):
                return _parse_int(element.get_attribute("tabindex")) is not None
            if tag == "input" and _input_type(element) == "hidden":
                return False
            return True
        if _parse_int(element.get_attribute("tabindex")) is not None:
            return True
        if element.has_attribute("contenteditable"):
            return (element.get_attribute("contenteditable") or "").strip().lower() in ("", "true")
        return False

    @staticmethod
    def heading_level(element: ElementAdapter) -> int | None:
        level = _parse_int(element.get_attribute("aria-level"))
        if level is not None and level > 0:
            return level
        match = _HEADING_TAG.match(element.tag_name)
        return int(match.group(1)) if match else None

    @staticmethod
    def _live(element: ElementAdapter) -> str | None:
        live = (element.get_attribute("aria-live") or "").strip().lower()
        if live in LIVE_VALUES:
            return live
        return IMPLICIT_LIVE.get((element.get_attribute("role") or "").strip().lower())

    @staticmethod
    def _current(element: ElementAdapter) -> str | None:
        current = (element.get_attribute("aria-current") or "").strip().lower()
        return current if current in CURRENT_VALUES else None

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @staticmethod
    def metadata(element: ElementAdapter) -> dict[str, Any]:
        """``data-semantic-*`` attributes, prefix stripped, JSON-decoded when possible."""
        result: dict[str, Any] = {}
        for name, raw in element.attributes.items():
            if not name.startswith(METADATA_PREFIX):
                continue
            key = name[len(METADATA_PREFIX):]
            try:
                result[key] = json.loads(raw)
            except ValueError:
                result[key] = raw
        return result


def _descendants(element: ElementAdapter):
    stack = list(reversed(element.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
