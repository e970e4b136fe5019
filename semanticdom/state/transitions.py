"""Static per-role state transition tables."""

from __future__ import annotations

from semanticdom.core.types import SemanticRole, StateTransition, StateType

R = SemanticRole
S = StateType


def _t(from_state: StateType, to_state: StateType, trigger: str) -> StateTransition:
    return StateTransition(from_state, to_state, trigger)


_FOCUS_BLUR = (
    _t(S.IDLE, S.FOCUSED, "focus"),
    _t(S.FOCUSED, S.IDLE, "blur"),
)

_SELECTABLE = (
    _t(S.UNSELECTED, S.SELECTED, "select"),
    _t(S.SELECTED, S.UNSELECTED, "deselect"),
)

_EXPANDABLE = (
    _t(S.COLLAPSED, S.EXPANDED, "expand"),
    _t(S.EXPANDED, S.COLLAPSED, "collapse"),
)

_TEXT_ENTRY = (
    _t(S.IDLE, S.FOCUSED, "input"),
    _t(S.FOCUSED, S.VALID, "validate"),
    _t(S.FOCUSED, S.INVALID, "validate"),
    _t(S.VALID, S.IDLE, "blur"),
    _t(S.INVALID, S.IDLE, "blur"),
)

_RANGE = (
    _t(S.IDLE, S.FOCUSED, "focus"),
    _t(S.FOCUSED, S.DRAGGING, "drag"),
    _t(S.DRAGGING, S.FOCUSED, "drop"),
    _t(S.FOCUSED, S.IDLE, "blur"),
)

_DISCLOSURE = (
    _t(S.HIDDEN, S.VISIBLE, "open"),
    _t(S.VISIBLE, S.HIDDEN, "close"),
)

ROLE_TRANSITIONS: dict[SemanticRole, tuple[StateTransition, ...]] = {
    R.BUTTON: (
        _t(S.IDLE, S.FOCUSED, "focus"),
        _t(S.FOCUSED, S.PRESSED, "mousedown"),
        _t(S.PRESSED, S.FOCUSED, "mouseup"),
        _t(S.FOCUSED, S.IDLE, "blur"),
    ),
    R.LINK: _FOCUS_BLUR + (_t(S.FOCUSED, S.LOADING, "navigate"),),
    R.CHECKBOX: (
        _t(S.UNCHECKED, S.CHECKED, "toggle"),
        _t(S.CHECKED, S.UNCHECKED, "toggle"),
        _t(S.INDETERMINATE, S.CHECKED, "toggle"),
    ),
    R.RADIO: (_t(S.UNCHECKED, S.CHECKED, "select"),),
    R.SWITCH: (
        _t(S.UNCHECKED, S.CHECKED, "toggle"),
        _t(S.CHECKED, S.UNCHECKED, "toggle"),
    ),
    R.TEXTBOX: _TEXT_ENTRY,
    R.SEARCHBOX: _TEXT_ENTRY,
    R.COMBOBOX: _EXPANDABLE,
    R.MENU: _EXPANDABLE,
    R.LISTBOX: (
        _t(S.IDLE, S.FOCUSED, "focus"),
        _t(S.FOCUSED, S.SELECTED, "select"),
        _t(S.SELECTED, S.IDLE, "blur"),
    ),
    R.OPTION: _SELECTABLE,
    R.TAB: _SELECTABLE,
    R.MENUITEM: _SELECTABLE,
    R.GRIDCELL: _SELECTABLE,
    R.TREEITEM: _EXPANDABLE + _SELECTABLE,
    R.SLIDER: _RANGE,
    R.SPINBUTTON: _RANGE,
    R.DIALOG: _DISCLOSURE,
    R.TABPANEL: _DISCLOSURE,
    R.ALERT: (
        _t(S.HIDDEN, S.VISIBLE, "show"),
        _t(S.VISIBLE, S.HIDDEN, "dismiss"),
    ),
    R.STATUS: (
        _t(S.HIDDEN, S.VISIBLE, "show"),
        _t(S.VISIBLE, S.HIDDEN, "dismiss"),
    ),
}

DEFAULT_TRANSITIONS: tuple[StateTransition, ...] = _FOCUS_BLUR

ENABLE = _t(S.DISABLED, S.IDLE, "enable")


def transitions_for(role: SemanticRole, initial_state: StateType = StateType.IDLE) -> tuple[StateTransition, ...]:
    """
    Transition table for *role*. Nodes that start disabled get an
    ``enable`` transition back to idle in front of the role table.
    """
    table = ROLE_TRANSITIONS.get(role, DEFAULT_TRANSITIONS)
    if initial_state == StateType.DISABLED:
        return (ENABLE,) + table
    return table
