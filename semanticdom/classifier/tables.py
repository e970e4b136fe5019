"""Static classification tables: tag → role, input type → role, intent keywords."""

from __future__ import annotations

from semanticdom.core.types import SemanticIntent, SemanticRole, StateType

R = SemanticRole

TAG_ROLES: dict[str, SemanticRole] = {
    "a": R.LINK,
    "article": R.ARTICLE,
    "aside": R.ASIDE,
    "button": R.BUTTON,
    "details": R.GROUP,
    "dialog": R.DIALOG,
    "fieldset": R.GROUP,
    "figure": R.FIGURE,
    "footer": R.FOOTER,
    "form": R.FORM,
    "h1": R.HEADING,
    "h2": R.HEADING,
    "h3": R.HEADING,
    "h4": R.HEADING,
    "h5": R.HEADING,
    "h6": R.HEADING,
    "header": R.HEADER,
    "hr": R.SEPARATOR,
    "html": R.DOCUMENT,
    "img": R.IMG,
    "input": R.TEXTBOX,
    "li": R.LISTITEM,
    "main": R.MAIN,
    "menu": R.LIST,
    "nav": R.NAVIGATION,
    "ol": R.LIST,
    "option": R.OPTION,
    "progress": R.PROGRESSBAR,
    "search": R.SEARCH,
    "section": R.SECTION,
    "select": R.LISTBOX,
    "summary": R.BUTTON,
    "table": R.TABLE,
    "tbody": R.ROWGROUP,
    "textarea": R.TEXTBOX,
    "tfoot": R.ROWGROUP,
    "th": R.COLUMNHEADER,
    "thead": R.ROWGROUP,
    "tr": R.ROW,
    "ul": R.LIST,
}

# table roles whose <td> cells are interactive gridcells
GRID_ROLES = frozenset({"grid", "treegrid"})

# <input type=...>; unlisted types fall through to the tag table (textbox)
INPUT_TYPE_ROLES: dict[str, SemanticRole] = {
    "button": R.BUTTON,
    "checkbox": R.CHECKBOX,
    "hidden": R.GENERIC,
    "image": R.BUTTON,
    "number": R.SPINBUTTON,
    "radio": R.RADIO,
    "range": R.SLIDER,
    "reset": R.BUTTON,
    "search": R.SEARCHBOX,
    "submit": R.BUTTON,
}

# Ordered: the first keyword found in a button's name wins
BUTTON_INTENT_KEYWORDS: tuple[tuple[str, SemanticIntent], ...] = (
    ("submit", SemanticIntent.SUBMIT),
    ("search", SemanticIntent.SEARCH),
    ("cancel", SemanticIntent.CANCEL),
    ("close", SemanticIntent.CLOSE),
    ("delete", SemanticIntent.DELETE),
    ("confirm", SemanticIntent.CONFIRM),
)

ROLE_INTENTS: dict[SemanticRole, SemanticIntent] = {
    R.LINK: SemanticIntent.NAVIGATE,
    R.CHECKBOX: SemanticIntent.TOGGLE,
    R.RADIO: SemanticIntent.TOGGLE,
    R.SWITCH: SemanticIntent.TOGGLE,
    R.TEXTBOX: SemanticIntent.INPUT,
    R.SPINBUTTON: SemanticIntent.INPUT,
    R.SEARCHBOX: SemanticIntent.SEARCH,
    R.LISTBOX: SemanticIntent.SELECT,
    R.OPTION: SemanticIntent.SELECT,
    R.COMBOBOX: SemanticIntent.SELECT,
}

# Roles whose accessible name may come from their own text content
NAME_FROM_CONTENT_ROLES: frozenset[SemanticRole] = frozenset({
    R.BUTTON,
    R.LINK,
    R.MENUITEM,
    R.TAB,
    R.OPTION,
    R.TREEITEM,
    R.HEADING,
    R.GRIDCELL,
    R.TOOLTIP,
    R.SWITCH,
})

FOCUSABLE_TAGS = frozenset({"a", "button", "input", "select", "textarea"})

LIVE_VALUES = frozenset({"off", "polite", "assertive"})
IMPLICIT_LIVE: dict[str, str] = {"alert": "assertive", "status": "polite"}

CURRENT_VALUES = frozenset({"page", "step", "location", "date", "time", "true", "false"})

# aria-checked values → state
CHECKED_STATES: dict[str, StateType] = {
    "true": StateType.CHECKED,
    "false": StateType.UNCHECKED,
    "mixed": StateType.INDETERMINATE,
}

EXPANDED_STATES: dict[str, StateType] = {
    "true": StateType.EXPANDED,
    "false": StateType.COLLAPSED,
}

METADATA_PREFIX = "data-semantic-"
INTENT_ATTRIBUTES = ("data-semantic-intent", "data-agent-intent")
