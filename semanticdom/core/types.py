"""Shared types and dataclasses for SemanticDOM."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union

STANDARD = "ISO/IEC-SDOM-SSG-DRAFT-2024"
VERSION = "1.0.0"
MAX_HISTORY = 100

NodeValue = Union[str, float, bool]


class SemanticRole(str, Enum):
    DOCUMENT = "document"
    ARTICLE = "article"
    SECTION = "section"
    NAVIGATION = "navigation"
    MAIN = "main"
    HEADER = "header"
    FOOTER = "footer"
    ASIDE = "aside"
    BANNER = "banner"
    CONTENTINFO = "contentinfo"
    COMPLEMENTARY = "complementary"
    SEARCH = "search"
    FORM = "form"
    BUTTON = "button"
    LINK = "link"
    TEXTBOX = "textbox"
    SEARCHBOX = "searchbox"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SWITCH = "switch"
    COMBOBOX = "combobox"
    LISTBOX = "listbox"
    OPTION = "option"
    MENU = "menu"
    MENUITEM = "menuitem"
    DIALOG = "dialog"
    ALERT = "alert"
    STATUS = "status"
    PROGRESSBAR = "progressbar"
    SLIDER = "slider"
    SPINBUTTON = "spinbutton"
    TABLIST = "tablist"
    TAB = "tab"
    TABPANEL = "tabpanel"
    TREE = "tree"
    TREEITEM = "treeitem"
    GRID = "grid"
    GRIDCELL = "gridcell"
    ROW = "row"
    ROWGROUP = "rowgroup"
    COLUMNHEADER = "columnheader"
    ROWHEADER = "rowheader"
    IMG = "img"
    FIGURE = "figure"
    TABLE = "table"
    HEADING = "heading"
    LIST = "list"
    LISTITEM = "listitem"
    LANDMARK = "landmark"
    REGION = "region"
    GROUP = "group"
    SEPARATOR = "separator"
    TOOLTIP = "tooltip"
    GENERIC = "generic"

    @classmethod
    def parse(cls, value: str | None) -> SemanticRole | None:
        """Return the member named by *value*, or None if it is not in the closed set."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class SemanticIntent(str, Enum):
    NAVIGATE = "navigate"
    SUBMIT = "submit"
    INPUT = "input"
    TOGGLE = "toggle"
    SELECT = "select"
    EXPAND = "expand"
    COLLAPSE = "collapse"
    OPEN = "open"
    CLOSE = "close"
    SEARCH = "search"
    FILTER = "filter"
    SORT = "sort"
    PAGINATE = "paginate"
    SCROLL = "scroll"
    UPLOAD = "upload"
    DOWNLOAD = "download"
    PLAY = "play"
    PAUSE = "pause"
    STOP = "stop"
    MUTE = "mute"
    UNMUTE = "unmute"
    ZOOM = "zoom"
    EDIT = "edit"
    DELETE = "delete"
    CREATE = "create"
    COPY = "copy"
    PASTE = "paste"
    UNDO = "undo"
    REDO = "redo"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    DISMISS = "dismiss"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value: str | None) -> SemanticIntent | None:
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class StateType(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
    DISABLED = "disabled"
    ENABLED = "enabled"
    SELECTED = "selected"
    UNSELECTED = "unselected"
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"
    CHECKED = "checked"
    UNCHECKED = "unchecked"
    INDETERMINATE = "indeterminate"
    FOCUSED = "focused"
    BLURRED = "blurred"
    PRESSED = "pressed"
    VALID = "valid"
    INVALID = "invalid"
    REQUIRED = "required"
    OPTIONAL = "optional"
    READONLY = "readonly"
    EDITABLE = "editable"
    VISIBLE = "visible"
    HIDDEN = "hidden"
    DRAGGING = "dragging"
    DROPPING = "dropping"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class CheckCategory(str, Enum):
    STRUCTURE = "structure"
    A11Y = "a11y"
    NAVIGATION = "navigation"
    STATE = "state"
    INTEROPERABILITY = "interoperability"


class CertificationLevel(str, Enum):
    NONE = "none"
    BASIC = "basic"
    STANDARD = "standard"
    ADVANCED = "advanced"
    FULL = "full"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @classmethod
    def from_score(cls, score: int) -> CertificationLevel:
        """Fixed thresholds: full >= 90, advanced >= 80, standard >= 70, basic >= 50."""
        if score >= 90:
            return cls.FULL
        if score >= 80:
            return cls.ADVANCED
        if score >= 70:
            return cls.STANDARD
        if score >= 50:
            return cls.BASIC
        return cls.NONE

    # str's lexical ordering would put "advanced" below "basic"
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CertificationLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, CertificationLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, CertificationLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, CertificationLevel):
            return NotImplemented
        return self.rank >= other.rank


_LEVEL_ORDER = list(CertificationLevel)


class NavigationDirection(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    FIRST = "first"
    LAST = "last"
    PARENT = "parent"
    FIRST_CHILD = "first_child"
    LAST_CHILD = "last_child"
    NEXT_SIBLING = "next_sibling"
    PREVIOUS_SIBLING = "previous_sibling"


LANDMARK_ROLES: frozenset[SemanticRole] = frozenset({
    SemanticRole.MAIN,
    SemanticRole.NAVIGATION,
    SemanticRole.BANNER,
    SemanticRole.HEADER,
    SemanticRole.CONTENTINFO,
    SemanticRole.FOOTER,
    SemanticRole.COMPLEMENTARY,
    SemanticRole.ASIDE,
    SemanticRole.FORM,
    SemanticRole.REGION,
    SemanticRole.SEARCH,
})

INTERACTIVE_ROLES: frozenset[SemanticRole] = frozenset({
    SemanticRole.BUTTON,
    SemanticRole.LINK,
    SemanticRole.TEXTBOX,
    SemanticRole.SEARCHBOX,
    SemanticRole.CHECKBOX,
    SemanticRole.RADIO,
    SemanticRole.SWITCH,
    SemanticRole.COMBOBOX,
    SemanticRole.LISTBOX,
    SemanticRole.OPTION,
    SemanticRole.MENU,
    SemanticRole.MENUITEM,
    SemanticRole.SLIDER,
    SemanticRole.SPINBUTTON,
    SemanticRole.TAB,
    SemanticRole.TREEITEM,
    SemanticRole.GRIDCELL,
})


@dataclass(frozen=True)
class Bounds:
    """Best-effort element geometry reported by the adapter."""

    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


@dataclass(frozen=True)
class A11yInfo:
    """Accessibility properties of a semantic node."""

    name: str = ""
    focusable: bool = False
    in_tab_order: bool = False
    level: int | None = None  # headings only
    live: str | None = None  # "off", "polite", "assertive"
    pos_in_set: int | None = None
    set_size: int | None = None
    description: str | None = None
    atomic: bool = False
    busy: bool = False
    current: str | None = None
    keyboard_shortcut: str | None = None
    tab_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "focusable": self.focusable,
            "inTabOrder": self.in_tab_order,
        }
        optional = {
            "level": self.level,
            "live": self.live,
            "posInSet": self.pos_in_set,
            "setSize": self.set_size,
            "description": self.description,
            "current": self.current,
            "keyboardShortcut": self.keyboard_shortcut,
            "tabIndex": self.tab_index,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        if self.atomic:
            result["atomic"] = True
        if self.busy:
            result["busy"] = True
        return result


@dataclass(frozen=True, eq=False)
class SemanticNode:
    """
    One markup element's semantic projection.

    Nodes are immutable and compared by identity. ``parent`` is the owning
    node's id, resolved through the document index, never a live reference.
    """

    id: str
    role: SemanticRole
    label: str
    tag: str = ""
    state: StateType = StateType.IDLE
    intent: SemanticIntent | None = None
    state_flags: frozenset[StateType] = frozenset()
    value: NodeValue | None = None
    selector: str = ""
    path: str = ""
    accessibility: A11yInfo = field(default_factory=A11yInfo)
    children: tuple[SemanticNode, ...] = ()
    parent: str | None = None
    bounds: Bounds | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    source_id: str | None = None  # explicit id as authored, before disambiguation
    placeholder: bool = False

    @property
    def is_interactive(self) -> bool:
        return self.role in INTERACTIVE_ROLES

    @property
    def is_landmark(self) -> bool:
        return self.role in LANDMARK_ROLES

    @property
    def is_visible(self) -> bool:
        return self.state != StateType.HIDDEN

    @property
    def is_focusable(self) -> bool:
        return self.accessibility.focusable

    def iter_nodes(self) -> Iterator[SemanticNode]:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "role": self.role.value,
            "label": self.label,
            "state": self.state.value,
            "selector": self.selector,
            "xpath": self.path,
            "a11y": self.accessibility.to_dict(),
            "children": [c.to_dict() for c in self.children],
        }
        if self.intent is not None:
            result["intent"] = self.intent.value
        if self.state_flags:
            result["stateFlags"] = {flag.value: True for flag in sorted(self.state_flags)}
        if self.value is not None:
            result["value"] = self.value
        if self.parent is not None:
            result["parent"] = self.parent
        if self.bounds is not None:
            result["bounds"] = self.bounds.to_dict()
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass(frozen=True)
class StateTransition:
    from_state: StateType
    to_state: StateType
    trigger: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_state.value, "to": self.to_state.value, "trigger": self.trigger}


@dataclass(frozen=True)
class StateHistoryEntry:
    from_state: StateType
    to_state: StateType
    trigger: str
    timestamp: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_state.value,
            "to": self.to_state.value,
            "trigger": self.trigger,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class SSGNode:
    """Semantic State Graph entry: static transition table plus the build-time state."""

    semantic_id: str
    current_state: StateType
    transitions: tuple[StateTransition, ...]
    history: tuple[StateHistoryEntry, ...] = ()
    max_history: int = MAX_HISTORY

    def find(self, state: StateType, trigger: str) -> StateTransition | None:
        """First transition leaving *state* on *trigger*, if any."""
        for t in self.transitions:
            if t.from_state == state and t.trigger == trigger:
                return t
        return None

    def triggers_from(self, state: StateType) -> list[str]:
        return [t.trigger for t in self.transitions if t.from_state == state]

    def is_deterministic(self) -> bool:
        """True when no two transitions share the same (from, trigger) pair."""
        seen: set[tuple[StateType, str]] = set()
        for t in self.transitions:
            key = (t.from_state, t.trigger)
            if key in seen:
                return False
            seen.add(key)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "semanticId": self.semantic_id,
            "currentState": self.current_state.value,
            "transitions": [t.to_dict() for t in self.transitions],
            "history": [h.to_dict() for h in self.history],
            "maxHistory": self.max_history,
        }


@dataclass(frozen=True)
class ValidationCheck:
    """Result of one certification check."""

    id: str
    name: str
    category: CheckCategory
    passed: bool
    message: str
    severity: Severity | None = None  # set on failures only
    nodes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "passed": self.passed,
            "message": self.message,
        }
        if self.severity is not None:
            result["severity"] = self.severity.value
        if self.nodes:
            result["nodes"] = list(self.nodes)
        return result


@dataclass(frozen=True)
class CertificationStats:
    total_checks: int = 0
    passed_checks: int = 0
    landmark_count: int = 0
    interactable_count: int = 0
    heading_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalChecks": self.total_checks,
            "passedChecks": self.passed_checks,
            "landmarkCount": self.landmark_count,
            "interactableCount": self.interactable_count,
            "headingCount": self.heading_count,
        }


@dataclass(frozen=True)
class AgentCertification:
    level: CertificationLevel
    score: int
    checks: tuple[ValidationCheck, ...] = ()
    failures: tuple[ValidationCheck, ...] = ()
    certified_at: int | None = None
    stats: CertificationStats = field(default_factory=CertificationStats)

    @classmethod
    def empty(cls) -> AgentCertification:
        return cls(level=CertificationLevel.NONE, score=0)

    def failure(self, check_id: str) -> ValidationCheck | None:
        return next((f for f in self.failures if f.id == check_id), None)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "level": self.level.value,
            "score": self.score,
            "checks": [c.to_dict() for c in self.checks],
            "failures": [f.to_dict() for f in self.failures],
            "stats": self.stats.to_dict(),
        }
        if self.certified_at is not None:
            result["certifiedAt"] = self.certified_at
        return result


@dataclass(frozen=True)
class SemanticDocument:
    """Immutable snapshot produced by one parse call."""

    root: SemanticNode
    index: Mapping[str, SemanticNode]
    landmarks: tuple[SemanticNode, ...]
    interactables: tuple[SemanticNode, ...]
    state_graph: Mapping[str, SSGNode]
    certification: AgentCertification
    url: str = ""
    title: str = ""
    language: str = "en"
    generated_at: int = 0
    target_certification: CertificationLevel = CertificationLevel.STANDARD
    version: str = VERSION
    standard: str = STANDARD

    def __post_init__(self) -> None:
        if not isinstance(self.index, MappingProxyType):
            object.__setattr__(self, "index", MappingProxyType(dict(self.index)))
        if not isinstance(self.state_graph, MappingProxyType):
            object.__setattr__(self, "state_graph", MappingProxyType(dict(self.state_graph)))

    def get(self, node_id: str) -> SemanticNode | None:
        """O(1) lookup by semantic id."""
        return self.index.get(node_id)

    def flat_nodes(self) -> list[SemanticNode]:
        """Return all nodes as a flat list (pre-order, depth-first)."""
        return list(self.root.iter_nodes())

    @property
    def meets_target(self) -> bool:
        return self.certification.level >= self.target_certification

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "standard": self.standard,
            "url": self.url,
            "title": self.title,
            "language": self.language,
            "generatedAt": self.generated_at,
            "root": self.root.to_dict(),
            "landmarks": [n.id for n in self.landmarks],
            "interactables": [n.id for n in self.interactables],
            "stateGraph": {k: v.to_dict() for k, v in self.state_graph.items()},
            "agentReady": self.certification.to_dict(),
        }


@dataclass
class NodeChange:
    """A change to a single node between two SemanticDocument snapshots."""

    id: str
    role: SemanticRole
    label: str
    changed_props: dict[str, tuple[Any, Any]]  # prop -> (old, new)


@dataclass
class DocumentDelta:
    """The diff between two SemanticDocument snapshots of the same page."""

    added: list[SemanticNode] = field(default_factory=list)
    removed: list[SemanticNode] = field(default_factory=list)
    changed: list[NodeChange] = field(default_factory=list)
    unchanged_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed and not self.changed

    @property
    def total_changes(self) -> int:
        return len(self.added) + len(self.removed) + len(self.changed)
