"""Tests for transition tables, graph synthesis and the runtime StateStore."""

import pytest

from semanticdom import parse_html
from semanticdom.core.errors import SemanticDOMError, TransitionError
from semanticdom.core.types import SemanticRole, StateType
from semanticdom.state.store import StateStore
from semanticdom.state.synthesizer import StateGraphSynthesizer, is_stateful
from semanticdom.state.transitions import DEFAULT_TRANSITIONS, ENABLE, transitions_for

FORM = (
    "<main>"
    "<input type='text' aria-label='Name'>"
    "<button>Save</button>"
    "<button disabled>Locked</button>"
    "<input type='checkbox' aria-label='Agree'>"
    "<div aria-expanded='false' aria-label='Menu'>Menu</div>"
    "<script>var x;</script>"
    "</main>"
)


def node_by_label(doc, label):
    return next(n for n in doc.flat_nodes() if n.label == label)


# ---------------------------------------------------------------------------
# Transition tables
# ---------------------------------------------------------------------------

class TestTransitions:
    def test_button_table(self):
        triggers = [(t.from_state, t.trigger, t.to_state) for t in transitions_for(SemanticRole.BUTTON)]
        assert (StateType.IDLE, "focus", StateType.FOCUSED) in triggers
        assert (StateType.FOCUSED, "mousedown", StateType.PRESSED) in triggers

    def test_unknown_role_gets_focus_blur(self):
        assert transitions_for(SemanticRole.GENERIC) == DEFAULT_TRANSITIONS

    def test_disabled_start_gets_enable_first(self):
        table = transitions_for(SemanticRole.BUTTON, StateType.DISABLED)
        assert table[0] == ENABLE
        assert table[1:] == transitions_for(SemanticRole.BUTTON)

    def test_checkbox_toggles_both_ways(self):
        table = transitions_for(SemanticRole.CHECKBOX)
        pairs = {(t.from_state, t.to_state) for t in table if t.trigger == "toggle"}
        assert (StateType.UNCHECKED, StateType.CHECKED) in pairs
        assert (StateType.CHECKED, StateType.UNCHECKED) in pairs


# ---------------------------------------------------------------------------
# Synthesizer
# ---------------------------------------------------------------------------

class TestSynthesizer:
    def setup_method(self):
        self.doc = parse_html(FORM)

    def test_interactables_are_all_in_graph(self):
        for node in self.doc.interactables:
            entry = self.doc.state_graph[node.id]
            assert entry.current_state == node.state
            assert entry.transitions
            assert entry.history == ()

    def test_non_idle_structural_nodes_are_stateful(self):
        menu = node_by_label(self.doc, "Menu")
        assert menu.role == SemanticRole.GENERIC
        assert menu.state == StateType.COLLAPSED
        assert menu.id in self.doc.state_graph

    def test_placeholders_and_idle_structure_are_not(self):
        script = next(n for n in self.doc.flat_nodes() if n.tag == "script")
        assert script.placeholder
        assert not is_stateful(script)
        assert script.id not in self.doc.state_graph
        assert self.doc.root.id not in self.doc.state_graph

    def test_disabled_node_can_be_enabled(self):
        locked = node_by_label(self.doc, "Locked")
        assert self.doc.state_graph[locked.id].transitions[0] == ENABLE

    def test_custom_history_bound(self):
        entry = StateGraphSynthesizer(max_history=5).node(node_by_label(self.doc, "Save"))
        assert entry.max_history == 5


# ---------------------------------------------------------------------------
# StateStore
# ---------------------------------------------------------------------------

class TestStateStore:
    def setup_method(self):
        self.doc = parse_html(FORM)
        self.store = StateStore.from_document(self.doc)
        self.save = node_by_label(self.doc, "Save").id
        self.name = node_by_label(self.doc, "Name").id

    def test_seeded_from_document(self):
        assert len(self.store) == len(self.doc.state_graph)
        assert self.save in self.store
        assert self.store.get(self.save) == StateType.IDLE
        assert self.store.get("missing") is None

    def test_apply_moves_state_and_records_history(self):
        assert self.store.apply(self.save, "focus") == StateType.FOCUSED
        assert self.store.apply(self.save, "mousedown") == StateType.PRESSED
        history = self.store.history(self.save)
        assert [(h.from_state, h.to_state, h.trigger) for h in history] == [
            (StateType.IDLE, StateType.FOCUSED, "focus"),
            (StateType.FOCUSED, StateType.PRESSED, "mousedown"),
        ]
        assert history[0].timestamp <= history[1].timestamp

    def test_document_is_untouched(self):
        self.store.apply(self.save, "focus")
        assert self.doc.get(self.save).state == StateType.IDLE
        assert self.doc.state_graph[self.save].current_state == StateType.IDLE

    def test_unknown_trigger(self):
        with pytest.raises(TransitionError) as exc:
            self.store.apply(self.save, "mouseup")
        assert exc.value.node_id == self.save
        assert exc.value.trigger == "mouseup"
        assert self.store.get(self.save) == StateType.IDLE

    def test_unknown_node(self):
        with pytest.raises(SemanticDOMError):
            self.store.apply("missing", "focus")

    def test_ambiguous_trigger_resolved_by_target(self):
        self.store.apply(self.name, "input")
        assert self.store.apply(self.name, "validate", to_state=StateType.INVALID) == StateType.INVALID

    def test_ambiguous_trigger_defaults_to_first_listed(self):
        self.store.apply(self.name, "input")
        assert self.store.apply(self.name, "validate") == StateType.VALID

    def test_available_triggers_are_deduplicated(self):
        self.store.apply(self.name, "input")
        assert self.store.available_triggers(self.name) == ["validate"]
        assert self.store.available_triggers("missing") == []

    def test_history_is_bounded(self):
        store = StateStore.from_document(self.doc, max_history=3)
        for _ in range(4):
            store.apply(self.save, "focus")
            store.apply(self.save, "blur")
        history = store.history(self.save)
        assert len(history) == 3
        assert history[-1].trigger == "blur"

    def test_set_bypasses_table(self):
        self.store.set(self.save, StateType.LOADING)
        assert self.store.get(self.save) == StateType.LOADING
        assert self.store.history(self.save)[-1].trigger == "set"

    def test_snapshot(self):
        self.store.apply(self.save, "focus")
        snap = self.store.snapshot(self.save)
        assert snap.current_state == StateType.FOCUSED
        assert len(snap.history) == 1
        assert snap.transitions == self.doc.state_graph[self.save].transitions
        assert self.store.snapshot("missing") is None

    def test_subscribe_and_unsubscribe(self):
        events = []
        unsubscribe = self.store.subscribe(lambda *args: events.append(args))
        self.store.apply(self.save, "focus")
        unsubscribe()
        self.store.apply(self.save, "blur")
        assert events == [(self.save, StateType.IDLE, StateType.FOCUSED)]
        unsubscribe()

    def test_reset(self):
        self.store.apply(self.save, "focus")
        self.store.reset()
        assert self.store.get(self.save) == StateType.IDLE
        assert self.store.history(self.save) == []
