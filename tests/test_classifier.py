"""Tests for role/intent/state inference, naming, values and accessibility info."""

import pytest

from semanticdom.adapters.soup import SoupDocument, SoupElement
from semanticdom.classifier.classifier import Classifier
from semanticdom.classifier.naming import compute_accessible_name, normalize_text
from semanticdom.core.types import SemanticIntent, SemanticRole, StateType


def find(html: str, name: str, index: int = 0) -> SoupElement:
    doc = SoupDocument.from_html(html)
    return SoupElement(doc.soup.find_all(name)[index], doc)


def classify(html: str, name: str, classifier: Classifier | None = None):
    return (classifier or Classifier()).classify(find(html, name))


# ---------------------------------------------------------------------------
# Role
# ---------------------------------------------------------------------------

class TestRole:
    @pytest.mark.parametrize("html,tag,role", [
        ("<nav>x</nav>", "nav", SemanticRole.NAVIGATION),
        ("<main>x</main>", "main", SemanticRole.MAIN),
        ("<a href='/'>x</a>", "a", SemanticRole.LINK),
        ("<a name='top'>x</a>", "a", SemanticRole.GENERIC),
        ("<input type='checkbox'>", "input", SemanticRole.CHECKBOX),
        ("<input type='radio'>", "input", SemanticRole.RADIO),
        ("<input type='range'>", "input", SemanticRole.SLIDER),
        ("<input type='submit'>", "input", SemanticRole.BUTTON),
        ("<input type='search'>", "input", SemanticRole.SEARCHBOX),
        ("<input type='number'>", "input", SemanticRole.SPINBUTTON),
        ("<input type='email'>", "input", SemanticRole.TEXTBOX),
        ("<input>", "input", SemanticRole.TEXTBOX),
        ("<select><option>a</option></select>", "select", SemanticRole.LISTBOX),
        ("<h3>x</h3>", "h3", SemanticRole.HEADING),
        ("<span>x</span>", "span", SemanticRole.GENERIC),
        ("<menu><li>x</li></menu>", "menu", SemanticRole.LIST),
        ("<table><tr><td>x</td></tr></table>", "td", SemanticRole.GENERIC),
        ("<table><tr><th>x</th></tr></table>", "th", SemanticRole.COLUMNHEADER),
        ("<table role='grid'><tr><td>x</td></tr></table>", "td", SemanticRole.GRIDCELL),
    ])
    def test_tag_roles(self, html, tag, role):
        assert classify(html, tag).role == role

    def test_explicit_aria_role_wins(self):
        assert classify('<div role="button">x</div>', "div").role == SemanticRole.BUTTON
        assert classify('<a href="/" role="tab">x</a>', "a").role == SemanticRole.TAB

    def test_invalid_aria_role_falls_through(self):
        assert classify('<div role="bogus-role">x</div>', "div").role == SemanticRole.GENERIC
        assert classify('<nav role="bogus">x</nav>', "nav").role == SemanticRole.NAVIGATION

    def test_first_recognised_role_token_wins(self):
        assert classify('<div role="fancy switch">x</div>', "div").role == SemanticRole.SWITCH

    def test_role_override_beats_tag_table_but_not_aria(self):
        classifier = Classifier(role_mapping={"div": SemanticRole.REGION, "button": SemanticRole.LINK})
        assert classify("<div>x</div>", "div", classifier).role == SemanticRole.REGION
        assert classify("<button>x</button>", "button", classifier).role == SemanticRole.LINK
        assert classify('<div role="alert">x</div>', "div", classifier).role == SemanticRole.ALERT


# ---------------------------------------------------------------------------
# Intent
# ---------------------------------------------------------------------------

class TestIntent:
    @pytest.mark.parametrize("label,intent", [
        ("Submit order", SemanticIntent.SUBMIT),
        ("Search", SemanticIntent.SEARCH),
        ("Cancel", SemanticIntent.CANCEL),
        ("Close dialog", SemanticIntent.CLOSE),
        ("DELETE account", SemanticIntent.DELETE),
        ("Confirm", SemanticIntent.CONFIRM),
        ("Menu", SemanticIntent.TOGGLE),
    ])
    def test_button_keywords(self, label, intent):
        assert classify(f"<button>{label}</button>", "button").intent == intent

    def test_keyword_priority_order(self):
        # "submit" is checked before "search"
        assert classify("<button>Search and submit</button>", "button").intent == SemanticIntent.SUBMIT
        assert classify("<button>Cancel search</button>", "button").intent == SemanticIntent.SEARCH

    def test_keywords_match_aria_label(self):
        html = '<button aria-label="Close">X</button>'
        assert classify(html, "button").intent == SemanticIntent.CLOSE

    def test_submit_type_without_keyword(self):
        assert classify('<button type="submit">Go</button>', "button").intent == SemanticIntent.SUBMIT

    @pytest.mark.parametrize("html,tag,intent", [
        ("<a href='/'>Home</a>", "a", SemanticIntent.NAVIGATE),
        ("<input type='checkbox'>", "input", SemanticIntent.TOGGLE),
        ("<input type='radio'>", "input", SemanticIntent.TOGGLE),
        ("<input type='text'>", "input", SemanticIntent.INPUT),
        ("<textarea></textarea>", "textarea", SemanticIntent.INPUT),
        ("<select></select>", "select", SemanticIntent.SELECT),
        ("<p>text</p>", "p", None),
        ("<nav>x</nav>", "nav", None),
    ])
    def test_role_heuristics(self, html, tag, intent):
        assert classify(html, tag).intent == intent

    def test_data_attribute_is_verbatim(self):
        assert classify('<div data-semantic-intent="delete">x</div>', "div").intent == SemanticIntent.DELETE
        assert classify('<div data-agent-intent="upload">x</div>', "div").intent == SemanticIntent.UPLOAD

    def test_unknown_data_intent_is_ignored(self):
        assert classify('<a href="/" data-semantic-intent="teleport">x</a>', "a").intent == SemanticIntent.NAVIGATE

    def test_override_map_between_attribute_and_heuristic(self):
        classifier = Classifier(intent_mapping={"button": SemanticIntent.DOWNLOAD})
        assert classify("<button>Submit</button>", "button", classifier).intent == SemanticIntent.DOWNLOAD
        html = '<button data-semantic-intent="copy">Submit</button>'
        assert classify(html, "button", classifier).intent == SemanticIntent.COPY


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

class TestState:
    @pytest.mark.parametrize("html,tag,state", [
        ("<button disabled>x</button>", "button", StateType.DISABLED),
        ('<div aria-disabled="true">x</div>', "div", StateType.DISABLED),
        ('<div aria-busy="true">x</div>', "div", StateType.LOADING),
        ('<input aria-invalid="true">', "input", StateType.INVALID),
        ('<div role="tab" aria-selected="true">x</div>', "div", StateType.SELECTED),
        ('<button aria-expanded="true">x</button>', "button", StateType.EXPANDED),
        ('<button aria-expanded="false">x</button>', "button", StateType.COLLAPSED),
        ('<div role="checkbox" aria-checked="true">x</div>', "div", StateType.CHECKED),
        ('<div role="checkbox" aria-checked="false">x</div>', "div", StateType.UNCHECKED),
        ('<div role="checkbox" aria-checked="mixed">x</div>', "div", StateType.INDETERMINATE),
        ("<input type='checkbox' checked>", "input", StateType.CHECKED),
        ("<input type='checkbox'>", "input", StateType.UNCHECKED),
        ("<div hidden>x</div>", "div", StateType.HIDDEN),
        ('<div aria-hidden="true">x</div>', "div", StateType.HIDDEN),
        ("<div>x</div>", "div", StateType.IDLE),
        ('<div aria-busy="false">x</div>', "div", StateType.IDLE),
    ])
    def test_ladder(self, html, tag, state):
        assert classify(html, tag).state == state

    def test_first_match_wins(self):
        html = '<div aria-selected="true" disabled aria-busy="true">x</div>'
        assert classify(html, "div").state == StateType.DISABLED
        html = '<div aria-busy="true" aria-invalid="true">x</div>'
        assert classify(html, "div").state == StateType.LOADING
        html = '<div aria-expanded="true" hidden>x</div>'
        assert classify(html, "div").state == StateType.EXPANDED

    def test_state_flags(self):
        flags = classify("<input required readonly>", "input").state_flags
        assert flags == frozenset({StateType.REQUIRED, StateType.READONLY})
        flags = classify('<div aria-required="true" aria-readonly="true">x</div>', "div").state_flags
        assert flags == frozenset({StateType.REQUIRED, StateType.READONLY})
        assert classify("<button disabled>x</button>", "button").state_flags == frozenset({StateType.DISABLED})
        assert classify("<p>x</p>", "p").state_flags == frozenset()


# ---------------------------------------------------------------------------
# Accessible name
# ---------------------------------------------------------------------------

class TestAccessibleName:
    def test_labelledby_resolves_all_ids(self):
        html = '<span id="l1">First</span><span id="l2">Name</span><input aria-labelledby="l1 l2" aria-label="X">'
        assert classify(html, "input").label == "First Name"

    def test_labelledby_with_unknown_ids_falls_through(self):
        html = '<input aria-labelledby="nope" aria-label="Fallback">'
        assert classify(html, "input").label == "Fallback"

    def test_aria_label_beats_label_for(self):
        html = '<label for="e">Email</label><input id="e" aria-label="Work email">'
        assert classify(html, "input").label == "Work email"

    def test_label_for(self):
        html = '<label for="email">Email  address</label><input id="email">'
        info = classify(html, "input")
        assert info.label == "Email address"
        assert info.accessibility.name == "Email address"

    def test_button_text_is_normalized(self):
        assert classify("<button>  Save\n   changes </button>", "button").label == "Save changes"

    def test_nested_text_for_links(self):
        assert classify("<a href='/'><span>Go</span> <b>home</b></a>", "a").label == "Go home"

    def test_content_not_used_for_generic_roles(self):
        assert classify("<div>Some text</div>", "div").label == ""
        assert classify('<div title="Tip">Some text</div>', "div").label == "Tip"

    def test_img_alt_then_title(self):
        assert classify('<img alt="Logo" title="T">', "img").label == "Logo"
        assert classify('<img title="T">', "img").label == "T"

    def test_input_buttons(self):
        assert classify('<input type="submit">', "input").label == "Submit"
        assert classify('<input type="reset">', "input").label == "Reset"
        assert classify('<input type="button" value="Go">', "input").label == "Go"

    def test_image_input_uses_alt(self):
        assert classify('<input type="image" alt="Go" src="go.png">', "input").label == "Go"
        assert classify('<input type="image" src="go.png" title="T">', "input").label == "T"

    def test_missing_name_is_empty(self):
        assert classify("<button></button>", "button").label == ""

    def test_direct_call(self):
        element = find("<h2> Title </h2>", "h2")
        assert compute_accessible_name(element, SemanticRole.HEADING) == "Title"
        assert normalize_text(None) == ""


# ---------------------------------------------------------------------------
# Values, accessibility details, metadata
# ---------------------------------------------------------------------------

class TestValueAndA11y:
    @pytest.mark.parametrize("html,tag,value", [
        ("<input type='checkbox' checked>", "input", True),
        ("<input type='radio'>", "input", False),
        ("<input type='range' value='5'>", "input", 5.0),
        ("<input type='number' value='abc'>", "input", None),
        ("<input value='abc'>", "input", "abc"),
        ("<input>", "input", None),
        ("<textarea> hello </textarea>", "textarea", "hello"),
        ("<select><option value='a'>A</option><option value='b' selected>B</option></select>", "select", "b"),
        ("<select><option>Alpha</option><option>Beta</option></select>", "select", "Alpha"),
        ('<div role="slider" aria-valuenow="30">x</div>', "div", 30.0),
        ("<div>x</div>", "div", None),
    ])
    def test_values(self, html, tag, value):
        assert classify(html, tag).value == value

    def test_focus_and_tab_order(self):
        a11y = classify('<div tabindex="-1">x</div>', "div").accessibility
        assert a11y.focusable and not a11y.in_tab_order and a11y.tab_index == -1
        a11y = classify("<button>x</button>", "button").accessibility
        assert a11y.focusable and a11y.in_tab_order and a11y.tab_index is None
        a11y = classify("<button disabled>x</button>", "button").accessibility
        assert not a11y.focusable and not a11y.in_tab_order
        a11y = classify('<div contenteditable="true">x</div>', "div").accessibility
        assert a11y.focusable
        assert not classify("<div>x</div>", "div").accessibility.focusable
        assert not classify("<a>x</a>", "a").accessibility.focusable

    def test_invalid_tabindex_is_absent(self):
        a11y = classify('<div tabindex="abc">x</div>', "div").accessibility
        assert a11y.tab_index is None
        assert not a11y.focusable and not a11y.in_tab_order
        assert not classify('<a tabindex="x">y</a>', "a").accessibility.focusable
        assert classify('<a tabindex="0">y</a>', "a").accessibility.in_tab_order

    def test_heading_level(self):
        assert classify("<h2>x</h2>", "h2").accessibility.level == 2
        assert classify('<div role="heading" aria-level="4">x</div>', "div").accessibility.level == 4
        assert classify("<p>x</p>", "p").accessibility.level is None

    def test_live_regions(self):
        assert classify('<div role="alert">x</div>', "div").accessibility.live == "assertive"
        assert classify('<div role="status">x</div>', "div").accessibility.live == "polite"
        assert classify('<div aria-live="off" role="alert">x</div>', "div").accessibility.live == "off"
        assert classify("<div>x</div>", "div").accessibility.live is None

    def test_set_position_and_current(self):
        html = '<li aria-posinset="2" aria-setsize="5" aria-current="page">x</li>'
        a11y = classify(html, "li").accessibility
        assert (a11y.pos_in_set, a11y.set_size, a11y.current) == (2, 5, "page")
        assert classify('<li aria-current="bogus">x</li>', "li").accessibility.current is None

    def test_description(self):
        html = '<p id="d1">Must be</p><p id="d2">8 chars</p><input aria-describedby="d1 d2">'
        assert classify(html, "input").accessibility.description == "Must be 8 chars"
        html = '<input aria-description="Hint">'
        assert classify(html, "input").accessibility.description == "Hint"

    def test_metadata_from_data_semantic_attributes(self):
        html = (
            '<div data-semantic-priority="3" data-semantic-tags=\'["a", "b"]\' '
            'data-semantic-note="hello" data-other="x">y</div>'
        )
        meta = classify(html, "div").metadata
        assert meta == {"priority": 3, "tags": ["a", "b"], "note": "hello"}
