"""Tests for mockdom.element.Element."""

import pytest

from mockdom import DocumentFragment, Element, Event, NotSupportedError, Text
from mockdom.constants import HTML_NAMESPACE


class TestTagName:

    def test_tag_name_is_uppercase(self):
        element = Element("div")
        assert element.tag_name == "DIV"
        assert element.node_name == "DIV"
        assert element.local_name == "div"

    def test_non_string_tag_falls_back_to_div(self):
        assert Element(None).tag_name == "DIV"

    def test_tag_name_setter(self):
        element = Element("div")
        element.tag_name = "span"
        assert element.tag_name == "SPAN"
        assert element.local_name == "span"

    def test_document_created_element(self, document):
        element = document.create_element("SECTION")
        assert element.local_name == "section"
        assert element.namespace_uri == HTML_NAMESPACE
        assert element.owner_document is document
        assert element.parent_node is None


class TestTextProjection:

    def test_text_content_aggregates_descendants_in_order(self, detached_div):
        detached_div.inner_html = "ab<span>cd</span>ef"
        assert detached_div.text_content == "abcdef"

    def test_comments_contribute_nothing(self, detached_div):
        detached_div.inner_html = "a<!--hidden-->b<i>c</i>"
        assert detached_div.text_content == "abc"

    def test_text_content_setter_leaves_single_text_child(self, detached_div):
        detached_div.inner_html = "ab<span>cd</span>ef"
        detached_div.text_content = "xyz"

        assert len(detached_div.child_nodes) == 1
        child = detached_div.first_child
        assert isinstance(child, Text)
        assert child.data == "xyz"

    def test_inner_text_matches_text_content(self, detached_div):
        detached_div.inner_html = "<p>one</p><p>two</p>"
        assert detached_div.inner_text == "onetwo"

        detached_div.inner_text = "three"
        assert detached_div.text_content == "three"
        assert len(detached_div.child_nodes) == 1


class TestInnerHTML:

    def test_empty_element(self, detached_div):
        assert detached_div.inner_html == ""

    def test_round_trip(self, detached_div):
        html = '<p class="lead">Hi <b>there</b></p><br>'
        detached_div.inner_html = html
        assert detached_div.inner_html == html

        other = Element("div")
        other.inner_html = detached_div.inner_html
        assert [child.local_name for child in other.children] == ["p", "br"]
        assert other.first_element_child.get_attribute("class") == "lead"
        assert other.text_content == "Hi there"

    def test_setter_replaces_existing_children(self, detached_div):
        detached_div.inner_html = "<span>old</span>"
        old = detached_div.first_child
        detached_div.inner_html = "<em>new</em>"

        assert old.parent_node is None
        assert [child.local_name for child in detached_div.children] == ["em"]

    def test_text_is_escaped(self, detached_div):
        detached_div.text_content = "a < b & c"
        assert detached_div.inner_html == "a &lt; b &amp; c"

    def test_entities_are_decoded_into_one_text_node(self, detached_div):
        detached_div.inner_html = "x &amp; y"
        assert len(detached_div.child_nodes) == 1
        assert detached_div.text_content == "x & y"

    def test_raw_text_elements_take_the_string_verbatim(self, document):
        script = document.create_element("script")
        script.inner_html = "if (a < b) { run('<b>'); }"

        assert len(script.child_nodes) == 1
        assert script.first_child.data == "if (a < b) { run('<b>'); }"
        assert script.inner_html == "if (a < b) { run('<b>'); }"

    def test_parsed_children_take_the_owner_document(self, body, document):
        body.inner_html = "<p><span>x</span></p>"
        span = body.query_selector("span")
        assert span.owner_document is document
        assert span.is_connected

    def test_outer_html(self, detached_div):
        detached_div.id = "main"
        detached_div.class_name = "box"
        detached_div.inner_html = "<p>x</p>"
        assert detached_div.outer_html == '<div id="main" class="box"><p>x</p></div>'


class TestReflectedProperties:

    def test_id_and_class_name(self, detached_div):
        detached_div.id = "x"
        detached_div.class_name = "a b"
        assert detached_div.get_attribute("id") == "x"
        assert detached_div.get_attribute("class") == "a b"
        assert detached_div.className == "a b"

    def test_missing_reflected_attributes_read_as_empty(self, detached_div):
        assert detached_div.id == ""
        assert detached_div.lang == ""
        assert detached_div.dir == ""
        assert detached_div.title == ""

    def test_lang_dir_title(self, detached_div):
        detached_div.lang = "en"
        detached_div.dir = "rtl"
        detached_div.title = "Tip"
        assert detached_div.get_attribute("lang") == "en"
        assert detached_div.get_attribute("dir") == "rtl"
        assert detached_div.get_attribute("title") == "Tip"

    def test_hidden_is_presence_based(self, detached_div):
        assert not detached_div.hidden

        detached_div.hidden = True
        assert detached_div.get_attribute("hidden") == ""
        assert detached_div.outer_html == "<div hidden></div>"

        detached_div.hidden = False
        assert not detached_div.has_attribute("hidden")

    def test_tab_index(self, detached_div):
        assert detached_div.tab_index == -1

        detached_div.tab_index = 3
        assert detached_div.get_attribute("tabindex") == "3"
        assert detached_div.tabIndex == 3

        detached_div.set_attribute("tabindex", "nope")
        assert detached_div.tab_index == -1


class TestElementNavigation:

    @pytest.fixture
    def parent(self):
        parent = Element("div")
        parent.inner_html = "<a></a>text<b></b><!--c--><i></i>"
        return parent

    def test_children_skip_non_elements(self, parent):
        assert [child.local_name for child in parent.children] == ["a", "b", "i"]
        assert parent.child_element_count == 3
        assert parent.first_element_child.local_name == "a"
        assert parent.last_element_child.local_name == "i"

    def test_element_siblings(self, parent):
        b = parent.children[1]
        assert b.previous_element_sibling.local_name == "a"
        assert b.next_element_sibling.local_name == "i"
        assert parent.children[0].previous_element_sibling is None
        assert parent.children[2].next_element_sibling is None

    def test_parentless_element_has_no_element_siblings(self):
        element = Element("p")
        assert element.next_element_sibling is None
        assert element.previous_element_sibling is None

    def test_element_siblings_inside_a_fragment(self):
        fragment = DocumentFragment()
        a = fragment.append_child(Element("a"))
        b = fragment.append_child(Element("b"))
        assert a.next_element_sibling is b
        assert b.previous_element_sibling is a


class TestGetRootNode:

    def test_detached_tree(self):
        root = Element("div")
        child = root.append_child(Element("p"))
        grandchild = child.append_child(Element("span"))
        assert grandchild.get_root_node() is root
        assert root.get_root_node() is root

    def test_connected_tree(self, document, body):
        element = body.append_child(Element("p"))
        assert element.get_root_node() is document

    def test_composed_walk_crosses_shadow_hosts(self, document, body):
        host = body.append_child(document.create_element("div"))
        shadow_root = DocumentFragment(document)
        shadow_root.host = host
        inner = shadow_root.append_child(Element("span"))

        assert inner.get_root_node() is shadow_root
        assert inner.get_root_node(composed=True) is document


class TestCloneNode:

    @pytest.fixture
    def original(self, document):
        element = document.create_element("div")
        element.id = "source"
        element.style.color = "red"
        element.inner_html = "<p>child</p>"
        return element

    def test_shallow_clone(self, original):
        clone = original.clone_node()
        assert clone is not original
        assert clone.local_name == "div"
        assert clone.owner_document is None
        assert clone.get_attribute("id") == "source"
        assert clone.child_nodes == []

    def test_deep_clone_copies_children(self, original):
        clone = original.clone_node(True)
        assert clone.inner_html == "<p>child</p>"
        assert clone.first_child is not original.first_child

    def test_attributes_are_copied_by_value(self, original):
        clone = original.clone_node()
        clone.id = "copy"
        assert original.id == "source"

    def test_style_is_copied_independently(self, original):
        clone = original.clone_node()
        assert clone.get_attribute("style") == "color: red;"

        clone.style.color = "blue"
        assert original.style.color == "red"

    def test_clone_keeps_element_class(self, recorder_class):
        element = recorder_class("x-recorder")
        assert type(element.clone_node()) is recorder_class


class TestQueries:

    @pytest.fixture
    def tree(self):
        tree = Element("div")
        tree.inner_html = ('<p class="a b"><span class="b"></span></p>'
                           '<span class="a"></span>')
        return tree

    def test_get_elements_by_tag_name(self, tree):
        assert len(tree.get_elements_by_tag_name("span")) == 2
        assert len(tree.get_elements_by_tag_name("SPAN")) == 2
        assert len(tree.get_elements_by_tag_name("*")) == 3

    def test_get_elements_by_tag_name_excludes_self(self, tree):
        assert tree.get_elements_by_tag_name("div") == []

    def test_get_elements_by_class_name(self, tree):
        assert [e.local_name for e in tree.get_elements_by_class_name("a")] == ["p", "span"]
        assert [e.local_name for e in tree.get_elements_by_class_name("b a")] == ["p"]
        assert tree.get_elements_by_class_name("  ") == []

    def test_query_selector(self, tree):
        assert tree.query_selector("p > span").get_attribute("class") == "b"
        assert len(tree.querySelectorAll(".a")) == 2

    @pytest.mark.parametrize("method", ["closest", "matches"])
    def test_unsupported_queries_point_to_alternatives(self, tree, method):
        with pytest.raises(NotSupportedError) as excinfo:
            getattr(tree, method)("p")
        assert "get_element_by_id()" in str(excinfo.value)

    def test_unsupported_queries_are_not_implemented_errors(self, tree):
        with pytest.raises(NotImplementedError):
            tree.closest("div")


class TestEventsAndSerialization:

    def test_click_dispatches_bubbling_cancelable_event(self, detached_div):
        received = []
        detached_div.add_event_listener("click", received.append)
        detached_div.click()

        assert len(received) == 1
        event = received[0]
        assert event.type == "click"
        assert event.bubbles and event.cancelable and event.composed
        assert event.target is detached_div

    def test_dispatch_event_returns_true_without_cancel(self, detached_div):
        assert detached_div.dispatch_event(Event("change"))

    def test_to_string_uses_document_serializer_config(self, document):
        menu = document.create_element("ul")
        menu.inner_html = "<li>One</li><li>Two</li>"

        assert str(menu) == "<li>One</li><li>Two</li>"

        document.config.set("serializer.pretty_html", True)
        assert menu.to_string() == "<li>One</li>\n<li>Two</li>"
        assert menu.to_string(outer_html=True) == "<ul>\n  <li>One</li>\n  <li>Two</li>\n</ul>"
