"""Tests for attribute storage, attribute-changed notifications and ClassList."""

import pytest

from mockdom import Attr, AttributeMap, Element
from mockdom.constants import XLINK_NAMESPACE, XML_NAMESPACE, XMLNS_NAMESPACE


@pytest.fixture
def recorder(recorder_class):
    return recorder_class("x-recorder")


class TestAttributeAccess:

    def test_names_are_case_insensitive(self, detached_div):
        detached_div.set_attribute("Data-Value", "1")
        assert detached_div.get_attribute("data-value") == "1"
        assert detached_div.get_attribute("DATA-VALUE") == "1"
        assert detached_div.attributes.item(0).name == "data-value"

    def test_missing_attribute(self, detached_div):
        assert detached_div.get_attribute("nope") is None
        assert not detached_div.has_attribute("nope")
        assert not detached_div.has_attributes()

    def test_values_are_stored_as_strings(self, detached_div):
        detached_div.set_attribute("data-count", 5)
        assert detached_div.get_attribute("data-count") == "5"

    def test_setting_again_updates_in_place(self, detached_div):
        detached_div.set_attribute("a", "1")
        detached_div.set_attribute("b", "2")
        detached_div.set_attribute("a", "3")

        assert [attr.name for attr in detached_div.attributes] == ["a", "b"]
        assert detached_div.get_attribute("a") == "3"

    def test_remove_attribute(self, detached_div):
        detached_div.set_attribute("a", "1")
        detached_div.remove_attribute("A")
        assert not detached_div.has_attribute("a")

        # removing a missing attribute is harmless
        detached_div.remove_attribute("a")

    def test_toggle_attribute(self, detached_div):
        assert detached_div.toggle_attribute("open") is True
        assert detached_div.get_attribute("open") == ""
        assert detached_div.toggle_attribute("open") is False
        assert not detached_div.has_attribute("open")
        assert detached_div.toggle_attribute("open", force=False) is False
        assert not detached_div.has_attribute("open")

    def test_get_attribute_node(self, detached_div):
        detached_div.set_attribute("role", "button")
        node = detached_div.get_attribute_node("ROLE")
        assert isinstance(node, Attr)
        assert node.value == "button"

    def test_namespaced_attributes(self, detached_div):
        detached_div.set_attribute_ns(XLINK_NAMESPACE, "xlink:href", "#target")

        assert detached_div.get_attribute_ns(XLINK_NAMESPACE, "xlink:href") == "#target"
        assert detached_div.has_attribute_ns(XLINK_NAMESPACE, "xlink:href")
        assert not detached_div.has_attribute_ns(None, "xlink:href")

        attr = detached_div.attributes.get_named_item_ns(XLINK_NAMESPACE, "xlink:href")
        assert attr.prefix == "xlink"
        assert attr.local_name == "href"

        detached_div.remove_attribute_ns(XLINK_NAMESPACE, "xlink:href")
        assert not detached_div.has_attributes()

    def test_dom_style_aliases(self, detached_div):
        detached_div.setAttribute("lang", "fr")
        assert detached_div.getAttribute("lang") == "fr"
        assert detached_div.hasAttribute("lang")
        detached_div.removeAttribute("lang")
        assert not detached_div.hasAttributes()


class TestPrefixedAttributes:

    @pytest.mark.parametrize("name, value", [("xml:lang", "en"), ("xlink:href", "#a")])
    def test_set_get_has_remove(self, detached_div, name, value):
        detached_div.set_attribute(name, value)
        assert detached_div.get_attribute(name) == value
        assert detached_div.has_attribute(name)
        assert detached_div.get_attribute_ns(None, name) == value

        detached_div.remove_attribute(name)
        assert detached_div.get_attribute(name) is None
        assert not detached_div.has_attributes()

    def test_setting_twice_keeps_one_entry(self, detached_div):
        detached_div.set_attribute("xlink:href", "#a")
        detached_div.set_attribute("xlink:href", "#a")
        assert detached_div.attributes.length == 1
        assert detached_div.outer_html == '<div xlink:href="#a"></div>'

    def test_null_namespace_is_distinct_from_the_xml_namespace(self, detached_div):
        detached_div.set_attribute_ns(None, "xml:lang", "en")
        detached_div.set_attribute_ns(XML_NAMESPACE, "xml:lang", "fr")

        assert detached_div.attributes.length == 2
        assert detached_div.get_attribute_ns(None, "xml:lang") == "en"
        assert detached_div.get_attribute_ns(XML_NAMESPACE, "xml:lang") == "fr"

    def test_repeated_set_notifies_once(self, document):
        calls = []

        class Observed(Element):
            observed_attributes = ["xml:lang"]

            def attribute_changed_callback(self, name, old_value, new_value):
                calls.append((name, old_value, new_value))

        document.custom_elements.define("x-observed", Observed)
        element = document.create_element("x-observed")
        element.set_attribute("xml:lang", "en")
        element.set_attribute("xml:lang", "en")
        assert calls == [("xml:lang", None, "en")]

    def test_parsed_html_attribute_is_readable(self, detached_div):
        detached_div.inner_html = '<p xml:lang="en">x</p>'
        paragraph = detached_div.first_element_child
        assert paragraph.get_attribute("xml:lang") == "en"

        paragraph.remove_attribute("xml:lang")
        assert not paragraph.has_attributes()

    def test_parsed_foreign_attribute_keeps_its_namespace(self, detached_div):
        detached_div.inner_html = '<svg><use xlink:href="#icon"></use></svg>'
        use = detached_div.query_selector("use")
        assert use.get_attribute_ns(XLINK_NAMESPACE, "xlink:href") == "#icon"


class TestAttributeChangedNotifications:

    def test_new_attribute_fires_once_with_no_old_value(self, recorder):
        recorder.set_attribute("label", "a")
        assert recorder.calls == [("attribute_changed", "label", None, "a")]

    def test_setting_the_current_value_is_silent(self, recorder):
        recorder.set_attribute("label", "a")
        recorder.set_attribute("label", "a")
        assert len(recorder.calls) == 1

    def test_changing_the_value_fires_old_and_new(self, recorder):
        recorder.set_attribute("label", "a")
        recorder.set_attribute("label", "b")
        assert recorder.calls[-1] == ("attribute_changed", "label", "a", "b")
        assert len(recorder.calls) == 2

    def test_removal_fires_with_no_new_value(self, recorder):
        recorder.set_attribute("label", "a")
        recorder.remove_attribute("label")
        assert recorder.calls[-1] == ("attribute_changed", "label", "a", None)

    def test_removing_a_missing_attribute_is_silent(self, recorder):
        recorder.remove_attribute("label")
        assert recorder.calls == []

    def test_unobserved_attributes_are_ignored(self, recorder):
        recorder.set_attribute("title", "x")
        recorder.id = "y"
        assert recorder.calls == []

    def test_names_are_reported_lowercase(self, recorder):
        recorder.set_attribute("DATA-STATE", "on")
        assert recorder.calls == [("attribute_changed", "data-state", None, "on")]

    def test_plain_elements_have_no_callbacks(self, detached_div):
        detached_div.set_attribute("label", "a")
        assert detached_div.get_attribute("label") == "a"


class TestAttr:

    def test_plain_attribute(self):
        attr = Attr("href", "/a")
        assert attr.name == attr.local_name == "href"
        assert attr.prefix is None
        assert attr.namespace_uri is None
        assert attr.specified

    @pytest.mark.parametrize("name, namespace", [
        ("xml:lang", None),
        ("xlink:href", None),
        ("xlink:href", XLINK_NAMESPACE),
        ("xmlns:svg", XMLNS_NAMESPACE),
    ])
    def test_prefixed_name_keeps_the_given_namespace(self, name, namespace):
        attr = Attr(name, "v", namespace)
        assert attr.namespace_uri == namespace
        assert attr.prefix == name.split(":")[0]
        assert attr.local_name == name.split(":")[1]

    def test_none_value_becomes_empty_string(self):
        assert Attr("disabled", None).value == ""


class TestAttributeMap:

    @pytest.fixture
    def attributes(self):
        attributes = AttributeMap()
        attributes.set_named_item(Attr("id", "a"))
        attributes.set_named_item(Attr("class", "b"))
        return attributes

    def test_lookup(self, attributes):
        assert attributes.length == len(attributes) == 2
        assert attributes.item(1).name == "class"
        assert attributes.item(5) is None
        assert attributes.get_named_item("ID").value == "a"
        assert attributes.getNamedItemNS(None, "class").value == "b"

    def test_set_named_item_replaces_value(self, attributes):
        attributes.set_named_item(Attr("id", "z"))
        assert len(attributes) == 2
        assert attributes.get_named_item("id").value == "z"

    def test_remove_named_item_by_name(self, attributes):
        attributes.remove_named_item("id")
        assert [attr.name for attr in attributes] == ["class"]

    def test_clone_attributes_is_a_value_copy(self, attributes):
        clone = attributes.clone_attributes()
        clone.get_named_item("id").value = "changed"

        assert attributes.get_named_item("id").value == "a"
        assert [attr.name for attr in clone] == ["id", "class"]


class TestClassList:

    def test_add_writes_the_class_attribute(self, detached_div):
        detached_div.class_list.add("a", "b")
        detached_div.class_list.add("a")
        assert detached_div.class_name == "a b"

    def test_remove(self, detached_div):
        detached_div.class_name = "a b c"
        detached_div.class_list.remove("b", "missing")
        assert detached_div.class_name == "a c"

    def test_contains_and_iteration(self, detached_div):
        detached_div.class_name = "  a   b "
        class_list = detached_div.class_list
        assert class_list.contains("a")
        assert "b" in class_list
        assert "c" not in class_list
        assert list(class_list) == ["a", "b"]
        assert class_list.length == len(class_list) == 2
        assert class_list.item(1) == "b"
        assert class_list.item(2) is None

    def test_toggle(self, detached_div):
        class_list = detached_div.class_list
        assert class_list.toggle("on") is True
        assert class_list.toggle("on") is False
        assert class_list.toggle("on", force=True) is True
        assert class_list.toggle("on", force=True) is True
        assert str(class_list) == "on"

    def test_reads_the_attribute_every_time(self, detached_div):
        class_list = detached_div.class_list
        detached_div.set_attribute("class", "late")
        assert class_list.contains("late")

    def test_class_list_changes_notify_observers(self, recorder_class):
        class Observed(recorder_class):
            observed_attributes = ["class"]

        element = Observed("x-observed")
        element.class_list.add("a")
        assert element.calls == [("attribute_changed", "class", None, "a")]

    def test_element_without_class_list(self):
        assert len(Element("p").class_list) == 0
