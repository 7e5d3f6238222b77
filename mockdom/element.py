"""
Element implementation for the mock DOM.
This module implements the DOM Element interface: attribute and style
access, element-only navigation, text and HTML projection, and event
and selector delegation.
"""

import logging
import re
import weakref
from typing import Any, Callable, List, Optional, Union

from .attr import Attr, AttributeMap
from .class_list import ClassList
from .constants import NON_ESCAPABLE_CONTENT
from .custom_elements import attribute_changed
from .events import Event, add_event_listener, dispatch_event, remove_event_listener
from .exceptions import NotSupportedError
from .node import Node, NodeType
from .selector_engine import select_all, select_one
from .serialize import serialize_node_to_html
from .style import CSSStyleDeclaration, create_css_style_declaration
from .text import Text

logger = logging.getLogger(__name__)

# Side tables keyed by element identity; entries go away with the element.
_styles: 'weakref.WeakKeyDictionary[Element, CSSStyleDeclaration]' = weakref.WeakKeyDictionary()
_attributes: 'weakref.WeakKeyDictionary[Element, AttributeMap]' = weakref.WeakKeyDictionary()

NOT_IMPLEMENTED = ("is not implemented for mock elements. For unit tests, instead try "
                   "document.get_element_by_id(), document.get_elements_by_tag_name(), "
                   "or document.get_elements_by_class_name()")

_LEADING_INTEGER = re.compile(r'\s*([-+]?\d+)')

_ELEMENT_CONTAINER_TYPES = (
    NodeType.ELEMENT_NODE,
    NodeType.DOCUMENT_FRAGMENT_NODE,
    NodeType.DOCUMENT_NODE,
)


class Element(Node):
    """
    Element node implementation for the mock DOM.

    Attributes and the inline style object are not stored on the instance;
    they are created on first use and kept in identity-keyed side tables.
    """

    def __init__(self,
                 tag_name: str,
                 namespace: Optional[str] = None,
                 owner_document: Optional['Document'] = None):
        """
        Initialize a new Element.

        Args:
            tag_name: Name of the element tag (e.g., "div", "span")
            namespace: Optional namespace URI
            owner_document: The document that owns this element
        """
        super().__init__(NodeType.ELEMENT_NODE, owner_document)

        if not isinstance(tag_name, str):
            tag_name = "div"

        self.namespace_uri = namespace
        self.local_name = tag_name
        self.node_name = tag_name.upper()

    @property
    def tag_name(self) -> str:
        """Get or set the uppercase tag name."""
        return self.node_name

    @tag_name.setter
    def tag_name(self, value: str) -> None:
        self.local_name = value
        self.node_name = value.upper()

    # Attributes

    @property
    def attributes(self) -> AttributeMap:
        """Get or replace the element's attribute map."""
        attrs = _attributes.get(self)
        if attrs is None:
            attrs = AttributeMap()
            _attributes[self] = attrs
        return attrs

    @attributes.setter
    def attributes(self, attrs: AttributeMap) -> None:
        _attributes[self] = attrs

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        The ``style`` attribute is read from the style object and is absent
        whenever that object is missing or empty.

        Args:
            name: The attribute name (case-insensitive)

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        name = name.lower()
        if name == 'style':
            style = _styles.get(self)
            if style is not None and style.length > 0:
                return style.css_text
            return None
        return self.get_attribute_ns(None, name)

    def get_attribute_ns(self, namespace_uri: Optional[str], name: str) -> Optional[str]:
        attr = self.attributes.get_named_item_ns(namespace_uri, name)
        if attr is not None:
            return attr.value
        return None

    def get_attribute_node(self, name: str) -> Optional[Attr]:
        return self.attributes.get_named_item_ns(None, name.lower())

    def has_attribute(self, name: str) -> bool:
        """
        Check if the element has the specified attribute.

        Args:
            name: The attribute name (case-insensitive)

        Returns:
            True if the attribute exists, False otherwise
        """
        name = name.lower()
        if name == 'style':
            style = _styles.get(self)
            return style is not None and style.length > 0
        return self.get_attribute(name) is not None

    def has_attribute_ns(self, namespace_uri: Optional[str], name: str) -> bool:
        return self.get_attribute_ns(namespace_uri, name) is not None

    def has_attributes(self) -> bool:
        """Check if the element has any attributes, including a non-empty style."""
        return len(self.attributes) > 0 or self.has_attribute('style')

    def set_attribute(self, name: str, value: Any) -> None:
        """
        Set an attribute value.

        Setting ``style`` parses the value into the style object instead of
        storing it in the attribute map.

        Args:
            name: The attribute name (stored lowercase)
            value: The attribute value
        """
        name = name.lower()
        if name == 'style':
            self.style = str(value)
        else:
            self.set_attribute_ns(None, name, value)

    def set_attribute_ns(self, namespace_uri: Optional[str], name: str, value: Any) -> None:
        """
        Set a namespaced attribute value.

        Fires the attribute-changed callback when the value is new or differs
        from the current one; writing the current value again is silent.

        Args:
            namespace_uri: The attribute namespace, or None
            name: The attribute name
            value: The attribute value, converted to a string
        """
        attributes = self.attributes
        attr = attributes.get_named_item_ns(namespace_uri, name)
        if attr is not None:
            old_value = attr.value
            attr.value = str(value)

            if old_value != attr.value:
                attribute_changed(self, name, old_value, attr.value)
        else:
            attr = Attr(name, str(value), namespace_uri)
            attributes.items.append(attr)

            attribute_changed(self, name, None, attr.value)

    def remove_attribute(self, name: str) -> None:
        """
        Remove an attribute.

        Args:
            name: The attribute name (case-insensitive)
        """
        name = name.lower()
        if name == 'style':
            _styles.pop(self, None)
        else:
            self.remove_attribute_ns(None, name)

    def remove_attribute_ns(self, namespace_uri: Optional[str], name: str) -> None:
        attr = self.attributes.get_named_item_ns(namespace_uri, name)
        if attr is not None:
            self.attributes.remove_named_item_ns(attr)
            attribute_changed(self, name, attr.value, None)

    def toggle_attribute(self, name: str, force: Optional[bool] = None) -> bool:
        present = self.has_attribute(name)
        if force is None:
            force = not present
        if force and not present:
            self.set_attribute(name, "")
        elif not force and present:
            self.remove_attribute(name)
        return force

    # Style

    @property
    def style(self) -> CSSStyleDeclaration:
        """
        Get or set the inline style.

        Assigning a string parses it into the existing style object;
        assigning a CSSStyleDeclaration replaces the object outright.
        """
        style = _styles.get(self)
        if style is None:
            style = create_css_style_declaration()
            _styles[self] = style
        return style

    @style.setter
    def style(self, value: Union[str, CSSStyleDeclaration]) -> None:
        if isinstance(value, str):
            style = _styles.get(self)
            if style is None:
                style = create_css_style_declaration()
                _styles[self] = style
            style.css_text = value
        else:
            _styles[self] = value

    # Reflected attributes

    @property
    def id(self) -> str:
        return self.get_attribute('id') or ""

    @id.setter
    def id(self, value: str) -> None:
        self.set_attribute('id', value)

    @property
    def class_name(self) -> str:
        return self.get_attribute('class') or ""

    @class_name.setter
    def class_name(self, value: str) -> None:
        self.set_attribute('class', value)

    @property
    def class_list(self) -> ClassList:
        return ClassList(self)

    @property
    def lang(self) -> str:
        return self.get_attribute('lang') or ""

    @lang.setter
    def lang(self, value: str) -> None:
        self.set_attribute('lang', value)

    @property
    def dir(self) -> str:
        return self.get_attribute('dir') or ""

    @dir.setter
    def dir(self, value: str) -> None:
        self.set_attribute('dir', value)

    @property
    def title(self) -> str:
        return self.get_attribute('title') or ""

    @title.setter
    def title(self, value: str) -> None:
        self.set_attribute('title', value)

    @property
    def tab_index(self) -> int:
        """Get or set the tabindex attribute as an integer; -1 when absent or unparseable."""
        match = _LEADING_INTEGER.match(self.get_attribute('tabindex') or "-1")
        return int(match.group(1)) if match else -1

    @tab_index.setter
    def tab_index(self, value: int) -> None:
        self.set_attribute('tabindex', value)

    @property
    def hidden(self) -> bool:
        return self.has_attribute('hidden')

    @hidden.setter
    def hidden(self, is_hidden: bool) -> None:
        if is_hidden:
            self.set_attribute('hidden', "")
        else:
            self.remove_attribute('hidden')

    # Element-only navigation

    @property
    def children(self) -> List['Element']:
        """Get a list of child elements."""
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    @property
    def child_element_count(self) -> int:
        return len(self.children)

    @property
    def first_element_child(self) -> Optional['Element']:
        children = self.children
        return children[0] if children else None

    @property
    def last_element_child(self) -> Optional['Element']:
        children = self.children
        return children[-1] if children else None

    def _element_siblings(self) -> Optional[List['Element']]:
        parent = self.parent_node
        if parent is None or parent.node_type not in _ELEMENT_CONTAINER_TYPES:
            return None
        return [child for child in parent.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    @property
    def next_element_sibling(self) -> Optional['Element']:
        siblings = self._element_siblings()
        if not siblings:
            return None
        for index, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[index + 1] if index + 1 < len(siblings) else None
        return None

    @property
    def previous_element_sibling(self) -> Optional['Element']:
        siblings = self._element_siblings()
        if not siblings:
            return None
        for index, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[index - 1] if index > 0 else None
        return None

    def get_root_node(self, composed: bool = False) -> Node:
        """
        Get the topmost ancestor of this element.

        Args:
            composed: Continue through shadow root hosts

        Returns:
            The root node (this element when it has no parent)
        """
        node: Node = self
        while node.parent_node is not None:
            node = node.parent_node
            if composed and node.parent_node is None and getattr(node, 'host', None) is not None:
                node = node.host
        return node

    # Text and HTML projection

    @property
    def text_content(self) -> str:
        """
        Get or set the text of all descendant text nodes, in document order.

        Setting replaces every child with a single text node.
        """
        text: List[str] = []
        _get_text_content(self.child_nodes, text)
        return "".join(text)

    @text_content.setter
    def text_content(self, value: str) -> None:
        _set_text_content(self, value)

    @property
    def inner_text(self) -> str:
        text: List[str] = []
        _get_text_content(self.child_nodes, text)
        return "".join(text)

    @inner_text.setter
    def inner_text(self, value: str) -> None:
        _set_text_content(self, value)

    @property
    def inner_html(self) -> str:
        """Get or set the HTML of this element's children."""
        if not self.child_nodes:
            return ""
        return serialize_node_to_html(self, new_lines=False, indent_spaces=0)

    @inner_html.setter
    def inner_html(self, html: str) -> None:
        if self.node_name.lower() in NON_ESCAPABLE_CONTENT:
            _set_text_content(self, html)
            return

        for index in range(len(self.child_nodes) - 1, -1, -1):
            self.remove_child(self.child_nodes[index])

        if isinstance(html, str):
            from .parse_util import parse_fragment

            fragment = parse_fragment(self.owner_document, html)
            for child in list(fragment.child_nodes):
                self.append_child(child)

    @property
    def outer_html(self) -> str:
        """Get the HTML of this element including its own tags."""
        return serialize_node_to_html(self, outer_html=True, new_lines=False, indent_spaces=0)

    def to_string(self, **options: Any) -> str:
        """
        Serialize this element.

        Options default to the owning document's ``serializer`` configuration.

        Args:
            **options: Keyword arguments for serialize_node_to_html
        """
        config = getattr(self.owner_document, 'config', None)
        if config is not None:
            options.setdefault('pretty_html', config.get('serializer.pretty_html', False))
            options.setdefault('indent_spaces', config.get('serializer.indent_spaces', 2))
        return serialize_node_to_html(self, **options)

    def __str__(self) -> str:
        return self.to_string()

    # Cloning

    def clone_node(self, deep: bool = False) -> 'Element':
        """
        Clone this element.

        The clone has no owning document. Attributes are copied by value and
        a non-empty inline style is copied to an independent style object.

        Args:
            deep: Whether to clone child nodes as well

        Returns:
            The cloned element
        """
        cloned = type(self)(self.local_name, self.namespace_uri, None)
        cloned.attributes = self.attributes.clone_attributes()

        style = _styles.get(self)
        if style is not None and style.length > 0:
            _styles[cloned] = style.clone()

        if deep:
            for child in self.child_nodes:
                cloned.append_child(child.clone_node(True))

        return cloned

    # Queries

    def query_selector(self, selector: str) -> Optional['Element']:
        """
        Find the first descendant element that matches a selector.

        Args:
            selector: The CSS selector string

        Returns:
            The first matching element or None if no match is found
        """
        return select_one(selector, self)

    def query_selector_all(self, selector: str) -> List['Element']:
        """
        Find all descendant elements that match a selector, in document order.

        Args:
            selector: The CSS selector string

        Returns:
            List of matching elements
        """
        return select_all(selector, self)

    def get_elements_by_tag_name(self, tag_name: str) -> List['Element']:
        """
        Get all descendant elements with the given tag name.

        Args:
            tag_name: The tag name to match (case-insensitive), or "*"

        Returns:
            List of matching elements
        """
        return _get_elements_by_tag_name(self, tag_name)

    def get_elements_by_class_name(self, class_name: str) -> List['Element']:
        """
        Get all descendant elements carrying every class in class_name.

        Args:
            class_name: One or more space separated class names

        Returns:
            List of matching elements
        """
        return _get_elements_by_class_name(self, class_name)

    def closest(self, selector: str = None) -> None:
        raise NotSupportedError(f"closest() {NOT_IMPLEMENTED}")

    def matches(self, selector: str = None) -> None:
        raise NotSupportedError(f"matches() {NOT_IMPLEMENTED}")

    # Events

    def add_event_listener(self, event_type: str, handler: Callable) -> None:
        add_event_listener(self, event_type, handler)

    def remove_event_listener(self, event_type: str, handler: Callable) -> None:
        remove_event_listener(self, event_type, handler)

    def dispatch_event(self, event: Event) -> bool:
        return dispatch_event(self, event)

    def click(self) -> None:
        """Dispatch a bubbling, cancelable, composed click event at this element."""
        dispatch_event(self, Event('click', bubbles=True, cancelable=True, composed=True))

    # JavaScript-style aliases
    tagName = tag_name
    localName = property(lambda self: self.local_name)
    namespaceURI = property(lambda self: self.namespace_uri)
    getAttribute = get_attribute
    getAttributeNS = get_attribute_ns
    getAttributeNode = get_attribute_node
    hasAttribute = has_attribute
    hasAttributeNS = has_attribute_ns
    hasAttributes = has_attributes
    setAttribute = set_attribute
    setAttributeNS = set_attribute_ns
    removeAttribute = remove_attribute
    removeAttributeNS = remove_attribute_ns
    toggleAttribute = toggle_attribute
    className = class_name
    classList = class_list
    tabIndex = tab_index
    childElementCount = child_element_count
    firstElementChild = first_element_child
    lastElementChild = last_element_child
    nextElementSibling = next_element_sibling
    previousElementSibling = previous_element_sibling
    getRootNode = get_root_node
    textContent = text_content
    innerText = inner_text
    innerHTML = inner_html
    outerHTML = outer_html
    toString = to_string
    cloneNode = clone_node
    querySelector = query_selector
    querySelectorAll = query_selector_all
    getElementsByTagName = get_elements_by_tag_name
    getElementsByClassName = get_elements_by_class_name
    addEventListener = add_event_listener
    removeEventListener = remove_event_listener
    dispatchEvent = dispatch_event


def _get_text_content(child_nodes: List[Node], text: List[str]) -> None:
    for child in child_nodes:
        if child.node_type == NodeType.TEXT_NODE:
            text.append(child.node_value or "")
        elif child.node_type == NodeType.ELEMENT_NODE:
            _get_text_content(child.child_nodes, text)


def _set_text_content(element: Element, text: Any) -> None:
    for index in range(len(element.child_nodes) - 1, -1, -1):
        element.remove_child(element.child_nodes[index])
    element.append_child(Text("" if text is None else str(text), element.owner_document))


def _iter_descendant_elements(node: Node):
    for child in node.child_nodes:
        if child.node_type == NodeType.ELEMENT_NODE:
            yield child
        yield from _iter_descendant_elements(child)


def _get_elements_by_tag_name(node: Node, tag_name: str) -> List[Element]:
    tag_name = tag_name.lower()
    match_all = tag_name == "*"
    result = [element for element in _iter_descendant_elements(node)
              if match_all or element.node_name.lower() == tag_name]
    logger.debug(f"get_elements_by_tag_name('{tag_name}') found {len(result)} elements")
    return result


def _get_elements_by_class_name(node: Node, class_name: str) -> List[Element]:
    wanted = class_name.split()
    if not wanted:
        return []
    return [element for element in _iter_descendant_elements(node)
            if all(name in element.class_list for name in wanted)]
