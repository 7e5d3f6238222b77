"""
Document implementation for the mock DOM.
This module implements the Document, DocumentFragment and DocumentType
node kinds, and the factory methods for creating nodes.
"""

import logging
from typing import Callable, List, Optional

from .comment import Comment, ProcessingInstruction
from .constants import HTML_NAMESPACE
from .custom_elements import CustomElementRegistry
from .element import (Element, _get_elements_by_class_name, _get_elements_by_tag_name,
                      _get_text_content, _iter_descendant_elements)
from .events import Event, add_event_listener, dispatch_event, remove_event_listener
from .node import Node, NodeType
from .selector_engine import SelectorEngine, select_all, select_one
from .serialize import serialize_node_to_html
from .text import Text
from .utils.config import Config

logger = logging.getLogger(__name__)

DEFAULT_HTML = "<!doctype html><html><head></head><body></body></html>"


def _get_element_by_id(node: Node, element_id: str) -> Optional[Element]:
    for element in _iter_descendant_elements(node):
        if element.id == element_id:
            return element
    return None


class Document(Node):
    """
    Document node implementation for the mock DOM.

    A document is the root that makes a tree connected. It owns the custom
    element registry consulted by the lifecycle callbacks.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize a new, empty Document.

        Args:
            config: Configuration to use; defaults to an in-memory Config
        """
        super().__init__(NodeType.DOCUMENT_NODE)
        self.node_name = "#document"

        self.config = config if config is not None else Config()
        self.custom_elements = CustomElementRegistry()
        self.selector_engine = SelectorEngine()
        # Event target past the document when events bubble
        self.default_view = None

        logger.debug("Document initialized")

    def _document_for_children(self) -> 'Document':
        return self

    @property
    def document_element(self) -> Optional[Element]:
        for child in self.child_nodes:
            if child.node_type == NodeType.ELEMENT_NODE:
                return child
        return None

    @property
    def doctype(self) -> Optional['DocumentType']:
        for child in self.child_nodes:
            if child.node_type == NodeType.DOCUMENT_TYPE_NODE:
                return child
        return None

    def _child_of_root(self, tag_name: str) -> Optional[Element]:
        root = self.document_element
        if root is None:
            return None
        for child in root.children:
            if child.node_name.lower() == tag_name:
                return child
        return None

    @property
    def head(self) -> Optional[Element]:
        return self._child_of_root('head')

    @property
    def body(self) -> Optional[Element]:
        return self._child_of_root('body')

    @property
    def title(self) -> str:
        """Get or set the text of the document's <title> element."""
        title = select_one('title', self)
        return title.text_content.strip() if title is not None else ""

    @title.setter
    def title(self, value: str) -> None:
        title = select_one('title', self)
        if title is None:
            head = self.head
            if head is None:
                logger.warning("Cannot set title: document has no head")
                return
            title = head.append_child(self.create_element('title'))
        title.text_content = value

    @property
    def children(self) -> List[Element]:
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    # Node factories

    def create_element(self, tag_name: str) -> Element:
        """
        Create an HTML element.

        Tag names registered in custom_elements create an instance of the
        registered class.

        Args:
            tag_name: The tag name

        Returns:
            The new, detached element
        """
        element_class = self.custom_elements.get(tag_name) or Element
        return element_class(tag_name.lower(), HTML_NAMESPACE, self)

    def create_element_ns(self, namespace_uri: Optional[str], qualified_name: str) -> Element:
        if namespace_uri in (None, HTML_NAMESPACE):
            return self.create_element(qualified_name)
        return Element(qualified_name, namespace_uri, self)

    def create_text_node(self, data: str) -> Text:
        return Text(data, self)

    def create_comment(self, data: str) -> Comment:
        return Comment(data, self)

    def create_processing_instruction(self, target: str, data: str) -> ProcessingInstruction:
        return ProcessingInstruction(target, data, self)

    def create_document_fragment(self) -> 'DocumentFragment':
        return DocumentFragment(self)

    def create_fragment(self, html: str) -> 'DocumentFragment':
        """
        Create a document fragment from an HTML string.

        Args:
            html: The HTML string

        Returns:
            A document fragment containing the parsed HTML
        """
        from .parse_util import parse_fragment
        return parse_fragment(self, html)

    def parse_html(self, html: str) -> 'Document':
        """Replace this document's content with the parsed html."""
        from .parse_util import parse_html
        return parse_html(html, self)

    # Queries

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return _get_element_by_id(self, element_id)

    def get_elements_by_tag_name(self, tag_name: str) -> List[Element]:
        return _get_elements_by_tag_name(self, tag_name)

    def get_elements_by_class_name(self, class_name: str) -> List[Element]:
        return _get_elements_by_class_name(self, class_name)

    def query_selector(self, selector: str) -> Optional[Element]:
        return select_one(selector, self)

    def query_selector_all(self, selector: str) -> List[Element]:
        return select_all(selector, self)

    # Events

    def add_event_listener(self, event_type: str, handler: Callable) -> None:
        add_event_listener(self, event_type, handler)

    def remove_event_listener(self, event_type: str, handler: Callable) -> None:
        remove_event_listener(self, event_type, handler)

    def dispatch_event(self, event: Event) -> bool:
        return dispatch_event(self, event)

    def clone_node(self, deep: bool = False) -> 'Document':
        """
        Clone this document. The clone shares the custom element definitions.

        Args:
            deep: Whether to clone child nodes as well
        """
        cloned = Document(self.config)
        cloned.custom_elements = self.custom_elements
        if deep:
            for child in self.child_nodes:
                cloned.append_child(child.clone_node(True))
        return cloned

    def to_string(self, **options) -> str:
        options.setdefault('pretty_html', self.config.get('serializer.pretty_html', False))
        options.setdefault('indent_spaces', self.config.get('serializer.indent_spaces', 2))
        return serialize_node_to_html(self, **options)

    def __str__(self) -> str:
        return self.to_string()

    # JavaScript-style aliases
    documentElement = document_element
    createElement = create_element
    createElementNS = create_element_ns
    createTextNode = create_text_node
    createComment = create_comment
    createProcessingInstruction = create_processing_instruction
    createDocumentFragment = create_document_fragment
    getElementById = get_element_by_id
    getElementsByTagName = get_elements_by_tag_name
    getElementsByClassName = get_elements_by_class_name
    querySelector = query_selector
    querySelectorAll = query_selector_all
    addEventListener = add_event_listener
    removeEventListener = remove_event_listener
    dispatchEvent = dispatch_event
    cloneNode = clone_node


class DocumentFragment(Node):
    """
    A parentless container whose children move into the target tree on insertion.
    """

    def __init__(self, owner_document: Optional[Document] = None):
        super().__init__(NodeType.DOCUMENT_FRAGMENT_NODE, owner_document)
        self.node_name = "#document-fragment"

    @property
    def children(self) -> List[Element]:
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    @property
    def child_element_count(self) -> int:
        return len(self.children)

    @property
    def first_element_child(self) -> Optional[Element]:
        children = self.children
        return children[0] if children else None

    @property
    def last_element_child(self) -> Optional[Element]:
        children = self.children
        return children[-1] if children else None

    @property
    def text_content(self) -> str:
        text: List[str] = []
        _get_text_content(self.child_nodes, text)
        return "".join(text)

    @text_content.setter
    def text_content(self, value: str) -> None:
        for child in list(self.child_nodes):
            self.remove_child(child)
        self.append_child(Text(value, self.owner_document))

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return _get_element_by_id(self, element_id)

    def query_selector(self, selector: str) -> Optional[Element]:
        return select_one(selector, self)

    def query_selector_all(self, selector: str) -> List[Element]:
        return select_all(selector, self)

    def clone_node(self, deep: bool = False) -> 'DocumentFragment':
        cloned = DocumentFragment(self.owner_document)
        if deep:
            for child in self.child_nodes:
                cloned.append_child(child.clone_node(True))
        return cloned

    textContent = text_content
    childElementCount = child_element_count
    firstElementChild = first_element_child
    lastElementChild = last_element_child
    getElementById = get_element_by_id
    querySelector = query_selector
    querySelectorAll = query_selector_all
    cloneNode = clone_node


class DocumentType(Node):
    """A ``<!doctype name>`` node."""

    def __init__(self, name: str, owner_document: Optional[Document] = None,
                 public_id: str = "", system_id: str = ""):
        super().__init__(NodeType.DOCUMENT_TYPE_NODE, owner_document)
        self.name = name or "html"
        self.node_name = self.name
        self.public_id = public_id
        self.system_id = system_id

    def clone_node(self, deep: bool = False) -> 'DocumentType':
        return DocumentType(self.name, self.owner_document, self.public_id, self.system_id)

    cloneNode = clone_node


def create_document(html: Optional[str] = None, config: Optional[Config] = None) -> Document:
    """
    Create a document.

    Args:
        html: Markup to parse; defaults to an empty html/head/body skeleton
        config: Configuration for the document

    Returns:
        The parsed Document
    """
    document = Document(config)
    document.parse_html(DEFAULT_HTML if html is None else html)
    return document
