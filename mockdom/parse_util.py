"""
HTML parsing for the mock DOM.
html5lib does the parsing into a minidom tree, which is then converted
node by node into mock DOM nodes.
"""

import logging
from typing import Optional
from xml.dom import Node as MinidomNode
import html5lib

from .comment import Comment, ProcessingInstruction
from .constants import HTML_NAMESPACE
from .document import Document, DocumentFragment, DocumentType
from .element import Element
from .node import Node
from .text import Text

logger = logging.getLogger(__name__)


def _create_parser() -> html5lib.HTMLParser:
    return html5lib.HTMLParser(tree=html5lib.treebuilders.getTreeBuilder("dom"))


def parse_fragment(owner_document: Optional[Document], html: str) -> DocumentFragment:
    """
    Parse an HTML fragment.

    Args:
        owner_document: The document the parsed nodes will belong to, or None
        html: The HTML string

    Returns:
        A document fragment whose children are the parsed nodes
    """
    fragment = DocumentFragment(owner_document)
    parsed = _create_parser().parseFragment(html)
    # merge the adjacent text nodes html5lib emits around character references
    parsed.normalize()

    for child in parsed.childNodes:
        _convert_parsed_nodes(owner_document, child, fragment)

    logger.debug(f"Parsed fragment into {len(fragment.child_nodes)} top-level nodes")
    return fragment


def parse_html(html: str, document: Optional[Document] = None) -> Document:
    """
    Parse a complete HTML document.

    Args:
        html: The HTML string
        document: Existing document to fill; its current children are removed

    Returns:
        The document, with doctype, html, head and body as produced by html5lib
    """
    if document is None:
        document = Document()
    for child in list(document.child_nodes):
        document.remove_child(child)

    parsed = _create_parser().parse(html)
    parsed.normalize()
    for child in parsed.childNodes:
        _convert_parsed_nodes(document, child, document)

    logger.debug(f"Parsed document (first 100 chars): {html[:100]}")
    return document


def _convert_parsed_nodes(owner_document: Optional[Document], node, parent: Node) -> None:
    """
    Recursively convert a parsed minidom node and append it to parent.

    Args:
        owner_document: Document used to create elements, or None
        node: The parsed node from html5lib
        parent: The mock DOM node to append to
    """
    node_type = node.nodeType

    if node_type == MinidomNode.ELEMENT_NODE:
        element = _convert_element(owner_document, node)
        parent.append_child(element)
        for child in node.childNodes:
            _convert_parsed_nodes(owner_document, child, element)

    elif node_type == MinidomNode.TEXT_NODE:
        parent.append_child(Text(node.data, owner_document))

    elif node_type == MinidomNode.COMMENT_NODE:
        parent.append_child(Comment(node.data, owner_document))

    elif node_type == MinidomNode.PROCESSING_INSTRUCTION_NODE:
        parent.append_child(ProcessingInstruction(node.target, node.data, owner_document))

    elif node_type == MinidomNode.DOCUMENT_TYPE_NODE:
        parent.append_child(DocumentType(node.name, owner_document,
                                        node.publicId or "", node.systemId or ""))

    else:
        logger.warning(f"Skipping parsed node of unsupported type {node_type}")


def _convert_element(owner_document: Optional[Document], node) -> Element:
    """
    Convert an html5lib element, with its attributes in source order.

    Args:
        owner_document: Document used to create the element, or None
        node: The minidom element

    Returns:
        The new element (a registered custom element class where one applies)
    """
    if owner_document is not None:
        element = owner_document.create_element_ns(node.namespaceURI, node.tagName)
    else:
        element = Element(node.tagName, node.namespaceURI)

    is_html = node.namespaceURI in (None, HTML_NAMESPACE)

    attributes = node.attributes
    for index in range(attributes.length):
        attr = attributes.item(index)
        # foreign attributes such as viewBox keep their case
        if attr.namespaceURI is None and (is_html or attr.name.lower() == 'style'):
            element.set_attribute(attr.name, attr.value)
        else:
            element.set_attribute_ns(attr.namespaceURI, attr.name, attr.value)

    return element
