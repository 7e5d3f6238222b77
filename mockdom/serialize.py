"""HTML serialization for mock DOM nodes."""

import logging
from typing import Iterable, List, Optional

from .constants import HTML_NAMESPACE, NON_ESCAPABLE_CONTENT, PREFORMATTED_ELEMENTS, VOID_ELEMENTS
from .node import Node, NodeType

logger = logging.getLogger(__name__)


def escape_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return (str(text).replace("&", "&amp;").replace("<", "&lt;")
            .replace(">", "&gt;").replace("\u00a0", "&nbsp;"))


def escape_attribute_value(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).replace("&", "&amp;").replace('"', "&quot;").replace("\u00a0", "&nbsp;")


def tag_name_for_output(element: Node) -> str:
    """HTML elements are written lowercase; foreign elements keep their local name."""
    if element.namespace_uri is None or element.namespace_uri == HTML_NAMESPACE:
        return element.node_name.lower()
    return element.local_name


class _Options:
    def __init__(self, pretty_html: bool, indent_spaces: int, new_lines: bool,
                 exclude_tags: Iterable[str]):
        self.pretty_html = pretty_html
        self.indent_spaces = indent_spaces
        self.new_lines = new_lines
        self.exclude_tags = {tag.lower() for tag in exclude_tags}


def serialize_node_to_html(node: Node,
                           outer_html: bool = False,
                           pretty_html: bool = False,
                           indent_spaces: int = 2,
                           new_lines: Optional[bool] = None,
                           exclude_tags: Optional[Iterable[str]] = None) -> str:
    """
    Serialize a node to an HTML string.

    Args:
        node: The node to serialize
        outer_html: Include the node itself, not only its children
        pretty_html: Put each node on its own indented line
        indent_spaces: Spaces per nesting level when pretty printing
        new_lines: Whether line breaks are emitted (defaults to pretty_html)
        exclude_tags: Element names to leave out, together with their subtrees

    Returns:
        The HTML string
    """
    if new_lines is None:
        new_lines = pretty_html
    opts = _Options(pretty_html, indent_spaces if pretty_html else 0, new_lines, exclude_tags or ())

    output: List[str] = []
    if outer_html or node.node_type not in (NodeType.ELEMENT_NODE,
                                            NodeType.DOCUMENT_NODE,
                                            NodeType.DOCUMENT_FRAGMENT_NODE):
        _serialize(node, output, 0, opts, raw_text=False, preformatted=False)
    else:
        raw_text, preformatted = _content_mode(node)
        for child in node.child_nodes:
            _serialize(child, output, 0, opts, raw_text, preformatted)

    html = "".join(output)
    if opts.new_lines:
        html = html.strip("\n")
    return html


def _content_mode(node: Node):
    if node.node_type != NodeType.ELEMENT_NODE:
        return False, False
    name = node.node_name.lower()
    return name in NON_ESCAPABLE_CONTENT, name in PREFORMATTED_ELEMENTS


def _line_start(output: List[str], depth: int, opts: _Options, preformatted: bool) -> None:
    if opts.new_lines and not preformatted:
        output.append("\n" + " " * (depth * opts.indent_spaces))


def _serialize(node: Node, output: List[str], depth: int, opts: _Options,
               raw_text: bool, preformatted: bool) -> None:
    node_type = node.node_type

    if node_type == NodeType.ELEMENT_NODE:
        _serialize_element(node, output, depth, opts, preformatted)

    elif node_type == NodeType.TEXT_NODE:
        text = node.node_value or ""
        if opts.pretty_html and not preformatted and not raw_text:
            text = text.strip()
            if not text:
                return
            _line_start(output, depth, opts, preformatted)
        output.append(text if raw_text else escape_text(text))

    elif node_type == NodeType.COMMENT_NODE:
        _line_start(output, depth, opts, preformatted)
        output.append(f"<!--{node.node_value or ''}-->")

    elif node_type == NodeType.PROCESSING_INSTRUCTION_NODE:
        _line_start(output, depth, opts, preformatted)
        output.append(f"<?{node.node_name} {node.node_value or ''}?>")

    elif node_type == NodeType.DOCUMENT_TYPE_NODE:
        output.append(f"<!doctype {node.name}>")

    elif node_type in (NodeType.DOCUMENT_NODE, NodeType.DOCUMENT_FRAGMENT_NODE):
        for child in node.child_nodes:
            _serialize(child, output, depth, opts, raw_text, preformatted)

    else:
        logger.warning(f"Cannot serialize node type {node_type}")


def _serialize_element(element: Node, output: List[str], depth: int, opts: _Options,
                       preformatted: bool) -> None:
    name = tag_name_for_output(element)
    if name.lower() in opts.exclude_tags:
        return

    _line_start(output, depth, opts, preformatted)
    output.append(f"<{name}")

    for attr in element.attributes:
        if attr.namespace_uri is None and attr.name.lower() == 'style':
            continue
        if attr.value == "":
            output.append(f" {attr.name}")
        else:
            output.append(f' {attr.name}="{escape_attribute_value(attr.value)}"')

    if element.has_attribute('style'):
        output.append(f' style="{escape_attribute_value(element.get_attribute("style"))}"')

    output.append(">")

    if name.lower() in VOID_ELEMENTS:
        return

    raw_text, child_preformatted = _content_mode(element)
    child_preformatted = preformatted or child_preformatted

    # text-only content stays on the start tag's line
    has_child_nodes = any(child.node_type != NodeType.TEXT_NODE for child in element.child_nodes)
    inline = child_preformatted or not has_child_nodes

    for child in element.child_nodes:
        _serialize(child, output, depth + 1, opts, raw_text, inline)

    if has_child_nodes:
        _line_start(output, depth, opts, child_preformatted)
    output.append(f"</{name}>")
