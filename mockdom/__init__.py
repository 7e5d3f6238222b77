"""
mockdom - A lightweight mock DOM for exercising HTML-manipulating code in Python.
This package provides Node, Element and Document implementations with
attribute, style, event and custom element support, plus HTML parsing,
serialization and CSS selector queries.
"""

from .node import Node, NodeType
from .element import Element
from .attr import Attr, AttributeMap
from .text import Text
from .comment import Comment, ProcessingInstruction
from .document import Document, DocumentFragment, DocumentType, create_document
from .style import CSSStyleDeclaration
from .class_list import ClassList
from .events import Event
from .custom_elements import CustomElementRegistry
from .selector_engine import SelectorEngine
from .serialize import serialize_node_to_html
from .parse_util import parse_fragment, parse_html
from .exceptions import DOMException, InvalidNodeTypeError, NotFoundError, NotSupportedError

# Package information
__version__ = "0.1.0"
__description__ = "A lightweight mock DOM for testing HTML-manipulating code"

__all__ = [
    'Node', 'NodeType', 'Element', 'Attr', 'AttributeMap', 'Text', 'Comment',
    'ProcessingInstruction', 'Document', 'DocumentFragment', 'DocumentType',
    'create_document', 'CSSStyleDeclaration', 'ClassList', 'Event',
    'CustomElementRegistry', 'SelectorEngine', 'serialize_node_to_html',
    'parse_fragment', 'parse_html', 'DOMException', 'InvalidNodeTypeError',
    'NotFoundError', 'NotSupportedError',
]
