"""
CSS Selector Engine implementation.
This module matches cssselect parse trees directly against mock DOM elements.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional
import cssselect
from cssselect.parser import Matching, SpecificityAdjustment, parse_series

from .node import Node, NodeType

logger = logging.getLogger(__name__)

_MATCHES_ANY_TYPES = (Matching, SpecificityAdjustment)


class SelectorEngine:
    """
    CSS Selector Engine for mock DOM queries.

    Supports type, universal, id, class and attribute selectors, the four
    combinators, :not(), :is()/:where(), structural pseudo-classes and
    selector groups.
    """

    def __init__(self):
        """Initialize the selector engine."""
        # Cache for parsed selectors
        self._selector_cache: Dict[str, List[cssselect.parser.Selector]] = {}

    def _get_parsed_selector(self, selector: str) -> List[cssselect.parser.Selector]:
        """
        Get a parsed selector, using the cache if available.

        Raises:
            cssselect.SelectorSyntaxError: If the selector cannot be parsed
        """
        if selector not in self._selector_cache:
            self._selector_cache[selector] = cssselect.parse(selector)
        return self._selector_cache[selector]

    def select(self, selector: str, root_node: Node) -> List['Element']:
        """
        Find all descendant elements of root_node matching a selector.

        Args:
            selector: The CSS selector string
            root_node: The node to search under (never part of the result)

        Returns:
            Matching elements in document order
        """
        parsed = self._get_parsed_selector(selector)
        return [element for element in _iter_descendant_elements(root_node)
                if self._matches_any(element, parsed)]

    def select_one(self, selector: str, root_node: Node) -> Optional['Element']:
        parsed = self._get_parsed_selector(selector)
        for element in _iter_descendant_elements(root_node):
            if self._matches_any(element, parsed):
                return element
        return None

    def matches(self, element: 'Element', selector: str) -> bool:
        """
        Check if an element matches a CSS selector.

        Args:
            element: The element to check
            selector: The CSS selector

        Returns:
            True if the element matches the selector, False otherwise
        """
        return self._matches_any(element, self._get_parsed_selector(selector))

    def _matches_any(self, element: 'Element', parsed: List[cssselect.parser.Selector]) -> bool:
        for selector in parsed:
            if selector.pseudo_element is not None:
                logger.warning(f"Pseudo-elements never match: ::{selector.pseudo_element}")
                continue
            if self._matches_selector_tree(element, selector.parsed_tree):
                return True
        return False

    def _matches_selector_tree(self, element: 'Element', tree: Any) -> bool:
        """
        Match an element against one node of a cssselect parse tree.

        Compound parts (Class, Hash, Attrib, ...) wrap the part to their
        left in ``tree.selector``, which has to match as well.
        """
        if isinstance(tree, cssselect.parser.Element):
            if not tree.element or tree.element == '*':
                return True
            tag = tree.element.lower()
            return element.node_name.lower() == tag or element.local_name.lower() == tag

        if isinstance(tree, cssselect.parser.Hash):
            return self._matches_selector_tree(element, tree.selector) and element.id == tree.id

        if isinstance(tree, cssselect.parser.Class):
            return (self._matches_selector_tree(element, tree.selector) and
                    tree.class_name in element.class_list)

        if isinstance(tree, cssselect.parser.Attrib):
            return (self._matches_selector_tree(element, tree.selector) and
                    self._matches_attribute(element, tree))

        if isinstance(tree, cssselect.parser.Pseudo):
            return (self._matches_selector_tree(element, tree.selector) and
                    self._matches_pseudo(element, tree.ident.lower()))

        if isinstance(tree, cssselect.parser.Function):
            return (self._matches_selector_tree(element, tree.selector) and
                    self._matches_function(element, tree))

        if isinstance(tree, cssselect.parser.Negation):
            return (self._matches_selector_tree(element, tree.selector) and
                    not self._matches_selector_tree(element, tree.subselector))

        if isinstance(tree, _MATCHES_ANY_TYPES):
            return (self._matches_selector_tree(element, tree.selector) and
                    any(self._matches_selector_tree(element, sub) for sub in tree.selector_list))

        if isinstance(tree, cssselect.parser.CombinedSelector):
            return self._matches_combinator(element, tree)

        logger.warning(f"Unknown selector type: {type(tree).__name__}")
        return False

    def _matches_combinator(self, element: 'Element', tree: Any) -> bool:
        # "A > B" parses to selector=A, subselector=B: B is tested on the element itself
        if not self._matches_selector_tree(element, tree.subselector):
            return False

        combinator = tree.combinator
        if combinator == ' ':
            parent = _parent_element(element)
            while parent is not None:
                if self._matches_selector_tree(parent, tree.selector):
                    return True
                parent = _parent_element(parent)
            return False

        if combinator == '>':
            parent = _parent_element(element)
            return parent is not None and self._matches_selector_tree(parent, tree.selector)

        if combinator == '+':
            previous = element.previous_element_sibling
            return previous is not None and self._matches_selector_tree(previous, tree.selector)

        if combinator == '~':
            sibling = element.previous_element_sibling
            while sibling is not None:
                if self._matches_selector_tree(sibling, tree.selector):
                    return True
                sibling = sibling.previous_element_sibling
            return False

        logger.warning(f"Unknown combinator: {combinator}")
        return False

    def _matches_attribute(self, element: 'Element', tree: Any) -> bool:
        actual = element.get_attribute(tree.attrib)
        if actual is None:
            return False

        operator = tree.operator
        if operator == 'exists':
            return True

        expected = getattr(tree.value, 'value', tree.value)
        if operator == '=':
            return actual == expected
        if operator == '~=':
            return expected in actual.split()
        if operator == '|=':
            return actual == expected or actual.startswith(f"{expected}-")
        if operator == '^=':
            return bool(expected) and actual.startswith(expected)
        if operator == '$=':
            return bool(expected) and actual.endswith(expected)
        if operator == '*=':
            return bool(expected) and expected in actual
        if operator == '!=':
            return actual != expected

        logger.warning(f"Unsupported attribute operator: {operator}")
        return False

    def _matches_pseudo(self, element: 'Element', name: str) -> bool:
        if name == 'first-child':
            return element.previous_element_sibling is None and element.parent_node is not None
        if name == 'last-child':
            return element.next_element_sibling is None and element.parent_node is not None
        if name == 'only-child':
            return (element.parent_node is not None and
                    element.previous_element_sibling is None and
                    element.next_element_sibling is None)
        if name == 'empty':
            for child in element.child_nodes:
                if child.node_type == NodeType.ELEMENT_NODE:
                    return False
                if child.node_type == NodeType.TEXT_NODE and child.node_value:
                    return False
            return True
        if name == 'root':
            return (element.parent_node is not None and
                    element.parent_node.node_type == NodeType.DOCUMENT_NODE)
        if name == 'checked':
            return element.has_attribute('checked') or element.has_attribute('selected')
        if name == 'disabled':
            return element.has_attribute('disabled')
        if name == 'enabled':
            return not element.has_attribute('disabled')

        logger.warning(f"Unsupported pseudo-class: {name}")
        return False

    def _matches_function(self, element: 'Element', tree: Any) -> bool:
        name = tree.name.lower()
        if name not in ('nth-child', 'nth-last-child', 'nth-of-type', 'nth-last-of-type'):
            logger.warning(f"Unsupported pseudo-class function: {name}()")
            return False

        parent = element.parent_node
        if parent is None:
            return False

        siblings = [child for child in parent.child_nodes if child.node_type == NodeType.ELEMENT_NODE]
        if name.endswith('of-type'):
            siblings = [sibling for sibling in siblings if sibling.node_name == element.node_name]
        if name.startswith('nth-last'):
            siblings.reverse()

        position = next(index for index, sibling in enumerate(siblings) if sibling is element) + 1
        a, b = parse_series(tree.arguments)
        if a == 0:
            return position == b
        steps, remainder = divmod(position - b, a)
        return remainder == 0 and steps >= 0


def _parent_element(element: 'Element') -> Optional['Element']:
    parent = element.parent_node
    if parent is not None and parent.node_type == NodeType.ELEMENT_NODE:
        return parent
    return None


def _iter_descendant_elements(node: Node) -> Iterator['Element']:
    for child in node.child_nodes:
        if child.node_type == NodeType.ELEMENT_NODE:
            yield child
        yield from _iter_descendant_elements(child)


_default_engine = SelectorEngine()


def _engine_for(node: Node) -> SelectorEngine:
    document = node if node.node_type == NodeType.DOCUMENT_NODE else node.owner_document
    return getattr(document, 'selector_engine', None) or _default_engine


def select_one(selector: str, node: Node) -> Optional['Element']:
    """Return the first element under node matching selector, or None."""
    return _engine_for(node).select_one(selector, node)


def select_all(selector: str, node: Node) -> List['Element']:
    """Return every element under node matching selector, in document order."""
    return _engine_for(node).select(selector, node)
