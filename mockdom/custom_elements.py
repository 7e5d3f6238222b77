"""
Custom element registry and lifecycle callbacks.

The tree primitives in node.py call connect_node/disconnect_node after
every structural change and element.py calls attribute_changed after every
attribute write. All three are no-ops for ordinary nodes.
"""

import logging
from typing import Dict, Optional, Type

from .exceptions import NotSupportedError
from .node import Node, NodeType

logger = logging.getLogger(__name__)


class CustomElementRegistry:
    """
    Maps custom element names to the Element subclasses implementing them.

    Subclasses may define ``connected_callback()``,
    ``disconnected_callback()`` and
    ``attribute_changed_callback(name, old_value, new_value)``; the last one
    only fires for names listed in the class attribute
    ``observed_attributes``.
    """

    def __init__(self):
        self._definitions: Dict[str, Type] = {}

    def define(self, name: str, element_class: Type) -> None:
        """
        Define a custom element.

        Args:
            name: The tag name; must contain a hyphen
            element_class: The Element subclass to instantiate for the tag

        Raises:
            NotSupportedError: If the name is invalid or already defined
        """
        name = name.lower()
        if '-' not in name:
            raise NotSupportedError(f"'{name}' is not a valid custom element name")
        if name in self._definitions:
            raise NotSupportedError(f"custom element '{name}' has already been defined")

        self._definitions[name] = element_class
        logger.debug(f"Defined custom element {name} as {element_class.__name__}")

    def get(self, name: str) -> Optional[Type]:
        return self._definitions.get(name.lower())

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._definitions


def _is_custom_element(owner_document: Optional['Document'], node: Node) -> bool:
    if node.node_type != NodeType.ELEMENT_NODE or '-' not in node.node_name:
        return False
    if owner_document is None:
        return False
    registry = getattr(owner_document, 'custom_elements', None)
    return registry is not None and node.node_name.lower() in registry


def connect_node(owner_document: Optional['Document'], node: Node) -> None:
    """
    Adopt a subtree into owner_document and fire connected callbacks.

    Callbacks fire in document order, only for defined custom elements
    that are actually connected to a document.
    """
    node.owner_document = owner_document

    if _is_custom_element(owner_document, node) and node.is_connected:
        callback = getattr(node, 'connected_callback', None)
        if callable(callback):
            callback()

    for child in list(node.child_nodes):
        connect_node(owner_document, child)


def disconnect_node(node: Node) -> None:
    """Fire disconnected callbacks for every custom element in a removed subtree."""
    if _is_custom_element(node.owner_document, node):
        callback = getattr(node, 'disconnected_callback', None)
        if callable(callback):
            callback()

    for child in list(node.child_nodes):
        disconnect_node(child)


def attribute_changed(element: Node, attr_name: str, old_value: Optional[str],
                      new_value: Optional[str]) -> None:
    """
    Notify an element that one of its attributes changed.

    A new_value of None means the attribute was removed.
    """
    attr_name = attr_name.lower()
    observed = getattr(type(element), 'observed_attributes', None)
    if not observed or attr_name not in [name.lower() for name in observed]:
        return

    callback = getattr(element, 'attribute_changed_callback', None)
    if callable(callback):
        callback(attr_name, old_value, new_value)
