"""
Node implementation for the mock DOM.
This module implements the base Node interface: tree links, the mutation
primitives every other node kind funnels through, and derived navigation.
"""

from enum import IntEnum
from typing import List, Optional

from .exceptions import InvalidNodeTypeError, NotFoundError


class NodeType(IntEnum):
    """Node types as defined in the HTML5 specification."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11


class Node:
    """
    Base Node implementation for the mock DOM.

    A node owns its ``child_nodes`` list; ``parent_node`` is a plain back
    reference. Siblings and connection state are always computed from those
    two fields, never stored.
    """

    ELEMENT_NODE = NodeType.ELEMENT_NODE
    TEXT_NODE = NodeType.TEXT_NODE
    PROCESSING_INSTRUCTION_NODE = NodeType.PROCESSING_INSTRUCTION_NODE
    COMMENT_NODE = NodeType.COMMENT_NODE
    DOCUMENT_NODE = NodeType.DOCUMENT_NODE
    DOCUMENT_TYPE_NODE = NodeType.DOCUMENT_TYPE_NODE
    DOCUMENT_FRAGMENT_NODE = NodeType.DOCUMENT_FRAGMENT_NODE

    def __init__(self, node_type: NodeType, owner_document: Optional['Document'] = None):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
            owner_document: The document that owns this node
        """
        self.node_type = node_type
        self.owner_document = owner_document

        self.parent_node: Optional['Node'] = None
        self.child_nodes: List['Node'] = []

        self.node_name: str = ""
        self.node_value: Optional[str] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.node_name}>"

    @property
    def parent_element(self) -> Optional['Node']:
        """Get or set the parent node."""
        return self.parent_node

    @parent_element.setter
    def parent_element(self, value: Optional['Node']) -> None:
        self.parent_node = value

    def _document_for_children(self) -> Optional['Document']:
        """The document that nodes inserted under this node belong to."""
        return self.owner_document

    def append_child(self, new_node: 'Node') -> 'Node':
        """
        Append a child node to this node.

        The node is detached from its current parent first, so it is never
        listed under two parents.

        Args:
            new_node: The node to append

        Returns:
            The appended node
        """
        from .custom_elements import connect_node

        new_node.remove()
        new_node.parent_node = self
        self.child_nodes.append(new_node)
        connect_node(self._document_for_children(), new_node)
        return new_node

    def insert_before(self, new_node: 'Node', reference_node: Optional['Node'] = None) -> 'Node':
        """
        Insert a node before a reference node.

        Inserting a document fragment moves each of its children, in order,
        and leaves the fragment itself empty and unattached.

        Args:
            new_node: The node to insert
            reference_node: The node to insert before, or None to append

        Returns:
            The node that was passed in

        Raises:
            NotFoundError: If reference_node is not a child of this node
        """
        if new_node.node_type == NodeType.DOCUMENT_FRAGMENT_NODE:
            for child in list(new_node.child_nodes):
                _insert_before(self, child, reference_node)
        else:
            _insert_before(self, new_node, reference_node)

        return new_node

    def remove_child(self, child_node: 'Node') -> 'Node':
        """
        Remove a child node from this node.

        Args:
            child_node: The node to remove

        Returns:
            The removed node

        Raises:
            NotFoundError: If child_node is not a direct child of this node
        """
        from .custom_elements import disconnect_node

        index = _index_of(self.child_nodes, child_node)
        if index < 0:
            raise NotFoundError("node not found within child_nodes during remove_child")

        del self.child_nodes[index]

        if self.node_type == NodeType.ELEMENT_NODE:
            was_connected = self.is_connected
            child_node.parent_node = None
            if was_connected:
                disconnect_node(child_node)
        else:
            child_node.parent_node = None

        return child_node

    def remove(self) -> None:
        """Remove this node from its parent, if it has one."""
        if self.parent_node is not None:
            self.parent_node.remove_child(self)

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> Optional['Node']:
        """
        Replace a child node with another node.

        Args:
            new_child: The replacement node
            old_child: The node to replace

        Returns:
            new_child, or None when old_child is not a child of this node
        """
        if old_child.parent_node is self:
            if new_child is old_child:
                return new_child
            self.insert_before(new_child, old_child)
            old_child.remove()
            return new_child
        return None

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self.child_nodes) > 0

    def contains(self, other: Optional['Node']) -> bool:
        """
        Check if this node is other, or one of its ancestors.

        Args:
            other: The node to check

        Returns:
            True if this node contains the other node, False otherwise
        """
        current = other
        while current is not None:
            if current is self:
                return True
            current = current.parent_node
        return False

    def clone_node(self, deep: bool = False) -> 'Node':
        """Clone this node. Only specialized node kinds can be cloned."""
        raise InvalidNodeTypeError(f"invalid node type to clone: {self.node_type}, deep: {deep}")

    @property
    def first_child(self) -> Optional['Node']:
        return self.child_nodes[0] if self.child_nodes else None

    @property
    def last_child(self) -> Optional['Node']:
        return self.child_nodes[-1] if self.child_nodes else None

    @property
    def next_sibling(self) -> Optional['Node']:
        if self.parent_node is None:
            return None
        siblings = self.parent_node.child_nodes
        index = _index_of(siblings, self)
        if index < 0 or index + 1 >= len(siblings):
            return None
        return siblings[index + 1]

    @property
    def previous_sibling(self) -> Optional['Node']:
        if self.parent_node is None:
            return None
        siblings = self.parent_node.child_nodes
        index = _index_of(siblings, self)
        if index <= 0:
            return None
        return siblings[index - 1]

    @property
    def is_connected(self) -> bool:
        """Whether walking up the parent links reaches a document."""
        node: Optional[Node] = self
        while node is not None:
            if node.node_type == NodeType.DOCUMENT_NODE:
                return True
            node = node.parent_node
        return False

    @property
    def text_content(self) -> Optional[str]:
        """Get or set the node value."""
        return self.node_value

    @text_content.setter
    def text_content(self, value: str) -> None:
        self.node_value = str(value)

    # JavaScript-style aliases
    appendChild = append_child
    insertBefore = insert_before
    removeChild = remove_child
    replaceChild = replace_child
    hasChildNodes = has_child_nodes
    cloneNode = clone_node
    childNodes = property(lambda self: self.child_nodes)
    parentNode = property(lambda self: self.parent_node)
    ownerDocument = property(lambda self: self.owner_document)
    nodeName = property(lambda self: self.node_name)
    nodeType = property(lambda self: self.node_type)
    nodeValue = property(lambda self: self.node_value)
    parentElement = parent_element
    firstChild = first_child
    lastChild = last_child
    nextSibling = next_sibling
    previousSibling = previous_sibling
    isConnected = is_connected
    textContent = text_content


def _index_of(nodes: List[Node], node: Node) -> int:
    """Position of node in nodes by identity, or -1."""
    for index, candidate in enumerate(nodes):
        if candidate is node:
            return index
    return -1


def _insert_before(parent_node: Node, new_node: Node, reference_node: Optional[Node]) -> Node:
    """The single insertion primitive behind insert_before."""
    from .custom_elements import connect_node

    if reference_node is new_node:
        reference_node = new_node.next_sibling

    if reference_node is not None and _index_of(parent_node.child_nodes, reference_node) < 0:
        raise NotFoundError("reference_node not found in parent_node.child_nodes")

    new_node.remove()
    new_node.parent_node = parent_node
    new_node.owner_document = parent_node._document_for_children()

    if reference_node is not None:
        index = _index_of(parent_node.child_nodes, reference_node)
        parent_node.child_nodes.insert(index, new_node)
    else:
        parent_node.child_nodes.append(new_node)

    connect_node(parent_node._document_for_children(), new_node)

    return new_node
