"""
Text node implementation for the mock DOM.
"""

from typing import Optional
from .node import Node, NodeType


class Text(Node):
    """
    Text node implementation for the mock DOM.

    ``data`` and ``node_value`` are the same string.
    """

    def __init__(self, data: str, owner_document: Optional['Document'] = None):
        """
        Initialize a text node.

        Args:
            data: The text content
            owner_document: The document that owns this node
        """
        super().__init__(NodeType.TEXT_NODE, owner_document)

        # Ensure data is not None
        if data is None:
            data = ""

        self.node_name = "#text"
        self.node_value = str(data)

    @property
    def data(self) -> str:
        return self.node_value

    @data.setter
    def data(self, value: str) -> None:
        self.node_value = "" if value is None else str(value)

    @property
    def length(self) -> int:
        return len(self.node_value)

    @property
    def whole_text(self) -> str:
        """
        Get the text of this node and its adjacent text siblings.

        Returns:
            The concatenated text content
        """
        result = [self.data]

        current = self.previous_sibling
        while current is not None and current.node_type == NodeType.TEXT_NODE:
            result.insert(0, current.data)
            current = current.previous_sibling

        current = self.next_sibling
        while current is not None and current.node_type == NodeType.TEXT_NODE:
            result.append(current.data)
            current = current.next_sibling

        return "".join(result)

    def split_text(self, offset: int) -> 'Text':
        """
        Split this text node into two nodes at the specified offset.

        Args:
            offset: The character offset at which to split

        Returns:
            The new text node containing the text after the split point

        Raises:
            ValueError: If the offset is invalid
        """
        if offset < 0 or offset > self.length:
            raise ValueError("Invalid split offset")

        new_node = Text(self.data[offset:], self.owner_document)
        self.data = self.data[:offset]

        if self.parent_node is not None:
            self.parent_node.insert_before(new_node, self.next_sibling)

        return new_node

    def append_data(self, data: str) -> None:
        """Append data to the end of the text node."""
        self.data += data

    def clone_node(self, deep: bool = False) -> 'Text':
        """
        Clone this text node.

        Args:
            deep: Not used for text nodes

        Returns:
            A new text node with the same content
        """
        return Text(self.data, self.owner_document)

    wholeText = whole_text
    splitText = split_text
    appendData = append_data
    cloneNode = clone_node
