"""
Comment and processing instruction nodes for the mock DOM.
Neither kind contributes to an element's text content.
"""

from typing import Optional
from .node import Node, NodeType


class Comment(Node):
    """
    Comment node implementation for the mock DOM.
    """

    def __init__(self, data: str, owner_document: Optional['Document'] = None):
        """
        Initialize a comment node.

        Args:
            data: The comment text
            owner_document: The document that owns this node
        """
        super().__init__(NodeType.COMMENT_NODE, owner_document)
        self.node_name = "#comment"
        self.node_value = "" if data is None else str(data)

    @property
    def data(self) -> str:
        return self.node_value

    @data.setter
    def data(self, value: str) -> None:
        self.node_value = "" if value is None else str(value)

    @property
    def length(self) -> int:
        return len(self.node_value)

    def clone_node(self, deep: bool = False) -> 'Comment':
        return Comment(self.data, self.owner_document)

    cloneNode = clone_node


class ProcessingInstruction(Node):
    """A ``<?target data?>`` node."""

    def __init__(self, target: str, data: str, owner_document: Optional['Document'] = None):
        super().__init__(NodeType.PROCESSING_INSTRUCTION_NODE, owner_document)
        self.node_name = target
        self.node_value = "" if data is None else str(data)

    @property
    def target(self) -> str:
        return self.node_name

    @property
    def data(self) -> str:
        return self.node_value

    @data.setter
    def data(self, value: str) -> None:
        self.node_value = "" if value is None else str(value)

    def clone_node(self, deep: bool = False) -> 'ProcessingInstruction':
        return ProcessingInstruction(self.target, self.data, self.owner_document)

    cloneNode = clone_node
