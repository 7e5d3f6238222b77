"""
Attr and attribute map implementation for the mock DOM.
Attributes are kept in insertion order and looked up by (namespace, name),
with the name compared case-insensitively.
"""

from typing import Iterator, List, Optional, Union


class Attr:
    """
    Attribute node implementation for the mock DOM.
    """

    def __init__(self, name: str, value: str, namespace_uri: Optional[str] = None):
        """
        Initialize a new attribute.

        Args:
            name: The attribute name
            value: The attribute value
            namespace_uri: The attribute namespace, None for plain HTML attributes
        """
        self.name = name
        self.value = "" if value is None else str(value)
        self.namespace_uri = namespace_uri

        self.prefix: Optional[str] = None
        self.local_name = name

        if ':' in name:
            self.prefix, self.local_name = name.split(':', 1)

    def __repr__(self) -> str:
        return f"<Attr {self.name}={self.value!r}>"

    @property
    def specified(self) -> bool:
        return True

    def clone(self) -> 'Attr':
        """
        Clone this attribute.

        Returns:
            A new Attr instance with the same name, value and namespace
        """
        attr = Attr(self.name, self.value, self.namespace_uri)
        attr.prefix = self.prefix
        attr.local_name = self.local_name
        return attr


class AttributeMap:
    """
    Ordered collection of Attr objects belonging to one element.
    """

    def __init__(self):
        self.items: List[Attr] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Attr]:
        return iter(list(self.items))

    def __repr__(self) -> str:
        return f"<AttributeMap {self.items!r}>"

    @property
    def length(self) -> int:
        return len(self.items)

    def item(self, index: int) -> Optional[Attr]:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def get_named_item(self, name: str) -> Optional[Attr]:
        """Find an attribute by name, in any namespace."""
        name = name.lower()
        for attr in self.items:
            if attr.name.lower() == name:
                return attr
        return None

    def get_named_item_ns(self, namespace_uri: Optional[str], name: str) -> Optional[Attr]:
        """
        Find an attribute by namespace and name.

        Args:
            namespace_uri: Namespace to match exactly (None for no namespace)
            name: Name to match case-insensitively

        Returns:
            The matching Attr, or None
        """
        name = name.lower()
        for attr in self.items:
            if attr.namespace_uri == namespace_uri and attr.name.lower() == name:
                return attr
        return None

    def set_named_item(self, attr: Attr) -> None:
        self.set_named_item_ns(attr)

    def set_named_item_ns(self, attr: Attr) -> None:
        """Add attr, replacing any existing attribute with the same namespace and name."""
        existing = self.get_named_item_ns(attr.namespace_uri, attr.name)
        if existing is not None:
            existing.value = attr.value
        else:
            self.items.append(attr)

    def remove_named_item(self, attr: Union[Attr, str]) -> None:
        if isinstance(attr, str):
            attr = self.get_named_item(attr)
        if attr is not None:
            self.remove_named_item_ns(attr)

    def remove_named_item_ns(self, attr: Attr) -> None:
        for index, candidate in enumerate(self.items):
            if candidate is attr:
                del self.items[index]
                return

    def clone_attributes(self) -> 'AttributeMap':
        """
        Copy this map.

        Returns:
            A new map holding clones of every attribute, in the same order
        """
        cloned = AttributeMap()
        for attr in self.items:
            cloned.items.append(attr.clone())
        return cloned

    getNamedItem = get_named_item
    getNamedItemNS = get_named_item_ns
    setNamedItem = set_named_item
    setNamedItemNS = set_named_item_ns
    removeNamedItem = remove_named_item
    removeNamedItemNS = remove_named_item_ns
