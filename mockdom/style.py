"""
Inline style declarations for mock elements.
Parsing is delegated to cssutils; serialization keeps the plain
``name: value;`` form used by the style attribute.
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple
import cssutils

logger = logging.getLogger(__name__)

# Suppress cssutils warning logs
cssutils.log.setLevel(logging.CRITICAL)

_UPPERCASE_REGEX = re.compile(r'([a-z0-9])([A-Z])')


def to_property_name(name: str) -> str:
    """
    Convert a camelCase or snake_case name to its CSS property name.

    Custom properties (``--foo``) are returned unchanged.
    """
    if name.startswith('--'):
        return name
    name = _UPPERCASE_REGEX.sub(r'\1-\2', name).replace('_', '-')
    return name.lower()


class CSSStyleDeclaration:
    """
    Structured view over an element's inline style.

    Properties can be read and written by CSS name, camelCase or snake_case:
    ``style['background-color']``, ``style['backgroundColor']`` and
    ``style.background_color`` all address the same declaration.
    """

    def __init__(self, css_text: str = ""):
        object.__setattr__(self, '_declaration', cssutils.css.CSSStyleDeclaration())
        if css_text:
            self.css_text = css_text

    @property
    def css_text(self) -> str:
        """Get or set the serialized declarations."""
        parts = []
        for name, value, priority in self._properties():
            if priority:
                parts.append(f"{name}: {value} !{priority};")
            else:
                parts.append(f"{name}: {value};")
        return " ".join(parts)

    @css_text.setter
    def css_text(self, value: Optional[str]) -> None:
        text = "" if value is None else str(value)
        declaration = cssutils.parseStyle(text, validate=False)
        object.__setattr__(self, '_declaration', declaration)
        logger.debug(f"Parsed inline style {text!r} into {declaration.length} declarations")

    cssText = css_text

    @property
    def length(self) -> int:
        return len(self._properties())

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[str]:
        return iter([name for name, _, _ in self._properties()])

    def __repr__(self) -> str:
        return f"<CSSStyleDeclaration {self.css_text!r}>"

    def _properties(self) -> List[Tuple[str, str, str]]:
        return [(prop.name, prop.value, prop.priority)
                for prop in self._declaration.getProperties(all=False)]

    def items(self) -> List[Tuple[str, str]]:
        return [(name, value) for name, value, _ in self._properties()]

    def get_property_value(self, name: str) -> str:
        """
        Get a property value.

        Args:
            name: Property name in any supported spelling

        Returns:
            The value, or an empty string when the property is not set
        """
        return self._declaration.getPropertyValue(to_property_name(name))

    def get_property_priority(self, name: str) -> str:
        return self._declaration.getPropertyPriority(to_property_name(name))

    def set_property(self, name: str, value: Optional[str], priority: str = "") -> None:
        """
        Set a property. An empty or None value removes it.

        Args:
            name: Property name in any supported spelling
            value: CSS value text
            priority: "important" or an empty string
        """
        if value is None or str(value) == "":
            self.remove_property(name)
            return
        if priority and not priority.startswith('!'):
            priority = f"!{priority}"
        self._declaration.setProperty(to_property_name(name), str(value), priority)

    def remove_property(self, name: str) -> str:
        """Remove a property and return its previous value."""
        return self._declaration.removeProperty(to_property_name(name))

    def clone(self) -> 'CSSStyleDeclaration':
        return CSSStyleDeclaration(self.css_text)

    def __getitem__(self, name: str) -> str:
        return self.get_property_value(name)

    def __setitem__(self, name: str, value: str) -> None:
        self.set_property(name, value)

    def __delitem__(self, name: str) -> None:
        self.remove_property(name)

    def __contains__(self, name: str) -> bool:
        return self.get_property_value(name) != ""

    def __getattr__(self, name: str) -> str:
        if name.startswith('_'):
            raise AttributeError(name)
        return self.get_property_value(name)

    def __setattr__(self, name: str, value) -> None:
        if name.startswith('_') or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.set_property(name, value)

    def __delattr__(self, name: str) -> None:
        self.remove_property(name)

    getPropertyValue = get_property_value
    getPropertyPriority = get_property_priority
    setProperty = set_property
    removeProperty = remove_property


def create_css_style_declaration() -> CSSStyleDeclaration:
    """Create an empty style declaration."""
    return CSSStyleDeclaration()
