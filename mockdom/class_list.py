"""
Class list helper for mock elements.
"""

from typing import Iterator, List, Optional


class ClassList:
    """
    Token list view over an element's ``class`` attribute.

    Nothing is cached: every call reads the attribute and every change
    writes it back.
    """

    def __init__(self, element: 'Element'):
        self.element = element

    def _get_classes(self) -> List[str]:
        return [cls for cls in (self.element.get_attribute('class') or "").split() if cls]

    def _set_classes(self, classes: List[str]) -> None:
        self.element.set_attribute('class', " ".join(classes))

    def add(self, *class_names: str) -> None:
        classes = self._get_classes()
        changed = False
        for name in class_names:
            if name not in classes:
                classes.append(name)
                changed = True
        if changed:
            self._set_classes(classes)

    def remove(self, *class_names: str) -> None:
        classes = self._get_classes()
        remaining = [cls for cls in classes if cls not in class_names]
        if len(remaining) != len(classes):
            self._set_classes(remaining)

    def contains(self, class_name: str) -> bool:
        return class_name in self._get_classes()

    def toggle(self, class_name: str, force: Optional[bool] = None) -> bool:
        """
        Toggle a class.

        Args:
            class_name: The class to toggle
            force: When given, add (True) or remove (False) instead of toggling

        Returns:
            Whether the class is present afterwards
        """
        present = self.contains(class_name)
        if force is None:
            force = not present
        if force and not present:
            self.add(class_name)
        elif not force and present:
            self.remove(class_name)
        return force

    def item(self, index: int) -> Optional[str]:
        classes = self._get_classes()
        return classes[index] if 0 <= index < len(classes) else None

    @property
    def length(self) -> int:
        return len(self._get_classes())

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[str]:
        return iter(self._get_classes())

    def __contains__(self, class_name: str) -> bool:
        return self.contains(class_name)

    def __str__(self) -> str:
        return " ".join(self._get_classes())
