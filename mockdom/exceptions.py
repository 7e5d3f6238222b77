"""
DOM exceptions raised by the mock document tree.

Each class also derives from the closest builtin so callers can catch
either the DOM name or the Python one.
"""


class DOMException(Exception):
    """Base class for all errors raised by mockdom."""
    pass


class NotFoundError(DOMException, ValueError):
    """A node could not be found where the operation expected it."""
    pass


class InvalidNodeTypeError(DOMException, TypeError):
    """The operation is not valid for this kind of node."""
    pass


class NotSupportedError(DOMException, NotImplementedError):
    """The operation is deliberately not supported by the mock document."""
    pass
