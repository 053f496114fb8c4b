"""
Exceptions raised by the snakeflow layout engine.

Both exceptions signal programming errors rather than transient conditions:
callers are expected to fix their inputs, not retry.
"""


class InvalidArgumentError(ValueError):
    """Raised when a layout or reveal parameter is outside its valid domain."""

    pass


class IndexOutOfRangeError(IndexError):
    """Raised when a connector is requested for a pair beyond the node count."""

    pass
