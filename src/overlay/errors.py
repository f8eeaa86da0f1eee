"""
Errors raised when layer content cannot be accepted.

All errors derive from :py:class:`OverlayError`, which is a
:py:class:`ValueError`, so callers that only care about bad input can catch
``ValueError``::

    from overlay import LayerStack
    from overlay.errors import ImageNotFoundError

    try:
        stack = LayerStack({0: "background", 1: "missing"})
    except ImageNotFoundError as e:
        print(e.image_name)
"""

from typing import Optional


class OverlayError(ValueError):
    """Base error for layer construction and mutation failures.

    :param image_name: Name of the offending image, if known.
    """

    reason = "overlay error"

    def __init__(self, image_name: Optional[str] = None) -> None:
        self.image_name = image_name
        if image_name is not None:
            message = "%s: %s" % (image_name, self.reason)
        else:
            message = self.reason
        super().__init__(message)


class InvalidDictionaryError(OverlayError):
    """Initial layer mapping is not densely indexed from 0."""

    reason = "invalid layer dictionary"


class ImageNotFoundError(OverlayError):
    """Named asset does not resolve to an image file."""

    reason = "was not found"


class InvalidImageError(OverlayError):
    """Resolved data is not a usable raster image."""

    reason = "is invalid"


__all__ = [
    "OverlayError",
    "InvalidDictionaryError",
    "ImageNotFoundError",
    "InvalidImageError",
]
