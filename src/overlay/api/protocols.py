"""
Protocol definitions for the collaborators of the layer stack and compositor.

These protocols describe the interface the core needs from pluggable
backends, so that alternative implementations (for example a GPU backed
blend, or a resolver reading from a database) can be type checked without
inheriting from the defaults.
"""

from typing import Any, Protocol, runtime_checkable

from overlay.api.raster import Raster


@runtime_checkable
class BlendCapability(Protocol):
    """
    Protocol for a source-over blend backend.

    Implementations must be pure: two rasters in, one raster out, with no
    mutable state shared between calls. A backend may cache expensive
    resources such as a rendering context as long as the output does not
    depend on it.
    """

    def blend(self, base: Raster, overlay: Raster) -> Raster:
        """Paint ``overlay`` on top of ``base`` and return the result."""
        ...


@runtime_checkable
class ResolverProtocol(Protocol):
    """
    Protocol for turning an image source into a raster.

    Implementations raise :py:class:`~overlay.errors.ImageNotFoundError` when
    a name does not resolve and :py:class:`~overlay.errors.InvalidImageError`
    when the data is not a usable image.
    """

    def resolve(self, source: Any) -> Raster:
        """Return the raster for ``source``."""
        ...
