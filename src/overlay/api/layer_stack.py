"""
Layer stack module.

A :py:class:`LayerStack` keeps rasters in compositing order, bottom layer at
index 0. Indices are always dense: every operation either keeps them
contiguous or leaves the stack untouched.
"""

import logging
import numbers
from typing import Any, Iterable, Iterator, Mapping, Optional

from PIL import Image

from overlay.api import pil_io
from overlay.api.protocols import ResolverProtocol
from overlay.api.raster import Raster
from overlay.api.resolver import Resolver
from overlay.errors import InvalidDictionaryError

logger = logging.getLogger(__name__)


class LayerStack(object):
    """
    Ordered collection of layers.

    The stack is built from a mapping of layer index to image source, where a
    source is anything the resolver accepts: an asset name, a
    :py:class:`~overlay.api.raster.Raster`, a PIL Image, a NumPy array, or
    encoded image bytes.

    Example::

        from overlay import LayerStack

        stack = LayerStack({0: "Square", 1: "Triangle"})
        stack.append("Polygon")
        stack.insert(1, "Star")
        stack.swap(0, 1)
        stack.remove(stack.top_index)

    Queries and index management never raise: reading, removing, updating,
    or swapping a layer that does not exist is a no-op. Only operations that
    accept new image content raise, and they resolve the image before
    touching the stack, so a failure leaves it unchanged.

    :param layers: Mapping of index to source. Keys must be exactly
        ``0 .. len(layers) - 1``.
    :param resolver: Resolver for image sources. Defaults to
        :py:class:`~overlay.api.resolver.Resolver`.
    :raises InvalidDictionaryError: If the keys are not dense from 0.
    :raises ImageNotFoundError: If a named asset does not exist.
    :raises InvalidImageError: If a source is not a usable image.
    """

    def __init__(
        self,
        layers: Optional[Mapping[int, Any]] = None,
        resolver: Optional[ResolverProtocol] = None,
    ) -> None:
        self._resolver = resolver if resolver is not None else Resolver()
        layers = layers or {}
        if not self.is_dense_mapping(layers):
            raise InvalidDictionaryError()
        self._layers: list[Raster] = [
            self._resolver.resolve(layers[index]) for index in range(len(layers))
        ]
        logger.debug("Created %r" % self)

    @classmethod
    def from_images(
        cls, images: Iterable[Any], resolver: Optional[ResolverProtocol] = None
    ) -> "LayerStack":
        """Create a stack from sources ordered bottom to top."""
        return cls(dict(enumerate(images)), resolver=resolver)

    @staticmethod
    def is_dense_mapping(mapping: Mapping[Any, Any]) -> bool:
        """
        Return True if the keys of ``mapping`` are exactly ``0 .. n - 1``.

        An empty mapping is dense.
        """
        return set(mapping.keys()) == set(range(len(mapping)))

    @property
    def resolver(self) -> ResolverProtocol:
        return self._resolver

    @property
    def count(self) -> int:
        """Number of layers."""
        return len(self._layers)

    @property
    def top_index(self) -> int:
        """Index of the topmost layer, -1 if the stack is empty."""
        return len(self._layers) - 1

    def _has_index(self, index: int) -> bool:
        return isinstance(index, numbers.Integral) and 0 <= index < len(self._layers)

    def get(self, index: int) -> Optional[Raster]:
        """Return the raster at ``index``, or None if there is no such layer."""
        if not self._has_index(index):
            return None
        return self._layers[index]

    def topil(self, index: int, mode: str = "RGBA") -> Optional[Image.Image]:
        """Return the layer at ``index`` as a PIL Image, or None."""
        raster = self.get(index)
        if raster is None:
            return None
        return pil_io.convert_raster_to_pil(raster, mode)

    def append(self, image: Any) -> None:
        """
        Add a layer on top of the stack.

        :param image: Image source to add.
        :raises ImageNotFoundError: If a named asset does not exist.
        :raises InvalidImageError: If the source is not a usable image.
        """
        raster = self._resolver.resolve(image)
        self._layers.append(raster)
        logger.debug("Appended %r at %d" % (raster, self.top_index))

    def insert(self, index: int, image: Any) -> None:
        """
        Insert a layer at ``index``, moving the layers at and above it up.

        An index beyond the top of the stack appends the layer instead.

        :param index: Position of the new layer.
        :param image: Image source to insert.
        :raises TypeError: If ``index`` is not an integer.
        :raises IndexError: If ``index`` is negative.
        :raises ImageNotFoundError: If a named asset does not exist.
        :raises InvalidImageError: If the source is not a usable image.
        """
        if not isinstance(index, numbers.Integral):
            raise TypeError(
                "Layer index must be an integer, got %s" % type(index).__name__
            )
        if index < 0:
            raise IndexError("Layer index must not be negative: %d" % index)
        if index > len(self._layers):
            logger.debug("Index %d beyond top, appending" % index)
            self.append(image)
            return
        raster = self._resolver.resolve(image)
        self._layers.insert(index, raster)
        logger.debug("Inserted %r at %d" % (raster, index))

    def remove(self, index: int) -> None:
        """Remove the layer at ``index`` and move the layers above it down."""
        if not self._has_index(index):
            logger.debug("No layer %r to remove" % index)
            return
        raster = self._layers.pop(index)
        logger.debug("Removed %r from %d" % (raster, index))

    def update(self, index: int, image: Any) -> None:
        """
        Replace the layer at ``index``. Does nothing if there is no such layer.

        The image is resolved even when the layer does not exist, so an
        invalid source always raises.

        :raises ImageNotFoundError: If a named asset does not exist.
        :raises InvalidImageError: If the source is not a usable image.
        """
        raster = self._resolver.resolve(image)
        if not self._has_index(index):
            logger.debug("No layer %r to update" % index)
            return
        self._layers[index] = raster
        logger.debug("Updated %d with %r" % (index, raster))

    def swap(self, first: int, second: int) -> None:
        """Exchange two layers. Does nothing if either does not exist."""
        if not (self._has_index(first) and self._has_index(second)):
            logger.debug("Cannot swap %r and %r" % (first, second))
            return
        layers = self._layers
        layers[first], layers[second] = layers[second], layers[first]
        logger.debug("Swapped %d and %d" % (first, second))

    def copy(self) -> "LayerStack":
        """Return an independent stack sharing the same rasters."""
        clone = self.__class__.__new__(self.__class__)
        clone._resolver = self._resolver
        clone._layers = list(self._layers)
        return clone

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Raster]:
        return iter(self._layers)

    def __reversed__(self) -> Iterator[Raster]:
        return reversed(self._layers)

    def __repr__(self) -> str:
        return "%s(%s)" % (
            self.__class__.__name__,
            ", ".join("%d: %s" % (i, r.name) for i, r in enumerate(self._layers)),
        )
