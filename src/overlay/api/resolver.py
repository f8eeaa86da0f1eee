"""
Resolution of image sources into rasters.

A source is anything a caller may hand to a layer stack:

- :py:class:`~overlay.api.raster.Raster`: used as-is.
- ``str`` or path-like: an asset name, looked up in the
  :py:class:`~overlay.api.assets.AssetCatalog`.
- :py:class:`PIL.Image.Image`: converted to RGBA.
- :py:class:`numpy.ndarray`: grayscale, RGB or RGBA pixels.
- ``bytes``: encoded image data in any format Pillow can decode.

Example::

    from overlay.api.assets import AssetCatalog
    from overlay.api.resolver import Resolver

    resolver = Resolver(AssetCatalog(["assets"]))
    raster = resolver.resolve("Square")
"""

import io
import logging
import os
from typing import Any, Optional

import numpy as np
from PIL import Image

from overlay.api import numpy_io
from overlay.api.assets import DECODE_ERRORS, AssetCatalog
from overlay.api.raster import Raster
from overlay.errors import InvalidImageError
from overlay.registry import find_registered, new_registry

logger = logging.getLogger(__name__)

SOURCE_TYPES, register = new_registry(attribute="source_type")


class Resolver(object):
    """
    Default image resolver.

    :param catalog: Asset catalog for named sources. Defaults to a catalog
        built from ``OVERLAY_ASSET_PATH``.
    """

    def __init__(self, catalog: Optional[AssetCatalog] = None) -> None:
        self._catalog = catalog if catalog is not None else AssetCatalog()

    @property
    def catalog(self) -> AssetCatalog:
        return self._catalog

    def resolve(self, source: Any) -> Raster:
        """
        Return the raster for ``source``.

        :raises ImageNotFoundError: If a named asset does not exist.
        :raises InvalidImageError: If the source is not a usable image.
        """
        handler = find_registered(SOURCE_TYPES, type(source))
        if handler is None:
            logger.debug("No resolver for %s" % type(source).__name__)
            raise InvalidImageError(_describe(source))
        logger.debug("Resolving %s source" % handler.source_type.__name__)
        return handler(self, source)

    def __repr__(self) -> str:
        return "%s(catalog=%r)" % (self.__class__.__name__, self._catalog)


def _describe(source: Any) -> Optional[str]:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, "name", None) or None


@register(Raster)
def _resolve_raster(resolver: Resolver, source: Raster) -> Raster:
    return source


@register(Image.Image)
def _resolve_pil(
    resolver: Resolver, source: Image.Image, name: Optional[str] = None
) -> Raster:
    try:
        rgba = numpy_io.get_image_data(source)
    except (OSError, ValueError) as e:
        logger.debug("Invalid PIL image %s: %s" % (name, e))
        raise InvalidImageError(name) from e
    return numpy_io.to_raster(rgba, name=name)


@register(np.ndarray)
def _resolve_array(resolver: Resolver, source: np.ndarray) -> Raster:
    try:
        rgba = numpy_io.get_array_data(source)
    except ValueError as e:
        logger.debug("Invalid array: %s" % e)
        raise InvalidImageError() from e
    return numpy_io.to_raster(rgba)


@register(bytes)
def _resolve_bytes(resolver: Resolver, source: bytes) -> Raster:
    try:
        with Image.open(io.BytesIO(source)) as image:
            image.load()
    except DECODE_ERRORS as e:
        logger.debug("Undecodable image bytes: %s" % e)
        raise InvalidImageError() from e
    return _resolve_pil(resolver, image)


@register(str)
def _resolve_name(resolver: Resolver, source: str) -> Raster:
    image = resolver.catalog.open(source)
    return _resolve_pil(resolver, image, name=source)


@register(os.PathLike)
def _resolve_path(resolver: Resolver, source: "os.PathLike[str]") -> Raster:
    return _resolve_name(resolver, os.fspath(source))
