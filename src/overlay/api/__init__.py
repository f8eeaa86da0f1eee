"""
High-level API for building layer stacks.

- :py:class:`~overlay.api.layer_stack.LayerStack`: ordered, densely indexed
  layers.
- :py:class:`~overlay.api.raster.Raster`: immutable RGBA pixel handle.
- :py:class:`~overlay.api.resolver.Resolver`: turns names and in-memory
  images into rasters.
- :py:class:`~overlay.api.assets.AssetCatalog`: named image lookup on disk.
"""

from overlay.api.assets import AssetCatalog
from overlay.api.layer_stack import LayerStack
from overlay.api.raster import Raster
from overlay.api.resolver import Resolver

__all__ = ["AssetCatalog", "LayerStack", "Raster", "Resolver"]
