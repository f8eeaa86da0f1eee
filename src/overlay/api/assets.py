"""
Asset catalog for looking up images by name.

A catalog is an ordered list of directories. A name is looked up as given and
then with each known image extension, in every directory in order; the first
existing file wins::

    from overlay.api.assets import AssetCatalog

    catalog = AssetCatalog(["assets", "/usr/share/overlay"])
    catalog.find("Square")  # 'assets/Square.png'
    image = catalog.open("Square")

Without explicit paths, the catalog reads the ``OVERLAY_ASSET_PATH``
environment variable (an ``os.pathsep`` separated list) and falls back to the
current directory.
"""

import logging
import os
from typing import Iterable, Optional, Union

from PIL import Image

from overlay.errors import ImageNotFoundError, InvalidImageError

logger = logging.getLogger(__name__)

ASSET_PATH_ENV = "OVERLAY_ASSET_PATH"

# Errors Pillow raises for files it cannot decode or refuses to open.
DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)

IMAGE_EXTENSIONS = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".bmp",
    ".tif",
    ".tiff",
    ".webp",
)


def default_paths() -> list[str]:
    """Search paths from the environment, or the current directory."""
    value = os.environ.get(ASSET_PATH_ENV, "")
    paths = [p for p in value.split(os.pathsep) if p]
    return paths or [os.curdir]


class AssetCatalog(object):
    """
    Ordered collection of directories holding named image assets.

    :param paths: Directories to search. ``None`` reads ``OVERLAY_ASSET_PATH``.
    :param extensions: Extensions tried after the bare name.
    """

    def __init__(
        self,
        paths: Optional[Iterable[Union[str, "os.PathLike[str]"]]] = None,
        extensions: Iterable[str] = IMAGE_EXTENSIONS,
    ) -> None:
        if paths is None:
            paths = default_paths()
        self._paths = [os.fspath(p) for p in paths]
        self._extensions = tuple(extensions)

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    def _candidates(self, name: str) -> Iterable[str]:
        names = [name] + [name + ext for ext in self._extensions]
        if os.path.isabs(name):
            yield from names
            return
        for path in self._paths:
            for candidate in names:
                yield os.path.join(path, candidate)

    def find(self, name: Union[str, "os.PathLike[str]"]) -> Optional[str]:
        """Return the path of the asset, or None if it does not exist."""
        name = os.fspath(name)
        if not name:
            return None
        for candidate in self._candidates(name):
            if os.path.isfile(candidate):
                logger.debug("Found asset %s at %s" % (name, candidate))
                return candidate
        return None

    def open(self, name: Union[str, "os.PathLike[str]"]) -> Image.Image:
        """
        Open the named asset as a fully loaded PIL Image.

        :raises ImageNotFoundError: If no file matches the name.
        :raises InvalidImageError: If the file is not a readable image.
        """
        name = os.fspath(name)
        path = self.find(name)
        if path is None:
            raise ImageNotFoundError(name)
        try:
            with Image.open(path) as image:
                image.load()
        except DECODE_ERRORS as e:
            logger.debug("Failed to decode %s: %s" % (path, e))
            raise InvalidImageError(name) from e
        return image

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, os.PathLike)):
            return False
        return self.find(name) is not None

    def __repr__(self) -> str:
        return "%s(paths=%r)" % (self.__class__.__name__, self._paths)
