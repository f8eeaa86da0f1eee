import io
import logging
import pathlib

import numpy as np
import pytest
from PIL import Image

from overlay.api.assets import AssetCatalog
from overlay.api.layer_stack import LayerStack
from overlay.api.protocols import ResolverProtocol
from overlay.api.raster import Raster
from overlay.api.resolver import Resolver
from overlay.errors import ImageNotFoundError, InvalidImageError

from ..utils import save_asset, solid, solid_pil

logger = logging.getLogger(__name__)


def test_resolver_protocol(resolver: Resolver) -> None:
    assert isinstance(resolver, ResolverProtocol)


def test_resolve_raster(resolver: Resolver) -> None:
    raster = solid(name="raster")
    assert resolver.resolve(raster) is raster


def test_resolve_name(resolver: Resolver) -> None:
    raster = resolver.resolve("Triangle")
    assert raster.name == "Triangle"
    assert raster.size == (4, 4)
    np.testing.assert_allclose(raster.color[0, 0], (0.0, 1.0, 0.0))
    np.testing.assert_allclose(raster.alpha[0, 0], (128 / 255,), rtol=1e-6)


def test_resolve_path(resolver: Resolver, asset_dir) -> None:
    path = pathlib.Path(asset_dir.strpath) / "Polygon.png"
    raster = resolver.resolve(path)
    assert raster.name == str(path)
    np.testing.assert_allclose(raster.color[0, 0], (0.0, 0.0, 1.0))


def test_resolve_name_not_found(resolver: Resolver) -> None:
    with pytest.raises(ImageNotFoundError) as excinfo:
        resolver.resolve("Hexagon")
    assert str(excinfo.value) == "Hexagon: was not found"


def test_resolve_name_invalid(resolver: Resolver) -> None:
    with pytest.raises(InvalidImageError) as excinfo:
        resolver.resolve("Broken")
    assert str(excinfo.value) == "Broken: is invalid"


@pytest.mark.parametrize("mode", ["RGBA", "RGB", "L", "LA", "P", "1"])
def test_resolve_pil(resolver: Resolver, mode: str) -> None:
    image = Image.new(mode, (3, 2))
    raster = resolver.resolve(image)
    assert raster.size == (3, 2)
    assert raster.name is None


def test_resolve_pil_empty(resolver: Resolver) -> None:
    with pytest.raises(InvalidImageError):
        resolver.resolve(Image.new("RGBA", (0, 0)))


def test_resolve_bytes(resolver: Resolver) -> None:
    buffer = io.BytesIO()
    solid_pil((0, 0, 255, 255), (2, 3)).save(buffer, format="PNG")
    raster = resolver.resolve(buffer.getvalue())
    assert raster.size == (2, 3)
    np.testing.assert_allclose(raster.color[0, 0], (0.0, 0.0, 1.0))


def test_resolve_bytes_invalid(resolver: Resolver) -> None:
    with pytest.raises(InvalidImageError):
        resolver.resolve(b"\x89PNG garbage")


@pytest.mark.parametrize(
    "array",
    [
        np.zeros((2, 2), dtype=np.uint8),
        np.zeros((2, 2, 1), dtype=np.uint16),
        np.ones((2, 2, 3), dtype=np.float32),
        np.ones((2, 2, 4), dtype=np.float64),
    ],
)
def test_resolve_array(resolver: Resolver, array: np.ndarray) -> None:
    raster = resolver.resolve(array)
    assert isinstance(raster, Raster)
    assert raster.size == (2, 2)


@pytest.mark.parametrize(
    "array",
    [
        np.zeros((2, 2, 2), dtype=np.uint8),
        np.zeros((2, 2, 4, 1), dtype=np.uint8),
        np.zeros((0, 2, 4), dtype=np.uint8),
        np.zeros((2, 2, 4), dtype=np.int64),
        np.full((2, 2, 4), np.nan),
    ],
)
def test_resolve_array_invalid(resolver: Resolver, array: np.ndarray) -> None:
    with pytest.raises(InvalidImageError):
        resolver.resolve(array)


@pytest.mark.parametrize("source", [None, 42, object(), ["Square"]])
def test_resolve_unsupported(resolver: Resolver, source) -> None:
    with pytest.raises(InvalidImageError):
        resolver.resolve(source)


def test_default_catalog(monkeypatch, asset_dir) -> None:
    monkeypatch.setenv("OVERLAY_ASSET_PATH", asset_dir.strpath)
    resolver = Resolver()
    assert resolver.catalog.paths == [asset_dir.strpath]
    assert resolver.resolve("Square").name == "Square"


def test_custom_catalog(tmpdir) -> None:
    catalog = AssetCatalog([tmpdir.strpath])
    assert Resolver(catalog).catalog is catalog


def test_resolve_bytes_too_large(resolver: Resolver, monkeypatch) -> None:
    buffer = io.BytesIO()
    solid_pil(size=(100, 100)).save(buffer, format="PNG")
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(InvalidImageError) as excinfo:
        resolver.resolve(buffer.getvalue())
    assert isinstance(excinfo.value.__cause__, Image.DecompressionBombError)


def test_resolve_name_too_large(resolver: Resolver, asset_dir, monkeypatch) -> None:
    save_asset(asset_dir, "Big.png", size=(100, 100))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(InvalidImageError) as excinfo:
        LayerStack({0: "Big"}, resolver=resolver)
    assert excinfo.value.image_name == "Big"
