import logging
import os

import pytest
from PIL import Image

from overlay.api.assets import ASSET_PATH_ENV, AssetCatalog, default_paths
from overlay.errors import ImageNotFoundError, InvalidImageError

from ..utils import save_asset

logger = logging.getLogger(__name__)


@pytest.fixture
def catalog(asset_dir) -> AssetCatalog:
    return AssetCatalog([asset_dir.strpath])


def test_find_without_extension(catalog: AssetCatalog, asset_dir) -> None:
    assert catalog.find("Square") == os.path.join(asset_dir.strpath, "Square.png")


def test_find_with_extension(catalog: AssetCatalog, asset_dir) -> None:
    assert catalog.find("Square.png") == os.path.join(asset_dir.strpath, "Square.png")


def test_find_absolute(catalog: AssetCatalog, tmpdir_factory) -> None:
    other = tmpdir_factory.mktemp("other")
    path = save_asset(other, "Circle.png")
    assert catalog.find(path) == path
    assert catalog.find(path[: -len(".png")]) == path


@pytest.mark.parametrize("name", ["Hexagon", "", "Square.gif"])
def test_find_missing(catalog: AssetCatalog, name: str) -> None:
    assert catalog.find(name) is None


def test_find_order(tmpdir_factory) -> None:
    first = tmpdir_factory.mktemp("first")
    second = tmpdir_factory.mktemp("second")
    save_asset(second, "Shape.png")
    expected = save_asset(first, "Shape.tiff")
    catalog = AssetCatalog([first.strpath, second.strpath])
    assert catalog.find("Shape") == expected


def test_find_ignores_directories(tmpdir) -> None:
    tmpdir.mkdir("Folder")
    assert AssetCatalog([tmpdir.strpath]).find("Folder") is None


def test_open(catalog: AssetCatalog) -> None:
    image = catalog.open("Star")
    assert image.size == (4, 4)
    assert image.convert("RGBA").getpixel((0, 0)) == (255, 255, 0, 255)


def test_open_errors(catalog: AssetCatalog) -> None:
    with pytest.raises(ImageNotFoundError):
        catalog.open("Hexagon")
    with pytest.raises(InvalidImageError):
        catalog.open("Broken")


def test_contains(catalog: AssetCatalog) -> None:
    assert "Square" in catalog
    assert "Hexagon" not in catalog
    assert 1 not in catalog


def test_extensions(asset_dir) -> None:
    catalog = AssetCatalog([asset_dir.strpath], extensions=(".jpg",))
    assert catalog.extensions == (".jpg",)
    assert catalog.find("Square") is None


def test_default_paths(monkeypatch) -> None:
    monkeypatch.delenv(ASSET_PATH_ENV, raising=False)
    assert default_paths() == [os.curdir]
    monkeypatch.setenv(ASSET_PATH_ENV, os.pathsep.join(["a", "", "b"]))
    assert default_paths() == ["a", "b"]
    assert AssetCatalog().paths == ["a", "b"]


def test_open_too_large(catalog: AssetCatalog, asset_dir, monkeypatch) -> None:
    save_asset(asset_dir, "Big.png", size=(100, 100))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(InvalidImageError) as excinfo:
        catalog.open("Big")
    assert isinstance(excinfo.value.__cause__, Image.DecompressionBombError)
