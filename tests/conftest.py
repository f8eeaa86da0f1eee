"""Pytest configuration for overlay tests."""

import pytest

from overlay.api.assets import AssetCatalog
from overlay.api.resolver import Resolver

from .overlay.utils import save_asset


@pytest.fixture
def asset_dir(tmpdir):
    """Directory with a few named PNG assets."""
    save_asset(tmpdir, "Square.png", (255, 0, 0, 255))
    save_asset(tmpdir, "Triangle.png", (0, 255, 0, 128))
    save_asset(tmpdir, "Polygon.png", (0, 0, 255, 255))
    save_asset(tmpdir, "Star.png", (255, 255, 0, 255))
    tmpdir.join("Broken.png").write_binary(b"not an image")
    return tmpdir


@pytest.fixture
def resolver(asset_dir):
    return Resolver(AssetCatalog([asset_dir.strpath]))
