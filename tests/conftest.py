"""Shared pytest fixtures for the tileset gateway test suite."""

import json
from pathlib import Path

import pytest

from tileset_gateway.core.config import GatewayConfig

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
MODELS_DIR = DATA_DIR / "3d_models"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def models_dir() -> Path:
    """Return the folder holding the sample 3D models."""
    return MODELS_DIR


# ---------------------------------------------------------------------------
# Sample tileset / footprint fixtures
# ---------------------------------------------------------------------------


def _load(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture()
def sphere_tileset(models_dir: Path) -> dict:
    """Tileset bounded by a 500 m sphere over (34.8E, 32.0N)."""
    return _load(models_dir / "Sphere" / "tileset.json")


@pytest.fixture()
def sphere_footprint(models_dir: Path) -> dict:
    """Square footprint mostly inside the sphere's ground circle (~65% coverage)."""
    return _load(models_dir / "Sphere" / "footprint.json")


@pytest.fixture()
def region_tileset(models_dir: Path) -> dict:
    """Tileset bounded by a region of ~0.17 x 0.14 deg."""
    return _load(models_dir / "Region" / "tileset.json")


@pytest.fixture()
def region_footprint(models_dir: Path) -> dict:
    """Rectangle inside the region (~85% coverage)."""
    return _load(models_dir / "Region" / "footprint.json")


@pytest.fixture()
def box_tileset(models_dir: Path) -> dict:
    """Tileset bounded by an (unsupported) oriented box."""
    return _load(models_dir / "Box" / "tileset.json")


@pytest.fixture()
def far_footprint() -> dict:
    """Closed footprint nowhere near any sample model."""
    return {
        "type": "Polygon",
        "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]],
    }


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture()
def gateway_config(models_dir: Path) -> GatewayConfig:
    """Configuration whose base and mounted roots both point at the sample models."""
    return GatewayConfig(base_path=str(models_dir), pv_path=str(models_dir))
