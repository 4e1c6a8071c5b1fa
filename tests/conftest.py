"""
Pytest configuration and fixtures for FacadeFlux tests.

Provides reusable test fixtures for:
- Material layers and constructions
- Oriented surfaces and envelope models
- Model documents (dict and JSON file)
"""

import json
import logging
from pathlib import Path

import pytest

from facadeflux.core.constructions import FenestrationConstruction, Material, OpaqueConstruction
from facadeflux.core.models import EnvelopeModel, Surface
from facadeflux.geometry.orientation import orientation_from_key


# =============================================================================
# CONSTRUCTION FIXTURES
# =============================================================================

@pytest.fixture
def unit_layer() -> Material:
    """0.1 m layer with k = 1.0 W/m·K (R = 0.1 m²K/W)."""
    return Material(name="Test layer", thickness=0.1, conductivity=1.0)


@pytest.fixture
def wall_construction() -> OpaqueConstruction:
    """Opaque wall with U = 0.5 W/m²K."""
    return OpaqueConstruction(id="W1", name="Wall", u_value=0.5)


@pytest.fixture
def window_construction() -> FenestrationConstruction:
    """Glazing with U = 2.0 W/m²K and SC = 0.6."""
    return FenestrationConstruction(id="G1", name="Glazing", u_value=2.0, sc1=0.6)


# =============================================================================
# MODEL FIXTURES
# =============================================================================

@pytest.fixture
def north_wall(wall_construction) -> Surface:
    """10 m² north-facing wall."""
    return Surface(
        id=1,
        name="North wall",
        area=10.0,
        construction=wall_construction,
        orientation=orientation_from_key("N"),
    )


@pytest.fixture
def north_window(window_construction) -> Surface:
    """5 m² north-facing window."""
    return Surface(
        id=2,
        name="North window",
        area=5.0,
        construction=window_construction,
        orientation=orientation_from_key("N"),
    )


@pytest.fixture
def north_model(north_wall, north_window) -> EnvelopeModel:
    """
    Reference envelope: one north wall and one north window.

    ETTV = 12 × (2/3) × 0.5 + 3.4 × (1/3) × 2.0 + 211 × (1/3) × 0.6 × 0.80
         = 4.0 + 2.267 + 33.76 ≈ 40.03 W/m²
    """
    return EnvelopeModel(project_name="Reference", version="1", surfaces=(north_wall, north_window))


@pytest.fixture
def four_sided_model(wall_construction, window_construction) -> EnvelopeModel:
    """Box with a wall and a window on each of N, E, S, W (given as normals)."""
    normals = {"N": (0, 1, 0), "E": (1, 0, 0), "S": (0, -1, 0), "W": (-1, 0, 0)}
    surfaces = []
    surface_id = 1
    for normal in normals.values():
        surfaces.append(Surface.from_normal(surface_id, 30.0, wall_construction, normal, name="Wall"))
        surfaces.append(Surface.from_normal(surface_id + 1, 10.0, window_construction, normal, name="Window"))
        surface_id += 2
    return EnvelopeModel(project_name="Box", version="2", surfaces=surfaces)


# =============================================================================
# DOCUMENT FIXTURES
# =============================================================================

@pytest.fixture
def model_document() -> dict:
    """Model document equivalent to north_model."""
    return {
        "project_name": "Reference",
        "version": "1",
        "constructions": [
            {"id": "W1", "name": "Wall", "kind": "opaque", "u_value": 0.5},
            {"id": "G1", "name": "Glazing", "kind": "fenestration", "u_value": 2.0, "sc1": 0.6},
        ],
        "surfaces": [
            {"id": 1, "name": "North wall", "area": 10.0, "construction": "W1", "normal": [0, 1, 0]},
            {"id": 2, "name": "North window", "area": 5.0, "construction": "G1", "orientation": "N"},
        ],
    }


@pytest.fixture
def model_file(tmp_path, model_document) -> Path:
    """model_document written to a JSON file."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(model_document), encoding="utf-8")
    return path


@pytest.fixture
def restore_logging():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
