"""
Pydantic schema for envelope model documents.

A model document is the JSON input of the CLI:

    {
      "project_name": "Tower A",
      "constructions": [
        {"id": "W1", "name": "Brick wall", "kind": "opaque",
         "layers": [{"name": "Concrete", "thickness": 0.2}]},
        {"id": "G1", "name": "Double glazing", "kind": "fenestration",
         "u_value": 2.8, "sc1": 0.5}
      ],
      "surfaces": [
        {"id": 1, "area": 60, "construction": "W1", "normal": [0, 1, 0]},
        {"id": 2, "area": 20, "construction": "G1", "orientation": "N",
         "shading": {"projection": 0.6, "height": 1.5}}
      ]
    }

Materials reference the material library by name or give an explicit
conductivity. Constructions give a U-value, layers, or both (an explicit
U-value wins). Surfaces give a normal or an orientation id.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .config import settings
from .constructions import Construction, ConstructionKind, FenestrationConstruction, OpaqueConstruction
from .models import EnvelopeModel, ProjectSequence, Surface
from ..analysis.material_library import lookup_conductivity, make_material
from ..analysis.shading import apply_external_shading, apply_horizontal_shading
from ..analysis.u_value_calculator import compute_u_value
from ..geometry.orientation import (
    UNKNOWN_ID,
    classify_orientation,
    normalize_orientation_key,
    orientation_from_key,
)


class MaterialEntry(BaseModel):
    """One construction layer."""

    name: str
    thickness: float = Field(ge=0, description="Layer thickness (m)")
    conductivity: Optional[float] = Field(default=None, gt=0, description="W/m·K, defaults to the library value")

    @model_validator(mode="after")
    def _check_conductivity(self) -> "MaterialEntry":
        if self.conductivity is None and lookup_conductivity(self.name) is None:
            raise ValueError(
                f"Material '{self.name}' is not in the material library; give an explicit conductivity"
            )
        return self

    def to_material(self):
        return make_material(self.name, self.thickness, self.conductivity)


class ConstructionEntry(BaseModel):
    """Opaque or fenestration construction."""

    id: str = Field(min_length=1)
    name: str = ""
    kind: ConstructionKind = ConstructionKind.OPAQUE
    u_value: Optional[float] = Field(default=None, ge=0, description="W/m²K, derived from layers if omitted")
    layers: list[MaterialEntry] = Field(default_factory=list)
    sc1: float = Field(default=1.0, ge=0)
    sc2: float = Field(default=1.0, ge=0)

    @model_validator(mode="after")
    def _check_u_value_source(self) -> "ConstructionEntry":
        if self.u_value is None and not self.layers:
            raise ValueError(f"Construction '{self.id}' needs a u_value or layers")
        return self

    def to_construction(self, rsi: float, rse: float) -> Construction:
        materials = tuple(layer.to_material() for layer in self.layers)
        u_value = self.u_value if self.u_value is not None else compute_u_value(materials, rsi=rsi, rse=rse)

        if self.kind == ConstructionKind.FENESTRATION:
            return FenestrationConstruction(
                id=self.id,
                name=self.name,
                materials=materials,
                u_value=u_value,
                sc1=self.sc1,
                sc2=self.sc2,
            )
        return OpaqueConstruction(id=self.id, name=self.name, materials=materials, u_value=u_value)


class ShadingEntry(BaseModel):
    """Horizontal shading projection above a window."""

    projection: float = Field(ge=0, description="Projection depth (m)")
    height: float = Field(gt=0, description="Glazing height (m)")


class SurfaceEntry(BaseModel):
    """One envelope surface."""

    id: int
    name: str = ""
    area: float = Field(ge=0, description="m²")
    construction: str = Field(description="Construction id")
    normal: Optional[tuple[float, float, float]] = None
    orientation: Optional[str] = Field(default=None, description="Orientation id or name, e.g. 'NE'")
    angle_to_north: Optional[float] = None
    shading: Optional[ShadingEntry] = None
    sc2: Optional[float] = Field(default=None, ge=0, description="Explicit external shading coefficient")

    @field_validator("orientation")
    @classmethod
    def _check_orientation(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value.strip().lower() == UNKNOWN_ID.lower():
            return value
        if normalize_orientation_key(value) is None:
            raise ValueError(f"Unrecognised orientation '{value}'")
        return value

    @model_validator(mode="after")
    def _check_shading(self) -> "SurfaceEntry":
        if self.shading is not None and self.sc2 is not None:
            raise ValueError(f"Surface {self.id}: give either shading or sc2, not both")
        return self


class ModelDocument(BaseModel):
    """Envelope model document."""

    project_name: Optional[str] = None
    version: Optional[str] = None
    angle_to_north: Optional[float] = Field(default=None, description="Default for surfaces without their own")
    inside_film_resistance: Optional[float] = Field(default=None, ge=0)
    outside_film_resistance: Optional[float] = Field(default=None, ge=0)
    constructions: list[ConstructionEntry] = Field(default_factory=list)
    surfaces: list[SurfaceEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_references(self) -> "ModelDocument":
        ids = [c.id for c in self.constructions]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate construction ids: {', '.join(duplicates)}")

        known = set(ids)
        for surface in self.surfaces:
            if surface.construction not in known:
                raise ValueError(f"Surface {surface.id} references unknown construction '{surface.construction}'")
        return self

    def to_model(self, sequence: Optional[ProjectSequence] = None) -> EnvelopeModel:
        """Convert the document into an EnvelopeModel."""
        rsi = settings.inside_film_resistance if self.inside_film_resistance is None else self.inside_film_resistance
        rse = settings.outside_film_resistance if self.outside_film_resistance is None else self.outside_film_resistance
        constructions = {entry.id: entry.to_construction(rsi, rse) for entry in self.constructions}

        surfaces = [self._to_surface(entry, constructions) for entry in self.surfaces]
        return EnvelopeModel.create(
            surfaces,
            project_name=self.project_name,
            version=self.version,
            sequence=sequence,
        )

    def _to_surface(self, entry: SurfaceEntry, constructions: dict[str, Construction]) -> Surface:
        construction = constructions[entry.construction]
        angle_to_north = entry.angle_to_north if entry.angle_to_north is not None else self.angle_to_north

        if entry.normal is not None:
            surface = Surface.from_normal(
                id=entry.id,
                area=entry.area,
                construction=construction,
                normal=entry.normal,
                name=entry.name,
                angle_to_north=angle_to_north,
            )
        else:
            surface = Surface(
                id=entry.id,
                name=entry.name,
                area=entry.area,
                construction=construction,
                orientation=orientation_from_key(entry.orientation),
            )

        if entry.sc2 is not None:
            return apply_external_shading(surface, entry.sc2)
        if entry.shading is not None:
            return apply_horizontal_shading(surface, entry.shading.projection, entry.shading.height)
        return surface


def parse_document(data: dict[str, Any]) -> ModelDocument:
    """Validate a model document from a dictionary."""
    return ModelDocument.model_validate(data)


def load_document(path: str | Path) -> ModelDocument:
    """
    Load and validate a model document from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the document does not match the schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return ModelDocument.model_validate(data)


def load_model(path: str | Path, sequence: Optional[ProjectSequence] = None) -> EnvelopeModel:
    """Load a model document and convert it into an EnvelopeModel."""
    return load_document(path).to_model(sequence=sequence)
