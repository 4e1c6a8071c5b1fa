"""
Envelope model records.

A Surface is one piece of envelope geometry already reduced by an external
geometry collaborator to an area (m²), a construction reference and an
orientation. An EnvelopeModel is the ordered collection handed to the
calculator together with its project identity.
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .constructions import Construction, FenestrationConstruction, OpaqueConstruction
from ..geometry.orientation import Orientation, classify_orientation


@dataclass(frozen=True)
class Surface:
    """One envelope surface."""
    id: int
    name: str = ""
    area: float = 0.0  # m²
    construction: Optional[Construction] = None
    orientation: Optional[Orientation] = None

    @classmethod
    def from_normal(
        cls,
        id: int,
        area: float,
        construction: Optional[Construction],
        normal: Sequence[float],
        name: str = "",
        angle_to_north: Optional[float] = None,
    ) -> "Surface":
        """Build a surface, classifying its orientation from a raw normal vector."""
        return cls(
            id=id,
            name=name,
            area=area,
            construction=construction,
            orientation=classify_orientation(normal, angle_to_north),
        )

    @property
    def effective_area(self) -> float:
        """Area used in calculations; non-finite or negative areas count as 0."""
        if self.area is None or not math.isfinite(self.area) or self.area <= 0:
            return 0.0
        return self.area

    @property
    def type(self) -> str:
        match self.construction:
            case OpaqueConstruction():
                return "Wall"
            case FenestrationConstruction():
                return "Fenestration"
            case _:
                return "Unknown"

    def with_construction(self, construction: Construction) -> "Surface":
        return replace(self, construction=construction)


class ProjectSequence:
    """
    Source of default project identities.

    Each call to next_identity() yields a fresh (project_name, version) pair.
    Sequences are explicit objects; create one per session and pass it along.
    """

    def __init__(self, prefix: str = "FacadeFluxProject", start: int = 0):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_identity(self) -> Tuple[str, str]:
        number = next(self._counter)
        return f"{self.prefix}_{number}", str(number)


@dataclass(frozen=True)
class EnvelopeModel:
    """Calculator input: project identity plus ordered surfaces."""
    project_name: str = ""
    version: str = ""
    surfaces: Optional[Tuple[Optional[Surface], ...]] = ()

    def __post_init__(self):
        if self.surfaces is not None:
            object.__setattr__(self, "surfaces", tuple(self.surfaces))

    @classmethod
    def create(
        cls,
        surfaces: Sequence[Optional[Surface]],
        project_name: Optional[str] = None,
        version: Optional[str] = None,
        sequence: Optional[ProjectSequence] = None,
    ) -> "EnvelopeModel":
        """
        Build a model, drawing missing identity fields from a sequence.

        Without a sequence, missing fields stay empty.
        """
        if (project_name is None or version is None) and sequence is not None:
            default_name, default_version = sequence.next_identity()
            project_name = default_name if project_name is None else project_name
            version = default_version if version is None else version

        return cls(
            project_name=project_name or "",
            version=version or "",
            surfaces=surfaces,
        )
