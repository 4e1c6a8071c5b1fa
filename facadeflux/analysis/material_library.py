"""
Building Material Library

Thermal conductivities of common envelope materials (W/m·K), as tabulated
in the BCA ETTV/RETV guidelines. Used to build Material layers by name:

    layer = make_material("Concrete", thickness=0.2)
"""

from typing import Dict, List, Optional

from ..core.constructions import Material

# Guideline conductivity table (W/m·K)
MATERIAL_CONDUCTIVITY: Dict[str, float] = {
    "Asphalt, roofing": 1.226,
    "Bitumen": 1.298,
    "Brick (dry, covered by plaster/tiles)": 0.807,
    "Brick (common brickwall directly exposed)": 1.154,
    "Concrete": 1.442,
    "Concrete, lightweight (density 960 kg/m³)": 0.303,
    "Concrete, lightweight (density 1120 kg/m³)": 0.346,
    "Concrete, lightweight (density 1280 kg/m³)": 0.476,
    "Cork board": 0.042,
    "Fibre board": 0.052,
    "Glass, sheet": 1.053,
    "Glass wool, mat or quilt (dry)": 0.035,
    "Gypsum plaster board": 0.170,
    "Hard board, standard": 0.216,
    "Hard board, medium": 0.123,
    "Aluminium alloy, typical": 211.0,
    "Copper, commercial": 385.0,
    "Steel": 47.6,
    "Mineral wool, felt (32 kg/m³)": 0.035,
    "Mineral wool, felt (104 kg/m³)": 0.032,
    "Plaster: gypsum": 0.370,
    "Plaster: perlite": 0.115,
    "Plaster: sand/cement": 0.533,
    "Plaster: vermiculite (640 kg/m³)": 0.202,
    "Plaster: vermiculite (960 kg/m³)": 0.303,
    "Polystyrene, expanded": 0.035,
    "Polyurethane, foam": 0.024,
    "PVC flooring": 0.713,
    "Soil, loosely packed": 0.375,
    "Stone, tile: sandstone": 1.298,
    "Stone, tile: granite": 2.927,
    "Stone, tile: marble/terrazzo/ceramic/mosaic": 1.298,
    "Tile, roof": 0.836,
    "Timber across grain, softwood": 0.125,
    "Timber hardwood": 0.138,
    "Timber plywood": 0.138,
    "Vermiculite, loose granules (80 kg/m³)": 0.065,
    "Oxygen gas": 0.0263,
    "Argon gas": 0.0177,
}

_BY_LOWER_NAME = {name.lower(): name for name in MATERIAL_CONDUCTIVITY}


def canonical_material_name(name: Optional[str]) -> Optional[str]:
    """Library spelling of a material name, or None if it is not in the library."""
    if not name:
        return None
    return _BY_LOWER_NAME.get(name.strip().lower())


def lookup_conductivity(name: Optional[str]) -> Optional[float]:
    """Conductivity (W/m·K) of a library material, case-insensitive."""
    canonical = canonical_material_name(name)
    if canonical is None:
        return None
    return MATERIAL_CONDUCTIVITY[canonical]


def make_material(name: str, thickness: float, conductivity: Optional[float] = None) -> Material:
    """
    Build a material layer.

    Args:
        name: Material name; looked up in the library unless conductivity is given
        thickness: Layer thickness (m)
        conductivity: Explicit conductivity (W/m·K), overrides the library

    Raises:
        KeyError: If no conductivity is given and the name is not in the library
    """
    if conductivity is None:
        canonical = canonical_material_name(name)
        if canonical is None:
            raise KeyError(f"Unknown material '{name}'. Pass an explicit conductivity or see list_materials().")
        return Material(name=canonical, thickness=thickness, conductivity=MATERIAL_CONDUCTIVITY[canonical])

    return Material(name=name, thickness=thickness, conductivity=conductivity)


def list_materials() -> List[str]:
    """Library material names in table order."""
    return list(MATERIAL_CONDUCTIVITY)
