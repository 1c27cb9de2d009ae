"""
Wing Material Database
======================

Fixed table of structural material constants used to size the wing spar
and skin. Values are representative room-temperature properties:

- Carbon fiber: quasi-isotropic CFRP lay-up
- Aluminum: 6061-T6 tube stock
- Wood: Sitka spruce, loaded along the grain
- Fabric: nylon-reinforced laminate over a light frame

The table is read-only after import and safe to share between workers.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping


class Material(Enum):
    """Wing structural materials."""
    CARBON_FIBER = "carbon_fiber"
    ALUMINUM = "aluminum"
    WOOD = "wood"
    FABRIC = "fabric"


@dataclass(frozen=True)
class MaterialProperties:
    """
    Mechanical constants for one material.

    Attributes:
    ----------
    name : str
        Display name

    density_kg_m3 : float
        Mass density (kg/m³)

    tensile_strength_pa : float
        Ultimate tensile strength (Pa)

    elastic_modulus_pa : float
        Young's modulus (Pa)
    """
    name: str
    density_kg_m3: float
    tensile_strength_pa: float
    elastic_modulus_pa: float
    description: str = ""

    @property
    def specific_strength(self) -> float:
        """Strength-to-density ratio (N·m/kg)."""
        return self.tensile_strength_pa / self.density_kg_m3

    @property
    def specific_stiffness(self) -> float:
        """Stiffness-to-density ratio (N·m/kg)."""
        return self.elastic_modulus_pa / self.density_kg_m3


# =============================================================================
# Material Table
# =============================================================================

MATERIAL_DATABASE: Mapping[Material, MaterialProperties] = MappingProxyType({
    Material.CARBON_FIBER: MaterialProperties(
        name="Carbon Fiber",
        density_kg_m3=1600.0,
        tensile_strength_pa=600e6,
        elastic_modulus_pa=70e9,
        description="Quasi-isotropic CFRP laminate",
    ),
    Material.ALUMINUM: MaterialProperties(
        name="Aluminum",
        density_kg_m3=2700.0,
        tensile_strength_pa=310e6,
        elastic_modulus_pa=69e9,
        description="6061-T6 aluminium alloy",
    ),
    Material.WOOD: MaterialProperties(
        name="Wood",
        density_kg_m3=450.0,
        tensile_strength_pa=70e6,
        elastic_modulus_pa=10e9,
        description="Sitka spruce along the grain",
    ),
    Material.FABRIC: MaterialProperties(
        name="Fabric",
        density_kg_m3=1140.0,
        tensile_strength_pa=75e6,
        elastic_modulus_pa=3e9,
        description="Nylon-reinforced laminate",
    ),
})


def get_material(material: Material) -> MaterialProperties:
    """
    Get the constants for a material.

    Parameters:
    ----------
    material : Material or str
        Material enum member or its string value (e.g. "wood")

    Returns:
    -------
    MaterialProperties
        Material constants

    Raises:
    ------
    ValueError
        If the material is unknown
    """
    if not isinstance(material, Material):
        material = Material(material)
    return MATERIAL_DATABASE[material]


def list_materials() -> List[str]:
    """List the string values of all materials, in table order."""
    return [material.value for material in MATERIAL_DATABASE]
