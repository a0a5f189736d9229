"""Material union and material registry.

Every material is one ``Material`` struct tagged with a ``MaterialType``.
The variant set is closed (Lambertian, Metal, Dielectric), so a single tag
plus the union of all variant parameters is enough; each variant reads only
its own fields:

    LAMBERTIAN  albedo
    METAL       albedo, fuzz (clamped to at most 1.0)
    DIELECTRIC  refraction_index

Materials are immutable once built and are safe to share between kernel
threads. The registry stores them in Taichi fields indexed by material id
so that kernels can look them up with ``get_material``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.materials.material import add_metal_material, get_material_info
    >>> mat_id = add_metal_material(albedo=(0.8, 0.8, 0.8), fuzz=2.5)
    >>> get_material_info(mat_id).fuzz
    1.0
"""

from dataclasses import dataclass
from enum import IntEnum

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Fuzz values above this are capped at construction
MAX_FUZZ = 1.0


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used as the tag of the Material union to select the scattering
    function.
    """

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@ti.dataclass
class Material:
    """A material: variant tag plus the parameters of every variant.

    Attributes:
        kind: The MaterialType of this material (as an integer). -1 marks
            an invalid material, which absorbs every ray.
        albedo: Reflectance per color channel (Lambertian and Metal).
        fuzz: Radius of the random perturbation of the mirror direction
            (Metal), in [0, 1] after clamping.
        refraction_index: Ratio of light speed in vacuum to speed in the
            medium (Dielectric).
    """

    kind: ti.i32
    albedo: vec3
    fuzz: ti.f32
    refraction_index: ti.f32


def clamp_fuzz(fuzz: float) -> float:
    """Cap a fuzz value at MAX_FUZZ. Larger values are never rejected."""
    return fuzz if fuzz < MAX_FUZZ else MAX_FUZZ


@ti.func
def make_lambertian(albedo: vec3) -> Material:
    """Build a Lambertian material inside a Taichi kernel."""
    return Material(
        kind=int(MaterialType.LAMBERTIAN),
        albedo=albedo,
        fuzz=0.0,
        refraction_index=1.0,
    )


@ti.func
def make_metal(albedo: vec3, fuzz: ti.f32) -> Material:
    """Build a Metal material inside a Taichi kernel.

    Args:
        albedo: The reflective color (RGB).
        fuzz: Roughness of the reflection. Values above 1.0 are clamped.

    Returns:
        The Metal material.
    """
    return Material(
        kind=int(MaterialType.METAL),
        albedo=albedo,
        fuzz=ti.min(fuzz, MAX_FUZZ),
        refraction_index=1.0,
    )


@ti.func
def make_dielectric(refraction_index: ti.f32) -> Material:
    """Build a Dielectric material inside a Taichi kernel."""
    return Material(
        kind=int(MaterialType.DIELECTRIC),
        albedo=vec3(1.0, 1.0, 1.0),
        fuzz=0.0,
        refraction_index=refraction_index,
    )


@ti.func
def invalid_material() -> Material:
    """Material returned for unknown ids. It absorbs every ray."""
    return Material(
        kind=-1,
        albedo=vec3(0.0, 0.0, 0.0),
        fuzz=0.0,
        refraction_index=1.0,
    )


# =============================================================================
# Material Field Storage (for scene-level material management)
# =============================================================================

# Maximum number of materials in the registry
MAX_MATERIALS = 1024

# Structure of Arrays layout, one entry per material id
material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzzes = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_refraction_indices = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


@dataclass(frozen=True)
class MaterialInfo:
    """Python-side view of a registered material.

    Attributes:
        kind: The material variant.
        albedo: Reflectance per color channel.
        fuzz: Stored (clamped) fuzz.
        refraction_index: Stored refraction index.
    """

    kind: MaterialType
    albedo: tuple[float, float, float]
    fuzz: float
    refraction_index: float


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


def _check_albedo(albedo: tuple[float, float, float]) -> None:
    if len(albedo) != 3:
        raise ValueError(
            f"Albedo must have 3 components (R, G, B), got {len(albedo)}"
        )


def _add_material(
    kind: MaterialType,
    albedo: tuple[float, float, float],
    fuzz: float,
    refraction_index: float,
) -> int:
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_kinds[idx] = int(kind)
    material_albedos[idx] = vec3(albedo[0], albedo[1], albedo[2])
    material_fuzzes[idx] = fuzz
    material_refraction_indices[idx] = refraction_index
    num_materials[None] = idx + 1
    return idx


def add_lambertian_material(albedo: tuple[float, float, float]) -> int:
    """Add a Lambertian (ideal diffuse) material to the registry.

    Args:
        albedo: The diffuse reflectance as (R, G, B). Values are stored as
            given; [0, 1] keeps the surface energy conserving.

    Returns:
        The material id.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If albedo does not have three components.
    """
    _check_albedo(albedo)
    return _add_material(MaterialType.LAMBERTIAN, albedo, 0.0, 1.0)


def add_metal_material(
    albedo: tuple[float, float, float],
    fuzz: float = 0.0,
) -> int:
    """Add a Metal (specular reflective) material to the registry.

    Args:
        albedo: The reflective color as (R, G, B).
        fuzz: Roughness of the reflection. Default is 0 (perfect mirror).
            Values above 1.0 are silently clamped to 1.0.

    Returns:
        The material id.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If albedo does not have three components.
    """
    _check_albedo(albedo)
    return _add_material(MaterialType.METAL, albedo, clamp_fuzz(fuzz), 1.0)


def add_dielectric_material(refraction_index: float = 1.5) -> int:
    """Add a Dielectric (glass/water) material to the registry.

    Args:
        refraction_index: Index of refraction. Default is 1.5 (typical
            glass). Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4

    Returns:
        The material id.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the refraction index is not positive.
    """
    if not refraction_index > 0.0:
        raise ValueError(
            f"Refraction index = {refraction_index} must be positive"
        )
    return _add_material(MaterialType.DIELECTRIC, (1.0, 1.0, 1.0), 0.0, refraction_index)


def get_material_info(material_id: int) -> MaterialInfo:
    """Read a registered material back into Python.

    Args:
        material_id: The material id returned by one of the add functions.

    Returns:
        The stored material parameters.

    Raises:
        IndexError: If the id is not registered.
    """
    if not 0 <= material_id < get_material_count():
        raise IndexError(f"Unknown material id {material_id}")
    albedo = material_albedos[material_id]
    return MaterialInfo(
        kind=MaterialType(int(material_kinds[material_id])),
        albedo=(float(albedo[0]), float(albedo[1]), float(albedo[2])),
        fuzz=float(material_fuzzes[material_id]),
        refraction_index=float(material_refraction_indices[material_id]),
    )


@ti.func
def get_material(material_id: ti.i32) -> Material:
    """Look up a registered material inside a Taichi kernel.

    Args:
        material_id: The material id.

    Returns:
        The Material, or an absorbing invalid material for unknown ids.
    """
    result = invalid_material()
    if 0 <= material_id < num_materials[None]:
        result = Material(
            kind=material_kinds[material_id],
            albedo=material_albedos[material_id],
            fuzz=material_fuzzes[material_id],
            refraction_index=material_refraction_indices[material_id],
        )
    return result
