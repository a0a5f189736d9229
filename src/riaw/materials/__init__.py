"""Materials module for ray scattering.

This module implements the scattering contract of the path tracer:

Components:
    material: Material union, MaterialType tag and material registry
    lambertian: Ideal diffuse scattering
    metal: Specular reflection with fuzz
    dielectric: Refraction with Snell's law
    scatter: Dispatch from a material to its variant
    sampling: Batch scattering with results copied to NumPy

Every scatter function has the same shape:

    (did_scatter, attenuation, scattered, new_state) = f(..., ray_in, rec, state)

where ``state`` is the caller's RNG state (see ``riaw.core.rng``).

All scattering is implemented as Taichi functions for GPU execution.
"""

from .dielectric import refraction_ratio, scatter_dielectric
from .lambertian import lambertian_direction, scatter_lambertian
from .material import (
    MAX_FUZZ,
    MAX_MATERIALS,
    Material,
    MaterialInfo,
    MaterialType,
    add_dielectric_material,
    add_lambertian_material,
    add_metal_material,
    clamp_fuzz,
    clear_materials,
    get_material,
    get_material_count,
    get_material_info,
    make_dielectric,
    make_lambertian,
    make_metal,
)
from .metal import scatter_metal
from .sampling import ScatterSamples, sample_scatter
from .scatter import scatter, scatter_by_id

__all__ = [
    # Material union
    "Material",
    "MaterialType",
    "MaterialInfo",
    "MAX_FUZZ",
    "clamp_fuzz",
    "make_lambertian",
    "make_metal",
    "make_dielectric",
    # Registry
    "MAX_MATERIALS",
    "add_lambertian_material",
    "add_metal_material",
    "add_dielectric_material",
    "clear_materials",
    "get_material",
    "get_material_count",
    "get_material_info",
    # Scattering
    "scatter",
    "scatter_by_id",
    "scatter_lambertian",
    "lambertian_direction",
    "scatter_metal",
    "scatter_dielectric",
    "refraction_ratio",
    # Batch sampling
    "ScatterSamples",
    "sample_scatter",
]
