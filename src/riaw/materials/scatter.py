"""Material dispatch for the scattering contract.

A render loop calls ``scatter`` once per bounce with the material of the hit
surface. The result says whether the ray survived and, if so, which colour
attenuation to multiply into the path throughput and which ray to trace
next. Absorption (``did_scatter == 0``) is normal control flow: the path
simply contributes nothing further.

Example:
    >>> # Inside a Taichi kernel:
    >>> # did_scatter, attenuation, scattered, state = scatter(
    >>> #     material, ray_in, rec, state
    >>> # )
    >>> # if did_scatter == 1:
    >>> #     throughput *= attenuation
"""

import taichi as ti
import taichi.math as tm

from riaw.core.ray import HitRecord, Ray
from riaw.materials.dielectric import scatter_dielectric
from riaw.materials.lambertian import scatter_lambertian
from riaw.materials.material import Material, MaterialType, get_material
from riaw.materials.metal import scatter_metal

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter(material: Material, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Dispatch to the scattering function of the material's variant.

    Args:
        material: The material of the hit surface.
        ray_in: The incoming ray.
        rec: The hit record produced by the intersection system.
        state: The current RNG state.

    Returns:
        A tuple of (did_scatter, attenuation, scattered, new_state) where:
        - did_scatter: 1 if the ray was re-emitted, 0 if absorbed.
        - attenuation: The color attenuation for this bounce.
        - scattered: The outgoing ray (only meaningful if did_scatter == 1).
        - new_state: The advanced RNG state.
    """
    # Default values (absorbing)
    did_scatter = 0
    attenuation = vec3(0.0, 0.0, 0.0)
    scattered = Ray(origin=rec.point, direction=rec.normal)
    s = state

    if material.kind == int(MaterialType.LAMBERTIAN):
        did_scatter, attenuation, scattered, s = scatter_lambertian(
            material.albedo, ray_in, rec, s
        )

    elif material.kind == int(MaterialType.METAL):
        did_scatter, attenuation, scattered, s = scatter_metal(
            material.albedo, material.fuzz, ray_in, rec, s
        )

    elif material.kind == int(MaterialType.DIELECTRIC):
        did_scatter, attenuation, scattered, s = scatter_dielectric(
            material.refraction_index, ray_in, rec, s
        )

    return did_scatter, attenuation, scattered, s


@ti.func
def scatter_by_id(material_id: ti.i32, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Scatter a ray off a registered material.

    Convenience function that looks up the material in the registry and
    calls scatter. Unknown ids absorb the ray.

    Args:
        material_id: The material id.
        ray_in: The incoming ray.
        rec: The hit record.
        state: The current RNG state.

    Returns:
        A tuple of (did_scatter, attenuation, scattered, new_state).
    """
    material = get_material(material_id)
    return scatter(material, ray_in, rec, state)
