"""Lambertian (ideal diffuse) material implementation.

The scattered direction is the hit normal plus a random unit vector, i.e. a
random point on the unit sphere tangent to the surface at the hit point.
This yields a cosine-weighted distribution over the hemisphere around the
normal, which is exactly the Lambertian distribution, so the attenuation is
just the albedo.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.materials.lambertian import scatter_lambertian
    >>> # Use within a Taichi kernel:
    >>> # did_scatter, attenuation, scattered, state = scatter_lambertian(
    >>> #     albedo, ray_in, rec, state
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from riaw.core.ray import HitRecord, Ray
from riaw.core.vec3 import near_zero, random_unit_vector

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def lambertian_direction(normal: vec3, offset: vec3) -> vec3:
    """Combine the normal with a sampled offset into a scatter direction.

    When the offset almost exactly cancels the normal the sum is a
    degenerate zero-length vector; the normal itself is used instead.

    Args:
        normal: The surface normal at the hit point (unit length).
        offset: A random unit vector.

    Returns:
        normal + offset, or normal if that sum is near zero.
    """
    direction = normal + offset
    if near_zero(direction):
        direction = normal
    return direction


@ti.func
def scatter_lambertian(albedo: vec3, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Scatter a ray off a Lambertian surface.

    Args:
        albedo: The diffuse reflectance (RGB).
        ray_in: The incoming ray. Diffuse scattering ignores its direction.
        rec: The hit record.
        state: The current RNG state.

    Returns:
        A tuple of (did_scatter, attenuation, scattered, new_state) where:
        - did_scatter: Always 1; diffuse surfaces never absorb.
        - attenuation: The albedo, unchanged.
        - scattered: The outgoing ray from the hit point.
        - new_state: The advanced RNG state.
    """
    offset, s = random_unit_vector(state)
    direction = lambertian_direction(rec.normal, offset)
    scattered = Ray(origin=rec.point, direction=direction)
    did_scatter = 1
    return did_scatter, albedo, scattered, s
