"""Metal (specular reflective) material implementation.

Metals mirror the incoming direction about the surface normal:

    R = I - 2(I . N)N

and then offset the mirror direction by a random point in a sphere of
radius ``fuzz`` to model rough surfaces. A fuzzed direction that ends up
at or below the surface is absorbed.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.materials.metal import scatter_metal
    >>> # Use within a Taichi kernel:
    >>> # did_scatter, attenuation, scattered, state = scatter_metal(
    >>> #     albedo, fuzz, ray_in, rec, state
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from riaw.core.ray import HitRecord, Ray
from riaw.core.vec3 import random_in_unit_sphere, reflect, unit_vector

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_metal(albedo: vec3, fuzz: ti.f32, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Scatter a ray off a metal surface.

    The offset sample is drawn for every call, including fuzz = 0, so the
    RNG stream advances the same way regardless of roughness. With fuzz = 0
    the offset is multiplied away and the result is the exact mirror
    direction. The fuzzed direction is not renormalized.

    Args:
        albedo: The reflective color (RGB).
        fuzz: The perturbation radius in [0, 1].
        ray_in: The incoming ray.
        rec: The hit record.
        state: The current RNG state.

    Returns:
        A tuple of (did_scatter, attenuation, scattered, new_state) where:
        - did_scatter: 1 if the direction points away from the surface
          (strictly positive dot product with the normal), 0 if absorbed.
        - attenuation: The albedo, unchanged.
        - scattered: The outgoing ray from the hit point.
        - new_state: The advanced RNG state.
    """
    reflected = reflect(unit_vector(ray_in.direction), rec.normal)
    offset, s = random_in_unit_sphere(state)
    direction = reflected + fuzz * offset
    scattered = Ray(origin=rec.point, direction=direction)

    did_scatter = 0
    if tm.dot(direction, rec.normal) > 0.0:
        did_scatter = 1

    return did_scatter, albedo, scattered, s
