"""Dielectric (glass/water) material implementation.

Dielectrics refract every incoming ray using Snell's law:

    n1 * sin(theta1) = n2 * sin(theta2)

This model is deliberately simple: there is no Schlick reflectance term and
no fallback to reflection under total internal reflection, so a dielectric
always returns the refracted ray. Glass does not tint light here, so the
attenuation is always white.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.materials.dielectric import scatter_dielectric
    >>> # Use within a Taichi kernel:
    >>> # did_scatter, attenuation, scattered, state = scatter_dielectric(
    >>> #     refraction_index, ray_in, rec, state
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from riaw.core.ray import HitRecord, Ray
from riaw.core.vec3 import refract, unit_vector

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def refraction_ratio(refraction_index: ti.f32, front_face: ti.i32) -> ti.f32:
    """Select the ratio of refractive indices for a boundary crossing.

    Entering the medium (front face) goes from air to the material, so the
    ratio is 1 / refraction_index. Leaving it (back face) the ratio is the
    refraction index itself.

    Args:
        refraction_index: Index of refraction of the material.
        front_face: 1 if the ray hits the outside of the surface, 0 if it
            hits from within the material.

    Returns:
        The ratio etai / etat passed to refract().
    """
    ratio = refraction_index
    if front_face == 1:
        ratio = 1.0 / refraction_index
    return ratio


@ti.func
def scatter_dielectric(refraction_index: ti.f32, ray_in: Ray, rec: HitRecord, state: ti.u32):
    """Refract a ray through a dielectric surface.

    Args:
        refraction_index: Index of refraction of the material.
        ray_in: The incoming ray.
        rec: The hit record (normal facing the incoming ray).
        state: The current RNG state. Refraction draws no samples, so it is
            returned unchanged.

    Returns:
        A tuple of (did_scatter, attenuation, scattered, new_state) where:
        - did_scatter: Always 1.
        - attenuation: Always (1, 1, 1).
        - scattered: The refracted ray from the hit point.
        - new_state: The RNG state, unchanged.
    """
    attenuation = vec3(1.0, 1.0, 1.0)
    ratio = refraction_ratio(refraction_index, rec.front_face)
    direction = refract(unit_vector(ray_in.direction), rec.normal, ratio)
    scattered = Ray(origin=rec.point, direction=direction)
    did_scatter = 1
    return did_scatter, attenuation, scattered, state
