"""Vector utilities for GPU-accelerated ray scattering.

Component-wise arithmetic (add, subtract, negate, scalar multiply and divide)
is provided directly by ``taichi.math.vec3``. This module adds the products,
norms and geometric helpers the materials need, plus the two stochastic
samplers used for diffuse and fuzzy scattering.

The samplers take an explicit RNG state (see ``riaw.core.rng``) and return
the advanced state alongside the sample.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.core.vec3 import reflect, vec3
    >>> # Inside a Taichi kernel:
    >>> # r = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
"""

import taichi as ti
import taichi.math as tm

from riaw.core.rng import random_range

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Components with an absolute value below this are treated as zero
NEAR_ZERO_EPSILON = 1e-8


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return tm.cross(a, b)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Args:
        v: The input vector.

    Returns:
        The squared Euclidean length of the vector.
    """
    return tm.dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the length (magnitude) of a vector.

    Args:
        v: The input vector.

    Returns:
        The square root of the squared length.
    """
    return ti.sqrt(length_squared(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Unlike ``tm.normalize`` this is a plain division by the length: a zero
    vector produces NaN components, so callers must never pass one.

    Args:
        v: The input vector (non-zero).

    Returns:
        A unit vector in the same direction as v.
    """
    return v / length(v)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Used to detect degenerate scatter directions.

    Args:
        v: The vector to check.

    Returns:
        1 if every component has absolute value below 1e-8, 0 otherwise.
    """
    s = NEAR_ZERO_EPSILON
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Mirror a vector about a normal.

    Computes v - 2 (v . n) n. The normal must be unit length.

    Args:
        v: The incoming direction vector (pointing toward the surface).
        n: The surface normal (unit length).

    Returns:
        The reflected direction, with the same length as v.
    """
    return v - 2.0 * tm.dot(v, n) * n


@ti.func
def refract(uv: vec3, n: vec3, etai_over_etat: ti.f32) -> vec3:
    """Refract a unit direction through a surface using Snell's law.

    The refracted ray is split into a component perpendicular to the normal,
    which scales with the refraction ratio, and a component parallel to it,
    which restores unit length:

        cos_theta = min(-uv . n, 1)
        r_perp = etai_over_etat * (uv + cos_theta * n)
        r_parallel = -sqrt(|1 - |r_perp|^2|) * n

    The cosine is clamped against floating-point overshoot and the absolute
    value keeps the radicand non-negative near the critical angle. Beyond the
    critical angle no fallback to reflection is made.

    Args:
        uv: The incoming direction (unit length).
        n: The surface normal (unit length, facing the incoming ray).
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction r_perp + r_parallel.
    """
    cos_theta = ti.min(tm.dot(-uv, n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    r_out_parallel = -ti.sqrt(ti.abs(1.0 - length_squared(r_out_perp))) * n
    return r_out_perp + r_out_parallel


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


@ti.func
def random_in_unit_sphere(state: ti.u32):
    """Generate a random point inside the unit sphere.

    Rejection sampling: draws points uniformly from the cube [-1, 1)^3 until
    one lands strictly inside the sphere. About 52% of draws are accepted,
    so the expected number of rounds is below two.

    Args:
        state: The current RNG state.

    Returns:
        A tuple of (point, new_state) where point has squared length < 1.
    """
    s = state
    p = vec3(1.0, 1.0, 1.0)
    while length_squared(p) >= 1.0:
        x, s1 = random_range(s, -1.0, 1.0)
        y, s2 = random_range(s1, -1.0, 1.0)
        z, s3 = random_range(s2, -1.0, 1.0)
        s = s3
        p = vec3(x, y, z)
    return p, s


@ti.func
def random_unit_vector(state: ti.u32):
    """Generate a random unit vector uniformly distributed on the sphere.

    Args:
        state: The current RNG state.

    Returns:
        A tuple of (direction, new_state).
    """
    p, s = random_in_unit_sphere(state)
    return unit_vector(p), s
