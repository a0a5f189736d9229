"""Ray and hit record structures.

A ray is an origin plus a direction; a hit record is what the intersection
system reports for a ray that struck a surface. Materials read hit records
but never modify them.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            normalized; scattering code normalizes where the physics needs it.
    """

    origin: vec3
    direction: vec3


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray hit the surface.
        normal: The surface normal at the hit point (unit length). Always
            oriented against the incoming ray.
        front_face: 1 if the ray approached from outside the surface (the
            side the outward normal points to), 0 if from inside.
        t: The ray parameter of the hit.
    """

    point: vec3
    normal: vec3
    front_face: ti.i32
    t: ti.f32


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def make_hit_record(
    ray_direction: vec3,
    t: ti.f32,
    point: vec3,
    outward_normal: vec3,
) -> HitRecord:
    """Build a hit record with the normal facing the incoming ray.

    Intersection code knows the geometric (outward) normal of a surface;
    scattering expects the normal on the side the ray came from. The hit is
    a front-face hit when the ray travels against the outward normal.

    Args:
        ray_direction: Direction of the ray that produced the hit.
        t: The ray parameter of the hit.
        point: The hit point.
        outward_normal: The unit normal pointing out of the surface.

    Returns:
        A HitRecord with front_face set and the normal flipped for
        back-face hits.
    """
    front_face = 0
    normal = -outward_normal
    if tm.dot(ray_direction, outward_normal) < 0.0:
        front_face = 1
        normal = outward_normal
    return HitRecord(point=point, normal=normal, front_face=front_face, t=t)
