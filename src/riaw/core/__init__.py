"""Core module.

This module contains the leaf building blocks of the scattering core:

Components:
    rng: Explicit PCG-hash random source threaded through every sampler
    vec3: Vector utilities, reflection/refraction and random sampling
    ray: Ray and hit record structures

All per-ray operations are Taichi functions meant to run inside kernels.
"""

from .ray import HitRecord, Ray, make_hit_record, make_ray, ray_at
from .rng import pcg_hash, random_float, random_range, seed_rng
from .vec3 import (
    NEAR_ZERO_EPSILON,
    cross,
    dot,
    length,
    length_squared,
    near_zero,
    random_in_unit_sphere,
    random_unit_vector,
    reflect,
    refract,
    unit_vector,
    vec3,
)

__all__ = [
    # Ray and hit record
    "Ray",
    "HitRecord",
    "ray_at",
    "make_ray",
    "make_hit_record",
    # Random source
    "pcg_hash",
    "seed_rng",
    "random_float",
    "random_range",
    # Vector utilities
    "vec3",
    "NEAR_ZERO_EPSILON",
    "dot",
    "cross",
    "length",
    "length_squared",
    "unit_vector",
    "near_zero",
    "reflect",
    "refract",
    "random_in_unit_sphere",
    "random_unit_vector",
]
