"""Material-scattering core of a Taichi-based path tracer.

This package computes how a ray that struck a surface is re-emitted
(diffused, reflected or refracted) and how much light survives the bounce:
- Lambertian diffuse scattering
- Metal reflection with fuzz
- Dielectric refraction via the vector form of Snell's law

Subpackages:
    core: Random source, vector utilities, ray and hit record structures
    materials: Material union, scatter dispatch and material registry
    output: Placeholder gradient render target and image writers

Randomness is never global: every sampling function receives an explicit
RNG state and returns it advanced, so results are reproducible per seed.
"""

__version__ = "0.1.0"
