"""Batch scattering for statistics and previews.

``sample_scatter`` scatters one fixed incoming ray off one fixed hit many
times in parallel and copies the results back to NumPy. Sample ``i`` uses
its own RNG stream ``seed_rng(i, seed)``, so the whole batch is
reproducible for a given seed and independent of the backend's thread
schedule.

Samples are computed in chunks of ``SAMPLE_BATCH_SIZE`` through output
buffers that are allocated once at import, so repeated calls neither grow
Taichi's field storage nor recompile the kernel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.materials.material import add_metal_material
    >>> from riaw.materials.sampling import sample_scatter
    >>> mat_id = add_metal_material((0.9, 0.9, 0.9), fuzz=0.5)
    >>> samples = sample_scatter(
    ...     mat_id, direction=(1.0, -0.3, 0.0), normal=(0.0, 1.0, 0.0),
    ...     num_samples=10000, seed=7,
    ... )
    >>> samples.absorption_rate()  # roughly 0.12
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from riaw.core.ray import HitRecord, Ray
from riaw.core.rng import seed_rng
from riaw.materials.scatter import scatter_by_id

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass
class ScatterSamples:
    """Results of a batch of scatter calls.

    Attributes:
        did_scatter: Array of shape (N,), 1 where the ray was re-emitted.
        attenuation: Array of shape (N, 3) with the attenuation per sample.
        origin: Array of shape (N, 3) with the scattered ray origins.
        direction: Array of shape (N, 3) with the scattered ray directions.
    """

    did_scatter: npt.NDArray[np.int32]
    attenuation: npt.NDArray[np.float32]
    origin: npt.NDArray[np.float32]
    direction: npt.NDArray[np.float32]

    def __len__(self) -> int:
        return int(self.did_scatter.shape[0])

    def absorption_rate(self) -> float:
        """Fraction of samples that were absorbed."""
        if len(self) == 0:
            return 0.0
        return float(np.mean(self.did_scatter == 0))

    def scattered_directions(self) -> npt.NDArray[np.float32]:
        """Directions of the samples that were not absorbed."""
        return self.direction[self.did_scatter == 1]


# =============================================================================
# Output Buffers (preallocated to avoid kernel recompilation)
# =============================================================================

# Samples computed per kernel launch
SAMPLE_BATCH_SIZE = 16384

_out_did_scatter = ti.field(dtype=ti.i32, shape=SAMPLE_BATCH_SIZE)
_out_attenuation = ti.Vector.field(3, dtype=ti.f32, shape=SAMPLE_BATCH_SIZE)
_out_origin = ti.Vector.field(3, dtype=ti.f32, shape=SAMPLE_BATCH_SIZE)
_out_direction = ti.Vector.field(3, dtype=ti.f32, shape=SAMPLE_BATCH_SIZE)


@ti.kernel
def _scatter_batch(
    material_id: ti.i32,
    ray_origin: vec3,
    ray_direction: vec3,
    hit_point: vec3,
    normal: vec3,
    front_face: ti.i32,
    seed: ti.u32,
    first_index: ti.i32,
    count: ti.i32,
):
    for i in range(count):
        ray_in = Ray(origin=ray_origin, direction=ray_direction)
        rec = HitRecord(point=hit_point, normal=normal, front_face=front_face, t=1.0)
        state = seed_rng(ti.cast(first_index + i, ti.u32), seed)
        did_scatter, attenuation, scattered, _ = scatter_by_id(material_id, ray_in, rec, state)
        _out_did_scatter[i] = did_scatter
        _out_attenuation[i] = attenuation
        _out_origin[i] = scattered.origin
        _out_direction[i] = scattered.direction


def sample_scatter(
    material_id: int,
    direction: tuple[float, float, float],
    normal: tuple[float, float, float],
    *,
    front_face: bool = True,
    point: tuple[float, float, float] = (0.0, 0.0, 0.0),
    num_samples: int = 1024,
    seed: int = 0,
) -> ScatterSamples:
    """Scatter the same incoming ray off the same hit many times.

    The incoming ray is placed one unit before the hit point along its
    direction, as an intersector would report it.

    Args:
        material_id: The registered material to scatter off.
        direction: Direction of the incoming ray (need not be normalized).
        normal: Unit surface normal at the hit, facing the incoming ray.
        front_face: Whether the hit is on the outside of the surface.
        point: The hit point.
        num_samples: Number of independent scatter calls.
        seed: Seed shared by all RNG streams of the batch.

    Returns:
        The batch results as NumPy arrays.

    Raises:
        ValueError: If num_samples is not positive.
    """
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")

    result = ScatterSamples(
        did_scatter=np.empty(num_samples, dtype=np.int32),
        attenuation=np.empty((num_samples, 3), dtype=np.float32),
        origin=np.empty((num_samples, 3), dtype=np.float32),
        direction=np.empty((num_samples, 3), dtype=np.float32),
    )

    origin = [point[k] - direction[k] for k in range(3)]
    for start in range(0, num_samples, SAMPLE_BATCH_SIZE):
        count = min(SAMPLE_BATCH_SIZE, num_samples - start)
        _scatter_batch(
            material_id,
            vec3(origin[0], origin[1], origin[2]),
            vec3(direction[0], direction[1], direction[2]),
            vec3(point[0], point[1], point[2]),
            vec3(normal[0], normal[1], normal[2]),
            1 if front_face else 0,
            seed & 0xFFFFFFFF,
            start,
            count,
        )

        end = start + count
        result.did_scatter[start:end] = _out_did_scatter.to_numpy()[:count]
        result.attenuation[start:end] = _out_attenuation.to_numpy()[:count]
        result.origin[start:end] = _out_origin.to_numpy()[:count]
        result.direction[start:end] = _out_direction.to_numpy()[:count]

    return result
