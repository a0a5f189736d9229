"""Explicit, seedable random source for Monte Carlo sampling.

The generator state is a single ``u32`` that callers thread through every
sampling call: each function takes the current state and returns the
advanced state next to its value. Nothing here touches ``ti.random``, so a
kernel thread that owns its state can never contend with another, and the
same seed always reproduces the same samples.

The permutation is the PCG RXS-M-XS hash from Jarzynski & Olano,
"Hash Functions for GPU Rendering" (JCGT 2020).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from riaw.core.rng import seed_rng, random_float
    >>> # Inside a Taichi kernel:
    >>> # state = seed_rng(ti.cast(i, ti.u32), seed)
    >>> # u, state = random_float(state)
"""

import taichi as ti

# Multiplier used to spread the user seed across the 32-bit state space
GOLDEN_RATIO_U32 = 0x9E3779B9

# Floats are built from the top 24 bits so that the result is exact in f32
_INV_2_POW_24 = 1.0 / 16777216.0


@ti.func
def pcg_hash(x: ti.u32) -> ti.u32:
    """Apply the PCG RXS-M-XS output permutation to a 32-bit value.

    Args:
        x: The input value.

    Returns:
        The hashed value. All arithmetic wraps modulo 2^32.
    """
    state = x * ti.u32(747796405) + ti.u32(2891336453)
    word = ((state >> ((state >> ti.u32(28)) + ti.u32(4))) ^ state) * ti.u32(277803737)
    return (word >> ti.u32(22)) ^ word


@ti.func
def seed_rng(index: ti.u32, seed: ti.u32) -> ti.u32:
    """Create the starting state of an independent random stream.

    Args:
        index: Stream index, usually the pixel or sample index.
        seed: User seed shared by all streams of one run.

    Returns:
        The initial RNG state for the stream.
    """
    return pcg_hash(index ^ (seed * ti.u32(GOLDEN_RATIO_U32)))


@ti.func
def random_float(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Args:
        state: The current RNG state.

    Returns:
        A tuple of (value, new_state).
    """
    new_state = pcg_hash(state)
    value = ti.cast(new_state >> ti.u32(8), ti.f32) * _INV_2_POW_24
    return value, new_state


@ti.func
def random_range(state: ti.u32, lo: ti.f32, hi: ti.f32):
    """Draw a uniform float in [lo, hi).

    Args:
        state: The current RNG state.
        lo: Lower bound (inclusive).
        hi: Upper bound (exclusive).

    Returns:
        A tuple of (value, new_state).
    """
    u, new_state = random_float(state)
    return lo + (hi - lo) * u, new_state
