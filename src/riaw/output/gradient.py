"""Placeholder render target: a static colour gradient.

Until a real render loop drives rays through a scene, the driver fills the
image with a gradient that exercises the output path end to end. Red grows
from left to right, green from bottom to top, and blue is constant.

Scanlines are rendered top to bottom, one kernel launch per scanline, so
callers can report progress between rows. Each scanline is written to a
row buffer preallocated at import and copied into the NumPy image.
"""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Callback receives the number of scanlines left after the one about to be
# rendered
ScanlineCallback = Callable[[int], None]

# Maximum supported image width (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 8192

_scanline = ti.Vector.field(3, dtype=ti.f32, shape=MAX_IMAGE_WIDTH)


@ti.kernel
def _render_scanline(j: ti.i32, width: ti.i32, height: ti.i32, blue: ti.f32):
    # j counts from the bottom
    for i in range(width):
        r = ti.cast(i, ti.f32) / ti.cast(ti.max(width - 1, 1), ti.f32)
        g = ti.cast(j, ti.f32) / ti.cast(ti.max(height - 1, 1), ti.f32)
        _scanline[i] = vec3(r, g, blue)


def render_gradient(
    width: int,
    height: int,
    blue: float = 0.25,
    callback: ScanlineCallback | None = None,
) -> npt.NDArray[np.float32]:
    """Render the gradient image.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels.
        blue: Constant blue channel in [0, 1].
        callback: Optional function called before each scanline with the
            number of scanlines left after it (height - 1 down to 0).

    Returns:
        Linear float image of shape (height, width, 3); row 0 is the top.

    Raises:
        ValueError: If width or height is not positive, or width exceeds
            MAX_IMAGE_WIDTH.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH:
        raise ValueError(f"Image width {width} exceeds maximum {MAX_IMAGE_WIDTH}")

    image = np.empty((height, width, 3), dtype=np.float32)
    for j in reversed(range(height)):
        if callback is not None:
            callback(j)
        _render_scanline(j, width, height, blue)
        # Image rows count from the top
        image[height - 1 - j] = _scanline.to_numpy()[:width]

    return image
