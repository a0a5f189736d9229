"""Unit tests for the Metal material module.

Tests cover:
- Perfect specular reflection (fuzz=0)
- Fuzzy reflection bounded by the fuzz radius
- Absorption when the fuzzed direction points into the surface
- Absorption rate growing with fuzz
- Attenuation equals albedo
- Fuzz clamping at construction
"""

import math

import numpy as np
import taichi as ti


def _scatter_many(albedo, fuzz, incident, normal, num_samples, seed):
    """Scatter a fixed ray off a metal surface num_samples times."""
    from riaw.core.ray import HitRecord, Ray
    from riaw.core.rng import seed_rng
    from riaw.materials.metal import scatter_metal

    did_scatter = ti.field(dtype=ti.i32, shape=num_samples)
    attenuation = ti.Vector.field(3, dtype=ti.f32, shape=num_samples)
    direction = ti.Vector.field(3, dtype=ti.f32, shape=num_samples)

    @ti.kernel
    def test_kernel(
        alb: ti.math.vec3, fuzz: ti.f32, d: ti.math.vec3, n: ti.math.vec3, seed: ti.u32
    ):
        for i in range(num_samples):
            ray_in = Ray(origin=-d, direction=d)
            rec = HitRecord(point=ti.math.vec3(0.0, 0.0, 0.0), normal=n, front_face=1, t=1.0)
            state = seed_rng(ti.cast(i, ti.u32), seed)
            s, att, scattered, _ = scatter_metal(alb, fuzz, ray_in, rec, state)
            did_scatter[i] = s
            attenuation[i] = att
            direction[i] = scattered.direction

    test_kernel(
        ti.math.vec3(*albedo), fuzz, ti.math.vec3(*incident), ti.math.vec3(*normal), seed
    )
    return did_scatter.to_numpy(), attenuation.to_numpy(), direction.to_numpy()


class TestPerfectReflection:
    """Tests for perfect specular reflection (fuzz=0)."""

    def test_perfect_reflection_normal_incidence(self):
        """Test reflection of ray hitting surface head-on."""
        did_scatter, _, direction = _scatter_many(
            (1.0, 1.0, 1.0), 0.0, (0.0, -1.0, 0.0), (0.0, 1.0, 0.0), 1, seed=0
        )
        assert did_scatter[0] == 1
        assert np.allclose(direction[0], [0.0, 1.0, 0.0], atol=1e-6)

    def test_perfect_reflection_45_degrees(self):
        """Test reflection at 45 degree angle."""
        inv_sqrt2 = 1.0 / math.sqrt(2.0)
        did_scatter, _, direction = _scatter_many(
            (1.0, 1.0, 1.0), 0.0, (1.0, -1.0, 0.0), (0.0, 1.0, 0.0), 1, seed=0
        )
        assert did_scatter[0] == 1
        # Incoming direction is normalized before reflecting
        assert np.allclose(direction[0], [inv_sqrt2, inv_sqrt2, 0.0], atol=1e-5)

    def test_fuzz_zero_is_exact_mirror_for_every_seed(self):
        """Test that fuzz=0 injects no randomness."""
        _, _, direction = _scatter_many(
            (1.0, 1.0, 1.0), 0.0, (1.0, -2.0, 0.5), (0.0, 1.0, 0.0), 200, seed=17
        )
        incident = np.array([1.0, -2.0, 0.5]) / np.linalg.norm([1.0, -2.0, 0.5])
        expected = incident * np.array([1.0, -1.0, 1.0])
        assert np.allclose(direction, expected, atol=1e-5)
        # Every sample is identical
        assert np.all(direction == direction[0])


class TestFuzzyReflection:
    """Tests for fuzzy metal reflection (fuzz>0)."""

    def test_fuzzy_reflection_direction_varies(self):
        """Test that fuzzy reflection produces varying directions."""
        _, _, direction = _scatter_many(
            (1.0, 1.0, 1.0), 0.3, (0.0, -1.0, 0.0), (0.0, 1.0, 0.0), 100, seed=1
        )
        assert np.ptp(direction[:, 0]) > 0.01
        assert np.ptp(direction[:, 2]) > 0.01

    def test_deviation_bounded_by_fuzz(self):
        """Test that |scattered - mirror| < fuzz for every sample."""
        incident = np.array([1.0, -1.0, 0.0]) / math.sqrt(2.0)
        mirror = incident * np.array([1.0, -1.0, 1.0])
        for fuzz in (0.1, 0.4, 0.9):
            _, _, direction = _scatter_many(
                (1.0, 1.0, 1.0), fuzz, tuple(incident), (0.0, 1.0, 0.0), 2000, seed=4
            )
            deviation = np.linalg.norm(direction - mirror, axis=1)
            assert np.all(deviation < fuzz + 1e-5)

    def test_fuzz_scales_the_offset(self):
        """Test that the same stream gives offsets proportional to fuzz."""
        incident = (0.0, -1.0, 0.0)
        mirror = np.array([0.0, 1.0, 0.0])
        _, _, low = _scatter_many((1.0, 1.0, 1.0), 0.2, incident, (0.0, 1.0, 0.0), 500, seed=6)
        _, _, high = _scatter_many((1.0, 1.0, 1.0), 0.6, incident, (0.0, 1.0, 0.0), 500, seed=6)
        assert np.allclose((high - mirror), 3.0 * (low - mirror), atol=1e-5)

    def test_absorbed_when_below_surface(self):
        """Test that did_scatter matches the sign of dot(direction, normal)."""
        did_scatter, _, direction = _scatter_many(
            (1.0, 1.0, 1.0), 1.0, (1.0, -0.1, 0.0), (0.0, 1.0, 0.0), 5000, seed=8
        )
        assert np.any(did_scatter == 0)
        assert np.any(did_scatter == 1)
        assert np.all((direction[:, 1] > 0.0) == (did_scatter == 1))

    def test_absorption_rate_increases_with_fuzz(self):
        """Test absorption grows monotonically with fuzz for a fixed geometry.

        The mirror direction has y = sin(16.7 deg) ~ 0.287, so fuzz 0.2
        never dips below the surface while larger fuzz does more and more.
        """
        rates = []
        for fuzz in (0.2, 0.5, 0.75, 1.0):
            did_scatter, _, _ = _scatter_many(
                (1.0, 1.0, 1.0), fuzz, (1.0, -0.3, 0.0), (0.0, 1.0, 0.0), 20000, seed=12
            )
            rates.append(float(np.mean(did_scatter == 0)))

        assert rates[0] == 0.0
        assert rates[0] < rates[1] < rates[2] < rates[3]
        # Analytic spherical-cap fractions: ~0.117 at fuzz 0.5, ~0.29 at 1.0
        assert abs(rates[1] - 0.117) < 0.02
        assert abs(rates[3] - 0.29) < 0.02


class TestMetalAttenuation:
    """Tests for metal attenuation."""

    def test_attenuation_equals_albedo(self):
        """Test that attenuation is the albedo whether absorbed or not."""
        did_scatter, attenuation, _ = _scatter_many(
            (0.9, 0.6, 0.2), 1.0, (1.0, -0.2, 0.0), (0.0, 1.0, 0.0), 1000, seed=3
        )
        expected = np.array([0.9, 0.6, 0.2], dtype=np.float32)
        assert np.all(attenuation == expected)
        assert np.any(did_scatter == 0)


class TestFuzzClamping:
    """Tests for clamping fuzz at construction."""

    def test_clamp_fuzz(self):
        """Test the Python-side clamp."""
        from riaw.materials.material import clamp_fuzz

        assert clamp_fuzz(2.5) == 1.0
        assert clamp_fuzz(1.0) == 1.0
        assert clamp_fuzz(0.3) == 0.3
        assert clamp_fuzz(0.0) == 0.0

    def test_make_metal_clamps_fuzz(self):
        """Test that make_metal caps fuzz at 1.0 inside kernels."""
        from riaw.materials.material import make_metal

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = make_metal(ti.math.vec3(1.0, 1.0, 1.0), 2.5).fuzz
            result[1] = make_metal(ti.math.vec3(1.0, 1.0, 1.0), 0.4).fuzz

        test_kernel()
        assert result[0] == 1.0
        assert abs(result[1] - 0.4) < 1e-6

    def test_fuzz_above_one_behaves_like_one(self):
        """Test that fuzz 2.5 and fuzz 1.0 scatter identically."""
        from riaw.materials.material import add_metal_material
        from riaw.materials.sampling import sample_scatter

        clamped = add_metal_material((0.8, 0.8, 0.8), fuzz=2.5)
        reference = add_metal_material((0.8, 0.8, 0.8), fuzz=1.0)

        a = sample_scatter(clamped, (1.0, -0.5, 0.0), (0.0, 1.0, 0.0), num_samples=2000, seed=21)
        b = sample_scatter(reference, (1.0, -0.5, 0.0), (0.0, 1.0, 0.0), num_samples=2000, seed=21)
        assert np.array_equal(a.did_scatter, b.did_scatter)
        assert np.array_equal(a.direction, b.direction)
