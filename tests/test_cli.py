"""Unit tests for the command-line driver and render configuration.

Taichi is initialized once by the session fixture, so these tests call
render() directly instead of main() on paths that would initialize it again.
"""

import pytest


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test that defaults match RenderConfig."""
        from riaw.cli import config_from_args, parse_args
        from riaw.config import RenderConfig

        config = config_from_args(parse_args([]))
        assert config == RenderConfig()
        assert config.width == 256
        assert config.height == 256
        assert config.output == "riaw.ppm"

    def test_overrides(self):
        """Test that every option reaches the config."""
        from riaw.cli import config_from_args, parse_args

        args = parse_args(
            [
                "--width", "200",
                "--height", "100",
                "--blue", "0.5",
                "--output", "out.png",
                "--arch", "gpu",
                "--quiet",
            ]
        )
        config = config_from_args(args)
        assert config.width == 200
        assert config.height == 100
        assert config.blue == 0.5
        assert config.output == "out.png"
        assert config.arch == "gpu"
        assert config.quiet is True

    def test_unknown_arch(self):
        """Test that argparse rejects unknown backends."""
        from riaw.cli import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--arch", "tpu"])


class TestRenderConfig:
    """Tests for RenderConfig.validate."""

    def test_default_is_valid(self):
        """Test that the default settings validate."""
        from riaw.config import RenderConfig

        RenderConfig().validate()

    @pytest.mark.parametrize(
        "kwargs,match",
        [
            ({"width": 0}, "dimensions"),
            ({"height": -3}, "dimensions"),
            ({"blue": 1.5}, "Blue channel"),
            ({"blue": -0.1}, "Blue channel"),
            ({"arch": "tpu"}, "Unknown arch"),
        ],
    )
    def test_invalid(self, kwargs, match):
        """Test that invalid settings raise ValueError."""
        from riaw.config import RenderConfig

        with pytest.raises(ValueError, match=match):
            RenderConfig(**kwargs).validate()


class TestRender:
    """Tests for rendering to a file."""

    def test_render_ppm(self, tmp_path, capsys):
        """Test rendering the gradient to a PPM file."""
        from riaw.cli import render
        from riaw.config import RenderConfig

        output = tmp_path / "gradient.ppm"
        path = render(RenderConfig(width=4, height=3, output=str(output)))

        assert path == output
        lines = output.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "4 3", "255"]
        assert lines[3] == "0 255 63"

        err = capsys.readouterr().err
        assert "Scanlines remaining: 2" in err
        assert "Scanlines remaining: 0" in err
        assert err.index("remaining: 2") < err.index("remaining: 0")
        assert "Saved to:" in err

    def test_render_png_quiet(self, tmp_path, capsys):
        """Test rendering to PNG with progress suppressed."""
        from PIL import Image

        from riaw.cli import render
        from riaw.config import RenderConfig

        output = tmp_path / "gradient.png"
        render(RenderConfig(width=8, height=2, output=str(output), quiet=True))

        with Image.open(output) as loaded:
            assert loaded.size == (8, 2)
        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == ""

    def test_render_bad_suffix(self, tmp_path):
        """Test that an unsupported output format raises ValueError."""
        from riaw.cli import render
        from riaw.config import RenderConfig

        with pytest.raises(ValueError, match="Unsupported output format"):
            render(RenderConfig(width=2, height=2, output=str(tmp_path / "x.bmp"), quiet=True))


class TestMain:
    """Tests for the main entry point error path."""

    def test_invalid_width_exits_nonzero(self, capsys):
        """Test that invalid settings print an error and return 1."""
        from riaw.cli import main

        assert main(["--width", "0", "--quiet"]) == 1
        assert "Error: Image dimensions must be positive" in capsys.readouterr().err

    def test_invalid_blue_exits_nonzero(self, capsys):
        """Test that an out-of-range blue channel is reported."""
        from riaw.cli import main

        assert main(["--blue", "2.0"]) == 1
        assert "Error: Blue channel" in capsys.readouterr().err

    def test_seed_option_rejected(self):
        """Test that the driver has no --seed option; the gradient is deterministic."""
        from riaw.cli import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--seed", "7"])


class TestInitTaichi:
    """Tests for backend selection, with ti.init replaced by a recorder."""

    @staticmethod
    def _record_init(monkeypatch, fail_gpu):
        import taichi as ti

        calls = []

        def fake_init(arch=None, **kwargs):
            calls.append(arch)
            if fail_gpu and arch == ti.gpu:
                raise RuntimeError("no GPU backend")

        monkeypatch.setattr(ti, "init", fake_init)
        return calls

    def test_cpu(self, monkeypatch):
        """Test that cpu initializes the CPU backend."""
        import taichi as ti

        from riaw.config import init_taichi

        calls = self._record_init(monkeypatch, fail_gpu=False)
        assert init_taichi("cpu") == "cpu"
        assert calls == [ti.cpu]

    def test_gpu(self, monkeypatch):
        """Test that gpu reports gpu when initialization succeeds."""
        import taichi as ti

        from riaw.config import init_taichi

        calls = self._record_init(monkeypatch, fail_gpu=False)
        assert init_taichi("gpu") == "gpu"
        assert calls == [ti.gpu]

    def test_gpu_falls_back_to_cpu(self, monkeypatch):
        """Test that a failing GPU initialization falls back to the CPU."""
        import taichi as ti

        from riaw.config import init_taichi

        calls = self._record_init(monkeypatch, fail_gpu=True)
        assert init_taichi("gpu") == "cpu"
        assert calls == [ti.gpu, ti.cpu]
