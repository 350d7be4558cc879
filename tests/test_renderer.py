"""Tests for the frame renderer.

This module tests the FrameRenderer class including:
- Initialization and setup
- Whole-frame and banded rendering
- Progress callbacks and generators
- Reset and resize
- Image output in various formats

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestFrameRendererInit:
    """Test FrameRenderer initialization."""

    def test_init_creates_render_target(self):
        """Test that initialization creates a render target with correct dimensions."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(128, 96)

        assert renderer.width == 128
        assert renderer.height == 96
        assert not renderer.is_complete

    def test_init_rejects_oversized_dimensions(self):
        """Test that initialization rejects dimensions exceeding max size."""
        from src.spheretrace.core.renderer import FrameRenderer

        with pytest.raises(ValueError, match="exceed maximum"):
            FrameRenderer(4096, 100)

    def test_repr(self):
        """Test the string representation."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(16, 8)

        assert repr(renderer) == "FrameRenderer(width=16, height=8, complete=False)"


class TestFrameRendererRender:
    """Test rendering entry points."""

    def test_render_completes_frame(self):
        """Test that render() writes every pixel."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(32, 24)
        renderer.render()

        assert renderer.is_complete
        assert renderer.get_image_numpy().shape == (24, 32, 3)

    def test_render_callback_reports_bands(self):
        """Test that the callback is called once per band with row counts."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(16, 20)
        progress = []

        renderer.render(band_height=8, callback=lambda done, total: progress.append((done, total)))

        assert progress == [(8, 20), (16, 20), (20, 20)]
        assert renderer.is_complete

    def test_render_progressive_yields_progress(self):
        """Test the generator form."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(16, 10)
        steps = list(renderer.render_progressive(band_height=5))

        assert steps == [(5, 10), (10, 10)]
        assert renderer.is_complete

    def test_render_progressive_can_stop_early(self):
        """Test that abandoning the generator leaves the frame incomplete."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(16, 10)
        progress = renderer.render_progressive(band_height=5)
        assert next(progress) == (5, 10)

        assert not renderer.is_complete
        with pytest.raises(RuntimeError, match="incomplete"):
            renderer.get_image_numpy()

    @pytest.mark.parametrize("band_height", [0, -3])
    def test_render_rejects_bad_band_height(self, band_height):
        """Test band height validation."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(8, 8)

        with pytest.raises(ValueError, match="Band height"):
            renderer.render(band_height=band_height)

    def test_banded_and_single_pass_agree(self):
        """Test that banding does not change the image."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(24, 16)
        renderer.render()
        single = renderer.get_image_numpy()

        renderer.reset()
        renderer.render(band_height=3)

        assert np.array_equal(single, renderer.get_image_numpy())


class TestFrameRendererReset:
    """Test reset and resize."""

    def test_reset_discards_frame(self):
        """Test that reset marks the frame incomplete."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(8, 8)
        renderer.render()
        renderer.reset()

        assert not renderer.is_complete

    def test_resize_changes_dimensions(self):
        """Test that resize updates dimensions and output shape."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(8, 8)
        renderer.render()
        renderer.resize(20, 12)

        assert (renderer.width, renderer.height) == (20, 12)
        assert not renderer.is_complete

        renderer.render()
        assert renderer.get_image_numpy().shape == (12, 20, 3)

    def test_resize_rejects_invalid_and_keeps_size(self):
        """Test that a failed resize leaves the renderer unchanged."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(8, 8)

        with pytest.raises(ValueError):
            renderer.resize(0, 8)

        assert (renderer.width, renderer.height) == (8, 8)


class TestFrameRendererOutput:
    """Test image readout."""

    def test_hit_mask(self):
        """Test that the center hits and corners miss in the default scene."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(40, 30)
        renderer.render()
        mask = renderer.get_hit_mask()

        assert mask.dtype == np.bool_
        assert mask[15, 20]
        assert not mask[0, 0]
        assert not mask[29, 39]

    def test_get_image_rgba(self):
        """Test quantized RGBA output."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(20, 10)
        renderer.render()
        rgba = renderer.get_image_rgba()

        assert rgba.shape == (10, 20, 4)
        assert rgba.dtype == np.uint8
        assert np.all(rgba[..., 3] == 255)
        # Background stored as float32, so 0.7 rounds down to 178
        background = np.array([0.2, 0.7, 0.8], dtype=np.float32).astype(np.float64)
        expected = np.floor(background * 255.0 + 0.5)
        assert tuple(rgba[0, 0, :3]) == tuple(expected.astype(np.uint8))

    def test_save_image(self, tmp_path):
        """Test saving to PNG."""
        from src.spheretrace.core.renderer import FrameRenderer

        renderer = FrameRenderer(20, 10)
        renderer.render()
        path = tmp_path / "frame.png"
        renderer.save_image(str(path))

        with PILImage.open(path) as img:
            assert img.mode == "RGBA"
            assert img.size == (20, 10)
