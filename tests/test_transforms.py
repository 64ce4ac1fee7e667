"""Unit tests for the digital zoom."""
import numpy as np
import pytest

from resistor_lib.transforms import ZoomTransform, apply_zoom, zoom_matrix


@pytest.fixture
def centred_square():
    img = np.zeros((100, 100, 3), dtype=np.uint8)
    img[40:60, 40:60] = 255
    return img


class TestZoomMatrix:

    def test_scales_about_centre(self):
        m = zoom_matrix(100, 100, 2.0)
        assert np.allclose(m, [[2, 0, -50], [0, 2, -50]])

    def test_identity_for_unit_factor(self):
        assert np.allclose(zoom_matrix(640, 480, 1.0), [[1, 0, 0], [0, 1, 0]])

    @pytest.mark.parametrize("factor", [0, -1.5])
    def test_rejects_non_positive_factor(self, factor):
        with pytest.raises(ValueError):
            zoom_matrix(100, 100, factor)


class TestApplyZoom:

    def test_unit_factor_returns_copy(self, centred_square):
        out = apply_zoom(centred_square, 1.0)
        assert out is not centred_square
        assert np.array_equal(out, centred_square)

    def test_zoom_in_enlarges_centre(self, centred_square):
        out = apply_zoom(centred_square, 2.0)

        assert out.shape == centred_square.shape
        assert (out[50, 50] == 255).all()
        assert (out[35, 35] == 255).all()
        assert (out[25, 25] == 0).all()
        # Input untouched
        assert (centred_square[35, 35] == 0).all()

    def test_rejects_none(self):
        with pytest.raises(ValueError):
            apply_zoom(None, 2.0)


class TestZoomTransform:

    def test_matrix_cached_while_factor_unchanged(self, centred_square):
        zoom = ZoomTransform()
        for _ in range(3):
            zoom(centred_square, 2.0)
        assert zoom.recomputations == 1
        assert zoom.last_factor == 2.0
        assert zoom.last_size == (100, 100)

    def test_recomputes_on_factor_change(self, centred_square):
        zoom = ZoomTransform()
        zoom(centred_square, 2.0)
        zoom(centred_square, 3.0)
        zoom(centred_square, 3.0)
        assert zoom.recomputations == 2

    def test_recomputes_on_frame_size_change(self, centred_square):
        zoom = ZoomTransform()
        zoom(centred_square, 2.0)
        zoom(np.zeros((50, 80, 3), dtype=np.uint8), 2.0)
        assert zoom.recomputations == 2
        assert zoom.last_size == (80, 50)

    def test_matches_apply_zoom(self, centred_square):
        zoom = ZoomTransform()
        assert np.array_equal(zoom(centred_square, 1.5), apply_zoom(centred_square, 1.5))

    def test_invalid_factor(self, centred_square):
        with pytest.raises(ValueError):
            ZoomTransform()(centred_square, 0)
