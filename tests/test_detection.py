"""Unit tests for the resistor locator."""
import numpy as np
import pytest

from resistor_lib.contours import (
    CandidateRegion,
    filter_contours_by_area,
    find_external_contours,
    select_candidate,
)
from resistor_lib.detection import get_locator_params, locate_resistor, preprocess_frame


def rect_contour(x, y, w, h):
    """Closed rectangular contour whose area is exactly w * h."""
    pts = [[x, y], [x + w, y], [x + w, y + h], [x, y + h]]
    return np.array(pts, dtype=np.int32).reshape(-1, 1, 2)


class TestSelectCandidate:

    def test_largest_qualifying_contour_wins(self):
        small = rect_contour(0, 0, 40, 50)      # 2000
        large = rect_contour(100, 100, 60, 50)  # 3000

        candidate = select_candidate([small, large])

        assert candidate is not None
        assert candidate.area == pytest.approx(3000)
        assert candidate.bounding_box == (100, 100, 61, 51)

    def test_order_does_not_matter_for_distinct_areas(self):
        small = rect_contour(0, 0, 40, 50)
        large = rect_contour(100, 100, 60, 50)
        assert select_candidate([large, small]).area == pytest.approx(3000)

    def test_tie_keeps_first_contour(self):
        first = rect_contour(0, 0, 50, 40)
        second = rect_contour(200, 200, 40, 50)

        candidate = select_candidate([first, second])

        assert (candidate.x, candidate.y) == (0, 0)

    def test_no_candidate_outside_area_band(self):
        tiny = rect_contour(0, 0, 10, 10)        # 100
        huge = rect_contour(0, 0, 300, 300)      # 90000
        assert select_candidate([tiny, huge]) is None

    def test_bounds_are_exclusive(self):
        at_min = rect_contour(0, 0, 50, 20)      # 1000
        at_max = rect_contour(0, 0, 250, 200)    # 50000
        assert select_candidate([at_min, at_max]) is None

    def test_oversized_contour_ignored_in_favour_of_smaller(self):
        huge = rect_contour(0, 0, 300, 300)
        ok = rect_contour(10, 10, 50, 50)
        assert select_candidate([huge, ok]).area == pytest.approx(2500)

    def test_empty_contour_list(self):
        assert select_candidate([]) is None

    def test_custom_area_band(self):
        c = rect_contour(0, 0, 10, 10)
        assert select_candidate([c], min_area=50, max_area=200).area == pytest.approx(100)

    def test_filter_keeps_discovery_order(self):
        a = rect_contour(0, 0, 40, 50)
        b = rect_contour(0, 0, 10, 10)
        c = rect_contour(0, 0, 60, 50)
        kept = filter_contours_by_area([a, b, c])
        assert [area for _, area in kept] == [pytest.approx(2000), pytest.approx(3000)]


class TestCandidateRegion:

    def test_crop_returns_roi_view(self):
        frame = np.arange(100 * 100 * 3, dtype=np.uint8).reshape(100, 100, 3)
        region = CandidateRegion(x=10, y=20, width=30, height=5, area=150.0)
        roi = region.crop(frame)
        assert roi.shape == (5, 30, 3)
        assert np.array_equal(roi, frame[20:25, 10:40])


class TestPreprocess:

    def test_outputs_have_frame_size(self, resistor_frame):
        gray, blurred, edges = preprocess_frame(resistor_frame)
        assert gray.shape == resistor_frame.shape[:2]
        assert blurred.shape == gray.shape
        assert edges.shape == gray.shape
        assert edges.max() == 255

    def test_blank_frame_has_no_edges(self, blank_frame):
        _, _, edges = preprocess_frame(blank_frame)
        assert edges.max() == 0

    def test_accepts_four_channel_frames(self, make_frame):
        _, _, edges = preprocess_frame(make_frame(["red", "green"], channels=4))
        assert edges.max() == 255

    @pytest.mark.parametrize("kernel", [0, 4, -3])
    def test_rejects_bad_kernel(self, blank_frame, kernel):
        with pytest.raises(ValueError):
            preprocess_frame(blank_frame, blur_kernel=kernel)

    def test_find_external_contours_rejects_colour_image(self, blank_frame):
        with pytest.raises(ValueError):
            find_external_contours(blank_frame)


class TestLocateResistor:

    def test_finds_resistor_body(self, resistor_frame):
        candidate = locate_resistor(resistor_frame)

        # Body: three 60px stripes inside a 10px border, at (100, 100)
        assert candidate is not None
        assert abs(candidate.x - 100) <= 2
        assert abs(candidate.y - 100) <= 2
        assert abs(candidate.width - 200) <= 4
        assert abs(candidate.height - 60) <= 4
        assert 1000 < candidate.area < 50000

    def test_body_is_one_external_contour(self, resistor_frame):
        _, _, edges = preprocess_frame(resistor_frame)
        contours = find_external_contours(edges)
        assert len(filter_contours_by_area(contours)) == 1

    def test_bare_stripes_may_split_into_parts(self, make_frame):
        # Without a uniform body outline the edge at each stripe junction
        # can break, and only the largest part is returned.
        frame = make_frame(["yellow", "violet", "green"], border=0)

        candidate = locate_resistor(frame)

        assert candidate is not None
        assert candidate.width < 3 * 60

    def test_blank_frame_has_no_candidate(self, blank_frame):
        assert locate_resistor(blank_frame) is None

    def test_body_too_small_for_area_band(self, blank_frame):
        blank_frame[100:110, 100:110] = 255
        assert locate_resistor(blank_frame) is None

    def test_draws_rectangle_on_output(self, resistor_frame):
        output = np.zeros_like(resistor_frame)
        candidate = locate_resistor(resistor_frame, output=output)

        x, y = candidate.x, candidate.y
        assert tuple(output[y, x + candidate.width // 2]) == (0, 255, 0)
        # Input frame untouched
        assert tuple(resistor_frame[0, 0]) == (0, 0, 0)

    def test_no_drawing_without_candidate(self, blank_frame):
        output = blank_frame.copy()
        locate_resistor(blank_frame, output=output)
        assert output.max() == 0


class TestLocatorParams:

    def test_defaults(self):
        assert get_locator_params(None) == {
            "blur_kernel": 5,
            "canny_low": 30,
            "canny_high": 100,
            "min_area": 1000,
            "max_area": 50000,
        }

    def test_overrides(self):
        params = get_locator_params({"locator": {"canny_low": 50, "max_area": 80000}})
        assert params["canny_low"] == 50
        assert params["max_area"] == 80000
        assert params["canny_high"] == 100
