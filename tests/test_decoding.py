"""Unit tests for resistance decoding and formatting."""
import pytest

from resistor_lib.decoding import (
    NOT_A_RESISTOR,
    band_multiplier,
    bands_to_digits,
    compute_resistance,
    decode_bands,
    describe_bands,
    format_resistance,
)


class TestDecodeBands:

    @pytest.mark.parametrize("bands, digits, multiplier, ohms, text", [
        (["red", "black", "brown"], "20", 1, 200, "200Ω"),
        (["brown", "black", "red"], "10", 2, 1000, "1kΩ"),
        (["yellow", "violet", "green"], "47", 5, 4_700_000, "4.7MΩ"),
        (["brown", "black", "black"], "10", 0, 10, "10Ω"),
        (["orange", "orange", "orange"], "33", 3, 33_000, "33kΩ"),
    ])
    def test_standard_codes(self, bands, digits, multiplier, ohms, text):
        reading = decode_bands(bands)

        assert reading is not None
        assert reading.digits == digits
        assert reading.multiplier == multiplier
        assert reading.ohms == ohms
        assert reading.text == text
        assert reading.bands == tuple(bands)

    def test_all_but_last_band_are_digits(self):
        reading = decode_bands(["brown", "red", "orange", "yellow", "black"])
        assert reading.digits == "1234"
        assert reading.ohms == 1234
        assert reading.text == "1.234kΩ"

    @pytest.mark.parametrize("bands", [[], ["red"], ["red", "violet"], ["white", "white"]])
    def test_fewer_than_three_bands_is_not_a_resistor(self, bands):
        assert decode_bands(bands) is None
        assert compute_resistance(bands) is None
        assert describe_bands(bands) == NOT_A_RESISTOR

    def test_unknown_digit_band_contributes_nothing(self):
        reading = decode_bands(["red", "gold", "black", "brown"])
        assert reading.digits == "20"
        assert reading.ohms == 200

    def test_unknown_multiplier_defaults_to_zero(self):
        reading = decode_bands(["red", "red", "silver"])
        assert reading.multiplier == 0
        assert reading.ohms == 22

    def test_no_decodable_digit_is_not_a_resistor(self):
        assert decode_bands(["gold", "silver", "red"]) is None
        assert describe_bands(["gold", "silver", "red"]) == NOT_A_RESISTOR

    def test_leading_black_digit(self):
        assert compute_resistance(["black", "green", "red"]) == 500

    def test_describe_returns_text(self):
        assert describe_bands(["brown", "black", "red"]) == "1kΩ"


class TestHelpers:

    def test_bands_to_digits(self):
        assert bands_to_digits(["yellow", "violet"]) == "47"
        assert bands_to_digits([]) == ""
        assert bands_to_digits(["pink"]) == ""

    def test_band_multiplier(self):
        assert band_multiplier("green") == 5
        assert band_multiplier("gold") == 0


class TestFormatResistance:

    @pytest.mark.parametrize("ohms, expected", [
        (0, "0Ω"),
        (470, "470Ω"),
        (999, "999Ω"),
        (1000, "1kΩ"),
        (2200, "2.2kΩ"),
        (470_000, "470kΩ"),
        (999_999, "999.999kΩ"),
        (1_000_000, "1MΩ"),
        (10_000_000, "10MΩ"),
        (4_700_000, "4.7MΩ"),
    ])
    def test_si_prefixes(self, ohms, expected):
        assert format_resistance(ohms) == expected

    @pytest.mark.parametrize("ohms, expected", [
        (999_999.9, "1MΩ"),
        (999_999.4, "999.999kΩ"),
        (999_999.9 * 1000, "1000MΩ"),
        (999_999_999, "1000MΩ"),
    ])
    def test_rounding_at_unit_boundaries(self, ohms, expected):
        assert format_resistance(ohms) == expected

    def test_nine_significant_digits(self):
        bands = ["white"] * 9 + ["black"]
        assert compute_resistance(bands) == 999_999_999
        assert describe_bands(bands) == "1000MΩ"
