"""
Decoding Module - Resistance Value from Colour Bands
===================================================

Functions for turning an ordered band sequence into a resistance value and
an SI-prefixed display string.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .color import BAND_VALUES

NOT_A_RESISTOR = "not a resistor"

MIN_BANDS = 3

# (threshold, divisor, unit), checked in order
UNIT_SCALES = (
    (1_000_000, 1_000_000, "MΩ"),
    (1_000, 1_000, "kΩ"),
)


@dataclass(frozen=True)
class ResistanceReading:
    """Decoded resistance for one frame."""
    bands: Tuple[str, ...]
    digits: str
    multiplier: int
    ohms: int
    text: str


def bands_to_digits(bands):
    """
    Concatenate the digit values of the significant bands.

    Names missing from the band table contribute nothing.

    Parameters
    ----------
    bands : list of str
        Significant-digit band names, in order.

    Returns
    -------
    str
        Digit string, possibly empty.
    """
    return "".join(str(BAND_VALUES[b]) for b in bands if b in BAND_VALUES)


def band_multiplier(name):
    """Power-of-ten exponent encoded by a multiplier band (0 if unknown)."""
    return BAND_VALUES.get(name, 0)


def compute_resistance(bands):
    """
    Compute the resistance in ohms from a band sequence.

    All bands but the last are significant digits; the last band is the
    power-of-ten multiplier.

    Parameters
    ----------
    bands : list of str
        Ordered band names.

    Returns
    -------
    int or None
        Resistance in ohms, or None if fewer than 3 bands were given or
        no significant digit could be decoded.
    """
    if len(bands) < MIN_BANDS:
        return None

    digits = bands_to_digits(bands[:-1])
    if not digits:
        return None

    return int(digits) * 10 ** band_multiplier(bands[-1])


def format_resistance(ohms):
    """
    Format a resistance with an SI prefix.

    Examples: 200 -> "200Ω", 1000 -> "1kΩ", 4_700_000 -> "4.7MΩ".

    A value that rounds up to 1000 of its unit moves to the next larger
    unit, so 999_999.9 reads "1MΩ" rather than "1000kΩ". MΩ is the
    largest unit, so 999_999_999 still reads "1000MΩ".
    """
    for i, (threshold, divisor, unit) in enumerate(UNIT_SCALES):
        if ohms >= threshold:
            if i > 0 and round(ohms / divisor, 3) >= 1000:
                _, divisor, unit = UNIT_SCALES[i - 1]
            scaled = f"{ohms / divisor:.3f}".rstrip("0").rstrip(".")
            return f"{scaled}{unit}"
    return f"{int(ohms)}Ω"


def decode_bands(bands) -> Optional[ResistanceReading]:
    """
    Decode a band sequence into a ResistanceReading.

    Parameters
    ----------
    bands : list of str
        Ordered band names, left to right.

    Returns
    -------
    ResistanceReading or None
        None when the sequence does not describe a resistor.
    """
    ohms = compute_resistance(bands)
    if ohms is None:
        return None

    return ResistanceReading(
        bands=tuple(bands),
        digits=bands_to_digits(bands[:-1]),
        multiplier=band_multiplier(bands[-1]),
        ohms=ohms,
        text=format_resistance(ohms),
    )


def describe_bands(bands):
    """Return the formatted value for a band sequence, or NOT_A_RESISTOR."""
    reading = decode_bands(bands)
    return reading.text if reading is not None else NOT_A_RESISTOR
