"""Physical quantity normalization.

Mass is expressed in grams, volume in milliliters. Count units and unknown
units pass through unchanged.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Final

from productrecon.domain.model import QuantityDimension

# unit alias -> (factor to base unit, dimension)
_UNITS: Final[dict[str, tuple[float, QuantityDimension]]] = {
    "g": (1.0, QuantityDimension.MASS),
    "gr": (1.0, QuantityDimension.MASS),
    "gram": (1.0, QuantityDimension.MASS),
    "grams": (1.0, QuantityDimension.MASS),
    "kg": (1000.0, QuantityDimension.MASS),
    "kilo": (1000.0, QuantityDimension.MASS),
    "kilogram": (1000.0, QuantityDimension.MASS),
    "kilograms": (1000.0, QuantityDimension.MASS),
    "oz": (28.3495, QuantityDimension.MASS),
    "ounce": (28.3495, QuantityDimension.MASS),
    "ounces": (28.3495, QuantityDimension.MASS),
    "lb": (453.592, QuantityDimension.MASS),
    "lbs": (453.592, QuantityDimension.MASS),
    "pound": (453.592, QuantityDimension.MASS),
    "pounds": (453.592, QuantityDimension.MASS),
    "ml": (1.0, QuantityDimension.VOLUME),
    "milliliter": (1.0, QuantityDimension.VOLUME),
    "milliliters": (1.0, QuantityDimension.VOLUME),
    "millilitre": (1.0, QuantityDimension.VOLUME),
    "millilitres": (1.0, QuantityDimension.VOLUME),
    "l": (1000.0, QuantityDimension.VOLUME),
    "liter": (1000.0, QuantityDimension.VOLUME),
    "liters": (1000.0, QuantityDimension.VOLUME),
    "litre": (1000.0, QuantityDimension.VOLUME),
    "litres": (1000.0, QuantityDimension.VOLUME),
    "fl oz": (29.5735, QuantityDimension.VOLUME),
    "floz": (29.5735, QuantityDimension.VOLUME),
    "fluid ounce": (29.5735, QuantityDimension.VOLUME),
    "fluid ounces": (29.5735, QuantityDimension.VOLUME),
    "cup": (236.588, QuantityDimension.VOLUME),
    "cups": (236.588, QuantityDimension.VOLUME),
    "pt": (473.176, QuantityDimension.VOLUME),
    "pint": (473.176, QuantityDimension.VOLUME),
    "pints": (473.176, QuantityDimension.VOLUME),
    "qt": (946.353, QuantityDimension.VOLUME),
    "quart": (946.353, QuantityDimension.VOLUME),
    "quarts": (946.353, QuantityDimension.VOLUME),
    "gal": (3785.41, QuantityDimension.VOLUME),
    "gallon": (3785.41, QuantityDimension.VOLUME),
    "gallons": (3785.41, QuantityDimension.VOLUME),
    "ct": (1.0, QuantityDimension.COUNT),
    "count": (1.0, QuantityDimension.COUNT),
    "each": (1.0, QuantityDimension.COUNT),
    "ea": (1.0, QuantityDimension.COUNT),
    "units": (1.0, QuantityDimension.COUNT),
    "pcs": (1.0, QuantityDimension.COUNT),
    "pieces": (1.0, QuantityDimension.COUNT),
}

_QUANTITY_TEXT = re.compile(
    r"(?P<value>\d+(?:[.,]\d+)?)\s*(?P<unit>fl\.?[\s-]*oz|fluid\s+ounces?|[a-z]+)",
    re.IGNORECASE,
)
_UNIT_SEPARATORS = re.compile(r"[\s.\-]+")


@dataclass(frozen=True, slots=True)
class Quantity:
    value: float
    unit: str | None

    @property
    def dimension(self) -> QuantityDimension:
        return unit_dimension(self.unit)

    def normalized(self) -> float:
        return normalize_quantity(self.value, self.unit)


def canonical_unit(unit: str | None) -> str | None:
    """Map a unit spelling (``"FL-OZ"``, ``"Fl. oz"``) onto its alias key."""

    if unit is None:
        return None
    text = _UNIT_SEPARATORS.sub(" ", unit.strip().lower()).strip()
    if text in _UNITS:
        return text
    compact = text.replace(" ", "")
    if compact in _UNITS:
        return compact
    return text or None


def unit_dimension(unit: str | None) -> QuantityDimension:
    key = canonical_unit(unit)
    if key is None or key not in _UNITS:
        return QuantityDimension.UNKNOWN
    return _UNITS[key][1]


def normalize_quantity(value: float, unit: str | None) -> float:
    """Convert ``value`` to grams or milliliters; pass through other units."""

    key = canonical_unit(unit)
    if key is None or key not in _UNITS:
        return value
    factor, _dimension = _UNITS[key]
    return value * factor


def parse_quantity_text(text: str | None) -> Quantity | None:
    """Parse the first ``<number> <unit>`` pair in free text such as ``"1.5 L bottle"``."""

    if not text:
        return None
    match = _QUANTITY_TEXT.search(text)
    if match is None:
        return None
    try:
        value = float(match.group("value").replace(",", "."))
    except ValueError:
        return None
    return Quantity(value=value, unit=canonical_unit(match.group("unit")))


def quantity_matches(
    imported_quantity: float | None,
    imported_unit: str | None,
    candidate_text: str | None,
    *,
    tolerance: float = 0.05,
) -> bool:
    """Compare an imported quantity with a catalog quantity string.

    Both sides are normalized; they match when they differ by at most
    ``tolerance`` relative to the imported value.
    """

    if imported_quantity is None:
        return False
    candidate = parse_quantity_text(candidate_text)
    if candidate is None:
        return False

    imported_base = normalize_quantity(imported_quantity, imported_unit)
    candidate_base = candidate.normalized()
    if not (math.isfinite(imported_base) and math.isfinite(candidate_base)):
        return False
    if imported_base == 0 or candidate_base == 0:
        return False
    return abs(imported_base - candidate_base) <= abs(imported_base) * tolerance
