"""Unit conversion between compatible catalog units."""
from typing import Dict, Optional

# Multiplicative factor to the canonical base unit (kg for mass, litre for volume)
UNIT_CONVERSION_FACTORS: Dict[str, float] = {
    "kg": 1,
    "litre": 1,
    "gm": 0.001,
    "ml": 0.001,
}


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Lower-case and trim a unit name; blank or non-text units become None."""
    if not isinstance(unit, str):
        return None
    unit = unit.strip().lower()
    return unit or None


def conversion_factor(unit: Optional[str]) -> Optional[float]:
    """Return the factor to the canonical base unit, or None if unsupported."""
    unit = normalize_unit(unit)
    if unit is None:
        return None
    return UNIT_CONVERSION_FACTORS.get(unit)


def convert_quantity(quantity: float, from_unit: Optional[str], to_unit: Optional[str]) -> float:
    """
    Express a quantity given in `from_unit` in terms of `to_unit`.

    The quantity passes through unchanged when the units are equal or either
    one has no known factor.
    """
    source, target = normalize_unit(from_unit), normalize_unit(to_unit)
    if source is None or target is None or source == target:
        return quantity

    source_factor = conversion_factor(source)
    target_factor = conversion_factor(target)
    if source_factor is None or target_factor is None:
        return quantity

    ratio = source_factor / target_factor
    if ratio <= 0:
        return quantity
    return quantity * ratio
