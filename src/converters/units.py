"""
Unit conversion for length, weight, temperature, speed and storage.

Linear categories convert through a scale factor relative to the category's
base unit. Temperature is non-linear and always converts through Celsius.
"""

import logging
import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .exceptions import ConversionError, UnknownCategoryError, UnknownUnitError, ValidationError

logger = logging.getLogger(__name__)

Number = Union[int, float]

DISPLAY_PRECISION = 6

# Plain decimal or exponent notation; no underscores, no inf/nan spellings
_NUMBER_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')


@dataclass(frozen=True)
class UnitCategory:
    """A closed set of units that convert into each other."""

    name: str
    base_unit: str
    units: tuple
    scales: Optional[Mapping[str, float]] = None
    to_pivot: Optional[Mapping[str, Callable[[float], float]]] = None
    from_pivot: Optional[Mapping[str, Callable[[float], float]]] = None

    @property
    def is_linear(self) -> bool:
        return self.scales is not None

    def has_unit(self, unit: str) -> bool:
        return unit in self.units


def _linear(name: str, base_unit: str, scales: Dict[str, float]) -> UnitCategory:
    for unit, scale in scales.items():
        if not (math.isfinite(scale) and scale > 0):
            raise ValueError(f"Scale for {name}/{unit} must be positive and finite")
    return UnitCategory(
        name=name,
        base_unit=base_unit,
        units=tuple(scales),
        scales=MappingProxyType(dict(scales)),
    )


def _temperature() -> UnitCategory:
    to_celsius = {
        'Celsius': lambda v: v,
        'Fahrenheit': lambda v: (v - 32) * 5 / 9,
        'Kelvin': lambda v: v - 273.15,
    }
    from_celsius = {
        'Celsius': lambda c: c,
        'Fahrenheit': lambda c: c * 9 / 5 + 32,
        'Kelvin': lambda c: c + 273.15,
    }
    return UnitCategory(
        name='temperature',
        base_unit='Celsius',
        units=tuple(to_celsius),
        to_pivot=MappingProxyType(to_celsius),
        from_pivot=MappingProxyType(from_celsius),
    )


UNIT_TABLE: Mapping[str, UnitCategory] = MappingProxyType({
    category.name: category for category in (
        _linear('length', 'Meters', {
            'Meters': 1,
            'Kilometers': 1000,
            'Centimeters': 0.01,
            'Millimeters': 0.001,
            'Miles': 1609.34,
            'Yards': 0.9144,
            'Feet': 0.3048,
            'Inches': 0.0254,
        }),
        _linear('weight', 'Kilograms', {
            'Kilograms': 1,
            'Grams': 0.001,
            'Milligrams': 0.000001,
            'Pounds': 0.453592,
            'Ounces': 0.0283495,
            'Tons': 1000,
        }),
        _temperature(),
        _linear('speed', 'Meters/sec', {
            'Meters/sec': 1,
            'Kilometers/hr': 0.277778,
            'Miles/hr': 0.44704,
            'Feet/sec': 0.3048,
            'Knots': 0.514444,
        }),
        _linear('storage', 'Bytes', {
            'Bytes': 1,
            'Kilobytes': 1024,
            'Megabytes': 1024 ** 2,
            'Gigabytes': 1024 ** 3,
            'Terabytes': 1024 ** 4,
        }),
    )
})


def get_category(category: str) -> UnitCategory:
    """Look up a category definition by name."""
    try:
        return UNIT_TABLE[category]
    except (KeyError, TypeError):
        raise UnknownCategoryError(category)


def list_categories() -> List[str]:
    return list(UNIT_TABLE)


def get_units(category: str) -> List[str]:
    return list(get_category(category).units)


def get_base_unit(category: str) -> str:
    return get_category(category).base_unit


def _check_value(value: Any) -> float:
    # bool is an int subclass but never a meaningful measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Value must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError:
        raise ValidationError("Value is too large to convert")
    if not math.isfinite(number):
        raise ValidationError(f"Value must be a finite number, got {number}")
    return number


def convert(category: str, value: Number, from_unit: str, to_unit: str) -> float:
    """
    Convert a value between two units of the same category.

    Args:
        category: Category name ('length', 'weight', 'temperature', 'speed', 'storage')
        value: Finite number expressed in from_unit
        from_unit: Source unit name, e.g. 'Meters'
        to_unit: Target unit name, e.g. 'Feet'

    Returns:
        The converted value at full precision

    Raises:
        UnknownCategoryError: If the category is not registered
        UnknownUnitError: If either unit is not part of the category
        ValidationError: If value is not a finite number
    """
    definition = get_category(category)
    for unit in (from_unit, to_unit):
        if not definition.has_unit(unit):
            raise UnknownUnitError(unit, category)
    value = _check_value(value)

    if from_unit == to_unit:
        return float(value)

    if definition.is_linear:
        result = value * definition.scales[from_unit] / definition.scales[to_unit]
    else:
        celsius = definition.to_pivot[from_unit](value)
        result = definition.from_pivot[to_unit](celsius)

    if not math.isfinite(result):
        raise ValidationError(f"Result of converting {value} {from_unit} to {to_unit} is out of range")

    logger.debug("Converted %s %s to %s %s (%s)", value, from_unit, result, to_unit, category)
    return float(result)


def format_result(value: float, places: int = DISPLAY_PRECISION) -> str:
    """Render a converted value with a fixed number of decimal places."""
    return f"{value:.{places}f}"


def parse_value(raw: Any) -> float:
    """Coerce a request value (number or plain decimal string) into a finite float."""
    if isinstance(raw, str):
        text = raw.strip()
        if not _NUMBER_RE.match(text):
            raise ValidationError(f"Value must be a number, got '{raw}'")
        raw = float(text)
    return _check_value(raw)


def convert_units(category: str, value: Any, from_unit: str, to_unit: str,
                  places: int = DISPLAY_PRECISION) -> Dict[str, Any]:
    """
    Convert a value and wrap the outcome for API responses.

    Returns:
        Dict with 'success' and either 'result'/'formatted' or 'error'/'error_type'
    """
    try:
        number = parse_value(value)
        result = convert(category, number, from_unit, to_unit)
        return {
            'success': True,
            'result': result,
            'formatted': format_result(result, places),
            'value': number,
            'category': category,
            'from_unit': from_unit,
            'to_unit': to_unit
        }
    except ConversionError as e:
        return {
            'success': False,
            'error': str(e),
            'error_type': type(e).__name__
        }


def describe_categories() -> List[Dict[str, Any]]:
    """List every category with its units, for the API."""
    return [
        {
            'category': definition.name,
            'base_unit': definition.base_unit,
            'units': list(definition.units),
            'linear': definition.is_linear
        }
        for definition in UNIT_TABLE.values()
    ]
