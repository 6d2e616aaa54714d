"""
Conversion tools: unit conversion and JSON/YAML/XML format conversion.
"""

from .exceptions import ConversionError, ValidationError, UnknownCategoryError, UnknownUnitError, ParseError
from .units import convert as convert_unit, convert_units, format_result, list_categories, get_units
from .formats import FormatConverter, parse, serialize, convert_format, validate_format, detect_format
from .tree import Null, Scalar, Sequence, Mapping

__all__ = [
    'ConversionError',
    'ValidationError',
    'UnknownCategoryError',
    'UnknownUnitError',
    'ParseError',
    'convert_unit',
    'convert_units',
    'format_result',
    'list_categories',
    'get_units',
    'FormatConverter',
    'parse',
    'serialize',
    'convert_format',
    'validate_format',
    'detect_format',
    'Null',
    'Scalar',
    'Sequence',
    'Mapping'
]
