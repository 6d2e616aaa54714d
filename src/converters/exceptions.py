"""
Custom exceptions for the conversion tools.
"""

from typing import Optional


class ConversionError(ValueError):
    """Base exception for all conversion errors."""
    pass


class ValidationError(ConversionError):
    """Raised when an input value or format selector is invalid."""
    pass


class UnknownCategoryError(ConversionError):
    """Raised when a unit category is not registered."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown unit category: {category}")


class UnknownUnitError(ConversionError):
    """Raised when a unit does not belong to the requested category."""

    def __init__(self, unit: str, category: str):
        self.unit = unit
        self.category = category
        super().__init__(f"Unknown unit '{unit}' for category '{category}'")


class ParseError(ConversionError):
    """Raised when a JSON, YAML or XML document cannot be parsed."""

    def __init__(self, format_name: str, message: str,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.format = format_name
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Invalid {format_name.upper()}: {message}")

    def to_dict(self):
        """Convert to dictionary for API responses."""
        return {
            'format': self.format,
            'message': self.message,
            'line': self.line,
            'column': self.column
        }
