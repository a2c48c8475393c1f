"""
Bank statement parsing.

- Converter base class and exceptions
- Per-bank converters (Inecobank XML, Raiffeisen CSV)
- Registry with first-match-wins detection
"""

# Base classes
from .base import BankConverter
from .exceptions import StatementParseError, UnsupportedFormatError

# Banks
from .banks import CONVERTERS, InsjamConverter, RzbmruConverter

# Registry
from .registry import (
    ConverterRegistry,
    default_registry,
    detect_bank,
    parse_statement,
    get_converter_by_code,
    get_supported_banks,
)

__all__ = [
    # Base
    'BankConverter',
    'StatementParseError',
    'UnsupportedFormatError',
    # Banks
    'CONVERTERS',
    'InsjamConverter',
    'RzbmruConverter',
    # Registry
    'ConverterRegistry',
    'default_registry',
    'detect_bank',
    'parse_statement',
    'get_converter_by_code',
    'get_supported_banks',
]
