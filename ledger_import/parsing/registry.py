"""
Converter Registry

Holds the ordered list of bank converters and dispatches raw statement
content to the first one that recognises it.
"""
from typing import List, Optional, Sequence

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import ParseResult
from .base import BankConverter
from .banks import CONVERTERS

logger = get_logger(__name__)


class ConverterRegistry:
    """
    Registry of bank statement converters.

    Detection walks the converters in registration order and stops at the
    first one whose ``detect`` returns True.
    """

    def __init__(self, converters: Sequence[BankConverter]):
        self.converters: List[BankConverter] = list(converters)

    def detect(self, content: str, file_name: str) -> Optional[BankConverter]:
        """
        Detect the converter for the given file content.

        Returns:
            First matching converter, or None if no match
        """
        for converter in self.converters:
            if converter.detect(content, file_name):
                logger.debug(f"Detected bank: {converter.bank_code}", file_name=file_name)
                return converter
        return None

    def parse(self, content: str, file_name: str) -> Optional[ParseResult]:
        """
        Parse a statement with the detected converter.

        Returns None when the format is not supported. Errors raised by the
        converter (StatementParseError) are propagated to the caller.
        """
        converter = self.detect(content, file_name)
        if converter is None:
            logger.info("No converter matched statement", file_name=file_name)
            return None
        try:
            return converter.parse(content)
        except Exception as e:
            logger.error(f"Parse Error in {converter.__class__.__name__}: {e}", exc_info=True, file_name=file_name)
            raise

    def get_by_code(self, bank_code: str) -> Optional[BankConverter]:
        """Get converter by its 6-char bank code."""
        for converter in self.converters:
            if converter.bank_code == bank_code:
                return converter
        return None

    def list_banks(self) -> List[dict]:
        """Supported banks, for display."""
        return [c.describe() for c in self.converters]


default_registry = ConverterRegistry(CONVERTERS)


def detect_bank(content: str, file_name: str) -> Optional[BankConverter]:
    return default_registry.detect(content, file_name)


def parse_statement(content: str, file_name: str) -> Optional[ParseResult]:
    return default_registry.parse(content, file_name)


def get_converter_by_code(bank_code: str) -> Optional[BankConverter]:
    return default_registry.get_by_code(bank_code)


def get_supported_banks() -> List[dict]:
    return default_registry.list_banks()
