"""
Base class for bank statement converters.

A converter sniffs raw file content (``detect``) and turns it into a
normalized ``ParseResult`` (``parse``). Converters hold no state; the
registry keeps one instance of each.
"""
from abc import ABC, abstractmethod
from typing import List

from ledger_import.common.models import ParseResult


class BankConverter(ABC):
    """
    Abstract base class for all bank converters.

    Attributes:
        bank_code: 6-char SWIFT prefix of the bank (e.g. "INSJAM")
        bank_name: Human-readable bank name
        supported_formats: File extensions the converter accepts
    """
    bank_code: str = ''
    bank_name: str = ''
    supported_formats: List[str] = []

    @abstractmethod
    def detect(self, content: str, file_name: str) -> bool:
        """
        Returns True if this converter can handle the given file content.
        """
        raise NotImplementedError

    @abstractmethod
    def parse(self, content: str) -> ParseResult:
        """
        Parses file content. Raises StatementParseError on malformed input.
        """
        raise NotImplementedError

    def describe(self) -> dict:
        return {
            'code': self.bank_code,
            'name': self.bank_name,
            'formats': list(self.supported_formats),
        }

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.bank_code}>"
