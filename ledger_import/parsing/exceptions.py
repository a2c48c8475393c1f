"""
Exceptions raised while reading bank statements.
"""


class StatementParseError(Exception):
    """
    Raised when a converter recognised a statement but could not parse it
    (broken XML, missing period header, ...).
    """

    def __init__(self, message: str, bank_code: str = None, file_name: str = None):
        self.bank_code = bank_code
        self.file_name = file_name

        details = []
        if file_name:
            details.append(f"File: {file_name}")
        if bank_code:
            details.append(f"Bank: {bank_code}")

        full_message = f"{message}\n" + "\n".join(details) if details else message
        super().__init__(full_message)


class UnsupportedFormatError(Exception):
    """Raised when no registered converter recognises a statement."""

    def __init__(self, file_name: str = None):
        self.file_name = file_name
        message = "Unsupported file format"
        if file_name:
            message = f"{message}: {file_name}"
        super().__init__(message)
