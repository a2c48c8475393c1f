import re

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import ParseResult, ParsedTransaction
from ..base import BankConverter
from ..exceptions import StatementParseError

logger = get_logger(__name__)

# Header fragments seen in English and Russian exports
HEADER_MARKERS = ('date and time', 'дата и время', 'дата;номер документа')

# Leading numeric part, like JS parseFloat
NUMBER_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

DATE_PATTERN = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")

MIN_FIELDS = 7
PAYEE_MAX_LENGTH = 32


def parse_localized_number(value: str) -> float:
    """
    Parses numbers like "1 234,50" (space thousands, comma decimal).
    Blank or unparsable values yield 0.0.
    """
    if not value or not value.strip():
        return 0.0
    cleaned = re.sub(r"\s", "", value).replace(',', '.', 1)
    match = NUMBER_PATTERN.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def parse_localized_date(value: str) -> str:
    """DD.MM.YYYY[ HH:MM[:SS]] -> YYYY-MM-DD"""
    date_part = value.strip().split(' ')[0]
    match = DATE_PATTERN.match(date_part)
    if not match:
        raise StatementParseError(f"Invalid date: {value}", bank_code=RzbmruConverter.bank_code)
    day, month, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def split_csv_line(line: str, delimiter: str = ';') -> list[str]:
    """
    Splits a CSV line on ``delimiter``. A double quote toggles quoted mode,
    in which delimiters are kept as text; quotes themselves are dropped.
    """
    result = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            result.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
    result.append(''.join(current).strip())

    return result


def extract_payee(memo: str) -> str:
    cleaned = re.sub(r"\s+", " ", memo).strip()
    return cleaned[:PAYEE_MAX_LENGTH]


class RzbmruConverter(BankConverter):
    """
    Raiffeisen Bank (Russia) CSV statement.

    Columns are positional regardless of header language:
        0 date and time, 1 date, 2 document number, 3 income,
        4 expense, 5 currency, 6 details, 7 card number
    """
    bank_code = 'RZBMRU'
    bank_name = 'Raiffeisen Bank (Russia)'
    supported_formats = ['csv']

    def detect(self, content: str, file_name: str) -> bool:
        first_line = content.split('\n')[0].lower()
        if any(marker in first_line for marker in HEADER_MARKERS):
            return True
        return 'дата' in first_line and 'приход' in first_line

    def parse(self, content: str) -> ParseResult:
        lines = content.split('\n')
        transactions = []

        for i, raw_line in enumerate(lines[1:], start=1):
            line = raw_line.strip()
            if not line:
                continue

            fields = split_csv_line(line, ';')
            if len(fields) < MIN_FIELDS:
                logger.debug("Skipping short CSV row", line=i, fields=len(fields))
                continue

            date_time_str = fields[0]
            date_str = fields[1]
            doc_num = fields[2]
            income = parse_localized_number(fields[3])
            expense = parse_localized_number(fields[4])
            currency = fields[5] or 'RUB'
            memo = fields[6] or ''

            amount = income if income > 0 else -expense
            if amount == 0:
                continue

            transactions.append(ParsedTransaction(
                fit_id=doc_num or f"{date_time_str}_{i}",
                date=parse_localized_date(date_str or date_time_str),
                amount=amount,
                currency=currency,
                payee=extract_payee(memo),
                memo=memo,
            ))

        dates = sorted(t.date for t in transactions)
        logger.debug("Parsed CSV statement", bank_code=self.bank_code, count=len(transactions))
        return ParseResult(
            bank_code=self.bank_code,
            account_number='',  # the export does not carry the account number
            currency='RUB',
            date_start=dates[0] if dates else '',
            date_end=dates[-1] if dates else '',
            transactions=transactions,
        )
