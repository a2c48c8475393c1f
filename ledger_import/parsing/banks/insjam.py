import re
import xml.etree.ElementTree as ET

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import ParseResult, ParsedTransaction
from ..base import BankConverter
from ..exceptions import StatementParseError

logger = get_logger(__name__)

# [15/03/2024] - [31/03/2024]
PERIOD_PATTERN = re.compile(r"\[(\d{2}/\d{2}/\d{4})\] - \[(\d{2}/\d{2}/\d{4})\]")

# OFX NAME / MEMO field limits
PAYEE_MAX_LENGTH = 32
MEMO_MAX_LENGTH = 255


def parse_date(date_str: str) -> str:
    """DD/MM/YYYY -> YYYY-MM-DD"""
    parts = date_str.strip().split('/')
    if len(parts) != 3:
        raise StatementParseError(f"Invalid date: {date_str}", bank_code=InsjamConverter.bank_code)
    day, month, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def parse_period(period_str: str) -> tuple[str, str]:
    match = PERIOD_PATTERN.search(period_str)
    if not match:
        raise StatementParseError(f"Invalid period format: {period_str}", bank_code=InsjamConverter.bank_code)
    return parse_date(match.group(1)), parse_date(match.group(2))


def parse_amount(amount_str: str) -> float:
    """'1,234.50' -> 1234.5; empty -> 0.0"""
    cleaned = amount_str.replace(',', '').strip()
    if not cleaned:
        return 0.0
    try:
        return float(cleaned)
    except ValueError:
        raise StatementParseError(f"Invalid amount: {amount_str}", bank_code=InsjamConverter.bank_code)


def get_text(parent: ET.Element, tag: str) -> str:
    """Text of the first descendant named ``tag``, or ''."""
    node = parent.find(f".//{tag}")
    if node is None or node.text is None:
        return ''
    return node.text


class InsjamConverter(BankConverter):
    """
    Inecobank (Armenia) XML statement.

        <statement>
          <AccountNumber>2052...</AccountNumber>
          <Currency>AMD</Currency>
          <Period>[01/03/2024] - [31/03/2024]</Period>
          <Operations>
            <Operation>
              <n-n>1</n-n><Date>15/03/2024</Date>
              <Income>1,234.50</Income><Expense></Expense>
              <Receiver-Payer>...</Receiver-Payer><Details>...</Details>
            </Operation>
          </Operations>
        </statement>
    """
    bank_code = 'INSJAM'
    bank_name = 'Inecobank (Armenia)'
    supported_formats = ['xml']

    def detect(self, content: str, file_name: str) -> bool:
        return (
            '<statement' in content
            and '<AccountNumber>' in content
            and '<Operations>' in content
        )

    def parse(self, content: str) -> ParseResult:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.error(f"XML parse error: {e}", bank_code=self.bank_code)
            raise StatementParseError("Invalid XML format", bank_code=self.bank_code) from e

        account_number = get_text(root, 'AccountNumber')
        currency = get_text(root, 'Currency') or 'USD'
        date_start, date_end = parse_period(get_text(root, 'Period'))

        transactions = []
        for op in root.findall('.//Operations//Operation'):
            income = parse_amount(get_text(op, 'Income'))
            expense = parse_amount(get_text(op, 'Expense'))

            transactions.append(ParsedTransaction(
                fit_id=get_text(op, 'n-n'),
                date=parse_date(get_text(op, 'Date')),
                amount=income if income > 0 else -expense,
                currency=currency,
                payee=get_text(op, 'Receiver-Payer')[:PAYEE_MAX_LENGTH],
                memo=get_text(op, 'Details')[:MEMO_MAX_LENGTH],
                account_number=account_number,
            ))

        logger.debug("Parsed XML statement", bank_code=self.bank_code, count=len(transactions))
        return ParseResult(
            bank_code=self.bank_code,
            account_number=account_number,
            currency=currency,
            date_start=date_start,
            date_end=date_end,
            transactions=transactions,
        )
