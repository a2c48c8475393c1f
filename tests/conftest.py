"""
Shared fixtures: sample statements, accounts and a transaction factory.
"""
import pytest

from ledger_import.common.models import Account, Transaction
from ledger_import.core.history import ImportHistory
from ledger_import.core.importer import StatementImporter
from ledger_import.core.ledger import AccountDirectory, TransactionStore


# =============================================================================
# SAMPLE STATEMENTS
# =============================================================================

INSJAM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<statement>
  <AccountNumber>2052822145661001</AccountNumber>
  <Currency>AMD</Currency>
  <Period>[01/03/2024] - [31/03/2024]</Period>
  <Operations>
    <Operation>
      <n-n>1</n-n>
      <Date>15/03/2024</Date>
      <Income>1,234.50</Income>
      <Expense></Expense>
      <Receiver-Payer>ACME CORPORATION LLC PAYROLL DEPARTMENT YEREVAN</Receiver-Payer>
      <Details>Salary for March</Details>
    </Operation>
    <Operation>
      <n-n>2</n-n>
      <Date>20/03/2024</Date>
      <Income></Income>
      <Expense>12,000.00</Expense>
      <Receiver-Payer>Yerevan City</Receiver-Payer>
      <Details>Groceries</Details>
    </Operation>
  </Operations>
</statement>
"""

RZBMRU_CSV = (
    "Дата и время;Дата;Номер документа;Приход;Расход;Валюта;Описание;Номер карты\n"
    "15.03.2024 12:30;15.03.2024;DOC1;0;500,25;RUB;Coffee shop;\n"
    "16.03.2024 09:00;16.03.2024;;1 500,00;0;RUB;\"Salary; March\";*1234\n"
    "short;row\n"
    "\n"
    "14.03.2024 10:00;14.03.2024;DOC3;0;0;RUB;Zero amount;\n"
)

RZBMRU_CSV_EN = (
    "Date and time;Date;Document number;Incomes;Expenses;Currency;Details;Card number\r\n"
    "01.04.2024 08:15;01.04.2024;A-77;0;2 345,10;RUB;Taxi   ride  home;*9876\r\n"
)


@pytest.fixture
def insjam_xml():
    return INSJAM_XML


@pytest.fixture
def rzbmru_csv():
    return RZBMRU_CSV


@pytest.fixture
def rzbmru_csv_en():
    return RZBMRU_CSV_EN


# =============================================================================
# LEDGER
# =============================================================================

@pytest.fixture
def make_tr():
    """Factory for ledger transactions with sensible defaults."""
    counter = {'n': 0}

    def factory(**values):
        counter['n'] += 1
        values.setdefault('id', f"tr-{counter['n']}")
        values.setdefault('date', '2024-03-15')
        values.setdefault('income_account', 'acc-1')
        values.setdefault('outcome_account', 'acc-1')
        values.setdefault('income_instrument', 1)
        values.setdefault('outcome_instrument', 1)
        return Transaction(**values)

    return factory


@pytest.fixture
def target_account():
    return Account(
        id='acc-1',
        user=42,
        title='Inecobank AMD',
        instrument=8,
        swift_code='INSJAM',
        bank_account_number='2052822145661001',
    )


@pytest.fixture
def accounts(target_account):
    return AccountDirectory([
        target_account,
        Account(id='acc-2', user=42, title='Raiffeisen RUB', instrument=1, swift_code='rzbmru'),
    ])


@pytest.fixture
def ledger():
    return TransactionStore()


@pytest.fixture
def history():
    return ImportHistory()


@pytest.fixture
def importer(ledger, accounts, history):
    return StatementImporter(ledger, accounts, history)
