from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from ledger_import.common.models import ParseResult, ParsedTransaction


def _ofx_date(iso_date: str, suffix: str = "000000") -> str:
    return iso_date.replace('-', '') + suffix


class OFXWriter:
    """
    Writes a parsed statement as an OFX 1.02 (SGML) bank statement.
    Bank and account ids default to the statement's own.
    """

    def __init__(self, bank_id: Optional[str] = None, acct_id: Optional[str] = None, currency: Optional[str] = None):
        self.bank_id = bank_id
        self.acct_id = acct_id
        self.currency = currency

    def generate(self, result: ParseResult) -> str:
        return self._build_header() + self._build_body(result)

    def _build_header(self) -> str:
        return """OFXHEADER:100
DATA:OFXSGML
VERSION:102
SECURITY:NONE
ENCODING:UTF-8
CHARSET:NONE
COMPRESSION:NONE
OLDFILEUID:NONE
NEWFILEUID:NONE

"""

    def _build_body(self, result: ParseResult) -> str:
        now_str = datetime.now().strftime("%Y%m%d%H%M%S")
        today = datetime.now().strftime("%Y-%m-%d")
        bank_id = self.bank_id or result.bank_code
        acct_id = self.acct_id or result.account_number or "00000"
        currency = self.currency or result.currency

        out = []
        out.append("<OFX>")
        out.append("  <SIGNONMSGSRSV1>")
        out.append("    <SONRS>")
        out.append("      <STATUS>")
        out.append("        <CODE>0</CODE>")
        out.append("        <SEVERITY>INFO</SEVERITY>")
        out.append("      </STATUS>")
        out.append(f"      <DTSERVER>{now_str}</DTSERVER>")
        out.append("      <LANGUAGE>ENG</LANGUAGE>")
        out.append("    </SONRS>")
        out.append("  </SIGNONMSGSRSV1>")
        out.append("  <BANKMSGSRSV1>")
        out.append("    <STMTTRNRS>")
        out.append("      <TRNUID>1001</TRNUID>")
        out.append("      <STATUS>")
        out.append("        <CODE>0</CODE>")
        out.append("        <SEVERITY>INFO</SEVERITY>")
        out.append("      </STATUS>")
        out.append("      <STMTRS>")
        out.append(f"        <CURDEF>{escape(currency)}</CURDEF>")
        out.append("        <BANKACCTFROM>")
        out.append(f"          <BANKID>{escape(bank_id)}</BANKID>")
        out.append(f"          <ACCTID>{escape(acct_id)}</ACCTID>")
        out.append("          <ACCTTYPE>CHECKING</ACCTTYPE>")
        out.append("        </BANKACCTFROM>")
        out.append("        <BANKTRANLIST>")
        out.append(f"          <DTSTART>{_ofx_date(result.date_start or today)}</DTSTART>")
        out.append(f"          <DTEND>{_ofx_date(result.date_end or today, '235959')}</DTEND>")

        for txn in result.transactions:
            out.append(self._build_transaction(txn))

        out.append("        </BANKTRANLIST>")
        out.append("        <LEDGERBAL>")
        out.append("          <BALAMT>0.00</BALAMT>")
        out.append(f"          <DTASOF>{now_str}</DTASOF>")
        out.append("        </LEDGERBAL>")
        out.append("      </STMTRS>")
        out.append("    </STMTTRNRS>")
        out.append("  </BANKMSGSRSV1>")
        out.append("</OFX>")

        return "\n".join(out)

    def _build_transaction(self, txn: ParsedTransaction) -> str:
        trn_type = 'CREDIT' if txn.amount > 0 else 'DEBIT'

        name_tag = ""
        if txn.payee:
            name_tag = f"            <NAME>{escape(txn.payee)}</NAME>\n"

        return f"""          <STMTTRN>
            <TRNTYPE>{trn_type}</TRNTYPE>
            <DTPOSTED>{_ofx_date(txn.date)}</DTPOSTED>
            <TRNAMT>{txn.amount:.2f}</TRNAMT>
            <FITID>{escape(txn.fit_id)}</FITID>
{name_tag}            <MEMO>{escape(txn.memo)}</MEMO>
          </STMTTRN>"""
