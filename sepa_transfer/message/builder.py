"""Rendering of grouped credit transfers as pain.001 XML."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Sequence

from lxml import etree

from sepa_transfer.converters import format_amount
from sepa_transfer.message.grouping import TransactionGroup
from sepa_transfer.models.account import DebtorAccount
from sepa_transfer.models.enums import BankAccountType, LocalInstrumentKey
from sepa_transfer.models.transaction import NOT_PROVIDED, CreditTransferTransaction
from sepa_transfer.schemas import XSI_NAMESPACE, Schema

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _text(value: Any) -> str:
    """Serialize a value for element text."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


class DocumentBuilder:
    """Build a ``CstmrCdtTrfInitn`` document for one schema variant.

    Parameters
    ----------
    schema : Schema
        Target variant; provides namespace and schema location.
    pretty_print : bool
        Indent the serialized output.
    """

    def __init__(self, schema: Schema, pretty_print: bool = True) -> None:
        self.schema = schema
        self.pretty_print = pretty_print

    def build(
        self,
        message_id: str,
        created_at: datetime,
        account: DebtorAccount,
        groups: Sequence[TransactionGroup],
    ) -> str:
        """Return the serialized document, XML declaration included."""
        root = etree.Element(
            self._tag("Document"),
            nsmap={None: self.schema.namespace, "xsi": XSI_NAMESPACE},
        )
        root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", self.schema.schema_location)

        initiation = self._el(root, "CstmrCdtTrfInitn")
        transactions = [t for group in groups for t in group.transactions]
        self._build_group_header(initiation, message_id, created_at, account, transactions)

        for index, group in enumerate(groups, start=1):
            self._build_payment_information(initiation, f"{message_id}/{index}", group)

        body = etree.tostring(root, encoding="unicode", pretty_print=self.pretty_print)
        return XML_DECLARATION + body

    # ------------------------------------------------------------------
    # Element helpers
    # ------------------------------------------------------------------

    def _tag(self, name: str) -> str:
        return f"{{{self.schema.namespace}}}{name}"

    def _el(self, parent: etree._Element, name: str, text: Any = None, **attrib: str) -> etree._Element:
        element = etree.SubElement(parent, self._tag(name), **attrib)
        if text is not None:
            element.text = _text(text)
        return element

    def _path(self, parent: etree._Element, path: str, text: Any = None) -> etree._Element:
        """Create a chain of nested elements, e.g. ``"FinInstnId/BIC"``."""
        element = parent
        for name in path.split("/"):
            element = self._el(element, name)
        if text is not None:
            element.text = _text(text)
        return element

    # ------------------------------------------------------------------
    # Header and blocks
    # ------------------------------------------------------------------

    def _build_group_header(
        self,
        parent: etree._Element,
        message_id: str,
        created_at: datetime,
        account: DebtorAccount,
        transactions: Sequence[CreditTransferTransaction],
    ) -> None:
        header = self._el(parent, "GrpHdr")
        self._el(header, "MsgId", message_id)
        self._el(header, "CreDtTm", created_at.replace(microsecond=0))
        self._el(header, "NbOfTxs", len(transactions))
        self._el(header, "CtrlSum", format_amount(_sum(transactions)))

        party = self._el(header, "InitgPty")
        if account.name:
            self._el(party, "Nm", account.name)
        if account.debtor_identifier:
            self._build_organisation_id(party, account)

    def _build_organisation_id(self, parent: etree._Element, account: DebtorAccount) -> None:
        other = self._path(parent, "Id/OrgId/Othr")
        self._el(other, "Id", account.debtor_identifier)
        self._path(other, "SchmeNm/Cd", account.org_id_scheme_code)

    def _build_payment_information(
        self, parent: etree._Element, block_id: str, group: TransactionGroup
    ) -> None:
        key = group.key
        account = key.account

        block = self._el(parent, "PmtInf")
        self._el(block, "PmtInfId", block_id)
        self._el(block, "PmtMtd", "TRF")
        self._el(block, "BtchBookg", key.batch_booking)
        self._el(block, "NbOfTxs", len(group.transactions))
        self._el(block, "CtrlSum", format_amount(_sum(group.transactions)))

        if key.service_level or key.category_purpose or key.local_instrument:
            payment_type = self._el(block, "PmtTpInf")
            if key.service_level:
                self._path(payment_type, "SvcLvl/Cd", key.service_level)
            if key.category_purpose:
                self._path(payment_type, "CtgyPurp/Cd", key.category_purpose)
            if key.local_instrument:
                instrument = self._el(payment_type, "LclInstrm")
                if key.local_instrument_key == LocalInstrumentKey.CODE:
                    self._el(instrument, "Cd", key.local_instrument)
                else:
                    self._el(instrument, "Prtry", key.local_instrument)

        self._el(block, "ReqdExctnDt", key.requested_date)

        debtor = self._el(block, "Dbtr")
        if account.name:
            self._el(debtor, "Nm", account.name)
        if account.debtor_identifier:
            self._build_organisation_id(debtor, account)

        account_id = self._path(block, "DbtrAcct/Id")
        if account.iban:
            self._el(account_id, "IBAN", account.iban)
        else:
            other = self._el(account_id, "Othr")
            self._el(other, "Id", account.account_number)
            if account.bank_account_type == BankAccountType.BBAN:
                self._path(other, "SchmeNm/Cd", account.bank_account_type)
            elif account.bank_account_type == BankAccountType.BGNR:
                self._path(other, "SchmeNm/Prtry", account.bank_account_type)

        institution = self._path(block, "DbtrAgt/FinInstnId")
        if account.bic:
            self._el(institution, "BIC", account.bic)
        elif account.uk_sort_code:
            self._path(institution, "ClrSysMmbId/MmbId", account.uk_sort_code)
        else:
            self._path(institution, "Othr/Id", NOT_PROVIDED)

        if key.charge_bearer:
            self._el(block, "ChrgBr", key.charge_bearer)

        for transaction in group.transactions:
            self._build_transaction(block, transaction)

    def _build_transaction(
        self, parent: etree._Element, transaction: CreditTransferTransaction
    ) -> None:
        info = self._el(parent, "CdtTrfTxInf")

        payment_id = self._el(info, "PmtId")
        if transaction.instruction:
            self._el(payment_id, "InstrId", transaction.instruction)
        self._el(payment_id, "EndToEndId", transaction.reference)

        amount = self._el(info, "Amt")
        formatted = format_amount(transaction.amount)
        if transaction.use_equivalent_amount:
            equivalent = self._el(amount, "EqvtAmt")
            self._el(equivalent, "Amt", formatted, Ccy=transaction.currency)
            self._el(equivalent, "CcyOfTrf", transaction.destination_currency)
        else:
            self._el(amount, "InstdAmt", formatted, Ccy=transaction.currency)

        if transaction.bic:
            self._path(info, "CdtrAgt/FinInstnId/BIC", transaction.bic)
        elif transaction.clearing_bank_identifier:
            member = self._path(info, "CdtrAgt/FinInstnId/ClrSysMmbId")
            if transaction.clearing_code:
                self._path(member, "ClrSysId/Cd", transaction.clearing_code)
            self._el(member, "MmbId", transaction.clearing_bank_identifier)

        creditor = self._el(info, "Cdtr")
        self._el(creditor, "Nm", transaction.name)
        if transaction.creditor_address:
            self._build_postal_address(creditor, transaction)

        account_id = self._path(info, "CdtrAcct/Id")
        if transaction.iban:
            self._el(account_id, "IBAN", transaction.iban)
        else:
            other = self._el(account_id, "Othr")
            self._el(other, "Id", transaction.account_number)
            if transaction.account_number_proprietary:
                self._path(other, "SchmeNm/Prtry", transaction.account_number_proprietary)
            elif transaction.account_number_code:
                self._path(other, "SchmeNm/Cd", transaction.account_number_code)

        if transaction.remittance_information:
            self._path(info, "RmtInf/Ustrd", transaction.remittance_information)
        elif transaction.structured_remittance_information:
            reference = self._path(info, "RmtInf/Strd/CdtrRefInf")
            kind = self._path(reference, "Tp/CdOrPrtry")
            code = transaction.structured_remittance_information_code
            if code:
                self._el(kind, "Cd", code)
                self._el(reference, "Ref", transaction.structured_remittance_information)
            else:
                self._el(kind, "Prtry", transaction.structured_remittance_information)
        elif transaction.purpose:
            self._path(info, "Purp/Prtry", transaction.purpose)

    def _build_postal_address(
        self, parent: etree._Element, transaction: CreditTransferTransaction
    ) -> None:
        address = transaction.creditor_address
        postal = self._el(parent, "PstlAdr")
        # Only supplied fields; banks differ on structured vs. AdrLine
        for tag, value in (
            ("StrtNm", address.street_name),
            ("BldgNb", address.building_number),
            ("PstCd", address.post_code),
            ("TwnNm", address.town_name),
            ("Ctry", address.country_code),
            ("AdrLine", address.address_line1),
            ("AdrLine", address.address_line2),
        ):
            if value:
                self._el(postal, tag, value)


def _sum(transactions: Sequence[CreditTransferTransaction]) -> Decimal:
    return sum((t.amount for t in transactions), Decimal("0"))
