"""Payment leg models."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar

from sepa_transfer import schemas
from sepa_transfer.converters import convert_decimal, convert_text
from sepa_transfer.models.account import Account, DebtorAccount
from sepa_transfer.models.base import CreditorAddress, Model
from sepa_transfer.models.enums import (
    ChargeBearer,
    CreditorReferenceType,
    LocalInstrumentKey,
    ServiceLevel,
)
from sepa_transfer.validation import (
    FieldRule,
    greater_than,
    inclusion_in,
    is_bic,
    is_iban,
    length_is,
    length_within,
    presence,
)

# Sentinel for "execute as soon as possible"; rendered as-is in ReqdExctnDt
DEFAULT_REQUESTED_DATE = date(1999, 1, 1)

NOT_PROVIDED = "NOTPROVIDED"


def _is_date(value: Any) -> str | None:
    return None if isinstance(value, date) else "is not a date"


def _not_before_today(value: Any) -> str | None:
    if isinstance(value, date) and value < date.today():
        return f"must be greater or equal to {date.today().isoformat()}, or unset"
    return None


def _nested_valid(value: Any) -> str | None:
    return None if value.is_valid() else "is not correct"


@dataclass
class Transaction(Model, ABC):
    """One payment leg.

    Fields shared by every leg type. ``iban`` or ``account_number`` must be
    given; everything else is either optional or defaulted on construction.
    """

    name: str | None = None
    iban: str | None = None
    bic: str | None = None
    account_number: str | None = None
    account_number_proprietary: str | None = None  # e.g. BGNR
    account_number_code: str | None = None  # e.g. BBAN
    clearing_code: str | None = None  # e.g. SESBA
    clearing_bank_identifier: str | None = None
    amount: Decimal | None = None
    instruction: str | None = None
    reference: str | None = None
    remittance_information: str | None = None
    requested_date: date | None = DEFAULT_REQUESTED_DATE
    batch_booking: bool | None = True
    currency: str | None = "EUR"
    creditor_address: CreditorAddress | None = None
    local_instrument: str | None = None
    local_instrument_key: LocalInstrumentKey | str | None = LocalInstrumentKey.PROPRIETARY

    RULES: ClassVar[tuple[FieldRule, ...]] = (
        FieldRule("name", length_within(1, 70), allow_none=False),
        FieldRule("currency", length_is(3), allow_none=False),
        FieldRule("instruction", length_within(1, 35)),
        FieldRule("reference", length_within(1, 35)),
        FieldRule("remittance_information", length_within(1, 140)),
        FieldRule("local_instrument", length_within(1, 35)),
        FieldRule("local_instrument_key", inclusion_in(LocalInstrumentKey)),
        FieldRule("amount", greater_than(0), allow_none=False),
        FieldRule("requested_date", _is_date, allow_none=False),
        FieldRule("batch_booking", inclusion_in((True, False)), allow_none=False),
        FieldRule("bic", is_bic()),
        FieldRule("iban", is_iban()),
        FieldRule(
            "iban",
            presence(),
            allow_none=False,
            condition=lambda t: not t.account_number,
        ),
        FieldRule(
            "account_number",
            presence(),
            allow_none=False,
            condition=lambda t: not t.iban,
        ),
        FieldRule("creditor_address", _nested_valid),
    )

    def __post_init__(self) -> None:
        self.creditor_address = CreditorAddress.coerce(self.creditor_address, "creditor_address")
        self.name = convert_text(self.name)
        self.instruction = convert_text(self.instruction)
        self.reference = convert_text(self.reference)
        self.remittance_information = convert_text(self.remittance_information)
        self.amount = convert_decimal(self.amount)

        if isinstance(self.requested_date, datetime):
            self.requested_date = self.requested_date.date()
        if self.requested_date is None:
            self.requested_date = DEFAULT_REQUESTED_DATE
        if not self.reference:
            self.reference = NOT_PROVIDED
        if self.batch_booking is None:
            self.batch_booking = True
        if not self.currency:
            self.currency = "EUR"
        if self.local_instrument_key is None:
            self.local_instrument_key = LocalInstrumentKey.PROPRIETARY

    @property
    def has_requested_date(self) -> bool:
        return self.requested_date != DEFAULT_REQUESTED_DATE

    @abstractmethod
    def is_schema_compatible(self, schema_name: str) -> bool:
        """Return True if this leg can be expressed in ``schema_name``."""


@dataclass
class CreditTransferTransaction(Transaction):
    """A credit transfer leg paid from the message account (or an override)."""

    service_level: ServiceLevel | str | None = None
    charge_bearer: ChargeBearer | str | None = None
    category_purpose: str | None = None
    purpose: str | None = None
    structured_remittance_information: str | None = None
    structured_remittance_information_code: CreditorReferenceType | str | None = None
    destination_currency: str | None = None
    debtor_account: Account | None = None

    RULES: ClassVar[tuple[FieldRule, ...]] = Transaction.RULES + (
        FieldRule("service_level", inclusion_in(ServiceLevel)),
        FieldRule(
            "structured_remittance_information_code",
            inclusion_in(CreditorReferenceType),
        ),
        FieldRule("charge_bearer", inclusion_in(ChargeBearer)),
        FieldRule("category_purpose", length_within(1, 4)),
        FieldRule("purpose", length_within(1, 35)),
        FieldRule("structured_remittance_information", length_within(1, 35)),
        FieldRule("destination_currency", length_is(3)),
        FieldRule(
            "requested_date",
            _not_before_today,
            condition=lambda t: t.has_requested_date,
        ),
        FieldRule("debtor_account", _nested_valid),
    )

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.service_level is None and self.currency == "EUR":
            self.service_level = ServiceLevel.SEPA
        if self.service_level and self.charge_bearer is None:
            self.charge_bearer = ChargeBearer.SLEV
        if isinstance(self.debtor_account, Account):
            self.debtor_account = DebtorAccount.from_account(self.debtor_account)
        else:
            self.debtor_account = DebtorAccount.coerce(self.debtor_account, "debtor_account")

    @property
    def use_equivalent_amount(self) -> bool:
        """True when the amount must be converted into another currency."""
        return bool(self.destination_currency) and self.destination_currency != self.currency

    def is_schema_compatible(self, schema_name: str) -> bool:
        return schemas.is_compatible(self, schema_name)
