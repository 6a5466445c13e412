"""Account models for payment parties."""

from dataclasses import dataclass, fields
from typing import ClassVar

from sepa_transfer.converters import convert_text
from sepa_transfer.models.base import Model
from sepa_transfer.models.enums import BankAccountType
from sepa_transfer.validation import (
    FieldRule,
    inclusion_in,
    is_bic,
    is_debtor_identifier,
    is_iban,
    is_uk_sort_code,
    length_within,
    presence,
)

DEFAULT_ORG_ID_SCHEME_CODE = "CUST"


@dataclass(frozen=True)
class Account(Model):
    """A payment party: who holds the account and where it is kept.

    Accounts are frozen so one instance can be shared between a message and
    its transactions, and so two accounts with the same details compare
    equal when transactions are grouped.
    """

    name: str | None = None
    iban: str | None = None
    bic: str | None = None
    account_number: str | None = None
    debtor_identifier: str | None = None  # organisation identifier
    org_id_scheme_code: str | None = DEFAULT_ORG_ID_SCHEME_CODE

    RULES: ClassVar[tuple[FieldRule, ...]] = (
        FieldRule("name", length_within(1, 70)),
        FieldRule("org_id_scheme_code", length_within(1, 4)),
        FieldRule("bic", is_bic()),
        FieldRule("iban", is_iban()),
        FieldRule("debtor_identifier", is_debtor_identifier()),
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", convert_text(self.name))
        if self.org_id_scheme_code is None:
            object.__setattr__(self, "org_id_scheme_code", DEFAULT_ORG_ID_SCHEME_CODE)


@dataclass(frozen=True)
class DebtorAccount(Account):
    """Account that pays out a credit transfer.

    Without a BIC the debtor agent is identified by ``uk_sort_code``; an
    account number without IBAN may carry a ``bank_account_type``.
    """

    uk_sort_code: str | None = None
    bank_account_type: BankAccountType | str | None = None

    RULES: ClassVar[tuple[FieldRule, ...]] = Account.RULES + (
        FieldRule("uk_sort_code", is_uk_sort_code()),
        FieldRule("bank_account_type", inclusion_in(BankAccountType)),
        FieldRule(
            "iban",
            presence(),
            allow_none=False,
            condition=lambda account: not account.account_number,
        ),
    )

    @classmethod
    def from_account(cls, account: Account) -> "DebtorAccount":
        """Return ``account`` as a :class:`DebtorAccount`, copying its fields."""
        if isinstance(account, cls):
            return account
        return cls(**{f.name: getattr(account, f.name) for f in fields(Account)})
