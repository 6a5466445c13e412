"""Payment party and payment leg models."""

from sepa_transfer.models.account import Account, DebtorAccount
from sepa_transfer.models.base import CreditorAddress, Model
from sepa_transfer.models.enums import (
    BankAccountType,
    ChargeBearer,
    CreditorReferenceType,
    LocalInstrumentKey,
    ServiceLevel,
)
from sepa_transfer.models.transaction import (
    DEFAULT_REQUESTED_DATE,
    CreditTransferTransaction,
    Transaction,
)

__all__ = [
    "Account",
    "BankAccountType",
    "ChargeBearer",
    "CreditTransferTransaction",
    "CreditorAddress",
    "CreditorReferenceType",
    "DEFAULT_REQUESTED_DATE",
    "DebtorAccount",
    "LocalInstrumentKey",
    "Model",
    "ServiceLevel",
    "Transaction",
]
