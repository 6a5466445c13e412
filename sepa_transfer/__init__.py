"""Build ISO 20022 pain.001 credit transfer initiation documents."""

__version__ = "0.1.0"

from sepa_transfer.message import CreditTransfer
from sepa_transfer.models import (
    Account,
    CreditorAddress,
    CreditTransferTransaction,
    DebtorAccount,
)
from sepa_transfer.schemas import (
    PAIN_001_001_03,
    PAIN_001_001_03_CH_02,
    PAIN_001_002_03,
    PAIN_001_003_03,
)

__all__ = [
    "Account",
    "CreditTransfer",
    "CreditTransferTransaction",
    "CreditorAddress",
    "DebtorAccount",
    "PAIN_001_001_03",
    "PAIN_001_001_03_CH_02",
    "PAIN_001_002_03",
    "PAIN_001_003_03",
]
