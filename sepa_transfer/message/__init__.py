"""pain.001 message assembly."""

from sepa_transfer.message.builder import DocumentBuilder
from sepa_transfer.message.credit_transfer import CreditTransfer
from sepa_transfer.message.grouping import GroupKey, TransactionGroup, group_transactions

__all__ = [
    "CreditTransfer",
    "DocumentBuilder",
    "GroupKey",
    "TransactionGroup",
    "group_transactions",
]
