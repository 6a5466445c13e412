"""Partitioning of transactions into payment information blocks."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from sepa_transfer.models.account import DebtorAccount
from sepa_transfer.models.transaction import CreditTransferTransaction


@dataclass(frozen=True)
class GroupKey:
    """Attributes every transaction of one PmtInf block must share."""

    requested_date: date
    local_instrument: str | None
    local_instrument_key: str | None
    batch_booking: bool
    service_level: str | None
    category_purpose: str | None
    account: DebtorAccount
    charge_bearer: str | None


@dataclass
class TransactionGroup:
    key: GroupKey
    transactions: list[CreditTransferTransaction]


def group_key(
    transaction: CreditTransferTransaction, account: DebtorAccount
) -> GroupKey:
    """Build the grouping key, using ``account`` unless the leg overrides it."""
    return GroupKey(
        requested_date=transaction.requested_date,
        local_instrument=transaction.local_instrument,
        local_instrument_key=transaction.local_instrument_key,
        batch_booking=transaction.batch_booking,
        service_level=transaction.service_level,
        category_purpose=transaction.category_purpose,
        account=transaction.debtor_account or account,
        charge_bearer=transaction.charge_bearer,
    )


def group_transactions(
    transactions: Iterable[CreditTransferTransaction], account: DebtorAccount
) -> list[TransactionGroup]:
    """Group transactions by :class:`GroupKey`.

    Groups appear in order of first occurrence and keep insertion order
    inside, because the block position ends up in the PmtInfId.
    """
    groups: list[TransactionGroup] = []
    for transaction in transactions:
        key = group_key(transaction, account)
        for group in groups:
            if group.key == key:
                group.transactions.append(transaction)
                break
        else:
            groups.append(TransactionGroup(key, [transaction]))
    return groups
