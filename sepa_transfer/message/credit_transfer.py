"""Credit transfer initiation message (pain.001)."""

import logging
import secrets
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping

from sepa_transfer.config import SepaConfig
from sepa_transfer.exceptions import (
    ConstructionError,
    SchemaIncompatibilityError,
    ValidationError,
)
from sepa_transfer.message.builder import DocumentBuilder
from sepa_transfer.message.grouping import TransactionGroup, group_transactions
from sepa_transfer.models.account import Account, DebtorAccount
from sepa_transfer.models.transaction import CreditTransferTransaction
from sepa_transfer.schemas import get_schema
from sepa_transfer.validation import Violation

logger = logging.getLogger(__name__)

# 11 random bytes -> 22 lowercase hex characters
_MESSAGE_ID_BYTES = 11


class CreditTransfer:
    """Collects credit transfer legs and renders them as one pain.001 document.

    The debtor account is given either as an :class:`Account` or as keyword
    attributes::

        sct = CreditTransfer(name="Schuldner GmbH", iban="DE87200500001234567890")
        sct.add_transaction(name="Telekomiker AG", iban="DE37112589611964645802", amount=102.50)
        xml = sct.to_xml("pain.001.001.03")

    Instances are not thread-safe; serialize access when sharing one.
    """

    def __init__(
        self,
        account: Account | None = None,
        config: SepaConfig | None = None,
        **account_attributes: Any,
    ) -> None:
        if account is not None and account_attributes:
            raise ConstructionError("Pass either an account or account attributes, not both")
        if account is None:
            account = DebtorAccount.from_dict(account_attributes)
        elif not isinstance(account, Account):
            raise ConstructionError(f"Expected an Account, got {type(account).__name__}")

        self.account = DebtorAccount.from_account(account)
        self.config = config or SepaConfig()
        self.transactions: list[CreditTransferTransaction] = []

    def add_transaction(
        self,
        transaction: CreditTransferTransaction | Mapping[str, Any] | None = None,
        /,
        **attributes: Any,
    ) -> CreditTransferTransaction:
        """Validate and append a leg.

        Accepts a transaction instance, a mapping of attributes, or keyword
        attributes.

        Raises
        ------
        UnknownAttributeError
            If an attribute is not a transaction field.
        ValidationError
            If the transaction violates any field rule.
        """
        if transaction is not None and attributes:
            raise ConstructionError("Pass either a transaction or attributes, not both")
        if transaction is None:
            transaction = CreditTransferTransaction.from_dict(attributes)
        elif isinstance(transaction, Mapping):
            transaction = CreditTransferTransaction.from_dict(transaction)
        elif not isinstance(transaction, CreditTransferTransaction):
            raise ConstructionError(
                f"Expected a CreditTransferTransaction, got {type(transaction).__name__}"
            )

        transaction.ensure_valid()
        self.transactions.append(transaction)
        logger.debug(
            "Added transaction %d: %s %s to %s",
            len(self.transactions),
            transaction.amount,
            transaction.currency,
            transaction.name,
        )
        return transaction

    def violations(self) -> list[Violation]:
        """Return violations of the message, its account and its transactions."""
        violations = []
        if not self.transactions:
            violations.append(Violation("transactions", "can't be blank"))
        for field, message in self.account.violations():
            violations.append(Violation(f"account.{field}", message))
        for index, transaction in enumerate(self.transactions, start=1):
            for field, message in transaction.violations():
                violations.append(Violation(f"transactions[{index}].{field}", message))
        return violations

    def is_valid(self) -> bool:
        return not self.violations()

    def amount_total(
        self, transactions: Iterable[CreditTransferTransaction] | None = None
    ) -> Decimal:
        """Sum of amounts of ``transactions`` (all transactions by default)."""
        if transactions is None:
            transactions = self.transactions
        return sum((t.amount for t in transactions), Decimal("0"))

    def is_schema_compatible(self, schema_name: str) -> bool:
        schema = get_schema(schema_name)
        return all(schema.is_compatible(t) for t in self.transactions)

    def grouped_transactions(self) -> list[TransactionGroup]:
        return group_transactions(self.transactions, self.account)

    def new_message_identification(self) -> str:
        return f"{self.config.message_id_prefix}/{secrets.token_hex(_MESSAGE_ID_BYTES)}"

    def to_xml(
        self, schema_name: str | None = None, created_at: datetime | None = None
    ) -> str:
        """Render the message for ``schema_name``.

        Each call mints a new message identification. Nothing is returned
        unless the whole message is valid and compatible with the schema.

        Raises
        ------
        UnknownSchemaError
            If ``schema_name`` is not supported.
        ValidationError
            If the account or any transaction is invalid.
        SchemaIncompatibilityError
            If any transaction cannot be expressed in the schema.
        """
        schema = get_schema(schema_name or self.config.default_schema)

        violations = self.violations()
        if violations:
            logger.warning("Rejected credit transfer: %d violations", len(violations))
            raise ValidationError(violations, subject="credit transfer")

        incompatible = [
            f"#{index} {t.name} ({t.currency}, service level {_plain(t.service_level)})"
            for index, t in enumerate(self.transactions, start=1)
            if not schema.is_compatible(t)
        ]
        if incompatible:
            logger.warning(
                "Rejected credit transfer: %d transactions incompatible with %s",
                len(incompatible),
                schema.name,
            )
            raise SchemaIncompatibilityError(
                f"Incompatible with schema {schema.name}! Transactions: {'; '.join(incompatible)}"
            )

        message_id = self.new_message_identification()
        groups = self.grouped_transactions()
        builder = DocumentBuilder(schema, pretty_print=self.config.output.pretty_print)
        document = builder.build(message_id, created_at or datetime.now(), self.account, groups)

        logger.info(
            "Generated %s document %s: %d transactions in %d blocks, total %s",
            schema.name,
            message_id,
            len(self.transactions),
            len(groups),
            self.amount_total(),
            extra={"message_id": message_id, "schema": schema.name},
        )
        return document


def _plain(value: Any) -> Any:
    return getattr(value, "value", value)
