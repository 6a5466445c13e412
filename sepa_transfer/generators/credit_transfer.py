"""Credit transfer sample data generator."""

import random
import string
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from sepa_transfer.config import SepaConfig
from sepa_transfer.generators.base import BaseGenerator
from sepa_transfer.message.credit_transfer import CreditTransfer
from sepa_transfer.models import (
    CreditorAddress,
    CreditTransferTransaction,
    DebtorAccount,
    ServiceLevel,
)


class CreditTransferGenerator(BaseGenerator):
    """Generate valid sample accounts and credit transfer legs.

    All generated legs are EUR with service level SEPA and carry a BIC, so
    they are accepted by every ISO schema variant.
    """

    # 7th/8th BIC characters: no "0"/"1" first, no "O" second
    LOCATION_CODES = ["FF", "MM", "HH", "BE", "2S", "3X"]
    BRANCH_CODES = ["", "XXX", "100", "370"]

    REMITTANCE_TEMPLATES = [
        "Rechnung {number} vom {date}",
        "Kundennummer {number}",
        "Gutschrift {number}",
    ]

    # Share of legs with an explicit execution date
    REQUESTED_DATE_RATE = 0.3

    def generate_bic(self) -> str:
        bank_code = self.fake.lexify("????", letters=string.ascii_uppercase)
        return (
            bank_code
            + "DE"
            + random.choice(self.LOCATION_CODES)
            + random.choice(self.BRANCH_CODES)
        )

    def generate_account(self) -> DebtorAccount:
        """Generate a debtor account with IBAN and BIC."""
        return DebtorAccount(
            name=self.fake.company()[:70],
            iban=self.fake.iban(),
            bic=self.generate_bic(),
        )

    def generate_address(self) -> CreditorAddress:
        return CreditorAddress(
            street_name=self.fake.street_name()[:70],
            building_number=self.fake.building_number()[:16],
            post_code=self.fake.postcode(),
            town_name=self.fake.city()[:35],
            country_code="DE",
        )

    def generate(self, with_address: bool = False) -> CreditTransferTransaction:
        """Generate a single credit transfer leg.

        Parameters
        ----------
        with_address : bool
            Attach a structured creditor address.

        Returns
        -------
        CreditTransferTransaction
            Generated transaction; valid on creation.
        """
        # Amount based on Pareto distribution
        amount = min(random.paretovariate(1.5) * 50, 50000)

        requested_date = None
        if random.random() < self.REQUESTED_DATE_RATE:
            requested_date = date.today() + timedelta(days=random.randint(1, 30))

        remittance = random.choice(self.REMITTANCE_TEMPLATES).format(
            number=self.fake.numerify("######"),
            date=self.fake.date_this_year().strftime("%d.%m.%Y"),
        )

        return CreditTransferTransaction(
            name=self.fake.company()[:70],
            iban=self.fake.iban(),
            bic=self.generate_bic(),
            amount=Decimal(str(round(amount, 2))),
            reference=self.fake.bothify("RE-####/???").upper(),
            remittance_information=remittance,
            requested_date=requested_date,
            service_level=ServiceLevel.SEPA,
            creditor_address=self.generate_address() if with_address else None,
        )

    def generate_batch(self, count: int, with_address: bool = False) -> Iterator[CreditTransferTransaction]:
        for _ in range(count):
            yield self.generate(with_address=with_address)

    def generate_credit_transfer(
        self,
        num_transactions: int,
        config: SepaConfig | None = None,
        with_address: bool = False,
    ) -> CreditTransfer:
        """Generate a message holding ``num_transactions`` legs."""
        credit_transfer = CreditTransfer(self.generate_account(), config=config)
        for transaction in self.generate_batch(num_transactions, with_address=with_address):
            credit_transfer.add_transaction(transaction)
        return credit_transfer
