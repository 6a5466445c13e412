"""Pytest configuration and fixtures."""

from typing import Any, Callable

import pytest
from lxml import etree

from sepa_transfer.message import CreditTransfer
from sepa_transfer.models import DebtorAccount


def strip_namespaces(document: str) -> etree._Element:
    """Parse a document and drop namespaces so XPath stays readable."""
    root = etree.fromstring(document.encode("utf-8"))
    for element in root.iter():
        element.tag = etree.QName(element).localname
    etree.cleanup_namespaces(root)
    return root


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def debtor_account() -> DebtorAccount:
    """Debtor account with IBAN and BIC."""
    return DebtorAccount(
        name="Schuldner GmbH",
        iban="DE87200500001234567890",
        bic="BANKDEFFXXX",
    )


@pytest.fixture
def credit_transfer(debtor_account: DebtorAccount) -> CreditTransfer:
    """Empty credit transfer paid from ``debtor_account``."""
    return CreditTransfer(debtor_account)


@pytest.fixture
def transaction_attributes() -> dict[str, Any]:
    """Attributes of a valid EUR leg with BIC."""
    return {
        "name": "Telekomiker AG",
        "iban": "DE37112589611964645802",
        "bic": "PBNKDEFF370",
        "amount": 102.50,
        "reference": "XYZ-1234/123",
        "remittance_information": "Rechnung vom 22.08.2013",
    }


@pytest.fixture
def xpath() -> Callable[[str, str], list]:
    """Run an XPath query against a namespace-stripped document."""

    def query(document: str, path: str) -> list:
        return strip_namespaces(document).xpath(path)

    return query


@pytest.fixture
def xml_text(xpath: Callable[[str, str], list]) -> Callable[[str, str], str | None]:
    """Text of the single node matching ``path``, or None if absent."""

    def query(document: str, path: str) -> str | None:
        nodes = xpath(document, path)
        assert len(nodes) <= 1, f"{path} matched {len(nodes)} nodes"
        return nodes[0].text if nodes else None

    return query
