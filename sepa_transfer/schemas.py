"""Supported pain.001 schema variants.

Each variant has its own document namespace and decides, per payment leg,
whether the leg can legally be expressed in it.
"""

from dataclasses import dataclass
from typing import Any, Callable

from sepa_transfer.exceptions import UnknownSchemaError

PAIN_001_001_03 = "pain.001.001.03"
PAIN_001_002_03 = "pain.001.002.03"
PAIN_001_003_03 = "pain.001.003.03"
PAIN_001_001_03_CH_02 = "pain.001.001.03.ch.02"

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

_ISO_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:{name}"
_SIX_NAMESPACE = "http://www.six-interbank-clearing.com/de/{name}.xsd"


@dataclass(frozen=True)
class Schema:
    """Header data and leg compatibility rule of one schema variant."""

    name: str
    namespace: str
    schema_location: str
    accepts: Callable[[Any], bool]

    def is_compatible(self, transaction: Any) -> bool:
        return bool(self.accepts(transaction))


def _iso_schema(name: str, accepts: Callable[[Any], bool]) -> Schema:
    namespace = _ISO_NAMESPACE.format(name=name)
    return Schema(name, namespace, f"{namespace} {name}.xsd", accepts)


def _six_schema(name: str, accepts: Callable[[Any], bool]) -> Schema:
    namespace = _SIX_NAMESPACE.format(name=name)
    return Schema(name, namespace, f"{namespace} {namespace}", accepts)


def _base(t: Any) -> bool:
    return not t.service_level or (t.service_level == "SEPA" and t.currency == "EUR")


def _restrictive(t: Any) -> bool:
    return bool(t.bic) and t.service_level == "SEPA" and t.currency == "EUR"


def _relaxed(t: Any) -> bool:
    return t.currency == "EUR"


def _swiss(t: Any) -> bool:
    return t.currency == "CHF"


SCHEMAS: dict[str, Schema] = {
    schema.name: schema
    for schema in (
        _iso_schema(PAIN_001_001_03, _base),
        _iso_schema(PAIN_001_002_03, _restrictive),
        _iso_schema(PAIN_001_003_03, _relaxed),
        _six_schema(PAIN_001_001_03_CH_02, _swiss),
    )
}


def get_schema(name: str) -> Schema:
    """Look up a schema variant by name.

    Raises
    ------
    UnknownSchemaError
        If ``name`` is not a supported variant.
    """
    try:
        return SCHEMAS[name]
    except KeyError:
        raise UnknownSchemaError(f"Schema {name} is unknown!") from None


def is_compatible(transaction: Any, schema_name: str) -> bool:
    """Return True if ``transaction`` can be expressed in ``schema_name``."""
    return get_schema(schema_name).is_compatible(transaction)
