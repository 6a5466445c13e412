"""Declarative field validation.

Each model declares a tuple of :class:`FieldRule` objects. :func:`validate`
walks all of them and returns every violation found, so callers can report
all problems with a record at once rather than only the first.

A rule check is a plain callable taking the field value and returning an
error message, or ``None`` when the value is acceptable.
"""

import re
import string
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, NamedTuple

Check = Callable[[Any], "str | None"]

# IBAN2007Identifier
IBAN_REGEX = re.compile(r"\A[A-Z]{2}[0-9]{2}[a-zA-Z0-9]{1,30}\Z")

# AnyBICIdentifier
BIC_REGEX = re.compile(r"\A[A-Z]{6}[A-Z2-9][A-NP-Z0-9]([A-Z0-9]{3})?\Z")

CREDITOR_IDENTIFIER_REGEX = re.compile(
    r"""\A
    [a-zA-Z]{2}                  # ISO country code
    [0-9]{2}                     # check digits
    [A-Za-z0-9]{3}               # creditor business code
    [A-Za-z0-9+?/:().,'-]{1,28}  # national identifier
    \Z""",
    re.VERBOSE,
)

UK_SORT_CODE_REGEX = re.compile(r"\A\d{6}\Z")


class Violation(NamedTuple):
    """A single failed rule, attached to a field name."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field} {self.message}"


@dataclass(frozen=True)
class FieldRule:
    """Binds a check to a field of a record.

    Parameters
    ----------
    field : str
        Attribute name on the record.
    check : Check
        Callable returning an error message or ``None``.
    allow_none : bool
        Skip the check when the value is ``None``.
    condition : Callable | None
        Only apply the rule when ``condition(record)`` is truthy.
    """

    field: str
    check: Check
    allow_none: bool = True
    condition: Callable[[Any], bool] | None = None


def validate(record: Any, rules: Iterable[FieldRule]) -> list[Violation]:
    """Return every violation of ``rules`` on ``record``."""
    violations = []
    for rule in rules:
        if rule.condition is not None and not rule.condition(record):
            continue
        value = getattr(record, rule.field)
        if value is None and rule.allow_none:
            continue
        message = rule.check(value)
        if message:
            violations.append(Violation(rule.field, message))
    return violations


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _is_text(value: Any) -> bool:
    return value is None or isinstance(_plain(value), str)


# ---------------------------------------------------------------------------
# Generic checks
# ---------------------------------------------------------------------------


def presence() -> Check:
    def check(value: Any) -> str | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "can't be blank"
        return None

    return check


def length_within(minimum: int, maximum: int) -> Check:
    """Check that ``len(value)`` lies in ``[minimum, maximum]``."""

    def check(value: Any) -> str | None:
        if not _is_text(value):
            return "is not a string"
        length = len(_plain(value) or "")
        if length < minimum:
            unit = "character" if minimum == 1 else "characters"
            return f"is too short (minimum is {minimum} {unit})"
        if length > maximum:
            return f"is too long (maximum is {maximum} characters)"
        return None

    return check


def length_is(expected: int) -> Check:
    def check(value: Any) -> str | None:
        if not _is_text(value):
            return "is not a string"
        if len(_plain(value) or "") != expected:
            return f"is the wrong length (should be {expected} characters)"
        return None

    return check


def inclusion_in(allowed: Iterable[Any]) -> Check:
    """Check membership by equality, so ``str`` enums match their values."""
    allowed = tuple(_plain(item) for item in allowed)

    def check(value: Any) -> str | None:
        plain = _plain(value)
        # True == 1, so booleans only match booleans
        if not any(
            plain == item and isinstance(plain, bool) == isinstance(item, bool)
            for item in allowed
        ):
            return "is not included in the list"
        return None

    return check


def greater_than(bound: int | Decimal) -> Check:
    def check(value: Any) -> str | None:
        if not isinstance(value, (int, Decimal)) or isinstance(value, bool):
            return "is not a number"
        if value <= bound:
            return f"must be greater than {bound}"
        return None

    return check


def matches(pattern: re.Pattern, message: str = "is invalid") -> Check:
    def check(value: Any) -> str | None:
        if not pattern.match(str(value)):
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Banking identifiers
# ---------------------------------------------------------------------------


def iban_checksum_valid(value: str) -> bool:
    """Return True when ``value`` passes the ISO 7064 mod-97 check."""
    rearranged = value[4:] + value[:4]
    digits = []
    for char in rearranged.upper():
        if char in string.digits:
            digits.append(char)
        elif char in string.ascii_uppercase:
            digits.append(str(ord(char) - 55))
        else:
            return False
    return int("".join(digits)) % 97 == 1


def valid_iban(value: Any) -> bool:
    value = str(value or "")
    return bool(IBAN_REGEX.match(value)) and iban_checksum_valid(value)


def valid_bic(value: Any) -> bool:
    return bool(BIC_REGEX.match(str(value or "")))


def valid_creditor_identifier(value: Any) -> bool:
    value = str(value or "")
    if not CREDITOR_IDENTIFIER_REGEX.match(value):
        return False
    # German identifiers are always 18 characters
    if value[:2].upper() == "DE":
        return len(value) == 18
    return True


def valid_debtor_identifier(value: Any) -> bool:
    # Max35Text
    return len(str(value or "")) <= 35


def is_iban(message: str = "is invalid") -> Check:
    def check(value: Any) -> str | None:
        return None if valid_iban(value) else message

    return check


def is_bic(message: str = "is invalid") -> Check:
    def check(value: Any) -> str | None:
        return None if valid_bic(value) else message

    return check


def is_creditor_identifier(message: str = "is invalid") -> Check:
    def check(value: Any) -> str | None:
        return None if valid_creditor_identifier(value) else message

    return check


def is_debtor_identifier(message: str = "is invalid") -> Check:
    def check(value: Any) -> str | None:
        return None if valid_debtor_identifier(value) else message

    return check


def is_uk_sort_code(message: str = "is invalid") -> Check:
    return matches(UK_SORT_CODE_REGEX, message)
