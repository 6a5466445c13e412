"""Input normalisation applied to model fields on construction."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")

# Characters outside the SEPA character set (plus German umlauts, which
# German banks accept)
_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9ÄÖÜäöüß&*$% ':?,\-()+./]")

_REPLACEMENTS = (
    ("€", "E"),
    ("@", "(at)"),
    ("_", "-"),
)


def convert_text(value: Any) -> str | None:
    """Map free text onto the SEPA character set.

    Returns ``None`` for ``None`` so optional fields stay unset.
    """
    if value is None:
        return None
    text = str(value)
    for old, new in _REPLACEMENTS:
        text = text.replace(old, new)
    text = re.sub(r"\n+", " ", text)
    text = _INVALID_CHARS.sub("", text)
    return text.strip()


def convert_decimal(value: Any) -> Decimal | None:
    """Parse an amount, rounding positive values half-up to cents.

    Unparseable input returns ``None``; zero and negative values are
    returned unrounded so validation can report them.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if not amount.is_finite():
            return None
        if amount > 0:
            return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    return amount


def format_amount(amount: Decimal) -> str:
    """Format an amount with exactly two fractional digits."""
    return str(Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))
