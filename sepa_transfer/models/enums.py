"""Code lists used by credit transfer models."""

from enum import Enum


class ServiceLevel(str, Enum):
    SEPA = "SEPA"
    URGP = "URGP"


class ChargeBearer(str, Enum):
    CRED = "CRED"
    DEBT = "DEBT"
    SHAR = "SHAR"
    SLEV = "SLEV"


class LocalInstrumentKey(str, Enum):
    CODE = "Cd"
    PROPRIETARY = "Prtry"


class CreditorReferenceType(str, Enum):
    """Document types for structured creditor references (DocumentType3Code)."""

    RADM = "RADM"
    RPIN = "RPIN"
    FXDR = "FXDR"
    DISP = "DISP"
    PUOR = "PUOR"
    SCOR = "SCOR"


class BankAccountType(str, Enum):
    """Scheme of a debtor account number without IBAN.

    BBAN is rendered as a code, BGNR (Swedish Bankgiro) as proprietary.
    """

    BBAN = "BBAN"
    BGNR = "BGNR"
