"""Sample data generators."""

from sepa_transfer.generators.credit_transfer import CreditTransferGenerator

__all__ = ["CreditTransferGenerator"]
