"""Custom exception hierarchy for sepa-transfer."""


class SepaTransferError(Exception):
    """Base exception for all sepa-transfer errors."""


class ValidationError(SepaTransferError):
    """Raised when one or more field rules are violated.

    Every violation is collected before raising, so ``violations`` holds
    the complete list of ``(field, message)`` pairs.
    """

    def __init__(self, violations, subject: str = "record") -> None:
        self.violations = list(violations)
        self.subject = subject
        lines = [f"{field} {message}" for field, message in self.violations]
        super().__init__(f"Invalid {subject}: " + "; ".join(lines))


class SchemaError(SepaTransferError):
    """Raised when a document cannot be produced for the requested schema."""


class UnknownSchemaError(SchemaError):
    """Raised when the requested schema name is not supported."""


class SchemaIncompatibilityError(SchemaError):
    """Raised when valid transactions cannot be represented in a schema."""


class ConstructionError(SepaTransferError, TypeError):
    """Raised when a model is constructed with unusable arguments."""


class UnknownAttributeError(ConstructionError):
    """Raised when a model receives an attribute it does not define."""


class ConfigurationError(SepaTransferError):
    """Raised when configuration is invalid or missing."""
