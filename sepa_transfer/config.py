"""Configuration management for sepa-transfer."""

from dataclasses import dataclass, field

from sepa_transfer.exceptions import ConfigurationError
from sepa_transfer.schemas import PAIN_001_001_03, SCHEMAS


DEFAULT_MESSAGE_ID_PREFIX = "SEPA-XFER"
DEFAULT_SCHEMA = PAIN_001_001_03

# prefix + "/" + 22 hex chars + "/<block>" must fit Max35Text for up to 99 blocks
MAX_MESSAGE_ID_PREFIX_LENGTH = 9


@dataclass
class OutputConfig:
    """Document output configuration."""

    pretty_print: bool = True


@dataclass
class SepaConfig:
    """Main configuration for sepa-transfer."""

    message_id_prefix: str = DEFAULT_MESSAGE_ID_PREFIX
    default_schema: str = DEFAULT_SCHEMA
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.message_id_prefix or len(self.message_id_prefix) > MAX_MESSAGE_ID_PREFIX_LENGTH:
            raise ConfigurationError(
                f"message id prefix must be 1-{MAX_MESSAGE_ID_PREFIX_LENGTH} characters, "
                f"got {self.message_id_prefix!r}"
            )

    @classmethod
    def from_env(cls) -> "SepaConfig":
        """Create config from environment variables."""
        import os

        default_schema = os.getenv("SEPA_DEFAULT_SCHEMA", DEFAULT_SCHEMA)
        if default_schema not in SCHEMAS:
            raise ConfigurationError(f"SEPA_DEFAULT_SCHEMA {default_schema!r} is not a known schema")

        prefix = os.getenv("SEPA_MESSAGE_ID_PREFIX", DEFAULT_MESSAGE_ID_PREFIX)

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as exc:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from exc

        output = OutputConfig(
            pretty_print=os.getenv("SEPA_PRETTY_PRINT", "true").lower() == "true",
        )

        return cls(
            message_id_prefix=prefix,
            default_schema=default_schema,
            output=output,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
