"""Base models shared across payment entities."""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Mapping

from sepa_transfer.exceptions import ConstructionError, UnknownAttributeError, ValidationError
from sepa_transfer.validation import FieldRule, Violation, length_is, length_within, validate


class Model:
    """Mixin giving dataclass models declarative validation.

    Subclasses list their constraints in ``RULES``; a subclass extends its
    parent's rules by concatenating tuples.
    """

    RULES: ClassVar[tuple[FieldRule, ...]] = ()

    @classmethod
    def from_dict(cls, attributes: Mapping[str, Any]) -> Any:
        """Build an instance, rejecting keys the model does not define.

        Raises
        ------
        UnknownAttributeError
            If ``attributes`` contains a key that is not a field.
        """
        known = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(attributes) - known)
        if unknown:
            raise UnknownAttributeError(
                f"{cls.__name__} does not accept: {', '.join(unknown)}"
            )
        return cls(**attributes)

    @classmethod
    def coerce(cls, value: Any, field_name: str) -> Any:
        """Return ``value`` as an instance, building it from a mapping if needed.

        Raises
        ------
        ConstructionError
            If ``value`` is neither an instance, a mapping nor None.
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise ConstructionError(
            f"{field_name} must be a {cls.__name__} or a mapping, got {type(value).__name__}"
        )

    def violations(self) -> list[Violation]:
        """Return every rule violated by this instance."""
        return validate(self, self.RULES)

    def is_valid(self) -> bool:
        return not self.violations()

    def ensure_valid(self) -> None:
        """Raise :class:`ValidationError` listing all violations, if any."""
        violations = self.violations()
        if violations:
            raise ValidationError(violations, subject=type(self).__name__)


@dataclass(frozen=True)
class CreditorAddress(Model):
    """Postal address of a creditor.

    Either the structured fields (street, building, post code, town) or the
    free-form address lines may be used; banks differ in which they prefer,
    so every field is optional and only supplied fields are rendered.
    """

    street_name: str | None = None
    building_number: str | None = None
    post_code: str | None = None
    town_name: str | None = None
    country_code: str | None = None  # ISO 3166-1 alpha-2
    address_line1: str | None = None
    address_line2: str | None = None

    RULES: ClassVar[tuple[FieldRule, ...]] = (
        FieldRule("street_name", length_within(1, 70)),
        FieldRule("building_number", length_within(1, 16)),
        FieldRule("post_code", length_within(1, 16)),
        FieldRule("town_name", length_within(1, 35)),
        FieldRule("country_code", length_is(2)),
        FieldRule("address_line1", length_within(1, 70)),
        FieldRule("address_line2", length_within(1, 70)),
    )
