# =============================================================================
# core/services/validator.py - Contact Request Validation
# =============================================================================
# Checks untrusted bodies against ContactUsCreate before anything is stored.
# Validation is exhaustive: every violated field is reported at once.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from core.models.contact_us import ContactUsCreate, ContactUsRecord, FieldError

# alias -> field name, e.g. "talkAbout" -> "talk_about"
_FIELD_NAMES = {
    info.alias: name
    for name, info in ContactUsCreate.model_fields.items()
    if info.alias
}


@dataclass
class ValidationResult:
    """Either a validated value or the list of field errors, never both."""
    value: ContactUsCreate | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_dicts(self) -> list[dict[str, Any]]:
        return [error.model_dump() for error in self.errors]


class ContactUsValidator:
    """Stateless validator for create and update bodies."""

    def validate(self, payload: Any) -> ValidationResult:
        """
        Validate a full contact request body.

        Args:
            payload: Decoded JSON body (anything; non-objects are rejected)

        Returns:
            ValidationResult with the parsed ContactUsCreate, or all field errors
        """
        try:
            value = ContactUsCreate.model_validate(payload)
        except ValidationError as e:
            return ValidationResult(
                errors=[FieldError.from_pydantic(error) for error in e.errors()]
            )
        return ValidationResult(value=value)

    def validate_update(self, current: ContactUsRecord, changes: Any) -> ValidationResult:
        """
        Validate a partial update merged over the stored record.

        Top-level keys in `changes` replace the stored values; `requester`
        is replaced as a whole.
        """
        if not isinstance(changes, dict):
            return self.validate(changes)

        # Changes may use either the camelCase alias or the field name
        overridden = {_FIELD_NAMES.get(key, key) for key in changes}
        base = current.model_dump(
            mode="json",
            exclude={"id", "created_at", *overridden},
            exclude_none=True,
        )
        return self.validate({**base, **changes})
