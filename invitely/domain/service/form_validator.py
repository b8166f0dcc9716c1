"""Form-data validation against a category's variant."""

from typing import Any

import logfire
import pydantic

from invitely.domain.error import ValidationError
from invitely.domain.model.form_data import form_data_variant
from invitely.domain.value import InvitationCategory, ValueObject

from .base import Service

INVALID_TYPE_MESSAGE = "Invalid invitation type"


class ValidationResult(ValueObject):
    """Outcome of validating a form-data payload.

    ``errors`` is empty exactly when ``is_valid`` is true, and keeps the
    order in which the variant declares its fields.
    """

    is_valid: bool
    errors: list[str] = []


class FormDataValidator(Service):
    """Checks form-data payloads against their category's typed variant.

    Only keys that are present are checked; missing keys are never errors.
    """

    def validate(
        self, category: InvitationCategory | str, form_data: Any
    ) -> ValidationResult:
        """Validate a (possibly partial) form-data payload.

        Args:
            category: Invitation category, as enum or raw string
            form_data: Payload to check (never mutated)

        Returns:
            Verdict with an ordered list of human-readable errors
        """
        try:
            category = InvitationCategory(category)
        except ValueError:
            return ValidationResult(is_valid=False, errors=[INVALID_TYPE_MESSAGE])

        if not isinstance(form_data, dict):
            return ValidationResult(
                is_valid=False, errors=["Form data must be an object"]
            )

        variant = form_data_variant(category)
        try:
            variant.model_validate(form_data)
        except pydantic.ValidationError as e:
            errors = self._messages(variant, e)
            logfire.info(
                "Form data rejected", category=category.value, errors=errors
            )
            return ValidationResult(is_valid=False, errors=errors)

        return ValidationResult(is_valid=True)

    def require_valid(
        self, category: InvitationCategory | str, form_data: Any
    ) -> InvitationCategory:
        """Validate and raise on failure.

        Returns:
            The parsed category

        Raises:
            ValidationError: With every error message
        """
        result = self.validate(category, form_data)
        if not result.is_valid:
            raise ValidationError(result.errors)
        return InvitationCategory(category)

    @staticmethod
    def _messages(variant, error: pydantic.ValidationError) -> list[str]:
        by_alias = {
            (field.alias or name): name for name, field in variant.model_fields.items()
        }
        messages: list[str] = []
        for detail in error.errors():
            key = detail["loc"][0] if detail["loc"] else None
            name = by_alias.get(key, key)
            message = variant.field_messages.get(name, f"Invalid value for {key}")
            if message not in messages:
                messages.append(message)
        return messages
