"""Unit tests for FormDataValidator."""

import pytest

from invitely.domain.error import ValidationError
from invitely.domain.service import FormDataValidator
from invitely.domain.value import InvitationCategory


@pytest.fixture
def validator() -> FormDataValidator:
    return FormDataValidator()


class TestValidate:
    """Tests for FormDataValidator.validate()."""

    def test_complete_wedding_payload_is_valid(self, validator):
        result = validator.validate(
            "wedding",
            {
                "brideName": "Sarah",
                "groomName": "John",
                "eventDate": "2024-08-15T16:00:00Z",
                "venueName": "Grand Ballroom",
            },
        )

        assert result.is_valid
        assert result.errors == []

    def test_missing_fields_are_never_errors(self, validator):
        """An empty payload is valid for every category."""
        for category in InvitationCategory:
            assert validator.validate(category, {}).is_valid

    def test_unknown_category_is_rejected_first(self, validator):
        result = validator.validate("funeral", {"brideName": 42})

        assert not result.is_valid
        assert result.errors == ["Invalid invitation type"]

    def test_wrong_types_are_reported_in_field_order(self, validator):
        result = validator.validate(
            InvitationCategory.WEDDING,
            {"venueName": 7, "groomName": 1, "brideName": ["x"]},
        )

        assert not result.is_valid
        assert result.errors == [
            "Groom name must be a string",
            "Bride name must be a string",
            "Venue name must be a string",
        ]

    @pytest.mark.parametrize(
        "value", ["", "not-a-date", "2024-13-45", "2024-02-30T10:00:00Z", 20240815]
    )
    def test_invalid_dates_are_rejected(self, validator, value):
        result = validator.validate("wedding", {"eventDate": value})

        assert result.errors == ["Invalid event date"]

    def test_date_only_and_offset_dates_are_accepted(self, validator):
        assert validator.validate("birthday", {"partyDate": "2025-03-01"}).is_valid
        assert validator.validate(
            "graduation", {"graduationDate": "2025-06-01T10:30:00+02:00"}
        ).is_valid

    def test_birthday_age_must_be_non_negative_number(self, validator):
        assert validator.validate("birthday", {"age": 30}).is_valid
        assert validator.validate("birthday", {"age": 2.5}).is_valid

        for bad in (-1, "30", True):
            result = validator.validate("birthday", {"age": bad})
            assert result.errors == ["Age must be a positive number"]

    def test_baby_shower_rules(self, validator):
        assert validator.validate(
            "baby_shower", {"parentNames": ["Ann", "Ben"], "gender": "surprise"}
        ).is_valid

        result = validator.validate(
            "baby_shower", {"parentNames": "Ann and Ben", "gender": "unknown"}
        )
        assert result.errors == [
            "Parent names must be an array",
            'Gender must be "boy", "girl", or "surprise"',
        ]

    def test_business_rules(self, validator):
        result = validator.validate(
            "business", {"eventTitle": 5, "company": "Acme", "eventDate": "soon"}
        )

        assert result.errors == ["Event title must be a string", "Invalid event date"]

    def test_unknown_keys_are_kept_and_ignored(self, validator):
        payload = {"brideName": "Sarah", "dressCode": "black tie"}

        assert validator.validate("wedding", payload).is_valid
        assert payload == {"brideName": "Sarah", "dressCode": "black tie"}

    def test_snake_case_keys_are_not_type_checked(self, validator):
        """Only the camelCase keys are declared; look-alikes pass through."""
        payload = {"event_date": "tomorrow", "groom_name": 7}

        assert validator.validate("wedding", payload).is_valid

    def test_anniversary_and_party_accept_anything(self, validator):
        assert validator.validate("anniversary", {"years": "ten"}).is_valid
        assert validator.validate("party", {"theme": 3}).is_valid

    def test_non_object_payload_is_rejected(self, validator):
        result = validator.validate("wedding", ["brideName"])

        assert not result.is_valid


class TestRequireValid:
    """Tests for FormDataValidator.require_valid()."""

    def test_returns_parsed_category(self, validator):
        assert validator.require_valid("party", {}) == InvitationCategory.PARTY

    def test_raises_with_all_messages(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.require_valid("graduation", {"degree": 1, "school": 2})

        assert exc_info.value.errors == [
            "Degree must be a string",
            "School must be a string",
        ]
        assert str(exc_info.value) == "Degree must be a string, School must be a string"
