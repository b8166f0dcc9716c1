"""Unit tests for extract_derived_fields()."""

from datetime import datetime, timezone

from invitely.domain.service import extract_derived_fields
from invitely.domain.value import InvitationCategory


class TestExtractDerivedFields:
    """Tests for event date and venue derivation."""

    def test_wedding_reads_event_date_and_venue(self):
        derived = extract_derived_fields(
            InvitationCategory.WEDDING,
            {
                "eventDate": "2024-08-15T16:00:00Z",
                "venueName": "Grand Ballroom",
                "venueAddress": "1 Main Street",
            },
        )

        assert derived.event_date == datetime(2024, 8, 15, 16, 0, tzinfo=timezone.utc)
        assert derived.venue_name == "Grand Ballroom"
        assert derived.venue_address == "1 Main Street"

    def test_date_key_depends_on_category(self):
        data = {
            "eventDate": "2024-01-01",
            "partyDate": "2024-02-02",
            "graduationDate": "2024-03-03",
        }

        expected = {
            InvitationCategory.WEDDING: 1,
            InvitationCategory.BUSINESS: 1,
            InvitationCategory.BIRTHDAY: 2,
            InvitationCategory.BABY_SHOWER: 2,
            InvitationCategory.GRADUATION: 3,
        }
        for category, month in expected.items():
            assert extract_derived_fields(category, data).event_date.month == month

    def test_categories_without_date_key_yield_none(self):
        derived = extract_derived_fields(
            InvitationCategory.PARTY, {"eventDate": "2024-01-01", "venueName": "Loft"}
        )

        assert derived.event_date is None
        assert derived.venue_name == "Loft"

    def test_missing_sources_yield_none(self):
        derived = extract_derived_fields(InvitationCategory.BIRTHDAY, {})

        assert derived.event_date is None
        assert derived.venue_name is None
        assert derived.venue_address is None

    def test_unreadable_values_degrade_to_none(self):
        derived = extract_derived_fields(
            InvitationCategory.WEDDING,
            {"eventDate": "whenever", "venueName": 12, "venueAddress": ""},
        )

        assert derived.event_date is None
        assert derived.venue_name is None
        assert derived.venue_address is None
