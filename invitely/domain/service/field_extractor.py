"""Derivation of flat, queryable invitation fields from form data."""

from datetime import datetime
from typing import Any, Optional

import logfire

from invitely.domain.model.form_data import form_data_variant, parse_datetime
from invitely.domain.value import InvitationCategory, ValueObject

VENUE_NAME_KEY = "venueName"
VENUE_ADDRESS_KEY = "venueAddress"


class DerivedFields(ValueObject):
    """Columns kept in step with an invitation's form data."""

    event_date: Optional[datetime] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None


def extract_derived_fields(
    category: InvitationCategory, form_data: dict[str, Any]
) -> DerivedFields:
    """Derive event date and venue from form data.

    Never raises: a missing or unreadable source yields None for that field.
    """
    return DerivedFields(
        event_date=_event_date(category, form_data),
        venue_name=_text(form_data, VENUE_NAME_KEY),
        venue_address=_text(form_data, VENUE_ADDRESS_KEY),
    )


def _event_date(
    category: InvitationCategory, form_data: dict[str, Any]
) -> Optional[datetime]:
    try:
        key = form_data_variant(InvitationCategory(category)).event_date_key
        if key is None or form_data.get(key) is None:
            return None
        return parse_datetime(form_data[key])
    except Exception as e:
        logfire.debug("Event date not derivable", category=str(category), error=str(e))
        return None


def _text(form_data: dict[str, Any], key: str) -> Optional[str]:
    value = form_data.get(key)
    return value if isinstance(value, str) and value else None
