"""Per-category invitation form data.

An invitation's ``form_data`` is stored as a free-form mapping, but each
category has its own typed variant describing which keys it understands.
Every field is optional: a key that is absent (or null) is never an error,
a key that is present must have the declared type. Keys a variant does not
declare are kept as-is.

The variants also carry the category-specific knowledge used elsewhere:
which key holds the event date, which keys must be filled in before an
invitation is complete, and how to build the base of its slug.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from invitely.domain.value import InvitationCategory


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 date or date-time into a datetime.

    Accepts ``YYYY-MM-DD`` and ``YYYY-MM-DDTHH:MM[:SS[.ffffff]][Z|+HH:MM]``.

    Raises:
        ValueError: If the value is not a string holding a real point in time
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("not a date")
    return datetime.fromisoformat(value.strip())


def _ensure_datetime(value: str) -> str:
    parse_datetime(value)
    return value


DateString = Annotated[str, AfterValidator(_ensure_datetime)]


class FormData(BaseModel):
    """Base for all form-data variants."""

    model_config = ConfigDict(
        strict=True,
        extra="allow",
        alias_generator=to_camel,
        frozen=True,
    )

    category: ClassVar[InvitationCategory]

    # Human-readable error per field (keyed by python field name)
    field_messages: ClassVar[dict[str, str]] = {}

    # Raw key holding the event date, if the category has one
    event_date_key: ClassVar[str | None] = None

    # Raw keys that must be filled in before the invitation counts as complete
    required_keys: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def slug_base(cls, data: dict[str, Any]) -> str:
        """Unsanitized base string for this category's slug."""
        return f"{cls.category.value}-invitation"

    @classmethod
    def missing_required(cls, data: dict[str, Any]) -> list[str]:
        """Required keys that are absent or blank in ``data``."""
        return [key for key in cls.required_keys if _is_blank(data.get(key))]


class WeddingFormData(FormData):
    category = InvitationCategory.WEDDING
    field_messages = {
        "groom_name": "Groom name must be a string",
        "bride_name": "Bride name must be a string",
        "event_date": "Invalid event date",
        "venue_name": "Venue name must be a string",
    }
    event_date_key = "eventDate"
    required_keys = ("brideName", "groomName", "eventDate", "venueName")

    groom_name: str | None = None
    bride_name: str | None = None
    event_date: DateString | None = None
    venue_name: str | None = None

    @classmethod
    def slug_base(cls, data: dict[str, Any]) -> str:
        bride = _text(data.get("brideName"), "bride")
        groom = _text(data.get("groomName"), "groom")
        return f"{bride}-{groom}-wedding"


class BirthdayFormData(FormData):
    category = InvitationCategory.BIRTHDAY
    field_messages = {
        "celebrant_name": "Celebrant name must be a string",
        "age": "Age must be a positive number",
        "party_date": "Invalid party date",
    }
    event_date_key = "partyDate"
    required_keys = ("celebrantName", "partyDate")

    celebrant_name: str | None = None
    age: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    party_date: DateString | None = None

    @field_validator("age", mode="before")
    @classmethod
    def reject_bool_age(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("age must be a number")
        return v

    @classmethod
    def slug_base(cls, data: dict[str, Any]) -> str:
        celebrant = _text(data.get("celebrantName"), "birthday")
        age = _text(data.get("age"), "party")
        return f"{celebrant}-birthday-{age}"


class GraduationFormData(FormData):
    category = InvitationCategory.GRADUATION
    field_messages = {
        "graduate_name": "Graduate name must be a string",
        "degree": "Degree must be a string",
        "school": "School must be a string",
        "graduation_date": "Invalid graduation date",
    }
    event_date_key = "graduationDate"
    required_keys = ("graduateName", "school", "graduationDate")

    graduate_name: str | None = None
    degree: str | None = None
    school: str | None = None
    graduation_date: DateString | None = None

    @classmethod
    def slug_base(cls, data: dict[str, Any]) -> str:
        return f"{_text(data.get('graduateName'), 'graduate')}-graduation"


class BabyShowerFormData(FormData):
    category = InvitationCategory.BABY_SHOWER
    field_messages = {
        "parent_names": "Parent names must be an array",
        "due_date": "Invalid due date",
        "party_date": "Invalid party date",
        "gender": 'Gender must be "boy", "girl", or "surprise"',
    }
    event_date_key = "partyDate"
    required_keys = ("parentNames", "partyDate")

    parent_names: list[Any] | None = None
    due_date: DateString | None = None
    party_date: DateString | None = None
    gender: Literal["boy", "girl", "surprise"] | None = None


class BusinessFormData(FormData):
    category = InvitationCategory.BUSINESS
    field_messages = {
        "event_title": "Event title must be a string",
        "company": "Company must be a string",
        "event_date": "Invalid event date",
    }
    event_date_key = "eventDate"
    required_keys = ("eventTitle", "company", "eventDate")

    event_title: str | None = None
    company: str | None = None
    event_date: DateString | None = None


class AnniversaryFormData(FormData):
    category = InvitationCategory.ANNIVERSARY


class PartyFormData(FormData):
    category = InvitationCategory.PARTY


FORM_DATA_VARIANTS: dict[InvitationCategory, type[FormData]] = {
    variant.category: variant
    for variant in (
        WeddingFormData,
        BirthdayFormData,
        GraduationFormData,
        BabyShowerFormData,
        BusinessFormData,
        AnniversaryFormData,
        PartyFormData,
    )
}


def form_data_variant(category: InvitationCategory) -> type[FormData]:
    """Return the form-data variant for a category."""
    return FORM_DATA_VARIANTS[category]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def _text(value: Any, placeholder: str) -> str:
    """Render a name part for a slug, substituting a placeholder when blank."""
    if isinstance(value, bool) or _is_blank(value):
        return placeholder
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
