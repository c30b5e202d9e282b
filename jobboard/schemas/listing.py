from enum import Enum

from pydantic import BaseModel, ConfigDict

from jobboard.core.validation import is_non_empty_string, sanitize


class ListingField(str, Enum):
    """Columns a listing form may set. Anything else in a submission is dropped."""

    TITLE = "title"
    DESCRIPTION = "description"
    SALARY = "salary"
    TAGS = "tags"
    COMPANY = "company"
    ADDRESS = "address"
    CITY = "city"
    STATE = "state"
    PHONE = "phone"
    EMAIL = "email"
    REQUIREMENTS = "requirements"
    BENEFITS = "benefits"


REQUIRED_FIELDS = (
    ListingField.TITLE,
    ListingField.DESCRIPTION,
    ListingField.SALARY,
    ListingField.EMAIL,
    ListingField.CITY,
    ListingField.STATE,
)
OPTIONAL_FIELDS = tuple(f for f in ListingField if f not in REQUIRED_FIELDS)


class ListingSubmission(BaseModel):
    """Allow-listed listing form. Unknown keys (user_id, _method, ...) are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    salary: str | None = None
    tags: str | None = None
    company: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    phone: str | None = None
    email: str | None = None
    requirements: str | None = None
    benefits: str | None = None

    def cleaned(self) -> dict[str, str]:
        """Sanitized values of the fields actually present in the submission."""
        values = {}
        for name, value in self.model_dump(exclude_unset=True).items():
            values[name] = sanitize(value) if isinstance(value, str) else value
        return values


def validate_required(values: dict) -> dict[str, str]:
    """Return field -> message for every required field that is missing or empty."""
    errors = {}
    for field in REQUIRED_FIELDS:
        if not is_non_empty_string(values.get(field.value)):
            errors[field.value] = f"{field.value.capitalize()} is required"
    return errors


def normalize_optional(values: dict) -> dict:
    """Empty optional values become None so they persist as NULL."""
    normalized = dict(values)
    for field in OPTIONAL_FIELDS:
        if field.value in normalized and normalized[field.value] == "":
            normalized[field.value] = None
    return normalized
