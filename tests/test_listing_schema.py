import pytest

from jobboard.core.authorization import is_owner
from jobboard.core.validation import is_non_empty_string, sanitize
from jobboard.schemas.listing import (
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    ListingField,
    ListingSubmission,
    normalize_optional,
    validate_required,
)


class _User:
    def __init__(self, user_id):
        self.id = user_id


def test_field_sets_partition_the_allow_list():
    assert set(REQUIRED_FIELDS) | set(OPTIONAL_FIELDS) == set(ListingField)
    assert not set(REQUIRED_FIELDS) & set(OPTIONAL_FIELDS)
    assert {f.value for f in REQUIRED_FIELDS} == {"title", "description", "salary", "email", "city", "state"}


def test_submission_drops_keys_outside_allow_list():
    sub = ListingSubmission.model_validate({"title": "Dev", "user_id": "x", "_method": "PUT", "id": "3"})
    assert sub.cleaned() == {"title": "Dev"}


def test_cleaned_keeps_only_submitted_fields_and_sanitizes():
    sub = ListingSubmission.model_validate({"title": "  a <b>  ", "company": ""})
    assert sub.cleaned() == {"title": "a &lt;b&gt;", "company": ""}


@pytest.mark.parametrize("value,expected", [
    ("Dev", True),
    ("  x ", True),
    ("", False),
    ("   ", False),
    (None, False),
    (90000, False),
])
def test_is_non_empty_string(value, expected):
    assert is_non_empty_string(value) is expected


def test_sanitize_trims_and_escapes():
    assert sanitize("  Tom & \"Jerry\" ") == "Tom &amp; &quot;Jerry&quot;"


def test_validate_required_reports_exactly_missing_fields():
    values = {"title": "Dev", "description": "", "salary": "1", "email": "e@x.com", "city": "C"}
    assert validate_required(values) == {
        "description": "Description is required",
        "state": "State is required",
    }
    assert validate_required(dict(values, description="D", state="S")) == {}


def test_normalize_optional_turns_blank_optionals_into_none():
    values = {"title": "Dev", "tags": "", "company": "ACME", "phone": ""}
    assert normalize_optional(values) == {"title": "Dev", "tags": None, "company": "ACME", "phone": None}
    # absent optionals stay absent
    assert "benefits" not in normalize_optional(values)


def test_is_owner():
    assert is_owner("u1", _User("u1")) is True
    assert is_owner("u1", _User("u2")) is False
    assert is_owner("u1", None) is False
    assert is_owner(None, _User("u1")) is False
    assert is_owner(7, _User("7")) is True
