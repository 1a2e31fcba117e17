import pytest

from lead_widget import ContactFormData, PreferredContact, validate
from lead_widget.models import VALIDATED_FIELDS
from lead_widget.validation import (
    EMAIL_INVALID,
    EMAIL_REQUIRED,
    PHONE_INVALID,
    PHONE_REQUIRED,
)

pytestmark = pytest.mark.unit


def build_form(**overrides):
    defaults = {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@x.com",
        "phone": "5551234567",
        "preferred_contact": PreferredContact.PHONE,
        "message": "",
    }
    defaults.update(overrides)
    return ContactFormData(**defaults)


def test_complete_form_has_no_errors():
    assert validate(build_form()) == {}


@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_blank_names_are_required(blank):
    errors = validate(build_form(first_name=blank, last_name=blank))
    assert errors["first_name"] == "First name is required"
    assert errors["last_name"] == "Last name is required"


def test_missing_first_name_scenario_refuses_only_that_field():
    form = build_form(first_name="", message="")
    assert validate(form) == {"first_name": "First name is required"}


def test_empty_form_reports_every_required_field_at_once():
    errors = validate(ContactFormData())
    assert errors == {
        "first_name": "First name is required",
        "last_name": "Last name is required",
        "email": EMAIL_REQUIRED,
        "phone": PHONE_REQUIRED,
    }


def test_email_without_at_sign_is_invalid():
    assert validate(build_form(email="not-an-email"))["email"] == EMAIL_INVALID


def test_short_email_with_domain_passes():
    assert "email" not in validate(build_form(email="a@b.co"))


def test_whitespace_only_email_is_required_not_invalid():
    assert validate(build_form(email="  "))["email"] == EMAIL_REQUIRED


def test_email_shape_is_searched_not_anchored():
    # Surrounding text does not hide an address-shaped run.
    assert "email" not in validate(build_form(email="contact: jane@x.com"))


def test_short_phone_is_invalid():
    assert validate(build_form(phone="123"))["phone"] == PHONE_INVALID


def test_international_phone_with_spaces_and_hyphens_passes():
    assert "phone" not in validate(build_form(phone="+1 415-555-0100"))


def test_phone_spaces_do_not_count_towards_length():
    assert validate(build_form(phone="555 123 456"))["phone"] == PHONE_INVALID


def test_phone_rejects_letters_and_inner_plus():
    assert validate(build_form(phone="555-CALL-NOW"))["phone"] == PHONE_INVALID
    assert validate(build_form(phone="555+1234567"))["phone"] == PHONE_INVALID


def test_preferred_contact_and_message_are_never_validated():
    errors = validate(build_form(message="", preferred_contact=PreferredContact.EMAIL))
    assert "message" not in errors
    assert "preferred_contact" not in errors


def test_validate_is_idempotent_and_pure():
    form = build_form(first_name=" ", email="bad", phone="12")
    first = validate(form)
    second = validate(form)
    assert first == second
    assert form.first_name == " "
    assert form.email == "bad"


@pytest.mark.parametrize(
    "phone",
    [
        "５５５１２３４５６７",
        "٥٥٥١٢٣٤٥٦٧",
        "+١ ٤١٥-٥٥٥-٠١٠٠",
    ],
)
def test_phone_accepts_only_ascii_digits(phone):
    assert validate(build_form(phone=phone))["phone"] == PHONE_INVALID


def test_byte_order_mark_counts_as_whitespace():
    errors = validate(build_form(first_name="\ufeff", last_name=" \ufeff ", email="\ufeff"))
    assert errors["first_name"] == "First name is required"
    assert errors["last_name"] == "Last name is required"
    assert errors["email"] == EMAIL_REQUIRED


def test_byte_order_mark_is_stripped_from_phone():
    assert "phone" not in validate(build_form(phone="\ufeff555 123 4567"))


def test_error_keys_stay_within_validated_fields():
    errors = validate(ContactFormData(email="x", phone="1"))
    assert set(errors) <= set(VALIDATED_FIELDS)
    assert set(validate(ContactFormData())) == set(VALIDATED_FIELDS)
