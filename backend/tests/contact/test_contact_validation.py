import pytest

from app.features.contact.schemas import ContactValidationError, validate_submission


def _payload(**overrides):
    payload = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "subject": "Partnership enquiry",
        "message": "I would like to talk about a partnership.",
    }
    payload.update(overrides)
    return payload


def _error_fields(payload) -> list[str]:
    with pytest.raises(ContactValidationError) as exc_info:
        validate_submission(payload)
    return [error.field for error in exc_info.value.errors]


def test_minimum_lengths_pass_and_blank_optionals_are_not_provided():
    submission = validate_submission(
        {
            "name": "Al",
            "email": "a@b.com",
            "subject": "Hello there",
            "message": "1234567890",
            "company": "",
            "phone": "",
        }
    )

    assert submission.name == "Al"
    assert submission.message == "1234567890"
    assert submission.company is None
    assert submission.phone is None


def test_fields_are_trimmed_before_length_checks():
    submission = validate_submission(_payload(name="  Al  ", company="  Acme  ", phone=" 555-0100 "))

    assert submission.name == "Al"
    assert submission.company == "Acme"
    assert submission.phone == "555-0100"


def test_whitespace_padding_does_not_satisfy_minimum_length():
    assert _error_fields(_payload(name="  A   ")) == ["name"]


def test_nine_character_message_yields_exactly_one_error():
    with pytest.raises(ContactValidationError) as exc_info:
        validate_submission(_payload(message="123456789"))

    errors = exc_info.value.errors
    assert len(errors) == 1
    assert errors[0].field == "message"
    assert errors[0].message == "Message must be between 10 and 1000 characters"


def test_invalid_email_is_reported():
    with pytest.raises(ContactValidationError) as exc_info:
        validate_submission(_payload(email="not-an-email"))

    errors = exc_info.value.errors
    assert [e.field for e in errors] == ["email"]
    assert errors[0].message == "Please provide a valid email address"


def test_email_is_normalized_to_lowercase():
    submission = validate_submission(_payload(email="Jane.Doe@Example.COM"))

    assert submission.email == "jane.doe@example.com"


def test_every_violation_is_reported_together():
    fields = _error_fields(
        {
            "name": "J",
            "email": "nope",
            "subject": "Hi",
            "message": "short",
            "company": "x" * 101,
            "phone": "1" * 21,
        }
    )

    assert sorted(fields) == ["company", "email", "message", "name", "phone", "subject"]


def test_missing_required_fields_are_reported():
    assert sorted(_error_fields({})) == ["email", "message", "name", "subject"]


def test_upper_bounds_are_inclusive():
    submission = validate_submission(
        _payload(
            name="n" * 100,
            subject="s" * 200,
            message="m" * 1000,
            company="c" * 100,
            phone="1" * 20,
        )
    )

    assert len(submission.message) == 1000
    assert len(submission.phone) == 20


def test_over_long_fields_fail():
    assert _error_fields(_payload(name="n" * 101)) == ["name"]
    assert _error_fields(_payload(subject="s" * 201)) == ["subject"]
    assert _error_fields(_payload(message="m" * 1001)) == ["message"]


def test_non_string_values_are_rejected():
    assert _error_fields(_payload(name=12345)) == ["name"]


def test_null_optionals_and_unknown_keys_are_ignored():
    submission = validate_submission(_payload(company=None, phone=None, source="landing-page"))

    assert submission.company is None
    assert submission.phone is None


def test_whitespace_only_optionals_are_not_provided():
    submission = validate_submission(_payload(company="   ", phone="\t "))

    assert submission.company is None
    assert submission.phone is None


def test_email_with_surrounding_spaces_is_rejected():
    assert _error_fields(_payload(email=" a@b.com")) == ["email"]
    assert _error_fields(_payload(email="a@b.com ")) == ["email"]
