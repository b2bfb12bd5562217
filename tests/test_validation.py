"""Request validation tests — single vs. multiple field failures."""

from account_api.schemas.account import LoginRequest, RegisterRequest
from account_api.schemas.validation import FieldError, Rule, validate


def _register(**fields):
    return RegisterRequest(**fields).model_dump()


def test_malformed_email_single_error():
    payload = _register(
        email="Not-AN-Email",
        password="myStrongPassword",
        confirm_password="myStrongPassword",
    )
    error, several = validate(payload, RegisterRequest.RULES)
    assert error is not None
    assert error.message == "email should be a valid email address"
    assert several is False


def test_two_failures_set_multi_flag():
    payload = _register(
        email="Not-AN-Email",
        password="myStrongPasswords",
        confirm_password="myStrongPassword",
    )
    error, several = validate(payload, RegisterRequest.RULES)
    assert error is not None
    assert several is True


def test_missing_email_is_required():
    payload = _register(password="myStrongPassword", confirm_password="myStrongPassword")
    error, several = validate(payload, RegisterRequest.RULES)
    assert str(error) == "email is required"
    assert several is False


def test_password_mismatch_names_other_field():
    payload = _register(
        email="alozyuche@gmail.com",
        password="myStrongPasswords",
        confirm_password="myStrongPassword",
    )
    error, several = validate(payload, RegisterRequest.RULES)
    assert error.message == "confirm_password should be the same as Password"
    assert several is False


def test_valid_payload():
    payload = _register(
        email="alozyuche@gmail.com",
        password="myStrongPassword",
        confirm_password="myStrongPassword",
    )
    assert validate(payload, RegisterRequest.RULES) == (None, False)


def test_rules_for_one_field_stop_at_first_failure():
    # Empty email fails "required" only, not "email" as well
    error, several = validate(LoginRequest(password="x").model_dump(), LoginRequest.RULES)
    assert error.kind == "required"
    assert several is False


def test_empty_login_payload_fails_several_fields():
    error, several = validate(LoginRequest().model_dump(), LoginRequest.RULES)
    assert error.field == "email"
    assert several is True


def test_unknown_rule_kind_is_invalid():
    error, several = validate({"age": "12"}, [Rule("age", "numeric-range", "1-10")])
    assert error == FieldError("age", "numeric-range", "1-10")
    assert error.message == "age is Invalid"
    assert several is False


def test_eqfield_compares_wire_field_not_label():
    payload = {"password": "abc", "confirm_password": "abc", "Password": "other"}
    rules = [Rule("confirm_password", "eqfield", "password", label="Password")]
    assert validate(payload, rules) == (None, False)


def test_email_rule_accepts_special_use_domains():
    for email in ("uche@host.test", "uche@mail.example"):
        payload = _register(email=email, password="x", confirm_password="x")
        assert validate(payload, RegisterRequest.RULES) == (None, False)
