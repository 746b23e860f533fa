import pytest

from services.sanitizer import MAX_FIELD_LENGTH, is_email, sanitize


@pytest.mark.parametrize("raw", [
    "line one\nline two",
    "line one\r\nline two",
    "a\r\rb\n\nc",
    "Bcc: victim@example.com\r\nSubject: spam",
])
def test_sanitize_removes_line_breaks(raw):
    cleaned = sanitize(raw)
    assert "\n" not in cleaned
    assert "\r" not in cleaned


def test_sanitize_collapses_break_runs_to_one_space():
    assert sanitize("hello\r\n\r\nworld") == "hello world"


def test_sanitize_trims_surrounding_whitespace():
    assert sanitize("  \n Jo \r\n ") == "Jo"


@pytest.mark.parametrize("value, expected", [
    (None, ""),
    ("", ""),
    (False, ""),
    (0, ""),
    (42, "42"),
    (True, "True"),
    (3.5, "3.5"),
])
def test_sanitize_treats_falsy_values_as_absent_and_stringifies_the_rest(value, expected):
    assert sanitize(value) == expected


def test_sanitize_truncates_long_fields_to_limit():
    assert len(sanitize("x" * (MAX_FIELD_LENGTH + 500))) == MAX_FIELD_LENGTH
    assert sanitize("y" * MAX_FIELD_LENGTH) == "y" * MAX_FIELD_LENGTH


@pytest.mark.parametrize("raw", [
    "plain",
    "  padded\r\nvalue  ",
    "z" * 5000,
    "a" * (MAX_FIELD_LENGTH - 1) + " tail that gets cut",
    "\n\n\n",
])
def test_sanitize_is_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


@pytest.mark.parametrize("value", ["jo@example.com", "a.b+c@sub.domain.org", "  jo@example.com  "])
def test_is_email_accepts_local_at_domain_tld(value):
    assert is_email(value)


@pytest.mark.parametrize("value", [
    "not-an-email",
    "jo@example",
    "jo@@example.com",
    "jo smith@example.com",
    "@example.com",
    "",
    None,
])
def test_is_email_rejects_malformed_addresses(value):
    assert not is_email(value)
