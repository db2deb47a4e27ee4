"""Tests for custom domain hostname validation."""

from app.utils.hostname_validator import normalize_domain, validate_hostname


class TestValidateHostname:
    def test_valid_subdomain(self):
        is_valid, error = validate_hostname("bookings.example.com")
        assert is_valid is True
        assert error is None

    def test_valid_apex(self):
        is_valid, _ = validate_hostname("example.co")
        assert is_valid is True

    def test_valid_with_hyphen_and_trailing_dot(self):
        is_valid, _ = validate_hostname("my-shop.Example.com.")
        assert is_valid is True

    def test_empty(self):
        is_valid, error = validate_hostname("   ")
        assert is_valid is False
        assert error == "Please enter a domain"

    def test_too_long(self):
        is_valid, error = validate_hostname(("a" * 60 + ".") * 5 + "com")
        assert is_valid is False
        assert "too long" in error.lower()

    def test_email_address(self):
        is_valid, error = validate_hostname("owner@example.com")
        assert is_valid is False
        assert "email" in error.lower()

    def test_url(self):
        is_valid, error = validate_hostname("https://book.example.com/")
        assert is_valid is False
        assert "scheme" in error.lower()

    def test_single_label(self):
        is_valid, _ = validate_hostname("localhost")
        assert is_valid is False

    def test_leading_hyphen(self):
        is_valid, _ = validate_hostname("-shop.example.com")
        assert is_valid is False

    def test_spaces(self):
        is_valid, error = validate_hostname("book example.com")
        assert is_valid is False
        assert "valid domain" in error


class TestNormalizeDomain:
    def test_lowercases_and_strips(self):
        assert normalize_domain("  Book.Example.COM. ") == "book.example.com"
