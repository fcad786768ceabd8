"""Tests for feedback_cli.validation."""

import pytest

from feedback_cli.utils import FormData
from feedback_cli.validation import ValidationResult, is_form_valid, validate


class TestValidate:
    def test_empty_name_only(self) -> None:
        result = validate(FormData(name="", email="a@b.com", comment="hi"))
        assert result.as_dict() == {"name": True, "email": False, "comment": False}
        assert is_form_valid(result) is False

    def test_email_without_at_or_dot(self) -> None:
        result = validate(FormData(name="Ana", email="bad-email", comment="ok"))
        assert result.email is True
        assert result.name is False
        assert result.comment is False
        assert is_form_valid(result) is False

    @pytest.mark.parametrize("email", ["ana@example", "ana.example.com", ""])
    def test_email_needs_both_markers(self, email: str) -> None:
        assert validate(FormData(name="Ana", email=email, comment="ok")).email is True

    def test_email_check_is_naive(self) -> None:
        # only the presence of "@" and "." is checked
        assert validate(FormData(name="Ana", email=".@", comment="ok")).email is False

    @pytest.mark.parametrize("blank", ["", " ", "\t\n  "])
    def test_whitespace_only_name_and_comment(self, blank: str) -> None:
        result = validate(FormData(name=blank, email="a@b.com", comment=blank))
        assert result.name is True
        assert result.comment is True

    def test_all_fields_filled(self) -> None:
        result = validate(FormData(name="Ana", email="ana@example.com", comment="Great!"))
        assert result == ValidationResult()
        assert is_form_valid(result) is True

    def test_mapping_with_missing_fields(self) -> None:
        result = validate({"name": "Ana", "email": None})
        assert result.as_dict() == {"name": False, "email": True, "comment": True}


class TestValidationResult:
    def test_cleared_resets_only_one_field(self) -> None:
        result = ValidationResult(name=True, email=True, comment=True)
        cleared = result.cleared("email")
        assert cleared.as_dict() == {"name": True, "email": False, "comment": True}
        assert result.email is True

    def test_invalid_fields_in_form_order(self) -> None:
        assert ValidationResult(name=True, comment=True).invalid_fields() == ["name", "comment"]

    def test_unknown_field_lookup(self) -> None:
        with pytest.raises(KeyError):
            ValidationResult()["phone"]
