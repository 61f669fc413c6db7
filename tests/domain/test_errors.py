"""Tests for domain error classes."""

from drivewise.domain.errors import DomainError, InternalError, ValidationError


class TestDomainError:
    """Tests for base DomainError class."""

    def test_stores_message_and_default_code(self) -> None:
        error = DomainError("Calculation failed")

        assert error.message == "Calculation failed"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {}
        assert str(error) == "Calculation failed"

    def test_to_dict_merges_context(self) -> None:
        """Context keys are flattened next to message and code."""
        error = DomainError("Calculation failed", field="price", value="abc")

        assert error.to_dict() == {
            "message": "Calculation failed",
            "code": "DOMAIN_ERROR",
            "field": "price",
            "value": "abc",
        }


class TestValidationError:
    """Tests for ValidationError class."""

    def test_default_message_without_field_errors(self) -> None:
        error = ValidationError()

        assert error.message == "Validation error"
        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors is None

    def test_field_errors_use_validation_failed_message(self) -> None:
        errors = [
            {"field": "price", "message": "Provide price or price_text", "code": "MISSING_PRICE"}
        ]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.errors == errors

    def test_custom_message_with_field_errors(self) -> None:
        errors = [{"field": "down_payment_share", "message": "Invalid"}]

        error = ValidationError(message="Terms request rejected", errors=errors)

        assert error.message == "Terms request rejected"
        assert error.errors == errors

    def test_to_dict_includes_field_errors(self) -> None:
        errors = [
            {"field": "price", "message": "Must be a valid decimal: x", "code": "INVALID_DECIMAL"},
        ]

        assert ValidationError(errors=errors).to_dict() == {
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_to_dict_without_field_errors(self) -> None:
        assert ValidationError("Simple error").to_dict() == {
            "message": "Simple error",
            "code": "VALIDATION_ERROR",
        }


class TestInternalError:
    def test_creates_internal_error(self) -> None:
        error = InternalError("Unexpected condition")

        assert error.message == "Unexpected condition"
        assert error.error_code == "INTERNAL_ERROR"
        assert isinstance(error, DomainError)
