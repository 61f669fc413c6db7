"""Error response models used in the OpenAPI documentation."""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "price",
                "message": "Must be a valid decimal: 3e4",
                "code": "INVALID_DECIMAL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error body: ``detail`` and ``code``, plus ``errors`` for field failures."""

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "price",
                            "message": "Provide price or price_text",
                            "code": "MISSING_PRICE",
                        }
                    ],
                },
            ]
        }
    )
