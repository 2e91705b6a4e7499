"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual field-level error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "down_payment",
                "message": "Cannot exceed property_price",
                "code": "INVALID_RANGE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Engine rejection:
            {
                "detail": "loan amount cannot be negative",
                "code": "INVALID_INPUT"
            }

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "loan_term_years",
                        "message": "Must be between 10 and 40",
                        "code": "INVALID_RANGE"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "loan amount cannot be negative", "code": "INVALID_INPUT"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "property_price",
                            "message": "Must be greater than 0",
                            "code": "INVALID_VALUE",
                        },
                        {
                            "field": "annual_interest_rate_percent",
                            "message": "Must be greater than 0 and less than 100",
                            "code": "INVALID_RANGE",
                        },
                    ],
                },
            ]
        }
    )
