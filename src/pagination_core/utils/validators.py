"""Configuration validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for error details.

    Removes internal fields like:
    - url
    - ctx
    - input
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "settings"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        # Friendly rewrites for common cases
        msg_lower = msg.lower()
        if "greater than or equal" in msg_lower:
            msg = f"Must be at least {err.get('ctx', {}).get('ge')}"
        elif "valid integer" in msg_lower:
            msg = "Must be a whole number"
        elif "extra inputs" in msg_lower:
            msg = "Unknown setting"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_model(
    model: type[ModelT],
    data: dict[str, Any],
) -> tuple[bool, ModelT | list[dict[str, str]]]:
    """Validate data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate

    Returns:
        (True, validated_model) on success
        (False, sanitized_errors) on validation failure
    """
    try:
        validated = model(**data)
        return True, validated

    except ValidationError as exc:
        return False, sanitize_validation_errors(exc.errors())
