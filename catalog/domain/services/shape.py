"""Shape validation: field constraints declared on the request models.

The bounds live on the models as annotated_types metadata and pydantic
enforces them.  This module turns a pydantic ValidationError into the wire
format: the wire name of each failing field mapped to its first message.
No storage access happens here.
"""

from __future__ import annotations

from pydantic import BaseModel, ValidationError

# Error types produced by missing fields and annotated_types bounds.  Any
# other type (wrong JSON type, unparsable number...) is a decoding problem.
SHAPE_ERROR_TYPES = frozenset(
    {
        "missing",
        "string_too_short",
        "string_too_long",
        "too_short",
        "too_long",
        "greater_than",
        "greater_than_equal",
        "less_than",
        "less_than_equal",
    }
)

VALIDATION_MESSAGE = "Request does not match the expected shape"


def field_errors(exc: ValidationError) -> dict[str, str] | None:
    """Wire name -> first message, or None when exc is not a shape failure."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        if error["type"] not in SHAPE_ERROR_TYPES or not error["loc"]:
            return None
        errors.setdefault(str(error["loc"][0]), error["msg"])
    return errors


class ShapeValidator:
    """Re-checks an already built request against its model's constraints."""

    def validate(self, payload: BaseModel) -> dict[str, str]:
        try:
            type(payload).model_validate(payload.model_dump(by_alias=True))
        except ValidationError as exc:
            return field_errors(exc) or {"request": VALIDATION_MESSAGE}
        return {}

