"""Request/response schemas for the SmartCombo API."""

import re
from functools import wraps
from typing import Any, Mapping, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ValidationError

# Invariant-culture numbers: optional sign, digits, "." as the only decimal separator
_INVARIANT_FLOAT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INVARIANT_INT = re.compile(r"^[+-]?\d+$")


def parse_invariant_float(value: Any) -> Optional[float]:
    """Parse a float without regard to locale.

    Empty strings and None mean "not provided". Comma decimal separators,
    thousands separators, NaN and infinities are rejected.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Expected a number")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        if not _INVARIANT_FLOAT.match(text):
            raise ValueError(f"'{text}' is not a valid number; use '.' as the decimal separator")
        number = float(text)
    if number != number or number in (float("inf"), float("-inf")):
        raise ValueError("Number must be finite")
    return number


def parse_invariant_int(value: Any) -> Optional[int]:
    """Parse an integer without regard to locale."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Expected an integer")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    if not _INVARIANT_INT.match(text):
        raise ValueError(f"'{text}' is not a valid integer")
    return int(text)


class SuggestionRequest(BaseModel):
    """Smart combo box suggestion request."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "searchText": "mortgage payment",
                "maxResults": 5,
                "minSimilarity": 0.5
            }
        },
    )

    search_text: str = Field(default="", alias="searchText", max_length=500, description="Text typed by the user")
    max_results: Optional[int] = Field(
        default=None, alias="maxResults", ge=1, description="Maximum suggestions to return; capped by the configured limit"
    )
    min_similarity: Optional[float] = Field(
        default=None, alias="minSimilarity", ge=-1.0, le=1.0, description="Minimum cosine similarity"
    )

    @field_validator("search_text", mode="before")
    @classmethod
    def search_text_to_str(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("max_results", mode="before")
    @classmethod
    def max_results_invariant(cls, v):
        return parse_invariant_int(v)

    @field_validator("min_similarity", mode="before")
    @classmethod
    def min_similarity_invariant(cls, v):
        return parse_invariant_float(v)


def _request_values() -> Mapping[str, Any]:
    """Query string for GET; JSON body or form fields for POST."""
    if request.method == "GET":
        return request.args.to_dict()
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data
    return request.form.to_dict()


def validate_request_schema(schema_class):
    """Decorator to validate request values against schema."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):  # type: ignore[no-untyped-def]
            try:
                data = schema_class(**_request_values())
            except ValueError as e:
                errors = e.errors() if hasattr(e, "errors") else [{"loc": (), "msg": str(e)}]
                details = [
                    {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
                    for err in errors
                ]
                raise ValidationError("Invalid request", details=details) from e
            request.validated_data = data  # type: ignore[attr-defined]
            return fn(*args, **kwargs)
        return wrapper
    return decorator
