# app/schemas/common.py
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str = Field(description="Error message")

    model_config = {"json_schema_extra": {"examples": [{"detail": "Not Found"}]}}


class FieldError(BaseModel):
    param: str = Field(description="Offending field or parameter name")
    msg: str = Field(description="Why the value was rejected")
    location: str = Field(description="Where the value came from (body, path, query)")
    value: Any = Field(default=None, description="Rejected value, when present")


class ValidationErrorResponse(BaseModel):
    errors: list[FieldError] = Field(description="One entry per rejected field")


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true on success")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}
