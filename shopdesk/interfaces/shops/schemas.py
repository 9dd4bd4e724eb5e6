"""
Pydantic input structs for the shop pages.

Each action that takes input has one struct. Raw query and body data
is validated exactly once, here, and invalid input is reported as a
VALIDATION_FAILED result with messages keyed by field.
No business logic belongs here.
"""

from typing import Any, Optional, TypeVar
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shopdesk.domain.shops.entities import TITLE_MAX_LENGTH, URL_MAX_LENGTH
from shopdesk.shared.errors.taxonomy import GENERAL_ERROR_FIELD
from shopdesk.shared.results import Failure, FieldErrors, Ok, Result

M = TypeVar("M", bound=BaseModel)

ALLOWED_URL_SCHEMES = ("http", "https")

# Higher page numbers are served as this page, always past the end.
MAX_PAGE = 2**31 - 1


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    parts = urlsplit(value)
    if parts.scheme.lower() not in ALLOWED_URL_SCHEMES or not parts.netloc:
        raise ValueError("The url must be a valid http or https address.")
    return value


class ListShopsParams(BaseModel):
    """Query parameters of the shop list.

    An unusable page number falls back to the first page; an oversized
    one is clamped to MAX_PAGE.
    """

    model_config = ConfigDict(extra="ignore")

    q: Optional[str] = None
    page: int = 1

    @field_validator("page", mode="before")
    @classmethod
    def lenient_page(cls, value: Any) -> int:
        try:
            page = int(value)
        except (TypeError, ValueError):
            return 1
        if page < 1:
            return 1
        return min(page, MAX_PAGE)


class StoreShopForm(BaseModel):
    """Body of the create form. Both fields are required."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    url: str = Field(..., min_length=1, max_length=URL_MAX_LENGTH)

    @field_validator("url")
    @classmethod
    def url_is_http(cls, value: Optional[str]) -> Optional[str]:
        return _check_url(value)


class UpdateShopForm(BaseModel):
    """Body of the edit form. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    url: Optional[str] = Field(None, min_length=1, max_length=URL_MAX_LENGTH)

    @field_validator("url")
    @classmethod
    def url_is_http(cls, value: Optional[str]) -> Optional[str]:
        return _check_url(value)


def _message(field: str, error: dict[str, Any]) -> str:
    kind = error["type"]
    ctx = error.get("ctx") or {}
    if kind in ("missing", "string_too_short"):
        return f"The {field} field is required."
    if kind == "string_too_long":
        return f"The {field} may not be greater than {ctx['max_length']} characters."
    if kind == "string_type":
        return f"The {field} must be a string."
    if kind == "value_error":
        return str(ctx.get("error", error["msg"]))
    return error["msg"]


def field_errors(exc: ValidationError) -> FieldErrors:
    """Group pydantic errors into field -> messages."""
    grouped: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or GENERAL_ERROR_FIELD
        grouped.setdefault(field, []).append(_message(field, error))
    return {field: tuple(messages) for field, messages in grouped.items()}


def parse_input(model: type[M], data: Any) -> Result[M]:
    """Validate raw request data into ``model``.

    Returns:
        Ok(instance), or a VALIDATION_FAILED Failure with field messages.
    """
    try:
        return Ok(model.model_validate(data))
    except ValidationError as exc:
        return Failure.validation(field_errors(exc))
