"""
Page directives: framework-free descriptions of an outbound response.

Controllers return one directive per request. The page renderer in the
interfaces layer turns it into an HTTP response.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from shopdesk.shared.results import FieldErrors

HTTP_303_SEE_OTHER = 303
HTTP_403_FORBIDDEN = 403
HTTP_404_NOT_FOUND = 404
HTTP_422_UNPROCESSABLE = 422


@dataclass(frozen=True)
class Render:
    """Render a front-end page component with plain-data props."""

    component: str
    props: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FormErrors:
    """Re-render the originating form with field errors attached."""

    component: str
    props: Mapping[str, Any]
    errors: FieldErrors
    status: int = HTTP_422_UNPROCESSABLE


@dataclass(frozen=True)
class RedirectToRoute:
    """Redirect to a named route."""

    route_name: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RedirectBack:
    """Redirect to the referring page, or to ``fallback_route`` without one."""

    fallback_route: str
    status: int = HTTP_303_SEE_OTHER


@dataclass(frozen=True)
class Abort:
    """Terminate the request with an empty body."""

    status: int


PageDirective = Union[Render, FormErrors, RedirectToRoute, RedirectBack, Abort]

FORBIDDEN = Abort(HTTP_403_FORBIDDEN)
NOT_FOUND = Abort(HTTP_404_NOT_FOUND)
