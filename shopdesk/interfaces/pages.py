"""
Page renderer for the server-driven front end.

Turns page directives into HTTP responses following the Inertia page
protocol: requests sent by the front-end router (``X-Inertia: true``)
get a JSON page object, first visits get an HTML shell whose root
element carries the same page object in ``data-page``.
"""

import html
import json
import logging
from typing import Any, Mapping
from urllib.parse import urlsplit

from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from shopdesk.shared.responses import (
    Abort,
    FormErrors,
    PageDirective,
    RedirectBack,
    RedirectToRoute,
    Render,
)

logger = logging.getLogger(__name__)

INERTIA_HEADER = "X-Inertia"
INERTIA_VERSION_HEADER = "X-Inertia-Version"
INERTIA_LOCATION_HEADER = "X-Inertia-Location"

HTTP_200_OK = 200
HTTP_302_FOUND = 302
HTTP_303_SEE_OTHER = 303
HTTP_409_CONFLICT = 409

# Redirects answering these methods must make the browser follow with GET.
SEE_OTHER_METHODS = frozenset({"PUT", "PATCH", "DELETE"})

PAGE_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<script type="module" src="{entry}"></script>
</head>
<body>
<div id="app" data-page="{page}"></div>
</body>
</html>
"""


def is_inertia_request(request: Request) -> bool:
    return request.headers.get(INERTIA_HEADER, "").lower() == "true"


class PageRenderer:
    """Builds responses for page directives.

    Args:
        version: Current front-end asset version.
        title: Document title of the HTML shell.
        entry: Script URL of the front-end bundle.
    """

    def __init__(self, version: str, title: str, entry: str) -> None:
        self._version = version
        self._title = title
        self._entry = entry

    def respond(self, request: Request, directive: PageDirective) -> Response:
        """Return the HTTP response for one directive."""
        if isinstance(directive, Render):
            return self._page(request, directive.component, directive.props, {}, HTTP_200_OK)
        if isinstance(directive, FormErrors):
            return self._page(
                request,
                directive.component,
                directive.props,
                directive.errors,
                directive.status,
            )
        if isinstance(directive, RedirectToRoute):
            url = request.url_for(directive.route_name, **directive.params)
            status = (
                HTTP_303_SEE_OTHER
                if request.method in SEE_OTHER_METHODS
                else HTTP_302_FOUND
            )
            return RedirectResponse(str(url), status_code=status)
        if isinstance(directive, RedirectBack):
            return RedirectResponse(
                self._back_url(request, directive.fallback_route),
                status_code=directive.status,
            )
        if isinstance(directive, Abort):
            return Response(status_code=directive.status)
        raise TypeError(f"Unsupported page directive: {type(directive).__name__}")

    def _page(
        self,
        request: Request,
        component: str,
        props: Mapping[str, Any],
        errors: Mapping[str, Any],
        status: int,
    ) -> Response:
        inertia = is_inertia_request(request)
        if inertia and self._is_stale(request):
            logger.info("Asset version changed, forcing full reload")
            return Response(
                status_code=HTTP_409_CONFLICT,
                headers={INERTIA_LOCATION_HEADER: str(request.url)},
            )

        page = {
            "component": component,
            "props": jsonable_encoder({**props, "errors": errors}),
            "url": self._page_url(request),
            "version": self._version,
        }
        if inertia:
            return JSONResponse(
                page,
                status_code=status,
                headers={INERTIA_HEADER: "true", "Vary": INERTIA_HEADER},
            )

        body = PAGE_SHELL.format(
            title=html.escape(self._title),
            entry=html.escape(self._entry, quote=True),
            page=html.escape(json.dumps(page), quote=True),
        )
        return HTMLResponse(body, status_code=status, headers={"Vary": INERTIA_HEADER})

    def _is_stale(self, request: Request) -> bool:
        client_version = request.headers.get(INERTIA_VERSION_HEADER)
        return (
            request.method == "GET"
            and client_version is not None
            and client_version != self._version
        )

    @staticmethod
    def _page_url(request: Request) -> str:
        query = request.url.query
        return f"{request.url.path}?{query}" if query else request.url.path

    @staticmethod
    def _back_url(request: Request, fallback_route: str) -> str:
        """Return the same-origin referrer, or the fallback route URL."""
        referer = request.headers.get("referer")
        if referer:
            target = urlsplit(referer)
            if target.netloc == request.url.netloc and target.scheme in ("http", "https"):
                return referer
        return str(request.url_for(fallback_route))
