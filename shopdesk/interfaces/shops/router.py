"""
FastAPI router for the shops bounded context.

Binds the resource routes (index, create, store, show, edit, update,
destroy) to ShopController. Routes only gather raw input, resolve the
caller and render the directive the controller returns.
No business logic here.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from shopdesk.domain.caller import Caller
from shopdesk.interfaces.pages import PageRenderer
from shopdesk.interfaces.shops.controller import ShopController
from shopdesk.interfaces.shops.dependencies import get_page_renderer, get_shop_controller
from shopdesk.shared.security.auth import resolve_caller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shops", tags=["shops"])


async def _read_payload(request: Request) -> Any:
    """Return the decoded JSON body; an empty body reads as an empty form.

    A body that is not valid JSON is passed on as None so that form
    validation reports it.
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.info("Rejected undecodable request body on %s", request.url.path)
        return None


@router.get("", name="shops.index", summary="List shops")
def index(
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Render the paginated, searchable shop list."""
    return renderer.respond(request, controller.index(caller, request.query_params))


@router.get("/create", name="shops.create", summary="Show create form")
def create(
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Render the empty create form."""
    return renderer.respond(request, controller.create(caller))


@router.post("", name="shops.store", summary="Create a shop")
async def store(
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Create a shop and redirect to the list."""
    payload = await _read_payload(request)
    directive = await run_in_threadpool(controller.store, caller, payload)
    return renderer.respond(request, directive)


@router.get("/{shop}", name="shops.show", summary="Show a shop")
def show(
    shop: int,
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Render one shop."""
    return renderer.respond(request, controller.show(caller, shop))


@router.get("/{shop}/edit", name="shops.edit", summary="Show edit form")
def edit(
    shop: int,
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Render the edit form for one shop."""
    return renderer.respond(request, controller.edit(caller, shop))


@router.api_route(
    "/{shop}", methods=["PUT", "PATCH"], name="shops.update", summary="Update a shop"
)
async def update(
    shop: int,
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Update a shop and redirect to the list."""
    payload = await _read_payload(request)
    directive = await run_in_threadpool(controller.update, caller, shop, payload)
    return renderer.respond(request, directive)


@router.delete("/{shop}", name="shops.destroy", summary="Delete a shop")
def destroy(
    shop: int,
    request: Request,
    caller: Caller = Depends(resolve_caller),
    controller: ShopController = Depends(get_shop_controller),
    renderer: PageRenderer = Depends(get_page_renderer),
) -> Response:
    """Delete a shop and redirect back with 303."""
    return renderer.respond(request, controller.destroy(caller, shop))
