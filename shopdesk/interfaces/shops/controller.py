"""
Shop controller: the request-handling facade for shop pages.

Every action runs the same steps, in order:
    1. check the caller's permission for the action (403 on denial),
    2. parse the action's input struct,
    3. call the ShopService (update and destroy resolve the shop first),
    4. map the result to exactly one page directive.

A failure stops the action at once and goes through the failure
taxonomy; no further service call is made after it.
"""

import logging
from dataclasses import asdict
from typing import Any, Mapping

from shopdesk.application.shops.dtos import ShopDto
from shopdesk.application.shops.shop_service import ShopService
from shopdesk.domain.caller import Caller
from shopdesk.domain.shops.entities import ShopAbility
from shopdesk.domain.shops.ports import AuthorizationPort
from shopdesk.interfaces.shops.schemas import (
    ListShopsParams,
    StoreShopForm,
    UpdateShopForm,
    parse_input,
)
from shopdesk.shared.errors.taxonomy import FormContext, failure_response
from shopdesk.shared.pagination import output_paginated_list
from shopdesk.shared.responses import (
    FORBIDDEN,
    PageDirective,
    RedirectBack,
    RedirectToRoute,
    Render,
)
from shopdesk.shared.results import Failure

logger = logging.getLogger(__name__)

INDEX_PAGE = "Shops/Index"
CREATE_PAGE = "Shops/Create"
SHOW_PAGE = "Shops/Show"
EDIT_PAGE = "Shops/Edit"

INDEX_ROUTE = "shops.index"

FORM_FIELDS = ("title", "url")


def shop_list_item(shop: ShopDto) -> dict[str, Any]:
    """Projection of one shop for the list page."""
    return {
        "id": shop.id,
        "title": shop.title,
        "url": shop.url,
        "created_at": shop.created_at,
    }


def _submitted_values(payload: Any) -> dict[str, Any]:
    """Echo the form fields a client sent, so the form can be refilled."""
    if not isinstance(payload, Mapping):
        return {}
    return {name: payload[name] for name in FORM_FIELDS if name in payload}


class ShopController:
    """Handles the seven shop actions for an explicit caller.

    Args:
        service: Shop domain service.
        policy: Authorization collaborator consulted before anything else.
    """

    def __init__(self, service: ShopService, policy: AuthorizationPort) -> None:
        self._service = service
        self._policy = policy

    def _denies(self, caller: Caller, ability: ShopAbility) -> bool:
        return not self._policy.allows(caller, ability)

    def index(self, caller: Caller, query: Mapping[str, Any]) -> PageDirective:
        """List shops, optionally filtered by ``q``."""
        if self._denies(caller, ShopAbility.VIEW_ANY):
            return FORBIDDEN

        params = ListShopsParams.model_validate(dict(query))
        page = self._service.list(search_query=params.q, page=params.page)
        return Render(
            INDEX_PAGE,
            {
                "shops": output_paginated_list(page, shop_list_item),
                "filters": {"q": params.q},
            },
        )

    def create(self, caller: Caller) -> PageDirective:
        """Show the empty create form."""
        if self._denies(caller, ShopAbility.CREATE):
            return FORBIDDEN
        return Render(CREATE_PAGE)

    def store(self, caller: Caller, payload: Any) -> PageDirective:
        """Create a shop from the submitted form."""
        if self._denies(caller, ShopAbility.CREATE):
            return FORBIDDEN

        form = FormContext(CREATE_PAGE, {"values": _submitted_values(payload)})
        parsed = parse_input(StoreShopForm, payload)
        if isinstance(parsed, Failure):
            return failure_response(parsed, form)

        result = self._service.create(title=parsed.value.title, url=parsed.value.url)
        if isinstance(result, Failure):
            return failure_response(result, form)

        logger.info("Shop stored by caller=%s", caller.name)
        return RedirectToRoute(INDEX_ROUTE)

    def show(self, caller: Caller, shop_id: int) -> PageDirective:
        """Show one shop."""
        if self._denies(caller, ShopAbility.VIEW):
            return FORBIDDEN

        found = self._service.get_by_id(shop_id)
        if isinstance(found, Failure):
            return failure_response(found)
        return Render(SHOW_PAGE, {"shop": asdict(found.value)})

    def edit(self, caller: Caller, shop_id: int) -> PageDirective:
        """Show the edit form filled with the shop's current values."""
        if self._denies(caller, ShopAbility.UPDATE):
            return FORBIDDEN

        found = self._service.get_by_id(shop_id)
        if isinstance(found, Failure):
            return failure_response(found)
        shop = found.value
        return Render(EDIT_PAGE, {"id": shop.id, "values": asdict(shop)})

    def update(self, caller: Caller, shop_id: int, payload: Any) -> PageDirective:
        """Apply the submitted edit form to an existing shop."""
        if self._denies(caller, ShopAbility.UPDATE):
            return FORBIDDEN

        found = self._service.get_by_id(shop_id)
        if isinstance(found, Failure):
            return failure_response(found)
        shop = found.value

        form = FormContext(
            EDIT_PAGE,
            {"id": shop.id, "values": {**asdict(shop), **_submitted_values(payload)}},
        )
        parsed = parse_input(UpdateShopForm, payload)
        if isinstance(parsed, Failure):
            return failure_response(parsed, form)

        result = self._service.update(
            shop.id, title=parsed.value.title, url=parsed.value.url
        )
        if isinstance(result, Failure):
            return failure_response(result, form)

        logger.info("Shop %d updated by caller=%s", shop.id, caller.name)
        return RedirectToRoute(INDEX_ROUTE)

    def destroy(self, caller: Caller, shop_id: int) -> PageDirective:
        """Delete a shop and send the client back where it came from."""
        if self._denies(caller, ShopAbility.DELETE):
            return FORBIDDEN

        found = self._service.get_by_id(shop_id)
        if isinstance(found, Failure):
            return failure_response(found)
        shop = found.value

        result = self._service.delete(shop.id)
        if isinstance(result, Failure):
            form = FormContext(EDIT_PAGE, {"id": shop.id, "values": asdict(shop)})
            return failure_response(result, form)

        logger.info("Shop %d deleted by caller=%s", shop.id, caller.name)
        return RedirectBack(fallback_route=INDEX_ROUTE)
