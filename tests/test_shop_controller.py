"""
Tests for ShopController.

The ShopService is a spy (MagicMock with the service's spec) so each
test can assert exactly which domain calls were made.
"""

from dataclasses import asdict
from unittest.mock import MagicMock, call

import pytest

from shopdesk.application.shops.shop_service import ShopService
from shopdesk.domain.caller import Caller
from shopdesk.domain.shops.policies import PermissionPolicy
from shopdesk.interfaces.shops.controller import ShopController
from shopdesk.interfaces.shops.schemas import MAX_PAGE
from shopdesk.shared.pagination import Page
from shopdesk.shared.responses import (
    Abort,
    FormErrors,
    RedirectBack,
    RedirectToRoute,
    Render,
)
from shopdesk.shared.results import Failure, FailureKind, Ok

NOT_FOUND = Failure(FailureKind.NOT_FOUND, "Shop 9 does not exist")


@pytest.fixture
def service() -> MagicMock:
    return MagicMock(spec=ShopService)


@pytest.fixture
def controller(service: MagicMock) -> ShopController:
    return ShopController(service=service, policy=PermissionPolicy())


class TestAuthorization:
    """A caller without permission gets 403 and no domain call is made."""

    @pytest.mark.parametrize(
        "action, args",
        [
            ("index", ({"q": "acme"},)),
            ("create", ()),
            ("store", ({"title": "Acme", "url": "https://acme.test"},)),
            ("show", (1,)),
            ("edit", (1,)),
            ("update", (1, {"title": "Acme"})),
            ("destroy", (1,)),
        ],
    )
    def test_denied_before_any_domain_call(
        self, controller: ShopController, service: MagicMock, nobody, action, args
    ) -> None:
        """Every action returns 403 before touching the service."""
        directive = getattr(controller, action)(nobody, *args)
        assert directive == Abort(403)
        assert service.mock_calls == []

    def test_view_permission_does_not_allow_update(
        self, service: MagicMock
    ) -> None:
        """View permissions do not grant the update ability."""
        viewer = Caller(name="viewer", permissions=frozenset({"shops.view*"}))
        controller = ShopController(service=service, policy=PermissionPolicy())
        assert controller.update(viewer, 1, {"title": "x"}) == Abort(403)
        service.get_by_id.assert_not_called()


class TestIndex:
    """Tests for the list action."""

    def test_renders_projected_page(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """The list page carries projected items, metadata and filters."""
        shops = [make_dto(2, "Bolt", "https://bolt.test"), make_dto(1)]
        service.list.return_value = Page.of(shops, page=1, per_page=15, total=2)

        directive = controller.index(admin, {"q": "o", "page": "1"})

        service.list.assert_called_once_with(search_query="o", page=1)
        assert isinstance(directive, Render)
        assert directive.component == "Shops/Index"
        data = directive.props["shops"]["data"]
        assert [item["id"] for item in data] == [2, 1]
        assert set(data[0]) == {"id", "title", "url", "created_at"}
        assert directive.props["shops"]["meta"]["total"] == 2
        assert directive.props["filters"] == {"q": "o"}

    def test_empty_page_renders(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """An empty store renders an empty list."""
        service.list.return_value = Page.of([], page=1, per_page=15, total=0)
        directive = controller.index(admin, {})
        assert directive.props["shops"]["data"] == []
        service.list.assert_called_once_with(search_query=None, page=1)

    @pytest.mark.parametrize("raw_page", ["abc", "0", "-3", ""])
    def test_unusable_page_falls_back_to_first(
        self, controller: ShopController, service: MagicMock, admin, raw_page
    ) -> None:
        """A non-numeric or non-positive page asks for page 1."""
        service.list.return_value = Page.of([], page=1, per_page=15, total=0)
        controller.index(admin, {"page": raw_page})
        service.list.assert_called_once_with(search_query=None, page=1)

    def test_oversized_page_is_clamped(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """A page number beyond 64 bits is clamped before the service call."""
        service.list.return_value = Page.of([], page=MAX_PAGE, per_page=15, total=0)
        controller.index(admin, {"page": "99999999999999999999"})
        service.list.assert_called_once_with(search_query=None, page=MAX_PAGE)


class TestCreateAndStore:
    """Tests for the create form and store action."""

    def test_create_renders_empty_form(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """The create form needs no domain call."""
        assert controller.create(admin) == Render("Shops/Create")
        assert service.mock_calls == []

    def test_store_redirects_to_list(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """A valid form makes exactly one create call and redirects."""
        service.create.return_value = Ok(None)
        directive = controller.store(admin, {"title": "Acme", "url": "https://acme.test"})
        assert directive == RedirectToRoute("shops.index")
        service.create.assert_called_once_with(title="Acme", url="https://acme.test")

    def test_store_strips_whitespace(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """Surrounding whitespace is trimmed before create."""
        service.create.return_value = Ok(None)
        controller.store(admin, {"title": "  Acme ", "url": " https://acme.test "})
        service.create.assert_called_once_with(title="Acme", url="https://acme.test")

    def test_missing_title_returns_form_errors_without_domain_call(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """A missing title re-renders the form and skips the service."""
        directive = controller.store(admin, {"url": "https://acme.test"})
        assert isinstance(directive, FormErrors)
        assert directive.component == "Shops/Create"
        assert directive.errors == {"title": ("The title field is required.",)}
        assert directive.props == {"values": {"url": "https://acme.test"}}
        assert service.mock_calls == []

    def test_bad_url_rejected(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """Only http and https URLs are accepted."""
        directive = controller.store(admin, {"title": "Acme", "url": "ftp://acme.test"})
        assert directive.errors == {
            "url": ("The url must be a valid http or https address.",)
        }
        service.create.assert_not_called()

    def test_non_object_body_is_general_error(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """A body that is not an object is a general form error."""
        directive = controller.store(admin, None)
        assert isinstance(directive, FormErrors)
        assert list(directive.errors) == ["form"]
        service.create.assert_not_called()

    def test_domain_validation_failure_returns_form_errors(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """Field errors from the service reach the form unchanged."""
        service.create.return_value = Failure.validation({"url": ("taken",)})
        directive = controller.store(admin, {"title": "Acme", "url": "https://acme.test"})
        assert directive.errors == {"url": ("taken",)}
        assert service.mock_calls == [
            call.create(title="Acme", url="https://acme.test")
        ]

    def test_not_created_composes_message(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """NOT_CREATED becomes one message under the form key."""
        service.create.return_value = Failure(FailureKind.NOT_CREATED, "disk full")
        directive = controller.store(admin, {"title": "Acme", "url": "https://acme.test"})
        assert directive.errors == {"form": ("Unable to create shop: disk full",)}


class TestShowAndEdit:
    """Tests for show and edit."""

    def test_show_renders_full_dto(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """The show page carries every field of the shop."""
        dto = make_dto(5)
        service.get_by_id.return_value = Ok(dto)
        directive = controller.show(admin, 5)
        assert directive == Render("Shops/Show", {"shop": asdict(dto)})

    def test_edit_renders_prefilled_form(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """The edit form carries the id and current values."""
        dto = make_dto(5)
        service.get_by_id.return_value = Ok(dto)
        directive = controller.edit(admin, 5)
        assert directive == Render("Shops/Edit", {"id": 5, "values": asdict(dto)})

    @pytest.mark.parametrize("action", ["show", "edit"])
    def test_missing_shop_is_404(
        self, controller: ShopController, service: MagicMock, admin, action
    ) -> None:
        """An unknown id aborts with 404 after a single lookup."""
        service.get_by_id.return_value = NOT_FOUND
        assert getattr(controller, action)(admin, 9) == Abort(404)
        assert service.mock_calls == [call.get_by_id(9)]


class TestUpdate:
    """Tests for the update action."""

    def test_updates_and_redirects(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """Update looks the shop up, then updates it, then redirects."""
        service.get_by_id.return_value = Ok(make_dto(5))
        service.update.return_value = Ok(None)
        directive = controller.update(admin, 5, {"title": "Acme Corp"})
        assert directive == RedirectToRoute("shops.index")
        assert service.mock_calls == [
            call.get_by_id(5),
            call.update(5, title="Acme Corp", url=None),
        ]

    def test_missing_shop_is_404_without_update(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """An unknown id aborts with 404 and never updates."""
        service.get_by_id.return_value = NOT_FOUND
        assert controller.update(admin, 9, {"title": "x"}) == Abort(404)
        service.update.assert_not_called()

    def test_blank_title_returns_edit_form(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """A blank title re-renders the edit form with the submitted values."""
        dto = make_dto(5)
        service.get_by_id.return_value = Ok(dto)
        directive = controller.update(admin, 5, {"title": "  "})
        assert isinstance(directive, FormErrors)
        assert directive.component == "Shops/Edit"
        assert directive.props["id"] == 5
        assert directive.props["values"]["title"] == "  "
        assert directive.props["values"]["url"] == dto.url
        assert directive.errors == {"title": ("The title field is required.",)}
        service.update.assert_not_called()

    def test_not_updated_message_on_title(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """NOT_UPDATED becomes one message under the title key."""
        service.get_by_id.return_value = Ok(make_dto(5))
        service.update.return_value = Failure(FailureKind.NOT_UPDATED, "locked")
        directive = controller.update(admin, 5, {"url": "https://new.test"})
        assert directive.errors == {"title": ("Unable to update shop: locked",)}


class TestDestroy:
    """Tests for the destroy action."""

    def test_deletes_and_redirects_back(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """Destroy looks the shop up, deletes it and redirects back with 303."""
        service.get_by_id.return_value = Ok(make_dto(5))
        service.delete.return_value = Ok(None)
        directive = controller.destroy(admin, 5)
        assert directive == RedirectBack(fallback_route="shops.index", status=303)
        assert service.mock_calls == [call.get_by_id(5), call.delete(5)]

    def test_missing_shop_is_404_without_delete(
        self, controller: ShopController, service: MagicMock, admin
    ) -> None:
        """An unknown id aborts with 404 and never deletes."""
        service.get_by_id.return_value = NOT_FOUND
        assert controller.destroy(admin, 9) == Abort(404)
        service.delete.assert_not_called()

    def test_not_deleted_message_on_id(
        self, controller: ShopController, service: MagicMock, admin, make_dto
    ) -> None:
        """NOT_DELETED re-renders the edit form with a message under id."""
        service.get_by_id.return_value = Ok(make_dto(5))
        service.delete.return_value = Failure(FailureKind.NOT_DELETED, "in use")
        directive = controller.destroy(admin, 5)
        assert isinstance(directive, FormErrors)
        assert directive.component == "Shops/Edit"
        assert directive.errors == {"id": ("Unable to delete shop: in use",)}
