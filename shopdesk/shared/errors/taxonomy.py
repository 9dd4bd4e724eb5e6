"""
Failure taxonomy: fixed mapping from FailureKind to page directive.

Every failure kind maps to exactly one response shape and every entry
is terminal; nothing here calls back into the domain.

    NOT_FOUND          -> 404, empty body
    VALIDATION_FAILED  -> originating form with field -> messages
    NOT_CREATED        -> originating form, one general message
    NOT_UPDATED        -> originating form, one message on ``title``
    NOT_DELETED        -> originating form, one message on ``id``
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from shopdesk.shared.responses import NOT_FOUND, FormErrors, PageDirective
from shopdesk.shared.results import Failure, FailureKind

logger = logging.getLogger(__name__)

GENERAL_ERROR_FIELD = "form"


@dataclass(frozen=True)
class FormContext:
    """The form a failed request came from.

    Attributes:
        component: Page component of the originating form.
        props: Props the form is re-rendered with.
        resource: Resource label used in composed messages.
    """

    component: str
    props: Mapping[str, Any] = field(default_factory=dict)
    resource: str = "shop"


FailureHandler = Callable[[Failure, Optional[FormContext]], PageDirective]


def _require_form(failure: Failure, form: Optional[FormContext]) -> FormContext:
    if form is None:
        raise ValueError(f"{failure.kind.name} needs an originating form")
    return form


def _not_found(failure: Failure, form: Optional[FormContext]) -> PageDirective:
    return NOT_FOUND


def _validation_failed(failure: Failure, form: Optional[FormContext]) -> PageDirective:
    form = _require_form(failure, form)
    return FormErrors(form.component, form.props, failure.field_errors)


def _message_on(error_field: str, verb: str) -> FailureHandler:
    """Build a handler that reports the failure detail as one message."""

    def handler(failure: Failure, form: Optional[FormContext]) -> PageDirective:
        form = _require_form(failure, form)
        message = f"Unable to {verb} {form.resource}: {failure.detail}"
        return FormErrors(form.component, form.props, {error_field: (message,)})

    return handler


FAILURE_RESPONSES: Mapping[FailureKind, FailureHandler] = MappingProxyType(
    {
        FailureKind.NOT_FOUND: _not_found,
        FailureKind.VALIDATION_FAILED: _validation_failed,
        FailureKind.NOT_CREATED: _message_on(GENERAL_ERROR_FIELD, "create"),
        FailureKind.NOT_UPDATED: _message_on("title", "update"),
        FailureKind.NOT_DELETED: _message_on("id", "delete"),
    }
)


def failure_response(
    failure: Failure, form: Optional[FormContext] = None
) -> PageDirective:
    """Map a failure to its response directive.

    Args:
        failure: The single failure produced by the action.
        form: The originating form. Only NOT_FOUND may omit it.

    Returns:
        The terminal directive for this failure.
    """
    logger.info("Action failed: kind=%s", failure.kind.value)
    return FAILURE_RESPONSES[failure.kind](failure, form)
