"""
Permission-based authorization policy for shops.

A caller may perform an ability when one of its permission patterns
matches ``shops.<ability>``. Patterns use shell-style wildcards, so
``shops.*`` grants everything on shops and ``*`` grants everything.
"""

import logging
from fnmatch import fnmatchcase
from typing import Any

from shopdesk.domain.caller import Caller
from shopdesk.domain.shops.entities import ShopAbility
from shopdesk.domain.shops.ports import AuthorizationPort

logger = logging.getLogger(__name__)

PERMISSION_PREFIX = "shops"


class PermissionPolicy(AuthorizationPort):
    """Grants abilities from the caller's permission patterns."""

    def allows(
        self, caller: Caller, ability: ShopAbility, subject: Any = None
    ) -> bool:
        required = f"{PERMISSION_PREFIX}.{ability.value}"
        granted = any(
            fnmatchcase(required, pattern) for pattern in caller.permissions
        )
        if not granted:
            logger.warning("Denied %s to caller=%s", required, caller.name)
        return granted
