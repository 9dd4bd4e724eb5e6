"""
The identity on whose behalf a request is handled.

A Caller is resolved once at the transport boundary and passed explicitly
into every controller operation. Nothing reads it from global state.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Caller:
    """An authenticated caller.

    Attributes:
        name: Display name, used in logs.
        permissions: Permission patterns granted to the caller.
    """

    name: str
    permissions: frozenset[str] = field(default_factory=frozenset)
