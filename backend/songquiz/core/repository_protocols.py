"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Identity lookups accessed through a Protocol type
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that consume
      the result (a plain mapping) are never async themselves — the shell resolves
      names once, then calls the pure aggregators
"""

from collections.abc import Iterable, Mapping
from typing import Protocol

from songquiz.core.domain_types import UserId


class DisplayNameResolver(Protocol):
    """Contract for the identity collaborator — batch display-name lookup."""
    async def resolve_display_names(
        self, user_ids: Iterable[UserId],
    ) -> Mapping[UserId, str]: ...
