"""
Static user/project registry.

Existence checks against optional allow lists loaded from configuration.
Without a list every id is accepted, matching the stubbed validation of
deployments that do not manage users or projects here.

Dependencies: jobserver.core.ports
System role: User/project validation collaborator
"""

from typing import Iterable

from jobserver.core.ports import ProjectRegistry, UserRegistry


class StaticRegistry(UserRegistry, ProjectRegistry):
    """Id allow list; ``None`` accepts everything."""

    def __init__(self, known_ids: Iterable[int] | None = None) -> None:
        self.known_ids = frozenset(known_ids) if known_ids is not None else None

    async def exists(self, entity_id: int) -> bool:
        if self.known_ids is None:
            return True
        return entity_id in self.known_ids
