"""
Test suite for StaticRegistry.

System role: Verification of user/project existence checks
"""

from jobserver.boundary.registry.static_registry import StaticRegistry


async def test_unset_allow_list_accepts_every_id() -> None:
    registry = StaticRegistry()

    assert await registry.exists(1)
    assert await registry.exists(999_999)


async def test_allow_list_only_accepts_listed_ids() -> None:
    registry = StaticRegistry([1, 2, 3])

    assert await registry.exists(2)
    assert not await registry.exists(4)


async def test_empty_allow_list_accepts_nothing() -> None:
    assert not await StaticRegistry([]).exists(1)
