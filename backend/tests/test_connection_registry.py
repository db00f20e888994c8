"""Connection registry unit tests."""

import asyncio
from itertools import combinations

import pytest

from storefront.services.connection_registry import (
    ConnectionRegistry,
    SessionNotFound,
    UserInactive,
    UserNotFound,
)
from storefront.services.user_directory import DirectoryUnavailable
from tests.conftest import FakeConnection, FakeDirectory


def _user_ids(registry: ConnectionRegistry) -> list[str]:
    return [registry._sessions[sid].user.id for sid in registry.list_active_session_ids()]


@pytest.fixture
def directory() -> FakeDirectory:
    directory = FakeDirectory()
    directory.add("u1", "Ada Lovelace")
    directory.add("u2", "Grace Hopper")
    directory.add("u3", "Dormant User", is_active=False)
    return directory


@pytest.fixture
def registry(directory: FakeDirectory) -> ConnectionRegistry:
    return ConnectionRegistry(directory)


@pytest.mark.asyncio
async def test_register_unknown_user_leaves_map_unchanged(registry) -> None:
    """An unknown user id should fail with UserNotFound."""
    existing = FakeConnection()
    await registry.register(existing, "u1")

    with pytest.raises(UserNotFound):
        await registry.register(FakeConnection(), "missing")
    assert registry.list_active_session_ids() == [existing.session_id]


@pytest.mark.asyncio
async def test_register_inactive_user_leaves_map_unchanged(registry) -> None:
    """An inactive user should fail with UserInactive."""
    with pytest.raises(UserInactive):
        await registry.register(FakeConnection(), "u3")
    assert registry.list_active_session_ids() == []


@pytest.mark.asyncio
async def test_directory_failure_propagates(registry, directory) -> None:
    """Storage outages surface as DirectoryUnavailable and change nothing."""
    conn = FakeConnection()
    await registry.register(conn, "u1")
    directory.unavailable = True

    with pytest.raises(DirectoryUnavailable):
        await registry.register(FakeConnection(), "u2")
    assert registry.list_active_session_ids() == [conn.session_id]
    assert conn.terminate_calls == 0


@pytest.mark.asyncio
async def test_second_login_terminates_first_session_once(registry) -> None:
    """A new session for the same user evicts the previous one."""
    conn_a = FakeConnection()
    conn_b = FakeConnection()
    await registry.register(conn_a, "u1")
    await registry.register(conn_b, "u1")

    assert conn_a.terminate_calls == 1
    assert conn_b.terminate_calls == 0
    assert conn_b.session_id in registry.list_active_session_ids()


@pytest.mark.asyncio
async def test_other_users_are_not_evicted(registry) -> None:
    conn_a = FakeConnection()
    conn_b = FakeConnection()
    await registry.register(conn_a, "u1")
    await registry.register(conn_b, "u2")

    assert conn_a.terminate_calls == 0
    assert sorted(registry.list_active_session_ids()) == sorted(
        [conn_a.session_id, conn_b.session_id]
    )


@pytest.mark.asyncio
async def test_unregister_unknown_session_is_noop(registry) -> None:
    await registry.unregister("never-registered")
    assert registry.list_active_session_ids() == []


@pytest.mark.asyncio
async def test_display_name_is_snapshot_at_registration(registry, directory) -> None:
    """Later directory edits should not change the registered display name."""
    conn = FakeConnection()
    await registry.register(conn, "u1")
    directory.users["u1"].full_name = "Augusta Ada King"

    assert registry.get_display_name(conn.session_id) == "Ada Lovelace"


@pytest.mark.asyncio
async def test_display_name_for_removed_session_fails(registry) -> None:
    conn = FakeConnection()
    await registry.register(conn, "u1")
    await registry.unregister(conn.session_id)

    with pytest.raises(SessionNotFound):
        registry.get_display_name(conn.session_id)
    with pytest.raises(SessionNotFound):
        registry.get_display_name("unknown")


@pytest.mark.asyncio
async def test_eviction_scenario(registry) -> None:
    """Register, replace, then drain the evicted session."""
    conn_a = FakeConnection("session-a")
    conn_b = FakeConnection("session-b")

    await registry.register(conn_a, "u1")
    assert registry.get_display_name("session-a") == "Ada Lovelace"

    await registry.register(conn_b, "u1")
    assert conn_a.terminate_calls == 1

    await registry.unregister("session-a")
    assert registry.list_active_session_ids() == ["session-b"]
    assert registry.get_connection("session-b") is conn_b
    assert registry.get_connection("session-a") is None


@pytest.mark.asyncio
async def test_concurrent_registrations_keep_one_session_per_user(registry) -> None:
    """Racing registrations for one user should leave exactly one entry."""
    connections = [FakeConnection() for _ in range(5)]
    await asyncio.gather(*(registry.register(conn, "u1") for conn in connections))

    assert len(registry) == 1
    survivor = registry.list_active_session_ids()[0]
    for conn in connections:
        expected = 0 if conn.session_id == survivor else 1
        assert conn.terminate_calls == expected


@pytest.mark.asyncio
async def test_user_ids_stay_unique_across_mixed_operations(registry) -> None:
    """No two entries may share a user id after any register/unregister mix."""
    conns = {name: FakeConnection(name) for name in "abcdef"}
    steps = [
        ("register", "a", "u1"),
        ("register", "b", "u2"),
        ("register", "c", "u1"),
        ("unregister", "a", None),
        ("register", "d", "u2"),
        ("unregister", "c", None),
        ("register", "e", "u1"),
        ("register", "f", "u1"),
        ("unregister", "b", None),
    ]
    for action, name, user_id in steps:
        if action == "register":
            await registry.register(conns[name], user_id)
        else:
            await registry.unregister(name)
        for left, right in combinations(_user_ids(registry), 2):
            assert left != right

    assert sorted(registry.list_active_session_ids()) == ["d", "f"]
