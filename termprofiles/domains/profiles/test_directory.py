"""
Tests for profile models and the profile directory.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from unittest.mock import AsyncMock

import pytest

from termprofiles.config import Settings
from termprofiles.config.errors import (
    ErrorCode,
    MalformedReplyError,
    StoreError,
    StoreUnavailableError,
)

from .contracts import ConfigStore
from .directory import ProfileDirectory
from .models import Profile, StoreReply

LIST_PATH = "/profiles/list"
NAME_PATH = "/profiles/{identifier}/name"


def reply(signature: str, payload: Any, status: int = 0) -> StoreReply:
    return StoreReply.from_wire((status, (signature, payload)))


class FakeStore:
    """In-memory store; values may be replies, exceptions or events to wait on."""

    def __init__(self, values: dict[str, Any]) -> None:
        self.values = values
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, str, bool]] = []

    async def lookup(self, path: str, locale: str, use_schema_default: bool) -> StoreReply:
        self.calls.append((path, locale, use_schema_default))
        gate = self.gates.get(path)
        if gate is not None:
            await gate.wait()
        value = self.values[path]
        if isinstance(value, Exception):
            raise value
        return value


def profile_store(names: dict[str, str]) -> FakeStore:
    values: dict[str, Any] = {LIST_PATH: reply("as", list(names))}
    for identifier, name in names.items():
        values[NAME_PATH.format(identifier=identifier)] = reply("s", name)
    return FakeStore(values)


def make_directory(store: ConfigStore) -> ProfileDirectory:
    return ProfileDirectory(store, list_path=LIST_PATH, name_path_template=NAME_PATH)


# --- Profile Tests ---


def test_profile_normalized_name() -> None:
    """Test normalized name is the lowercased display name."""
    profile = Profile(identifier="b1dc", name="Work SSH")
    assert profile.normalized_name == "work ssh"


def test_profile_is_immutable() -> None:
    """Test Profile is frozen/immutable."""
    profile = Profile(identifier="b1dc", name="Default")
    with pytest.raises(Exception):
        profile.name = "changed"  # type: ignore


def test_profile_requires_identifier() -> None:
    """Test Profile requires a non-empty identifier."""
    with pytest.raises(ValueError):
        Profile(identifier="", name="Default")


# --- StoreReply Tests ---


def test_store_reply_from_wire() -> None:
    """Test payload is the second element of the second element."""
    result = StoreReply.from_wire((0, ("as", ["a", "b"])))
    assert result.ok
    assert result.value.signature == "as"
    assert result.value.payload == ["a", "b"]


@pytest.mark.parametrize(
    "raw",
    [None, 42, "ab", [0], (0, None), (0, "as"), (0, ("as",)), ("x", ("as", []))],
)
def test_store_reply_from_wire_malformed(raw: Any) -> None:
    """Test every wrong nesting level is reported as malformed."""
    with pytest.raises(MalformedReplyError):
        StoreReply.from_wire(raw)


def test_store_reply_raise_for_status() -> None:
    """Test non-zero status raises StoreError."""
    assert reply("s", "Default").raise_for_status().value.payload == "Default"
    with pytest.raises(StoreError) as exc_info:
        reply("s", "no such key", status=1).raise_for_status()
    assert exc_info.value.details["status"] == 1


def test_store_reply_payload_as() -> None:
    """Test payload validation against an expected type."""
    assert reply("as", ["a"]).payload_as(list[str]) == ["a"]
    with pytest.raises(MalformedReplyError):
        reply("s", "a").payload_as(list[str])
    with pytest.raises(MalformedReplyError):
        reply("as", ["a", 1]).payload_as(list[str])
    with pytest.raises(MalformedReplyError):
        reply("i", 3).payload_as(str)


# --- ProfileDirectory Tests ---


def test_fake_store_satisfies_contract() -> None:
    """Test FakeStore satisfies the ConfigStore protocol."""
    assert isinstance(FakeStore({}), ConfigStore)


async def test_refresh_loads_profiles() -> None:
    """Test refresh looks up the list and every name."""
    store = profile_store({"a": "Default", "b": "Work SSH", "c": "Personal"})
    directory = make_directory(store)

    await directory.refresh()

    assert sorted(p.name for p in directory.profiles) == ["Default", "Personal", "Work SSH"]
    assert {p.identifier for p in directory.profiles} == {"a", "b", "c"}
    assert store.calls[0] == (LIST_PATH, "en_US.UTF-8", True)
    assert len(store.calls) == 4
    assert directory.generation == 1


async def test_refresh_passes_locale_and_default_flag() -> None:
    """Test lookup arguments come from the directory configuration."""
    store = profile_store({"a": "Default"})
    directory = ProfileDirectory(
        store,
        list_path=LIST_PATH,
        name_path_template=NAME_PATH,
        locale="de_DE.UTF-8",
        use_schema_default=False,
    )

    await directory.refresh()

    assert all(call[1:] == ("de_DE.UTF-8", False) for call in store.calls)


async def test_refresh_replaces_previous_profiles() -> None:
    """Test a refresh discards profiles that disappeared from the store."""
    store = profile_store({"a": "Default", "b": "Work SSH"})
    directory = make_directory(store)
    await directory.refresh()

    store.values[LIST_PATH] = reply("as", ["b"])
    await directory.refresh()

    assert [p.name for p in directory.profiles] == ["Work SSH"]


@pytest.mark.parametrize(
    "failure",
    [
        StoreUnavailableError("dconf not installed"),
        MalformedReplyError("bad reply"),
        reply("s", "no such key", status=1),
        reply("s", "not-a-list"),
        reply("as", ["a", 3]),
    ],
)
async def test_refresh_list_failure_keeps_cache(failure: Any) -> None:
    """Test a failed list lookup leaves the cached snapshot untouched."""
    store = profile_store({"a": "Default", "b": "Work SSH"})
    directory = make_directory(store)
    await directory.refresh()
    cached = directory.profiles

    store.values[LIST_PATH] = failure
    await directory.refresh()

    assert directory.profiles is cached


async def test_refresh_drops_single_failed_profile(caplog: pytest.LogCaptureFixture) -> None:
    """Test one failed name lookup does not prevent the others."""
    store = profile_store({"a": "Default", "b": "Work SSH", "c": "Personal"})
    store.values[NAME_PATH.format(identifier="b")] = StoreUnavailableError("timeout")
    store.values[NAME_PATH.format(identifier="c")] = reply("as", ["wrong", "type"])
    directory = make_directory(store)

    with caplog.at_level(logging.WARNING):
        await directory.refresh()

    assert [p.name for p in directory.profiles] == ["Default"]
    assert "Dropping profile b" in caplog.text
    assert "Dropping profile c" in caplog.text


async def test_refresh_drops_unexpected_name_error(caplog: pytest.LogCaptureFixture) -> None:
    """Test an unexpected exception from one name lookup drops only that profile."""
    store = profile_store({"a": "Default", "b": "Work SSH", "c": "Personal"})
    store.values[NAME_PATH.format(identifier="b")] = RuntimeError("boom")
    directory = make_directory(store)

    with caplog.at_level(logging.WARNING):
        await directory.refresh()

    assert sorted(p.name for p in directory.profiles) == ["Default", "Personal"]
    dropped = [r for r in caplog.records if r.getMessage().startswith("Dropping profile b")]
    assert len(dropped) == 1
    assert dropped[0].error["code"] == ErrorCode.INTERNAL_ERROR.value
    assert dropped[0].error["details"]["identifier"] == "b"


async def test_refresh_drops_invalid_profile(caplog: pytest.LogCaptureFixture) -> None:
    """Test an identifier that cannot form a Profile is dropped as invalid."""
    store = profile_store({"a": "Default", "": "Nameless"})
    directory = make_directory(store)

    with caplog.at_level(logging.WARNING):
        await directory.refresh()

    assert [p.name for p in directory.profiles] == ["Default"]
    dropped = [r for r in caplog.records if r.getMessage().startswith("Dropping profile")]
    assert [r.error["code"] for r in dropped] == [ErrorCode.VALIDATION_ERROR.value]


async def test_refresh_with_empty_list() -> None:
    """Test an empty identifier list publishes an empty snapshot."""
    store = profile_store({"a": "Default"})
    directory = make_directory(store)
    await directory.refresh()

    store.values[LIST_PATH] = reply("as", [])
    await directory.refresh()

    assert directory.profiles == ()


async def test_readers_never_see_partial_list() -> None:
    """Test the snapshot is only replaced once every lookup finished."""
    store = profile_store({"a": "Default", "b": "Work SSH"})
    directory = make_directory(store)
    await directory.refresh()
    cached = directory.profiles

    store.values[LIST_PATH] = reply("as", ["a", "b", "c"])
    store.values[NAME_PATH.format(identifier="c")] = reply("s", "Personal")
    gate = store.gates[NAME_PATH.format(identifier="c")] = asyncio.Event()

    task = asyncio.create_task(directory.refresh())
    for _ in range(5):
        await asyncio.sleep(0)
    assert directory.profiles is cached

    gate.set()
    await task
    assert len(directory.profiles) == 3


async def test_superseded_refresh_is_discarded() -> None:
    """Test a slow older refresh never overwrites a newer one."""
    store = profile_store({"a": "Default", "b": "Work SSH"})
    slow = store.gates[NAME_PATH.format(identifier="a")] = asyncio.Event()
    directory = make_directory(store)

    first = asyncio.create_task(directory.refresh())
    for _ in range(5):
        await asyncio.sleep(0)

    # second refresh only lists "b" and completes while the first is stuck
    store.values[LIST_PATH] = reply("as", ["b"])
    await directory.refresh()
    assert [p.name for p in directory.profiles] == ["Work SSH"]

    slow.set()
    await first

    assert [p.name for p in directory.profiles] == ["Work SSH"]
    assert directory.generation == 2


async def test_failed_refresh_keeps_pending_refresh(caplog: pytest.LogCaptureFixture) -> None:
    """Test a refresh whose list lookup fails cannot discard an older one."""
    store = profile_store({"a": "Default", "b": "Work SSH"})
    slow = store.gates[NAME_PATH.format(identifier="a")] = asyncio.Event()
    directory = make_directory(store)

    first = asyncio.create_task(directory.refresh())
    for _ in range(5):
        await asyncio.sleep(0)

    store.values[LIST_PATH] = StoreUnavailableError("dconf timed out")
    with caplog.at_level(logging.WARNING):
        await directory.refresh()
    assert directory.profiles == ()
    assert directory.generation == 1

    slow.set()
    await first

    assert sorted(p.name for p in directory.profiles) == ["Default", "Work SSH"]
    failed = [r for r in caplog.records if r.getMessage().startswith("Profile list lookup failed")]
    assert failed[0].error["code"] == ErrorCode.STORE_UNAVAILABLE.value


async def test_schedule_refresh_returns_immediately() -> None:
    """Test schedule_refresh starts a background task."""
    store = profile_store({"a": "Default"})
    directory = make_directory(store)

    task = directory.schedule_refresh()
    assert not task.done()
    assert directory.profiles == ()

    await directory.wait_idle()
    assert [p.name for p in directory.profiles] == ["Default"]


async def test_scheduled_refresh_crash_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test an unexpected list lookup error is logged, not raised."""
    store = AsyncMock()
    store.lookup.side_effect = RuntimeError("boom")
    directory = make_directory(store)

    with caplog.at_level(logging.ERROR):
        directory.schedule_refresh()
        await directory.wait_idle()

    assert directory.profiles == ()
    assert "Profile refresh crashed" in caplog.text
    assert directory.generation == 0


async def test_wait_idle_without_tasks() -> None:
    """Test wait_idle returns when nothing is scheduled."""
    directory = make_directory(FakeStore({}))
    await directory.wait_idle()


def test_from_settings() -> None:
    """Test directory picks its paths from settings."""
    settings = Settings(
        profile_list_path="/x/list",
        profile_name_path="/x/{identifier}",
        store_locale="C.UTF-8",
        store_use_schema_default=False,
    )
    directory = ProfileDirectory.from_settings(FakeStore({}), settings)
    assert directory._list_path == "/x/list"
    assert directory._name_path_template == "/x/{identifier}"
    assert directory._locale == "C.UTF-8"
    assert directory._use_schema_default is False
