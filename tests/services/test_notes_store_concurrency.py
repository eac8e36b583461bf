"""Notes Store — subscriptions, overlapping requests and stale results after reset.

Invariants:
    - Unsubscribed listeners receive nothing further
    - A raising listener does not break the store or the other listeners
    - A load that was in flight across reset() is discarded, not applied
    - A mutation that was in flight across reset() still returns to its caller,
      but does not repopulate the cleared cache
    - Overlapping loads keep is_loading until the last one settles
    - A cancelled load gives back its pending count; a stale one does not touch
      the count owned by loads started after reset()

Design Decisions:
    - asyncio.Event gates on the fake service interleave requests deterministically
"""

import asyncio

import pytest

from notesync.core.errors import NetworkError, NoteNotFoundError
from notesync.schemas.note import NoteDraft, NotePatch
from tests.fakes import note


async def test_unsubscribe_stops_notifications(store, service):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    await store.load()
    count = len(seen)
    unsubscribe()
    await store.load()
    assert len(seen) == count


async def test_unsubscribe_twice_is_harmless(store):
    unsubscribe = store.subscribe(lambda s: None)
    unsubscribe()
    unsubscribe()


async def test_failing_listener_does_not_break_others(store, service):
    def broken(snapshot):
        raise RuntimeError("render failed")

    seen = []
    store.subscribe(broken)
    store.subscribe(seen.append)
    service.server_notes = [note(1)]

    await store.load()

    assert store.notes == (note(1),)
    assert seen[-1].notes == (note(1),)


async def test_snapshot_matches_properties(store, service):
    service.server_notes = [note(1)]
    await store.load()
    snap = store.snapshot
    assert snap.notes == store.notes
    assert snap.is_loading == store.is_loading
    assert snap.error == store.error


async def test_stale_load_after_reset_is_discarded(store, service):
    service.server_notes = [note(1, "previous user")]
    service.list_gate = asyncio.Event()

    pending = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    assert store.is_loading

    store.reset()
    assert not store.is_loading

    service.list_gate.set()
    await pending

    assert store.notes == ()
    assert store.error is None
    assert not store.is_loading


async def test_stale_failed_load_after_reset_sets_no_error(store, service):
    service.list_gate = asyncio.Event()
    service.failures["list"] = NetworkError("offline")

    pending = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    store.reset()
    service.list_gate.set()
    await pending

    assert store.error is None


async def test_stale_create_after_reset_returns_but_is_not_cached(store, service):
    gate = asyncio.Event()
    original_create = service.create_note

    async def slow_create(draft):
        await gate.wait()
        return await original_create(draft)

    service.create_note = slow_create
    pending = asyncio.create_task(store.create(NoteDraft(title="late")))
    await asyncio.sleep(0)
    store.reset()
    gate.set()

    created = await pending

    assert created.title == "late"
    assert store.notes == ()


async def test_overlapping_loads_keep_loading_until_both_finish(store, service):
    service.list_gate = asyncio.Event()
    first = asyncio.create_task(store.load())
    second = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    assert store.is_loading

    service.list_gate.set()
    await first
    await second
    assert not store.is_loading


async def test_load_and_create_in_flight_keep_ids_unique(store, service):
    """Create confirmed after a load that already returned the new note."""
    service.list_gate = asyncio.Event()
    loading = asyncio.create_task(store.load())
    await asyncio.sleep(0)

    created = await store.create(NoteDraft(title="fresh"))
    service.list_gate.set()
    await loading

    assert [n.id for n in store.notes] == [created.id]


def _gated(method):
    """Wrap a fake service method so it waits for the returned gate first."""
    gate = asyncio.Event()

    async def slow(*args):
        await gate.wait()
        return await method(*args)

    return slow, gate


async def test_stale_update_after_reset_returns_but_is_not_cached(
    store, service, snapshots,
):
    service.server_notes = [note(1, "Trip")]
    await store.load()
    service.update_note, gate = _gated(service.update_note)

    pending = asyncio.create_task(
        store.update(1, NotePatch(title="Trip!", body="", completed=True)),
    )
    await asyncio.sleep(0)
    store.reset()
    published = len(snapshots)
    gate.set()

    updated = await pending

    assert updated.title == "Trip!"
    assert store.notes == ()
    assert len(snapshots) == published


async def test_stale_failed_update_after_reset_still_raises(store, service):
    service.server_notes = [note(1)]
    await store.load()
    service.update_note, gate = _gated(service.update_note)
    service.failures["update"] = NetworkError("offline")

    pending = asyncio.create_task(
        store.update(1, NotePatch(title="x", body="", completed=False)),
    )
    await asyncio.sleep(0)
    store.reset()
    gate.set()

    with pytest.raises(NetworkError):
        await pending
    assert store.error is None


async def test_stale_delete_after_reset_is_not_applied(store, service, snapshots):
    service.server_notes = [note(1), note(2)]
    await store.load()
    service.delete_note, gate = _gated(service.delete_note)

    pending = asyncio.create_task(store.delete(1))
    await asyncio.sleep(0)
    store.reset()
    await store.load()
    published = len(snapshots)
    gate.set()

    await pending

    assert [n.id for n in store.notes] == [1, 2]
    assert len(snapshots) == published


async def test_stale_failed_delete_after_reset_still_raises(store, service):
    service.server_notes = [note(1)]
    await store.load()
    service.delete_note, gate = _gated(service.delete_note)
    service.failures["delete"] = NoteNotFoundError(1)

    pending = asyncio.create_task(store.delete(1))
    await asyncio.sleep(0)
    store.reset()
    gate.set()

    with pytest.raises(NoteNotFoundError):
        await pending


async def test_cancelled_load_clears_loading(store, service):
    service.server_notes = [note(1)]
    service.list_gate = asyncio.Event()

    pending = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    assert store.is_loading
    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    assert not store.is_loading
    assert store.notes == ()
    assert store.error is None

    service.list_gate = None
    await store.load()
    assert not store.is_loading
    assert store.notes == (note(1),)


async def test_load_timeout_does_not_leave_store_loading(store, service):
    service.list_gate = asyncio.Event()

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(store.load(), timeout=0.01)

    assert not store.is_loading


async def test_cancelling_one_of_two_loads_keeps_loading(store, service):
    service.server_notes = [note(1)]
    service.list_gate = asyncio.Event()
    first = asyncio.create_task(store.load())
    second = asyncio.create_task(store.load())
    await asyncio.sleep(0)

    first.cancel()
    with pytest.raises(asyncio.CancelledError):
        await first
    assert store.is_loading

    service.list_gate.set()
    await second
    assert not store.is_loading
    assert store.notes == (note(1),)


async def test_cancelled_stale_load_does_not_settle_newer_load(store, service):
    service.list_gate = asyncio.Event()
    old = asyncio.create_task(store.load())
    await asyncio.sleep(0)
    store.reset()
    fresh = asyncio.create_task(store.load())
    await asyncio.sleep(0)

    old.cancel()
    with pytest.raises(asyncio.CancelledError):
        await old
    assert store.is_loading

    service.list_gate.set()
    await fresh
    assert not store.is_loading
