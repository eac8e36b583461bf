"""Note Editor Session — opening, saving and failed saves keeping the edit intact."""

import pytest

from notesync.core.errors import InputValidationError, ServerError
from notesync.services.note_editor import NoteEditorSession
from tests.fakes import note


async def test_new_note_saved_with_trimmed_title(store, service, editor):
    session = NoteEditorSession(store, editor)
    session.title = "  Groceries  "
    editor.content = "<p>milk</p>"

    saved = await session.save()

    assert saved.title == "Groceries"
    assert saved.body == "<p>milk</p>"
    assert store.notes == (saved,)
    assert not session.is_new
    assert session.note_id == saved.id


async def test_second_save_updates_the_created_note(store, service, editor):
    session = NoteEditorSession(store, editor)
    session.title = "Groceries"
    editor.content = "<p>milk</p>"
    first = await session.save()

    editor.content = "<p>milk, eggs</p>"
    second = await session.save()

    assert [c[0] for c in service.calls] == ["create", "update"]
    assert second.id == first.id
    assert len(store.notes) == 1
    assert store.get(first.id).body == "<p>milk, eggs</p>"


async def test_failed_create_stays_new(store, service, editor):
    session = NoteEditorSession(store, editor)
    session.title = "Draft"
    service.failures["create"] = ServerError("Notes service error (500)")

    with pytest.raises(ServerError):
        await session.save()

    assert session.is_new
    await session.save()
    assert [c[0] for c in service.calls] == ["create", "create"]
    assert len(store.notes) == 1


async def test_open_existing_note_fills_editor(store, service, editor):
    service.server_notes = [note(5, "Trip", "<p>passport</p>", True)]
    await store.load()
    session = NoteEditorSession(store, editor, note_id=5)

    assert session.open()

    assert session.title == "Trip"
    assert session.completed is True
    assert editor.set_calls == ["<p>passport</p>"]


async def test_open_unknown_note_returns_false(store, editor):
    session = NoteEditorSession(store, editor, note_id=42)
    assert not session.open()
    assert editor.set_calls == []


async def test_open_new_note_is_noop(store, editor):
    assert not NoteEditorSession(store, editor).open()


async def test_edit_updates_with_title_as_typed(store, service, editor):
    service.server_notes = [note(5, "Trip", "<p>passport</p>")]
    await store.load()
    session = NoteEditorSession(store, editor, note_id=5)
    session.open()
    session.title = "Trip "
    editor.content = "<p>passport, tickets</p>"

    saved = await session.save()

    assert service.calls[-1][0] == "update"
    assert saved.title == "Trip "
    assert store.get(5).body == "<p>passport, tickets</p>"


async def test_blank_title_rejected_before_service(store, service, editor):
    session = NoteEditorSession(store, editor)
    session.title = "   "
    with pytest.raises(InputValidationError):
        await session.save()
    assert service.calls == []


async def test_too_long_title_becomes_input_error(store, service, editor):
    session = NoteEditorSession(store, editor)
    session.title = "x" * 501
    with pytest.raises(InputValidationError) as exc:
        await session.save()
    assert exc.value.field == "title"
    assert service.calls == []


async def test_failed_save_keeps_edit_intact(store, service, editor):
    session = NoteEditorSession(store, editor)
    session.title = "Draft"
    editor.content = "<p>unsaved work</p>"
    service.failures["create"] = ServerError("Notes service error (500)")

    with pytest.raises(ServerError):
        await session.save()

    assert session.title == "Draft"
    assert editor.get_content() == "<p>unsaved work</p>"
    assert store.notes == ()
