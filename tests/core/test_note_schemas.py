"""Note Schemas — field validation shared by client and server."""

import pytest
from pydantic import ValidationError

from notesync.schemas.auth import RegisterCredentials
from notesync.schemas.note import Note, NoteDraft, NotePatch


def test_draft_defaults():
    draft = NoteDraft(title="Groceries")
    assert draft.body == ""
    assert draft.completed is False


def test_draft_keeps_title_as_given():
    assert NoteDraft(title=" padded ").title == " padded "


def test_blank_title_rejected():
    with pytest.raises(ValidationError):
        NoteDraft(title="   ")


def test_patch_requires_every_field():
    with pytest.raises(ValidationError):
        NotePatch(title="only title")


def test_note_is_frozen():
    n = Note(id=1, title="t")
    with pytest.raises(ValidationError):
        n.title = "changed"


def test_note_requires_positive_id():
    with pytest.raises(ValidationError):
        Note(id=0, title="t")


def test_register_password_minimum():
    with pytest.raises(ValidationError):
        RegisterCredentials(email="ana@example.com", password="short")
