"""Notes Routes — per-user note CRUD behind bearer-token auth.

Invariants:
    - Every route resolves the caller from the token (401 otherwise)
    - A note owned by another user is reported as 404, same as a missing one
    - PUT replaces title, body and completed together (no partial update)
    - GET /notes returns the caller's notes oldest first
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notesync.core.errors import NoteNotFoundError
from notesync.schemas.note import Note, NoteDraft, NotePatch
from notesync.server.dependencies import get_current_user, get_db
from notesync.server.models import NoteRecord, User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/notes", tags=["notes"])


async def get_note_or_404(
    note_id: int, user: User, db: AsyncSession,
) -> NoteRecord:
    record = await db.get(NoteRecord, note_id)
    if record is None or record.user_id != user.id:
        raise NoteNotFoundError(note_id)
    return record


@router.get("", response_model=list[Note])
async def list_notes(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(NoteRecord)
        .where(NoteRecord.user_id == user.id)
        .order_by(NoteRecord.id),
    )
    return [Note.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(
    body: NoteDraft,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = NoteRecord(
        user_id=user.id, title=body.title, body=body.body,
        completed=body.completed,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    logger.info("Note created", extra={"note_id": record.id})
    return Note.model_validate(record)


@router.put("/{note_id}", response_model=Note)
async def update_note(
    note_id: int,
    body: NotePatch,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await get_note_or_404(note_id, user, db)
    record.title = body.title
    record.body = body.body
    record.completed = body.completed
    await db.commit()
    await db.refresh(record)
    logger.info("Note updated", extra={"note_id": note_id})
    return Note.model_validate(record)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    record = await get_note_or_404(note_id, user, db)
    await db.delete(record)
    await db.commit()
    logger.info("Note deleted", extra={"note_id": note_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
