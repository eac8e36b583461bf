"""Notes State — in-memory cache of the user's notes plus load/error flags.

Invariants:
    - Every cached Note carries a server-assigned id; nothing pending is ever stored
    - No two cached Notes share an id
    - Order is the last-fetched server order; created notes are appended
    - is_loading is true only while at least one load is outstanding
    - error only reflects the most recent load; mutations never touch it
    - generation increases on reset(): results tagged with an older generation are stale

Design Decisions:
    - Dataclass with pure mutators: deterministic, testable without a service or event loop
    - Full replacement on load is the reconciliation strategy: no diffing
    - NotesSnapshot is an immutable view handed to subscribers, so readers cannot
      mutate the cache behind the store's back
"""

from dataclasses import dataclass, field

from notesync.schemas.note import Note


@dataclass(frozen=True)
class NotesSnapshot:
    """Read-only view of the store for the presentation layer."""
    notes: tuple[Note, ...] = ()
    is_loading: bool = False
    error: str | None = None


@dataclass
class NotesState:
    """Per-user notes cache — pure dataclass, no IO."""

    notes: list[Note] = field(default_factory=list)
    pending_loads: int = 0
    error: str | None = None
    generation: int = 0

    @property
    def is_loading(self) -> bool:
        return self.pending_loads > 0

    def snapshot(self) -> NotesSnapshot:
        return NotesSnapshot(
            notes=tuple(self.notes),
            is_loading=self.is_loading,
            error=self.error,
        )

    def find(self, note_id: int) -> Note | None:
        for note in self.notes:
            if note.id == note_id:
                return note
        return None

    # ─── Load lifecycle ──────────────────────────────────────────

    def begin_load(self) -> None:
        self.pending_loads += 1
        self.error = None

    def finish_load(self, notes: list[Note]) -> None:
        """Replace the cache wholesale with the server's collection."""
        self.pending_loads = max(0, self.pending_loads - 1)
        self.notes = _dedupe_by_id(notes)

    def fail_load(self, message: str) -> None:
        """Record the failure; the cache stays as it was."""
        self.pending_loads = max(0, self.pending_loads - 1)
        self.error = message

    def abandon_load(self) -> None:
        """The caller gave up waiting (cancelled); cache and error stay as they were."""
        self.pending_loads = max(0, self.pending_loads - 1)

    # ─── Single-record reconciliation ────────────────────────────

    def apply_created(self, note: Note) -> None:
        # A load that finished first may already hold the new note
        if self.find(note.id) is not None:
            self.apply_updated(note)
            return
        self.notes.append(note)

    def apply_updated(self, note: Note) -> None:
        self.notes = [note if n.id == note.id else n for n in self.notes]

    def apply_deleted(self, note_id: int) -> None:
        self.notes = [n for n in self.notes if n.id != note_id]

    def reset(self) -> None:
        """Drop everything (logout). Outstanding results become stale."""
        self.notes = []
        self.pending_loads = 0
        self.error = None
        self.generation += 1


def _dedupe_by_id(notes: list[Note]) -> list[Note]:
    """Keep the first occurrence of each id, preserving server order."""
    seen: set[int] = set()
    unique = []
    for note in notes:
        if note.id in seen:
            continue
        seen.add(note.id)
        unique.append(note)
    return unique
