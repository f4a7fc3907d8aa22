"""Reglas de autorización y ciclo de vida de notas (sin capa HTTP)."""
from unittest.mock import MagicMock

import pytest

from app.api.schemas.note import Note
from app.core.exceptions import NoteForbiddenError, NoteNotFoundError
from app.repositories.note_repo_memory import InMemoryNoteRepository
from app.services.note_service import NoteService


def test_list_returns_only_callers_notes_sorted(service):
    a1 = service.create_note("alice", "one")
    service.create_note("bob", "two")
    a2 = service.create_note("alice", "three")

    notes = service.list_notes("alice", "")

    assert [n.id for n in notes] == [a1.id, a2.id]
    assert all(n.author == "alice" for n in notes)


def test_list_filters_by_case_sensitive_substring(service):
    service.create_note("alice", "Buy milk")
    keep = service.create_note("alice", "buy bread")
    service.create_note("bob", "buy bread too")

    notes = service.list_notes("alice", "buy")

    assert notes == [keep]


def test_list_treats_substring_literally(service):
    service.create_note("alice", "anything")
    hit = service.create_note("alice", "50% off .*")

    assert service.list_notes("alice", ".*") == [hit]
    assert service.list_notes("alice", "%") == [hit]


def test_list_empty_is_success(service):
    assert service.list_notes("nobody", "") == []


def test_create_then_get(service):
    created = service.create_note("alice", "hello")

    got = service.get_note("alice", created.id)

    assert got == Note(id=created.id, author="alice", content="hello")


def test_get_other_users_note_is_forbidden(service):
    note = service.create_note("alice", "private")

    with pytest.raises(NoteForbiddenError):
        service.get_note("bob", note.id)


def test_get_missing_note_is_not_found(service):
    with pytest.raises(NoteNotFoundError) as exc:
        service.get_note("alice", 404)
    assert exc.value.message == "Note with noteId 404 not found"


def test_delete_then_get_is_not_found_and_id_not_reused(service):
    note = service.create_note("alice", "temp")

    service.delete_note(note.id)

    with pytest.raises(NoteNotFoundError):
        service.get_note("alice", note.id)
    assert service.create_note("alice", "next").id > note.id


def test_delete_missing_is_not_found(service):
    with pytest.raises(NoteNotFoundError):
        service.delete_note(1)


def test_move_transfers_ownership(service):
    note = service.create_note("alice", "buy milk")

    moved = service.move_note("alice", note.id, "bob")

    assert moved == Note(id=note.id, author="bob", content="buy milk")
    assert service.get_note("bob", note.id) == moved
    with pytest.raises(NoteForbiddenError):
        service.get_note("alice", note.id)


def test_move_by_non_owner_is_forbidden_and_leaves_author(service):
    note = service.create_note("alice", "mine")

    with pytest.raises(NoteForbiddenError):
        service.move_note("bob", note.id, "carol")

    assert service.get_note("alice", note.id).author == "alice"


def test_move_missing_is_not_found(service):
    with pytest.raises(NoteNotFoundError):
        service.move_note("alice", 7, "bob")


def test_update_changes_only_content(service):
    note = service.create_note("alice", "old")

    updated = service.update_note(note.id, "new content")

    assert updated == Note(id=note.id, author="alice", content="new content")
    assert service.get_note("alice", note.id) == updated


def test_update_is_idempotent(service):
    note = service.create_note("alice", "old")

    service.update_note(note.id, "same")
    again = service.update_note(note.id, "same")

    assert again.content == "same"


def test_update_missing_is_not_found(service):
    with pytest.raises(NoteNotFoundError):
        service.update_note(3, "x")


def test_update_after_concurrent_delete_is_not_found():
    repo = MagicMock()
    repo.update_content.return_value = None

    with pytest.raises(NoteNotFoundError):
        NoteService(repo).update_note(1, "y")


class _RacingRepo(InMemoryNoteRepository):
    """Ejecuta la escritura de otra petición justo antes de la propia."""

    def __init__(self) -> None:
        super().__init__()
        self.race = None

    def _fire(self) -> None:
        action, self.race = self.race, None
        if action:
            action()

    def update_content(self, note_id, content):
        self._fire()
        return super().update_content(note_id, content)

    def update_author(self, note_id, author, *, expected_author=None):
        self._fire()
        return super().update_author(note_id, author, expected_author=expected_author)


def test_update_keeps_author_set_by_concurrent_move():
    repo = _RacingRepo()
    service = NoteService(repo)
    note = service.create_note("alice", "draft")
    repo.race = lambda: service.move_note("alice", note.id, "bob")

    updated = service.update_note(note.id, "edited")

    assert updated == Note(id=note.id, author="bob", content="edited")
    assert service.get_note("bob", note.id) == updated
    with pytest.raises(NoteForbiddenError):
        service.get_note("alice", note.id)


def test_move_keeps_content_set_by_concurrent_update():
    repo = _RacingRepo()
    service = NoteService(repo)
    note = service.create_note("alice", "draft")
    repo.race = lambda: service.update_note(note.id, "edited")

    moved = service.move_note("alice", note.id, "bob")

    assert moved == Note(id=note.id, author="bob", content="edited")


def test_move_loses_race_to_another_move_is_forbidden():
    repo = _RacingRepo()
    service = NoteService(repo)
    note = service.create_note("alice", "draft")
    repo.race = lambda: repo.update_author(note.id, "carol")

    with pytest.raises(NoteForbiddenError):
        service.move_note("alice", note.id, "bob")

    assert service.get_note("carol", note.id).author == "carol"


def test_move_after_concurrent_delete_is_not_found():
    repo = _RacingRepo()
    service = NoteService(repo)
    note = service.create_note("alice", "draft")
    repo.race = lambda: repo.delete(note.id)

    with pytest.raises(NoteNotFoundError):
        service.move_note("alice", note.id, "bob")


def test_reads_do_not_mutate():
    repo = MagicMock()
    repo.find_by_id.return_value = Note(id=1, author="alice", content="x")
    repo.find_by_author_containing.return_value = []
    service = NoteService(repo)

    service.get_note("alice", 1)
    service.list_notes("alice", "x")

    repo.insert.assert_not_called()
    repo.update_content.assert_not_called()
    repo.update_author.assert_not_called()
    repo.delete.assert_not_called()


def test_mutations_hit_the_store_once():
    repo = MagicMock()
    repo.find_by_id.return_value = Note(id=1, author="alice", content="x")
    repo.update_author.return_value = Note(id=1, author="bob", content="x")
    service = NoteService(repo)

    service.move_note("alice", 1, "bob")
    service.update_note(1, "y")

    repo.update_author.assert_called_once_with(1, "bob", expected_author="alice")
    repo.update_content.assert_called_once_with(1, "y")


def test_store_failures_propagate():
    repo = MagicMock()
    repo.find_by_author_containing.side_effect = RuntimeError("db down")

    with pytest.raises(RuntimeError):
        NoteService(repo).list_notes("alice", "")
