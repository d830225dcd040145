import pytest
from sqlalchemy import text

from shortlink.core.exceptions import PersistenceError, ShortCodeConflictError
from shortlink.db import repository


def test_create_and_lookup(db_session, context):
    created = repository.create_url(db_session, "abc123", "https://example.com/a")
    assert created.id is not None

    by_code = repository.get_url_by_short_code(db_session, "abc123")
    by_url = repository.get_url_by_long_url(db_session, "https://example.com/a")
    assert by_code.long_url == "https://example.com/a"
    assert by_url.short_code == "abc123"


def test_lookup_missing_returns_none(db_session, context):
    assert repository.get_url_by_short_code(db_session, "missing") is None
    assert repository.get_url_by_long_url(db_session, "https://nowhere.example/") is None


def test_ids_increase(db_session, context):
    first = repository.create_url(db_session, "first", "https://example.com/1")
    second = repository.create_url(db_session, "second", "https://example.com/2")
    assert second.id > first.id


def test_duplicate_short_code_conflicts(db_session, context):
    repository.create_url(db_session, "dup", "https://example.com/one")
    with pytest.raises(ShortCodeConflictError):
        repository.create_url(db_session, "dup", "https://example.com/two")
    # Session is usable again after the rollback
    assert repository.get_url_by_short_code(db_session, "dup").long_url == "https://example.com/one"


def test_short_codes_are_case_sensitive(db_session, context):
    repository.create_url(db_session, "AbC", "https://example.com/upper")
    repository.create_url(db_session, "abc", "https://example.com/lower")
    assert repository.get_url_by_short_code(db_session, "AbC").long_url == "https://example.com/upper"


def test_delete(db_session, context):
    repository.create_url(db_session, "gone", "https://example.com/gone")
    assert repository.delete_url(db_session, "gone") == 1
    assert repository.get_url_by_short_code(db_session, "gone") is None


def test_delete_absent_is_noop(db_session, context):
    assert repository.delete_url(db_session, "never-existed") == 0


def test_datastore_failure_is_wrapped(db_session, context):
    db_session.execute(text("DROP TABLE short_urls"))
    db_session.commit()
    with pytest.raises(PersistenceError):
        repository.get_url_by_short_code(db_session, "abc")
    with pytest.raises(PersistenceError):
        repository.get_url_by_long_url(db_session, "https://example.com/a")
    with pytest.raises(PersistenceError):
        repository.delete_url(db_session, "abc")
