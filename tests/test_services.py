"""
Tests for UserService and MessageService.
"""
import asyncio
import re

import pytest

from user_store_api.app.core.config import settings
from user_store_api.app.core.errors import StorageError, ValidationError
from user_store_api.app.services.message_service import MessageService
from user_store_api.app.services.user_service import UserService

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def run(coro):
    return asyncio.run(coro)


def test_get_or_create_builds_full_defaults(data_dir):
    user = run(UserService.get_or_create("42"))
    assert user["id"] == "42"
    assert user["username"] == "user_42"
    assert user["coins"] == 0
    assert user["level"] == 1
    assert user["messages"] == []
    assert TIMESTAMP_RE.match(user["createdAt"])
    assert (data_dir / "42.json").is_file()


def test_get_or_create_second_call_is_a_pure_read(data_dir):
    first = run(UserService.get_or_create("42"))
    raw = (data_dir / "42.json").read_bytes()
    second = run(UserService.get_or_create("42"))
    assert second == first
    assert (data_dir / "42.json").read_bytes() == raw


def test_get_or_create_returns_stored_record_verbatim(write_user):
    write_user("7", {"id": "7", "custom": {"nested": True}})
    assert run(UserService.get_or_create("7")) == {"id": "7", "custom": {"nested": True}}


def test_get_or_create_corrupt_document(data_dir):
    (data_dir / "9.json").write_text("{", encoding="utf-8")
    with pytest.raises(StorageError):
        run(UserService.get_or_create("9"))


def test_merge_update_never_changes_id(data_dir):
    user = run(UserService.merge_update("42", {"id": "999", "coins": 5}))
    assert user["id"] == "42"
    assert user["coins"] == 5
    assert not (data_dir / "999.json").exists()


def test_merge_update_on_unknown_id_uses_minimal_stub(read_user):
    user = run(UserService.merge_update("5", {"level": 3}))
    assert set(user) == {"id", "createdAt", "level"}
    assert read_user("5") == user


def test_merge_update_preserves_created_at(data_dir):
    created = run(UserService.get_or_create("42"))["createdAt"]
    for coins in range(3):
        run(UserService.merge_update("42", {"coins": coins}))
    user = run(UserService.merge_update("42", {"createdAt": "1970-01-01T00:00:00.000Z"}))
    assert user["createdAt"] == created


def test_merge_update_is_shallow_and_keeps_extra_fields(data_dir):
    run(UserService.merge_update("42", {"inventory": {"sword": 1, "shield": 1}, "title": "knight"}))
    user = run(UserService.merge_update("42", {"inventory": {"bow": 1}}))
    assert user["inventory"] == {"bow": 1}
    assert user["title"] == "knight"


def test_merge_update_does_not_validate_values(data_dir):
    user = run(UserService.merge_update("42", {"coins": "lots", "messages": None}))
    assert user["coins"] == "lots"
    assert user["messages"] is None


def test_list_users_on_empty_store_creates_directory(tmp_path, monkeypatch):
    directory = tmp_path / "fresh"
    monkeypatch.setattr(settings, "data_dir", str(directory))
    assert run(UserService.list_users()) == []
    assert directory.is_dir()


def test_list_users_returns_every_record(write_user, data_dir):
    write_user("1", {"id": "1"})
    write_user("2", {"id": "2"})
    (data_dir / "README").write_text("not a user", encoding="utf-8")
    users = run(UserService.list_users())
    assert sorted(u["id"] for u in users) == ["1", "2"]


def test_list_users_is_all_or_nothing(write_user, data_dir):
    write_user("1", {"id": "1"})
    (data_dir / "2.json").write_text("garbage", encoding="utf-8")
    with pytest.raises(StorageError):
        run(UserService.list_users())


def test_append_message_creates_message_stub(read_user):
    message = run(MessageService.append_message("8", {"from": "player_1", "text": "hi"}))
    assert message["from"] == "player_1"
    assert message["text"] == "hi"
    assert TIMESTAMP_RE.match(message["date"])
    user = read_user("8")
    assert set(user) == {"id", "messages", "coins", "createdAt"}
    assert user["coins"] == 0
    assert user["messages"] == [message]


def test_append_message_is_cumulative(data_dir):
    run(UserService.get_or_create("42"))
    for text in ("one", "two", "three"):
        run(MessageService.append_message("42", {"from": "admin", "text": text}))
    user = run(UserService.get_or_create("42"))
    assert [m["text"] for m in user["messages"]] == ["one", "two", "three"]
    for message in user["messages"]:
        assert message["from"] == "admin"
        assert message["date"]


def test_append_message_restores_missing_log(write_user, read_user):
    write_user("3", {"id": "3", "messages": None})
    run(MessageService.append_message("3", {"from": "admin", "text": "hello"}))
    assert len(read_user("3")["messages"]) == 1


@pytest.mark.parametrize(
    "body",
    [
        {"from": "", "text": "hi"},
        {"from": "admin", "text": ""},
        {"text": "hi"},
        {"from": "admin"},
        {},
    ],
)
def test_append_message_rejects_missing_fields(write_user, read_user, body):
    write_user("42", {"id": "42", "messages": []})
    with pytest.raises(ValidationError) as excinfo:
        run(MessageService.append_message("42", body))
    assert excinfo.value.code == "missing fields"
    assert read_user("42") == {"id": "42", "messages": []}


def test_append_message_rejection_does_not_create_record(data_dir):
    with pytest.raises(ValidationError):
        run(MessageService.append_message("new", {"from": "admin", "text": ""}))
    assert not (data_dir / "new.json").exists()


def test_broadcast_with_no_users(data_dir):
    assert run(MessageService.broadcast({"text": "hello"})) == 0
    assert list(data_dir.iterdir()) == []


def test_broadcast_reaches_every_user(data_dir, read_user):
    for user_id in ("1", "2", "3"):
        run(UserService.get_or_create(user_id))
    run(MessageService.append_message("2", {"from": "player_1", "text": "earlier"}))

    assert run(MessageService.broadcast({"text": "hello"})) == 3

    for user_id in ("1", "2", "3"):
        last = read_user(user_id)["messages"][-1]
        assert last["from"] == "admin"
        assert last["text"] == "hello"
    assert len(read_user("2")["messages"]) == 2


def test_broadcast_keeps_explicit_sender(data_dir, read_user):
    run(UserService.get_or_create("1"))
    run(MessageService.broadcast({"from": "moderator", "text": "hello"}))
    assert read_user("1")["messages"][-1]["from"] == "moderator"


def test_broadcast_counts_every_directory_entry(data_dir, write_user):
    write_user("1", {"id": "1"})
    (data_dir / "notes.txt").write_text("", encoding="utf-8")
    assert run(MessageService.broadcast({"text": "hello"})) == 2


def test_broadcast_requires_text(data_dir):
    with pytest.raises(ValidationError) as excinfo:
        run(MessageService.broadcast({"from": "admin"}))
    assert excinfo.value.code == "missing text"


def test_broadcast_aborts_on_corrupt_record(data_dir, write_user):
    write_user("1", {"id": "1"})
    (data_dir / "2.json").write_text("garbage", encoding="utf-8")
    with pytest.raises(StorageError):
        run(MessageService.broadcast({"text": "hello"}))


def test_append_message_rejects_non_list_log(data_dir, read_user):
    run(UserService.merge_update("42", {"messages": "legacy"}))
    with pytest.raises(StorageError):
        run(MessageService.append_message("42", {"from": "admin", "text": "hi"}))
    assert read_user("42")["messages"] == "legacy"


def test_broadcast_aborts_on_non_list_log(data_dir):
    run(UserService.merge_update("42", {"messages": {"0": "legacy"}}))
    with pytest.raises(StorageError):
        run(MessageService.broadcast({"text": "hello"}))
