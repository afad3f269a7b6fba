import sqlite3

import pytest

from bakingup.storage.notifications import CreateNotificationItem, NotificationRepository
from bakingup.storage.schema import connect, create_schema


@pytest.fixture
def repo():
    conn = connect(":memory:")
    create_schema(conn)
    conn.execute("INSERT INTO users (user_id) VALUES ('u1')")
    return NotificationRepository(conn)


def test_create_and_list(repo):
    noti_id = repo.create_notification(CreateNotificationItem("u1", eng_title="Hello"))
    items = repo.get_all_notifications("u1")
    assert [i["noti_id"] for i in items] == [noti_id]
    assert items[0]["eng_title"] == "Hello"
    assert items[0]["is_read"] is False


def test_newest_first(repo):
    first = repo.create_notification(CreateNotificationItem("u1"))
    second = repo.create_notification(CreateNotificationItem("u1"))
    ids = [i["noti_id"] for i in repo.get_all_notifications("u1")]
    assert ids == [second, first]


def test_unknown_user(repo):
    with pytest.raises(sqlite3.IntegrityError):
        repo.create_notification(CreateNotificationItem("nobody"))


def test_read_and_read_all(repo):
    a = repo.create_notification(CreateNotificationItem("u1"))
    repo.create_notification(CreateNotificationItem("u1"))
    repo.read_notification(a)
    states = {i["noti_id"]: i["is_read"] for i in repo.get_all_notifications("u1")}
    assert states[a] is True
    repo.read_all_notifications("u1")
    assert all(i["is_read"] for i in repo.get_all_notifications("u1"))


def test_delete(repo):
    a = repo.create_notification(CreateNotificationItem("u1"))
    repo.delete_notification(a)
    assert repo.get_all_notifications("u1") == []
    with pytest.raises(LookupError):
        repo.delete_notification(a)


def test_read_missing(repo):
    with pytest.raises(LookupError):
        repo.read_notification("missing")