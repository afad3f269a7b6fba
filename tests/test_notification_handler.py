import pytest
from flask import Flask

from bakingup.storage.notifications import CreateNotificationItem
from bakingup.web.notification_handler import NotificationHandler

ENDPOINTS = [
    "get_all_notifications",
    "create_notification",
    "delete_notification",
    "read_notification",
    "read_all_notifications",
]


class FakeService:
    def __init__(self, result=None, fail=None):
        self.calls = []
        self.result = result
        self.fail = fail

    def __getattr__(self, name):
        def method(*args):
            self.calls.append((name, args))
            if self.fail:
                raise RuntimeError(self.fail)
            return self.result

        return method


def make_client(service):
    app = Flask(__name__)
    handler = NotificationHandler(service)
    for name in ENDPOINTS:
        app.add_url_rule(f"/{name}", name, getattr(handler, name), methods=["GET", "POST", "PUT", "DELETE"])
    return app.test_client()


def test_get_all_notifications_returns_data():
    service = FakeService(result=[{"noti_id": "n1"}])
    body = make_client(service).get("/get_all_notifications?user_id=u1").get_json()
    assert body == {"status": 200, "message": "Success", "data": [{"noti_id": "n1"}]}
    assert service.calls == [("get_all_notifications", ("u1",))]


def test_get_all_notifications_error():
    body = make_client(FakeService(fail="db")).get("/get_all_notifications?user_id=u1").get_json()
    assert body == {
        "status": 400,
        "message": "Cannot get all notifications of the user.",
        "error": "db",
    }


def test_create_notification_builds_item():
    service = FakeService()
    payload = {
        "user_id": "u1",
        "eng_title": "Low stock",
        "thai_title": "t",
        "is_read": True,
        "noti_type": "WARNING",
        "item_id": "i1",
    }
    body = make_client(service).post("/create_notification", json=payload).get_json()
    assert body == {"status": 200, "message": "Successfully add a new notification."}
    ((name, (item,)),) = service.calls
    assert name == "create_notification"
    assert item == CreateNotificationItem(
        user_id="u1",
        eng_title="Low stock",
        thai_title="t",
        is_read=True,
        noti_type="WARNING",
        item_id="i1",
    )


def test_create_notification_requires_user_id():
    service = FakeService()
    body = make_client(service).post("/create_notification", json={"eng_title": "x"}).get_json()
    assert body == {"status": 400, "message": "UserID is required"}
    assert service.calls == []


@pytest.mark.parametrize("payload", [[1], {"user_id": 5}, {"user_id": "u1", "is_read": "yes"}])
def test_create_notification_rejects_bad_body(payload):
    service = FakeService()
    body = make_client(service).post("/create_notification", json=payload).get_json()
    assert body["status"] == 400
    assert body["message"] == "Failed to parse request body"
    assert service.calls == []


def test_create_notification_service_error():
    body = make_client(FakeService(fail="fk")).post(
        "/create_notification", json={"user_id": "u1"}
    ).get_json()
    assert body == {"status": 400, "message": "Cannot add a new notification.", "error": "fk"}


@pytest.mark.parametrize(
    "name,param,done,failure",
    [
        (
            "delete_notification",
            "noti_id",
            "Successfully delete a notification.",
            "Cannot delete a notification.",
        ),
        (
            "read_notification",
            "noti_id",
            "Successfully update the read status of the notification.",
            "Cannot update the read status of the notification.",
        ),
        (
            "read_all_notifications",
            "user_id",
            "Successfully update the read status of all the notifications.",
            "Cannot update the read status of all the notifications.",
        ),
    ],
)
def test_query_actions(name, param, done, failure):
    service = FakeService()
    body = make_client(service).put(f"/{name}?{param}=k1").get_json()
    assert body == {"status": 200, "message": done}
    assert service.calls == [(name, ("k1",))]

    body = make_client(FakeService(fail="missing")).put(f"/{name}?{param}=k1").get_json()
    assert body == {"status": 400, "message": failure, "error": "missing"}