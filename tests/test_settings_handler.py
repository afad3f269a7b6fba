from datetime import datetime, timezone

import pytest
from flask import Flask

from bakingup.storage.settings import ChangeExpirationDateSetting, ChangeUserLanguage
from bakingup.web.settings_handler import SettingsHandler


class FakeService:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))
        if self.fail:
            raise RuntimeError("boom")

    def delete_account(self, user_id):
        self._record("delete_account", user_id)

    def get_language(self, user_id):
        self._record("get_language", user_id)
        return {"language": "EN"}

    def change_language(self, setting):
        self._record("change_language", setting)

    def get_fix_cost(self, user_id, created_at):
        self._record("get_fix_cost", user_id, created_at)
        return {"rent": 1.0}

    def change_fix_cost(self, setting):
        self._record("change_fix_cost", setting)

    def get_color_expired(self, user_id):
        self._record("get_color_expired", user_id)
        return {"red": 5}

    def change_color_expired(self, setting):
        self._record("change_color_expired", setting)


def make_client(service):
    handler = SettingsHandler(service)
    app = Flask(__name__)
    app.add_url_rule("/delete", view_func=handler.delete_account, methods=["DELETE"])
    app.add_url_rule("/lang", view_func=handler.get_language)
    app.add_url_rule("/lang", view_func=handler.change_language, methods=["PUT"], endpoint="cl")
    app.add_url_rule("/fix", view_func=handler.get_fix_cost)
    app.add_url_rule("/fix", view_func=handler.change_fix_cost, methods=["PUT"], endpoint="cf")
    app.add_url_rule("/color", view_func=handler.get_color_expired)
    app.add_url_rule(
        "/color", view_func=handler.change_color_expired, methods=["PUT"], endpoint="cc"
    )
    return app.test_client()


def test_get_language():
    service = FakeService()
    body = make_client(service).get("/lang?user_id=u1").get_json()
    assert body == {"status": 200, "message": "Success", "data": {"language": "EN"}}
    assert service.calls == [("get_language", ("u1",))]


def test_get_language_error_keeps_http_200():
    resp = make_client(FakeService(fail=True)).get("/lang?user_id=u1")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": 400, "message": "Cannot get the language", "error": "boom"}


def test_change_language():
    service = FakeService()
    body = make_client(service).put("/lang", json={"user_id": "u1", "language": "Thai"}).get_json()
    assert body["message"] == "Successfully change the language."
    assert service.calls == [("change_language", (ChangeUserLanguage("u1", "Thai"),))]


def test_change_language_requires_user():
    body = make_client(FakeService()).put("/lang", json={"language": "Thai"}).get_json()
    assert body == {"status": 400, "message": "UserID is required"}


def test_change_language_bad_body():
    body = make_client(FakeService()).put("/lang", data="nope").get_json()
    assert body["message"] == "Failed to parse request body"


def test_get_fix_cost_parses_date():
    service = FakeService()
    body = make_client(service).get("/fix?user_id=u1&created_at=2024-05-01T00:00:00Z").get_json()
    assert body["data"] == {"rent": 1.0}
    assert service.calls[0][1] == ("u1", datetime(2024, 5, 1, tzinfo=timezone.utc))


def test_get_fix_cost_invalid_date():
    service = FakeService()
    body = make_client(service).get("/fix?user_id=u1&created_at=yesterday").get_json()
    assert body["message"] == "Invalid date format for created_at"
    assert service.calls == []


def test_get_fix_cost_service_error_ends_in_success():
    body = make_client(FakeService(fail=True)).get(
        "/fix?user_id=u1&created_at=2024-05-01T00:00:00Z"
    ).get_json()
    assert body == {"status": 200, "message": "Success"}


def test_change_color_expired():
    service = FakeService()
    payload = {
        "user_id": "u1",
        "black_expiration_date": 0,
        "red_expiration_date": 5,
        "yellow_expiration_date": 10,
    }
    body = make_client(service).put("/color", json=payload).get_json()
    assert body["message"] == "Successfully change the color of expiration icon"
    assert service.calls == [
        ("change_color_expired", (ChangeExpirationDateSetting("u1", 0, 5, 10),))
    ]


@pytest.mark.parametrize(
    "method,path,message",
    [
        ("delete", "/delete?user_id=u1", "Cannot delete an account"),
        ("get", "/color?user_id=u1", "Cannot get the color of expiration icon"),
    ],
)
def test_errors(method, path, message):
    client = make_client(FakeService(fail=True))
    body = getattr(client, method)(path).get_json()
    assert body == {"status": 400, "message": message, "error": "boom"}


def test_delete_account_success():
    body = make_client(FakeService()).delete("/delete?user_id=u1").get_json()
    assert body == {"status": 200, "message": "Successfully delete an account"}


def test_change_fix_cost():
    service = FakeService()
    body = make_client(service).put("/fix", json={"fix_cost_id": "f1", "rent": 3}).get_json()
    assert body["message"] == "Successfully change the fix cost"
    setting = service.calls[0][1][0]
    assert (setting.fix_cost_id, setting.rent) == ("f1", 3.0)