from flask import Flask

from bakingup.storage.users import ManageUserRequest
from bakingup.web.user_handler import UserHandler


class FakeService:
    def __init__(self):
        self.users = {"u1": {"user_id": "u1", "first_name": "Ann"}}
        self.edited = []

    def get_user_info(self, user_id):
        if user_id not in self.users:
            raise LookupError("no such user")
        return self.users[user_id]

    def edit_user_info(self, user):
        if user.user_id not in self.users:
            raise LookupError("no such user")
        self.edited.append(user)


def _client(service):
    app = Flask(__name__)
    handler = UserHandler(service)
    app.add_url_rule("/info", view_func=handler.get_user_info, methods=["GET"])
    app.add_url_rule("/edit", view_func=handler.edit_user_info, methods=["PUT"])
    return app.test_client()


def test_get_user_info():
    body = _client(FakeService()).get("/info?user_id=u1").get_json()
    assert body == {"status": 200, "message": "Success", "data": {"user_id": "u1", "first_name": "Ann"}}


def test_get_user_info_error():
    body = _client(FakeService()).get("/info?user_id=x").get_json()
    assert body["status"] == 400
    assert body["message"] == "Cannot get the user information"
    assert body["error"] == "'no such user'"


def test_edit_user_info_success():
    service = FakeService()
    body = _client(service).put("/edit", json={"user_id": "u1", "first_name": "Bo"}).get_json()
    assert body == {"status": 200, "message": "Successfully edit the user information."}
    assert service.edited == [ManageUserRequest("u1", "Bo")]


def test_edit_user_info_requires_user_id():
    service = FakeService()
    body = _client(service).put("/edit", json={"first_name": "Bo"}).get_json()
    assert body == {"status": 400, "message": "UserID is required"}
    assert service.edited == []


def test_edit_user_info_bad_body():
    body = _client(FakeService()).put("/edit", data="x", content_type="text/plain").get_json()
    assert body["message"] == "Failed to parse request body"


def test_edit_user_info_service_error():
    body = _client(FakeService()).put("/edit", json={"user_id": "zz"}).get_json()
    assert body["message"] == "Cannot edit the user information"