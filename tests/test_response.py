from bakingup.web.response import Response, error, success, success_message


def test_success_with_data():
    assert success({"a": 1}).to_dict() == {
        "status": 200,
        "message": "Success",
        "data": {"a": 1},
    }


def test_success_without_data_omits_field():
    assert success(None).to_dict() == {"status": 200, "message": "Success"}


def test_error_body():
    body = error(400, "Cannot get the language", "boom").to_dict()
    assert body == {"status": 400, "message": "Cannot get the language", "error": "boom"}


def test_error_with_empty_text_omits_field():
    assert "error" not in error(400, "UserID is required", "").to_dict()


def test_success_message():
    assert success_message("done") == Response(200, "done")
    assert success_message("done").to_dict() == {"status": 200, "message": "done"}