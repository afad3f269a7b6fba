from unittest.mock import MagicMock

import pytest
from flask import Flask

from bakingup.web.recipe_handler import RecipeHandler

_ENDPOINTS = (
    "get_all_recipes",
    "get_recipe_detail",
    "delete_recipe",
    "add_recipe",
    "update_hidden_cost",
    "update_labor_cost",
    "update_profit_margin",
    "edit_recipe",
    "get_edit_recipe_detail",
)


@pytest.fixture
def service():
    return MagicMock()


@pytest.fixture
def client(service):
    app = Flask(__name__)
    handler = RecipeHandler(service)
    for name in _ENDPOINTS:
        app.add_url_rule(
            f"/{name}", endpoint=name, view_func=getattr(handler, name),
            methods=["GET", "POST", "PUT", "DELETE"],
        )
    return app.test_client()


def test_get_all_recipes_success(client, service):
    service.get_all_recipes.return_value = [{"recipe_id": "r1"}]
    body = client.get("/get_all_recipes?user_id=u1").get_json()
    service.get_all_recipes.assert_called_once_with("u1")
    assert body == {"status": 200, "message": "Success", "data": [{"recipe_id": "r1"}]}


def test_get_recipe_detail_error(client, service):
    service.get_recipe_detail.side_effect = LookupError("missing")
    body = client.get("/get_recipe_detail?recipe_id=r9").get_json()
    assert body == {"status": 400, "message": "Cannot get recipe detail", "error": "missing"}


def test_get_edit_recipe_detail_passes_id(client, service):
    service.get_edit_recipe_detail.return_value = {"recipe_id": "r2"}
    body = client.get("/get_edit_recipe_detail?recipe_id=r2").get_json()
    service.get_edit_recipe_detail.assert_called_once_with("r2")
    assert body["data"] == {"recipe_id": "r2"}


def test_delete_recipe_success_has_no_data(client, service):
    body = client.delete("/delete_recipe?recipe_id=r1").get_json()
    service.delete_recipe.assert_called_once_with("r1")
    assert body == {"status": 200, "message": "Success"}


def test_delete_recipe_error(client, service):
    service.delete_recipe.side_effect = RuntimeError("boom")
    body = client.delete("/delete_recipe?recipe_id=r1").get_json()
    assert body["message"] == "Cannot delete a recipe"
    assert body["error"] == "boom"


@pytest.mark.parametrize(
    "name, failure",
    [
        ("add_recipe", "Cannot add a recipe"),
        ("update_hidden_cost", "Cannot update hidden cost"),
        ("update_labor_cost", "Cannot update labor cost"),
        ("update_profit_margin", "Cannot update profit margin"),
        ("edit_recipe", "Cannot edit a recipe"),
    ],
)
def test_submit_endpoints(client, service, name, failure):
    payload = {"recipe_id": "r1", "value": 3}
    body = client.post(f"/{name}", json=payload).get_json()
    getattr(service, name).assert_called_once_with(payload)
    assert body == {"status": 200, "message": "Success"}

    getattr(service, name).side_effect = ValueError("bad")
    body = client.post(f"/{name}", json=payload).get_json()
    assert body == {"status": 400, "message": failure, "error": "bad"}


def test_unparsable_body_is_rejected(client, service):
    resp = client.put("/edit_recipe", data="not json", content_type="application/json")
    body = resp.get_json()
    assert body["status"] == 400
    assert body["message"] == "Cannot parse request body"
    service.edit_recipe.assert_not_called()


def test_non_object_body_is_rejected(client, service):
    body = client.post("/add_recipe", json=[1, 2]).get_json()
    assert body["message"] == "Cannot parse request body"
    service.add_recipe.assert_not_called()