"""HTTP handlers for ingredients and their stock batches."""

from __future__ import annotations

from typing import Any, Callable

from flask import jsonify, request

from bakingup.web.response import Response, error, success, success_message


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


def _json_object() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    return data


class IngredientHandler:
    """Ingredient endpoints; each method serves the current Flask request.

    Request bodies are handed to the service as decoded JSON objects.
    """

    def __init__(self, service: Any) -> None:
        self.service = service

    def _fetch(self, param: str, action: Callable[[str], Any], failure: str):
        try:
            result = action(request.args.get(param, ""))
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(result))

    def _remove(self, param: str, action: Callable[[str], Any], failure: str):
        try:
            action(request.args.get(param, ""))
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(None))

    def _submit(
        self, action: Callable[[dict[str, Any]], Any], failure: str, done: str | None = None
    ):
        try:
            body = _json_object()
        except ValueError as exc:
            return _send(error(400, failure, str(exc)))
        try:
            action(body)
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        if done is None:
            return _send(success(None))
        return _send(success_message(done))

    def get_all_ingredients(self):
        return self._fetch(
            "user_id", self.service.get_all_ingredients, "Cannot get all ingredients"
        )

    def get_ingredient_detail(self):
        return self._fetch(
            "ingredient_id", self.service.get_ingredient_detail, "Cannot get ingredient detail"
        )

    def get_ingredient_stock_detail(self):
        return self._fetch(
            "ingredient_stock_id",
            self.service.get_ingredient_stock_detail,
            "Cannot get ingredient stock detail",
        )

    def get_add_edit_ingredient_stock_detail(self):
        return self._fetch(
            "ingredient_id",
            self.service.get_add_edit_ingredient_stock_detail,
            "Cannot get add edit ingredient stock detail",
        )

    def delete_ingredient_batch_note(self):
        return self._remove(
            "ingredient_note_id",
            self.service.delete_ingredient_batch_note,
            "Cannot delete ingredient batch note",
        )

    def delete_ingredient(self):
        return self._remove(
            "ingredient_id", self.service.delete_ingredient, "Cannot delete an ingredient"
        )

    def delete_ingredient_stock(self):
        return self._remove(
            "ingredient_stock_id",
            self.service.delete_ingredient_stock,
            "Cannot delete an ingredient stock",
        )

    def add_ingredient(self):
        return self._submit(self.service.add_ingredient, "Cannot add ingredients")

    def add_ingredient_stock(self):
        return self._submit(
            self.service.add_ingredient_stock,
            "Cannot add ingredient stock",
            "Successfully add ingredient stock",
        )

    def edit_ingredient(self):
        return self._submit(
            self.service.edit_ingredient, "Cannot edit ingredient", "Successfully edit ingredient"
        )

    def get_add_edit_ingredient_detail(self):
        return self._fetch(
            "ingredient_id",
            self.service.get_add_edit_ingredient_detail,
            "Cannot get add edit ingredient detail",
        )

    def edit_ingredient_stock(self):
        return self._submit(
            self.service.edit_ingredient_stock,
            "Cannot edit ingredient stock",
            "Successfully edit ingredient stock",
        )

    def get_edit_ingredient_stock_detail(self):
        return self._fetch(
            "ingredient_stock_id",
            self.service.get_edit_ingredient_stock_detail,
            "Cannot get edit ingredient stock detail",
        )

    def get_ingredient_lists_from_receipt(self):
        failure = "Cannot get ingredient lists from receipt"
        upload = request.files.get("file")
        if upload is None:
            return _send(error(400, failure, "there is no uploaded file associated with the given key"))
        try:
            result = self.service.get_ingredient_lists_from_receipt(
                upload.filename or "", upload.read()
            )
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(result))

    def get_all_ingredient_ids_and_names(self):
        return self._fetch(
            "user_id",
            self.service.get_all_ingredient_ids_and_names,
            "Cannot get all ingredient IDs and names",
        )

    def add_ingredient_and_stock(self):
        return self._submit(
            self.service.add_ingredient_and_stock,
            "Cannot add ingredient and stock",
            "Successfully add ingredient and stock",
        )