"""Tests for the validated read/write boundary and schema helpers."""

from __future__ import annotations

import json
from typing import Any

import pytest
from pydantic import TypeAdapter

from branchdeck.errors import NoDataError, QuotaExceededError, SchemaValidationError
from branchdeck.models import Notification
from branchdeck.persistence import (
    MISSING,
    configure_storage,
    get_adapter,
    read_validated,
    validate,
    write_validated,
)
from branchdeck.persistence.validated import _is_empty


# -- validate / get_adapter -------------------------------------------------


class TestValidate:
    def test_success(self):
        result = validate(["a", "b"], list[str])
        assert result.success
        assert result.data == ["a", "b"]

    def test_failure_carries_readable_error(self):
        result = validate(["a", 3], list[str])
        assert not result.success
        assert isinstance(result.error, SchemaValidationError)
        assert result.error.description.startswith("1: ")
        assert result.error.issues

    def test_adapter_is_cached(self):
        assert get_adapter(list[int]) is get_adapter(list[int])

    def test_adapter_passthrough(self):
        adapter = TypeAdapter(int)
        assert get_adapter(adapter) is adapter

    def test_model_accepts_camel_case(self):
        result = validate({"id": "n1", "message": "hi", "feedback": "success"}, Notification)
        assert result.success
        assert result.data.feedback == "success"


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, False, "", 0, [], ()])
    def test_empty(self, value):
        assert _is_empty(value)

    @pytest.mark.parametrize("value", [True, "x", 1, ["a"], {"a": 1}, {}])
    def test_not_empty(self, value):
        assert not _is_empty(value)


# -- read_validated -----------------------------------------------------------


class TestReadValidated:
    def test_present_and_valid(self, storage):
        storage.set_item("store_k", '["a"]')
        result = read_validated("store_k", list[str])
        assert result.success
        assert result.data == ["a"]

    def test_absent_uses_default(self):
        result = read_validated("store_k", list[str], ["x"])
        assert result.success
        assert result.data == ["x"]

    def test_absent_no_default_nullable(self):
        result = read_validated("store_k", str | None)
        assert result.success
        assert result.data is None

    def test_absent_no_default_not_nullable(self):
        result = read_validated("store_k", str)
        assert not result.success
        assert isinstance(result.error, NoDataError)

    def test_absent_invalid_default_nullable_falls_to_none(self):
        result = read_validated("store_k", int | None, "not-a-number")
        assert result.success
        assert result.data is None

    def test_absent_invalid_default_not_nullable_fails(self):
        result = read_validated("store_k", int, "not-a-number")
        assert not result.success
        assert isinstance(result.error, SchemaValidationError)

    def test_invalid_stored_without_default_fails(self, storage):
        storage.set_item("store_k", '{"not": "a list"}')
        result = read_validated("store_k", list[str])
        assert not result.success
        assert isinstance(result.error, SchemaValidationError)

    def test_invalid_stored_with_none_default_uses_none(self, storage):
        storage.set_item("store_k", '{"not": "a list"}')
        result = read_validated("store_k", list[str] | None, None)
        assert result.success
        assert result.data is None

    def test_missing_is_not_none(self):
        assert MISSING is not None
        assert repr(MISSING) == "MISSING"
        assert not read_validated("store_k", str, MISSING).success
        assert isinstance(read_validated("store_k", str).error, NoDataError)

    def test_invalid_stored_with_default_uses_default(self, storage):
        storage.set_item("store_k", "42")
        result = read_validated("store_k", list[str], ["fallback"])
        assert result.success
        assert result.data == ["fallback"]

    def test_undefined_treated_as_absent(self, storage):
        storage.set_item("store_k", "undefined")
        result = read_validated("store_k", list[str], ["d"])
        assert result.data == ["d"]

    def test_unparsable_with_default(self, storage):
        storage.set_item("store_k", "{broken")
        result = read_validated("store_k", list[str], ["d"])
        assert result.success
        assert result.data == ["d"]

    def test_unparsable_without_default(self, storage):
        storage.set_item("store_k", "{broken")
        result = read_validated("store_k", list[str])
        assert not result.success
        assert result.error is not None

    def test_no_medium_never_raises(self):
        configure_storage(None)
        assert read_validated("store_k", list[str], ["d"]).data == ["d"]
        assert not read_validated("store_k", list[str]).success

    def test_storage_error_never_raises(self):
        class Broken:
            def get_item(self, key: str) -> Any:
                raise OSError("disk gone")

        configure_storage(Broken())  # type: ignore[arg-type]
        result = read_validated("store_k", str)
        assert not result.success
        assert isinstance(result.error, OSError)


# -- write_validated ----------------------------------------------------------


class TestWriteValidated:
    def test_writes_json(self, storage):
        result = write_validated("store_k", ["a", "b"], list[str])
        assert result.success
        assert json.loads(storage.get_item("store_k")) == ["a", "b"]

    def test_invalid_value_leaves_storage_untouched(self, storage):
        storage.set_item("store_k", '["old"]')
        result = write_validated("store_k", [1, {"x": 2}], list[str])
        assert not result.success
        assert storage.get_item("store_k") == '["old"]'

    @pytest.mark.parametrize("value", [None, [], "", False, 0])
    def test_empty_values_remove_key(self, storage, value):
        storage.set_item("store_k", '"something"')
        schema: Any = bool | int | str | list[str] | None
        result = write_validated("store_k", value, schema)
        assert result.success
        assert storage.get_item("store_k") is None

    def test_models_dump_camel_case(self, storage):
        note = Notification(id="n1", message="hello", date=5)
        write_validated("store_n", note, Notification)
        assert json.loads(storage.get_item("store_n")) == {
            "id": "n1",
            "title": None,
            "message": "hello",
            "feedback": "default",
            "date": 5,
        }

    def test_quota_failure_reported(self):
        from branchdeck.persistence import MemoryStorage

        configure_storage(MemoryStorage(quota_bytes=4))
        result = write_validated("store_k", ["a long value"], list[str])
        assert not result.success
        assert isinstance(result.error, QuotaExceededError)

    def test_round_trip_through_read(self):
        write_validated("store_k", {"a": 1}, dict[str, int])
        assert read_validated("store_k", dict[str, int]).data == {"a": 1}
