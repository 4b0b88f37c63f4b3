"""Unit tests for ObjectMapper."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

import pytest
from pydantic import BaseModel

from proc_query.core.exceptions import FieldMappingError, UnsupportedTargetError
from proc_query.mapping.model import ObjectMapper


@dataclass
class UserDC:
    id: int = 0
    UserName: str = ""
    email: str | None = None
    balance: Decimal = Decimal("0")
    joined: date | None = None
    active: bool = False


@dataclass
class Account:
    id: int
    owner: str
    tags: list[str] = field(default_factory=list)


@dataclass
class LowerName:
    username: str = ""


class UserPydantic(BaseModel):
    id: int
    name: str
    email: str | None = None


class UserPlain:
    id: int = 0
    name: str = "unset"

    def __init__(self) -> None:
        self.id = -1
        self.name = "fresh"


class NeedsArgs:
    id: int

    def __init__(self, id: int) -> None:
        self.id = id


class ReadOnlyName:
    id: int = 0
    name: str

    @property
    def name(self) -> str:
        return "fixed"


class CaseTwins:
    Id: int = 0
    id: int = 0


class TestMatchingFields:
    def test_case_insensitive_intersection(self) -> None:
        mapper = ObjectMapper(UserDC)
        assert mapper.matching_fields(["ID", "username", "Unknown"]) == ["id", "username"]

    def test_no_overlap(self) -> None:
        assert ObjectMapper(UserDC).matching_fields(["foo", "bar"]) == []


class TestObjectMapper:
    def test_map_to_dataclass(self) -> None:
        row = {
            "id": "1",
            "username": "Alice",
            "email": "a@ex.com",
            "balance": "10.50",
            "joined": "2024-01-15",
            "active": "true",
        }
        user = ObjectMapper(UserDC).map_row(row)
        assert user == UserDC(
            id=1,
            UserName="Alice",
            email="a@ex.com",
            balance=Decimal("10.50"),
            joined=date(2024, 1, 15),
            active=True,
        )

    def test_column_case_does_not_matter(self) -> None:
        row = {"UserName": "Bob"}
        assert ObjectMapper(UserDC).map_row(row).UserName == "Bob"
        assert ObjectMapper(LowerName).map_row(row).username == "Bob"

    def test_null_for_optional_field(self) -> None:
        report = ObjectMapper(UserDC).build({"id": "1", "email": None, "joined": None})
        assert report.ok
        assert report.value.email is None
        assert report.value.joined is None

    def test_null_for_required_field_is_a_field_error(self) -> None:
        report = ObjectMapper(UserDC).build({"id": None, "username": "Ann"})
        assert report.failed_fields == ["id"]
        assert report.value.id == 0
        assert report.value.UserName == "Ann"

    def test_bad_value_keeps_default_and_maps_the_rest(self) -> None:
        report = ObjectMapper(UserDC).build({"id": "abc", "username": "Cy", "active": "yes"})
        assert report.value.id == 0
        assert report.value.UserName == "Cy"
        assert report.value.active is True
        assert len(report.errors) == 1
        error = report.errors[0]
        assert isinstance(error, FieldMappingError)
        assert error.field_name == "id"
        assert error.value == "abc"
        assert error.target_class == "UserDC"

    @pytest.mark.parametrize("text", ["Infinity", "sNaN"])
    def test_non_finite_numeric_is_a_field_error(self, text: str) -> None:
        user = ObjectMapper(UserDC).map_row({"id": text, "username": "Eve"})
        assert user.id == 0
        assert user.UserName == "Eve"

    def test_map_row_logs_field_failures(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="proc_query.mapping.model"):
            user = ObjectMapper(UserDC).map_row({"id": "abc", "username": "Dee"})
        assert user.UserName == "Dee"
        assert "id" in caplog.text
        assert "abc" in caplog.text

    def test_extra_columns_ignored(self) -> None:
        report = ObjectMapper(UserDC).build({"id": "5", "not_a_field": "x"})
        assert report.ok
        assert report.value.id == 5

    def test_missing_columns_keep_defaults(self) -> None:
        user = ObjectMapper(UserDC).map_row({"id": "5"})
        assert user.UserName == ""
        assert user.balance == Decimal("0")

    def test_required_dataclass_field_without_column_is_none(self) -> None:
        account = ObjectMapper(Account).map_row({"id": "3"})
        assert account.id == 3
        assert account.owner is None
        assert account.tags == []

    def test_unknown_field_name_reported(self) -> None:
        report = ObjectMapper(UserDC).build({"id": "1"}, ["id", "nickname"])
        assert report.failed_fields == ["nickname"]
        assert report.value.id == 1

    def test_column_missing_from_row_reported(self) -> None:
        report = ObjectMapper(UserDC).build({"id": "1"}, ["id", "email"])
        assert report.failed_fields == ["email"]

    def test_map_to_pydantic(self) -> None:
        user = ObjectMapper(UserPydantic).map_row({"ID": "7", "name": "Eve"})
        assert isinstance(user, UserPydantic)
        assert user.id == 7
        assert user.name == "Eve"
        assert user.email is None

    def test_pydantic_bad_value(self) -> None:
        report = ObjectMapper(UserPydantic).build({"id": "x", "name": "Eve"})
        assert report.failed_fields == ["id"]
        assert report.value.id is None
        assert report.value.name == "Eve"

    def test_map_to_plain_class(self) -> None:
        user = ObjectMapper(UserPlain).map_row({"name": "Fay"})
        assert isinstance(user, UserPlain)
        assert user.name == "Fay"
        assert user.id == -1

    def test_plain_class_read_only_attribute(self) -> None:
        report = ObjectMapper(ReadOnlyName).build({"id": "2", "name": "x"})
        assert report.failed_fields == ["name"]
        assert report.value.id == 2

    def test_plain_class_needing_arguments(self) -> None:
        with pytest.raises(UnsupportedTargetError, match="NeedsArgs"):
            ObjectMapper(NeedsArgs).map_row({"id": "1"})

    def test_fields_differing_only_by_case_are_rejected(self) -> None:
        with pytest.raises(UnsupportedTargetError, match="differ only by case"):
            ObjectMapper(CaseTwins)


class TestMapRows:
    def test_one_object_per_row_in_order(self) -> None:
        rows = [{"id": "3"}, {"id": "1"}, {"id": "3"}]
        users = ObjectMapper(UserDC).map_rows(rows)
        assert [u.id for u in users] == [3, 1, 3]

    def test_failure_in_one_row_does_not_stop_others(self) -> None:
        rows = [{"id": "1"}, {"id": "bad"}, {"id": "3"}]
        users = ObjectMapper(UserDC).map_rows(rows)
        assert [u.id for u in users] == [1, 0, 3]

    def test_empty(self) -> None:
        assert ObjectMapper(UserDC).map_rows([]) == []
