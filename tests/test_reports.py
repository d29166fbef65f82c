"""Tests for failure reports."""

import json

import pytest
from pydantic import ValidationError

from typecraft.builder import array_of, coercible, hash_schema, instance
from typecraft.core.errors import ConstraintError, MissingKeyError
from typecraft.reports import FailureReport, build_report


@pytest.fixture
def person_failure():
    schema = hash_schema({"name": instance(str), "age": coercible(int).constrained(gt=2)})
    return schema.try_apply({"age": "1"})


class TestBuildReport:
    def test_constraint_detail(self) -> None:
        report = build_report(ConstraintError(1, "gt", (2,)))
        assert report.code == "constraint"
        assert report.message == "1 violates constraints (gt(2, 1) failed)"
        assert report.detail == {"predicate": "gt", "args": ["2"], "value": "1"}
        assert report.path == []
        assert report.children == []

    def test_class_arguments_rendered(self) -> None:
        report = build_report(ConstraintError("1", "type", (int,)))
        assert report.detail["args"] == ["int"]

    def test_missing_key_detail(self) -> None:
        assert build_report(MissingKeyError({}, "name")).detail == {"key": "name"}

    def test_aggregate_children_carry_paths(self, person_failure) -> None:
        report = person_failure.to_report()
        assert report.code == "aggregate"
        assert [c.path for c in report.children] == [["name"], ["age"]]
        assert [c.code for c in report.children] == ["missing_key", "constraint"]

    def test_nested_paths(self) -> None:
        t = array_of(hash_schema({"n": instance(int)}))
        report = t.try_apply([{"n": 1}, {"n": "x"}]).to_report()
        (leaf,) = report.leaves()
        assert leaf.path == [1, "n"]
        assert leaf.detail["predicate"] == "type"

    def test_sum_branches_become_children(self) -> None:
        report = (instance(int) | instance(str)).try_apply(1.5).to_report()
        assert report.code == "sum"
        assert len(report.leaves()) == 2

    def test_message_matches_raised_error(self, person_failure) -> None:
        assert person_failure.to_report().message == str(person_failure.error)


class TestFailureReport:
    def test_frozen(self, person_failure) -> None:
        report = person_failure.to_report()
        with pytest.raises(ValidationError):
            report.code = "other"

    def test_leaf_is_its_own_leaf(self) -> None:
        report = FailureReport(code="coercion", message="nope")
        assert report.leaves() == [report]

    def test_json_serializable(self, person_failure) -> None:
        payload = json.loads(person_failure.to_report().model_dump_json())
        assert payload["code"] == "aggregate"
        assert payload["children"][0]["detail"] == {"key": "name"}
