"""Unit tests for ValidatedInput."""

import pytest

from hypervel_support.contracts import ValidatedData
from hypervel_support.validated_input import ValidatedInput


@pytest.fixture
def validated():
    return ValidatedInput({"name": "ann", "meta": {"age": "3"}})


class TestValidatedInputAccess:
    def test_attribute_access(self, validated):
        assert validated.name == "ann"
        assert validated.unknown is None

    def test_item_access_with_dot_notation(self, validated):
        assert validated["meta.age"] == "3"
        assert validated["meta"] == {"age": "3"}

    def test_input_with_default(self, validated):
        assert validated.input("missing", "default") == "default"
        assert validated.input() == {"name": "ann", "meta": {"age": "3"}}

    def test_typed_accessors(self, validated):
        assert validated.integer("meta.age") == 3
        assert validated.string("name").upper() == "ANN"

    def test_all_with_keys(self, validated):
        assert validated.all("name", "meta.age") == {"name": "ann", "meta": {"age": "3"}}
        assert validated.all(["name"]) == {"name": "ann"}
        assert validated.all("missing") == {"missing": None}

    def test_contains(self, validated):
        assert "name" in validated
        assert "meta.age" in validated
        assert "missing" not in validated

    def test_keys_len_iter(self, validated):
        assert validated.keys() == ["name", "meta"]
        assert len(validated) == 2
        assert list(validated) == ["name", "meta"]

    def test_satisfies_validated_data_contract(self, validated):
        assert isinstance(validated, ValidatedData)


class TestValidatedInputMutation:
    def test_attribute_assignment_writes_input(self, validated):
        validated.email = "ann@example.com"
        del validated.name

        assert validated.all() == {"meta": {"age": "3"}, "email": "ann@example.com"}

    def test_item_assignment(self):
        validated = ValidatedInput()
        validated["a"] = 1
        validated[None] = "first"
        validated[None] = "second"
        del validated["a"]

        assert validated.all() == {0: "first", 1: "second"}

    def test_merge_returns_new_instance(self, validated):
        merged = validated.merge({"name": "bob", "role": "admin"})

        assert merged.name == "bob"
        assert merged.role == "admin"
        assert validated.name == "ann"

    def test_private_attributes_are_not_proxied(self, validated):
        with pytest.raises(AttributeError):
            validated._missing


class TestValidatedInputOutput:
    def test_to_array(self, validated):
        assert validated.to_array() == {"name": "ann", "meta": {"age": "3"}}

    def test_dump(self, validated, capsys):
        assert validated.dump() is validated
        assert "'name': 'ann'" in capsys.readouterr().out

    def test_dump_only_keys(self, validated, capsys):
        validated.dump("meta.age")

        assert capsys.readouterr().out.strip() == "{'meta': {'age': '3'}}"

    def test_repr(self, validated):
        assert repr(validated) == "ValidatedInput({'name': 'ann', 'meta': {'age': '3'}})"
