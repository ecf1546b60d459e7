"""Unit tests for reflection-driven data objects."""

import datetime as dt
import json
from typing import ClassVar, Dict, List, Optional, Union

import pytest

from hypervel_support.data_object import DataObject
from hypervel_support.errors import (
    ImmutableDataObjectError,
    MissingPropertyError,
    NoValidDependencyError,
    UndefinedOffsetError,
)


class Address(DataObject):
    city: str
    zipCode: str

    def __init__(self, city: str, zipCode: str = "") -> None:
        self.city = city
        self.zipCode = zipCode


class User(DataObject):
    kind: ClassVar[str] = "user"

    name: str
    age: int
    score: float
    active: bool
    address: Optional[Address]
    createdAt: Optional[dt.datetime]

    def __init__(
        self,
        name: str,
        age: int,
        score: float = 0.0,
        active: bool = False,
        address: Optional[Address] = None,
        createdAt: Optional[dt.datetime] = None,
    ) -> None:
        self.name = name
        self.age = age
        self.score = score
        self.active = active
        self.address = address
        self.createdAt = createdAt


class Tagged(DataObject):
    tags: list
    meta: dict
    nickname: Optional[str]

    def __init__(self, tags: list, meta: dict, nickname: Optional[str]) -> None:
        self.tags = tags
        self.meta = meta
        self.nickname = nickname


class Event(DataObject):
    date_format = "%d/%m/%Y"

    day: dt.date
    startsAt: dt.datetime

    def __init__(self, day: dt.date, startsAt: dt.datetime) -> None:
        self.day = day
        self.startsAt = startsAt


class Company(DataObject):
    name: str
    headquarters: Address
    owner: Optional[User]

    def __init__(self, name: str, headquarters: Address, owner: Optional[User] = None) -> None:
        self.name = name
        self.headquarters = headquarters
        self.owner = owner


class Ambiguous(DataObject):
    value: Union[int, str]

    def __init__(self, value: Union[int, str]) -> None:
        self.value = value


class Flexible(DataObject):
    when: Union[str, dt.datetime]

    def __init__(self, when: Union[str, dt.datetime]) -> None:
        self.when = when


class Strict(User):
    pass


class Node(DataObject):
    name: str
    parent: Optional["Node"]

    def __init__(self, name: str, parent: Optional["Node"] = None) -> None:
        self.name = name
        self.parent = parent


class TestMake:
    def test_make_maps_snake_case_data_keys(self):
        user = User.make({"name": "ann", "age": 31, "created_at": dt.datetime(2024, 1, 2)})

        assert user.name == "ann"
        assert user.age == 31
        assert user.createdAt == dt.datetime(2024, 1, 2)

    def test_defaults_are_used_for_missing_keys(self):
        user = User.make({"name": "ann", "age": 1})

        assert user.score == 0.0
        assert user.active is False
        assert user.address is None

    def test_missing_nullable_property_becomes_none(self):
        tagged = Tagged.make({"tags": [], "meta": {}})

        assert tagged.nickname is None

    def test_missing_required_property_raises(self):
        with pytest.raises(MissingPropertyError, match="Missing required property `age` in `User`"):
            User.make({"name": "ann"})

    @pytest.mark.parametrize(
        "data,attribute,expected",
        [
            ({"age": "42"}, "age", 42),
            ({"age": "12abc"}, "age", 12),
            ({"score": "3.5"}, "score", 3.5),
            ({"active": "0"}, "active", False),
            ({"active": ""}, "active", False),
            ({"active": "yes"}, "active", True),
            ({"active": 1}, "active", True),
            ({"name": 12}, "name", "12"),
            ({"name": None}, "name", ""),
        ],
    )
    def test_auto_casting(self, data, attribute, expected):
        payload = {"name": "ann", "age": 1, **data}

        assert getattr(User.make(payload), attribute) == expected

    def test_auto_casting_list_and_dict(self):
        tagged = Tagged.make({"tags": "one", "meta": {"a": 1}, "nickname": "n"})

        assert tagged.tags == ["one"]
        assert tagged.meta == {"a": 1}

    def test_disable_auto_casting(self):
        Strict.disable_auto_casting()

        strict = Strict.make({"name": "ann", "age": "42"})

        assert strict.age == "42"
        assert Strict.is_auto_casting() is False
        assert User.is_auto_casting() is True

    def test_enable_auto_casting_overrides_parent(self):
        User.disable_auto_casting()
        Strict.enable_auto_casting()

        assert User.is_auto_casting() is False
        assert Strict.is_auto_casting() is True


class TestAutoResolve:
    def test_nested_data_objects_and_dates(self):
        user = User.make(
            {"name": "ann", "age": 1, "address": {"city": "Taipei", "zip_code": "100"}, "created_at": "2024-01-02"},
            auto_resolve=True,
        )

        assert isinstance(user.address, Address)
        assert user.address.zipCode == "100"
        assert user.createdAt == dt.datetime(2024, 1, 2)

    def test_nullable_dependency_stays_none(self):
        user = User.make({"name": "ann", "age": 1, "address": None}, auto_resolve=True)

        assert user.address is None
        assert user.createdAt is None

    def test_existing_instance_is_kept(self):
        address = Address("Taipei")

        user = User.make({"name": "ann", "age": 1, "address": address}, auto_resolve=True)

        assert user.address is address

    def test_deeply_nested(self):
        company = Company.make(
            {
                "name": "acme",
                "headquarters": {"city": "Taipei"},
                "owner": {"name": "ann", "age": "5", "address": {"city": "Tainan"}},
            },
            auto_resolve=True,
        )

        assert company.headquarters.city == "Taipei"
        assert company.owner.age == 5
        assert company.owner.address.city == "Tainan"

    def test_custom_date_format_and_date_annotation(self):
        event = Event.make({"day": "2024-03-04", "starts_at": "05/06/2024"}, auto_resolve=True)

        assert event.day == dt.date(2024, 3, 4)
        assert event.startsAt == dt.datetime(2024, 6, 5)

    def test_union_with_a_date_member(self):
        flexible = Flexible.make({"when": "2024-01-02"}, auto_resolve=True)

        assert flexible.when == dt.datetime(2024, 1, 2)

    def test_union_without_buildable_member_raises(self):
        with pytest.raises(NoValidDependencyError):
            Ambiguous.make({"value": 1}, auto_resolve=True)

    def test_self_referencing_class_resolves_one_level(self):
        node = Node.make(
            {"name": "child", "parent": {"name": "parent", "parent": {"name": "grandparent"}}},
            auto_resolve=True,
        )

        assert isinstance(node.parent, Node)
        assert node.parent.name == "parent"
        assert node.parent.parent == {"name": "grandparent"}
        assert Node.get_dependencies_map()["parent"]["children"] == {}

    def test_dependencies_map(self):
        dependencies = User.get_dependencies_map()

        assert set(dependencies) == {"address", "created_at"}
        assert dependencies["address"]["type"] is Address
        assert dependencies["address"]["nullable"] is True


class TestAsDatetime:
    @pytest.mark.parametrize(
        "item,expected",
        [
            (dt.datetime(2024, 1, 2, 3, 4), dt.datetime(2024, 1, 2, 3, 4)),
            (dt.date(2024, 1, 2), dt.datetime(2024, 1, 2)),
            ("2024-1-2", dt.datetime(2024, 1, 2)),
            ("2024-01-02 03:04:05", dt.datetime(2024, 1, 2, 3, 4, 5)),
            ("2024-01-02T03:04:05", dt.datetime(2024, 1, 2, 3, 4, 5)),
        ],
    )
    def test_as_datetime(self, item, expected):
        assert User.as_datetime(item) == expected

    def test_timestamps(self):
        expected = dt.datetime.fromtimestamp(0)

        assert User.as_datetime(0) == expected
        assert User.as_datetime("0") == expected


class TestReflection:
    def test_property_types_skip_class_vars(self):
        types = User.get_property_types()

        assert "kind" not in types
        assert types["age"] is int

    def test_property_maps(self):
        assert User.get_property_map()["created_at"] == "createdAt"
        assert User.get_reversed_property_map()["createdAt"] == "created_at"

    def test_parameters_resolve_annotations(self):
        parameters = {parameter.name: parameter for parameter in Address.get_parameters()}

        assert list(parameters) == ["city", "zipCode"]
        assert parameters["city"].annotation is str

    def test_key_conversion(self):
        assert User.convert_property_to_data_key("createdAt") == "created_at"
        assert User.convert_data_key_to_property("created_at") == "createdAt"

    def test_clear_caches(self):
        User.get_property_map()
        User.disable_auto_casting()

        DataObject.clear_caches()

        assert User not in DataObject._property_map_cache
        assert User.is_auto_casting() is True


class TestArrayAccessAndSerialization:
    @pytest.fixture
    def user(self):
        return User.make(
            {"name": "ann", "age": 1, "address": {"city": "Taipei"}, "created_at": "2024-01-02"},
            auto_resolve=True,
        )

    def test_to_array_converts_nested_objects(self, user):
        array = user.to_array()

        assert array["address"] == {"city": "Taipei", "zip_code": ""}
        assert array["created_at"] == dt.datetime(2024, 1, 2)
        assert user.to_dict() == array
        assert user.json_serialize() == array

    def test_item_access(self, user):
        assert "created_at" in user
        assert "createdAt" not in user
        assert user["name"] == "ann"

        with pytest.raises(UndefinedOffsetError, match="Undefined offset: missing"):
            user["missing"]

    def test_item_mutation_raises(self, user):
        with pytest.raises(ImmutableDataObjectError):
            user["name"] = "bob"

        with pytest.raises(ImmutableDataObjectError):
            del user["name"]

    def test_to_json(self, user):
        payload = json.loads(user.to_json())

        assert payload["created_at"] == "2024-01-02T00:00:00"
        assert payload["address"]["city"] == "Taipei"

    def test_refresh_rebuilds_array(self, user):
        assert user.to_array()["name"] == "ann"

        user.name = "bob"
        assert user.to_array()["name"] == "ann"
        assert user.refresh().to_array()["name"] == "bob"
