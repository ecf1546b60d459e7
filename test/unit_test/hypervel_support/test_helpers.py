"""Unit tests for the helper functions."""

from enum import Enum
from unittest.mock import call, patch

import pytest

from hypervel_support.collection import Collection
from hypervel_support.helpers import (
    HigherOrderTapProxy,
    blank,
    class_basename,
    collect,
    e,
    env,
    filled,
    head,
    last,
    object_get,
    optional,
    retry,
    tap,
    throw_if,
    throw_unless,
    transform,
    when,
    with_,
)
from hypervel_support.html_string import HtmlString
from hypervel_support.optional import Optional


class Color(Enum):
    RED = "<red>"


class Node:
    def __init__(self, name, child=None):
        self.name = name
        self.child = child


class TestEnv:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("true", True),
            ("(true)", True),
            ("FALSE", False),
            ("(false)", False),
            ("empty", ""),
            ("(empty)", ""),
            ("null", None),
            ("(null)", None),
            ('"quoted value"', "quoted value"),
            ("'single quoted'", "single quoted"),
            ("'mismatched\"", "'mismatched\""),
            ("plain", "plain"),
            ('"', '"'),
        ],
    )
    def test_env_values(self, monkeypatch, raw, expected):
        monkeypatch.setenv("HYPERVEL_SUPPORT_TEST_ENV", raw)

        assert env("HYPERVEL_SUPPORT_TEST_ENV") == expected

    def test_env_default(self, monkeypatch):
        monkeypatch.delenv("HYPERVEL_SUPPORT_TEST_ENV", raising=False)

        assert env("HYPERVEL_SUPPORT_TEST_ENV", "default") == "default"
        assert env("HYPERVEL_SUPPORT_TEST_ENV", lambda: "lazy") == "lazy"


class TestEscape:
    def test_escapes_special_characters(self):
        assert e("<a href=\"x\">it's</a>") == "&lt;a href=&quot;x&quot;&gt;it&#039;s&lt;/a&gt;"

    def test_double_encode(self):
        assert e("&amp; &") == "&amp;amp; &amp;"
        assert e("&amp; & &#39; &#x27;", double_encode=False) == "&amp; &amp; &#39; &#x27;"

    def test_htmlable_is_not_escaped(self):
        assert e(HtmlString("<b>bold</b>")) == "<b>bold</b>"

    def test_enum_and_none(self):
        assert e(Color.RED) == "&lt;red&gt;"
        assert e(None) == ""
        assert e(5) == "5"


class TestBlankAndFilled:
    @pytest.mark.parametrize("target", [None, "", "   ", [], {}, (), Collection()])
    def test_blank(self, target):
        assert blank(target) is True
        assert filled(target) is False

    @pytest.mark.parametrize("target", [0, 0.0, False, True, "0", "a", [0], {"a": None}, Collection([1]), object()])
    def test_filled(self, target):
        assert blank(target) is False
        assert filled(target) is True


class TestAccessHelpers:
    def test_collect(self):
        assert isinstance(collect([1]), Collection)
        assert collect().all() == []

    @pytest.mark.parametrize(
        "target,first,final",
        [([1, 2, 3], 1, 3), ({"a": 1, "b": 2}, 1, 2), ([], None, None), ((4,), 4, 4)],
    )
    def test_head_and_last(self, target, first, final):
        assert head(target) == first
        assert last(target) == final

    @pytest.mark.parametrize(
        "target,expected",
        [
            (Collection, "Collection"),
            (Collection(), "Collection"),
            ("App\\Models\\User", "User"),
            ("app.models.User", "User"),
            ("app/models/User", "User"),
            ("User", "User"),
        ],
    )
    def test_class_basename(self, target, expected):
        assert class_basename(target) == expected

    def test_object_get(self):
        tree = Node("root", Node("leaf"))

        assert object_get(tree, "child.name") == "leaf"
        assert object_get(tree, "child.missing", "default") == "default"
        assert object_get(tree, None) is tree
        assert object_get(tree, "  ") is tree

    def test_optional(self):
        assert isinstance(optional(None), Optional)
        assert optional(None).name is None
        assert optional(Node("root")).name == "root"
        assert optional(5, lambda number: number * 2) == 10
        assert optional(None, lambda number: number * 2) is None


class TestRetry:
    def test_returns_first_success(self):
        attempts = []

        def flaky(attempt):
            attempts.append(attempt)
            if attempt < 3:
                raise ValueError("fail")
            return "ok"

        assert retry(3, flaky) == "ok"
        assert attempts == [1, 2, 3]

    def test_raises_after_last_attempt(self):
        calls = []

        def failing():
            calls.append(1)
            raise ValueError("always")

        with pytest.raises(ValueError, match="always"):
            retry(2, failing)
        assert len(calls) == 2

    def test_when_rejects_exception(self):
        calls = []

        def failing():
            calls.append(1)
            raise KeyError("stop")

        with pytest.raises(KeyError):
            retry(5, failing, when=lambda exc: isinstance(exc, ValueError))
        assert len(calls) == 1

    def test_sleeps_between_attempts(self):
        outcomes = iter([ValueError(), ValueError(), "done"])

        def flaky():
            outcome = next(outcomes)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with patch("hypervel_support.helpers.time.sleep") as sleep:
            assert retry(3, flaky, sleep_milliseconds=50) == "done"

        assert sleep.call_args_list == [call(0.05), call(0.05)]

    def test_backoff_list(self):
        outcomes = iter([ValueError(), ValueError(), "done"])

        def flaky():
            outcome = next(outcomes)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with patch("hypervel_support.helpers.time.sleep") as sleep:
            assert retry([100, 200], flaky) == "done"

        assert sleep.call_args_list == [call(0.1), call(0.2)]

    def test_sleep_callable_receives_attempt_and_exception(self):
        seen = []

        def delay(attempt, exc):
            seen.append((attempt, type(exc)))
            return 0

        with pytest.raises(ValueError):
            retry(3, lambda: (_ for _ in ()).throw(ValueError()), sleep_milliseconds=delay)

        assert seen == [(1, ValueError), (2, ValueError)]


class TestFlowHelpers:
    def test_tap_with_callback(self):
        items = []

        assert tap(items, lambda target: target.append(1)) is items
        assert items == [1]

    def test_tap_without_callback_returns_proxy(self):
        items = []

        proxy = tap(items)

        assert isinstance(proxy, HigherOrderTapProxy)
        assert proxy.append(1) is items
        assert items == [1]

    def test_transform(self):
        assert transform(5, lambda number: number + 1) == 6
        assert transform("", lambda item: "called", "default") == "default"
        assert transform(None, lambda item: "called", lambda item: f"fallback:{item}") == "fallback:None"

    def test_with(self):
        assert with_(5) == 5
        assert with_(5, lambda number: number * 3) == 15

    def test_throw_if(self):
        assert throw_if(False, ValueError) is False

        with pytest.raises(ValueError, match="bad"):
            throw_if(True, ValueError, "bad")
        with pytest.raises(RuntimeError, match="message"):
            throw_if(1, "message")
        with pytest.raises(KeyError):
            throw_if(True, KeyError("key"))

    def test_throw_unless(self):
        assert throw_unless("ok", ValueError) == "ok"

        with pytest.raises(ValueError):
            throw_unless(0, ValueError)

    def test_when(self):
        assert when(True, "yes", "no") == "yes"
        assert when(False, "yes", "no") == "no"
        assert when(0, "yes") is None
        assert when(5, lambda value: value * 2) == 10
        assert when(True, str) is str
