"""Unit tests for lenient scalar conversions."""

import pytest

from hypervel_support.callbacks import invoke
from hypervel_support.casts import to_bool, to_float, to_int


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12abc", 12.0),
        ("abc", 0.0),
        (" 3.5 ", 3.5),
        ("-2e2", -200.0),
        (".5", 0.5),
        (None, 0.0),
        (True, 1.0),
        (7, 7.0),
        ([], 0.0),
        ([1], 1.0),
    ],
)
def test_to_float(value, expected):
    assert to_float(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [("42", 42), ("4.9", 4), ("-4.9", -4), ("x", 0), (10, 10), ("inf", 0), (None, 0)],
)
def test_to_int(value, expected):
    assert to_int(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1", True),
        ("true", True),
        ("TRUE", True),
        ("on", True),
        ("yes", True),
        ("0", False),
        ("false", False),
        ("", False),
        (None, False),
        (1, True),
        (False, False),
    ],
)
def test_to_bool(value, expected):
    assert to_bool(value) is expected


class TestInvoke:
    """Callbacks receive only the arguments they accept."""

    def test_drops_extra_arguments(self):
        assert invoke(lambda value: value * 2, 3, "key") == 6

    def test_passes_all_accepted_arguments(self):
        assert invoke(lambda value, key: (value, key), 3, "key") == (3, "key")

    def test_var_positional_receives_everything(self):
        assert invoke(lambda *args: args, 1, 2, 3) == (1, 2, 3)

    def test_builtin_without_signature(self):
        assert invoke(str.upper, "abc", "ignored") == "ABC"

    def test_zero_argument_callback(self):
        assert invoke(lambda: "called", 1, 2) == "called"
