#!filepath: tests/args/test_options.py
import math

import pytest

from qforest.args.options import (
    OPTIONS,
    Arity,
    InfoRequest,
    lookup_short,
    name_list,
    non_negative_int,
    positive_int,
    quantile_list,
    resolve_long,
    tree_type_code,
    unit_interval_fraction,
)
from qforest.config.run_config import RunConfiguration
from qforest.config.tree_type import TreeType


def test_short_and_long_spellings_are_bijective():
    longs = [spec.long for spec in OPTIONS]
    shorts = [spec.short for spec in OPTIONS]
    assert len(set(longs)) == len(longs)
    assert len(set(shorts)) == len(shorts)

    for spec in OPTIONS:
        assert lookup_short(spec.short) is spec
        assert resolve_long(spec.long) == (spec, ())


def test_every_field_target_exists_on_run_configuration():
    fields = set(RunConfiguration.model_fields)
    for spec in OPTIONS:
        if spec.arity is Arity.INFO:
            assert spec.field is None
            assert isinstance(spec.info, InfoRequest)
        else:
            assert spec.field in fields


def test_required_options_have_coercer():
    for spec in OPTIONS:
        if spec.arity is Arity.REQUIRED:
            assert spec.coerce is not None


@pytest.mark.parametrize("token, expected", [("1", 1), ("100", 100), ("+7", 7), (" 12 ", 12)])
def test_positive_int_accepts(token, expected):
    result = positive_int(token)
    assert result.ok
    assert result.value == expected


@pytest.mark.parametrize(
    "token",
    ["0", "-3", "1.5", "abc", "", "12abc", "1_000", "\u0661\u0660", "99999999999999999999999999"],
)
def test_positive_int_rejects(token):
    result = positive_int(token)
    assert not result.ok
    assert result.rejected == token


def test_non_negative_int_allows_zero():
    assert non_negative_int("0").value == 0
    assert not non_negative_int("-1").ok


@pytest.mark.parametrize("token, expected", [("1", 1.0), ("0.5", 0.5), ("1e-3", 0.001)])
def test_fraction_accepts_half_open_interval(token, expected):
    result = unit_interval_fraction(token)
    assert result.ok
    assert math.isclose(result.value, expected)


@pytest.mark.parametrize("token", ["0", "1.5", "-0.1", "nan", "inf", "x"])
def test_fraction_rejects(token):
    assert not unit_interval_fraction(token).ok


def test_quantile_list_parses_each_element():
    result = quantile_list("0.1,0.5,0.9")
    assert result.ok
    assert result.value == [0.1, 0.5, 0.9]


@pytest.mark.parametrize(
    "token, bad",
    [("0.1,1.0", "1.0"), ("0,0.5", "0"), ("0.1,,0.2", ""), ("0.2,abc", "abc"), ("nan", "nan")],
)
def test_quantile_list_rejects_whole_list_on_one_bad_element(token, bad):
    result = quantile_list(token)
    assert not result.ok
    assert result.value is None
    assert result.rejected == bad


def test_name_list():
    assert name_list("X,Y").value == ["X", "Y"]
    assert name_list("X").value == ["X"]
    assert not name_list("X,,Y").ok
    assert not name_list("").ok


def test_tree_type_code_closed_set():
    assert tree_type_code("11").value is TreeType.QUANTILE
    assert tree_type_code("15").value is TreeType.INSTRUMENTAL
    for token in ["1", "3", "12", "quantile", ""]:
        assert not tree_type_code(token).ok


def test_resolve_long_prefix():
    spec, candidates = resolve_long("dep")
    assert spec.long == "depvarname"
    assert candidates == ()


def test_resolve_long_ambiguous_prefix():
    spec, candidates = resolve_long("s")
    assert spec is None
    assert set(candidates) == {"statusvarname", "splitweights", "seed", "savemem"}


def test_resolve_long_unknown():
    assert resolve_long("catvars") == (None, ())
    assert resolve_long("") == (None, ())


def test_int_bounds_follow_c_int():
    assert positive_int("2147483647").value == 2**31 - 1
    assert not positive_int("2147483648").ok
    assert not non_negative_int("4294967296").ok
