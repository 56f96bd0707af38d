import pytest

from shared.core.errors import AppError
from shared.helpers.value_helper import coerce_bool, haversine, mean_rounded, parse_float, split_features
from shared.utils.enums import ErrorKind


@pytest.mark.parametrize("raw, expected", [
    (True, True), (False, False), (None, None),
    ("true", True), ("TRUE", True), (" True ", True), ("1", True), ("yes", True),
    ("false", False), ("False", False), ("0", False), ("no", False),
    (1, True), (0, False),
])
def test_coerce_bool_accepts_stored_representations(raw, expected):
    assert coerce_bool(raw) is expected


@pytest.mark.parametrize("raw", ["maybe", "", 2, 1.5, []])
def test_coerce_bool_rejects_anything_else(raw):
    with pytest.raises(AppError) as exc:
        coerce_bool(raw, "available")
    assert exc.value.kind == ErrorKind.INVALID_INPUT
    assert exc.value.http_status == 400
    assert "available" in exc.value.message


def test_mean_rounded_empty_is_zero():
    assert mean_rounded([]) == 0


@pytest.mark.parametrize("ratings, expected", [
    ([5], 5.0),
    ([4, 5], 4.5),
    ([5, 4, 4], 4.3),
    ([1, 2, 2], 1.7),
    ([3, 3, 4, 4, 4, 4, 4, 4], 3.8),  # 3.75 rounds half up
])
def test_mean_rounded_one_decimal(ratings, expected):
    assert mean_rounded(ratings) == expected


def test_split_features_handles_mixed_delimiters():
    assert split_features("gated, cctv; ev charging |covered") == [
        "gated", "cctv", "ev charging", "covered"]
    assert split_features(None) == []
    assert split_features(" , ") == []


def test_haversine_kennington_to_borough():
    distance = haversine(51.4886, -0.1004, 51.5054, -0.0910)
    assert 1.5 < distance < 2.5
    assert haversine(51.5, -0.1, 51.5, -0.1) == 0


@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", float("inf"), "n/a", None])
def test_parse_float_drops_non_finite_and_garbage(raw):
    assert parse_float(raw) is None


def test_parse_float_reads_coordinates():
    assert parse_float(" 51.4886 ") == 51.4886
    assert parse_float(-0.1004) == -0.1004
