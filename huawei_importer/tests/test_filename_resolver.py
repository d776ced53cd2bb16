import pytest

from huawei_importer.errors import InvalidFilename
from huawei_importer.models.period import Period
from huawei_importer.services.filename_resolver import period_for_path, resolve_period, try_period


@pytest.mark.parametrize(
    "stem, expected",
    [
        ("2023.01", Period(2023, 1)),
        ("2023.1", Period(2023, 1)),
        ("2024.12", Period(2024, 12)),
        ("-5.6", Period(-5, 6)),
        ("+2023.+7", Period(2023, 7)),
    ],
)
def test_resolve_valid_names(stem, expected):
    assert resolve_period(stem) == expected


@pytest.mark.parametrize(
    "stem",
    ["notes", "2023", "2023.01.02", "abcd.01", "2023.xx", "2023.0", "2023.13", "2023.-1", "2023.", ".5", " 2023.01", "2023.1.5"],
)
def test_resolve_rejects_malformed_names(stem):
    with pytest.raises(InvalidFilename):
        resolve_period(stem)


def test_period_for_path_uses_stem(tmp_path):
    assert period_for_path(tmp_path / "2023.02.json") == Period(2023, 2)


def test_try_period_filters_instead_of_raising():
    assert try_period("notes.json") is None
    assert try_period("2022.13.json") is None
    assert try_period("2022.11.json") == Period(2022, 11)
