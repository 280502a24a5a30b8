import pytest


@pytest.mark.parametrize(
    "name, expected",
    [
        ("DS_1A", "1.000"),
        ("DS_1B", "0.000"),
        ("DS_2A", "2"),
        ("DS_2B", "3"),
        ("DS_3A", "2.000"),
        ("DS_3B", "0.000"),
    ],
)
def test_legacy_dynamic_sampling(legacy_results, name, expected):
    assert legacy_results[name] == expected


def test_phrp_dynamic_sampling(phrp_results):
    assert phrp_results["DS_1A"] == "1.000"
    assert phrp_results["DS_2B"] == "3"
    assert phrp_results["DS_3A"] == "2.000"


def test_no_identifications(mass_error_results):
    # no scan stats and no sequence map for this dataset
    assert mass_error_results["DS_1A"] == "0.000"
    assert mass_error_results["DS_2A"] == "0"
