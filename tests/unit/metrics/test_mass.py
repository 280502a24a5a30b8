import math

import pytest

from smaqc.metrics.mass import (
    C13_UNIT_MASS,
    CHARGE_CARRIER_MASS,
    convolute_mass,
    correct_mass_error,
    split_prefix_suffix,
)


@pytest.mark.parametrize("delta", [-7.3, -2.0, -0.51, -0.2, 0.0, 0.3, 0.5, 0.51, 1.0, 3.3, 12.9])
def test_correct_mass_error_stays_in_bounds(delta):
    corrected = correct_mass_error(delta)
    assert -(C13_UNIT_MASS - 0.5) <= corrected <= 0.5


def test_correct_mass_error_removes_isotope_offset():
    assert correct_mass_error(1.00535483) == pytest.approx(0.002)
    assert correct_mass_error(-2 * C13_UNIT_MASS + 0.001) == pytest.approx(0.001)
    assert correct_mass_error(0.25) == 0.25


@pytest.mark.parametrize("unit_mass", [1.0, 0.5, -1.0])
def test_correct_mass_error_rejects_small_unit(unit_mass):
    with pytest.raises(ValueError):
        correct_mass_error(0.7, unit_mass)


@pytest.mark.parametrize("delta", [math.nan, math.inf, -math.inf])
def test_correct_mass_error_rejects_non_finite(delta):
    with pytest.raises(ValueError):
        correct_mass_error(delta)


def test_convolute_mass_same_charge_is_identity():
    assert convolute_mass(1234.5, 3, 3) == 1234.5


def test_convolute_mass_mh_to_mz_and_back():
    mz = convolute_mass(1000.5, 1, 2)
    assert mz == pytest.approx(500.7536, abs=1e-4)
    assert convolute_mass(mz, 2, 1) == pytest.approx(1000.5)


def test_convolute_mass_neutral():
    assert convolute_mass(1000.0, 1, 0) == pytest.approx(1000.0 - CHARGE_CARRIER_MASS)
    assert convolute_mass(999.0, 0, 1) == pytest.approx(999.0 + CHARGE_CARRIER_MASS)


def test_convolute_mass_rejects_negative_charge():
    with pytest.raises(ValueError):
        convolute_mass(1000.0, -1, 1)
    with pytest.raises(ValueError):
        convolute_mass(1000.0, 1, -2)


def test_split_prefix_suffix():
    assert split_prefix_suffix("K.PEPTIDE.R") == ("PEPTIDE", "K", "R")
    assert split_prefix_suffix("-.PEPTIDEC.-") == ("PEPTIDEC", "-", "-")


def test_split_prefix_suffix_without_flanks():
    assert split_prefix_suffix("PEPTIDE") == ("PEPTIDE", "", "")
    assert split_prefix_suffix("K.R") == ("K.R", "", "")


def test_correct_mass_error_just_above_half_folds_below_minus_half():
    # no multiple of the unit mass lands in (-0.5, 0.5] for this delta
    assert correct_mass_error(0.5001) == pytest.approx(0.5001 - C13_UNIT_MASS)
    assert correct_mass_error(0.5001) < -0.5
