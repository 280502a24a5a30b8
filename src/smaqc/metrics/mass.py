from __future__ import annotations

import math

# Mass difference between 13C and 12C
C13_UNIT_MASS = 1.00335483

# Mass of a proton, the charge carrier for positive-mode ions
CHARGE_CARRIER_MASS = 1.00727649


def correct_mass_error(delta: float, unit_mass: float = C13_UNIT_MASS) -> float:
    """Fold an isotope-offset mass error back toward zero.

    Adds ``unit_mass`` while ``delta`` is below -0.5, then subtracts it while
    ``delta`` is above 0.5. The two passes run in that order, so the result
    lies in ``[-(unit_mass - 0.5), 0.5]``.

    Raises
    ------
    ValueError
        If ``unit_mass`` is not greater than 1 or ``delta`` is not finite.
    """

    if not unit_mass > 1:
        raise ValueError(f"unit_mass must be > 1, got {unit_mass!r}")
    if not math.isfinite(delta):
        raise ValueError(f"delta must be finite, got {delta!r}")

    while delta < -0.5:
        delta += unit_mass
    while delta > 0.5:
        delta -= unit_mass
    return delta


def convolute_mass(
    mass: float,
    current_charge: int,
    desired_charge: int,
    charge_carrier: float = CHARGE_CARRIER_MASS,
) -> float:
    """Convert ``mass`` from one charge state to another.

    Charge 1 is the M+H form and charge 0 the neutral monoisotopic mass.
    Any other charge is interpreted as m/z.

    >>> round(convolute_mass(1000.5, 1, 2), 4)
    500.7536
    """

    if current_charge == desired_charge:
        return mass

    if current_charge == 1:
        mh = mass
    elif current_charge > 1:
        mh = mass * current_charge - charge_carrier * (current_charge - 1)
    elif current_charge == 0:
        mh = mass + charge_carrier
    else:
        raise ValueError(f"unsupported charge state: {current_charge}")

    if desired_charge > 1:
        return (mh + charge_carrier * (desired_charge - 1)) / desired_charge
    if desired_charge == 1:
        return mh
    if desired_charge == 0:
        return mh - charge_carrier
    raise ValueError(f"unsupported charge state: {desired_charge}")


def split_prefix_suffix(sequence: str) -> tuple[str, str, str]:
    """Split ``K.PEPTIDE.R`` into ``("PEPTIDE", "K", "R")``.

    Sequences without flanking residues come back whole with empty
    prefix and suffix.
    """

    if len(sequence) >= 4 and sequence[1] == "." and sequence[-2] == ".":
        return sequence[2:-2], sequence[0], sequence[-1]
    return sequence, "", ""
