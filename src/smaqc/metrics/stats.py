"""Order statistics and number formatting shared by the metric families."""

from __future__ import annotations

import math
from typing import Iterable, Sequence


def median(values: Iterable[float]) -> float:
    """Return the median of ``values``.

    An empty input yields ``0`` and a single value is returned unchanged.
    The input is not modified; a sorted copy is used.
    """

    ordered = sorted(values)
    count = len(ordered)
    if count == 0:
        return 0
    if count == 1:
        return ordered[0]
    middle = count // 2
    if count % 2 == 1:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0
    return sum(values) / len(values)


def percentile_trim(values: Iterable[float], lo: float, hi: float) -> list[float]:
    """Sort ``values`` and keep those whose zero-based rank / count lies in [lo, hi].

    Parameters
    ----------
    values:
        Numbers to trim.
    lo, hi:
        Inclusive bounds on the fractional rank, both within ``[0, 1]``.

    Returns
    -------
    list[float]
        The retained values in ascending order.

    Examples
    --------
    >>> percentile_trim(range(20), 0.05, 0.95)[0], percentile_trim(range(20), 0.05, 0.95)[-1]
    (1, 19)
    """

    ordered = sorted(values)
    count = len(ordered)
    return [value for index, value in enumerate(ordered) if lo <= index / count <= hi]


def quartile_assign(rank: int, total: int) -> int:
    """Return the quartile (1-4) for ``rank`` out of ``total``."""

    if total <= 0:
        raise ValueError("total must be > 0")
    fraction = rank / total
    if fraction < 0.25:
        return 1
    if fraction < 0.5:
        return 2
    if fraction < 0.75:
        return 3
    return 4


def format_fixed(value: float, digits: int) -> str:
    """Fixed-point rendering, e.g. ``format_fixed(0.5, 3) == "0.500"``."""

    return f"{value:.{digits}f}"


def format_general(value: float) -> str:
    # integral values print without a decimal point: 15.0 -> "15"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)
