"""Ion source metrics (IS_*)."""

from __future__ import annotations

from smaqc.db.records import parse_float, parse_int
from smaqc.metrics import queries
from smaqc.metrics.context import MetricContext
from smaqc.metrics.mass import convolute_mass
from smaqc.metrics.stats import format_fixed, median

FOLD_THRESHOLD = 10


def base_peak_changes(ctx: MetricContext, fold: float = FOLD_THRESHOLD) -> tuple[int, int]:
    """Count consecutive MS1 base-peak intensity jumps and falls above ``fold``.

    Returns
    -------
    tuple[int, int]
        ``(jumps, falls)``
    """

    def load():
        jumps = falls = 0
        previous = None
        for _, current in ctx.decode(
            queries.MS1_BASE_PEAKS,
            {"ScanNumber": parse_int, "BasePeakIntensity": parse_float},
            "IS_1",
        ):
            if previous is not None:
                if current > 0 and previous / current > fold:
                    falls += 1
                if previous > 0 and current / previous > fold:
                    jumps += 1
            previous = current
        return jumps, falls

    return ctx.memoize(f"base_peak_changes:{fold}", load)


def is_1a(ctx: MetricContext) -> str:
    """MS1 base peak jumping more than 10x."""
    return str(base_peak_changes(ctx)[0])


def is_1b(ctx: MetricContext) -> str:
    """MS1 base peak falling more than 10x."""
    return str(base_peak_changes(ctx)[1])


def is_2(ctx: MetricContext) -> str:
    """Median m/z of the distinct filter-passing precursors."""
    mz_values = {
        convolute_mass(mh, 1, charge)
        for mh, charge in ctx.decode(
            queries.passing_precursors(ctx.mode),
            {"Peptide_MH": parse_float, "Charge": parse_int},
            "IS_2",
        )
        if charge >= 0
    }
    return format_fixed(median(mz_values), 4)


def psms_by_charge(ctx: MetricContext) -> dict[int, int]:
    def load():
        counts: dict[int, int] = {}
        for charge, psms in ctx.decode(
            queries.charge_counts(ctx.mode), {"Charge": parse_int, "PSMs": parse_int}, "IS_3"
        ):
            counts.setdefault(charge, psms)
        return counts

    return ctx.memoize("psms_by_charge", load)


def charge_ratio(counts: dict[int, int], charge: int, reference: int = 2) -> float:
    """``counts[charge] / counts[reference]``; 0 when either is missing or the reference is 0."""

    if charge not in counts or counts.get(reference, 0) == 0:
        return 0.0
    return counts[charge] / counts[reference]


def is_3a(ctx: MetricContext) -> str:
    return format_fixed(charge_ratio(psms_by_charge(ctx), 1), 6)


def is_3b(ctx: MetricContext) -> str:
    return format_fixed(charge_ratio(psms_by_charge(ctx), 3), 6)


def is_3c(ctx: MetricContext) -> str:
    return format_fixed(charge_ratio(psms_by_charge(ctx), 4), 6)
