"""MS2 metrics (MS2_*)."""

from __future__ import annotations

from smaqc.db.records import parse_float, parse_int
from smaqc.logging import get_logger
from smaqc.metrics import queries
from smaqc.metrics.context import MetricContext
from smaqc.metrics.stats import format_fixed, median, quartile_assign

logger = get_logger(__file__)


def ms2_1(ctx: MetricContext) -> str:
    """Median MS2 ion injection time of identified scans."""
    times = [
        value
        for (value,) in ctx.decode(
            queries.ms2_injection_times(ctx.mode), {"Ion_Injection_Time": parse_float}, "MS2_1"
        )
    ]
    return format_fixed(median(times), 3)


def ms2_2(ctx: MetricContext) -> str:
    """Median S/N of the first 75% of identified MS2 scans (scan order)."""
    values = [
        value
        for (value,) in ctx.decode(
            queries.ms2_signal_to_noise(ctx.mode),
            {"BasePeakSignalToNoiseRatio": parse_float},
            "MS2_2",
        )
    ]
    kept = [value for index, value in enumerate(values) if index + 1 <= len(values) * 0.75]
    return format_fixed(median(kept), 3)


def ms2_3(ctx: MetricContext) -> str:
    """Median number of peaks in identified MS2 spectra."""
    counts = [
        value
        for (value,) in ctx.decode(
            queries.ms2_ion_counts(ctx.mode), {"IonCountRaw": parse_float}, "MS2_3"
        )
    ]
    return format_fixed(median(counts), 0)


def quartile_counts(ctx: MetricContext) -> dict[int, tuple[int, int]]:
    """Per intensity quartile: ``(scans, filter-passing scans)``.

    Scans are ranked by ascending PeakMaxIntensity, so quartile 1 holds the
    least abundant precursors.
    """

    def load():
        row = ctx.single(queries.ms2_scan_total(ctx.mode), ["MS2ScanCount"])
        total = parse_int(row.get("MS2ScanCount")) or 0
        scans = {quartile: 0 for quartile in range(1, 5)}
        passed = {quartile: 0 for quartile in range(1, 5)}
        if total == 0:
            return {quartile: (0, 0) for quartile in range(1, 5)}

        rows = ctx.rows(
            queries.ms2_scans_by_intensity(ctx.mode),
            ["Scan", "PeakMaxIntensity", "Peptide_Score"],
        )
        for running, row in enumerate(rows, start=1):
            quartile = quartile_assign(running, total)
            scans[quartile] += 1
            score = parse_float(row["Peptide_Score"])
            if score is not None and ctx.mode.passes(score):
                passed[quartile] += 1

        if len(rows) > total and len(rows) > total * 1.01:
            logger.warning(
                "MS2_4 ranked %d scans but expected %d (dataset %s)",
                len(rows),
                total,
                ctx.dataset_id,
            )
        return {quartile: (scans[quartile], passed[quartile]) for quartile in range(1, 5)}

    return ctx.memoize("ms2_quartiles", load)


def _quartile_fraction(ctx: MetricContext, quartile: int) -> str:
    scans, passed = quartile_counts(ctx)[quartile]
    result = passed / scans if scans > 0 else 0.0
    return format_fixed(result, 4)


def ms2_4a(ctx: MetricContext) -> str:
    return _quartile_fraction(ctx, 1)


def ms2_4b(ctx: MetricContext) -> str:
    return _quartile_fraction(ctx, 2)


def ms2_4c(ctx: MetricContext) -> str:
    return _quartile_fraction(ctx, 3)


def ms2_4d(ctx: MetricContext) -> str:
    return _quartile_fraction(ctx, 4)
