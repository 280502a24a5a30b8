"""Chromatography metrics (C_*): identification timing and peak widths."""

from __future__ import annotations

import math
from typing import NamedTuple

from smaqc.db.records import parse_float, parse_int
from smaqc.logging import get_logger
from smaqc.metrics import queries
from smaqc.metrics.context import MetricContext
from smaqc.metrics.mass import split_prefix_suffix
from smaqc.metrics.stats import format_fixed, median

logger = get_logger(__file__)

# Minutes between identification and peak apex counted as early / late
APEX_OFFSET_MINUTES = 4.0

REGION_SCAN_START = "C_2A_REGION_SCAN_START"
REGION_SCAN_END = "C_2A_REGION_SCAN_END"
TIME_MINUTES = "C_2A_TIME_MINUTES"
SCAN_FIRST_FILTER_PASSING_PEPTIDE = "SCAN_FIRST_FILTER_PASSING_PEPTIDE"


class ElutionWindow(NamedTuple):
    scan_start: int
    scan_end: int
    minutes: float
    first_scan: int


def _id_vs_apex_fraction(ctx: MetricContext, late: bool, source: str) -> str:
    rows = ctx.decode(
        queries.id_vs_apex_times(ctx.mode),
        {"Scan": parse_int, "ScanTime1": parse_float, "ScanTimePeakApex": parse_float},
        source,
    )
    if not rows:
        return ""

    count = 0
    for _, id_time, apex_time in rows:
        difference = id_time - apex_time if late else apex_time - id_time
        if difference >= APEX_OFFSET_MINUTES:
            count += 1
    return format_fixed(count / len(rows), 6)


def c_1a(ctx: MetricContext) -> str:
    """Fraction of peptides identified 4+ minutes before their peak apex."""
    return _id_vs_apex_fraction(ctx, late=False, source="C_1A")


def c_1b(ctx: MetricContext) -> str:
    """Fraction of peptides identified 4+ minutes after their peak apex."""
    return _id_vs_apex_fraction(ctx, late=True, source="C_1B")


def _passing_scan_times(ctx: MetricContext, source: str) -> dict[int, float]:
    scans: dict[int, float] = {}
    for scan, scan_time in ctx.decode(
        queries.passing_scan_times(ctx.mode),
        {"ScanNumber": parse_int, "ScanTime1": parse_float},
        source,
    ):
        scans.setdefault(scan, scan_time)
    return dict(sorted(scans.items()))


def _compute_elution_window(ctx: MetricContext) -> None:
    scans = _passing_scan_times(ctx, "C_2A")
    scan_start = scan_end = 0
    time_start = time_end = 0.0

    if scans:
        numbers = list(scans)
        count = len(numbers)
        index25 = min(int(count * 0.25), count - 1)
        index75 = min(int(count * 0.75), count - 1)
        index75 = max(index75, index25)

        scan_start, scan_end = numbers[index25], numbers[index75]
        time_start, time_end = scans[scan_start], scans[scan_end]
        ctx.cache.set(SCAN_FIRST_FILTER_PASSING_PEPTIDE, numbers[0])

    ctx.cache.set(REGION_SCAN_START, scan_start)
    ctx.cache.set(REGION_SCAN_END, scan_end)
    ctx.cache.set(TIME_MINUTES, time_end - time_start)


def elution_window(ctx: MetricContext) -> ElutionWindow:
    """Scan and time span holding the middle 50% of filter-passing identifications.

    Computed once per dataset and kept in the scratch cache, so every
    consumer sees the same window regardless of which metrics ran before.
    """

    if TIME_MINUTES not in ctx.cache:
        _compute_elution_window(ctx)
    return ElutionWindow(
        scan_start=int(ctx.cache.get(REGION_SCAN_START)),
        scan_end=int(ctx.cache.get(REGION_SCAN_END)),
        minutes=ctx.cache.get(TIME_MINUTES),
        first_scan=int(ctx.cache.get(SCAN_FIRST_FILTER_PASSING_PEPTIDE)),
    )


def c_2a(ctx: MetricContext) -> str:
    """Minutes over which the middle 50% of peptides are identified."""
    return format_fixed(elution_window(ctx).minutes, 4)


def c_2b(ctx: MetricContext) -> str:
    """Identification rate (scans per minute) within the C_2A window."""
    window = elution_window(ctx)
    scans = {
        scan
        for scan in _passing_scan_times(ctx, "C_2B")
        if window.scan_start <= scan <= window.scan_end
    }
    if window.minutes <= 0:
        return ""
    return format_fixed(len(scans) / window.minutes, 4)


class PeakWidthData(NamedTuple):
    best_scans: list[int]
    fwhm_in_scans: dict[int, float]
    apex_scan: dict[int, int]
    scan_time: dict[int, float]


def _best_scans(ctx: MetricContext) -> list[int]:
    psms = []
    for scan, charge, sequence, score in ctx.decode(
        queries.psm_scores(ctx.mode),
        {
            "Scan": parse_int,
            "Charge": parse_int,
            "Peptide_Sequence": str,
            "Peptide_Score": parse_float,
        },
        "peak width",
    ):
        residues, _, _ = split_prefix_suffix(sequence)
        psms.append((residues, charge, scan, score))

    # lowest score wins; on ties the earliest scan is kept
    best: dict[tuple[str, int], tuple[float, int]] = {}
    for residues, charge, scan, score in sorted(psms):
        key = (residues, charge)
        if key not in best or score < best[key][0]:
            best[key] = (score, scan)
    return sorted(scan for _, scan in best.values())


def _load_peak_width_data(ctx: MetricContext) -> PeakWidthData:
    fwhm: dict[int, float] = {}
    apex: dict[int, int] = {}
    for frag_scan, fwhm_scans, apex_scan in ctx.decode(
        queries.SIC_PEAKS,
        {
            "FragScanNumber": parse_int,
            "FWHMInScans": parse_float,
            "OptimalPeakApexScanNumber": parse_int,
        },
        "peak width",
    ):
        fwhm.setdefault(frag_scan, fwhm_scans)
        apex.setdefault(frag_scan, apex_scan)

    scan_time: dict[int, float] = {}
    for scan, time in ctx.decode(
        queries.SCAN_TIMES, {"ScanNumber": parse_int, "ScanTime": parse_float}, "peak width"
    ):
        scan_time.setdefault(scan, time)

    return PeakWidthData(_best_scans(ctx), fwhm, apex, scan_time)


def median_peak_width(ctx: MetricContext, start_relative: float, end_relative: float) -> str:
    """Median peak width in seconds for best scans whose rank fraction is in range."""

    data: PeakWidthData = ctx.memoize("peak_width", lambda: _load_peak_width_data(ctx))
    total = len(data.best_scans)
    widths = []
    missing = 0

    for index, scan in enumerate(data.best_scans):
        if scan not in data.apex_scan:
            missing += 1
            continue
        half_width = math.ceil(data.fwhm_in_scans[scan] / 2)
        start_scan = data.apex_scan[scan] - half_width
        end_scan = data.apex_scan[scan] + half_width
        if start_scan not in data.scan_time or end_scan not in data.scan_time:
            continue

        percent = (index + 1) / total
        if start_relative <= percent <= end_relative:
            widths.append((data.scan_time[end_scan] - data.scan_time[start_scan]) * 60)

    if missing:
        logger.debug("%d best scan(s) have no SIC entry (dataset %s)", missing, ctx.dataset_id)
    if not widths:
        return ""
    return format_fixed(median(widths), 2)


def c_3a(ctx: MetricContext) -> str:
    return median_peak_width(ctx, 0.0, 1.0)


def c_3b(ctx: MetricContext) -> str:
    return median_peak_width(ctx, 0.25, 0.75)


def c_4a(ctx: MetricContext) -> str:
    return median_peak_width(ctx, 0.0, 0.10)


def c_4b(ctx: MetricContext) -> str:
    return median_peak_width(ctx, 0.90, 1.0)


def c_4c(ctx: MetricContext) -> str:
    return median_peak_width(ctx, 0.45, 0.55)
