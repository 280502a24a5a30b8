"""Dynamic sampling metrics (DS_*)."""

from __future__ import annotations

from smaqc.db.records import parse_float, parse_int
from smaqc.metrics import queries
from smaqc.metrics.chromatography import elution_window
from smaqc.metrics.context import MetricContext
from smaqc.metrics.stats import format_fixed, median


def peptide_sampling(ctx: MetricContext) -> dict[int, int]:
    """Number of peptides keyed by how many spectra identified them."""

    def load():
        stats: dict[int, int] = {}
        for spectra, peptides in ctx.decode(
            queries.spectra_per_peptide(ctx.mode),
            {"Spectra": parse_int, "Peptides": parse_int},
            "DS_1",
        ):
            stats.setdefault(spectra, peptides)
        return stats

    return ctx.memoize("peptide_sampling", load)


def _sampling_ratio(ctx: MetricContext, numerator: int, denominator: int) -> str:
    stats = peptide_sampling(ctx)
    result = 0.0
    if stats.get(denominator, 0) > 0:
        result = stats.get(numerator, 0) / stats[denominator]
    return format_fixed(result, 3)


def ds_1a(ctx: MetricContext) -> str:
    """Peptides seen by one spectrum / peptides seen by two."""
    return _sampling_ratio(ctx, 1, 2)


def ds_1b(ctx: MetricContext) -> str:
    """Peptides seen by two spectra / peptides seen by three."""
    return _sampling_ratio(ctx, 2, 3)


def _scans_in_window(ctx: MetricContext, ms_level: int) -> str:
    window = elution_window(ctx)
    row = ctx.single(
        queries.SCAN_COUNT_IN_RANGE,
        ["ScanCount"],
        ms_level=ms_level,
        scan_start=window.scan_start,
        scan_end=window.scan_end,
    )
    return str(parse_int(row.get("ScanCount")) or 0)


def ds_2a(ctx: MetricContext) -> str:
    """MS1 scans taken over the middle 50% of the separation."""
    return _scans_in_window(ctx, 1)


def ds_2b(ctx: MetricContext) -> str:
    """MS2 scans taken over the middle 50% of the separation."""
    return _scans_in_window(ctx, 2)


def intensity_ratios(ctx: MetricContext) -> list[float]:
    """Sorted PeakMaxIntensity / ParentIonIntensity for identified scans."""

    def load():
        ratios = []
        for parent, peak_max in ctx.decode(
            queries.intensity_ratios(ctx.mode),
            {"ParentIonIntensity": parse_float, "PeakMaxIntensity": parse_float},
            "DS_3",
        ):
            ratios.append(peak_max / parent if parent > 0 else 0.0)
        return sorted(ratios)

    return ctx.memoize("intensity_ratios", load)


def ds_3a(ctx: MetricContext) -> str:
    return format_fixed(median(intensity_ratios(ctx)), 3)


def ds_3b(ctx: MetricContext) -> str:
    # bottom 50% by ratio
    ratios = intensity_ratios(ctx)
    bottom = [value for index, value in enumerate(ratios) if (index + 1) / len(ratios) <= 0.5]
    return format_fixed(median(bottom), 3)
