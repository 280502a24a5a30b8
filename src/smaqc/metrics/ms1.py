"""MS1 metrics: injection time, signal, dynamic range and precursor mass error."""

from __future__ import annotations

from typing import NamedTuple

from smaqc.db.records import parse_float, parse_int
from smaqc.logging import get_logger
from smaqc.metrics import queries
from smaqc.metrics.chromatography import elution_window
from smaqc.metrics.context import MetricContext
from smaqc.metrics.mass import C13_UNIT_MASS, convolute_mass, correct_mass_error
from smaqc.metrics.stats import format_fixed, format_general, mean, median, percentile_trim

logger = get_logger(__file__)

# Mass errors beyond this many ppm are reported but kept
LARGE_PPM_ERROR = 200


def ms1_1(ctx: MetricContext) -> str:
    """Median MS1 ion injection time."""
    times = [
        value
        for (value,) in ctx.decode(
            queries.MS1_INJECTION_TIMES, {"Ion_Injection_Time": parse_float}, "MS1_1"
        )
    ]
    return format_general(float(median(times)))


def ms1_signal(ctx: MetricContext) -> tuple[list[float], list[float]]:
    """S/N and TIC of MS1 scans from the first identification through the window end."""

    def load():
        window = elution_window(ctx)
        rows = ctx.decode(
            queries.MS1_SIGNAL_IN_RANGE,
            {"BasePeakSignalToNoiseRatio": parse_float, "TotalIonIntensity": parse_float},
            "MS1_2",
            scan_start=window.first_scan,
            scan_end=window.scan_end,
        )
        return [row[0] for row in rows], [row[1] for row in rows]

    return ctx.memoize("ms1_signal", load)


def ms1_2a(ctx: MetricContext) -> str:
    signal_to_noise, _ = ms1_signal(ctx)
    return format_general(float(median(signal_to_noise)))


def ms1_2b(ctx: MetricContext) -> str:
    _, tic = ms1_signal(ctx)
    return format_general(float(median(tic)) / 1000)


class PeakIntensityStats(NamedTuple):
    values: list[float]
    p5: float
    p95: float


def peak_intensities(ctx: MetricContext) -> PeakIntensityStats:
    def load():
        values = [
            value
            for (value,) in ctx.decode(
                queries.passing_peak_intensities(ctx.mode),
                {"PeakMaxIntensity": parse_float},
                "MS1_3",
            )
        ]
        trimmed = percentile_trim(values, 0.05, 0.95)
        if not trimmed:
            return PeakIntensityStats(values, 0.0, 0.0)
        return PeakIntensityStats(values, trimmed[0], trimmed[-1])

    return ctx.memoize("peak_intensities", load)


def ms1_3a(ctx: MetricContext) -> str:
    """Dynamic range: 95th / 5th percentile of identified peak apex intensity."""
    stats = peak_intensities(ctx)
    result = stats.p95 / stats.p5 if stats.p5 > 0 else 0.0
    return format_fixed(result, 3)


def ms1_3b(ctx: MetricContext) -> str:
    """Median identified peak apex intensity."""
    value = median(peak_intensities(ctx).values)
    if value > 100:
        return format_fixed(value, 0)
    return format_fixed(value, 1)


class MassErrors(NamedTuple):
    delm: list[float]
    ppm: list[float]


def mass_errors(ctx: MetricContext) -> MassErrors:
    """Isotope-corrected precursor mass errors in Da and ppm."""

    def load():
        delm_values = []
        ppm_values = []
        for mh, charge, mz in ctx.decode(
            queries.precursor_masses(ctx.mode),
            {"Peptide_MH": parse_float, "Charge": parse_int, "MZ": parse_float},
            "MS1_5",
        ):
            theoretical = convolute_mass(mh, 1, 0)
            observed = convolute_mass(mz, charge, 0)
            delm = correct_mass_error(observed - theoretical, C13_UNIT_MASS)

            ppm = delm / (theoretical / 1e6) if theoretical > 0 else 0.0
            if abs(ppm) > LARGE_PPM_ERROR:
                logger.warning("Large DelM_PPM: %s (dataset %s)", ppm, ctx.dataset_id)

            delm_values.append(delm)
            ppm_values.append(ppm)
        return MassErrors(delm_values, ppm_values)

    return ctx.memoize("mass_errors", load)


def ms1_5a(ctx: MetricContext) -> str:
    errors = mass_errors(ctx)
    if not errors.delm:
        return "0"
    return format_fixed(median(errors.delm), 6)


def ms1_5b(ctx: MetricContext) -> str:
    errors = mass_errors(ctx)
    if not errors.delm:
        return "0"
    return format_fixed(mean([abs(value) for value in errors.delm]), 6)


def ms1_5c(ctx: MetricContext) -> str:
    errors = mass_errors(ctx)
    if not errors.ppm:
        return "0"
    return format_fixed(median(errors.ppm), 3)


def ms1_5d(ctx: MetricContext) -> str:
    """Median ppm error over the interquartile slice of the sorted errors."""
    ppm = sorted(mass_errors(ctx).ppm)
    if not ppm:
        return "0"
    start = round(0.25 * len(ppm))
    end = round(0.75 * len(ppm))
    return format_fixed(median(ppm[start : end + 1]), 3)
