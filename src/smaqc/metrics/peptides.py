"""Peptide identification metrics (P_*, Phos_*)."""

from __future__ import annotations

import math

from smaqc.db.records import parse_float, parse_int
from smaqc.metrics import queries
from smaqc.metrics.context import MetricContext
from smaqc.metrics.mode import IdentificationMode
from smaqc.metrics.stats import format_fixed, median

# Cleavage_State values
FULLY_TRYPTIC = 2
PARTIALLY_TRYPTIC = 1


def best_scores(ctx: MetricContext, hyperscore: bool, source: str) -> list[float]:
    """Best score per scan, in scan order.

    PHRP spectral probabilities become ``-log10(p)`` when ``hyperscore`` is
    set and ``log10(p)`` otherwise; non-positive probabilities are skipped.
    """

    rows = ctx.decode(
        queries.best_scores(ctx.mode, hyperscore),
        {"Scan": parse_int, "Peptide_Score": parse_float},
        source,
    )
    scores = [score for _, score in rows]
    if ctx.mode is IdentificationMode.PHRP:
        sign = -1 if hyperscore else 1
        scores = [sign * math.log10(score) for score in scores if score > 0]
    return scores


def p_1a(ctx: MetricContext) -> str:
    """Median peptide ID score (hyperscore or -log10 spectral probability)."""
    return format_fixed(median(best_scores(ctx, True, "P_1A")), 2)


def p_1b(ctx: MetricContext) -> str:
    """Median peptide ID score (log10 E-value or log10 spectral probability)."""
    return format_fixed(median(best_scores(ctx, False, "P_1B")), 3)


def _cleavage_counts(ctx: MetricContext, sql: str, count_column: str, source: str) -> dict[int, int]:
    counts: dict[int, int] = {}
    for state, count in ctx.decode(
        sql, {"Cleavage_State": parse_int, count_column: parse_int}, source
    ):
        counts.setdefault(state, count)
    return counts


def spectra_by_cleavage(ctx: MetricContext, phospho: bool = False) -> dict[int, int]:
    return ctx.memoize(
        f"spectra_by_cleavage:{phospho}",
        lambda: _cleavage_counts(
            ctx, queries.spectra_by_cleavage(ctx.mode, phospho), "Spectra", "P_2A"
        ),
    )


def peptides_by_cleavage(
    ctx: MetricContext, by_charge: bool, phospho: bool = False
) -> dict[int, int]:
    return ctx.memoize(
        f"peptides_by_cleavage:{by_charge}:{phospho}",
        lambda: _cleavage_counts(
            ctx, queries.peptides_by_cleavage(ctx.mode, by_charge, phospho), "Peptides", "P_2"
        ),
    )


def p_2a(ctx: MetricContext) -> str:
    """Fully tryptic spectra."""
    return str(spectra_by_cleavage(ctx).get(FULLY_TRYPTIC, 0))


def p_2b(ctx: MetricContext) -> str:
    """Fully tryptic distinct peptide + charge combinations."""
    return str(peptides_by_cleavage(ctx, by_charge=True).get(FULLY_TRYPTIC, 0))


def p_2c(ctx: MetricContext) -> str:
    """Fully tryptic distinct peptides."""
    return str(peptides_by_cleavage(ctx, by_charge=False).get(FULLY_TRYPTIC, 0))


def p_3(ctx: MetricContext) -> str:
    """Semi-tryptic / fully tryptic distinct peptides."""
    counts = peptides_by_cleavage(ctx, by_charge=False)
    full = counts.get(FULLY_TRYPTIC, 0)
    result = counts.get(PARTIALLY_TRYPTIC, 0) / full if full > 0 else 0.0
    return format_fixed(result, 6)


def phos_2a(ctx: MetricContext) -> str:
    return str(spectra_by_cleavage(ctx, phospho=True).get(FULLY_TRYPTIC, 0))


def phos_2c(ctx: MetricContext) -> str:
    return str(peptides_by_cleavage(ctx, by_charge=False, phospho=True).get(FULLY_TRYPTIC, 0))
