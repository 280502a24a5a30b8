"""Name -> metric function table, in canonical output order."""

from __future__ import annotations

from typing import Callable

from smaqc.metrics import chromatography, dynamic_sampling, ion_source, ms1, ms2, peptides
from smaqc.metrics.context import MetricContext

MetricFunc = Callable[[MetricContext], str]

METRICS: dict[str, MetricFunc] = {
    "C_1A": chromatography.c_1a,
    "C_1B": chromatography.c_1b,
    "C_2A": chromatography.c_2a,
    "C_2B": chromatography.c_2b,
    "C_3A": chromatography.c_3a,
    "C_3B": chromatography.c_3b,
    "C_4A": chromatography.c_4a,
    "C_4B": chromatography.c_4b,
    "C_4C": chromatography.c_4c,
    "DS_1A": dynamic_sampling.ds_1a,
    "DS_1B": dynamic_sampling.ds_1b,
    "DS_2A": dynamic_sampling.ds_2a,
    "DS_2B": dynamic_sampling.ds_2b,
    "DS_3A": dynamic_sampling.ds_3a,
    "DS_3B": dynamic_sampling.ds_3b,
    "IS_1A": ion_source.is_1a,
    "IS_1B": ion_source.is_1b,
    "IS_2": ion_source.is_2,
    "IS_3A": ion_source.is_3a,
    "IS_3B": ion_source.is_3b,
    "IS_3C": ion_source.is_3c,
    "MS1_1": ms1.ms1_1,
    "MS1_2A": ms1.ms1_2a,
    "MS1_2B": ms1.ms1_2b,
    "MS1_3A": ms1.ms1_3a,
    "MS1_3B": ms1.ms1_3b,
    "MS1_5A": ms1.ms1_5a,
    "MS1_5B": ms1.ms1_5b,
    "MS1_5C": ms1.ms1_5c,
    "MS1_5D": ms1.ms1_5d,
    "MS2_1": ms2.ms2_1,
    "MS2_2": ms2.ms2_2,
    "MS2_3": ms2.ms2_3,
    "MS2_4A": ms2.ms2_4a,
    "MS2_4B": ms2.ms2_4b,
    "MS2_4C": ms2.ms2_4c,
    "MS2_4D": ms2.ms2_4d,
    "P_1A": peptides.p_1a,
    "P_1B": peptides.p_1b,
    "P_2A": peptides.p_2a,
    "P_2B": peptides.p_2b,
    "P_2C": peptides.p_2c,
    "P_3": peptides.p_3,
    "Phos_2A": peptides.phos_2a,
    "Phos_2C": peptides.phos_2c,
}

CATALOG: tuple[str, ...] = tuple(METRICS)


DESCRIPTIONS: dict[str, str] = {
    "C_1A": "Fraction of peptides identified 4+ minutes before the peak apex",
    "C_1B": "Fraction of peptides identified 4+ minutes after the peak apex",
    "C_2A": "Minutes spanning the middle 50% of peptide identifications",
    "C_2B": "Identification rate during the C_2A window",
    "C_3A": "Median peak width, all peptides (s)",
    "C_3B": "Median peak width, middle 50% of separation (s)",
    "C_4A": "Median peak width, first 10% of separation (s)",
    "C_4B": "Median peak width, last 10% of separation (s)",
    "C_4C": "Median peak width, middle 10% of separation (s)",
    "DS_1A": "Peptides with one spectrum / peptides with two",
    "DS_1B": "Peptides with two spectra / peptides with three",
    "DS_2A": "MS1 scans during the C_2A window",
    "DS_2B": "MS2 scans during the C_2A window",
    "DS_3A": "Median MS1 peak max / sampled abundance",
    "DS_3B": "Median MS1 peak max / sampled abundance, bottom 50%",
    "IS_1A": "MS1 base peak jumps > 10x",
    "IS_1B": "MS1 base peak falls > 10x",
    "IS_2": "Median precursor m/z",
    "IS_3A": "1+ / 2+ identified precursors",
    "IS_3B": "3+ / 2+ identified precursors",
    "IS_3C": "4+ / 2+ identified precursors",
    "MS1_1": "Median MS1 ion injection time",
    "MS1_2A": "Median MS1 S/N from first ID through C_2A window end",
    "MS1_2B": "Median MS1 TIC / 1000 from first ID through C_2A window end",
    "MS1_3A": "95th / 5th percentile of identified peak intensity",
    "MS1_3B": "Median identified peak intensity",
    "MS1_5A": "Median precursor mass error (Da)",
    "MS1_5B": "Mean absolute precursor mass error (Da)",
    "MS1_5C": "Median precursor mass error (ppm)",
    "MS1_5D": "Median interquartile precursor mass error (ppm)",
    "MS2_1": "Median MS2 ion injection time of identified scans",
    "MS2_2": "Median S/N of the lower 75% of identified MS2 scans",
    "MS2_3": "Median peak count of identified MS2 scans",
    "MS2_4A": "Fraction identified, lowest intensity quartile",
    "MS2_4B": "Fraction identified, second intensity quartile",
    "MS2_4C": "Fraction identified, third intensity quartile",
    "MS2_4D": "Fraction identified, highest intensity quartile",
    "P_1A": "Median best score per scan (hyperscore or -log10 SpecProb)",
    "P_1B": "Median best score per scan (log10 E-value or log10 SpecProb)",
    "P_2A": "Fully tryptic spectra",
    "P_2B": "Fully tryptic peptide + charge combinations",
    "P_2C": "Fully tryptic peptides",
    "P_3": "Semi-tryptic / fully tryptic peptides",
    "Phos_2A": "Fully tryptic phosphopeptide spectra",
    "Phos_2C": "Fully tryptic phosphopeptides",
}
