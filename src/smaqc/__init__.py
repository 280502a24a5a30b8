"""SMAQC: quality-control metrics for LC-MS/MS proteomics runs."""

__version__ = "1.3.0"
