"""SQL for the metric families.

Every query is scoped by ``:random_id``. Queries over identifications filter
with ``:threshold`` against the mode's score column. Table and column names
come from :class:`~smaqc.metrics.mode.IdentificationMode`, never from user
input.
"""

from __future__ import annotations

from smaqc.metrics.mode import IdentificationMode

LEGACY_SEQ_JOIN = (
    " INNER JOIN temp_xt_resulttoseqmap"
    "   ON temp_xt.Result_ID = temp_xt_resulttoseqmap.Result_ID"
    "  AND temp_xt_resulttoseqmap.random_id = :random_id"
)

LEGACY_PROTEIN_JOIN = (
    " INNER JOIN temp_xt_seqtoproteinmap"
    "   ON temp_xt_resulttoseqmap.Unique_Seq_ID = temp_xt_seqtoproteinmap.Unique_Seq_ID"
    "  AND temp_xt_seqtoproteinmap.random_id = :random_id"
)


def _passing(mode: IdentificationMode) -> str:
    return f"{mode.psm_table}.{mode.score_column} <= :threshold"


def _phospho(mode: IdentificationMode, phospho: bool) -> str:
    # legacy tables carry no phosphopeptide flag
    if phospho and mode is IdentificationMode.PHRP:
        return " AND temp_PSMs.Phosphopeptide = 1"
    return ""


# -- chromatography ---------------------------------------------------------

def id_vs_apex_times(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        f"SELECT {psm}.Scan, t1.FragScanNumber, t1.OptimalPeakApexScanNumber,"
        " temp_scanstats.ScanTime AS ScanTime1, t2.ScanTime AS ScanTimePeakApex"
        f" FROM {psm}"
        f" INNER JOIN temp_scanstats ON {psm}.Scan = temp_scanstats.ScanNumber"
        f" INNER JOIN temp_sicstats AS t1 ON {psm}.Scan = t1.FragScanNumber"
        " INNER JOIN temp_scanstats AS t2 ON t1.OptimalPeakApexScanNumber = t2.ScanNumber"
        f" WHERE {psm}.random_id = :random_id"
        " AND temp_scanstats.random_id = :random_id"
        " AND t1.random_id = :random_id"
        " AND t2.random_id = :random_id"
        f" AND {_passing(mode)}"
        f" ORDER BY {psm}.Scan"
    )


def passing_scan_times(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        f"SELECT {psm}.Scan, t1.FragScanNumber AS ScanNumber,"
        " temp_scanstats.ScanTime AS ScanTime1"
        f" FROM {psm}"
        f" INNER JOIN temp_scanstats ON {psm}.Scan = temp_scanstats.ScanNumber"
        f" INNER JOIN temp_sicstats AS t1 ON {psm}.Scan = t1.FragScanNumber"
        f" WHERE {psm}.random_id = :random_id"
        " AND temp_scanstats.random_id = :random_id"
        " AND t1.random_id = :random_id"
        f" AND {_passing(mode)}"
        f" ORDER BY {psm}.Scan"
    )


def psm_scores(mode: IdentificationMode) -> str:
    return (
        f"SELECT Scan, Charge, Peptide_Sequence, {mode.score_column} AS Peptide_Score"
        f" FROM {mode.psm_table}"
        " WHERE random_id = :random_id"
    )


SIC_PEAKS = (
    "SELECT FragScanNumber, FWHMInScans, OptimalPeakApexScanNumber"
    " FROM temp_sicstats"
    " WHERE random_id = :random_id"
)

SCAN_TIMES = (
    "SELECT ScanNumber, ScanTime"
    " FROM temp_scanstats"
    " WHERE random_id = :random_id"
)


# -- dynamic sampling -------------------------------------------------------

def spectra_per_peptide(mode: IdentificationMode) -> str:
    if mode is IdentificationMode.PHRP:
        distinct = (
            "SELECT Unique_Seq_ID, Scan FROM temp_PSMs"
            " WHERE random_id = :random_id"
            f" AND {_passing(mode)}"
            " GROUP BY Unique_Seq_ID, Scan"
        )
    else:
        distinct = (
            "SELECT temp_xt_resulttoseqmap.Unique_Seq_ID, temp_xt.Scan FROM temp_xt"
            f"{LEGACY_SEQ_JOIN}"
            " WHERE temp_xt.random_id = :random_id"
            f" AND {_passing(mode)}"
            " GROUP BY temp_xt_resulttoseqmap.Unique_Seq_ID, temp_xt.Scan"
        )
    return (
        "SELECT Spectra, COUNT(*) AS Peptides"
        " FROM (SELECT Unique_Seq_ID, COUNT(*) AS Spectra"
        f"       FROM ({distinct}) DistinctQ"
        "       GROUP BY Unique_Seq_ID) CountQ"
        " GROUP BY Spectra"
    )


SCAN_COUNT_IN_RANGE = (
    "SELECT COUNT(*) AS ScanCount"
    " FROM temp_scanstats"
    " WHERE random_id = :random_id"
    " AND ScanType = :ms_level"
    " AND ScanNumber >= :scan_start"
    " AND ScanNumber <= :scan_end"
)


def intensity_ratios(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        "SELECT temp_sicstats.ParentIonIntensity, temp_sicstats.PeakMaxIntensity"
        f" FROM {psm}"
        f" INNER JOIN temp_sicstats ON temp_sicstats.FragScanNumber = {psm}.Scan"
        " WHERE temp_sicstats.random_id = :random_id"
        f" AND {psm}.random_id = :random_id"
        f" AND {_passing(mode)}"
    )


# -- ion source -------------------------------------------------------------

MS1_BASE_PEAKS = (
    "SELECT ScanNumber, BasePeakIntensity"
    " FROM temp_scanstats"
    " WHERE random_id = :random_id"
    " AND ScanType = 1"
    " ORDER BY ScanNumber"
)


def passing_precursors(mode: IdentificationMode) -> str:
    return (
        "SELECT Peptide_MH, Charge"
        f" FROM {mode.psm_table}"
        " WHERE random_id = :random_id"
        f" AND {_passing(mode)}"
    )


def charge_counts(mode: IdentificationMode) -> str:
    return (
        "SELECT Charge, COUNT(*) AS PSMs"
        f" FROM {mode.psm_table}"
        " WHERE random_id = :random_id"
        f" AND {_passing(mode)}"
        " GROUP BY Charge"
    )


# -- MS1 --------------------------------------------------------------------

MS1_INJECTION_TIMES = (
    "SELECT temp_scanstatsex.Ion_Injection_Time"
    " FROM temp_scanstats"
    " INNER JOIN temp_scanstatsex ON temp_scanstats.ScanNumber = temp_scanstatsex.ScanNumber"
    " WHERE temp_scanstatsex.random_id = :random_id"
    " AND temp_scanstats.random_id = :random_id"
    " AND temp_scanstats.ScanType = 1"
    " ORDER BY temp_scanstats.ScanNumber"
)

MS1_SIGNAL_IN_RANGE = (
    "SELECT BasePeakSignalToNoiseRatio, TotalIonIntensity"
    " FROM temp_scanstats"
    " WHERE random_id = :random_id"
    " AND ScanType = 1"
    " AND ScanNumber >= :scan_start"
    " AND ScanNumber <= :scan_end"
)


def passing_peak_intensities(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        "SELECT temp_sicstats.PeakMaxIntensity"
        f" FROM {psm}"
        f" INNER JOIN temp_sicstats ON temp_sicstats.FragScanNumber = {psm}.Scan"
        " WHERE temp_sicstats.random_id = :random_id"
        f" AND {psm}.random_id = :random_id"
        f" AND {_passing(mode)}"
        f" ORDER BY temp_sicstats.PeakMaxIntensity, {psm}.Result_ID DESC"
    )


def precursor_masses(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    if mode is IdentificationMode.PHRP:
        delm = "temp_PSMs.DelM_Da"
    else:
        delm = "0 AS DelM_Da"
    return (
        f"SELECT {psm}.Peptide_MH, {psm}.Charge, temp_sicstats.MZ, {delm}, {psm}.DelM_PPM"
        f" FROM {psm}"
        f" INNER JOIN temp_sicstats ON temp_sicstats.FragScanNumber = {psm}.Scan"
        " WHERE temp_sicstats.random_id = :random_id"
        f" AND {psm}.random_id = :random_id"
        f" AND {_passing(mode)}"
    )


# -- MS2 --------------------------------------------------------------------

def ms2_injection_times(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        "SELECT temp_scanstatsex.Ion_Injection_Time"
        f" FROM {psm}"
        f" INNER JOIN temp_scanstatsex ON {psm}.Scan = temp_scanstatsex.ScanNumber"
        f" WHERE {psm}.random_id = :random_id"
        " AND temp_scanstatsex.random_id = :random_id"
        f" AND {_passing(mode)}"
    )


def _ms2_scanstats_column(mode: IdentificationMode, column: str, order: bool = False) -> str:
    psm = mode.psm_table
    sql = (
        f"SELECT temp_scanstats.{column}"
        f" FROM {psm}"
        f" INNER JOIN temp_scanstats ON {psm}.Scan = temp_scanstats.ScanNumber"
        f" WHERE {psm}.random_id = :random_id"
        " AND temp_scanstats.random_id = :random_id"
        f" AND {_passing(mode)}"
    )
    if order:
        sql += " ORDER BY temp_scanstats.ScanNumber"
    return sql


def ms2_signal_to_noise(mode: IdentificationMode) -> str:
    return _ms2_scanstats_column(mode, "BasePeakSignalToNoiseRatio", order=True)


def ms2_ion_counts(mode: IdentificationMode) -> str:
    return _ms2_scanstats_column(mode, "IonCountRaw")


def ms2_scan_total(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        "SELECT COUNT(*) AS MS2ScanCount"
        f" FROM (SELECT DISTINCT {psm}.Scan, temp_sicstats.PeakMaxIntensity"
        f"       FROM {psm}"
        f"       INNER JOIN temp_sicstats ON {psm}.Scan = temp_sicstats.FragScanNumber"
        f"       WHERE {psm}.random_id = :random_id"
        "         AND temp_sicstats.random_id = :random_id) LookupQ"
    )


def ms2_scans_by_intensity(mode: IdentificationMode) -> str:
    psm = mode.psm_table
    return (
        f"SELECT {psm}.Scan, temp_sicstats.PeakMaxIntensity,"
        f" MIN({psm}.{mode.score_column}) AS Peptide_Score"
        f" FROM {psm}"
        f" INNER JOIN temp_sicstats ON {psm}.Scan = temp_sicstats.FragScanNumber"
        f" WHERE {psm}.random_id = :random_id"
        " AND temp_sicstats.random_id = :random_id"
        f" GROUP BY {psm}.Scan, temp_sicstats.PeakMaxIntensity"
        " ORDER BY temp_sicstats.PeakMaxIntensity"
    )


# -- peptides ---------------------------------------------------------------

def best_scores(mode: IdentificationMode, hyperscore: bool) -> str:
    """Best score per scan.

    PHRP always yields the minimum spectral probability; the caller applies
    the log transform. Legacy yields the maximum hyperscore when
    ``hyperscore`` is set, else the minimum log E-value.
    """

    if mode is IdentificationMode.PHRP:
        score = "MIN(MSGFSpecProb)"
    elif hyperscore:
        score = "MAX(Peptide_Hyperscore)"
    else:
        score = "MIN(Peptide_Expectation_Value_Log)"
    return (
        f"SELECT Scan, {score} AS Peptide_Score"
        f" FROM {mode.psm_table}"
        " WHERE random_id = :random_id"
        " GROUP BY Scan"
        " ORDER BY Scan"
    )


def spectra_by_cleavage(mode: IdentificationMode, phospho: bool = False) -> str:
    if mode is IdentificationMode.PHRP:
        inner = (
            "SELECT Scan, MAX(Cleavage_State) AS Cleavage_State"
            " FROM temp_PSMs"
            " WHERE random_id = :random_id"
            f" AND {_passing(mode)}"
            f"{_phospho(mode, phospho)}"
            " GROUP BY Scan"
        )
    else:
        inner = (
            "SELECT temp_xt.Scan, MAX(temp_xt_seqtoproteinmap.Cleavage_State) AS Cleavage_State"
            " FROM temp_xt"
            f"{LEGACY_SEQ_JOIN}"
            f"{LEGACY_PROTEIN_JOIN}"
            " WHERE temp_xt.random_id = :random_id"
            f" AND {_passing(mode)}"
            " GROUP BY temp_xt.Scan"
        )
    return (
        "SELECT Cleavage_State, COUNT(*) AS Spectra"
        f" FROM ({inner}) StatsQ"
        " GROUP BY Cleavage_State"
    )


def peptides_by_cleavage(
    mode: IdentificationMode, by_charge: bool, phospho: bool = False
) -> str:
    if mode is IdentificationMode.PHRP:
        group = "Unique_Seq_ID, Charge" if by_charge else "Unique_Seq_ID"
        inner = (
            f"SELECT {group}, MAX(Cleavage_State) AS Cleavage_State"
            " FROM temp_PSMs"
            " WHERE random_id = :random_id"
            f" AND {_passing(mode)}"
            f"{_phospho(mode, phospho)}"
            f" GROUP BY {group}"
        )
    else:
        group = "temp_xt_resulttoseqmap.Unique_Seq_ID"
        if by_charge:
            group += ", temp_xt.Charge"
        inner = (
            f"SELECT {group}, MAX(temp_xt_seqtoproteinmap.Cleavage_State) AS Cleavage_State"
            " FROM temp_xt"
            f"{LEGACY_SEQ_JOIN}"
            f"{LEGACY_PROTEIN_JOIN}"
            " WHERE temp_xt.random_id = :random_id"
            f" AND {_passing(mode)}"
            f" GROUP BY {group}"
        )
    return (
        "SELECT Cleavage_State, COUNT(*) AS Peptides"
        f" FROM ({inner}) StatsQ"
        " GROUP BY Cleavage_State"
    )
