import pytest

from smaqc.metrics.cache import ScratchCache
from smaqc.metrics.mode import (
    MSGF_SPECPROB_THRESHOLD,
    XTANDEM_LOG_EVALUE_THRESHOLD,
    IdentificationMode,
)


@pytest.mark.parametrize("value", ["PHRP", "phrp", " Phrp "])
def test_parse_phrp(value):
    assert IdentificationMode.parse(value) is IdentificationMode.PHRP


def test_parse_legacy_and_passthrough():
    assert IdentificationMode.parse("LEGACY") is IdentificationMode.LEGACY
    assert IdentificationMode.parse(IdentificationMode.LEGACY) is IdentificationMode.LEGACY


def test_parse_unknown():
    with pytest.raises(ValueError, match="Unknown identification mode"):
        IdentificationMode.parse("mascot")


def test_mode_tables_and_thresholds():
    phrp = IdentificationMode.PHRP
    legacy = IdentificationMode.LEGACY
    assert (phrp.psm_table, phrp.score_column) == ("temp_PSMs", "MSGFSpecProb")
    assert (legacy.psm_table, legacy.score_column) == ("temp_xt", "Peptide_Expectation_Value_Log")
    assert phrp.threshold == MSGF_SPECPROB_THRESHOLD
    assert legacy.threshold == XTANDEM_LOG_EVALUE_THRESHOLD


def test_passes_is_inclusive():
    assert IdentificationMode.PHRP.passes(1e-12)
    assert not IdentificationMode.PHRP.passes(1e-11)
    assert IdentificationMode.LEGACY.passes(-2)
    assert not IdentificationMode.LEGACY.passes(-1.5)


def test_scratch_cache_defaults_and_reset():
    cache = ScratchCache()
    assert cache.get("missing") == 0.0
    assert cache.get("missing", 5.0) == 5.0

    cache.set("C_2A_TIME_MINUTES", 4.0)
    assert "C_2A_TIME_MINUTES" in cache
    assert cache.get("C_2A_TIME_MINUTES") == 4.0
    assert len(cache) == 1

    cache.reset()
    assert len(cache) == 0
    assert "C_2A_TIME_MINUTES" not in cache
