from __future__ import annotations

from enum import Enum

# MSGF spectral probability; lower is better
MSGF_SPECPROB_THRESHOLD = 1e-12

# X!Tandem log10 E-value; lower is better
XTANDEM_LOG_EVALUE_THRESHOLD = -2


class IdentificationMode(str, Enum):
    """Which peptide identification tables a dataset was loaded into.

    ``PHRP`` results live in ``temp_PSMs`` and are scored by MSGF spectral
    probability. ``legacy`` results live in the X!Tandem tables and are
    scored by log10 E-value.
    """

    PHRP = "PHRP"
    LEGACY = "legacy"

    @classmethod
    def parse(cls, value: "IdentificationMode | str") -> "IdentificationMode":
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        raise ValueError(f"Unknown identification mode: {value!r} (expected PHRP or legacy)")

    @property
    def threshold(self) -> float:
        if self is IdentificationMode.PHRP:
            return MSGF_SPECPROB_THRESHOLD
        return XTANDEM_LOG_EVALUE_THRESHOLD

    @property
    def psm_table(self) -> str:
        return "temp_PSMs" if self is IdentificationMode.PHRP else "temp_xt"

    @property
    def score_column(self) -> str:
        if self is IdentificationMode.PHRP:
            return "MSGFSpecProb"
        return "Peptide_Expectation_Value_Log"

    def passes(self, score: float) -> bool:
        """True when ``score`` is at or below the mode's threshold."""

        return score <= self.threshold
