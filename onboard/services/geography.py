"""Country-name aliases for joining onboarding data to world-map regions."""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd

from onboard.utils.values import is_absent

# Alternate spellings found in onboarding answers -> world-map region key.
# Names not listed here are already canonical or have no matching region.
COUNTRY_ALIASES: Dict[str, str] = {
    "United States of America": "USA",
    "United Kingdom": "UK",
    'Eswatini (fmr. Swaziland")': "Swaziland",
    "Eswatini (fmr. Swaziland": "Swaziland",
}


def canonical_country(name: Optional[str]) -> Optional[str]:
    if is_absent(name):
        return None
    return COUNTRY_ALIASES.get(name, name)


def canonicalize(series: pd.Series) -> pd.Series:
    """Vectorised :func:`canonical_country`; unmapped names pass through."""
    return series.map(canonical_country)


__all__ = ["COUNTRY_ALIASES", "canonical_country", "canonicalize"]
