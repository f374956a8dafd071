"""Metrics service utilities."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from onboard.services.aggregates import ScalarMetrics


class Metrics:
    """Encapsulate value-box labels and display formatting."""

    def __init__(self, mapping: Dict[str, str]):
        self.mapping = dict(mapping)

    def label(self, key: Optional[str]) -> str:
        if not key:
            return ""
        return self.mapping.get(key, key)

    @staticmethod
    def display(key: str, value: Union[int, float]) -> str:
        if key == "onboarding_rate":
            return f"{value}%"
        return f"{int(value):,}"

    def cards(self, scalars: ScalarMetrics) -> List[Dict[str, Union[str, int, float]]]:
        """One card per configured metric, in configuration order."""
        values = scalars.as_dict()
        return [
            {
                "key": key,
                "label": self.label(key),
                "value": values[key],
                "display": self.display(key, values[key]),
            }
            for key in self.mapping
            if key in values
        ]


__all__ = ["Metrics"]
